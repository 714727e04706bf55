"""
md-press CLI

Usage:
    md-press            convert everything in md/, then watch for changes
    md-press watch      same as above
    md-press build      convert everything once and exit
"""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from md_press import __version__
from md_press.config import AppConfig, load_config
from md_press.exceptions import MdPressError
from md_press.log import configure_logging

app = typer.Typer(
    name="md-press",
    help="Render Markdown documents to PDF and HTML, re-rendering on change",
    add_completion=False,
)

console = Console()


def _prepare(env_file: Optional[str]) -> AppConfig:
    config = load_config(env_file)
    configure_logging(config.log)
    return config


def _banner(config: AppConfig, mode: str) -> None:
    paths = config.paths
    console.print(Panel.fit(
        f"[bold]md-press {__version__}[/bold] ({mode})\n"
        f"Input: {paths.input_dir}\n"
        f"PDF: {paths.pdf_dir}  HTML: {paths.html_dir}",
        border_style="blue"
    ))


def _execute(config: AppConfig, watch: bool) -> None:
    from md_press.runner import run

    try:
        results = asyncio.run(run(config, watch=watch))
    except (MdPressError, OSError) as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Converted {len(results)} file(s)")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    env_file: Optional[str] = typer.Option(
        None,
        "--env-file",
        help="Load settings from this .env file (.env in the working directory is always read)"
    ),
):
    """
    Convert Markdown to PDF and HTML, then watch for changes.
    """
    ctx.obj = env_file
    if ctx.invoked_subcommand is None:
        config = _prepare(env_file)
        _banner(config, "watch")
        _execute(config, watch=True)


@app.command("watch")
def watch(ctx: typer.Context):
    """Convert everything, then re-render files as they change."""
    config = _prepare(ctx.obj)
    _banner(config, "watch")
    _execute(config, watch=True)


@app.command("build")
def build(ctx: typer.Context):
    """Convert everything once and exit."""
    config = _prepare(ctx.obj)
    _banner(config, "build")
    _execute(config, watch=False)


@app.command("version")
def version():
    """Show version."""
    console.print(f"md-press {__version__}")


if __name__ == "__main__":
    app()
