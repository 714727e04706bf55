"""
Markdown to HTML fragment rendering.
"""
from typing import Optional

from markdown_it import MarkdownIt
from mdit_py_plugins.attrs import attrs_block_plugin, attrs_plugin
from mdit_py_plugins.container import container_plugin
from mdit_py_plugins.footnote import footnote_plugin


DEFAULT_CONTAINERS = ("warning",)


def build_parser(
    preset: str = "js-default",
    options: Optional[dict] = None,
    containers: tuple = DEFAULT_CONTAINERS,
) -> MarkdownIt:
    """
    Create the markdown-it parser with the enabled syntax extensions.

    ``{.class #id}`` attribute annotations, ``::: <name>`` block
    containers rendered as ``<div class="<name>">`` and footnotes.
    """
    md = MarkdownIt(preset, options or {})
    md.use(attrs_plugin)
    md.use(attrs_block_plugin)
    md.use(footnote_plugin)
    for name in containers:
        md.use(container_plugin, name=name)
    return md


class MarkdownRenderer:
    """Markdown to HTML fragment renderer"""

    def __init__(
        self,
        preset: str = "js-default",
        options: Optional[dict] = None,
        containers: tuple = DEFAULT_CONTAINERS,
    ):
        """
        Initialize Markdown renderer.

        Args:
            preset: markdown-it preset name
            options: Parser options overriding the preset
            containers: Names of ::: block containers to enable
        """
        self.preset = preset
        self.containers = tuple(containers)
        self._md = build_parser(preset, options, self.containers)

    def render(self, md_content: str) -> str:
        """
        Render Markdown to an HTML fragment.

        Args:
            md_content: Markdown content

        Returns:
            HTML fragment (no page wrapper)
        """
        # Footnote state lives in the env, so each call starts empty
        return self._md.render(md_content, {})
