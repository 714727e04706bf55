"""
Input discovery and output path mapping.
"""
import os
from pathlib import Path
from typing import Union

MARKDOWN_SUFFIX = ".md"

PathLike = Union[str, Path]


def is_markdown_file(path: PathLike) -> bool:
    """True if the file suffix is .md, compared case-insensitively"""
    return Path(path).suffix.lower() == MARKDOWN_SUFFIX


def find_markdown_files(root: PathLike) -> list[Path]:
    """
    List every Markdown file beneath a directory, recursively.

    Order follows the directory listing. Hidden files are included.

    Args:
        root: Directory to search

    Returns:
        Paths of matching files

    Raises:
        FileNotFoundError: If root does not exist
        NotADirectoryError: If root is not a directory
    """
    root = Path(root)
    files: list[Path] = []
    with os.scandir(root) as entries:
        for entry in entries:
            path = Path(entry.path)
            if entry.is_dir():
                files.extend(find_markdown_files(path))
            elif is_markdown_file(path):
                files.append(path)
    return files


def output_path_for(
    source: PathLike,
    input_root: PathLike,
    output_root: PathLike,
    suffix: str,
) -> Path:
    """
    Mirror a source path under an output root with a new suffix.

    md/sub/b.md -> pdf/sub/b.pdf

    Args:
        source: Input file under input_root
        input_root: Root the relative path is taken from
        output_root: Root of the output tree
        suffix: Replacement suffix including the dot

    Returns:
        Output file path
    """
    relative = Path(os.path.relpath(source, input_root))
    return Path(output_root) / relative.with_suffix(suffix)
