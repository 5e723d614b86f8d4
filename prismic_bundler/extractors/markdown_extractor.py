"""
Extractors for Markdown source files.

A source file is a Markdown document with a leading YAML front matter block
delimited by ``---`` lines.  The front matter becomes the keys of the source
record and the remaining content is stored under ``body``.
"""

from __future__ import annotations

import glob
import logging
from typing import Any, Dict, List

import yaml
from frontmatter import YAMLHandler

from ..utils.errors import FrontMatterError

logger = logging.getLogger(__name__)

_handler = YAMLHandler()


def parse_markdown_to_record(markdown: str) -> Dict[str, Any]:
    """Split ``markdown`` into its front matter mapping and body.

    Args:
        markdown: Raw file content.

    Returns:
        The front matter keys plus a ``body`` key holding the Markdown
        content below the closing delimiter.

    Raises:
        FrontMatterError: If the front matter block is missing, is not valid
            YAML, or does not hold a mapping.
    """
    text = markdown.lstrip("\ufeff").strip()
    if not _handler.detect(text):
        raise FrontMatterError("No front matter block found")
    try:
        fm, content = _handler.split(text)
        metadata = _handler.load(fm)
    except (yaml.YAMLError, ValueError) as exc:
        raise FrontMatterError(f"Malformed front matter: {exc}") from exc

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise FrontMatterError(f"Front matter is not a mapping: {type(metadata).__name__}")

    record = dict(metadata)
    record["body"] = content.strip()
    return record


def read_source_file(path: str) -> Dict[str, Any]:
    """Read and parse one Markdown source file."""
    with open(path, "r", encoding="utf-8") as f:
        markdown = f.read()
    try:
        return parse_markdown_to_record(markdown)
    except FrontMatterError as exc:
        raise FrontMatterError(f"{path}: {exc}") from exc


def find_source_files(pattern: str) -> List[str]:
    """Return the files matching ``pattern``, sorted so runs are reproducible."""
    files = sorted(glob.glob(pattern))
    logger.debug("Found %d source files for %s", len(files), pattern)
    return files
