"""
Rich text converter orchestration.

By default, Markdown bodies are converted to Prismic structured text by an
external command (``ruby kramdown-to-prismic.rb``) which receives the
Markdown as its single argument and prints the JSON structure on stdout.
Optionally, when selected in configuration, an in-process converter built on
Python-Markdown and BeautifulSoup is used instead.
"""

from __future__ import annotations

import json
import logging
import os
import shlex
import subprocess
from typing import Any, Dict, List, Optional, Protocol

from ..utils.errors import RichTextConversionError
from .prismic_local import convert_markdown_to_structured_text_local

__all__ = [
    "RichTextConverter",
    "SubprocessRichTextConverter",
    "LocalRichTextConverter",
    "get_converter",
]

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "ruby kramdown-to-prismic.rb"

StructuredText = List[Dict[str, Any]]


class RichTextConverter(Protocol):
    def convert(self, text: str) -> Optional[StructuredText]:
        ...


class SubprocessRichTextConverter:
    """
    Runs an external converter once per Markdown field.

    The command's stdout is parsed as JSON.  Empty or invalid output is
    logged and converted to ``None`` so the field is written as ``null``.
    A non-zero exit status or a missing executable aborts the run with
    :class:`RichTextConversionError`.
    """

    def __init__(self, command: str = DEFAULT_COMMAND, *, cwd: Optional[str] = None) -> None:
        self.argv = shlex.split(command)
        if not self.argv:
            raise RichTextConversionError("Empty rich text converter command")
        self.cwd = cwd

    def convert(self, text: str) -> Optional[StructuredText]:
        try:
            proc = subprocess.run(
                [*self.argv, text],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                check=False,
                cwd=self.cwd,
            )
        except OSError as exc:
            raise RichTextConversionError(f"Could not run {self.argv[0]!r}: {exc}") from exc

        if proc.returncode != 0:
            raise RichTextConversionError(
                f"{' '.join(self.argv)} exited with code {proc.returncode}: {proc.stderr.strip()}"
            )

        output = proc.stdout.strip()
        if not output:
            logger.warning("Rich text converter produced no output")
            return None
        try:
            return json.loads(output)
        except json.JSONDecodeError as exc:
            logger.warning("Rich text converter output is not valid JSON: %s", exc)
            return None


class LocalRichTextConverter:
    """Converts Markdown in-process; see :mod:`prismic_local`."""

    def convert(self, text: str) -> Optional[StructuredText]:
        return convert_markdown_to_structured_text_local(text)


def get_converter(cfg: Dict[str, Any]) -> RichTextConverter:
    """
    Build the converter selected by the ``rich_text`` config section.

    ``converter`` is ``"subprocess"`` (default) or ``"local"``.  The
    subprocess command comes from ``command`` or the
    ``PRISMIC_BUNDLER_RICH_TEXT_CMD`` environment variable.
    """
    kind = str(cfg.get("converter") or "subprocess")
    if kind == "local":
        return LocalRichTextConverter()
    if kind == "subprocess":
        command = cfg.get("command") or os.getenv("PRISMIC_BUNDLER_RICH_TEXT_CMD", DEFAULT_COMMAND)
        return SubprocessRichTextConverter(command, cwd=cfg.get("cwd"))
    raise ValueError(f"Unknown rich text converter: {kind!r}")
