"""
Parsers and converters used by the bundle pipeline.

This subpackage exposes the rich text converters from
:mod:`prismic_bundler.parsers.rich_text` and the in-process Markdown to
Prismic structured text conversion.
"""

from .prismic_local import convert_markdown_to_structured_text_local
from .rich_text import LocalRichTextConverter, RichTextConverter, SubprocessRichTextConverter, get_converter

__all__ = [
    "convert_markdown_to_structured_text_local",
    "LocalRichTextConverter",
    "RichTextConverter",
    "SubprocessRichTextConverter",
    "get_converter",
]
