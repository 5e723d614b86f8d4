"""
Extractors for Markdown source files.

This subpackage parses Markdown documents with YAML front matter into the
flat source records consumed by the field mapper.
"""

from .markdown_extractor import find_source_files, parse_markdown_to_record, read_source_file

__all__ = ["find_source_files", "parse_markdown_to_record", "read_source_file"]
