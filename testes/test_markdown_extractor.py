import datetime
import os
import sys

# Ensure project root is on sys.path for imports when running tests directly
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest

from prismic_bundler.extractors.markdown_extractor import (
    find_source_files,
    parse_markdown_to_record,
    read_source_file,
)
from prismic_bundler.utils.errors import FrontMatterError


MARKDOWN = """---
title: Summer party
date: 2023-05-01
photo: /uploads/party.jpg
tags:
  - party
  - summer
author:
  name: Ann
---
We are throwing a **party**.

See you there.
"""


def test_front_matter_keys_and_body_are_split():
    record = parse_markdown_to_record(MARKDOWN)
    assert record["title"] == "Summer party"
    assert record["date"] == datetime.date(2023, 5, 1)
    assert record["photo"] == "/uploads/party.jpg"
    assert record["body"].startswith("We are throwing a **party**.")
    assert record["body"].rstrip().endswith("See you there.")


def test_nested_structures_are_preserved():
    record = parse_markdown_to_record(MARKDOWN)
    assert record["tags"] == ["party", "summer"]
    assert record["author"] == {"name": "Ann"}


def test_missing_delimiter_is_an_error():
    with pytest.raises(FrontMatterError):
        parse_markdown_to_record("title: no delimiters\n\nJust text.")


def test_malformed_yaml_is_an_error():
    with pytest.raises(FrontMatterError):
        parse_markdown_to_record("---\ntitle: [unclosed\n---\nBody")


def test_front_matter_must_be_a_mapping():
    with pytest.raises(FrontMatterError):
        parse_markdown_to_record("---\n- just\n- a list\n---\nBody")


def test_read_source_file_includes_path_in_error(tmp_path):
    bad = tmp_path / "bad.md"
    bad.write_text("no front matter here", encoding="utf-8")
    with pytest.raises(FrontMatterError, match="bad.md"):
        read_source_file(str(bad))


def test_find_source_files_is_sorted(tmp_path):
    for name in ("c.md", "a.md", "b.md", "notes.txt"):
        (tmp_path / name).write_text("---\ntitle: x\n---\n", encoding="utf-8")
    files = find_source_files(str(tmp_path / "*.md"))
    assert [os.path.basename(f) for f in files] == ["a.md", "b.md", "c.md"]
