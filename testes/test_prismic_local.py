import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest
pytest.importorskip("bs4")
pytest.importorskip("markdown")

from prismic_bundler.parsers.prismic_local import convert_markdown_to_structured_text_local


def blocks_of_type(blocks, t):
    return [b for b in blocks if b.get("type") == t]


def test_paragraph_with_strong_and_hyperlink_spans():
    blocks = convert_markdown_to_structured_text_local("Hello **world** and [link](https://ex.com).")
    assert len(blocks) == 1
    p = blocks[0]
    assert p["type"] == "paragraph"
    assert p["text"] == "Hello world and link."
    strong = next(s for s in p["spans"] if s["type"] == "strong")
    assert p["text"][strong["start"]:strong["end"]] == "world"
    link = next(s for s in p["spans"] if s["type"] == "hyperlink")
    assert p["text"][link["start"]:link["end"]] == "link"
    assert link["data"] == {"link_type": "Web", "url": "https://ex.com"}


def test_headings_and_lists():
    md = "# Title\n\n## Sub\n\n- one\n- two\n\n1. first\n2. second\n"
    blocks = convert_markdown_to_structured_text_local(md)
    assert [b["type"] for b in blocks] == [
        "heading1",
        "heading2",
        "list-item",
        "list-item",
        "o-list-item",
        "o-list-item",
    ]
    assert blocks[0]["text"] == "Title"
    assert blocks[3]["text"] == "two"


def test_nested_list_is_flattened():
    md = "- outer\n    - inner\n"
    blocks = convert_markdown_to_structured_text_local(md)
    assert [b["text"] for b in blocks] == ["outer", "inner"]
    assert all(b["type"] == "list-item" for b in blocks)


def test_fenced_code_becomes_preformatted():
    md = "```\nline1\nline2\n```\n"
    blocks = convert_markdown_to_structured_text_local(md)
    pre = blocks_of_type(blocks, "preformatted")
    assert len(pre) == 1
    assert pre[0]["text"] == "line1\nline2"


def test_image_only_paragraph_becomes_image_block():
    blocks = convert_markdown_to_structured_text_local("![A cat](/uploads/cat.jpg)")
    assert blocks == [
        {"type": "image", "url": "/uploads/cat.jpg", "alt": "A cat", "copyright": None, "dimensions": None}
    ]


def test_soft_line_breaks_become_spaces():
    blocks = convert_markdown_to_structured_text_local("one\ntwo")
    assert blocks[0]["text"] == "one two"


def test_empty_input_gives_no_blocks():
    assert convert_markdown_to_structured_text_local("") == []
