from __future__ import annotations

from typing import Any, Dict, List, Tuple

import markdown as md
from bs4 import BeautifulSoup, NavigableString, Tag

from .prismic_schema import (
    heading,
    hyperlink_data,
    image,
    list_item,
    paragraph,
    preformatted,
    span,
    validate_structured_text,
)

Span = Dict[str, Any]

_MARKDOWN_EXTENSIONS = ["fenced_code", "sane_lists"]
_INLINE_SPAN_TYPES = {"strong": "strong", "b": "strong", "em": "em", "i": "em"}


class _InlineBuffer:
    """Accumulates inline text and the spans that decorate it."""

    def __init__(self) -> None:
        self.parts: List[str] = []
        self.length = 0
        self.spans: List[Span] = []

    def append(self, text: str) -> None:
        self.parts.append(text)
        self.length += len(text)

    def result(self) -> Tuple[str, List[Span]]:
        text = "".join(self.parts)
        # Trim surrounding whitespace and shift spans to match.
        lead = len(text) - len(text.lstrip())
        stripped = text.strip()
        spans = []
        for s in self.spans:
            start = max(0, s["start"] - lead)
            end = min(len(stripped), s["end"] - lead)
            if start < end:
                spans.append({**s, "start": start, "end": end})
        return stripped, spans


def convert_markdown_to_structured_text_local(text: str) -> List[Dict[str, Any]]:
    """
    Convert Markdown to Prismic structured text without external tools.

    Covered:
    - Paragraphs, headings, bulleted and ordered lists (nested lists are
      flattened, Prismic lists have a single level), fenced and indented
      code blocks, images.
    - ``strong``, ``em`` and ``hyperlink`` spans.  Blockquotes become plain
      paragraphs and horizontal rules are dropped.
    """
    html = md.markdown(text or "", extensions=_MARKDOWN_EXTENSIONS)
    soup = BeautifulSoup(html, "html.parser")
    blocks: List[Dict[str, Any]] = []

    def walk_inline(children, buf: _InlineBuffer, deferred: List[Dict[str, Any]]) -> None:
        for child in children:
            if isinstance(child, NavigableString):
                # Soft line breaks in Markdown are spaces.
                buf.append(str(child).replace("\n", " "))
                continue
            if not isinstance(child, Tag):
                continue
            name = (child.name or "").lower()
            if name == "br":
                buf.append("\n")
                continue
            if name == "img":
                src = child.get("src") or ""
                if src:
                    deferred.append(image(src, child.get("alt")))
                continue
            if name in ("ul", "ol"):
                # nested list, handled by the list walker
                continue
            start = buf.length
            walk_inline(child.children, buf, deferred)
            end = buf.length
            if end <= start:
                continue
            if name in _INLINE_SPAN_TYPES:
                buf.spans.append(span(_INLINE_SPAN_TYPES[name], start, end))
            elif name == "a" and child.get("href"):
                buf.spans.append(span("hyperlink", start, end, hyperlink_data(child["href"])))

    def inline(el: Tag) -> Tuple[str, List[Span], List[Dict[str, Any]]]:
        buf = _InlineBuffer()
        deferred: List[Dict[str, Any]] = []
        walk_inline(el.children, buf, deferred)
        text_, spans = buf.result()
        return text_, spans, deferred

    def handle_list(el: Tag) -> None:
        ordered = el.name == "ol"
        for li in el.find_all("li", recursive=False):
            text_, spans, deferred = inline(li)
            if text_:
                blocks.append(list_item(ordered, text_, spans))
            blocks.extend(deferred)
            for nested in li.find_all(["ul", "ol"], recursive=False):
                handle_list(nested)

    def handle_block(el: Tag) -> None:
        name = (el.name or "").lower()
        if name in {"h1", "h2", "h3", "h4", "h5", "h6"}:
            text_, spans, _ = inline(el)
            if text_:
                blocks.append(heading(int(name[1]), text_, spans))
            return
        if name in {"ul", "ol"}:
            handle_list(el)
            return
        if name == "pre":
            code_child = el.find("code")
            code = code_child.get_text() if code_child else el.get_text()
            blocks.append(preformatted(code.rstrip("\n")))
            return
        if name == "blockquote":
            for child in el.children:
                if isinstance(child, Tag):
                    handle_block(child)
            return
        if name == "hr":
            return
        if name == "img":
            src = el.get("src") or ""
            if src:
                blocks.append(image(src, el.get("alt")))
            return
        # p, div and anything unknown: paragraph text
        text_, spans, deferred = inline(el)
        if text_:
            blocks.append(paragraph(text_, spans))
        blocks.extend(deferred)

    for child in soup.children:
        if isinstance(child, NavigableString):
            if str(child).strip():
                blocks.append(paragraph(str(child).strip()))
            continue
        if isinstance(child, Tag):
            handle_block(child)

    return validate_structured_text(blocks)

