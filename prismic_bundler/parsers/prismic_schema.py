from __future__ import annotations

from typing import Any, Dict, List, Optional


# --- Builders for Prismic structured text blocks ---

def text_block(block_type: str, text: str, spans: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    return {"type": block_type, "text": text or "", "spans": spans or []}


def paragraph(text: str, spans: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    return text_block("paragraph", text, spans)


def heading(level: int, text: str, spans: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    lvl = max(1, min(6, int(level or 1)))
    return text_block(f"heading{lvl}", text, spans)


def list_item(ordered: bool, text: str, spans: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    return text_block("o-list-item" if ordered else "list-item", text, spans)


def preformatted(text: str) -> Dict[str, Any]:
    return text_block("preformatted", text)


def image(url: str, alt: Optional[str] = None) -> Dict[str, Any]:
    return {
        "type": "image",
        "url": url,
        "alt": alt or None,
        "copyright": None,
        "dimensions": None,
    }


def span(span_type: str, start: int, end: int, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    s: Dict[str, Any] = {"start": start, "end": end, "type": span_type}
    if data:
        s["data"] = data
    return s


def hyperlink_data(url: str) -> Dict[str, Any]:
    return {"link_type": "Web", "url": url}


# --- Minimal validator/normalizer ---

def validate_structured_text(blocks: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Ensure the blocks follow basic Prismic expectations.
    - Every block is a mapping with a ``type``.
    - Text blocks carry ``text`` and ``spans``; spans stay inside the text
      and empty spans are dropped.
    """
    fixed: List[Dict[str, Any]] = []
    for b in blocks:
        if not isinstance(b, dict) or not b.get("type"):
            continue
        if "text" in b:
            length = len(b["text"])
            b["spans"] = [
                s for s in b.get("spans") or []
                if 0 <= s["start"] < s["end"] <= length
            ]
        fixed.append(b)
    return fixed
