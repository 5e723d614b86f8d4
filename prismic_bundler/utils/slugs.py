from __future__ import annotations

import unicodedata


def slugify(value: str) -> str:
    """Generate a predictable slug: lowercase, ASCII only, ``-`` separator."""
    value = (value or "").strip().lower()
    # transliterate accented characters to their ASCII base
    value = unicodedata.normalize("NFKD", value)
    value = "".join(c for c in value if not unicodedata.combining(c))
    value = value.encode("ascii", "ignore").decode("ascii")
    out = []
    prev_dash = False
    for ch in value:
        if ch.isalnum():
            out.append(ch)
            prev_dash = False
        else:
            if not prev_dash:
                out.append("-")
                prev_dash = True
    return "".join(out).strip("-")
