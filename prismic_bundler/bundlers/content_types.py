"""
Content types known to the bundler.

Each content type is a :class:`~prismic_bundler.models.prismic.ContentType`
value: where its Markdown sources live, which Prismic custom type it maps
to, how its fields are categorized and an optional hook adding fields that
the generic mapper does not produce.
"""

from __future__ import annotations

from datetime import timezone, tzinfo
from typing import Any, Dict, Optional

from ..models.prismic import ContentType, FieldSpec
from ..parsers.rich_text import RichTextConverter
from ..utils.errors import UnknownContentTypeError
from ..utils.slugs import slugify
from .field_mapper import reformat_fields

GATSBY_CONTENT_DIR = "../gatsby/src/content"


def add_uid(prismic: Dict[str, Any], data: Dict[str, Any]) -> Dict[str, Any]:
    """Derive the document UID from the ``path`` front matter (or the title)."""
    path = str(data.get("path") or "").strip("/")
    source = path.rsplit("/", 1)[-1] if path else str(data.get("title") or "")
    uid = slugify(source)
    if uid:
        prismic["uid"] = uid
    return prismic


NEWSITEM = ContentType(
    name="newsitem",
    source_glob=f"{GATSBY_CONTENT_DIR}/newsitems/*.md",
    source_type="newsitem",
    prismic_type="newsitem",
    field_spec=FieldSpec(
        text=("title", "intro", "path"),
        markdown=("body",),
        external_link=("link",),
        media=("photo",),
        date=("date",),
    ),
    hook=add_uid,
)

EVENT = ContentType(
    name="event",
    source_glob=f"{GATSBY_CONTENT_DIR}/events/*.md",
    source_type="event",
    prismic_type="event",
    field_spec=FieldSpec(
        text=("title", "location", "path"),
        markdown=("body",),
        external_link=("link", "tickets"),
        media=("photo",),
        datetime=("start",),
    ),
    hook=add_uid,
)

PAGE = ContentType(
    name="page",
    source_glob=f"{GATSBY_CONTENT_DIR}/pages/*.md",
    source_type="page",
    prismic_type="page",
    field_spec=FieldSpec(
        text=("title", "path"),
        markdown=("body",),
        media=("photo",),
    ),
    hook=add_uid,
)

CONTENT_TYPES: Dict[str, ContentType] = {ct.name: ct for ct in (NEWSITEM, EVENT, PAGE)}


def get_content_type(name: str, overrides: Optional[Dict[str, Any]] = None) -> ContentType:
    """
    Look up a registered content type, applying config overrides.

    ``overrides`` is the ``content_types.<name>`` config section; any of
    ``source_glob``, ``source_type``, ``prismic_type`` and ``lang`` may be
    replaced.
    """
    try:
        content_type = CONTENT_TYPES[name]
    except KeyError:
        raise UnknownContentTypeError(
            f"Unknown content type {name!r}; known: {', '.join(sorted(CONTENT_TYPES))}"
        ) from None
    allowed = {"source_glob", "source_type", "prismic_type", "lang"}
    update = {k: v for k, v in (overrides or {}).items() if k in allowed and v}
    return content_type.model_copy(update=update) if update else content_type


def reformat_into_prismic_structure(
    content_type: ContentType,
    data: Dict[str, Any],
    *,
    converter: RichTextConverter,
    tz: tzinfo = timezone.utc,
) -> Dict[str, Any]:
    prismic: Dict[str, Any] = {"type": content_type.prismic_type, "lang": content_type.lang}
    prismic = reformat_fields(prismic, data, content_type.field_spec, converter=converter, tz=tz)
    if content_type.hook is not None:
        prismic = content_type.hook(prismic, data)
    return prismic
