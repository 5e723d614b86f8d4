"""
Generic reformatting of source records into Prismic document fields.

:func:`reformat_fields` applies the per-category rules of a
:class:`~prismic_bundler.models.prismic.FieldSpec` to a source record.
Content types call it with their own field spec and may add fields of their
own afterwards (see :mod:`prismic_bundler.bundlers.content_types`).
"""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Any, Dict, Union
from zoneinfo import ZoneInfo

from ..models.prismic import ExternalLink, FieldSpec, MediaRef
from ..parsers.rich_text import RichTextConverter
from ..utils.errors import FieldFormatError, MissingFieldError


def get_timezone(name: str) -> tzinfo:
    if not name or name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def to_datetime(value: Union[int, float, str, date, datetime], tz: tzinfo = timezone.utc) -> datetime:
    """Interpret a front matter date value as an aware datetime in ``tz``.

    Accepts Unix timestamps (numbers or numeric strings), ``date`` and
    ``datetime`` objects as produced by the YAML loader, and ISO-8601
    strings.  Naive values are taken to be in ``tz``.
    """
    if isinstance(value, bool):
        raise FieldFormatError(f"Not a date: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz)
    if isinstance(value, datetime):
        return value.replace(tzinfo=tz) if value.tzinfo is None else value.astimezone(tz)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=tz)
    if isinstance(value, str):
        raw = value.strip()
        try:
            return datetime.fromtimestamp(float(raw), tz)
        except ValueError:
            pass
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError as exc:
            raise FieldFormatError(f"Not a date: {value!r}") from exc
        return to_datetime(parsed, tz)
    raise FieldFormatError(f"Not a date: {value!r}")


def format_date(value: Any, tz: tzinfo = timezone.utc) -> str:
    return to_datetime(value, tz).strftime("%Y-%m-%d")


def format_datetime(value: Any, tz: tzinfo = timezone.utc) -> str:
    return to_datetime(value, tz).replace(microsecond=0).isoformat()


def plain_value(value: Any) -> Any:
    """Render YAML-loaded dates and datetimes inside ``value`` as ISO strings."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): plain_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [plain_value(v) for v in value]
    return value


def _required(data: Dict[str, Any], field: str) -> Any:
    if field not in data:
        raise MissingFieldError(f"Source record has no {field!r} field")
    return data[field]


def reformat_fields(
    prismic: Dict[str, Any],
    data: Dict[str, Any],
    spec: FieldSpec,
    *,
    converter: RichTextConverter,
    tz: tzinfo = timezone.utc,
) -> Dict[str, Any]:
    """
    Map ``data`` onto Prismic fields according to ``spec``.

    Args:
        prismic: Fields already set by the caller; copied, not mutated.
        data: The source record (front matter plus ``body``).
        spec: Which source fields belong to which category.
        converter: Converts Markdown fields to structured text.
        tz: Timezone used to render date and datetime fields.

    Returns:
        A new mapping with the reformatted fields.  Source fields not named
        in ``spec`` are not carried over.

    Raises:
        MissingFieldError: A markdown, date or datetime field is absent.
        FieldFormatError: A date or datetime value cannot be interpreted.
    """
    out = dict(prismic)

    for field in spec.markdown:
        out[field] = converter.convert(_required(data, field))

    for field in spec.text:
        if data.get(field) is not None:
            out[field] = plain_value(data[field])

    for field in spec.external_link:
        if data.get(field):
            out[field] = [ExternalLink(url=str(data[field])).model_dump()]

    for field in spec.media:
        if data.get(field) is not None:
            out[field] = MediaRef.from_path(str(data[field])).model_dump()

    for field in spec.date:
        out[field] = format_date(_required(data, field), tz)

    for field in spec.datetime:
        out[field] = format_datetime(_required(data, field), tz)

    return out
