"""
Exceptions and structured report helpers for bundle runs.

The :mod:`prismic_bundler.utils.errors` module holds the exception taxonomy
raised by the pipeline and centralizes the writing of report entries for
both failed and successful documents.  Each entry is appended to a JSON
Lines file under the reports directory passed by the caller so that the information
can be reviewed or parsed after a run.

Two public functions are provided:

``report_error``
    Record an error that occurred for a source record.  An optional
    exception can be supplied and will be serialized to the report.

``report_ok``
    Record a successful step for a source record.  Additional key/value
    information can be attached to the entry via the ``extra`` parameter.

The ``ERRORS`` dictionary maps error or event codes to human readable
messages.  Codes not present in the dictionary fall back to the code itself.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional


class BundleError(Exception):
    """Base class for every fatal error raised while building a bundle."""


class FrontMatterError(BundleError):
    """The front matter block of a Markdown file is missing or malformed."""


class MissingFieldError(BundleError, KeyError):
    """A field required by the content type is absent from the source record."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead.
        return str(self.args[0]) if self.args else ""


class FieldFormatError(BundleError, ValueError):
    """A field value cannot be reformatted into the Prismic shape."""


class RichTextConversionError(BundleError):
    """The rich text converter could not be run or exited with an error."""


class ArchiveError(BundleError):
    """A ZIP archive could not be opened, written or closed."""


class MediaError(BundleError):
    """An image referenced by a record could not be read or encoded."""


class PreFlightCheckError(BundleError):
    """The environment is not ready for a bundle run."""


class UnknownContentTypeError(BundleError, KeyError):
    """No content type is registered under the requested name."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


# Mapping of event codes used throughout the bundle run to descriptive
# messages.  The keys include both error and success codes as the same lookup
# is used by :func:`report_error` and :func:`report_ok`.
ERRORS: Dict[str, str] = {
    "FRONT_MATTER": "Could not parse front matter",
    "MISSING_FIELD": "Required field missing from source",
    "FIELD_FORMAT": "Field value could not be reformatted",
    "RICH_TEXT": "Rich text conversion failed",
    "MEDIA": "Could not embed media in archive",
    "ARCHIVE": "Could not write archive",
    "CONTENT_TYPE": "Unknown content type",
    "DOCUMENT_ADDED": "Document added to archive",
    "DOCUMENT_UPDATED": "Document added to archive as update",
}

# Exception class -> report code, used by the tool when a run aborts.
ERROR_CODES: Dict[type, str] = {
    FrontMatterError: "FRONT_MATTER",
    MissingFieldError: "MISSING_FIELD",
    FieldFormatError: "FIELD_FORMAT",
    RichTextConversionError: "RICH_TEXT",
    MediaError: "MEDIA",
    ArchiveError: "ARCHIVE",
    UnknownContentTypeError: "CONTENT_TYPE",
}

DEFAULT_REPORT_DIR = os.path.join("reports", "bundle")


def code_for(exc: BaseException) -> str:
    for cls, code in ERROR_CODES.items():
        if isinstance(exc, cls):
            return code
    return type(exc).__name__


def _write_jsonl(report_dir: str, filename: str, data: Dict[str, Any]) -> None:
    """Append ``data`` as a JSON object followed by a newline to ``filename``."""
    os.makedirs(report_dir, exist_ok=True)
    with open(os.path.join(report_dir, filename), "a", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, default=str)
        f.write("\n")


def report_error(
    code: str,
    record: Dict[str, Any],
    exc: Optional[BaseException] = None,
    *,
    report_dir: str = DEFAULT_REPORT_DIR,
) -> None:
    """Log an error event for ``record``.

    Parameters
    ----------
    code:
        A key identifying the type of error.  If ``code`` is present in
        :data:`ERRORS` its value will be used as the message.
    record:
        The source record associated with the error.  Only the ``source``
        and ``title`` keys are referenced if present.
    exc:
        Optional exception instance that triggered the error.  The string
        representation of the exception will be included in the entry.
    report_dir:
        Directory holding ``errors.jsonl``.
    """
    message = ERRORS.get(code, code)
    entry: Dict[str, Any] = {
        "code": code,
        "message": message,
        "source": record.get("source"),
        "title": record.get("title"),
    }
    if exc is not None:
        entry["error"] = str(exc)
    print(f"[ERROR] {message} - {record.get('source', '')}")
    _write_jsonl(report_dir, "errors.jsonl", entry)


def report_ok(
    code: str,
    record: Dict[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    *,
    report_dir: str = DEFAULT_REPORT_DIR,
) -> None:
    """Log a successful event for ``record``.

    Parameters
    ----------
    code:
        A key identifying the type of event.
    record:
        The source record associated with the event.
    extra:
        Optional dictionary of additional fields to merge into the entry.
    report_dir:
        Directory holding ``success.jsonl``.
    """
    message = ERRORS.get(code, code)
    entry: Dict[str, Any] = {
        "code": code,
        "message": message,
        "source": record.get("source"),
        "title": record.get("title"),
    }
    if extra:
        entry.update(extra)
    _write_jsonl(report_dir, "success.jsonl", entry)
