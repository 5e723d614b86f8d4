"""
Utility helpers used by the bundle tool.

This subpackage exposes the exception taxonomy, structured report helpers,
slug generation and the run manifest writer.
"""

from .errors import (
    ERRORS,
    ArchiveError,
    BundleError,
    FieldFormatError,
    FrontMatterError,
    MediaError,
    MissingFieldError,
    PreFlightCheckError,
    RichTextConversionError,
    UnknownContentTypeError,
    report_error,
    report_ok,
)
from .manifest import generate_manifest_csv
from .slugs import slugify

__all__ = [
    "ERRORS",
    "ArchiveError",
    "BundleError",
    "FieldFormatError",
    "FrontMatterError",
    "MediaError",
    "MissingFieldError",
    "PreFlightCheckError",
    "RichTextConversionError",
    "UnknownContentTypeError",
    "report_error",
    "report_ok",
    "generate_manifest_csv",
    "slugify",
]
