"""
Bundling stages: field reformatting, media embedding and ID reconciliation.

This subpackage turns parsed source records into Prismic import documents.
It works on plain dictionaries and an open :class:`zipfile.ZipFile`; the
orchestration of a whole run lives in :mod:`prismic_bundler.bundle_tool`.
"""

from .content_types import CONTENT_TYPES, get_content_type, reformat_into_prismic_structure
from .field_mapper import format_date, format_datetime, reformat_fields
from .id_mapping import build_uid_mapping, get_filename_in_zip, get_id_from_filename
from .media import add_photo_to_zip, encode_image

__all__ = [
    "CONTENT_TYPES",
    "get_content_type",
    "reformat_into_prismic_structure",
    "format_date",
    "format_datetime",
    "reformat_fields",
    "build_uid_mapping",
    "get_filename_in_zip",
    "get_id_from_filename",
    "add_photo_to_zip",
    "encode_image",
]
