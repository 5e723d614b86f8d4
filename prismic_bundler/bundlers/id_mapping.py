"""
Reconciliation of source files with documents already in Prismic.

A Prismic export is a ZIP archive of JSON documents whose entry names start
with the document ID followed by ``$``.  Scanning it gives a UID to ID
mapping; source files whose slug is a known UID are written under that ID so
the import updates the existing document instead of creating a new one.
"""

from __future__ import annotations

import json
import logging
import os
import zipfile
from typing import Dict, Optional

from ..utils.errors import ArchiveError
from ..utils.slugs import slugify

logger = logging.getLogger(__name__)


def get_id_from_filename(filename: str) -> str:
    return os.path.basename(filename).split("$", 1)[0]


def build_uid_mapping(export_path: Optional[str], source_type: str) -> Dict[str, str]:
    """
    Build the UID to document ID mapping from a Prismic export.

    :param export_path: Path of the export archive, or ``None`` to treat
        every source file as a new document.
    :param source_type: Only exported documents with this ``type`` are
        considered.
    :return: A new dictionary mapping ``uid`` to document ID.
    :raises ArchiveError: If the export archive cannot be opened.
    """
    mapping: Dict[str, str] = {}
    if not export_path:
        return mapping

    try:
        zf = zipfile.ZipFile(export_path)
    except (OSError, zipfile.BadZipFile) as exc:
        raise ArchiveError(f"Could not open export {export_path}: {exc}") from exc

    with zf:
        for info in zf.infolist():
            if info.is_dir():
                continue
            try:
                data = json.loads(zf.read(info.filename))
            except (ValueError, zipfile.BadZipFile) as exc:
                # images and other binaries live in exports too
                logger.debug("Skipping %s: %s", info.filename, exc)
                continue
            if not isinstance(data, dict):
                continue
            if data.get("type") == source_type and data.get("uid"):
                mapping[data["uid"]] = get_id_from_filename(info.filename)

    logger.info("Mapped %d existing %s documents from %s", len(mapping), source_type, export_path)
    return mapping


def get_filename_in_zip(path: str, mapping: Dict[str, str]) -> str:
    """
    Name of the archive entry for the source file at ``path``.

    ``<id>.json`` when the file's slug is a known UID (update), otherwise
    ``new_<slug>.json`` (create).
    """
    uid = slugify(os.path.splitext(os.path.basename(path))[0])
    if uid in mapping:
        return f"{mapping[uid]}.json"
    return f"new_{uid}.json"
