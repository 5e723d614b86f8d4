"""
High-level orchestration of a Markdown → Prismic bundle run.

This module defines a :class:`PrismicBundleTool` class that ties together
the extractors, converters, bundling stages and utilities into a complete
pipeline.  For one content type it reads every Markdown source, reformats
it into a Prismic import document, embeds the referenced images, and writes
everything to a single ZIP archive ready to upload through Prismic's import
screen.

Configuration is supplied via a JSON file path or directly as a
dictionary.  Bundle settings live under the ``bundle`` key, the rich text
converter under ``rich_text`` and per-content-type overrides under
``content_types``.
"""

from __future__ import annotations

import json
import os
import zipfile
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .bundlers.content_types import get_content_type, reformat_into_prismic_structure
from .bundlers.field_mapper import get_timezone
from .bundlers.id_mapping import build_uid_mapping, get_filename_in_zip
from .bundlers.media import add_photo_to_zip
from .extractors.markdown_extractor import find_source_files, read_source_file
from .models.prismic import ContentType
from .parsers.rich_text import DEFAULT_COMMAND, RichTextConverter, get_converter
from .utils.errors import ArchiveError, BundleError, FieldFormatError, code_for, report_error, report_ok
from .utils.manifest import generate_manifest_csv

BYTES_PER_MB = 1024 * 1024


@dataclass
class BundleResult:
    output_path: str
    entries: List[str] = field(default_factory=list)
    size: int = 0
    over_limit: bool = False


class PrismicBundleTool:
    """
    Encapsulates all state and behavior required to bundle one content type
    for import into Prismic.  This class is responsible for reading
    configuration, building the UID mapping, transforming the sources and
    writing the archive.  Per-document success and failure information is
    recorded using the :mod:`prismic_bundler.utils.errors` module.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, *, config_file: Optional[str] = None) -> None:
        if config_file and os.path.exists(config_file):
            with open(config_file, "r", encoding="utf-8") as f:
                config = json.load(f)
        elif config is None:
            # Default configuration
            config = {}

        # Ensure essential keys exist to prevent KeyErrors
        config.setdefault("bundle", {})
        config["bundle"].setdefault("static_dir", os.getenv("PRISMIC_BUNDLER_STATIC_DIR", "../gatsby/static/"))
        config["bundle"].setdefault("output_dir", ".")
        config["bundle"].setdefault("image_format", "jpg")
        config["bundle"].setdefault("image_quality", 90)
        config["bundle"].setdefault("image_max_width", None)
        config["bundle"].setdefault("upload_limit_mb", 100)
        config["bundle"].setdefault("timezone", "UTC")
        config["bundle"].setdefault("reports_dir", os.path.join("reports", "bundle"))

        config.setdefault("rich_text", {})
        config["rich_text"].setdefault("converter", "subprocess")
        config["rich_text"].setdefault("command", os.getenv("PRISMIC_BUNDLER_RICH_TEXT_CMD", DEFAULT_COMMAND))

        config.setdefault("content_types", {})

        self.config = config
        self.reports_dir: str = config["bundle"]["reports_dir"]

    def log_message(self, message: str, level: str = "INFO") -> None:
        print(f"[{level}] {message}")
        # Append to log file
        os.makedirs(self.reports_dir, exist_ok=True)
        with open(os.path.join(self.reports_dir, "bundle.log"), "a", encoding="utf-8") as f:
            f.write(f"{level}: {message}\n")

    def content_type(self, name: str) -> ContentType:
        return get_content_type(name, self.config["content_types"].get(name))

    def size_limit_bytes(self) -> int:
        return int(float(self.config["bundle"]["upload_limit_mb"]) * BYTES_PER_MB)

    def bundle(
        self,
        content_type: ContentType,
        *,
        export: Optional[str] = None,
        output: Optional[str] = None,
        converter: Optional[RichTextConverter] = None,
    ) -> BundleResult:
        """
        Bundle every source of ``content_type`` into one import archive.

        The UID mapping is built from ``export`` first, then an existing
        archive at the output path is removed and a new one written.  Any
        error aborts the run and may leave a partial archive on disk.

        :param content_type: What to bundle.
        :param export: Optional Prismic export archive; documents whose UID
            appears in it are written as updates of the exported IDs.
        :param output: Archive path; defaults to
            ``<output_dir>/<prismic_type>_upload.zip``.
        :param converter: Rich text converter; built from the ``rich_text``
            config section when omitted.
        :return: A :class:`BundleResult` describing the archive.
        """
        cfg = self.config["bundle"]
        if converter is None:
            converter = get_converter(self.config["rich_text"])
        if output is None:
            output = os.path.join(cfg["output_dir"], content_type.archive_name)

        # Create UID to ID mapping
        mapping = build_uid_mapping(export, content_type.source_type)
        if export:
            self.log_message(f"Found {len(mapping)} existing documents in {export}")

        # Remove old archive if it exists
        if os.path.exists(output):
            os.remove(output)

        result = BundleResult(output_path=output)
        manifest: List[Dict[str, str]] = []
        uploads: Dict[str, str] = {}
        tz = get_timezone(cfg["timezone"])
        files = find_source_files(content_type.source_glob)

        try:
            zf = zipfile.ZipFile(output, "w", compression=zipfile.ZIP_DEFLATED)
        except OSError as exc:
            raise ArchiveError(f"Could not create {output}: {exc}") from exc

        with zf:
            for path in files:
                context = {"source": path}
                try:
                    data = read_source_file(path)
                    context["title"] = data.get("title")
                    self.log_message(f"Processing {content_type.prismic_type} {data.get('title', path)}...")

                    # Reformat into the Prismic structure
                    prismic = reformat_into_prismic_structure(content_type, data, converter=converter, tz=tz)

                    # Process photo
                    prismic = add_photo_to_zip(
                        prismic,
                        zf,
                        static_dir=cfg["static_dir"],
                        image_format=cfg["image_format"],
                        quality=int(cfg["image_quality"]),
                        max_width=cfg["image_max_width"],
                        fields=content_type.field_spec.media,
                        written=uploads,
                    )

                    try:
                        document = json.dumps(prismic, ensure_ascii=False)
                    except (TypeError, ValueError) as exc:
                        raise FieldFormatError(f"{path}: document is not serializable: {exc}") from exc

                    # Get entry name (new document or update document)
                    entry = get_filename_in_zip(path, mapping)
                    self.log_message(f"adding {entry}")
                    try:
                        zf.writestr(entry, document)
                    except (OSError, ValueError) as exc:
                        raise ArchiveError(f"Could not write {entry}: {exc}") from exc
                except BundleError as exc:
                    report_error(code_for(exc), context, exc, report_dir=self.reports_dir)
                    self.log_message(f"Aborting: {exc}", "ERROR")
                    raise

                result.entries.append(entry)
                manifest.append({"source": path, "entry": entry})
                code = "DOCUMENT_ADDED" if entry.startswith("new_") else "DOCUMENT_UPDATED"
                report_ok(code, context, {"entry": entry}, report_dir=self.reports_dir)

        result.size = os.path.getsize(output)
        limit_mb = cfg["upload_limit_mb"]
        if result.size > self.size_limit_bytes():
            result.over_limit = True
            self.log_message(
                f"Warning: your ZIP filesize exceeds {limit_mb}mb, which is the maximum allowed to upload "
                "to Prismic. Try to reduce image quality or image dimensions.",
                "WARNING",
            )

        self.log_message(f"Wrote to {output}")
        manifest_path = generate_manifest_csv(
            manifest, out_path=os.path.join(self.reports_dir, f"{content_type.prismic_type}_manifest.csv")
        )
        self.log_message(f"Manifest written to {manifest_path}", "DEBUG")
        return result
