from __future__ import annotations

import io
import logging
import os
import zipfile
from typing import Any, Dict, Iterable, Optional

from PIL import Image, UnidentifiedImageError

from ..utils.errors import ArchiveError, MediaError

logger = logging.getLogger(__name__)

UPLOADS_PREFIX = "uploads/"

# Pillow format names for the encodings accepted in configuration
_PIL_FORMATS = {"jpg": "JPEG", "jpeg": "JPEG", "png": "PNG", "webp": "WEBP"}


def encode_image(path: str, *, image_format: str = "jpg", quality: int = 90, max_width: Optional[int] = None) -> bytes:
    """
    Load the image at ``path`` and re-encode it.

    :param path: Location of the source image.
    :param image_format: Target encoding (``jpg``, ``png`` or ``webp``).
    :param quality: Encoder quality setting, 1-100.
    :param max_width: Downscale wider images to this width, keeping the
        aspect ratio.  ``None`` keeps the original size.
    :return: The encoded bytes.
    :raises MediaError: If the image cannot be read or encoded.
    """
    pil_format = _PIL_FORMATS.get(image_format.lower())
    if pil_format is None:
        raise MediaError(f"Unsupported image format: {image_format!r}")
    try:
        with Image.open(path) as img:
            if pil_format == "JPEG" and img.mode not in ("RGB", "L"):
                img = img.convert("RGB")
            if max_width and img.width > max_width:
                height = max(1, round(img.height * max_width / img.width))
                img = img.resize((max_width, height), Image.Resampling.LANCZOS)
            buf = io.BytesIO()
            img.save(buf, format=pil_format, quality=quality)
    except (OSError, UnidentifiedImageError, ValueError) as exc:
        raise MediaError(f"Could not encode image {path}: {exc}") from exc
    return buf.getvalue()


def add_photo_to_zip(
    prismic: Dict[str, Any],
    zf: zipfile.ZipFile,
    *,
    static_dir: str,
    image_format: str = "jpg",
    quality: int = 90,
    max_width: Optional[int] = None,
    fields: Iterable[str] = ("photo",),
    written: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """
    Embed the images referenced by ``prismic`` into the archive.

    Every field in ``fields`` that holds a mapping with a ``url`` is
    resolved against ``static_dir``, re-encoded and written to
    ``uploads/<basename>``.  The record itself is returned unchanged; a
    missing field is skipped.

    ``written`` maps upload entries already in the archive to the image
    they were encoded from and is updated in place.  Pass the same mapping
    for every record of a run.  An image already written is skipped; a
    different image with the same basename raises :class:`MediaError`
    since both would land on the same entry.
    """
    if written is None:
        written = {}
    for field in fields:
        media = prismic.get(field)
        if not isinstance(media, dict) or not media.get("url"):
            continue
        path = os.path.join(static_dir, media["url"])
        name = UPLOADS_PREFIX + os.path.basename(path)
        if name in written:
            if os.path.normpath(written[name]) != os.path.normpath(path):
                logger.warning("%s is used by both %s and %s", name, written[name], path)
                raise MediaError(f"{path} and {written[name]} would both be stored as {name}")
            logger.debug("%s already in archive, skipping", name)
            continue
        data = encode_image(path, image_format=image_format, quality=quality, max_width=max_width)
        try:
            zf.writestr(name, data)
        except (OSError, ValueError) as exc:
            raise ArchiveError(f"Could not write {name}: {exc}") from exc
        written[name] = path
    return prismic
