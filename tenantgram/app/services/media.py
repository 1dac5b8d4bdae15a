"""
Media processing: content sniffing, hashing and image transcoding.

Everything here is pure and CPU bound; callers run the codec work off the
event loop.
"""

import hashlib
import uuid
from dataclasses import dataclass
from io import BytesIO
from pathlib import PurePath
from typing import Optional

from PIL import Image, UnidentifiedImageError

from tenantgram.domain.entities import FileType

GENERIC_MIME_TYPE = "application/octet-stream"

IMAGE_MIME_TYPES = {"image/jpeg", "image/png", "image/webp"}

_PIL_FORMATS = {
    "image/jpeg": "JPEG",
    "image/png": "PNG",
    "image/webp": "WEBP",
}

JPEG_QUALITY = 80

# Multi-picture JPEGs from phone cameras are still JPEG streams
_FORMAT_ALIASES = {"MPO": "JPEG"}


class MediaError(ValueError):
    pass


class UnsupportedMediaType(MediaError):
    pass


@dataclass
class ProcessedMedia:
    data: bytes
    mime_type: str
    file_hash: str
    file_type: FileType
    extension: Optional[str]


def file_extension(filename: Optional[str]) -> Optional[str]:
    if not filename:
        return None
    suffix = PurePath(filename).suffix.lstrip(".").lower()
    if not suffix or not suffix.isalnum() or len(suffix) > 10:
        return None
    return suffix


def generate_stored_filename(extension: Optional[str]) -> str:
    name = str(uuid.uuid4())
    return f"{name}.{extension}" if extension else name


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def sniff_mime_type(data: bytes) -> str:
    """Detect the MIME type from the bytes themselves, ignoring any client claim."""
    try:
        with Image.open(BytesIO(data)) as img:
            fmt = _FORMAT_ALIASES.get(img.format, img.format)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError):
        return GENERIC_MIME_TYPE
    return Image.MIME.get(fmt, GENERIC_MIME_TYPE) if fmt else GENERIC_MIME_TYPE


def is_supported_image(mime_type: str) -> bool:
    return mime_type in IMAGE_MIME_TYPES


def transcode_image(data: bytes, mime_type: str) -> bytes:
    """Decode and re-encode in the same format (JPEG at quality 80, WebP with encoder defaults)."""
    fmt = _PIL_FORMATS.get(mime_type)
    if fmt is None:
        raise UnsupportedMediaType(f"Cannot transcode {mime_type}")

    out = BytesIO()
    try:
        with Image.open(BytesIO(data)) as img:
            img.load()
            if fmt == "JPEG":
                if img.format == "MPO" or img.mode not in ("RGB", "L"):
                    img = img.convert("RGB")
                img.save(out, format="JPEG", quality=JPEG_QUALITY, optimize=True)
            elif fmt == "PNG":
                img.save(out, format="PNG", optimize=True)
            else:
                img.save(out, format="WEBP")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise MediaError(f"Could not process image: {e}") from e
    return out.getvalue()


def process_upload(data: bytes, original_filename: Optional[str], require_image: bool) -> ProcessedMedia:
    """
    Run the upload algorithm up to (not including) the disk write.

    Raises:
        UnsupportedMediaType: an image was required and the content is not JPEG/PNG/WebP
        MediaError: the image could not be decoded
    """
    extension = file_extension(original_filename)
    mime_type = sniff_mime_type(data)

    if require_image and not is_supported_image(mime_type):
        raise UnsupportedMediaType("File must be an image (PNG, JPEG, or WebP)")

    file_hash = sha256_hex(data)

    if mime_type.startswith("image/"):
        if not is_supported_image(mime_type):
            raise UnsupportedMediaType(f"Unsupported image type: {mime_type}")
        return ProcessedMedia(
            data=transcode_image(data, mime_type),
            mime_type=mime_type,
            file_hash=file_hash,
            file_type=FileType.IMAGE,
            extension=extension,
        )

    return ProcessedMedia(
        data=data,
        mime_type=mime_type,
        file_hash=file_hash,
        file_type=FileType.GENERIC,
        extension=extension,
    )
