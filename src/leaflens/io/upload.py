"""Upload gate: size limit and accepted raster formats."""

from __future__ import annotations

import io

from PIL import Image

from leaflens.io.codec import DecodeError
from leaflens.models.config import AnalysisConfig

# ISO-BMFF brands used by HEIC/HEIF files (bytes 8..12 after the "ftyp" box tag)
_HEIF_BRANDS = {b"heic", b"heix", b"hevc", b"hevx", b"heim", b"heis", b"mif1", b"msf1"}

# Pillow names for container variants of an accepted format. Camera JPEGs with
# a Multi-Picture segment open as "MPO" but are ordinary JPEG streams.
FORMAT_ALIASES = {"MPO": "JPEG"}


class UploadRejected(DecodeError):
    """Input failed the upload gate before decoding was attempted."""


def _mib(n: int) -> str:
    return f"{n / (1024 * 1024):.2f} MB"


def is_heif(data: bytes) -> bool:
    return len(data) >= 12 and data[4:8] == b"ftyp" and data[8:12] in _HEIF_BRANDS


def normalize_format(fmt: str) -> str:
    fmt = fmt.upper()
    return FORMAT_ALIASES.get(fmt, fmt)


def sniff_format(data: bytes) -> str | None:
    """Return the normalized format name without decoding pixels, or None if unknown."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            return normalize_format(img.format) if img.format else None
    except (Image.DecompressionBombError, OSError, SyntaxError, ValueError):
        return None


def check_upload(data: bytes, config: AnalysisConfig) -> str | None:
    """Validate raw upload bytes against the configured limits.

    Returns the detected format name (None when format checking is disabled
    and the format is unknown). Raises UploadRejected on any violation.
    """
    if not data:
        raise UploadRejected("empty upload")
    if config.max_upload_bytes is not None and len(data) > config.max_upload_bytes:
        raise UploadRejected(
            f"upload is {_mib(len(data))}, limit is {_mib(config.max_upload_bytes)}"
        )
    if is_heif(data):
        raise UploadRejected("HEIC/HEIF images must be converted to JPEG before analysis")

    fmt = sniff_format(data)
    if config.allowed_formats is not None:
        allowed = {normalize_format(f) for f in config.allowed_formats}
        if fmt is None:
            raise UploadRejected("unrecognized image format")
        if fmt not in allowed:
            raise UploadRejected(
                f"{fmt} images are not accepted (allowed: {', '.join(sorted(allowed))})"
            )
    return fmt
