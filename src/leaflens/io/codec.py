"""Raster decode/encode boundary (Pillow), including data-URI handling."""

from __future__ import annotations

import base64
import binascii
import io
from typing import Protocol
from urllib.parse import unquote_to_bytes

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from leaflens.models.grids import PixelGrid

# Pillow format name -> MIME type used when emitting data URIs
MIME_TYPES = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "WEBP": "image/webp",
}


class DecodeError(ValueError):
    """Input is empty, truncated, corrupt or not a supported raster image."""


class ImageCodec(Protocol):
    def decode(self, image: bytes | str) -> PixelGrid: ...

    def encode(
        self, grid: PixelGrid, format: str = "PNG", as_data_uri: bool = False
    ) -> bytes | str: ...


def parse_data_uri(uri: str) -> tuple[str, bytes]:
    """Split ``data:<mime>[;base64],<payload>`` into (mime, raw bytes)."""
    if not uri.startswith("data:") or "," not in uri:
        raise DecodeError("not a data URI")
    header, _, payload = uri[5:].partition(",")
    params = header.split(";")
    mime = params[0] or "text/plain"
    if "base64" in params[1:]:
        try:
            raw = base64.b64decode("".join(payload.split()), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecodeError(f"invalid base64 payload: {exc}") from exc
    else:
        raw = unquote_to_bytes(payload)
    return mime, raw


def to_data_uri(data: bytes, mime: str) -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def image_bytes(image: bytes | str) -> bytes:
    """Return the raw encoded bytes for either accepted input form."""
    if isinstance(image, str):
        _mime, raw = parse_data_uri(image)
        return raw
    return bytes(image)


class PillowCodec:
    """Default codec. Each call opens and closes its own Pillow image."""

    def __init__(
        self,
        apply_exif_orientation: bool = True,
        max_pixels: int | None = None,
        jpeg_quality: int = 95,
    ) -> None:
        self.apply_exif_orientation = apply_exif_orientation
        self.max_pixels = max_pixels
        self.jpeg_quality = jpeg_quality

    def decode(self, image: bytes | str) -> PixelGrid:
        raw = image_bytes(image)
        if not raw:
            raise DecodeError("empty image data")

        try:
            with Image.open(io.BytesIO(raw)) as img:
                if self.max_pixels is not None and img.width * img.height > self.max_pixels:
                    raise DecodeError(
                        f"image too large: {img.width}x{img.height} "
                        f"exceeds {self.max_pixels:,} pixels"
                    )
                img.load()
                if self.apply_exif_orientation:
                    # Match what a browser canvas draws for rotated camera JPEGs
                    rgba = ImageOps.exif_transpose(img).convert("RGBA")
                else:
                    rgba = img.convert("RGBA")
        except DecodeError:
            raise
        except UnidentifiedImageError as exc:
            raise DecodeError("unrecognized image format") from exc
        except Image.DecompressionBombError as exc:
            raise DecodeError(str(exc)) from exc
        except (OSError, SyntaxError, ValueError) as exc:
            raise DecodeError(f"corrupt or truncated image: {exc}") from exc

        try:
            pixels = np.array(rgba, dtype=np.uint8)
        finally:
            rgba.close()
        return PixelGrid(pixels)

    def encode(
        self, grid: PixelGrid, format: str = "PNG", as_data_uri: bool = False
    ) -> bytes | str:
        fmt = format.upper()
        if fmt == "JPG":
            fmt = "JPEG"
        if fmt not in MIME_TYPES:
            raise ValueError(f"unsupported output format: {format}")

        buf = io.BytesIO()
        with Image.frombytes("RGBA", (grid.width, grid.height), grid.pixels.tobytes()) as img:
            if fmt == "JPEG":
                with img.convert("RGB") as rgb:
                    rgb.save(buf, format=fmt, quality=self.jpeg_quality)
            elif fmt == "WEBP":
                img.save(buf, format=fmt, lossless=True)
            else:
                img.save(buf, format=fmt)

        data = buf.getvalue()
        if as_data_uri:
            return to_data_uri(data, MIME_TYPES[fmt])
        return data
