"""Room photos, object images and their on-disk formats."""

# Reference: file layout shared by photos and object images
# Offset | Size          | Notes
# -------|---------------|------------------------------------------------------
# 0      | 2             | Width, little endian
# 2      | 2             | Height, little endian
# 4      | w*h*2 / w*h   | Photo: RGB 5:6:5 words; object image: one byte each
#
# Rows are stored bottom row first, each row left to right. In memory both
# types are kept top row first with no padding.

from __future__ import annotations

import struct
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from .palette import build_palette
from .pixels import Color, PixelStream
from .quantizer import Quantizer
from .remapper import remap_pixels

HEADER = struct.Struct("<HH")

MAX_PHOTO_WIDTH = 1024
MAX_PHOTO_HEIGHT = 1024
MAX_OBJECT_WIDTH = 160
MAX_OBJECT_HEIGHT = 100

OBJ_CLR_TRANSP = 0x40


class ModexPhotoError(Exception):
    """Base class for errors raised by this package."""


class PhotoLoadError(ModexPhotoError):
    """Raised when a photo or object image cannot be loaded."""


@dataclass(frozen=True)
class LoadLimits:
    max_width: int
    max_height: int


PHOTO_LIMITS = LoadLimits(MAX_PHOTO_WIDTH, MAX_PHOTO_HEIGHT)
SPRITE_LIMITS = LoadLimits(MAX_OBJECT_WIDTH, MAX_OBJECT_HEIGHT)


@dataclass(frozen=True)
class Photo:
    """A quantized room photo.

    ``pixels`` holds one hardware palette index per pixel (64-255).
    ``palette`` holds the 192 photo colors as 6-bit RGB in slot order.
    """

    width: int
    height: int
    palette: Tuple[Color, ...]
    pixels: bytes
    selected_ids: Tuple[int, ...] = field(default=(), compare=False)
    coarse_ids: Tuple[int, ...] = field(default=(), compare=False)

    def index_at(self, x: int, y: int) -> int:
        return self.pixels[y * self.width + x]


@dataclass(frozen=True)
class Image:
    """An object image; pixels index the system palette or are transparent."""

    width: int
    height: int
    pixels: bytes

    def pixel_at(self, x: int, y: int) -> int:
        return self.pixels[y * self.width + x]


def build_photo(stream: PixelStream, width: int, height: int) -> Photo:
    """Quantize ``stream`` (bottom row first) into a photo."""

    quantizer = Quantizer().ingest(stream)
    selection = build_palette(quantizer)
    raster = remap_pixels(stream, width, height, selection)
    return Photo(
        width=width,
        height=height,
        palette=tuple(selection.colors),
        pixels=bytes(raster),
        selected_ids=tuple(selection.selected_ids),
        coarse_ids=tuple(selection.used_coarse_ids),
    )


def _read_source(path: str | Path) -> bytes:
    path = Path(path)
    try:
        return path.read_bytes()
    except FileNotFoundError as exc:
        raise PhotoLoadError(f"Input file not found: {path}") from exc
    except OSError as exc:
        raise PhotoLoadError(f"Failed to read image file: {path}") from exc


def _split_payload(
    data: bytes, limits: LoadLimits, bytes_per_pixel: int, kind: str
) -> tuple[int, int, bytes]:
    if len(data) < HEADER.size:
        raise PhotoLoadError(f"Truncated {kind} header ({len(data)} bytes)")
    width, height = HEADER.unpack_from(data)
    if width > limits.max_width or height > limits.max_height:
        raise PhotoLoadError(
            f"{kind.capitalize()} size {width}x{height} exceeds "
            f"{limits.max_width}x{limits.max_height}"
        )

    expected = width * height * bytes_per_pixel
    payload = data[HEADER.size :]
    if len(payload) < expected:
        raise PhotoLoadError(
            f"Truncated {kind} pixel data: expected {expected} bytes, got {len(payload)}"
        )
    if len(payload) > expected:
        warnings.warn(
            f"{len(payload) - expected} trailing bytes after {kind} pixel data ignored",
            RuntimeWarning,
            stacklevel=3,
        )
    return width, height, payload[:expected]


def parse_photo(data: bytes, limits: LoadLimits = PHOTO_LIMITS) -> Photo:
    width, height, payload = _split_payload(data, limits, 2, "photo")
    return build_photo(PixelStream(payload), width, height)


def parse_obj_image(data: bytes, limits: LoadLimits = SPRITE_LIMITS) -> Image:
    width, height, payload = _split_payload(data, limits, 1, "object image")
    pixels = bytearray(width * height)
    for row in range(height):
        y = height - 1 - row
        pixels[y * width : (y + 1) * width] = payload[row * width : (row + 1) * width]
    return Image(width=width, height=height, pixels=bytes(pixels))


def read_photo(path: str | Path, limits: LoadLimits = PHOTO_LIMITS) -> Photo:
    return parse_photo(_read_source(path), limits)


def read_obj_image(path: str | Path, limits: LoadLimits = SPRITE_LIMITS) -> Image:
    return parse_obj_image(_read_source(path), limits)
