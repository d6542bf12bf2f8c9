"""Encode Pillow images into photo and object image files."""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from .images import (
    HEADER,
    MAX_OBJECT_HEIGHT,
    MAX_OBJECT_WIDTH,
    MAX_PHOTO_HEIGHT,
    MAX_PHOTO_WIDTH,
    OBJ_CLR_TRANSP,
    ModexPhotoError,
)
from .pixels import pack_rgb565

ALPHA_THRESHOLD = 128


class EncodeError(ModexPhotoError):
    """Raised when an image cannot be stored in the target format."""


def _check_size(image: Image.Image, max_width: int, max_height: int) -> None:
    width, height = image.size
    if width > max_width or height > max_height:
        raise EncodeError(f"Image size {width}x{height} exceeds {max_width}x{max_height}")


def _bottom_up_rows(image: Image.Image):
    width, height = image.size
    access = image.load()
    for y in range(height - 1, -1, -1):
        yield [access[x, y] for x in range(width)]


def encode_photo(image: Image.Image) -> bytes:
    """Convert an image to photo file bytes (RGB 5:6:5, bottom row first)."""

    _check_size(image, MAX_PHOTO_WIDTH, MAX_PHOTO_HEIGHT)
    rgb = image.convert("RGB")
    data = bytearray(HEADER.pack(*rgb.size))
    for row in _bottom_up_rows(rgb):
        for r, g, b in row:
            data.extend(pack_rgb565(r, g, b).to_bytes(2, "little"))
    return bytes(data)


def sprite_index(r: int, g: int, b: int, a: int = 255) -> int:
    """Map an 8-bit RGBA color to a system palette index or the sentinel."""

    if a < ALPHA_THRESHOLD:
        return OBJ_CLR_TRANSP
    return ((r >> 6) << 4) | ((g >> 6) << 2) | (b >> 6)


def encode_sprite(image: Image.Image) -> bytes:
    """Convert an image to object image bytes; translucent pixels become transparent."""

    _check_size(image, MAX_OBJECT_WIDTH, MAX_OBJECT_HEIGHT)
    rgba = image.convert("RGBA")
    data = bytearray(HEADER.pack(*rgba.size))
    for row in _bottom_up_rows(rgba):
        data.extend(sprite_index(*pixel) for pixel in row)
    return bytes(data)


def _open_image(path: str | Path) -> Image.Image:
    path = Path(path)
    try:
        with Image.open(path) as img:
            img.load()
            return img.copy()
    except FileNotFoundError as exc:
        raise EncodeError(f"Input file not found: {path}") from exc
    except OSError as exc:
        raise EncodeError(f"Failed to read image: {path}") from exc


def encode_photo_file(path: str | Path) -> bytes:
    return encode_photo(_open_image(path))


def encode_sprite_file(path: str | Path) -> bytes:
    return encode_sprite(_open_image(path))
