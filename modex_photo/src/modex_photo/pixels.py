"""RGB 5:6:5 pixel decoding, bucket ids and the palette slot layout."""

# Reference: photo palette slots and hardware indices
# Slot range | Hardware index | Contents
# -----------|----------------|---------------------------------------------
# -          | 0–63           | Fixed system palette (2:2:2 RGB, sprites)
# 0–63       | 64–127         | Coarse bucket colors (slot == coarse id)
# 64–191     | 128–255        | Fine bucket colors (slot == 64 + rank)

from __future__ import annotations

import struct
from typing import Iterator, Tuple

Color = Tuple[int, int, int]

COARSE_BUCKETS = 64
FINE_BUCKETS = 4096
FINE_SELECTION = 128

SYSTEM_PALETTE_SIZE = 64
PHOTO_PALETTE_SIZE = COARSE_BUCKETS + FINE_SELECTION
HARDWARE_PALETTE_SIZE = SYSTEM_PALETTE_SIZE + PHOTO_PALETTE_SIZE

COARSE_SLOT_BASE = 0
FINE_SLOT_BASE = COARSE_SLOT_BASE + COARSE_BUCKETS

_PIXEL = struct.Struct("<H")


def split_rgb565(pixel: int) -> Color:
    """Return the raw ``(r5, g6, b5)`` fields of a packed pixel."""

    return (pixel >> 11) & 0x1F, (pixel >> 5) & 0x3F, pixel & 0x1F


def scaled_channels(pixel: int) -> Color:
    """Return the pixel channels widened to a common 6-bit range."""

    r, g, b = split_rgb565(pixel)
    return r << 1, g, b << 1


def coarse_id(pixel: int) -> int:
    r, g, b = split_rgb565(pixel)
    return ((r >> 3) << 4) | ((g >> 4) << 2) | (b >> 3)


def fine_id(pixel: int) -> int:
    r, g, b = split_rgb565(pixel)
    return ((r >> 1) << 8) | ((g >> 2) << 4) | (b >> 1)


def coarse_parent(fine: int) -> int:
    """Drop the two extra bits per channel of a fine id."""

    r4 = (fine >> 8) & 0x0F
    g4 = (fine >> 4) & 0x0F
    b4 = fine & 0x0F
    return ((r4 >> 2) << 4) | ((g4 >> 2) << 2) | (b4 >> 2)


def coarse_slot(bucket_id: int) -> int:
    return COARSE_SLOT_BASE + bucket_id


def fine_slot(rank: int) -> int:
    return FINE_SLOT_BASE + rank


def hardware_index(slot: int) -> int:
    """Map a photo palette slot to the index written into the raster."""

    if not 0 <= slot < PHOTO_PALETTE_SIZE:
        raise ValueError(f"Palette slot out of range: {slot}")
    return SYSTEM_PALETTE_SIZE + slot


def pack_rgb565(r: int, g: int, b: int) -> int:
    """Pack 8-bit RGB components into a 5:6:5 pixel."""

    return ((r >> 3) << 11) | ((g >> 2) << 5) | (b >> 3)


def expand_6bit(value: int) -> int:
    """Scale a 6-bit DAC value to the 8-bit range."""

    return ((value << 2) | (value >> 4)) & 0xFF


class PixelStream:
    """Restartable sequence of little-endian 16-bit pixels.

    Every iteration starts from the first pixel again, so the same stream can
    feed both the histogram pass and the remapping pass.
    """

    def __init__(self, data: bytes | bytearray | memoryview):
        if len(data) % _PIXEL.size:
            raise ValueError("Pixel data must contain whole 16-bit values")
        self._data = bytes(data)

    @classmethod
    def from_pixels(cls, pixels) -> "PixelStream":
        return cls(b"".join(_PIXEL.pack(p & 0xFFFF) for p in pixels))

    def __len__(self) -> int:
        return len(self._data) // _PIXEL.size

    def __iter__(self) -> Iterator[int]:
        for (value,) in _PIXEL.iter_unpack(self._data):
            yield value

    def to_bytes(self) -> bytes:
        return self._data
