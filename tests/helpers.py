import struct
from typing import Sequence


def photo_bytes(width: int, height: int, pixels: Sequence[int]) -> bytes:
    """Build a photo file; ``pixels`` are given in file order (bottom row first)."""

    return struct.pack("<HH", width, height) + struct.pack(f"<{len(pixels)}H", *pixels)


def sprite_bytes(width: int, height: int, pixels: Sequence[int]) -> bytes:
    return struct.pack("<HH", width, height) + bytes(pixels)


def pixel_for_fine(fine: int) -> int:
    """Return a 5:6:5 pixel whose fine bucket id is ``fine``."""

    r4 = (fine >> 8) & 0x0F
    g4 = (fine >> 4) & 0x0F
    b4 = fine & 0x0F
    return ((r4 << 1) << 11) | ((g4 << 2) << 5) | (b4 << 1)
