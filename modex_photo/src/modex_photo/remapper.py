"""Second pass: map every source pixel to its photo palette index."""

from __future__ import annotations

from typing import Iterable

from .palette import PaletteSelection
from .pixels import coarse_id, coarse_slot, fine_id, hardware_index


def pixel_index(pixel: int, selection: PaletteSelection) -> int:
    slot = selection.fine_slots[fine_id(pixel)]
    if slot is None:
        slot = coarse_slot(coarse_id(pixel))
    return hardware_index(slot)


def remap_pixels(
    pixels: Iterable[int], width: int, height: int, selection: PaletteSelection
) -> bytearray:
    """Return the raster for pixels stored bottom row first.

    The result is stored top row first, ``width`` bytes per row, without
    padding. A pixel never moves to a different bucket than its own, even when
    another selected color would be closer.
    """

    raster = bytearray(width * height)
    it = iter(pixels)
    try:
        for y in range(height - 1, -1, -1):
            row = y * width
            for x in range(width):
                raster[row + x] = pixel_index(next(it), selection)
    except StopIteration as exc:
        raise ValueError(f"Pixel stream ended before {width}x{height} pixels") from exc
    return raster
