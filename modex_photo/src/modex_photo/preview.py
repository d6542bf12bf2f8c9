"""Render photos and composed rooms as Pillow images for inspection."""

from __future__ import annotations

from typing import List, Sequence

from PIL import Image

from .compositor import RoomView, fill_horizontal
from .hardware import build_hardware_palette
from .images import Photo
from .pixels import Color, expand_6bit


def _to_rgb8(palette: Sequence[Color]) -> List[Color]:
    return [(expand_6bit(r), expand_6bit(g), expand_6bit(b)) for r, g, b in palette]


def render_indices(indices: bytes, width: int, height: int, photo: Photo) -> Image.Image:
    """Expand hardware palette indices to an RGB image using ``photo``'s colors."""

    colors = _to_rgb8(build_hardware_palette(photo))
    preview = Image.new("RGB", (width, height))
    preview.putdata([colors[idx] for idx in indices])
    return preview


def render_photo(photo: Photo) -> Image.Image:
    return render_indices(photo.pixels, photo.width, photo.height, photo)


def render_room(room: RoomView) -> Image.Image:
    """Compose the whole photo area with its objects, one scanline at a time."""

    photo = room.photo
    rows = bytearray()
    for y in range(photo.height):
        rows += fill_horizontal(room, 0, y, photo.width)
    return render_indices(bytes(rows), photo.width, photo.height, photo)
