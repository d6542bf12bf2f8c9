"""Scanline composition of a room photo with the objects placed in it.

Both fill functions are pure: the result depends only on the room's photo,
its object list and the requested line. The room must not be mutated while a
call is in progress.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Protocol

from .images import OBJ_CLR_TRANSP, Image, Photo

# Visible scrolling window (mode X, 320x200 minus the status bar).
SCROLL_X_DIM = 320
SCROLL_Y_DIM = 182

BACKGROUND_INDEX = 0


class PlacedObject(Protocol):
    x: int
    y: int
    image: Image


class RoomView(Protocol):
    photo: Photo

    def iter_objects(self) -> Iterable[PlacedObject]: ...


@dataclass
class RoomObject:
    x: int
    y: int
    image: Image


@dataclass
class Room:
    """Minimal room holding a photo and objects in drawing order."""

    photo: Photo
    objects: List[RoomObject] = field(default_factory=list)

    def place(self, image: Image, x: int, y: int) -> RoomObject:
        obj = RoomObject(x, y, image)
        self.objects.append(obj)
        return obj

    def iter_objects(self) -> Iterator[RoomObject]:
        return iter(self.objects)


def fill_horizontal(room: RoomView, x: int, y: int, width: int = SCROLL_X_DIM) -> bytearray:
    """Produce the row of ``width`` pixels whose leftmost map pixel is (x, y)."""

    view = room.photo
    width = max(0, width)
    buf = bytearray(width)

    if 0 <= y < view.height:
        start = max(0, x)
        end = min(view.width, x + width)
        if start < end:
            row = y * view.width
            buf[start - x : end - x] = view.pixels[row + start : row + end]

    for obj in room.iter_objects():
        img = obj.image
        if y < obj.y or y >= obj.y + img.height:
            continue
        if x + width <= obj.x or x >= obj.x + img.width:
            continue

        yoff = (y - obj.y) * img.width
        if x <= obj.x:
            idx, imgx = obj.x - x, 0
        else:
            idx, imgx = 0, x - obj.x

        while idx < width and imgx < img.width:
            pixel = img.pixels[yoff + imgx]
            if pixel != OBJ_CLR_TRANSP:
                buf[idx] = pixel
            idx += 1
            imgx += 1

    return buf


def fill_vertical(room: RoomView, x: int, y: int, height: int = SCROLL_Y_DIM) -> bytearray:
    """Produce the column of ``height`` pixels whose top map pixel is (x, y)."""

    view = room.photo
    height = max(0, height)
    buf = bytearray(height)

    if 0 <= x < view.width:
        start = max(0, y)
        end = min(view.height, y + height)
        if start < end:
            buf[start - y : end - y] = view.pixels[
                start * view.width + x : end * view.width : view.width
            ]

    for obj in room.iter_objects():
        img = obj.image
        if x < obj.x or x >= obj.x + img.width:
            continue
        if y + height <= obj.y or y >= obj.y + img.height:
            continue

        xoff = x - obj.x
        if y <= obj.y:
            idx, imgy = obj.y - y, 0
        else:
            idx, imgy = 0, y - obj.y

        while idx < height and imgy < img.height:
            pixel = img.pixels[xoff + img.width * imgy]
            if pixel != OBJ_CLR_TRANSP:
                buf[idx] = pixel
            idx += 1
            imgy += 1

    return buf
