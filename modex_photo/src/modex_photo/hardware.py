"""Hardware palette assembly and upload through the VGA DAC ports."""

from __future__ import annotations

from typing import Callable, List, Sequence

from .compositor import RoomView
from .images import Photo
from .pixels import (
    PHOTO_PALETTE_SIZE,
    SYSTEM_PALETTE_SIZE,
    Color,
)

DAC_WRITE_INDEX_PORT = 0x03C8
DAC_DATA_PORT = 0x03C9

PortWriter = Callable[[int, int], None]

_LEVELS = (0x00, 0x15, 0x2A, 0x3F)

# 2:2:2 RGB; index = (r << 4) | (g << 2) | b
SYSTEM_PALETTE: List[Color] = [
    (_LEVELS[r], _LEVELS[g], _LEVELS[b])
    for r in range(4)
    for g in range(4)
    for b in range(4)
]


def build_hardware_palette(
    photo: Photo, system_palette: Sequence[Color] = SYSTEM_PALETTE
) -> List[Color]:
    """Return all 256 DAC entries: system colors followed by the photo colors."""

    if len(system_palette) != SYSTEM_PALETTE_SIZE:
        raise ValueError(f"System palette must have {SYSTEM_PALETTE_SIZE} entries")
    if len(photo.palette) != PHOTO_PALETTE_SIZE:
        raise ValueError(f"Photo palette must have {PHOTO_PALETTE_SIZE} entries")
    return list(system_palette) + list(photo.palette)


def encode_palette_upload(
    photo: Photo, system_palette: Sequence[Color] = SYSTEM_PALETTE
) -> bytes:
    """Return the 768 DAC data bytes (R, G, B per entry, 6 bits each)."""

    data = bytearray()
    for r, g, b in build_hardware_palette(photo, system_palette):
        data.extend((r & 0x3F, g & 0x3F, b & 0x3F))
    return bytes(data)


def upload_palette(
    photo: Photo,
    write_port: PortWriter,
    system_palette: Sequence[Color] = SYSTEM_PALETTE,
) -> None:
    """Write the full palette starting at DAC index 0."""

    write_port(DAC_WRITE_INDEX_PORT, 0x00)
    for value in encode_palette_upload(photo, system_palette):
        write_port(DAC_DATA_PORT, value)


def prepare_room(
    room: RoomView,
    write_port: PortWriter,
    system_palette: Sequence[Color] = SYSTEM_PALETTE,
) -> Photo:
    """Make ``room`` current on the display by loading its photo's colors."""

    photo = room.photo
    upload_palette(photo, write_port, system_palette)
    return photo
