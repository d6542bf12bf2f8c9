"""Room photo quantization and scanline composition for a 256-color display.

A room photo in RGB 5:6:5 is reduced to 192 colors (64 coarse + 128 fine
histogram buckets) and remapped to hardware palette indices 64-255. Object
images use the fixed 64-color system palette and are layered over the photo
one scanline at a time by :func:`fill_horizontal` and :func:`fill_vertical`.
"""

from .compositor import (
    SCROLL_X_DIM,
    SCROLL_Y_DIM,
    Room,
    RoomObject,
    fill_horizontal,
    fill_vertical,
)
from .encode import EncodeError, encode_photo, encode_sprite
from .hardware import (
    SYSTEM_PALETTE,
    build_hardware_palette,
    encode_palette_upload,
    prepare_room,
    upload_palette,
)
from .images import (
    OBJ_CLR_TRANSP,
    Image,
    LoadLimits,
    ModexPhotoError,
    Photo,
    PhotoLoadError,
    build_photo,
    parse_obj_image,
    parse_photo,
    read_obj_image,
    read_photo,
)
from .palette import PaletteSelection, build_palette
from .pixels import PixelStream
from .quantizer import Quantizer, quantize
from .remapper import remap_pixels

__all__ = [
    "EncodeError",
    "Image",
    "LoadLimits",
    "ModexPhotoError",
    "OBJ_CLR_TRANSP",
    "PaletteSelection",
    "Photo",
    "PhotoLoadError",
    "PixelStream",
    "Quantizer",
    "Room",
    "RoomObject",
    "SCROLL_X_DIM",
    "SCROLL_Y_DIM",
    "SYSTEM_PALETTE",
    "build_hardware_palette",
    "build_palette",
    "build_photo",
    "encode_palette_upload",
    "encode_photo",
    "encode_sprite",
    "fill_horizontal",
    "fill_vertical",
    "parse_obj_image",
    "parse_photo",
    "prepare_room",
    "quantize",
    "read_obj_image",
    "read_photo",
    "remap_pixels",
    "upload_palette",
]
