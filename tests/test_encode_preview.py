import warnings

import pytest
from PIL import Image as PILImage

from modex_photo.compositor import Room
from modex_photo.encode import (
    EncodeError,
    encode_photo,
    encode_photo_file,
    encode_sprite,
    sprite_index,
)
from modex_photo.images import OBJ_CLR_TRANSP, parse_obj_image, parse_photo
from modex_photo.pixels import expand_6bit, pack_rgb565
from modex_photo.preview import render_photo, render_room

from helpers import photo_bytes


def test_pack_rgb565() -> None:
    assert pack_rgb565(255, 255, 255) == 0xFFFF
    assert pack_rgb565(255, 0, 0) == 0xF800
    assert pack_rgb565(0, 255, 0) == 0x07E0
    assert pack_rgb565(0, 0, 255) == 0x001F


def test_expand_6bit() -> None:
    assert expand_6bit(0) == 0
    assert expand_6bit(63) == 255
    assert expand_6bit(62) == 251


def test_encode_photo_stores_bottom_row_first() -> None:
    img = PILImage.new("RGB", (2, 2))
    img.putpixel((0, 0), (255, 0, 0))
    img.putpixel((1, 0), (0, 255, 0))
    img.putpixel((0, 1), (0, 0, 255))
    img.putpixel((1, 1), (255, 255, 255))

    data = encode_photo(img)

    assert data == photo_bytes(2, 2, [0x001F, 0xFFFF, 0xF800, 0x07E0])


def test_encoded_photo_loads() -> None:
    img = PILImage.new("RGB", (8, 4), (255, 0, 0))
    img.putpixel((7, 3), (0, 0, 0))

    photo = parse_photo(encode_photo(img))

    assert (photo.width, photo.height) == (8, 4)
    assert photo.palette[64] == (62, 0, 0)
    assert photo.index_at(0, 0) == 128
    assert photo.index_at(7, 3) == 129


def test_encode_photo_rejects_oversize() -> None:
    with pytest.raises(EncodeError):
        encode_photo(PILImage.new("RGB", (1025, 1)))


def test_sprite_index() -> None:
    assert sprite_index(255, 255, 255) == 63
    assert sprite_index(255, 0, 0, 200) == 0b110000
    assert sprite_index(0, 128, 64, 255) == (2 << 2) | 1
    assert sprite_index(255, 255, 255, 0) == OBJ_CLR_TRANSP


def test_encode_sprite() -> None:
    img = PILImage.new("RGBA", (2, 2), (0, 0, 0, 0))
    img.putpixel((0, 0), (255, 255, 255, 255))
    img.putpixel((1, 1), (0, 0, 255, 255))

    image = parse_obj_image(encode_sprite(img))

    assert image.pixels == bytes([63, OBJ_CLR_TRANSP, OBJ_CLR_TRANSP, 3])


def test_encode_sprite_rejects_oversize() -> None:
    with pytest.raises(EncodeError):
        encode_sprite(PILImage.new("RGBA", (161, 1)))


def test_encode_missing_file(tmp_path) -> None:
    with pytest.raises(EncodeError, match="not found"):
        encode_photo_file(tmp_path / "missing.png")


def test_render_photo_expands_palette() -> None:
    photo = parse_photo(photo_bytes(2, 2, [0x0000, 0xFFFF, 0x0000, 0xFFFF]))

    preview = render_photo(photo)

    assert preview.size == (2, 2)
    assert preview.getpixel((0, 0)) == (0, 0, 0)
    assert preview.getpixel((1, 0)) == (251, 255, 251)


def test_render_room_draws_objects() -> None:
    photo = parse_photo(photo_bytes(2, 2, [0x0000] * 4))
    room = Room(photo)
    room.place(parse_obj_image(b"\x01\x00\x01\x00" + bytes([63])), 1, 0)

    preview = render_room(room)

    assert preview.getpixel((0, 0)) == (0, 0, 0)
    assert preview.getpixel((1, 0)) == (255, 255, 255)
    assert preview.getpixel((1, 1)) == (0, 0, 0)


def test_encoding_emits_no_deprecation_warnings() -> None:
    photo_img = PILImage.new("RGB", (3, 2), (10, 20, 30))
    sprite_img = PILImage.new("RGBA", (3, 2), (255, 255, 255, 255))

    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        photo = parse_photo(encode_photo(photo_img))
        image = parse_obj_image(encode_sprite(sprite_img))

    assert (photo.width, photo.height) == (3, 2)
    assert image.pixels == bytes([63] * 6)
