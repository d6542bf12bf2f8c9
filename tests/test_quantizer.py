import pytest

from modex_photo.pixels import (
    PixelStream,
    coarse_id,
    coarse_parent,
    fine_id,
    hardware_index,
    scaled_channels,
    split_rgb565,
)
from modex_photo.quantizer import Bucket, Quantizer, quantize


def test_split_and_scale_white() -> None:
    assert split_rgb565(0xFFFF) == (31, 63, 31)
    assert scaled_channels(0xFFFF) == (62, 63, 62)


def test_bucket_ids_for_extremes() -> None:
    assert coarse_id(0x0000) == 0
    assert fine_id(0x0000) == 0
    assert coarse_id(0xFFFF) == 63
    assert fine_id(0xFFFF) == 4095
    # pure red, green, blue
    assert coarse_id(0xF800) == 0b110000
    assert coarse_id(0x07E0) == 0b001100
    assert coarse_id(0x001F) == 0b000011
    assert fine_id(0xF800) == 0xF00
    assert fine_id(0x07E0) == 0x0F0
    assert fine_id(0x001F) == 0x00F


def test_fine_parent_matches_coarse_id() -> None:
    for pixel in range(0, 0x10000, 97):
        assert coarse_parent(fine_id(pixel)) == coarse_id(pixel)


def test_hardware_index_range() -> None:
    assert hardware_index(0) == 64
    assert hardware_index(191) == 255
    with pytest.raises(ValueError):
        hardware_index(192)


def test_counts_agree_with_pixel_total() -> None:
    pixels = [(i * 7919) & 0xFFFF for i in range(1000)]
    q = quantize(pixels)

    assert q.total_pixels == 1000
    assert sum(b.count for b in q.coarse) == 1000
    assert sum(b.count for b in q.fine) == 1000


def test_buckets_accumulate_scaled_sums() -> None:
    q = quantize([0xFFFF, 0xFFFF, 0x0000])

    assert q.fine[4095] == Bucket(4095, red=124, green=126, blue=124, count=2)
    assert q.coarse[63].count == 2
    assert q.coarse[0].count == 1
    assert [b.bucket_id for b in q.populated_coarse()] == [0, 63]
    assert [b.bucket_id for b in q.populated_fine()] == [0, 4095]


def test_reset_clears_previous_load() -> None:
    q = Quantizer().ingest([0x1234, 0xABCD])
    q.reset()

    assert q.total_pixels == 0
    assert not q.populated_coarse()
    assert not q.populated_fine()


def test_bucket_mean_truncates() -> None:
    bucket = Bucket(1, red=10, green=11, blue=5, count=3)
    assert bucket.mean() == (3, 3, 1)
    with pytest.raises(ValueError):
        Bucket(2).mean()


def test_pixel_stream_is_restartable() -> None:
    stream = PixelStream.from_pixels([1, 0x8000, 0xFFFF])

    assert len(stream) == 3
    assert list(stream) == [1, 0x8000, 0xFFFF]
    assert list(stream) == [1, 0x8000, 0xFFFF]
    assert stream.to_bytes() == b"\x01\x00\x00\x80\xff\xff"


def test_pixel_stream_rejects_odd_length() -> None:
    with pytest.raises(ValueError):
        PixelStream(b"\x00\x01\x02")
