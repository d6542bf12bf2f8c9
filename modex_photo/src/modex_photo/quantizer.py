"""Coarse and fine color histograms built in a single pass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .pixels import (
    COARSE_BUCKETS,
    FINE_BUCKETS,
    Color,
    coarse_id,
    fine_id,
    scaled_channels,
)


@dataclass
class Bucket:
    """Accumulated channel sums for all pixels sharing one bucket id."""

    bucket_id: int
    red: int = 0
    green: int = 0
    blue: int = 0
    count: int = 0

    def add(self, r: int, g: int, b: int) -> None:
        self.red += r
        self.green += g
        self.blue += b
        self.count += 1

    def subtract(self, other: "Bucket") -> None:
        self.red -= other.red
        self.green -= other.green
        self.blue -= other.blue
        self.count -= other.count

    def mean(self) -> Color:
        """Integer-truncated average color; only valid for a non-empty bucket."""

        if self.count == 0:
            raise ValueError(f"Bucket {self.bucket_id} is empty")
        return (
            self.red // self.count,
            self.green // self.count,
            self.blue // self.count,
        )

    def clear(self) -> None:
        self.red = self.green = self.blue = self.count = 0


class Quantizer:
    """Scratch histograms for one photo load.

    Construct a new instance (or call :meth:`reset`) for every photo; the
    buckets are mutated by palette selection and must not carry over.
    """

    def __init__(self) -> None:
        self.coarse: List[Bucket] = [Bucket(i) for i in range(COARSE_BUCKETS)]
        self.fine: List[Bucket] = [Bucket(i) for i in range(FINE_BUCKETS)]
        self.total_pixels = 0

    def reset(self) -> None:
        for bucket in self.coarse:
            bucket.clear()
        for bucket in self.fine:
            bucket.clear()
        self.total_pixels = 0

    def add_pixel(self, pixel: int) -> None:
        r, g, b = scaled_channels(pixel)
        self.coarse[coarse_id(pixel)].add(r, g, b)
        self.fine[fine_id(pixel)].add(r, g, b)
        self.total_pixels += 1

    def ingest(self, pixels: Iterable[int]) -> "Quantizer":
        for pixel in pixels:
            self.add_pixel(pixel)
        return self

    def populated_coarse(self) -> List[Bucket]:
        return [bucket for bucket in self.coarse if bucket.count]

    def populated_fine(self) -> List[Bucket]:
        return [bucket for bucket in self.fine if bucket.count]


def quantize(pixels: Iterable[int]) -> Quantizer:
    """Build fresh histograms over ``pixels``."""

    return Quantizer().ingest(pixels)
