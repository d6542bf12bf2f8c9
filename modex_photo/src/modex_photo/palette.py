"""Selection of the 192 photo palette colors from the histograms."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .pixels import (
    FINE_BUCKETS,
    FINE_SELECTION,
    PHOTO_PALETTE_SIZE,
    Color,
    coarse_parent,
    coarse_slot,
    fine_slot,
)
from .quantizer import Bucket, Quantizer


@dataclass
class PaletteSelection:
    """Result of palette selection.

    ``colors`` holds the 192 photo palette entries (6-bit RGB) in slot order.
    ``fine_slots`` maps every fine bucket id to its palette slot, or ``None``
    when the bucket was not promoted.
    """

    colors: List[Color] = field(
        default_factory=lambda: [(0, 0, 0)] * PHOTO_PALETTE_SIZE
    )
    selected_ids: List[int] = field(default_factory=list)
    fine_slots: List[Optional[int]] = field(
        default_factory=lambda: [None] * FINE_BUCKETS
    )
    used_coarse_ids: List[int] = field(default_factory=list)

    @property
    def used_slots(self) -> int:
        return len(self.selected_ids) + len(self.used_coarse_ids)


def rank_fine_buckets(buckets: List[Bucket], limit: int = FINE_SELECTION) -> List[Bucket]:
    """Return up to ``limit`` non-empty buckets, most populated first.

    Equal counts are ordered by ascending bucket id so the result does not
    depend on the sort routine.
    """

    ranked = sorted(
        (bucket for bucket in buckets if bucket.count),
        key=lambda bucket: (-bucket.count, bucket.bucket_id),
    )
    return ranked[:limit]


def build_palette(quantizer: Quantizer) -> PaletteSelection:
    """Pick palette colors and reconcile the coarse histogram.

    Promoted fine buckets are subtracted from their coarse parents, so a
    coarse bucket that still has pixels only describes pixels the fine
    palette does not cover. Coarse buckets left empty keep a black slot that
    no pixel will reference.
    """

    selection = PaletteSelection()

    for rank, bucket in enumerate(rank_fine_buckets(quantizer.fine)):
        slot = fine_slot(rank)
        selection.colors[slot] = bucket.mean()
        selection.fine_slots[bucket.bucket_id] = slot
        selection.selected_ids.append(bucket.bucket_id)
        quantizer.coarse[coarse_parent(bucket.bucket_id)].subtract(bucket)

    for bucket in quantizer.coarse:
        if bucket.count == 0:
            continue
        selection.colors[coarse_slot(bucket.bucket_id)] = bucket.mean()
        selection.used_coarse_ids.append(bucket.bucket_id)

    return selection
