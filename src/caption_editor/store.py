"""
Pure editing operations over a caption collection.

None of these functions modify their input: each returns a new list. Ids
that no longer exist are ignored, since a caller may act on a collection
from an earlier revision.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .models import Segment, SegmentDraft, SegmentPatch

logger = logging.getLogger(__name__)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def find_index(captions: Sequence[Segment], segment_id: str) -> Optional[int]:
    """Return the display position of ``segment_id``, or None."""
    for idx, cap in enumerate(captions):
        if cap.id == segment_id:
            return idx
    return None


def insert_at(
    captions: Sequence[Segment],
    index: int,
    draft: SegmentDraft,
) -> List[Segment]:
    """
    Insert a new caption at ``index``.

    The index is clamped into ``[0, len(captions)]``. A negative start is
    stored as 0; nothing else about the timing is checked and the
    collection is not re-sorted.
    """
    segment = draft.to_segment()
    if segment.start < 0:
        segment = segment.copy(start=0)

    position = _clamp(index, 0, len(captions))
    updated = list(captions)
    updated.insert(position, segment)

    logger.debug(f"Inserted {segment.id} at {position}")
    return updated


def append(captions: Sequence[Segment], draft: SegmentDraft) -> List[Segment]:
    """Insert a new caption after the last one."""
    return insert_at(captions, len(captions), draft)


def update(
    captions: Sequence[Segment],
    segment_id: str,
    patch: SegmentPatch,
) -> List[Segment]:
    """
    Apply ``patch`` to the caption with ``segment_id``.

    Only the fields set on the patch change. A patch that leaves
    ``start >= end`` is stored as given and reported by the validator;
    a negative start is stored as 0.
    """
    idx = find_index(captions, segment_id)
    if idx is None:
        logger.debug(f"Update ignored, unknown id: {segment_id}")
        return list(captions)

    patched = patch.apply(captions[idx])
    if patched.start < 0:
        patched = patched.copy(start=0)

    updated = list(captions)
    updated[idx] = patched
    return updated


def remove(captions: Sequence[Segment], segment_id: str) -> List[Segment]:
    """Drop the caption with ``segment_id``."""
    updated = [cap for cap in captions if cap.id != segment_id]
    if len(updated) == len(captions):
        logger.debug(f"Remove ignored, unknown id: {segment_id}")
    return updated


def move(captions: Sequence[Segment], from_index: int, to_index: int) -> List[Segment]:
    """
    Move the caption at ``from_index`` so it ends up at ``to_index``.

    Purely positional; timing is not looked at. An out-of-range source
    index is ignored and the destination is clamped.
    """
    updated = list(captions)
    if not 0 <= from_index < len(updated):
        logger.debug(f"Move ignored, index out of range: {from_index}")
        return updated

    moved = updated.pop(from_index)
    updated.insert(_clamp(to_index, 0, len(updated)), moved)
    return updated
