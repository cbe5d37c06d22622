"""Find the caption shown at a playback position."""

from __future__ import annotations

from typing import Optional, Sequence

from .models import Segment


def locate(captions: Sequence[Segment], time_ms: float) -> Optional[int]:
    """
    Return the index of the caption active at ``time_ms``.

    Captions are scanned in display order and the first one whose
    ``[start, end)`` interval contains the position wins, so a time equal
    to a caption's end belongs to the next caption only if that one starts
    there. Overlaps are not resolved here; the validator reports them.
    """
    for idx, cap in enumerate(captions):
        if cap.start <= time_ms < cap.end:
            return idx
    return None


def active_segment(captions: Sequence[Segment], time_ms: float) -> Optional[Segment]:
    """Return the caption active at ``time_ms``, or None."""
    idx = locate(captions, time_ms)
    return captions[idx] if idx is not None else None
