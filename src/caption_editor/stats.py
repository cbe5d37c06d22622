"""Aggregate statistics over a caption collection."""

from __future__ import annotations

from typing import Sequence

from .models import CaptionStats, Segment


def calculate_stats(captions: Sequence[Segment]) -> CaptionStats:
    """
    Calculate statistics for a caption collection.

    ``total_duration`` is the sum of segment durations, not the span from
    first start to last end, so gaps and overlaps do not cancel out.
    ``average_cps`` is weighted by duration: total characters over total
    seconds.
    """
    if not captions:
        return CaptionStats()

    total_duration = sum(cap.duration for cap in captions)
    char_counts = [cap.char_count for cap in captions]
    total_chars = sum(char_counts)

    average_cps = total_chars / (total_duration / 1000.0) if total_duration > 0 else 0.0

    return CaptionStats(
        count=len(captions),
        total_duration=total_duration,
        average_duration=total_duration / len(captions),
        average_cps=average_cps,
        longest=max(char_counts),
        shortest=min(char_counts),
    )
