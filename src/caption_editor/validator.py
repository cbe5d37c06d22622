"""Readability and timing checks for caption segments."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .models import Segment, ValidationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationRules:
    """
    Thresholds used by the validator.

    Defaults follow common broadcast guidelines: 1-6 seconds on screen,
    at most two lines of 42 characters, 12-17 CPS optimal and anything
    above 21 CPS too fast to read.
    """

    min_duration_ms: int = 1000
    max_duration_ms: int = 6000
    max_lines: int = 2
    max_line_length: int = 42
    max_cps: float = 21.0
    warn_cps: float = 17.0
    min_cps: float = 12.0
    min_gap_ms: int = 100


DEFAULT_RULES = ValidationRules()


def validate_caption(
    segment: Segment,
    index: int,
    rules: Optional[ValidationRules] = None,
) -> ValidationResult:
    """
    Validate a single segment.

    Args:
        segment: Segment to check
        index: Zero-based display position, used in messages
        rules: Thresholds; defaults to ``DEFAULT_RULES``

    Returns:
        ValidationResult with errors and warnings
    """
    rules = rules or DEFAULT_RULES
    label = f"Caption {index + 1}"
    result = ValidationResult()

    # Timing
    if segment.start >= segment.end:
        result.errors.append(f"{label}: Start time must be before end time")

    if segment.start < 0 or segment.end < 0:
        result.errors.append(f"{label}: Time cannot be negative")

    # Text
    if not segment.text.strip():
        result.warnings.append(f"{label}: Empty text")

    duration_s = segment.duration_seconds
    if segment.duration < rules.min_duration_ms:
        result.warnings.append(
            f"{label}: Duration too short ({duration_s:.2f}s, "
            f"min recommended: {rules.min_duration_ms / 1000:g}s)"
        )
    if segment.duration > rules.max_duration_ms:
        result.warnings.append(
            f"{label}: Duration too long ({duration_s:.1f}s, "
            f"max recommended: {rules.max_duration_ms / 1000:g}s)"
        )

    # Layout
    lines = segment.lines
    if len(lines) > rules.max_lines:
        result.errors.append(f"{label}: Too many lines ({len(lines)} lines, max: {rules.max_lines})")

    for line_idx, line in enumerate(lines, 1):
        if len(line) > rules.max_line_length:
            result.warnings.append(
                f"{label}, Line {line_idx}: Exceeds {rules.max_line_length} characters ({len(line)} chars)"
            )

    # Reading speed; inverted timing is already an error above
    if segment.duration > 0:
        cps = segment.cps
        if cps > rules.max_cps:
            result.errors.append(f"{label}: Reading speed too fast ({cps:.1f} CPS, max: {rules.max_cps:g})")
        elif cps > rules.warn_cps:
            result.warnings.append(
                f"{label}: Reading speed fast ({cps:.1f} CPS, optimal: {rules.min_cps:g}-{rules.warn_cps:g})"
            )
        elif cps < rules.min_cps and segment.duration > rules.min_duration_ms:
            result.warnings.append(
                f"{label}: Reading speed slow ({cps:.1f} CPS, optimal: {rules.min_cps:g}-{rules.warn_cps:g})"
            )

    return result


def check_spacing(
    captions: Sequence[Segment],
    rules: Optional[ValidationRules] = None,
) -> ValidationResult:
    """
    Check adjacent pairs in display order for overlaps and tight gaps.

    The collection is not sorted first: captions that are out of time
    order are compared with whatever follows them on screen.
    """
    rules = rules or DEFAULT_RULES
    result = ValidationResult()

    for i in range(len(captions) - 1):
        current = captions[i]
        nxt = captions[i + 1]

        if current.end > nxt.start:
            overlap = current.end - nxt.start
            result.errors.append(f"Captions {i + 1} and {i + 2}: Timing overlap ({overlap}ms)")
        elif nxt.start - current.end < rules.min_gap_ms:
            gap = nxt.start - current.end
            result.warnings.append(
                f"Captions {i + 1} and {i + 2}: Gap too small "
                f"({gap}ms, min recommended: {rules.min_gap_ms}ms)"
            )

    return result


def validate_captions(
    captions: Sequence[Segment],
    rules: Optional[ValidationRules] = None,
) -> ValidationResult:
    """Validate every segment and the spacing between neighbours."""
    result = ValidationResult()
    for index, segment in enumerate(captions):
        result = result.merge(validate_caption(segment, index, rules))

    result = result.merge(check_spacing(captions, rules))

    logger.debug(
        f"Validated {len(captions)} captions: "
        f"{len(result.errors)} errors, {len(result.warnings)} warnings"
    )
    return result
