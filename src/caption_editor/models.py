"""Data models for caption segments and derived results."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace, asdict
from enum import Enum
from typing import Any, Dict, List, Optional

from .text_utils import characters_per_second


class CaptionFormat(Enum):
    """Supported caption text formats."""
    SRT = "SRT"
    VTT = "VTT"
    UNKNOWN = "UNKNOWN"

    @property
    def separator(self) -> str:
        """Fractional-seconds separator used in timecodes."""
        return "." if self is CaptionFormat.VTT else ","

    @property
    def suffix(self) -> str:
        return f".{self.value.lower()}"

    @classmethod
    def coerce(cls, value: "CaptionFormat | str") -> "CaptionFormat":
        """Accept an enum member or a case-insensitive name ("srt", "VTT")."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return cls.UNKNOWN


def new_segment_id() -> str:
    """Generate a fresh, never-reused segment id."""
    return f"caption-{uuid.uuid4().hex}"


@dataclass(frozen=True)
class Segment:
    """A single time-coded caption. Times are integer milliseconds."""

    id: str
    start: int
    end: int
    text: str

    @property
    def duration(self) -> int:
        """Duration in milliseconds (negative when timing is inverted)."""
        return self.end - self.start

    @property
    def duration_seconds(self) -> float:
        return self.duration / 1000.0

    @property
    def char_count(self) -> int:
        return len(self.text)

    @property
    def lines(self) -> List[str]:
        return self.text.split("\n")

    @property
    def cps(self) -> float:
        """Characters per second; infinite when the duration is not positive."""
        return characters_per_second(self.text, self.duration)

    def copy(self, **changes) -> "Segment":
        """Create a copy with optional field changes. The id is always kept."""
        changes.pop("id", None)
        return replace(self, **changes)


@dataclass(frozen=True)
class SegmentDraft:
    """Segment contents before the engine has assigned an id."""

    start: int
    end: int
    text: str = ""

    def to_segment(self, segment_id: Optional[str] = None) -> Segment:
        return Segment(
            id=segment_id or new_segment_id(),
            start=self.start,
            end=self.end,
            text=self.text,
        )


@dataclass(frozen=True)
class SegmentPatch:
    """
    Partial update for a segment.

    Fields left as ``None`` are not touched by ``apply``.
    """

    start: Optional[int] = None
    end: Optional[int] = None
    text: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None and self.text is None

    def changes(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def apply(self, segment: Segment) -> Segment:
        if self.is_empty:
            return segment
        return segment.copy(**self.changes())


@dataclass
class ValidationResult:
    """Advisory outcome of validating one segment or a whole collection."""

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        return ValidationResult(
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings,
        )


@dataclass(frozen=True)
class CaptionStats:
    """Aggregate figures for a caption collection."""

    count: int = 0
    total_duration: int = 0     # ms, sum of segment durations
    average_duration: float = 0.0
    average_cps: float = 0.0
    longest: int = 0            # character count
    shortest: int = 0           # character count

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
