"""
Caption Editor - editing engine for SRT and WebVTT captions.

Features:
- SRT/WebVTT parsing and serialization with format detection
- Pure insert/update/remove/move operations on caption collections
- Timing and readability validation (duration, line length, CPS, overlaps)
- Collection statistics
- Undo/redo history with origin-tagged commits
- Active caption lookup for a playback position
"""

__version__ = "1.0.0"

from .models import (
    CaptionFormat,
    CaptionStats,
    Segment,
    SegmentDraft,
    SegmentPatch,
    ValidationResult,
)
from .exceptions import CaptionEditorError, FormatError, ConfigurationError
from .codec import (
    detect_format,
    parse_captions,
    parse_service_output,
    serialize_captions,
    ms_to_timecode,
    timecode_to_ms,
    load_captions,
    read_caption_text,
    save_captions,
    validate_caption_file,
)
from .store import insert_at, append, update, remove, move, find_index
from .validator import ValidationRules, validate_caption, validate_captions
from .stats import calculate_stats
from .history import CommitOrigin, HistoryState
from .locator import locate, active_segment
from .config import EditorConfig
from .session import CaptionSession

__all__ = [
    # Models
    "CaptionFormat",
    "CaptionStats",
    "Segment",
    "SegmentDraft",
    "SegmentPatch",
    "ValidationResult",
    "EditorConfig",
    # Errors
    "CaptionEditorError",
    "FormatError",
    "ConfigurationError",
    # Codec
    "detect_format",
    "parse_captions",
    "parse_service_output",
    "serialize_captions",
    "ms_to_timecode",
    "timecode_to_ms",
    "load_captions",
    "read_caption_text",
    "save_captions",
    "validate_caption_file",
    # Editing
    "insert_at",
    "append",
    "update",
    "remove",
    "move",
    "find_index",
    # Validation
    "ValidationRules",
    "validate_caption",
    "validate_captions",
    # Statistics
    "calculate_stats",
    # History
    "CommitOrigin",
    "HistoryState",
    # Playback
    "locate",
    "active_segment",
    # Session
    "CaptionSession",
]
