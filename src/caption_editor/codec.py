"""SRT/WebVTT parsing, serialization and timecode conversion."""

from __future__ import annotations

import re
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .config import SUPPORTED_EXTENSIONS, MAX_FILE_SIZE
from .exceptions import FormatError
from .models import CaptionFormat, Segment, new_segment_id
from .text_utils import (
    normalize_newlines,
    strip_code_fences,
    strip_line_indent,
    truncate_text,
)

logger = logging.getLogger(__name__)

VTT_MARKER = "WEBVTT"

# HH:MM:SS,mmm or HH:MM:SS.mmm, fixed width
_TIMECODE = re.compile(r'^([0-9]{2}):([0-9]{2}):([0-9]{2})([,.])([0-9]{3})$')

# First "start --> end" pair anywhere in the text
_TIMING = re.compile(
    r'[0-9]{2}:[0-9]{2}:[0-9]{2}([,.])[0-9]{3}\s*-->\s*'
    r'[0-9]{2}:[0-9]{2}:[0-9]{2}[,.][0-9]{3}'
)

_BLOCK_SEPARATOR = re.compile(r'\n{2,}')

_MAX_TIMECODE_MS = 100 * 3_600_000


def detect_format(text: str) -> CaptionFormat:
    """
    Guess the caption format of ``text``.

    The ``WEBVTT`` header wins; otherwise the fractional-seconds separator
    of the first timecode decides (comma for SRT, period for WebVTT).
    """
    if not text:
        return CaptionFormat.UNKNOWN

    if text.lstrip('\ufeff').strip().startswith(VTT_MARKER):
        return CaptionFormat.VTT

    match = _TIMING.search(text)
    if match:
        return CaptionFormat.SRT if match.group(1) == ',' else CaptionFormat.VTT

    return CaptionFormat.UNKNOWN


def timecode_to_ms(value: str, fmt: CaptionFormat | str | None = None) -> int:
    """
    Convert a fixed-width timecode to milliseconds.

    Args:
        value: Timecode such as ``00:01:02,500``
        fmt: When given, the separator must match this format

    Raises:
        FormatError: On a malformed timecode or the wrong separator
    """
    match = _TIMECODE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise FormatError(f"Invalid timecode: {value!r} (expected HH:MM:SS,mmm or HH:MM:SS.mmm)")

    hours, minutes, seconds, sep, millis = match.groups()

    if fmt is not None:
        expected = CaptionFormat.coerce(fmt)
        if expected is not CaptionFormat.UNKNOWN and sep != expected.separator:
            raise FormatError(
                f"Invalid timecode: {value!r} ({expected.value} uses "
                f"'{expected.separator}' before milliseconds)"
            )

    if int(minutes) >= 60 or int(seconds) >= 60:
        raise FormatError(f"Invalid timecode: {value!r} (minutes and seconds must be below 60)")

    return (
        int(hours) * 3_600_000
        + int(minutes) * 60_000
        + int(seconds) * 1000
        + int(millis)
    )


def ms_to_timecode(ms: int, fmt: CaptionFormat | str = CaptionFormat.SRT) -> str:
    """
    Convert milliseconds to a fixed-width timecode in the given format.

    Raises:
        FormatError: For negative times, times of 100 hours or more, or an
            unknown format
    """
    fmt = CaptionFormat.coerce(fmt)
    if fmt is CaptionFormat.UNKNOWN:
        raise FormatError("Cannot render timecode for an unknown format")

    ms = int(round(ms))
    if ms < 0:
        raise FormatError(f"Cannot render negative time: {ms}ms")
    if ms >= _MAX_TIMECODE_MS:
        raise FormatError(f"Time out of range: {ms}ms (max 99:59:59{fmt.separator}999)")

    hours = ms // 3_600_000
    minutes = (ms % 3_600_000) // 60_000
    seconds = (ms % 60_000) // 1000
    millis = ms % 1000
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}{fmt.separator}{millis:03d}"


def _parse_timing_line(line: str) -> Tuple[int, int]:
    """Parse ``start --> end [cue settings]``; settings are ignored."""
    left, right = line.split('-->', 1)
    right_parts = right.split()
    end = right_parts[0] if right_parts else ""
    return timecode_to_ms(left), timecode_to_ms(end)


def parse_captions(text: str) -> List[Segment]:
    """
    Parse SRT or WebVTT text into segments.

    Cue numbers and identifiers are discarded and every segment receives a
    fresh id. Header, NOTE and STYLE blocks are skipped.

    Args:
        text: Raw caption text

    Returns:
        Segments in file order

    Raises:
        FormatError: If no cue is found or a timecode is malformed
    """
    if not text or not text.strip():
        raise FormatError("No caption cues found: input is empty")

    content = strip_line_indent(normalize_newlines(text.lstrip('\ufeff'))).strip()

    segments: List[Segment] = []
    for block in _BLOCK_SEPARATOR.split(content):
        lines = block.split('\n')
        timing_idx = next((i for i, line in enumerate(lines) if '-->' in line), None)

        if timing_idx is None:
            logger.debug(f"Skipping non-cue block: {truncate_text(lines[0], 40)}")
            continue

        try:
            start, end = _parse_timing_line(lines[timing_idx])
        except FormatError as e:
            raise FormatError(f"{e} in cue: {truncate_text(block, 80)!r}") from e

        body = "\n".join(lines[timing_idx + 1:]).strip()
        segments.append(Segment(new_segment_id(), start, end, body))

    if not segments:
        raise FormatError("No caption cues found")

    logger.debug(f"Parsed {len(segments)} caption cues")
    return segments


def parse_service_output(text: str) -> List[Segment]:
    """Parse caption text returned by a transcription or correction service."""
    return parse_captions(strip_code_fences(text))


def serialize_captions(
    segments: Sequence[Segment],
    fmt: CaptionFormat | str = CaptionFormat.SRT,
) -> str:
    """
    Render segments as caption text.

    Cues are renumbered from 1. Only timing and text are guaranteed to
    survive a parse/serialize round trip.

    Raises:
        FormatError: For an unknown format or a time that cannot be rendered
    """
    target = CaptionFormat.coerce(fmt)
    if target is CaptionFormat.UNKNOWN:
        raise FormatError(f"Unsupported caption format: {fmt!r}")

    parts: List[str] = []
    if target is CaptionFormat.VTT:
        parts.append(f"{VTT_MARKER}\n\n")

    for idx, seg in enumerate(segments, 1):
        timing = f"{ms_to_timecode(seg.start, target)} --> {ms_to_timecode(seg.end, target)}"
        parts.append(f"{idx}\n{timing}\n{seg.text}\n\n")

    return "".join(parts)


def validate_caption_file(path: Path) -> Optional[str]:
    """
    Validate a caption file before loading it.

    Returns:
        Error message if invalid, None if valid
    """
    if not path.exists():
        return f"File not found: {path}"

    if not path.is_file():
        return f"Not a file: {path}"

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        expected = ", ".join(sorted(SUPPORTED_EXTENSIONS))
        return f"Invalid file extension: {suffix} (expected {expected})"

    size = path.stat().st_size
    if size == 0:
        return "File is empty"
    if size > MAX_FILE_SIZE:
        return f"File too large: {size / 1024 / 1024:.1f}MB (max {MAX_FILE_SIZE // 1024 // 1024}MB)"

    return None


def read_caption_text(path: Path) -> str:
    """
    Read a caption file as UTF-8, tolerating a byte-order mark.

    Raises:
        FormatError: If the file is not valid UTF-8
    """
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise FormatError(f"{path.name}: not valid UTF-8 ({e.reason})") from e


def load_captions(path: Path) -> List[Segment]:
    """Read and parse a caption file."""
    content = read_caption_text(path)
    segments = parse_captions(content)
    logger.info(f"Loaded {len(segments)} captions from {path}")
    return segments


def save_captions(
    segments: Sequence[Segment],
    path: Path,
    fmt: CaptionFormat | str | None = None,
) -> None:
    """
    Save segments to a caption file.

    Args:
        segments: Segments to save
        path: Output file path
        fmt: Target format; inferred from the file suffix when omitted
    """
    target = CaptionFormat.coerce(fmt if fmt is not None else path.suffix.lstrip('.'))
    if target is CaptionFormat.UNKNOWN:
        raise FormatError(f"Cannot infer caption format for {path}")

    text = serialize_captions(segments, target)

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write(text)

    logger.info(f"Saved {len(segments)} captions to {path} ({target.value})")
