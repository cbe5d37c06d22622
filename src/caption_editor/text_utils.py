"""Text processing utilities."""

from __future__ import annotations

import re


# Opening fence with an optional language tag, e.g. ```srt
_FENCE_OPEN = re.compile(r'^```[\w-]*[ \t]*\n?')
_FENCE_CLOSE = re.compile(r'\n?```\s*$')


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace('\r\n', '\n').replace('\r', '\n')


def strip_line_indent(text: str) -> str:
    """
    Remove leading whitespace from every line.

    Caption text pasted from editors or returned by services often carries
    indentation that would otherwise hide the timecode lines.
    """
    return "\n".join(line.lstrip() for line in text.split("\n"))


def strip_code_fences(text: str) -> str:
    """
    Remove a markdown code fence wrapped around caption text.

    Text services tend to answer with ```srt ... ``` blocks; the content
    inside is returned unchanged.
    """
    if not text or not isinstance(text, str):
        return ""

    clean = text.strip()
    if not clean.startswith("```"):
        return clean

    clean = _FENCE_OPEN.sub('', clean)
    clean = _FENCE_CLOSE.sub('', clean)
    return clean.strip()


def characters_per_second(text: str, duration_ms: int) -> float:
    """Reading speed of ``text`` shown for ``duration_ms``."""
    if duration_ms <= 0:
        return float("inf")
    return len(text) / (duration_ms / 1000.0)


def format_duration(ms: float) -> str:
    """
    Format a duration for humans, e.g. ``"1h 23m 45s"``.

    Sub-second remainders are dropped; zero renders as ``"0s"``.
    """
    ms = int(ms)
    hours = ms // 3_600_000
    minutes = (ms % 3_600_000) // 60_000
    seconds = (ms % 60_000) // 1000

    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if seconds > 0 or not parts:
        parts.append(f"{seconds}s")

    return " ".join(parts)


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate text to maximum length with suffix.

    Args:
        text: Text to truncate
        max_length: Maximum length including suffix
        suffix: Suffix to append if truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix
