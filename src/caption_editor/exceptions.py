"""Exceptions raised by the caption editor."""


class CaptionEditorError(Exception):
    """Base class for caption editor errors."""


class FormatError(CaptionEditorError):
    """Caption text or a timecode could not be parsed or rendered."""


class ConfigurationError(CaptionEditorError):
    """A configuration value is missing or out of range."""
