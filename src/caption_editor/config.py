"""Configuration and constants."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .history import DEFAULT_HISTORY_LIMIT
from .validator import ValidationRules

# Load environment variables once
load_dotenv()


def _env_number(name: str, default, cast):
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


@dataclass
class EditorConfig:
    """Configuration for a caption editing session."""

    # History settings
    history_limit: int = DEFAULT_HISTORY_LIMIT

    # Output settings
    default_format: str = "SRT"

    # Validation settings
    rules: ValidationRules = field(default_factory=ValidationRules)

    @classmethod
    def from_env(cls) -> "EditorConfig":
        """
        Create config from environment variables.

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed
        """
        defaults = ValidationRules()
        rules = replace(
            defaults,
            max_cps=_env_number("CAPTION_MAX_CPS", defaults.max_cps, float),
            max_line_length=_env_number("CAPTION_MAX_LINE_LENGTH", defaults.max_line_length, int),
        )
        return cls(
            history_limit=_env_number("CAPTION_HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT, int),
            default_format=os.environ.get("CAPTION_DEFAULT_FORMAT", "SRT").strip().upper() or "SRT",
            rules=rules,
        )

    @classmethod
    def from_args(cls, args) -> "EditorConfig":
        """Create config from argparse namespace, falling back to the environment."""
        config = cls.from_env()

        output_format = getattr(args, 'output_format', None)
        if output_format:
            config.default_format = output_format.upper()

        max_cps = getattr(args, 'max_cps', None)
        if max_cps is not None:
            config.rules = replace(config.rules, max_cps=max_cps)

        max_line_length = getattr(args, 'max_line_length', None)
        if max_line_length is not None:
            config.rules = replace(config.rules, max_line_length=max_line_length)

        return config

    def validate(self) -> Optional[str]:
        """
        Validate configuration.

        Returns:
            Error message if invalid, None if valid
        """
        if self.history_limit < 1 or self.history_limit > 1000:
            return f"History limit must be 1-1000, got {self.history_limit}"

        if self.default_format not in SUPPORTED_FORMATS:
            return f"Unsupported format: {self.default_format} (expected SRT or VTT)"

        rules = self.rules
        if not 0 < rules.min_cps <= rules.warn_cps <= rules.max_cps:
            return (
                f"CPS thresholds must satisfy 0 < min <= warn <= max, got "
                f"{rules.min_cps}/{rules.warn_cps}/{rules.max_cps}"
            )

        if rules.max_line_length < 1 or rules.max_lines < 1:
            return "Line limits must be positive"

        if rules.min_duration_ms > rules.max_duration_ms:
            return f"Minimum duration {rules.min_duration_ms}ms exceeds maximum {rules.max_duration_ms}ms"

        return None


# Formats accepted for output
SUPPORTED_FORMATS = {"SRT", "VTT"}

# Supported file extensions
SUPPORTED_EXTENSIONS = {".srt", ".vtt"}

# Largest caption file accepted for loading
MAX_FILE_SIZE = 50 * 1024 * 1024
