"""Tests for configuration loading."""

import argparse

import pytest
from caption_editor.config import EditorConfig
from caption_editor.exceptions import ConfigurationError
from caption_editor.validator import ValidationRules


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "CAPTION_HISTORY_LIMIT",
        "CAPTION_MAX_CPS",
        "CAPTION_MAX_LINE_LENGTH",
        "CAPTION_DEFAULT_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)


class TestEditorConfig:

    def test_defaults(self):
        config = EditorConfig()
        assert config.history_limit == 50
        assert config.default_format == "SRT"
        assert config.rules == ValidationRules()
        assert config.validate() is None

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CAPTION_HISTORY_LIMIT", "20")
        monkeypatch.setenv("CAPTION_MAX_CPS", "25")
        monkeypatch.setenv("CAPTION_DEFAULT_FORMAT", "vtt")

        config = EditorConfig.from_env()
        assert config.history_limit == 20
        assert config.rules.max_cps == 25.0
        assert config.default_format == "VTT"

    def test_from_env_bad_number(self, monkeypatch):
        monkeypatch.setenv("CAPTION_HISTORY_LIMIT", "lots")
        with pytest.raises(ConfigurationError):
            EditorConfig.from_env()

    def test_from_args_overrides(self):
        args = argparse.Namespace(output_format="vtt", max_cps=19.0, max_line_length=37)
        config = EditorConfig.from_args(args)
        assert config.default_format == "VTT"
        assert config.rules.max_cps == 19.0
        assert config.rules.max_line_length == 37

    def test_from_args_missing_attributes(self):
        config = EditorConfig.from_args(argparse.Namespace())
        assert config.rules == ValidationRules()


class TestValidate:

    def test_bad_history_limit(self):
        assert "History limit" in EditorConfig(history_limit=0).validate()

    def test_bad_format(self):
        assert "Unsupported format" in EditorConfig(default_format="ASS").validate()

    def test_inconsistent_cps(self):
        config = EditorConfig(rules=ValidationRules(max_cps=15.0))
        assert "CPS thresholds" in config.validate()
