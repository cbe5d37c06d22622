"""Tests for caption data models."""

import dataclasses

import pytest
from caption_editor.text_utils import characters_per_second
from caption_editor.models import (
    CaptionFormat,
    CaptionStats,
    Segment,
    SegmentDraft,
    SegmentPatch,
    ValidationResult,
)


class TestSegment:

    def test_creation(self):
        seg = Segment("caption-1", 1000, 3500, "Hello world")
        assert seg.id == "caption-1"
        assert seg.text == "Hello world"

    def test_derived_properties(self):
        seg = Segment("caption-1", 1000, 3000, "Two\nlines")
        assert seg.duration == 2000
        assert seg.duration_seconds == 2.0
        assert seg.char_count == 9
        assert seg.lines == ["Two", "lines"]
        assert seg.cps == 4.5

    def test_cps_with_zero_duration(self):
        assert Segment("x", 1000, 1000, "Hi").cps == float("inf")

    def test_cps_matches_text_helper(self):
        seg = Segment("x", 2000, 1000, "Inverted")
        assert seg.cps == characters_per_second(seg.text, seg.duration) == float("inf")
        seg = seg.copy(end=3000)
        assert seg.cps == characters_per_second("Inverted", 1000) == 8.0

    def test_frozen(self):
        seg = Segment("caption-1", 0, 1000, "Test")
        with pytest.raises(dataclasses.FrozenInstanceError):
            seg.text = "Changed"

    def test_copy(self):
        seg = Segment("caption-1", 1000, 3500, "Hello")
        copied = seg.copy(text="World", end=5000)

        # Original unchanged
        assert seg.text == "Hello"
        assert seg.end == 3500

        assert copied.text == "World"
        assert copied.end == 5000
        assert copied.start == seg.start

    def test_copy_keeps_id(self):
        seg = Segment("caption-1", 0, 1000, "x")
        assert seg.copy(id="other").id == "caption-1"


class TestSegmentDraft:

    def test_to_segment_generates_id(self):
        draft = SegmentDraft(0, 1000, "Hi")
        a = draft.to_segment()
        b = draft.to_segment()
        assert a.id.startswith("caption-")
        assert a.id != b.id
        assert (a.start, a.end, a.text) == (0, 1000, "Hi")


class TestSegmentPatch:

    def test_apply_only_set_fields(self):
        seg = Segment("caption-1", 1000, 2000, "Old")
        patched = SegmentPatch(text="New").apply(seg)
        assert patched == Segment("caption-1", 1000, 2000, "New")

    def test_empty_patch(self):
        seg = Segment("caption-1", 1000, 2000, "Old")
        patch = SegmentPatch()
        assert patch.is_empty
        assert patch.apply(seg) is seg

    def test_zero_is_a_value(self):
        seg = Segment("caption-1", 1000, 2000, "Old")
        assert SegmentPatch(start=0).apply(seg).start == 0


class TestValidationResult:

    def test_is_valid(self):
        assert ValidationResult().is_valid
        assert ValidationResult(warnings=["w"]).is_valid
        assert not ValidationResult(errors=["e"]).is_valid

    def test_merge(self):
        merged = ValidationResult(errors=["e1"]).merge(ValidationResult(errors=["e2"], warnings=["w"]))
        assert merged.errors == ["e1", "e2"]
        assert merged.warnings == ["w"]


class TestCaptionFormat:

    def test_coerce(self):
        assert CaptionFormat.coerce("srt") is CaptionFormat.SRT
        assert CaptionFormat.coerce(" VTT ") is CaptionFormat.VTT
        assert CaptionFormat.coerce(CaptionFormat.VTT) is CaptionFormat.VTT
        assert CaptionFormat.coerce("ass") is CaptionFormat.UNKNOWN

    def test_separator_and_suffix(self):
        assert CaptionFormat.SRT.separator == ","
        assert CaptionFormat.VTT.separator == "."
        assert CaptionFormat.VTT.suffix == ".vtt"


class TestCaptionStats:

    def test_defaults_are_zero(self):
        assert CaptionStats().to_dict() == {
            "count": 0,
            "total_duration": 0,
            "average_duration": 0.0,
            "average_cps": 0.0,
            "longest": 0,
            "shortest": 0,
        }
