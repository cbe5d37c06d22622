"""Tests for the editing session."""

import logging

import pytest
from caption_editor.config import EditorConfig
from caption_editor.exceptions import FormatError
from caption_editor.history import CommitOrigin
from caption_editor.models import SegmentDraft, SegmentPatch
from caption_editor.session import CaptionSession


SRT_TEXT = """1
00:00:01,000 --> 00:00:03,000
Hello there

2
00:00:04,000 --> 00:00:06,000
General Kenobi
"""


@pytest.fixture
def session():
    s = CaptionSession()
    s.load(SRT_TEXT)
    return s


class TestLoadAndExport:

    def test_load(self, session):
        assert [c.text for c in session.captions] == ["Hello there", "General Kenobi"]
        assert not session.can_undo

    def test_load_invalid_keeps_previous(self, session):
        before = session.captions
        with pytest.raises(FormatError):
            session.load("not captions")
        assert session.captions == before

    def test_export_default_and_explicit(self, session):
        assert session.export().startswith("1\n00:00:01,000 --> 00:00:03,000\n")
        assert session.export("vtt").startswith("WEBVTT\n\n")

    def test_export_uses_configured_format(self):
        s = CaptionSession(config=EditorConfig(default_format="VTT"))
        s.load(SRT_TEXT)
        assert s.export().startswith("WEBVTT")


class TestEditing:

    def test_edits_are_undoable(self, session):
        first_id = session.captions[0].id
        assert session.update(first_id, SegmentPatch(text="Hi"))
        assert session.captions[0].text == "Hi"

        assert session.undo()
        assert session.captions[0].text == "Hello there"
        assert session.redo()
        assert session.captions[0].text == "Hi"

    def test_insert_remove_move(self, session):
        session.insert(1, SegmentDraft(3100, 3900, "Middle"))
        assert [c.text for c in session.captions] == ["Hello there", "Middle", "General Kenobi"]

        session.move(2, 0)
        assert session.captions[0].text == "General Kenobi"

        session.remove(session.captions[0].id)
        assert len(session.captions) == 2

        session.append(SegmentDraft(7000, 8000, "End"))
        assert session.captions[-1].text == "End"

    def test_stale_id_is_noop(self, session):
        assert not session.update("caption-gone", SegmentPatch(text="x"))
        assert not session.remove("caption-gone")
        assert not session.can_undo

    def test_replace_all_is_one_edit(self, session):
        session.replace_all("```srt\n1\n00:00:01,000 --> 00:00:03,000\nCorrected\n```")
        assert [c.text for c in session.captions] == ["Corrected"]

        session.undo()
        assert len(session.captions) == 2

    def test_derived_views(self, session):
        assert session.validate().is_valid
        assert session.stats().count == 2
        assert session.locate(4500) == 1
        assert session.locate(3500) is None

    def test_history_limit_from_config(self):
        s = CaptionSession(config=EditorConfig(history_limit=2))
        for i in range(5):
            s.append(SegmentDraft(i * 1000, i * 1000 + 500, str(i)))
        assert len(s.history.past) == 2


class TestNotifications:

    def test_origins(self, session):
        events = []
        session.subscribe(lambda caps, origin: events.append((len(caps), origin)))

        session.append(SegmentDraft(7000, 8000, "More"))
        session.undo()
        session.redo()

        assert events == [
            (3, CommitOrigin.USER),
            (2, CommitOrigin.HISTORY_REPLAY),
            (3, CommitOrigin.HISTORY_REPLAY),
        ]

    def test_echoed_replay_not_recorded(self, session):
        # A host that writes every notification straight back
        unsubscribe = session.subscribe(lambda caps, origin: session.sync(caps, origin))

        session.append(SegmentDraft(7000, 8000, "More"))
        session.undo()
        assert session.can_redo
        assert len(session.history.past) == 0

        session.redo()
        assert not session.can_redo
        assert len(session.history.past) == 1
        unsubscribe()

    def test_unsubscribe(self, session):
        events = []
        unsubscribe = session.subscribe(lambda caps, origin: events.append(origin))
        unsubscribe()
        session.append(SegmentDraft(7000, 8000, "More"))
        assert events == []

    def test_noop_does_not_notify(self, session):
        events = []
        session.subscribe(lambda caps, origin: events.append(origin))
        session.undo()
        session.move(10, 0)
        assert events == []

    def test_failing_listener_does_not_block_others(self, session, caplog):
        def broken(caps, origin):
            raise RuntimeError("listener bug")

        events = []
        session.subscribe(broken)
        session.subscribe(lambda caps, origin: events.append((len(caps), origin)))

        with caplog.at_level(logging.ERROR, logger="caption_editor.session"):
            assert session.append(SegmentDraft(7000, 8000, "More"))

        assert events == [(3, CommitOrigin.USER)]
        assert len(session.captions) == 3
        assert session.can_undo
        assert "listener bug" in caplog.text
