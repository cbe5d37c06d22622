"""An editing session: one caption collection under undo/redo history."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from . import store
from .codec import parse_captions, parse_service_output, serialize_captions
from .config import EditorConfig
from .history import CommitOrigin, HistoryState
from .locator import locate
from .models import CaptionFormat, CaptionStats, Segment, SegmentDraft, SegmentPatch, ValidationResult
from .stats import calculate_stats
from .validator import validate_captions

logger = logging.getLogger(__name__)

Listener = Callable[[List[Segment], CommitOrigin], None]


class CaptionSession:
    """
    Holds the caption collection a host is editing.

    Edits go through the pure functions in ``store`` and are committed to
    the history as ``USER`` changes. Undo and redo notify listeners with
    ``HISTORY_REPLAY`` so a host that echoes the value back via ``sync``
    does not create a new history entry.
    """

    def __init__(
        self,
        captions: Optional[Sequence[Segment]] = None,
        config: Optional[EditorConfig] = None,
    ):
        self.config = config or EditorConfig()
        self._history: HistoryState[List[Segment]] = HistoryState.initial(
            list(captions or []), limit=self.config.history_limit
        )
        self._listeners: List[Listener] = []

    @property
    def captions(self) -> List[Segment]:
        return list(self._history.present)

    @property
    def history(self) -> HistoryState[List[Segment]]:
        return self._history

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register ``listener`` for change notifications.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _apply(self, new_state: HistoryState[List[Segment]], origin: CommitOrigin) -> bool:
        """
        Install ``new_state`` and notify every listener.

        The change is already applied when listeners run, so one that
        raises is logged and the remaining listeners are still notified.
        """
        if new_state is self._history:
            return False

        self._history = new_state
        present = self.captions
        for listener in list(self._listeners):
            try:
                listener(present, origin)
            except Exception:
                logger.exception(f"Caption listener {listener!r} failed")
        return True

    def _edit(self, operation: Callable[[List[Segment]], List[Segment]]) -> bool:
        return self._apply(self._history.commit(operation), CommitOrigin.USER)

    # Loading and export

    def load(self, text: str) -> List[Segment]:
        """Replace the collection with parsed ``text`` and start a fresh history."""
        captions = parse_captions(text)
        self._apply(
            HistoryState.initial(captions, limit=self.config.history_limit),
            CommitOrigin.USER,
        )
        logger.info(f"Session loaded {len(captions)} captions")
        return self.captions

    def replace_all(self, text: str) -> List[Segment]:
        """
        Replace the collection with caption text from a service.

        Used for corrected or regenerated captions; the replacement is a
        single undoable edit.
        """
        captions = parse_service_output(text)
        self._edit(lambda _: captions)
        logger.info(f"Session replaced with {len(captions)} captions")
        return self.captions

    def export(self, fmt: CaptionFormat | str | None = None) -> str:
        """Serialize the current collection, by default in the configured format."""
        return serialize_captions(self._history.present, fmt or self.config.default_format)

    # Editing

    def insert(self, index: int, draft: SegmentDraft) -> bool:
        return self._edit(lambda caps: store.insert_at(caps, index, draft))

    def append(self, draft: SegmentDraft) -> bool:
        return self._edit(lambda caps: store.append(caps, draft))

    def update(self, segment_id: str, patch: SegmentPatch) -> bool:
        return self._edit(lambda caps: store.update(caps, segment_id, patch))

    def remove(self, segment_id: str) -> bool:
        return self._edit(lambda caps: store.remove(caps, segment_id))

    def move(self, from_index: int, to_index: int) -> bool:
        return self._edit(lambda caps: store.move(caps, from_index, to_index))

    def sync(self, captions: Sequence[Segment], origin: CommitOrigin = CommitOrigin.USER) -> bool:
        """
        Accept a collection pushed back by the host.

        Values tagged ``HISTORY_REPLAY`` replace the present without being
        recorded.
        """
        return self._apply(self._history.commit(list(captions), origin), origin)

    # History

    def undo(self) -> bool:
        return self._apply(self._history.undo(), CommitOrigin.HISTORY_REPLAY)

    def redo(self) -> bool:
        return self._apply(self._history.redo(), CommitOrigin.HISTORY_REPLAY)

    def clear_history(self) -> None:
        self._history = self._history.clear()

    # Derived views

    def validate(self) -> ValidationResult:
        return validate_captions(self._history.present, self.config.rules)

    def stats(self) -> CaptionStats:
        return calculate_stats(self._history.present)

    def locate(self, time_ms: float) -> Optional[int]:
        return locate(self._history.present, time_ms)
