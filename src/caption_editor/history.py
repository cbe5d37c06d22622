"""Undo/redo history over any editable value."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Generic, Tuple, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_HISTORY_LIMIT = 50


class CommitOrigin(Enum):
    """Where a new present value came from."""
    USER = "user"                       # direct edit, recorded
    HISTORY_REPLAY = "history-replay"   # produced by undo/redo, never recorded


@dataclass(frozen=True)
class HistoryState(Generic[T]):
    """
    Immutable past/present/future stacks.

    Every operation returns a new state; the old one stays valid, so a
    caller can hold on to any revision without copying.

    ``past`` is ordered oldest first and holds at most ``limit`` entries.
    ``future`` is ordered next-redo first.
    """

    present: T
    past: Tuple[T, ...] = ()
    future: Tuple[T, ...] = ()
    limit: int = DEFAULT_HISTORY_LIMIT

    def __post_init__(self):
        if self.limit < 1:
            raise ValueError(f"History limit must be at least 1, got {self.limit}")

    @classmethod
    def initial(cls, value: T, limit: int = DEFAULT_HISTORY_LIMIT) -> "HistoryState[T]":
        return cls(present=value, limit=limit)

    @property
    def can_undo(self) -> bool:
        return len(self.past) > 0

    @property
    def can_redo(self) -> bool:
        return len(self.future) > 0

    def commit(
        self,
        next_value: Union[T, Callable[[T], T]],
        origin: CommitOrigin = CommitOrigin.USER,
    ) -> "HistoryState[T]":
        """
        Make ``next_value`` the present value.

        Args:
            next_value: The new value, or a function of the current present
            origin: ``USER`` records the change and clears redo;
                ``HISTORY_REPLAY`` swaps the present without recording

        Returns:
            The new state, or ``self`` when nothing changed
        """
        value = next_value(self.present) if callable(next_value) else next_value

        if value == self.present:
            return self

        if origin is CommitOrigin.HISTORY_REPLAY:
            return replace(self, present=value)

        past = (self.past + (self.present,))[-self.limit:]
        return replace(self, past=past, present=value, future=())

    def undo(self) -> "HistoryState[T]":
        """Step back one revision; no-op when there is nothing to undo."""
        if not self.past:
            logger.debug("Undo ignored, history is empty")
            return self

        return replace(
            self,
            past=self.past[:-1],
            present=self.past[-1],
            future=(self.present,) + self.future,
        )

    def redo(self) -> "HistoryState[T]":
        """Step forward one revision; no-op when there is nothing to redo."""
        if not self.future:
            logger.debug("Redo ignored, nothing to redo")
            return self

        return replace(
            self,
            past=(self.past + (self.present,))[-self.limit:],
            present=self.future[0],
            future=self.future[1:],
        )

    def clear(self) -> "HistoryState[T]":
        """Forget past and future, keeping the present value."""
        return replace(self, past=(), future=())
