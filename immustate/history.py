"""Linear undo/redo built on the lifecycle hook contract."""

from __future__ import annotations

import logging
from typing import Any

from .hooks import LifecycleHooks
from .interfaces import Subscriber


class HistoryManager:
    """Records every value a container holds and steps back and forth through them.

    Wire it in with ``ImmutableContainer(default, manager.hooks)``. The
    container then reports its initial value and every update, and hands over
    its replay function, which ``undo``/``redo`` use to push past values back
    through the subscriber.

    History is linear: appending after an undo discards the redo entries.
    """

    def __init__(self) -> None:
        self._history: list[Any] = []
        self._index = -1
        self._replay: Subscriber | None = None
        self.logger = logging.getLogger(__name__)

    @property
    def hooks(self) -> LifecycleHooks:
        return LifecycleHooks(
            on_initialize=self.append,
            on_update=self.append,
            set_set_state=self.capture_replay,
        )

    @property
    def index(self) -> int:
        """Cursor into the history, ``-1`` while it is empty."""
        return self._index

    @property
    def history_size(self) -> int:
        return len(self._history)

    @property
    def history(self) -> tuple[Any, ...]:
        return tuple(self._history)

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._history) - 1

    def append(self, value: Any) -> None:
        self._index += 1
        # drop stale redo entries
        del self._history[self._index:]
        self._history.append(value)
        self.logger.debug('History now holds %d entries (index=%d)', len(self._history), self._index)

    def capture_replay(self, setter: Subscriber) -> None:
        self._replay = setter

    def undo(self) -> None:
        if not self.can_undo:
            return
        self._index -= 1
        self._push(self._history[self._index])

    def redo(self) -> None:
        if not self.can_redo:
            return
        self._index += 1
        self._push(self._history[self._index])

    def _push(self, value: Any) -> None:
        if self._replay is None:
            self.logger.debug('No replay setter captured; cursor moved to %d without replay', self._index)
            return
        self._replay(value)
