"""Ready-made hook bundles that observe a container without driving it."""

from __future__ import annotations

import logging
from typing import Any

from .hooks import LifecycleHooks
from .interfaces import Mutator


def _mutator_name(mutator: Mutator) -> str:
    return getattr(mutator, '__name__', None) or repr(mutator)


def logging_hooks(logger: logging.Logger | None = None, level: int = logging.INFO) -> LifecycleHooks:
    """Hooks that log the initial state, each pending update and each new state."""
    log = logger or logging.getLogger('immustate.observers')

    def on_initialize(state: Any) -> None:
        log.log(level, 'Container initialized with state: %r', state)

    def will_update(state: Any, mutator: Mutator) -> None:
        name = _mutator_name(mutator)
        log.log(level, 'Will apply update %s to: %r', name, state, extra={'update': name})

    def on_update(state: Any) -> None:
        log.log(level, 'Updated state: %r', state)

    return LifecycleHooks(on_initialize=on_initialize, will_update=will_update, on_update=on_update)


class HistoryLog:
    """Keeps every state a container reported and logs the running history."""

    def __init__(self, logger: logging.Logger | None = None):
        self._entries: list[Any] = []
        self.logger = logger or logging.getLogger(__name__)

    @property
    def entries(self) -> tuple[Any, ...]:
        return tuple(self._entries)

    @property
    def hooks(self) -> LifecycleHooks:
        return LifecycleHooks(on_initialize=self.record, on_update=self.record)

    def record(self, state: Any) -> None:
        self._entries.append(state)
        self.logger.debug('State history (%d): %r', len(self._entries), self._entries)
