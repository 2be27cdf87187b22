"""Immutable state container."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .config import ContainerConfig
from .drafts import produce
from .hooks import LifecycleHooks, SetterHook
from .interfaces import Mutator, ProducerProtocol, Subscriber


@dataclass(frozen=True)
class StateContext:
    """Read-only view handed to UI collaborators: the latest state plus ``apply``."""

    state: Any
    apply: Mutator


class ImmutableContainer:
    """Owns a single immutable value and publishes every new version of it.

    Updates go through ``apply(mutator)``: the producer derives the next value
    from the current one, the registered subscriber receives it, and the
    lifecycle hooks observe it. Everything runs synchronously on the caller's
    thread, in that order.
    """

    def __init__(
        self,
        default_value: Any,
        hooks: LifecycleHooks | None = None,
        *,
        producer: ProducerProtocol | None = None,
        config: ContainerConfig | None = None,
    ):
        self.hooks = hooks or LifecycleHooks()
        self.config = config or ContainerConfig()
        self._produce = producer or produce

        self._current = default_value
        self._subscriber: Subscriber | None = None
        self._initialized = False

        self.logger = logging.getLogger(__name__)

        self.expose_external_setter(self.hooks.offer_setter)

    @property
    def state(self) -> Any:
        """Latest value held by the container."""
        return self._current

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def has_subscriber(self) -> bool:
        return self._subscriber is not None

    def context(self) -> StateContext:
        return StateContext(state=self._current, apply=self.apply)

    def initialize(self, default_value: Any) -> None:
        """Set the baseline value and publish it to the subscriber, if any.

        ``on_initialize`` fires on the first call only, after the subscriber.
        """
        self._current = default_value
        if self._subscriber is not None:
            self._subscriber(self._current)
        if not self._initialized:
            self._initialized = True
            self.hooks.initialized(self._current)

    def register_subscriber(self, callback: Subscriber | None) -> None:
        """Replace the active subscriber. ``None`` unbinds it."""
        self._subscriber = callback

    def bind(self, callback: Subscriber) -> None:
        """Initialize with the current value and register ``callback``.

        Mirrors a UI binding being mounted: the first bind fires
        ``on_initialize``, later binds only swap the subscriber.
        """
        if not self._initialized:
            self.initialize(self._current)
        self.register_subscriber(callback)

    def apply(self, mutator: Mutator) -> None:
        """Derive the next value with ``mutator`` and publish it."""
        if not self._is_live():
            self.logger.debug(
                'Ignoring update %s: container holds no value',
                getattr(mutator, '__name__', repr(mutator)),
            )
            return

        self.hooks.before_update(self._current, mutator)
        next_value = self._produce(self._current, mutator)
        self._current = next_value
        if self._subscriber is not None:
            self._subscriber(next_value)
        self.hooks.updated(next_value)

    def replay(self, value: Any) -> None:
        """Push ``value`` straight to the subscriber, bypassing producer and hooks.

        Used by hook owners (undo/redo) to drive the container back to a past
        value. Without a subscriber the value is dropped and the misuse logged.
        """
        if self._subscriber is None:
            self.logger.error(
                'Trying to override state with %r but no subscriber has been registered yet',
                value,
            )
            return
        self._current = value
        self._subscriber(value)

    def expose_external_setter(self, register: SetterHook) -> None:
        """Hand ``register`` the container's replay function.

        The constructor routes this through ``hooks.offer_setter``, which
        forwards to ``set_set_state`` when that hook is configured.
        """
        register(self.replay)

    def _is_live(self) -> bool:
        if self.config.legacy_truthiness:
            return bool(self._current)
        return self._current is not None
