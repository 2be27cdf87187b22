"""Lifecycle hook bundle consumed by the container."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .interfaces import Mutator, Subscriber

StateHook = Callable[[Any], None]
WillUpdateHook = Callable[[Any, Mutator], None]
SetterHook = Callable[[Subscriber], None]


@dataclass(frozen=True)
class LifecycleHooks:
    """Optional callbacks invoked at fixed points of the update lifecycle.

    Every field defaults to ``None``, and an absent hook is a no-op:

    - ``on_initialize(state)``: first initialization of the container.
    - ``will_update(state, mutator)``: before an update is computed. It only
      observes; changing the state from here has no effect on the update.
    - ``on_update(state)``: after the new state reached the subscriber.
    - ``set_set_state(setter)``: once, at container construction, with the
      container's replay function.
    """

    on_initialize: StateHook | None = None
    will_update: WillUpdateHook | None = None
    on_update: StateHook | None = None
    set_set_state: SetterHook | None = None

    def initialized(self, state: Any) -> None:
        if self.on_initialize is not None:
            self.on_initialize(state)

    def before_update(self, state: Any, mutator: Mutator) -> None:
        if self.will_update is not None:
            self.will_update(state, mutator)

    def updated(self, state: Any) -> None:
        if self.on_update is not None:
            self.on_update(state)

    def offer_setter(self, setter: Subscriber) -> None:
        if self.set_set_state is not None:
            self.set_set_state(setter)


def _chain(callbacks: list[Callable[..., None]]) -> Callable[..., None] | None:
    if not callbacks:
        return None
    if len(callbacks) == 1:
        return callbacks[0]

    def chained(*args: Any) -> None:
        for callback in callbacks:
            callback(*args)

    return chained


def combine_hooks(*bundles: LifecycleHooks | None) -> LifecycleHooks:
    """Merge several hook bundles into one.

    Each combined hook calls the matching hook of every bundle, in the order
    the bundles were given. A hook missing from every bundle stays ``None``.
    """
    present = [bundle for bundle in bundles if bundle is not None]
    return LifecycleHooks(
        on_initialize=_chain([b.on_initialize for b in present if b.on_initialize is not None]),
        will_update=_chain([b.will_update for b in present if b.will_update is not None]),
        on_update=_chain([b.on_update for b in present if b.on_update is not None]),
        set_set_state=_chain([b.set_set_state for b in present if b.set_set_state is not None]),
    )
