"""Subscriber binding protocol interface."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

Subscriber = Callable[[Any], None]
Mutator = Callable[[Any], Any]


@runtime_checkable
class SubscriberBindingProtocol(Protocol):
    """Protocol for anything a UI layer can bind a redraw callback to."""

    @property
    def state(self) -> Any:
        """Latest value held by the binding."""
        ...

    def register_subscriber(self, callback: Subscriber | None) -> None:
        """Replace the active subscriber (``None`` clears it)."""
        ...

    def apply(self, mutator: Mutator) -> None:
        """Apply ``mutator`` and publish the resulting value."""
        ...
