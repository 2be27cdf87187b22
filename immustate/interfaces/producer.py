"""Structural update protocol interface."""

from __future__ import annotations

from typing import Any, Protocol

from .binding import Mutator


class ProducerProtocol(Protocol):
    """Protocol defining the structural update capability.

    Given an old value and a mutation function, an implementation returns a
    new value with every unmodified subtree shared with the old one. The old
    value must never be mutated.
    """

    def __call__(self, base: Any, mutator: Mutator) -> Any:
        """Return the value produced by running ``mutator`` against ``base``."""
        ...
