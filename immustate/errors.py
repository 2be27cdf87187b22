"""Exception types raised by immustate."""

from __future__ import annotations


class ImmuStateError(Exception):
    """Base class for all immustate errors."""


class DraftError(ImmuStateError):
    """Raised when a draft is used outside of (or against) its producer."""
