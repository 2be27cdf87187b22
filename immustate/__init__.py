"""
immustate - immutable state container with lifecycle hooks and undo/redo

This package provides:
- ImmutableContainer: holds one immutable value, applies structural-sharing
  updates and publishes each new value to a subscriber
- LifecycleHooks: optional on_initialize / will_update / on_update /
  set_set_state callbacks, composable with combine_hooks
- HistoryManager: linear undo/redo driven purely through the hooks
- produce: copy-on-write drafts for dicts, lists, sets and dataclasses
- logging_hooks / HistoryLog: observer bundles reporting through logging
"""

from __future__ import annotations

from .config import ContainerConfig, load_config
from .container import ImmutableContainer, StateContext
from .drafts import current, is_draft, original, produce, produce_all
from .errors import DraftError, ImmuStateError
from .history import HistoryManager
from .hooks import LifecycleHooks, combine_hooks
from .log_config import configure_from, configure_logger
from .observers import HistoryLog, logging_hooks

__version__ = '0.1.0'
__all__ = [
    'ContainerConfig',
    'DraftError',
    'HistoryLog',
    'HistoryManager',
    'ImmuStateError',
    'ImmutableContainer',
    'LifecycleHooks',
    'StateContext',
    'combine_hooks',
    'configure_from',
    'configure_logger',
    'current',
    'is_draft',
    'load_config',
    'logging_hooks',
    'original',
    'produce',
    'produce_all',
]
