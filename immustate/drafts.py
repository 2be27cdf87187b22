"""Copy-on-write drafts and the default structural update.

``produce(base, mutator)`` hands ``mutator`` a draft that looks and behaves
like ``base`` but records writes instead of applying them. When the mutator
returns, only the nodes on the path from each write up to the root are
copied; every untouched subtree of the result is the very same object found
in ``base``. ``base`` itself is never mutated.

Usage:
    >>> state = {'todos': [{'done': False}], 'user': {'name': 'ada'}}
    >>> new = produce(state, lambda s: s['todos'][0].update(done=True))
    >>> new['user'] is state['user']
    True

dicts, lists, sets and dataclass instances are drafted (including their
subclasses); everything else is an opaque leaf.
"""

from __future__ import annotations

import copy
import dataclasses
import inspect
from collections.abc import Iterable, Iterator, MutableMapping, MutableSequence, MutableSet
from typing import Any

from .errors import DraftError
from .interfaces import Mutator

_MISSING = object()


class _Scope:
    """Shared by all drafts of one ``produce`` call."""

    __slots__ = ('revoked',)

    def __init__(self) -> None:
        self.revoked = False


def is_draftable(value: Any) -> bool:
    """True when ``produce`` can wrap ``value`` in a draft."""
    if isinstance(value, (dict, list, set)):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


class _Draft:
    __slots__ = ('_base', '_copy', '_parent', '_children', '_modified', '_scope')

    def __init__(self, base: Any, parent: _Draft | None, scope: _Scope) -> None:
        object.__setattr__(self, '_base', base)
        object.__setattr__(self, '_copy', None)
        object.__setattr__(self, '_parent', parent)
        object.__setattr__(self, '_children', {})
        object.__setattr__(self, '_modified', False)
        object.__setattr__(self, '_scope', scope)

    # ---- bookkeeping ----

    def _check(self) -> None:
        if self._scope.revoked:
            raise DraftError(
                f'Cannot use a revoked {type(self).__name__}; drafts are only valid inside the mutator'
            )

    @property
    def _source(self) -> Any:
        return self._copy if self._modified else self._base

    def _shallow_copy(self) -> Any:
        return copy.copy(self._base)

    def _mark_changed(self) -> None:
        if self._modified:
            return
        object.__setattr__(self, '_copy', self._shallow_copy())
        object.__setattr__(self, '_modified', True)
        if self._parent is not None:
            self._parent._child_changed(self)

    def _child_changed(self, child: _Draft) -> None:
        self._mark_changed()
        self._attach(child)

    def _attach(self, child: _Draft) -> None:
        """Swap ``child``'s base for ``child`` itself inside our copy."""
        raise NotImplementedError

    def _wrap(self, key: Any, value: Any) -> Any:
        if isinstance(value, _Draft) or not is_draftable(value):
            return value
        child = self._children.get(key)
        if child is None or child._base is not value:
            child = _create_draft(value, self, self._scope)
            self._children[key] = child
        return child

    def _finalize(self) -> Any:
        if not self._modified:
            return self._base
        return self._build()

    def _build(self) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._source!r})'

    def __eq__(self, other: object) -> bool:
        if isinstance(other, _Draft):
            other = other._finalize()
        return self._finalize() == other

    __hash__ = None  # type: ignore[assignment]


class DictDraft(_Draft, MutableMapping):
    """Draft of a ``dict``."""

    __slots__ = ()

    def __getitem__(self, key: Any) -> Any:
        self._check()
        return self._wrap(key, self._source[key])

    def __setitem__(self, key: Any, value: Any) -> None:
        self._check()
        raw = self._source.get(key, _MISSING)
        if raw is value or (isinstance(value, _Draft) and value._base is raw and not value._modified):
            return
        self._mark_changed()
        self._copy[key] = value

    def __delitem__(self, key: Any) -> None:
        self._check()
        if key not in self._source:
            raise KeyError(key)
        self._mark_changed()
        del self._copy[key]
        self._children.pop(key, None)

    def __iter__(self) -> Iterator[Any]:
        self._check()
        return iter(list(self._source))

    def __len__(self) -> int:
        self._check()
        return len(self._source)

    def __contains__(self, key: object) -> bool:
        self._check()
        return key in self._source

    def _attach(self, child: _Draft) -> None:
        for key, candidate in self._children.items():
            if candidate is child and self._copy.get(key, _MISSING) is child._base:
                self._copy[key] = child
                return

    def _build(self) -> Any:
        result = copy.copy(self._copy)
        for key, value in self._copy.items():
            if value is not self._base.get(key, _MISSING):
                result[key] = finalize_value(value)
        return result


class ListDraft(_Draft, MutableSequence):
    """Draft of a ``list``."""

    __slots__ = ()

    def __getitem__(self, index: Any) -> Any:
        self._check()
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self._source)))]
        if index < 0:
            index += len(self._source)
        return self._wrap(index, self._source[index])

    def __setitem__(self, index: Any, value: Any) -> None:
        self._check()
        if not isinstance(index, slice) and self._source[index] is value:
            return
        self._mark_changed()
        self._copy[index] = value

    def __delitem__(self, index: Any) -> None:
        self._check()
        self._source[index]  # IndexError before copying
        self._mark_changed()
        del self._copy[index]

    def __len__(self) -> int:
        self._check()
        return len(self._source)

    def insert(self, index: int, value: Any) -> None:
        self._check()
        self._mark_changed()
        self._copy.insert(index, value)

    def sort(self, *, key: Any = None, reverse: bool = False) -> None:
        self._check()
        self._mark_changed()
        self._copy.sort(key=key, reverse=reverse)

    def _attach(self, child: _Draft) -> None:
        for index, candidate in self._children.items():
            if candidate is child and index < len(self._copy) and self._copy[index] is child._base:
                self._copy[index] = child
                return
        for index, value in enumerate(self._copy):
            if value is child._base:
                self._copy[index] = child
                return

    def _build(self) -> Any:
        base_ids = {id(item) for item in self._base}
        result = copy.copy(self._copy)
        for index, value in enumerate(self._copy):
            if id(value) not in base_ids:
                result[index] = finalize_value(value)
        return result


class SetDraft(_Draft, MutableSet):
    """Draft of a ``set``. Members are hashable, so they are never drafted."""

    __slots__ = ()

    def __contains__(self, value: object) -> bool:
        self._check()
        return value in self._source

    def __iter__(self) -> Iterator[Any]:
        self._check()
        return iter(list(self._source))

    def __len__(self) -> int:
        self._check()
        return len(self._source)

    def add(self, value: Any) -> None:
        self._check()
        if value in self._source:
            return
        self._mark_changed()
        self._copy.add(value)

    def discard(self, value: Any) -> None:
        self._check()
        if value not in self._source:
            return
        self._mark_changed()
        self._copy.discard(value)

    def _attach(self, child: _Draft) -> None:
        raise DraftError('set members cannot be drafted')

    def _build(self) -> Any:
        return copy.copy(self._copy)


class DataclassDraft(_Draft):
    """Draft of a dataclass instance; finalized through ``dataclasses.replace``."""

    __slots__ = ()

    def _shallow_copy(self) -> Any:
        return {f.name: getattr(self._base, f.name) for f in dataclasses.fields(self._base)}

    def _field_names(self) -> set[str]:
        return {f.name for f in dataclasses.fields(self._base)}

    def __getattr__(self, name: str) -> Any:
        if name.startswith('__'):
            raise AttributeError(name)
        self._check()
        if name in self._field_names():
            return self._wrap(name, self._source_value(name))
        cls = type(self._base)
        attr = inspect.getattr_static(cls, name, _MISSING)
        if attr is _MISSING:
            return getattr(self._base, name)
        # methods and properties run with the draft as self
        if hasattr(attr, '__get__'):
            return attr.__get__(self, cls)
        return attr

    def __setattr__(self, name: str, value: Any) -> None:
        self._check()
        init_fields = {f.name for f in dataclasses.fields(self._base) if f.init}
        if name not in init_fields:
            raise DraftError(f'{type(self._base).__name__}.{name} is not an init field and cannot be drafted')
        raw = self._source_value(name)
        if raw is value or (isinstance(value, _Draft) and value._base is raw and not value._modified):
            return
        self._mark_changed()
        self._copy[name] = value

    def __delattr__(self, name: str) -> None:
        raise DraftError('dataclass fields cannot be deleted')

    def _source_value(self, name: str) -> Any:
        if self._modified:
            return self._copy[name]
        return getattr(self._base, name)

    def _attach(self, child: _Draft) -> None:
        for name, candidate in self._children.items():
            if candidate is child and self._copy.get(name, _MISSING) is child._base:
                self._copy[name] = child
                return

    def _build(self) -> Any:
        changes = {}
        for name, value in self._copy.items():
            if value is not getattr(self._base, name):
                changes[name] = finalize_value(value)
        if not changes:
            return self._base
        return dataclasses.replace(self._base, **changes)


def _create_draft(value: Any, parent: _Draft | None, scope: _Scope) -> _Draft:
    if isinstance(value, dict):
        return DictDraft(value, parent, scope)
    if isinstance(value, list):
        return ListDraft(value, parent, scope)
    if isinstance(value, set):
        return SetDraft(value, parent, scope)
    return DataclassDraft(value, parent, scope)


def finalize_value(value: Any) -> Any:
    """Resolve any drafts inside ``value`` into plain values.

    Plain containers are only rebuilt when one of their members changed.
    """
    if isinstance(value, _Draft):
        return value._finalize()
    if type(value) is dict:
        resolved = {key: finalize_value(item) for key, item in value.items()}
        if all(resolved[key] is item for key, item in value.items()):
            return value
        return resolved
    if type(value) in (list, tuple):
        items = [finalize_value(item) for item in value]
        if all(new is old for new, old in zip(items, value)):
            return value
        return type(value)(items)
    return value


def is_draft(value: Any) -> bool:
    return isinstance(value, _Draft)


def original(draft: Any) -> Any:
    """Return the value a draft was created from."""
    if not isinstance(draft, _Draft):
        raise DraftError(f'original() expects a draft, got {type(draft).__name__}')
    return draft._base


def current(draft: Any) -> Any:
    """Snapshot the current contents of a live draft as a plain value."""
    if not isinstance(draft, _Draft):
        raise DraftError(f'current() expects a draft, got {type(draft).__name__}')
    draft._check()
    return draft._finalize()


def produce(base: Any, mutator: Mutator) -> Any:
    """Run ``mutator`` against a draft of ``base`` and return the new value.

    If the mutator returns something other than ``None`` (or the draft), that
    value replaces the state, provided the draft was left untouched.

    Raises:
        DraftError: If the mutator both modified the draft and returned a
            replacement value.
    """
    if not is_draftable(base):
        result = mutator(base)
        return base if result is None else result

    scope = _Scope()
    draft = _create_draft(base, None, scope)
    try:
        result = mutator(draft)
        if result is not None and result is not draft:
            if draft._modified:
                raise DraftError('A mutator may either modify its draft or return a new value, not both')
            return finalize_value(result)
        return draft._finalize()
    finally:
        scope.revoked = True


def produce_all(base: Any, mutators: Iterable[Mutator]) -> Any:
    """Apply several mutators in sequence, each one seeing the previous result."""
    value = base
    for mutator in mutators:
        value = produce(value, mutator)
    return value
