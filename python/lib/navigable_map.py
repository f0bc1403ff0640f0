#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
navigable_map.py
----------------

`NavigableMap` is the surface shared by `TreeMap` and its bounded views.

Concrete maps supply a handful of node‑level primitives, each answered in
the map's *own* orientation (for a descending view ``_lowest`` is the
largest key in range):

* ``_get_node(key)``
* ``_lowest()`` / ``_highest()``
* ``_ceiling(key)`` / ``_floor(key)`` / ``_higher(key)`` / ``_lower(key)``
* ``_iterator(project, descending=False)``

plus ``put``, ``remove``, ``clear``, ``__len__``, ``comparator`` and the
view constructors.  Everything else – the ``*_key`` / ``*_entry`` lookups,
polling, the dict protocol and the live views – is written once here.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import MutableMapping
from typing import Any, Generic, Optional, TypeVar

from map_views import EntrySet, KeySet, ValuesCollection
from tree_iterators import TreeIterator, project_key, project_value
from tree_node import Entry, Node, export_entry, key_of, key_or_none

K = TypeVar("K")
V = TypeVar("V")


class NavigableMap(MutableMapping, Generic[K, V]):
    """Abstract ordered mapping with floor/ceiling navigation and range views."""

    __slots__ = ()

    # ------------------------------------------------------------------
    #   Primitives supplied by concrete maps
    # ------------------------------------------------------------------
    @abstractmethod
    def _get_node(self, key: K) -> Optional[Node[K, V]]: ...

    @abstractmethod
    def _lowest(self) -> Optional[Node[K, V]]: ...

    @abstractmethod
    def _highest(self) -> Optional[Node[K, V]]: ...

    @abstractmethod
    def _ceiling(self, key: K) -> Optional[Node[K, V]]: ...

    @abstractmethod
    def _floor(self, key: K) -> Optional[Node[K, V]]: ...

    @abstractmethod
    def _higher(self, key: K) -> Optional[Node[K, V]]: ...

    @abstractmethod
    def _lower(self, key: K) -> Optional[Node[K, V]]: ...

    @abstractmethod
    def _iterator(self, project=project_key, descending: bool = False) -> TreeIterator: ...

    @abstractmethod
    def put(self, key: K, value: V) -> Optional[V]: ...

    @abstractmethod
    def remove(self, key: K) -> Optional[V]: ...

    @abstractmethod
    def sub_map(
        self, from_key: K, from_inclusive: bool, to_key: K, to_inclusive: bool
    ) -> "NavigableMap[K, V]": ...

    @abstractmethod
    def head_map(self, to_key: K, inclusive: bool = False) -> "NavigableMap[K, V]": ...

    @abstractmethod
    def tail_map(self, from_key: K, inclusive: bool = True) -> "NavigableMap[K, V]": ...

    @abstractmethod
    def descending_map(self) -> "NavigableMap[K, V]": ...

    # ------------------------------------------------------------------
    #   dict protocol
    # ------------------------------------------------------------------
    def __getitem__(self, key: K) -> V:
        node = self._get_node(key)
        if node is None:
            raise KeyError(key)
        return node.value

    def __setitem__(self, key: K, value: V) -> None:
        self.put(key, value)

    def __delitem__(self, key: K) -> None:
        if self._get_node(key) is None:
            raise KeyError(key)
        self.remove(key)

    def __contains__(self, key: object) -> bool:
        return self._get_node(key) is not None  # type: ignore[arg-type]

    def __iter__(self) -> TreeIterator:
        """Yield keys in this map's order."""
        return self._iterator(project_key)

    def __reversed__(self) -> TreeIterator:
        return self._iterator(project_key, descending=True)

    def __bool__(self) -> bool:
        return not self.is_empty()

    def get(self, key: K, default: Any = None) -> Any:
        node = self._get_node(key)
        return default if node is None else node.value

    def contains_key(self, key: K) -> bool:
        return key in self

    def contains_value(self, value: Any) -> bool:
        return any(v is value or v == value for v in self._iterator(project_value))

    def is_empty(self) -> bool:
        return self._lowest() is None

    def popitem(self) -> Entry:
        """Remove and return the first entry; ``KeyError`` if the map is empty."""
        entry = self.poll_first_entry()
        if entry is None:
            raise KeyError("popitem(): map is empty")
        return entry

    # ------------------------------------------------------------------
    #   First / last
    # ------------------------------------------------------------------
    def first_entry(self) -> Optional[Entry]:
        return export_entry(self._lowest())

    def last_entry(self) -> Optional[Entry]:
        return export_entry(self._highest())

    def first_key(self) -> K:
        """Return the first key; ``KeyError`` if the map is empty."""
        return key_of(self._lowest())

    def last_key(self) -> K:
        """Return the last key; ``KeyError`` if the map is empty."""
        return key_of(self._highest())

    def poll_first_entry(self) -> Optional[Entry]:
        """Remove and return the first entry, or ``None`` if the map is empty."""
        entry = export_entry(self._lowest())
        if entry is not None:
            self.remove(entry.key)
        return entry

    def poll_last_entry(self) -> Optional[Entry]:
        """Remove and return the last entry, or ``None`` if the map is empty."""
        entry = export_entry(self._highest())
        if entry is not None:
            self.remove(entry.key)
        return entry

    # ------------------------------------------------------------------
    #   Relative lookups
    # ------------------------------------------------------------------
    def lower_entry(self, key: K) -> Optional[Entry]:
        return export_entry(self._lower(key))

    def floor_entry(self, key: K) -> Optional[Entry]:
        return export_entry(self._floor(key))

    def ceiling_entry(self, key: K) -> Optional[Entry]:
        return export_entry(self._ceiling(key))

    def higher_entry(self, key: K) -> Optional[Entry]:
        return export_entry(self._higher(key))

    def lower_key(self, key: K) -> Optional[K]:
        """Greatest key strictly less than *key*, or ``None``."""
        return key_or_none(self._lower(key))

    def floor_key(self, key: K) -> Optional[K]:
        """Greatest key less than or equal to *key*, or ``None``."""
        return key_or_none(self._floor(key))

    def ceiling_key(self, key: K) -> Optional[K]:
        """Least key greater than or equal to *key*, or ``None``."""
        return key_or_none(self._ceiling(key))

    def higher_key(self, key: K) -> Optional[K]:
        """Least key strictly greater than *key*, or ``None``."""
        return key_or_none(self._higher(key))

    def sub_map_range(self, from_key: K, to_key: K) -> "NavigableMap[K, V]":
        """Half‑open view ``[from_key, to_key)``; same as ``sub_map(a, True, b, False)``."""
        return self.sub_map(from_key, True, to_key, False)

    # ------------------------------------------------------------------
    #   Live views
    # ------------------------------------------------------------------
    def keys(self) -> KeySet:
        return KeySet(self)

    def navigable_key_set(self) -> KeySet:
        return KeySet(self)

    def descending_key_set(self) -> KeySet:
        return KeySet(self.descending_map())

    def values(self) -> ValuesCollection:
        return ValuesCollection(self)

    def items(self) -> EntrySet:
        return EntrySet(self)

    def entry_set(self) -> EntrySet:
        return EntrySet(self)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"{type(self).__name__}({{{items}}})"
