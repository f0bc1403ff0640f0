#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
map_views.py
------------

Live views over a navigable map (a `TreeMap` or one of its bounded views).

None of the views stores anything.  Length, membership, iteration and
removal are forwarded to the map the view was created from, so a key
removed through a view (or through a view's iterator) is gone from the map
immediately, and vice versa.

* `KeySet`           – ``map.keys()``; also a navigable set
* `ValuesCollection` – ``map.values()``
* `EntrySet`         – ``map.items()``; yields live `MapEntry` pairs
"""

from __future__ import annotations

from collections.abc import ItemsView, KeysView, ValuesView
from typing import Any, Optional

from tree_iterators import TreeIterator, project_entry, project_key, project_value


class KeySet(KeysView):
    """
    The keys of a navigable map, in the map's order.

    Besides the read‑only ``Set`` protocol this supports removal
    (``discard``, ``remove``, ``poll_first``, ``clear``) and the navigable‑set
    queries (``floor``, ``ceiling``, ``sub_set`` ...).  It does not support
    adding keys.
    """

    __slots__ = ()

    def __iter__(self) -> TreeIterator:
        return self._mapping._iterator(project_key)

    def __reversed__(self) -> TreeIterator:
        return self._mapping._iterator(project_key, descending=True)

    def iterator(self) -> TreeIterator:
        return iter(self)

    def descending_iterator(self) -> TreeIterator:
        return reversed(self)

    def __contains__(self, key: object) -> bool:
        return self._mapping.contains_key(key)

    # ------------------------------------------------------------------
    #   Removal
    # ------------------------------------------------------------------
    def discard(self, key: Any) -> None:
        self._mapping.remove(key)

    def remove(self, key: Any) -> None:
        """Remove *key* from the backing map; ``KeyError`` if it is absent."""
        if not self._mapping.contains_key(key):
            raise KeyError(key)
        self._mapping.remove(key)

    def clear(self) -> None:
        self._mapping.clear()

    def poll_first(self) -> Optional[Any]:
        entry = self._mapping.poll_first_entry()
        return None if entry is None else entry.key

    def poll_last(self) -> Optional[Any]:
        entry = self._mapping.poll_last_entry()
        return None if entry is None else entry.key

    # ------------------------------------------------------------------
    #   Navigation
    # ------------------------------------------------------------------
    @property
    def comparator(self):
        return self._mapping.comparator

    def first(self) -> Any:
        return self._mapping.first_key()

    def last(self) -> Any:
        return self._mapping.last_key()

    def lower(self, key: Any) -> Optional[Any]:
        return self._mapping.lower_key(key)

    def floor(self, key: Any) -> Optional[Any]:
        return self._mapping.floor_key(key)

    def ceiling(self, key: Any) -> Optional[Any]:
        return self._mapping.ceiling_key(key)

    def higher(self, key: Any) -> Optional[Any]:
        return self._mapping.higher_key(key)

    # ------------------------------------------------------------------
    #   Derived sets
    # ------------------------------------------------------------------
    def sub_set(
        self, from_key: Any, from_inclusive: bool, to_key: Any, to_inclusive: bool
    ) -> "KeySet":
        return KeySet(
            self._mapping.sub_map(from_key, from_inclusive, to_key, to_inclusive)
        )

    def head_set(self, to_key: Any, inclusive: bool = False) -> "KeySet":
        return KeySet(self._mapping.head_map(to_key, inclusive))

    def tail_set(self, from_key: Any, inclusive: bool = True) -> "KeySet":
        return KeySet(self._mapping.tail_map(from_key, inclusive))

    def descending_set(self) -> "KeySet":
        return KeySet(self._mapping.descending_map())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class ValuesCollection(ValuesView):
    """The values of a navigable map, ordered by their keys."""

    __slots__ = ()

    def __iter__(self) -> TreeIterator:
        return self._mapping._iterator(project_value)

    def iterator(self) -> TreeIterator:
        return iter(self)

    def remove(self, value: Any) -> None:
        """
        Remove the first mapping (in key order) whose value equals *value*.
        Raises ``ValueError`` if no mapping holds that value.
        """
        it = iter(self)
        for candidate in it:
            if candidate is value or candidate == value:
                it.remove()
                return
        raise ValueError(f"{value!r} not in values")

    def clear(self) -> None:
        self._mapping.clear()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class EntrySet(ItemsView):
    """The ``(key, value)`` entries of a navigable map, in key order."""

    __slots__ = ()

    def __iter__(self) -> TreeIterator:
        return self._mapping._iterator(project_entry)

    def iterator(self) -> TreeIterator:
        return iter(self)

    def __contains__(self, item: object) -> bool:
        try:
            key, value = item  # type: ignore[misc]
        except (TypeError, ValueError):
            return False
        node = self._mapping._get_node(key)
        return node is not None and (node.value is value or node.value == value)

    def discard(self, item: Any) -> None:
        if item in self:
            self._mapping.remove(item[0])

    def remove(self, item: Any) -> None:
        """Remove the entry; ``KeyError`` unless both key and value match."""
        if item not in self:
            raise KeyError(item)
        self._mapping.remove(item[0])

    def clear(self) -> None:
        self._mapping.clear()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"
