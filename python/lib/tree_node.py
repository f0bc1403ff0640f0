#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
tree_node.py
------------

Building blocks shared by the tree map, its views and its iterators:

* `Node`  – a tree cell (key, value, colour, two owned children)
* `Entry` – an immutable ``(key, value)`` snapshot handed out to callers
* `MapEntry` – a live ``(key, value)`` pair yielded by entry-set iteration
* `natural_order` / `reverse_order` – three‑way comparison functions

Nodes carry **no parent reference**; the tree that owns them is the only
thing that ever re‑links children.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Callable, Generic, NamedTuple, Optional, TypeVar

K = TypeVar("K")
V = TypeVar("V")

Comparator = Callable[[Any, Any], int]

# ----------------------------------------------------------------------
#  Node colour constants – using simple booleans is fastest
# ----------------------------------------------------------------------
RED = True
BLACK = False


class Node(Generic[K, V]):
    """Internal tree cell – not meant to be used directly by callers."""

    __slots__ = ("key", "value", "color", "left", "right")

    def __init__(self, key: K, value: V, color: bool = RED) -> None:
        self.key = key
        self.value = value
        self.color = color
        self.left: Optional[Node[K, V]] = None
        self.right: Optional[Node[K, V]] = None

    def __repr__(self) -> str:
        col = "R" if self.color == RED else "B"
        return f"<{col} {self.key!r}:{self.value!r}>"


class Entry(NamedTuple):
    """A ``(key, value)`` pair detached from the tree."""

    key: Any
    value: Any

    def __repr__(self) -> str:
        return f"{self.key!r}={self.value!r}"


class MapEntry(Sequence):
    """
    A live ``(key, value)`` pair bound to a tree node.

    Handed out while iterating an entry set.  It compares, hashes and unpacks
    like a 2‑tuple; ``set_value`` writes straight into the map.
    """

    __slots__ = ("_node",)

    def __init__(self, node: Node) -> None:
        self._node = node

    @property
    def key(self) -> Any:
        return self._node.key

    @property
    def value(self) -> Any:
        return self._node.value

    def set_value(self, value: Any) -> Any:
        """Replace the mapped value and return the previous one."""
        old_value = self._node.value
        self._node.value = value
        return old_value

    def __len__(self) -> int:
        return 2

    def __getitem__(self, index):
        return (self._node.key, self._node.value)[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (tuple, MapEntry)):
            return tuple(self) == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._node.key, self._node.value))

    def __repr__(self) -> str:
        return f"{self._node.key!r}={self._node.value!r}"


def is_red(node: Optional[Node]) -> bool:
    return node is not None and node.color == RED


def is_black(node: Optional[Node]) -> bool:
    return node is None or node.color == BLACK


def export_entry(node: Optional[Node]) -> Optional[Entry]:
    """Snapshot *node* as an `Entry`, or ``None`` for a missing node."""
    if node is None:
        return None
    return Entry(node.key, node.value)


def key_or_none(node: Optional[Node]) -> Any:
    return None if node is None else node.key


def key_of(node: Optional[Node]) -> Any:
    """Return the key of *node*; ``KeyError`` when there is no such node."""
    if node is None:
        raise KeyError("map is empty")
    return node.key


# ----------------------------------------------------------------------
#  Orderings
# ----------------------------------------------------------------------
def natural_order(a: Any, b: Any) -> int:
    """Three‑way comparison using the keys' own ``<`` operator."""
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


def reverse_order(compare: Optional[Comparator] = None) -> Comparator:
    """Return a comparison function imposing the reverse of *compare*."""
    forward = compare if compare is not None else natural_order

    def reversed_compare(a: Any, b: Any) -> int:
        return forward(b, a)

    return reversed_compare
