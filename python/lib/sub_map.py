#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
sub_map.py
----------

Bounded, optionally reversed views over a `TreeMap`.

A `NavigableSubMap` stores no entries.  It remembers the backing tree, the
two bounds (a key, or ``None`` for an open end, each with an inclusive
flag) and a direction.  Lookups are *absolute* queries against the tree –
``ceiling``, ``floor`` and friends in the tree's own order – clipped to the
bounds; a descending view simply swaps which absolute query answers which
relative one (ceiling ↔ floor, higher ↔ lower, lowest ↔ highest).

Views derived from a view (``head_map`` of a ``sub_map`` ...) are built
directly over the same tree with the narrowed bounds, so every mutation
lands on the one tree that owns the nodes.

``len()`` of a view that is bounded on either side counts by iterating;
only the fully open view answers from the tree's size counter.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar

from navigable_map import NavigableMap
from tree_iterators import TreeIterator, project_key
from tree_node import Node, reverse_order

K = TypeVar("K")
V = TypeVar("V")

_logger = logging.getLogger(__name__)


class NavigableSubMap(NavigableMap[K, V]):
    """
    A live view of the keys of *tree* lying between two bounds.

    Parameters
    ----------
    tree : TreeMap
        The map that owns every node seen through this view.
    lo, hi : key or None
        Lower / upper bound in the tree's own order; ``None`` leaves that end
        open.
    lo_inclusive, hi_inclusive : bool
        Whether a key equal to the bound belongs to the view.
    descending : bool
        Present the range from its highest key to its lowest.

    Raises ``ValueError`` if both bounds are given and ``lo`` sorts after
    ``hi``.
    """

    __slots__ = ("_tree", "_lo", "_lo_inclusive", "_hi", "_hi_inclusive", "_descending")

    def __init__(
        self,
        tree: Any,
        lo: Optional[K],
        lo_inclusive: bool,
        hi: Optional[K],
        hi_inclusive: bool,
        descending: bool = False,
    ) -> None:
        compare = tree._compare
        if lo is not None and hi is not None:
            if compare(lo, hi) > 0:
                raise ValueError(f"from_key {lo!r} > to_key {hi!r}")
        else:
            # Reject bound keys the comparator cannot order.
            if lo is not None:
                compare(lo, lo)
            if hi is not None:
                compare(hi, hi)

        self._tree = tree
        self._lo = lo
        self._lo_inclusive = lo_inclusive
        self._hi = hi
        self._hi_inclusive = hi_inclusive
        self._descending = descending

    # ------------------------------------------------------------------
    #   Range tests
    # ------------------------------------------------------------------
    def _too_low(self, key: K) -> bool:
        if self._lo is None:
            return False
        c = self._tree._compare(key, self._lo)
        return c < 0 or (c == 0 and not self._lo_inclusive)

    def _too_high(self, key: K) -> bool:
        if self._hi is None:
            return False
        c = self._tree._compare(key, self._hi)
        return c > 0 or (c == 0 and not self._hi_inclusive)

    def in_range(self, key: K) -> bool:
        return not self._too_low(key) and not self._too_high(key)

    def _in_closed_range(self, key: K) -> bool:
        compare = self._tree._compare
        return (self._lo is None or compare(key, self._lo) >= 0) and (
            self._hi is None or compare(self._hi, key) >= 0
        )

    def _accepts_bound(self, key: K, inclusive: bool) -> bool:
        """Whether a derived view may use *key* as a bound of this view."""
        self._tree._check_key(key)
        return self.in_range(key) if inclusive else self._in_closed_range(key)

    # ------------------------------------------------------------------
    #   Absolute navigation, in the tree's own order
    # ------------------------------------------------------------------
    def _abs_lowest(self) -> Optional[Node[K, V]]:
        tree = self._tree
        if self._lo is None:
            node = tree._lowest()
        elif self._lo_inclusive:
            node = tree._ceiling(self._lo)
        else:
            node = tree._higher(self._lo)
        return None if node is None or self._too_high(node.key) else node

    def _abs_highest(self) -> Optional[Node[K, V]]:
        tree = self._tree
        if self._hi is None:
            node = tree._highest()
        elif self._hi_inclusive:
            node = tree._floor(self._hi)
        else:
            node = tree._lower(self._hi)
        return None if node is None or self._too_low(node.key) else node

    def _abs_ceiling(self, key: K) -> Optional[Node[K, V]]:
        if self._too_low(key):
            return self._abs_lowest()
        node = self._tree._ceiling(key)
        return None if node is None or self._too_high(node.key) else node

    def _abs_higher(self, key: K) -> Optional[Node[K, V]]:
        if self._too_low(key):
            return self._abs_lowest()
        node = self._tree._higher(key)
        return None if node is None or self._too_high(node.key) else node

    def _abs_floor(self, key: K) -> Optional[Node[K, V]]:
        if self._too_high(key):
            return self._abs_highest()
        node = self._tree._floor(key)
        return None if node is None or self._too_low(node.key) else node

    def _abs_lower(self, key: K) -> Optional[Node[K, V]]:
        if self._too_high(key):
            return self._abs_highest()
        node = self._tree._lower(key)
        return None if node is None or self._too_low(node.key) else node

    def _abs_high_fence(self) -> Optional[Node[K, V]]:
        """First node above the range, or ``None`` when the range is open above."""
        if self._hi is None:
            return None
        if self._hi_inclusive:
            return self._tree._higher(self._hi)
        return self._tree._ceiling(self._hi)

    def _abs_low_fence(self) -> Optional[Node[K, V]]:
        """First node below the range, or ``None`` when the range is open below."""
        if self._lo is None:
            return None
        if self._lo_inclusive:
            return self._tree._lower(self._lo)
        return self._tree._floor(self._lo)

    # ------------------------------------------------------------------
    #   Relative primitives (this view's orientation)
    # ------------------------------------------------------------------
    def _get_node(self, key: K) -> Optional[Node[K, V]]:
        self._tree._check_key(key)
        if not self.in_range(key):
            return None
        return self._tree._get_node(key)

    def _lowest(self) -> Optional[Node[K, V]]:
        return self._abs_highest() if self._descending else self._abs_lowest()

    def _highest(self) -> Optional[Node[K, V]]:
        return self._abs_lowest() if self._descending else self._abs_highest()

    def _ceiling(self, key: K) -> Optional[Node[K, V]]:
        self._tree._check_key(key)
        return self._abs_floor(key) if self._descending else self._abs_ceiling(key)

    def _floor(self, key: K) -> Optional[Node[K, V]]:
        self._tree._check_key(key)
        return self._abs_ceiling(key) if self._descending else self._abs_floor(key)

    def _higher(self, key: K) -> Optional[Node[K, V]]:
        self._tree._check_key(key)
        return self._abs_lower(key) if self._descending else self._abs_higher(key)

    def _lower(self, key: K) -> Optional[Node[K, V]]:
        self._tree._check_key(key)
        return self._abs_higher(key) if self._descending else self._abs_lower(key)

    def _iterator(self, project=project_key, descending: bool = False) -> TreeIterator:
        if self._descending != descending:
            return TreeIterator(
                self._tree, self._abs_highest(), self._abs_low_fence(), True, project
            )
        return TreeIterator(
            self._tree, self._abs_lowest(), self._abs_high_fence(), False, project
        )

    # ------------------------------------------------------------------
    #   Size and mutation
    # ------------------------------------------------------------------
    def _is_open(self) -> bool:
        return self._lo is None and self._hi is None

    def __len__(self) -> int:
        if self._is_open():
            return len(self._tree)
        return sum(1 for _ in self._iterator(project_key))

    @property
    def comparator(self):
        if self._descending:
            return reverse_order(self._tree.comparator)
        return self._tree.comparator

    def put(self, key: K, value: V) -> Optional[V]:
        """Forward to the tree; ``ValueError`` if *key* is outside the view."""
        self._tree._check_key(key)
        if not self.in_range(key):
            raise ValueError(f"key {key!r} out of range")
        return self._tree.put(key, value)

    def remove(self, key: K) -> Optional[V]:
        self._tree._check_key(key)
        if not self.in_range(key):
            return None
        return self._tree.remove(key)

    def clear(self) -> None:
        if self._is_open():
            self._tree.clear()
            return
        it = self._iterator(project_key)
        for _ in it:
            it.remove()

    # ------------------------------------------------------------------
    #   Derived views
    # ------------------------------------------------------------------
    def _derive(self, lo, lo_inclusive, hi, hi_inclusive) -> "NavigableSubMap[K, V]":
        _logger.debug(
            "deriving %s view (%r, %r)",
            "descending" if self._descending else "ascending",
            lo,
            hi,
        )
        return NavigableSubMap(
            self._tree, lo, lo_inclusive, hi, hi_inclusive, self._descending
        )

    def sub_map(
        self, from_key: K, from_inclusive: bool, to_key: K, to_inclusive: bool
    ) -> "NavigableSubMap[K, V]":
        if not self._accepts_bound(from_key, from_inclusive):
            raise ValueError(f"from_key {from_key!r} out of range")
        if not self._accepts_bound(to_key, to_inclusive):
            raise ValueError(f"to_key {to_key!r} out of range")
        if self._descending:
            return self._derive(to_key, to_inclusive, from_key, from_inclusive)
        return self._derive(from_key, from_inclusive, to_key, to_inclusive)

    def head_map(self, to_key: K, inclusive: bool = False) -> "NavigableSubMap[K, V]":
        if not self._accepts_bound(to_key, inclusive):
            raise ValueError(f"to_key {to_key!r} out of range")
        if self._descending:
            return self._derive(to_key, inclusive, self._hi, self._hi_inclusive)
        return self._derive(self._lo, self._lo_inclusive, to_key, inclusive)

    def tail_map(self, from_key: K, inclusive: bool = True) -> "NavigableSubMap[K, V]":
        if not self._accepts_bound(from_key, inclusive):
            raise ValueError(f"from_key {from_key!r} out of range")
        if self._descending:
            return self._derive(self._lo, self._lo_inclusive, from_key, inclusive)
        return self._derive(from_key, inclusive, self._hi, self._hi_inclusive)

    def descending_map(self) -> "NavigableSubMap[K, V]":
        return NavigableSubMap(
            self._tree,
            self._lo,
            self._lo_inclusive,
            self._hi,
            self._hi_inclusive,
            not self._descending,
        )
