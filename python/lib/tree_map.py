#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
tree_map.py
-----------

An ordered mapping backed by a **left‑leaning red‑black** binary search
tree.  It behaves like a mutable mapping (key → value) while guaranteeing
O(log n) insert, delete and lookup, and adds the navigable‑map contract:
ordered iteration in both directions, floor / ceiling / higher / lower
lookups and live, bounded range views.

Features
~~~~~~~~
* `tree[key] = value` / `tree.put(key, value)`  – insert / replace
* `value = tree[key]` / `tree.get(key)`          – lookup
* `del tree[key]` / `tree.remove(key)`           – delete
* `tree.first_key()`, `tree.last_key()`, `tree.poll_first_entry()` ...
* `tree.floor_key(k)`, `tree.ceiling_key(k)`, `tree.lower_key(k)`,
  `tree.higher_key(k)` and their `*_entry` counterparts
* `tree.sub_map(a, True, b, False)` (or `tree.sub_map_range(a, b)`),
  `tree.head_map(b)`, `tree.tail_map(a)`,
  `tree.descending_map()` – live views; writes go through to the tree
* `tree.keys()`, `tree.values()`, `tree.items()` – live views whose
  iterators support `remove()`; `items()` yields entries with `set_value()`
* `tree.validate()` – sanity‑check that the red‑black invariants hold

Nodes keep no parent pointer.  Every mutating helper takes a subtree and
returns the (possibly rotated) subtree that replaces it; successor and
predecessor steps re‑descend from the root when there is no subtree to
walk into.

Keys may not be ``None``; values may be anything.  Set the environment
variable ``TREEMAP_CHECK_INVARIANTS=1`` (or the module attribute
`CHECK_INVARIANTS`) to validate the whole tree after every mutation.

Typical usage
~~~~~~~~~~~~~
>>> from tree_map import TreeMap
>>> tm = TreeMap()
>>> for k in (5, 3, 8, 1, 4, 7, 9):
...     tm[k] = str(k)
>>> tm.first_key(), tm.last_key()
(1, 9)
>>> tm.remove(5)
'5'
>>> tm.floor_key(5), tm.ceiling_key(5)
(4, 7)
>>> list(tm.head_map(7))
[1, 3, 4]
"""

from __future__ import annotations

import logging
import os
from typing import Any, Iterable, Optional, Tuple, TypeVar, Union, Mapping

from navigable_map import NavigableMap
from sub_map import NavigableSubMap
from tree_iterators import TreeIterator, project_key
from tree_node import (
    BLACK,
    RED,
    Comparator,
    Entry,
    Node,
    export_entry,
    is_black,
    is_red,
    natural_order,
)

K = TypeVar("K")
V = TypeVar("V")

_logger = logging.getLogger(__name__)

CHECK_INVARIANTS = os.getenv("TREEMAP_CHECK_INVARIANTS", "").strip().lower() in (
    "1",
    "true",
    "yes",
)


class TreeMap(NavigableMap[K, V]):
    """
    A mutable, ordered mapping implemented with a left‑leaning red‑black tree.

    The public API mimics the built‑in ``dict`` where appropriate and adds
    the navigable operations of an ordered map.

    Parameters
    ----------
    items : mapping or iterable of (key, value)   optional
        Inserted one ``put`` at a time (O(n log n)).
    comparator : callable(a, b) -> int   optional
        Three‑way comparison imposing a total order on the keys.  When
        omitted the keys' natural ``<`` ordering is used, or the comparator
        of *items* if that is itself an ordered map.
    """

    __slots__ = ("_root", "_size", "_comparator", "_compare")

    # ------------------------------------------------------------------
    #   Construction / basic container protocol
    # ------------------------------------------------------------------
    def __init__(
        self,
        items: Optional[Union[Mapping[K, V], Iterable[Tuple[K, V]]]] = None,
        comparator: Optional[Comparator] = None,
    ) -> None:
        if comparator is None and isinstance(items, NavigableMap):
            comparator = items.comparator
        self._comparator = comparator
        self._compare: Comparator = comparator if comparator is not None else natural_order
        self._root: Optional[Node[K, V]] = None
        self._size: int = 0

        if items is not None:
            self.update(items)
            _logger.debug("built %s with %d entries", type(self).__name__, self._size)

    @property
    def comparator(self) -> Optional[Comparator]:
        """The comparison function, or ``None`` for natural ordering."""
        return self._comparator

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._root is None

    def clear(self) -> None:
        _logger.debug("clearing %d entries", self._size)
        self._root = None
        self._size = 0

    # ------------------------------------------------------------------
    #   Helper look‑up (internal)
    # ------------------------------------------------------------------
    @staticmethod
    def _check_key(key: Any) -> None:
        if key is None:
            raise TypeError("None is not a valid key")

    def _get_node(self, key: K) -> Optional[Node[K, V]]:
        """Return the node that holds *key* or ``None`` if not found."""
        self._check_key(key)
        compare = self._compare
        node = self._root
        while node is not None:
            c = compare(key, node.key)
            if c < 0:
                node = node.left
            elif c > 0:
                node = node.right
            else:
                return node
        return None

    # ------------------------------------------------------------------
    #   Insertion
    # ------------------------------------------------------------------
    def put(self, key: K, value: V) -> Optional[V]:
        """
        Insert *key* with *value* or replace the existing value.

        Returns the previous value, or ``None`` if the key was new.
        """
        node = self._get_node(key)
        if node is not None:
            # Key already exists → replace value, no tree‑structure change.
            old_value = node.value
            node.value = value
            return old_value

        self._root = self._insert(self._root, key, value)
        self._root.color = BLACK
        self._size += 1
        self._after_mutation()
        return None

    def _insert(self, node: Optional[Node[K, V]], key: K, value: V) -> Node[K, V]:
        """Insert a key known to be absent below *node*; return the new subtree root."""
        if node is None:
            return Node(key, value, RED)

        if self._compare(key, node.key) < 0:
            node.left = self._insert(node.left, key, value)
        else:
            node.right = self._insert(node.right, key, value)
        return self._balance(node)

    # ------------------------------------------------------------------
    #   Deletion
    # ------------------------------------------------------------------
    def remove(self, key: K) -> Optional[V]:
        """
        Delete *key* and return its value.

        A missing key is not an error: the tree is left alone and ``None``
        is returned.
        """
        node = self._get_node(key)
        if node is None:
            return None
        old_value = node.value

        self._prepare_root()
        self._root = self._delete(self._root, key)
        self._finish_delete()
        return old_value

    def poll_first_entry(self) -> Optional[Entry]:
        if self._root is None:
            return None
        entry = export_entry(self._min_node(self._root))
        self._prepare_root()
        self._root = self._delete_min(self._root)
        self._finish_delete()
        return entry

    def poll_last_entry(self) -> Optional[Entry]:
        if self._root is None:
            return None
        entry = export_entry(self._max_node(self._root))
        self._prepare_root()
        self._root = self._delete_max(self._root)
        self._finish_delete()
        return entry

    def _prepare_root(self) -> None:
        # With both children black the root turns red so the descent can
        # always borrow a red link.
        root = self._root
        if is_black(root.left) and is_black(root.right):
            root.color = RED

    def _finish_delete(self) -> None:
        self._size -= 1
        if self._root is not None:
            self._root.color = BLACK
        self._after_mutation()

    def _delete(self, node: Node[K, V], key: K) -> Optional[Node[K, V]]:
        """Delete *key* (known to be present) below *node*; return the new subtree root."""
        if self._compare(key, node.key) < 0:
            if is_black(node.left) and is_black(node.left.left):
                node = self._move_red_left(node)
            node.left = self._delete(node.left, key)
        else:
            if is_red(node.left):
                node = self._rotate_right(node)
            if node.right is None and self._compare(key, node.key) == 0:
                return None
            if is_black(node.right) and is_black(node.right.left):
                node = self._move_red_right(node)
            if self._compare(key, node.key) == 0:
                # Keep this node; it takes over its successor's content and the
                # successor is unlinked from the right subtree instead.
                successor = self._min_node(node.right)
                node.key = successor.key
                node.value = successor.value
                node.right = self._delete_min(node.right)
            else:
                node.right = self._delete(node.right, key)
        return self._balance(node)

    def _delete_min(self, node: Node[K, V]) -> Optional[Node[K, V]]:
        if node.left is None:
            return None
        if is_black(node.left) and is_black(node.left.left):
            node = self._move_red_left(node)
        node.left = self._delete_min(node.left)
        return self._balance(node)

    def _delete_max(self, node: Node[K, V]) -> Optional[Node[K, V]]:
        if is_red(node.left):
            node = self._rotate_right(node)
        if node.right is None:
            return None
        if is_black(node.right) and is_black(node.right.left):
            node = self._move_red_right(node)
        node.right = self._delete_max(node.right)
        return self._balance(node)

    # ------------------------------------------------------------------
    #   Rotations, colour flips and fix‑ups
    # ------------------------------------------------------------------
    def _rotate_left(self, node: Node[K, V]) -> Node[K, V]:
        """Make a right‑leaning red link lean to the left."""
        x = node.right
        node.right = x.left
        x.left = node
        x.color = node.color
        node.color = RED
        return x

    def _rotate_right(self, node: Node[K, V]) -> Node[K, V]:
        """Make a left‑leaning red link lean to the right."""
        x = node.left
        node.left = x.right
        x.right = node
        x.color = node.color
        node.color = RED
        return x

    def _flip_colors(self, node: Node[K, V]) -> None:
        node.color = not node.color
        node.left.color = not node.left.color
        node.right.color = not node.right.color

    def _move_red_left(self, node: Node[K, V]) -> Node[K, V]:
        """
        Assuming *node* is red and both ``node.left`` and ``node.left.left``
        are black, make ``node.left`` or one of its children red.
        """
        self._flip_colors(node)
        if is_red(node.right.left):
            node.right = self._rotate_right(node.right)
            node = self._rotate_left(node)
            self._flip_colors(node)
        return node

    def _move_red_right(self, node: Node[K, V]) -> Node[K, V]:
        """
        Assuming *node* is red and both ``node.right`` and ``node.right.left``
        are black, make ``node.right`` or one of its children red.
        """
        self._flip_colors(node)
        if is_red(node.left.left):
            node = self._rotate_right(node)
            self._flip_colors(node)
        return node

    def _balance(self, node: Node[K, V]) -> Node[K, V]:
        """Restore the left‑leaning red‑black shape at *node* on the way up."""
        if is_red(node.right) and is_black(node.left):
            node = self._rotate_left(node)
        if is_red(node.left) and is_red(node.left.left):
            node = self._rotate_right(node)
        if is_red(node.left) and is_red(node.right):
            self._flip_colors(node)
        return node

    # ------------------------------------------------------------------
    #   Minimum / maximum helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _min_node(node: Node[K, V]) -> Node[K, V]:
        """Return the node with the smallest key in the subtree rooted at *node*."""
        while node.left is not None:
            node = node.left
        return node

    @staticmethod
    def _max_node(node: Node[K, V]) -> Node[K, V]:
        """Return the node with the largest key in the subtree rooted at *node*."""
        while node.right is not None:
            node = node.right
        return node

    def _lowest(self) -> Optional[Node[K, V]]:
        return None if self._root is None else self._min_node(self._root)

    def _highest(self) -> Optional[Node[K, V]]:
        return None if self._root is None else self._max_node(self._root)

    # ------------------------------------------------------------------
    #   Relative look‑ups: one descent, remembering the best candidate
    # ------------------------------------------------------------------
    def _lower(self, key: K) -> Optional[Node[K, V]]:
        self._check_key(key)
        node, best = self._root, None
        while node is not None:
            if self._compare(key, node.key) <= 0:
                node = node.left
            else:
                best, node = node, node.right
        return best

    def _floor(self, key: K) -> Optional[Node[K, V]]:
        self._check_key(key)
        node, best = self._root, None
        while node is not None:
            c = self._compare(key, node.key)
            if c == 0:
                return node
            if c < 0:
                node = node.left
            else:
                best, node = node, node.right
        return best

    def _ceiling(self, key: K) -> Optional[Node[K, V]]:
        self._check_key(key)
        node, best = self._root, None
        while node is not None:
            c = self._compare(key, node.key)
            if c == 0:
                return node
            if c > 0:
                node = node.right
            else:
                best, node = node, node.left
        return best

    def _higher(self, key: K) -> Optional[Node[K, V]]:
        self._check_key(key)
        node, best = self._root, None
        while node is not None:
            if self._compare(key, node.key) >= 0:
                node = node.right
            else:
                best, node = node, node.left
        return best

    # ------------------------------------------------------------------
    #   Successor / predecessor (no parent links)
    # ------------------------------------------------------------------
    def _successor(self, node: Node[K, V]) -> Optional[Node[K, V]]:
        """Return the in‑order successor of *node*, or ``None`` for the last node."""
        if node.right is not None:
            return self._min_node(node.right)

        # Re-descend from the root; the last node where we turned left is it.
        current, candidate = self._root, None
        while current is not None and current is not node:
            if self._compare(node.key, current.key) < 0:
                candidate, current = current, current.left
            else:
                current = current.right
        return candidate

    def _predecessor(self, node: Node[K, V]) -> Optional[Node[K, V]]:
        """Return the in‑order predecessor of *node*, or ``None`` for the first node."""
        if node.left is not None:
            return self._max_node(node.left)

        current, candidate = self._root, None
        while current is not None and current is not node:
            if self._compare(node.key, current.key) < 0:
                current = current.left
            else:
                candidate, current = current, current.right
        return candidate

    def _iterator(self, project=project_key, descending: bool = False) -> TreeIterator:
        if descending:
            return TreeIterator(self, self._highest(), None, True, project)
        return TreeIterator(self, self._lowest(), None, False, project)

    # ------------------------------------------------------------------
    #   Range views
    # ------------------------------------------------------------------
    def sub_map(
        self, from_key: K, from_inclusive: bool, to_key: K, to_inclusive: bool
    ) -> NavigableSubMap[K, V]:
        """
        View of the keys between *from_key* and *to_key*.

        Raises ``ValueError`` if *from_key* sorts after *to_key*.
        """
        self._check_key(from_key)
        self._check_key(to_key)
        return NavigableSubMap(self, from_key, from_inclusive, to_key, to_inclusive)

    def head_map(self, to_key: K, inclusive: bool = False) -> NavigableSubMap[K, V]:
        """View of the keys less than (or equal to, if *inclusive*) *to_key*."""
        self._check_key(to_key)
        return NavigableSubMap(self, None, True, to_key, inclusive)

    def tail_map(self, from_key: K, inclusive: bool = True) -> NavigableSubMap[K, V]:
        """View of the keys greater than (or equal to, if *inclusive*) *from_key*."""
        self._check_key(from_key)
        return NavigableSubMap(self, from_key, inclusive, None, True)

    def descending_map(self) -> NavigableSubMap[K, V]:
        """View of the whole map in reverse key order."""
        return NavigableSubMap(self, None, True, None, True, descending=True)

    # ------------------------------------------------------------------
    #   Validation/checking utilities – useful for debugging
    # ------------------------------------------------------------------
    def _after_mutation(self) -> None:
        if not CHECK_INVARIANTS:
            return
        try:
            self.validate()
        except AssertionError:
            _logger.error("invariant check failed after mutation", exc_info=True)
            raise

    def validate(self) -> None:
        """
        Verify that the tree satisfies all left‑leaning red‑black invariants.
        Raises ``AssertionError`` with a descriptive message if something is broken.
        """
        compare = self._compare

        def dfs(
            node: Optional[Node[K, V]],
            lo: Optional[Node[K, V]],
            hi: Optional[Node[K, V]],
        ) -> Tuple[int, int]:
            """Return ``(black_height, node_count)`` of the subtree at *node*."""
            if node is None:
                return 1, 0

            if lo is not None:
                assert compare(node.key, lo.key) > 0, "BST order violated (key too small)"
            if hi is not None:
                assert compare(node.key, hi.key) < 0, "BST order violated (key too large)"

            assert not is_red(node.right), "Red link leans right"
            if is_red(node):
                assert not is_red(node.left), "Red node has red left child"

            left_black, left_count = dfs(node.left, lo, node)
            right_black, right_count = dfs(node.right, node, hi)
            assert left_black == right_black, "Black-height mismatch"

            bh = left_black + (1 if node.color == BLACK else 0)
            return bh, left_count + right_count + 1

        assert is_black(self._root), "Root is not black"
        _, count = dfs(self._root, None, None)
        assert count == self._size, f"Size is {self._size} but tree holds {count} nodes"
