#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
tree_iterators.py
-----------------

A single cursor type that walks a `TreeMap` in either direction.

The traversal strategy (ascending / descending, whole map / bounded range)
and what each step yields (key, value or live `MapEntry`) are fixed when the cursor
is built, so the cursor never has to inspect the view that created it.

Bounded traversals stop at a *fence*: the key object of the first node
outside the range.  The fence is compared by **identity**, never by value;
unbounded traversals use the `UNBOUNDED` sentinel, which no key can be.

Typical usage
~~~~~~~~~~~~~
    it = tree.navigable_key_set().iterator()
    for key in it:
        if key % 2:
            it.remove()      # removes from the backing tree
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Optional, TypeVar

from tree_node import MapEntry, Node

T = TypeVar("T")

# Unmatchable fence for traversals with no upper (or lower) boundary.
UNBOUNDED = object()


def project_key(node: Node) -> Any:
    return node.key


def project_value(node: Node) -> Any:
    return node.value


def project_entry(node: Node) -> MapEntry:
    return MapEntry(node)


class TreeIterator(Generic[T]):
    """
    Iterator over the nodes of a live tree, supporting ``remove()``.

    Parameters
    ----------
    tree : TreeMap
        The map owning the nodes; used for stepping and for removal.
    first : Node or None
        The first node to yield (``None`` for an empty traversal).
    fence : Node or None
        First node *past* the range, or ``None`` if the traversal runs to
        the end of the tree.
    descending : bool
        Step with the predecessor instead of the successor.
    project : callable
        Turns a node into the value handed to the caller.
    """

    __slots__ = (
        "_tree",
        "_next",
        "_fence",
        "_last_returned",
        "_descending",
        "_step",
        "_project",
    )

    def __init__(
        self,
        tree: Any,
        first: Optional[Node],
        fence: Optional[Node] = None,
        descending: bool = False,
        project: Callable[[Node], T] = project_key,
    ) -> None:
        self._tree = tree
        self._next = first
        self._fence = UNBOUNDED if fence is None else fence.key
        self._last_returned: Optional[Node] = None
        self._descending = descending
        self._step = tree._predecessor if descending else tree._successor
        self._project = project

    def __iter__(self) -> "TreeIterator[T]":
        return self

    def has_next(self) -> bool:
        node = self._next
        return node is not None and node.key is not self._fence

    def __next__(self) -> T:
        node = self._next
        if node is None or node.key is self._fence:
            raise StopIteration
        self._next = self._step(node)
        self._last_returned = node
        return self._project(node)

    def remove(self) -> None:
        """
        Remove the element returned by the last ``next()`` from the tree.

        Raises ``RuntimeError`` if ``next()`` has not been called yet, or if
        ``remove()`` was already called for the current element.
        """
        node = self._last_returned
        if node is None:
            raise RuntimeError("remove() requires a preceding call to next()")
        # A node with a right subtree keeps its slot and takes over its
        # successor's key and value, so that slot is the next one to visit.
        if not self._descending and node.right is not None:
            self._next = node
        self._tree.remove(node.key)
        self._last_returned = None
