#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
test_map_views.py
-----------------

The live key / value / entry views of a TreeMap and the iterators they hand
out:

* views hold no state of their own – map changes show up immediately
* removal through a view or a view's iterator removes from the map
* iterator ``remove()`` misuse raises ``RuntimeError``
* the key view doubles as a navigable set
"""

import random
import unittest
from collections.abc import ItemsView, KeysView, ValuesView

import tree_map
from tree_iterators import TreeIterator
from tree_map import TreeMap
from tree_node import Entry, MapEntry


def _scenario_tree():
    tm = TreeMap[int, str]()
    for k in (5, 3, 8, 1, 4, 7, 9):
        tm.put(k, str(k))
    return tm


class TestMapViews(unittest.TestCase):
    def setUp(self):
        self._check = tree_map.CHECK_INVARIANTS
        tree_map.CHECK_INVARIANTS = True

    def tearDown(self):
        tree_map.CHECK_INVARIANTS = self._check

    # ------------------------------------------------------------------
    #  Basic view behaviour
    # ------------------------------------------------------------------
    def test_views_follow_key_order(self):
        tm = _scenario_tree()
        self.assertIsInstance(tm.keys(), KeysView)
        self.assertIsInstance(tm.values(), ValuesView)
        self.assertIsInstance(tm.items(), ItemsView)
        self.assertEqual(list(tm.keys()), [1, 3, 4, 5, 7, 8, 9])
        self.assertEqual(list(tm.values()), ["1", "3", "4", "5", "7", "8", "9"])
        self.assertEqual(list(tm.entry_set())[0], Entry(1, "1"))
        self.assertEqual(len(tm.items()), 7)

    def test_views_are_live(self):
        tm = _scenario_tree()
        keys, values, items = tm.keys(), tm.values(), tm.items()
        tm[6] = "six"
        del tm[1]
        self.assertEqual(len(keys), 7)
        self.assertIn(6, keys)
        self.assertNotIn(1, keys)
        self.assertIn("six", values)
        self.assertIn((6, "six"), items)
        self.assertNotIn((6, "6"), items)
        self.assertNotIn("not a pair", items)

    def test_set_operations(self):
        tm = _scenario_tree()
        self.assertEqual(tm.keys() & {1, 2, 3}, {1, 3})
        self.assertTrue(tm.keys() == {1, 3, 4, 5, 7, 8, 9})

    def test_entry_iteration_yields_live_entries(self):
        tm = _scenario_tree()
        for entry in tm.items():
            self.assertIsInstance(entry, MapEntry)
            self.assertEqual(entry.value, str(entry.key))
            key, value = entry
            self.assertEqual(entry, (key, value))
            self.assertEqual(entry, Entry(key, value))
            self.assertEqual(hash(entry), hash((key, value)))

    def test_set_value_through_entry_set(self):
        tm = _scenario_tree()
        for entry in tm.items():
            if entry.key % 2:
                self.assertEqual(entry.set_value(entry.key * 10), str(entry.key))
        self.assertEqual(tm[3], 30)
        self.assertEqual(tm[4], "4")
        self.assertEqual(list(tm.values()), [10, 30, "4", 50, 70, "8", 90])

        it = tm.sub_map(4, True, 8, True).entry_set().iterator()
        entry = next(it)
        self.assertEqual(entry.set_value("four"), "4")
        self.assertEqual(tm[4], "four")
        for entry in it:
            entry.set_value(None)
        self.assertEqual([tm[k] for k in (5, 7, 8)], [None, None, None])
        self.assertEqual(tm[9], 90)

    def test_navigation_entries_are_snapshots(self):
        tm = _scenario_tree()
        entry = tm.floor_entry(6)
        self.assertIsInstance(entry, Entry)
        self.assertFalse(hasattr(entry, "set_value"))
        tm[5] = "five"
        self.assertEqual(entry, (5, "5"))

    # ------------------------------------------------------------------
    #  Removal through views
    # ------------------------------------------------------------------
    def test_key_set_removal(self):
        tm = _scenario_tree()
        keys = tm.navigable_key_set()
        keys.remove(4)
        self.assertNotIn(4, tm)
        with self.assertRaises(KeyError):
            keys.remove(4)
        keys.discard(4)
        keys.discard(5)
        self.assertEqual(list(tm), [1, 3, 7, 8, 9])
        keys.clear()
        self.assertEqual(len(tm), 0)

    def test_values_removal(self):
        tm = TreeMap({1: "x", 2: "y", 3: "x"})
        tm.values().remove("x")
        self.assertEqual(list(tm.items()), [(2, "y"), (3, "x")])
        with self.assertRaises(ValueError):
            tm.values().remove("z")
        tm.values().clear()
        self.assertFalse(tm)

    def test_entry_set_removal(self):
        tm = _scenario_tree()
        entries = tm.entry_set()
        with self.assertRaises(KeyError):
            entries.remove((3, "wrong"))
        self.assertIn(3, tm)
        entries.remove((3, "3"))
        entries.discard((4, "nope"))
        entries.discard((4, "4"))
        self.assertEqual(list(tm), [1, 5, 7, 8, 9])

    # ------------------------------------------------------------------
    #  Iterators
    # ------------------------------------------------------------------
    def test_iterator_protocol(self):
        tm = TreeMap({2: "b", 1: "a"})
        it = tm.keys().iterator()
        self.assertIsInstance(it, TreeIterator)
        self.assertIs(iter(it), it)
        self.assertTrue(it.has_next())
        self.assertEqual(next(it), 1)
        self.assertEqual(next(it), 2)
        self.assertFalse(it.has_next())
        with self.assertRaises(StopIteration):
            next(it)

    def test_iterator_remove_misuse(self):
        tm = _scenario_tree()
        it = iter(tm.keys())
        with self.assertRaises(RuntimeError):
            it.remove()
        next(it)
        it.remove()
        with self.assertRaises(RuntimeError):
            it.remove()
        self.assertEqual(next(it), 3)
        self.assertEqual(len(tm), 6)

    def test_iterator_removes_every_key(self):
        tm = TreeMap((k, k) for k in random.Random(3).sample(range(500), 500))
        it = tm.values().iterator()
        seen = []
        for value in it:
            seen.append(value)
            it.remove()
        self.assertEqual(seen, list(range(500)))
        self.assertEqual(len(tm), 0)
        tm.validate()

    def test_iterator_removes_selected_keys(self):
        rng = random.Random(11)
        keys = rng.sample(range(2_000), 600)
        tm = TreeMap((k, str(k)) for k in keys)
        reference = {k: str(k) for k in keys}

        it = iter(tm.items())
        for key, value in it:
            self.assertEqual(value, reference[key])
            if rng.random() < 0.5:
                it.remove()
                del reference[key]

        self.assertEqual(list(tm.items()), sorted(reference.items()))
        tm.validate()

    def test_descending_iterator_removal(self):
        tm = TreeMap((k, k) for k in range(100))
        it = tm.keys().descending_iterator()
        seen = []
        for key in it:
            seen.append(key)
            if key % 5:
                it.remove()
        self.assertEqual(seen, list(range(99, -1, -1)))
        self.assertEqual(list(tm), list(range(0, 100, 5)))
        tm.validate()

    # ------------------------------------------------------------------
    #  Navigable key set
    # ------------------------------------------------------------------
    def test_key_set_navigation(self):
        tm = _scenario_tree()
        keys = tm.navigable_key_set()
        self.assertEqual(keys.first(), 1)
        self.assertEqual(keys.last(), 9)
        self.assertEqual(keys.lower(4), 3)
        self.assertEqual(keys.floor(6), 5)
        self.assertEqual(keys.ceiling(6), 7)
        self.assertEqual(keys.higher(9), None)
        self.assertIsNone(keys.comparator)
        self.assertEqual(list(reversed(keys)), [9, 8, 7, 5, 4, 3, 1])

        self.assertEqual(keys.poll_first(), 1)
        self.assertEqual(keys.poll_last(), 9)
        self.assertEqual(list(tm), [3, 4, 5, 7, 8])
        tm.clear()
        self.assertIsNone(keys.poll_first())
        with self.assertRaises(KeyError):
            keys.first()

    def test_key_subsets(self):
        tm = _scenario_tree()
        keys = tm.keys()
        self.assertEqual(list(keys.sub_set(3, True, 8, False)), [3, 4, 5, 7])
        self.assertEqual(list(keys.head_set(5)), [1, 3, 4])
        self.assertEqual(list(keys.head_set(5, True)), [1, 3, 4, 5])
        self.assertEqual(list(keys.tail_set(5, False)), [7, 8, 9])
        self.assertEqual(list(keys.descending_set()), [9, 8, 7, 5, 4, 3, 1])
        self.assertEqual(list(tm.descending_key_set()), [9, 8, 7, 5, 4, 3, 1])
        self.assertEqual(
            list(keys.descending_set().head_set(4)), [9, 8, 7, 5]
        )
        self.assertEqual(list(keys.tail_set(4).descending_iterator()), [9, 8, 7, 5, 4])

        keys.head_set(4).clear()
        self.assertEqual(list(tm), [4, 5, 7, 8, 9])

    def test_repr(self):
        tm = TreeMap({1: "a"})
        self.assertEqual(repr(tm.keys()), "KeySet([1])")
        self.assertEqual(repr(tm.values()), "ValuesCollection(['a'])")
        self.assertEqual(repr(tm.items()), "EntrySet([1='a'])")


if __name__ == "__main__":
    unittest.main(verbosity=2)
