#!/usr/bin/env python3
"""
Tests for peer set intersection
"""

import unittest

from nodecmp.comparison_components.intersector import intersect, intersect_all


class TestIntersect(unittest.TestCase):
    """Test the two-set intersection"""

    def test_common_keys_only(self):
        left = {"a:1": True, "b:2": False, "c:3": True}
        right = {"b:2": True, "c:3": True, "d:4": False}
        self.assertEqual(set(intersect(left, right)), {"b:2", "c:3"})

    def test_idempotent(self):
        peers = {"a:1": True, "b:2": False}
        self.assertEqual(intersect(peers, peers), peers)

    def test_flag_taken_from_left(self):
        left = {"a:1": True}
        right = {"a:1": False}
        self.assertEqual(intersect(left, right), {"a:1": True})
        self.assertEqual(intersect(right, left), {"a:1": False})

    def test_commutative_on_keys(self):
        left = {"a:1": True, "b:2": False}
        right = {"b:2": True, "c:3": False}
        self.assertEqual(set(intersect(left, right)), set(intersect(right, left)))

    def test_empty_operand(self):
        peers = {"a:1": True}
        self.assertEqual(intersect(peers, {}), {})
        self.assertEqual(intersect({}, peers), {})

    def test_inputs_not_mutated(self):
        left = {"a:1": True, "b:2": False}
        right = {"a:1": False}
        result = intersect(left, right)
        result["z:9"] = True
        self.assertEqual(left, {"a:1": True, "b:2": False})
        self.assertEqual(right, {"a:1": False})


class TestIntersectAll(unittest.TestCase):
    """Test the left-fold over many sets"""

    def test_three_sets(self):
        sets = [
            {"x:1": True, "y:1": False, "z:1": True},
            {"y:1": True, "z:1": False, "w:1": True},
            {"y:1": True, "z:1": True},
        ]
        self.assertEqual(intersect_all(sets), {"y:1": False, "z:1": True})

    def test_two_sets_match_pairwise(self):
        left = {"a:1": True, "b:2": False}
        right = {"b:2": True}
        self.assertEqual(intersect_all([left, right]), intersect(left, right))

    def test_single_set_copied(self):
        peers = {"a:1": True}
        result = intersect_all([peers])
        self.assertEqual(result, peers)
        self.assertIsNot(result, peers)

    def test_any_empty_set_empties_result(self):
        self.assertEqual(intersect_all([{"a:1": True}, {}, {"a:1": True}]), {})

    def test_accepts_generator(self):
        self.assertEqual(intersect_all(s for s in [{"a:1": True}, {"a:1": False}]), {"a:1": True})

    def test_no_sets(self):
        with self.assertRaises(ValueError):
            intersect_all([])


if __name__ == "__main__":
    unittest.main(verbosity=2)
