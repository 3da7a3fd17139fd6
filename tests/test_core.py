"""
Test suite for the collection combinators.

This module tests:
- map_coll with default, explicit-kind and caller-supplied outputs
- map_c, map_can and map_list
- The quantifiers some, every, not_any and not_every
- Argument checking and exception propagation
"""

import operator
import unittest
from collections import deque

from lockstep import (
    EmptyInputSetError,
    Kind,
    NullArgumentError,
    SortedSet,
    UnsupportedContainerKindError,
    every,
    map_c,
    map_can,
    map_coll,
    map_list,
    not_any,
    not_every,
    some,
)


def inc(x):
    return x + 1


class TestMapColl(unittest.TestCase):
    """Test map_coll."""

    def test_single_container(self):
        """One container maps element by element."""
        self.assertEqual(map_coll(inc, [1, 2, 3]), [2, 3, 4])

    def test_results_of_another_type(self):
        """The callable may return values of any type."""
        self.assertEqual(map_coll(str, [1, 2, 3]), ["1", "2", "3"])

    def test_several_containers(self):
        """Several containers are combined position by position."""
        self.assertEqual(map_coll(operator.add, [1, 2, 3], [10, 20]), [11, 22])
        self.assertEqual(
            map_coll(lambda a, b, c: a + b + c, [1, 2], [3, 4], [5, 6]),
            [9, 12],
        )

    def test_preserves_input_shape(self):
        """Without kind or into the output mirrors the first input."""
        result = map_coll(inc, deque([1, 2]))
        self.assertIsInstance(result, deque)
        self.assertEqual(list(result), [2, 3])

        result = map_coll(inc, {1, 2, 3})
        self.assertIsInstance(result, set)
        self.assertEqual(result, {2, 3, 4})

    def test_immutable_input_resolves_by_category(self):
        """Tuples and strings map into a fresh list."""
        self.assertEqual(map_coll(inc, (1, 2)), [2, 3])
        self.assertEqual(map_coll(str.upper, "ab"), ["A", "B"])

    def test_explicit_kind(self):
        """kind selects the output container."""
        self.assertEqual(map_coll(inc, (3, 1, 2), kind=list), [4, 2, 3])

        result = map_coll(inc, [3, 1, 2, 3], kind="sorted-set")
        self.assertIsInstance(result, SortedSet)
        self.assertEqual(list(result), [2, 3, 4])

        result = map_coll(inc, [1, 2], kind=Kind.DEQUE)
        self.assertIsInstance(result, deque)

    def test_into_is_returned(self):
        """Results are appended to into, which is returned."""
        target = [0]
        result = map_coll(inc, [1, 2], into=target)
        self.assertIs(result, target)
        self.assertEqual(target, [0, 2, 3])

    def test_empty_input(self):
        """An empty input yields an empty container without calling fn."""
        calls = []
        result = map_coll(calls.append, [])
        self.assertEqual(result, [])
        self.assertEqual(calls, [])

    def test_inputs_unchanged(self):
        """map_coll never mutates its inputs."""
        first, second = [1, 2, 3], [4, 5]
        map_coll(operator.mul, first, second)
        self.assertEqual(first, [1, 2, 3])
        self.assertEqual(second, [4, 5])

    def test_argument_errors(self):
        """Bad arguments fail before fn is called."""
        with self.assertRaises(NullArgumentError) as ctx:
            map_coll(None, [1])
        self.assertEqual(ctx.exception.name, "fn")

        with self.assertRaises(EmptyInputSetError):
            map_coll(inc)

        with self.assertRaises(NullArgumentError) as ctx:
            map_coll(inc, [1], None)
        self.assertEqual(ctx.exception.name, "colls[1]")

        with self.assertRaises(TypeError):
            map_coll(42, [1])

        with self.assertRaises(TypeError):
            map_coll(inc, [1], kind=list, into=[])

        with self.assertRaises(UnsupportedContainerKindError):
            map_coll(inc, [1], kind="no-such-kind")

    def test_into_without_append(self):
        """An into with no append operation fails before any call."""
        calls = []

        def record(x):
            calls.append(x)
            return x

        with self.assertRaises(TypeError):
            map_coll(record, [1, 2], into=(1,))
        self.assertEqual(calls, [])

    def test_callback_exception_propagates(self):
        """Exceptions raised by fn are not wrapped."""

        def boom(x):
            raise KeyError(x)

        with self.assertRaises(KeyError):
            map_coll(boom, [1])


class TestMapC(unittest.TestCase):
    """Test map_c."""

    def test_side_effects(self):
        """fn runs once per position and nothing is returned."""
        copy = []
        self.assertIsNone(map_c(copy.append, [1, 2, 3]))
        self.assertEqual(copy, [1, 2, 3])

    def test_several_containers(self):
        """Calls stop at the shortest container."""
        seen = []
        map_c(lambda a, b: seen.append((a, b)), "abc", [1, 2])
        self.assertEqual(seen, [("a", 1), ("b", 2)])

    def test_argument_errors(self):
        """A missing fn or container is rejected."""
        with self.assertRaises(NullArgumentError):
            map_c(None, [1])
        with self.assertRaises(EmptyInputSetError):
            map_c(print)


class TestMapCan(unittest.TestCase):
    """Test map_can."""

    def test_flattens_inner_results(self):
        """Inner results are concatenated into one container."""
        result = map_can(inc, Kind.SEQUENCE, [[1, 2], [3, 4], [5, 6]])
        self.assertEqual(result, [2, 3, 4, 5, 6, 7])

    def test_several_outer_collections(self):
        """Outer collections zip first, then their inner containers zip."""
        result = map_can(operator.add, "sequence", [[1, 2], [3]], [[10, 20], [30]])
        self.assertEqual(result, [11, 22, 33])

    def test_kind_decides_output(self):
        """The kind argument selects the flattened container."""
        result = map_can(inc, set, [[1, 2], [2, 3]])
        self.assertEqual(result, {2, 3, 4})

    def test_argument_errors(self):
        """map_can needs a kind and non-null inner containers."""
        with self.assertRaises(NullArgumentError) as ctx:
            map_can(inc, None, [[1]])
        self.assertEqual(ctx.exception.name, "kind")

        with self.assertRaises(NullArgumentError):
            map_can(inc, list, [[1], None])

    def test_null_inner_container_before_any_call(self):
        """A None inner container fails before fn runs on earlier ones."""
        calls = []

        def record(x):
            calls.append(x)
            return x

        with self.assertRaises(NullArgumentError) as ctx:
            map_can(record, list, [[1, 2], None])
        self.assertEqual(ctx.exception.name, "colls[0][1]")
        self.assertEqual(calls, [])


class TestMapList(unittest.TestCase):
    """Test map_list."""

    def test_suffix_sums(self):
        """fn sees each successive suffix."""
        self.assertEqual(map_list(sum, [1, 2, 3, 4]), [10, 9, 7, 4])

    def test_suffix_strings(self):
        """Suffix views can be turned into other values."""
        result = map_list(lambda view: "".join(view), ["a", "b", "c"])
        self.assertEqual(result, ["abc", "bc", "c"])

    def test_several_lists(self):
        """Several lists advance together and stop at the shortest."""
        result = map_list(lambda a, b: len(a) * len(b), [1, 2, 3], [4, 5])
        self.assertEqual(result, [6, 2])

    def test_kind(self):
        """kind selects the output container."""
        result = map_list(len, [1, 2, 3], kind="deque")
        self.assertIsInstance(result, deque)
        self.assertEqual(list(result), [3, 2, 1])

    def test_requires_sequences(self):
        """Unordered inputs are rejected."""
        with self.assertRaises(TypeError):
            map_list(len, {1, 2})
        with self.assertRaises(NullArgumentError):
            map_list(None, [1])


class TestQuantifiers(unittest.TestCase):
    """Test some, every, not_any and not_every."""

    def test_some(self):
        """some finds any position where fn is satisfied."""
        self.assertTrue(some(operator.eq, [1, 2, 3], [3, 2, 1]))
        self.assertFalse(some(operator.eq, [1, 2], [2, 1]))

    def test_some_short_circuits(self):
        """some stops calling fn after the first hit."""
        calls = []

        def is_two(x):
            calls.append(x)
            return x == 2

        self.assertTrue(some(is_two, [1, 2, 3, 4]))
        self.assertEqual(calls, [1, 2])

    def test_every(self):
        """every requires fn to be satisfied at every position."""
        self.assertTrue(every(operator.lt, [1, 2], [2, 3, 0]))
        self.assertFalse(every(operator.lt, [1, 5], [2, 3]))

    def test_every_short_circuits(self):
        """every stops calling fn after the first miss."""
        calls = []

        def positive(x):
            calls.append(x)
            return x > 0

        self.assertFalse(every(positive, [1, -1, 2, 3]))
        self.assertEqual(calls, [1, -1])

    def test_satisfaction(self):
        """Only None and False fail; zero and empty strings satisfy."""
        self.assertTrue(every(lambda x: x, [0, "", []]))
        self.assertFalse(every(lambda x: None, [1]))
        self.assertTrue(some(lambda x: 0, [1]))
        self.assertFalse(some(lambda x: False, [1, 2]))

    def test_empty_inputs(self):
        """Vacuous truth holds for empty containers."""
        self.assertFalse(some(bool, []))
        self.assertTrue(every(bool, []))
        self.assertTrue(not_any(bool, []))
        self.assertFalse(not_every(bool, []))

    def test_negations(self):
        """not_any and not_every invert some and every."""
        self.assertTrue(not_any(lambda x: x > 5, [1, 2, 3]))
        self.assertFalse(not_any(lambda x: x > 2, [1, 2, 3]))
        self.assertTrue(not_every(lambda x: x > 1, [1, 2, 3]))
        self.assertFalse(not_every(lambda x: x > 0, [1, 2, 3]))

    def test_argument_errors(self):
        """Quantifiers check their arguments eagerly."""
        with self.assertRaises(NullArgumentError):
            some(None, [1])
        with self.assertRaises(EmptyInputSetError):
            every(bool)
        with self.assertRaises(NullArgumentError):
            not_any(bool, None)


if __name__ == "__main__":
    unittest.main()
