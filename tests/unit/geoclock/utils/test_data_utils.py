"""Unit tests for data utility functions.

Tests get_multi and merge_struct.
"""

import unittest

import pytest
from munch import Munch

from geoclock.utils.data_utils import get_multi, merge_struct

pytestmark = pytest.mark.unit


class TestGetMulti(unittest.TestCase):
    """Tests for get_multi function."""

    def test_get_multi_simple(self):
        data = {"geocoding": {"zoom": 18}}
        self.assertEqual(get_multi(data, "geocoding.zoom"), 18)

    def test_get_multi_with_list(self):
        data = {"a": {"b": {"c": 42}}}
        self.assertEqual(get_multi(data, ["a", "b", "c"]), 42)

    def test_get_multi_empty_path(self):
        data = {"a": 1}
        self.assertEqual(get_multi(data, []), data)

    def test_get_multi_munch(self):
        data = Munch(business_hours=Munch(start=9, end=17))
        self.assertEqual(get_multi(data, "business_hours.end"), 17)

    def test_get_multi_missing_key_with_default(self):
        data = {"a": 1}
        self.assertIsNone(get_multi(data, "b.c", default=None))
        self.assertEqual(get_multi(data, "b.c", default="default"), "default")

    def test_get_multi_missing_key_without_default(self):
        with self.assertRaises(KeyError):
            get_multi({"a": 1}, "b.c")

    def test_get_multi_type_error_with_default(self):
        self.assertEqual(get_multi({"a": "string"}, "a.b", default="fallback"), "fallback")

    def test_get_multi_type_error_without_default(self):
        with self.assertRaises(TypeError):
            get_multi({"a": 5}, "a.b")

    def test_get_multi_falsy_value_is_returned(self):
        self.assertIsNone(get_multi({"geocoding": {"timeout": None}}, "geocoding.timeout", default=30))


class TestMergeStruct(unittest.TestCase):
    def test_nested_dicts_are_merged(self):
        base = {"geocoding": {"zoom": 18, "timeout": None}, "logging": {"level": "WARNING"}}
        override = {"geocoding": {"timeout": 5}}
        self.assertEqual(
            merge_struct(base, override),
            {"geocoding": {"zoom": 18, "timeout": 5}, "logging": {"level": "WARNING"}},
        )

    def test_lists_are_replaced(self):
        self.assertEqual(merge_struct({"a": [1, 2]}, {"a": [3]}), {"a": [3]})

    def test_type_conflict_takes_second(self):
        self.assertEqual(merge_struct({"a": {"b": 1}}, {"a": "flat"}), {"a": "flat"})

    def test_inputs_not_mutated(self):
        base = {"a": {"b": 1}}
        merge_struct(base, {"a": {"c": 2}})
        self.assertEqual(base, {"a": {"b": 1}})
