"""Tests for prefixed id allocation."""

from sysboard.ids import prefixed_id


def test_first_id_starts_at_one():
    assert prefixed_id("c", []) == "c1"


def test_suffixes_compare_as_integers():
    assert prefixed_id("c", ["c2", "c9", "c10"]) == "c11"


def test_other_prefixes_are_ignored():
    assert prefixed_id("l", ["c7", "b3"]) == "l1"
    assert prefixed_id("c", ["c1", "l40"]) == "c2"


def test_non_numeric_suffixes_are_ignored():
    assert prefixed_id("c", ["c", "cx", "c3a", "c2"]) == "c3"
