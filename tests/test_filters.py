"""Tests for src.gitfullstory.filters covering selector parsing and membership.

Run with coverage:
    pytest tests/test_filters.py --maxfail=1 -v --cov=src.gitfullstory.filters --cov-report=term-missing
"""

import pytest

from src.gitfullstory import filters


@pytest.mark.parametrize("raw", [None, "", ",,,", " , ,", "   "])
def test_parse_selector_empty_inputs(raw):
    assert filters.parse_selector(raw) == set()


def test_parse_selector_drops_empty_tokens():
    assert filters.parse_selector("a,b") == {"a", "b"}
    assert filters.parse_selector("a,,b,") == {"a", "b"}


def test_parse_selector_trims_whitespace():
    assert filters.parse_selector("ideo, HearstAuto") == {"ideo", "HearstAuto"}


def test_parse_selector_is_idempotent():
    raw = "x,y,,x"
    assert filters.parse_selector(raw) == filters.parse_selector(raw) == {"x", "y"}


def test_split_selector_keeps_first_seen_order():
    assert filters.split_selector("ideo,,,,") == ["ideo"]
    assert filters.split_selector("b, a,b ,c") == ["b", "a", "c"]


def test_is_selected():
    assert filters.is_selected("anything", set())
    assert filters.is_selected("a", {"a"})
    assert not filters.is_selected("c", {"a", "b"})
    assert not filters.is_selected(None, {"a"})
