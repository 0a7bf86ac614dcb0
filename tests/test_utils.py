from __future__ import annotations

from mailsmith.utils import dedupe, utc_now


def test_utc_now_is_timezone_aware():
    assert utc_now().utcoffset() is not None


def test_dedupe_keeps_first_occurrence_order():
    assert dedupe(["b@example.com", "a@example.com", "b@example.com"]) == ["b@example.com", "a@example.com"]


def test_dedupe_of_empty_input():
    assert dedupe([]) == []
