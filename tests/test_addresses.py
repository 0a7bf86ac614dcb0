from __future__ import annotations

from mailsmith.addresses import extract_bare_address, format_address


def test_format_address_without_name_returns_address():
    assert format_address("", "ada@example.com") == "ada@example.com"


def test_format_address_wraps_address_in_brackets():
    assert format_address("Ada", "ada@example.com") == "Ada <ada@example.com>"


def test_format_address_does_not_quote_special_characters():
    assert format_address("Lovelace, Ada", "ada@example.com") == "Lovelace, Ada <ada@example.com>"


def test_extract_bare_address_from_display_form():
    assert extract_bare_address("Ada Lovelace <ada@example.com>") == "ada@example.com"


def test_extract_bare_address_keeps_bare_address():
    assert extract_bare_address("ada@example.com") == "ada@example.com"
    assert extract_bare_address("<ada@example.com>") == "ada@example.com"


def test_extract_bare_address_of_blank_string():
    assert extract_bare_address("   ") == ""
