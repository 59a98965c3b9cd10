"""Tests for the alphanumeric gate and whitelist filter."""

from __future__ import annotations

import pytest

from speakable.constants import WHITELIST
from speakable.textnorm.whitelist import has_alphanumeric, whitelist_filter


def test_whitelist_has_48_members() -> None:
    assert len(WHITELIST) == 48
    assert "£" in WHITELIST
    assert "A" not in WHITELIST


@pytest.mark.parametrize("text", ["", "!!! ---", "£$", "é", "٣", "’"])
def test_has_alphanumeric_false(text: str) -> None:
    assert has_alphanumeric(text) is False


@pytest.mark.parametrize("text", ["...a", "9", "Z!", "£5"])
def test_has_alphanumeric_true(text: str) -> None:
    assert has_alphanumeric(text) is True


def test_unlisted_characters_removed() -> None:
    assert whitelist_filter("Hello@World#2024") == "HelloWorld2024"


def test_all_symbols_kept() -> None:
    symbols = "$£!.?,'&;: -"
    assert whitelist_filter(symbols) == symbols


def test_case_preserved() -> None:
    assert whitelist_filter("ABC def") == "ABC def"


def test_non_ascii_letters_removed() -> None:
    assert whitelist_filter("café\tbar\n") == "cafbar"


def test_kelvin_sign_not_folded_to_k() -> None:
    assert whitelist_filter("\u212aelvin") == "elvin"


@pytest.mark.parametrize("text", ["Hello@World#2024", "x\x00y", "“quoted” £5 (approx)"])
def test_whitelist_filter_is_idempotent(text: str) -> None:
    once = whitelist_filter(text)
    assert whitelist_filter(once) == once
