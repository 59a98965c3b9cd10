"""Alphanumeric gate and character whitelist for synthesizer input."""

from __future__ import annotations

from typing import AbstractSet

from speakable.constants import WHITELIST


def _ascii_fold(ch: str) -> str:
    # str.lower() maps some non-ASCII letters (KELVIN SIGN) onto ASCII ones.
    return ch.lower() if ch.isascii() else ch


def has_alphanumeric(text: str) -> bool:
    """Return True if the text contains an ASCII letter or digit."""
    for ch in text:
        if ch.isascii() and ch.isalnum():
            return True
    return False


def whitelist_filter(text: str, allowed: AbstractSet[str] = WHITELIST) -> str:
    """Drop every character whose ASCII-lowercase form is not whitelisted.

    Parameters
    ----------
    text : str
        Input text.
    allowed : AbstractSet[str]
        Lowercase set of permitted characters.

    Returns
    -------
    str
        Filtered text. Kept characters retain their original case.
    """
    return "".join(ch for ch in text if _ascii_fold(ch) in allowed)
