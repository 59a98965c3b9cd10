"""Strip enclosing quotes while keeping contractions intact."""

from __future__ import annotations

from enum import Enum
from typing import List

from speakable.constants import QUOTE_CHARS


class BoundaryPolicy(str, Enum):
    """How the first and last characters of a string are treated."""

    ALWAYS = "always"
    QUOTES_ONLY = "quotes_only"


def _is_ascii_alpha(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def _drop_boundary(ch: str, policy: BoundaryPolicy) -> bool:
    if policy is BoundaryPolicy.ALWAYS:
        return True
    return ch in QUOTE_CHARS


def strip_quotes(text: str, policy: BoundaryPolicy = BoundaryPolicy.ALWAYS) -> str:
    """Remove enclosing quotes and stray apostrophes.

    Parameters
    ----------
    text : str
        Input text, already glyph-normalized.
    policy : BoundaryPolicy
        ``ALWAYS`` drops the first and last characters whatever they are.
        ``QUOTES_ONLY`` drops them only when they are quote marks.

    Returns
    -------
    str
        Text without boundary quotes. Interior apostrophes survive only when
        both neighbours are ASCII letters (``don't``).

    Notes
    -----
    Neighbour lookups always read the input string, so a removed character
    never shifts the positions seen by later checks. A one-character string
    is both first and last; under ``ALWAYS`` it is removed.
    """
    last = len(text) - 1
    kept: List[str] = []
    for idx, ch in enumerate(text):
        if idx == 0 or idx == last:
            if not _drop_boundary(ch, policy):
                kept.append(ch)
            continue
        if ch == "'" and not (_is_ascii_alpha(text[idx - 1]) and _is_ascii_alpha(text[idx + 1])):
            continue
        kept.append(ch)
    return "".join(kept)
