"""Rewrite glyphs the synthesizer mishandles into ASCII-safe equivalents."""

from __future__ import annotations

from typing import Iterable, Tuple

from speakable.constants import REPLACEMENT_TABLE


def normalize(text: str, table: Iterable[Tuple[str, str]] = REPLACEMENT_TABLE) -> str:
    """Apply every replacement in ``table`` to ``text``.

    Parameters
    ----------
    text : str
        Input text.
    table : Iterable[tuple[str, str]]
        Ordered ``(glyph, substitute)`` pairs. Each pair is a global replace
        over the output of the previous pair, so later entries see earlier
        substitutions.

    Returns
    -------
    str
        Text with all glyphs substituted.
    """
    out = text
    for glyph, substitute in table:
        out = out.replace(glyph, substitute)
    return out
