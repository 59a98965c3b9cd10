"""Sanitize arbitrary strings before they reach the speech synthesizer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from speakable.textnorm.glyphs import normalize
from speakable.textnorm.quotes import BoundaryPolicy, strip_quotes
from speakable.textnorm.whitelist import has_alphanumeric, whitelist_filter


@dataclass(frozen=True)
class SanitizeResult:
    text: str
    meta: Dict[str, Any]

    @property
    def rejected(self) -> bool:
        return not self.text


def sanitize(text: str, policy: BoundaryPolicy = BoundaryPolicy.ALWAYS) -> SanitizeResult:
    """Run the full pipeline and report what it did.

    Parameters
    ----------
    text : str
        Raw caller input.
    policy : BoundaryPolicy
        Boundary handling passed to the quote stripper.

    Returns
    -------
    SanitizeResult
        Sanitized text (empty means "do not synthesize") and metadata with
        ``rejected``, ``no_alphanumeric``, ``removed_chars`` and ``policy``.
    """
    out = normalize(text)
    out = strip_quotes(out, policy=policy)
    gated = has_alphanumeric(out)
    out = whitelist_filter(out) if gated else ""
    meta = {
        "policy": policy.value,
        "no_alphanumeric": not gated,
        "rejected": not out,
        "removed_chars": len(text) - len(out),
    }
    return SanitizeResult(text=out, meta=meta)


def filter_string_input(text: str, policy: BoundaryPolicy = BoundaryPolicy.ALWAYS) -> str:
    """Return synthesizer-safe text, or ``""`` if the input is not speakable."""
    return sanitize(text, policy=policy).text
