"""Query normalization and synonym expansion."""

from __future__ import annotations

import re
import unicodedata

from .metadata import SYNONYMS

# Whitespace (including the ideographic space) and half/full-width commas
_SEPARATOR_PATTERN = re.compile(r"[\s,、，]+")

def _build_synonym_reverse() -> dict[str, str]:
    """Map every surface form to its canonical key.

    Canonical keys always map to themselves; an alternate listed under
    several keys belongs to the first one.
    """
    reverse = {canonical: canonical for canonical in SYNONYMS}
    for canonical, alternates in SYNONYMS.items():
        for alt in alternates:
            reverse.setdefault(alt, canonical)
    return reverse


_SYNONYM_REVERSE = _build_synonym_reverse()


def _fold(text: str) -> str:
    """Fold full-width forms and lowercase."""
    return unicodedata.normalize("NFKC", text).lower()


def tokenize(query: str) -> list[str]:
    """Split a query into lowercase tokens, dropping empty ones."""
    if not query:
        return []
    return [tok for tok in _SEPARATOR_PATTERN.split(_fold(query)) if tok]


def get_canonical_concept(token: str) -> str | None:
    """Get the canonical concept key for a token, if it has one."""
    return _SYNONYM_REVERSE.get(_fold(token).strip())


def expand_token(token: str) -> set[str]:
    """Return the token plus its concept key and every alternate of that key."""
    expanded = {token}
    canonical = _SYNONYM_REVERSE.get(token)
    if canonical:
        expanded.add(canonical)
        expanded.update(SYNONYMS[canonical])
    return expanded


def normalize(query: str) -> frozenset[str]:
    """Normalize a raw query into a deduplicated set of search terms.

    Args:
        query: Raw user query, e.g. "無料 画像生成" or "image, free"

    Returns:
        The synonym-expanded terms; empty for blank input.
    """
    terms: set[str] = set()
    for token in tokenize(query):
        terms |= expand_token(token)
    return frozenset(terms)
