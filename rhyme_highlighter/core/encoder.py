"""Fallback phonetic encoding for words missing from the dictionary."""

from __future__ import annotations

from typing import List

from metaphone import doublemetaphone


class DoubleMetaphoneEncoder:
    """Return the primary and alternate Double Metaphone codes of a word."""

    def __call__(self, word: str) -> List[str]:
        primary, secondary = doublemetaphone(word or "")
        return [code for code in (primary, secondary) if code]


__all__ = ["DoubleMetaphoneEncoder"]
