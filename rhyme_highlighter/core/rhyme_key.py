"""Canonical rhyme keys for syllables."""

from __future__ import annotations

from typing import List, Sequence

from .syllables import Syllable

# Voiced consonants fold onto their voiceless partner so "bag" meets "back".
_COLLAPSE_TABLE = str.maketrans({"Z": "S", "D": "T", "V": "F", "B": "P", "G": "K"})
_VOWEL_INITIALS = frozenset("AEIOUY")


def collapse_phoneme(symbol: str) -> str:
    """Apply the consonant collapse to every character of ``symbol``."""

    return symbol.translate(_COLLAPSE_TABLE)


def is_consonant(symbol: str) -> bool:
    return bool(symbol) and symbol[0] not in _VOWEL_INITIALS


def rhyme_tail(phonemes: Sequence[str]) -> List[str]:
    """Collapse ``phonemes`` and drop a leading consonant onset.

    A syllable made of a single consonant keeps it, so trailing codas such
    as the ``T`` of ``K AE1 | T`` still carry a key.
    """

    collapsed = [collapse_phoneme(symbol) for symbol in phonemes]
    if len(collapsed) > 1 and is_consonant(collapsed[0]):
        return collapsed[1:]
    return collapsed


def rhyme_key(syllable: Syllable) -> str:
    """Return the string two syllables must share to rhyme."""

    if syllable.encoded:
        return " ".join(syllable.phonemes)
    return " ".join(rhyme_tail(syllable.phonemes))


__all__ = ["collapse_phoneme", "is_consonant", "rhyme_key", "rhyme_tail"]
