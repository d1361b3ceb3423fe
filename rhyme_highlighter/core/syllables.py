"""Split phoneme sequences into syllables and align them to word text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .phonemes import phoneme_stress
from .words import WordToken

VOWEL_LETTERS = frozenset("aeiouy")


@dataclass(frozen=True)
class Syllable:
    """Contiguous run of phonemes closed by a stress-marked phoneme.

    ``encoded`` marks the pseudo-syllable holding fallback encoder codes
    rather than dictionary phonemes.
    """

    phonemes: Tuple[str, ...]
    stress_marker_present: bool
    encoded: bool = False


@dataclass(frozen=True)
class SyllableInstance:
    """A syllable occurrence pinned to absolute document offsets."""

    source_word: WordToken
    char_start: int
    char_end: int
    rhyme_key: str


def split_syllables(phonemes: Sequence[str]) -> List[Syllable]:
    """Group ``phonemes`` into syllables ending at stress-marked phonemes."""

    syllables: List[Syllable] = []
    current: List[str] = []
    for phoneme in phonemes:
        current.append(phoneme)
        if phoneme_stress(phoneme) is not None:
            syllables.append(Syllable(tuple(current), True))
            current = []
    if current:
        syllables.append(Syllable(tuple(current), False))
    return syllables


def encoded_syllable(codes: Sequence[str]) -> Syllable:
    """Wrap encoder codes as a single syllable."""

    return Syllable(tuple(codes), False, encoded=True)


def _vowel_boundaries(text: str, count: int) -> List[int] | None:
    vowel_positions = [index for index, char in enumerate(text.lower()) if char in VOWEL_LETTERS]
    if len(vowel_positions) < count:
        return None
    return [0] + [vowel_positions[index] + 1 for index in range(count - 1)] + [len(text)]


def _even_boundaries(text: str, count: int) -> List[int]:
    chunk = len(text) // count
    return [index * chunk for index in range(count)] + [len(text)]


def syllable_boundaries(text: str, count: int) -> List[int]:
    """Return ``count + 1`` word-relative offsets splitting ``text``.

    Splits land right after vowel letters when there are enough of them,
    otherwise the word is cut into equal chunks with the last one taking
    the remainder.
    """

    if count <= 1:
        return [0, len(text)]
    return _vowel_boundaries(text, count) or _even_boundaries(text, count)


def align_syllables(word: WordToken, syllables: Sequence[Syllable]) -> List[Tuple[int, int]]:
    """Map each syllable of ``word`` onto an absolute ``(start, end)`` span."""

    if not syllables:
        return []
    if any(syllable.encoded for syllable in syllables):
        return [(word.start, word.end)]
    bounds = syllable_boundaries(word.text, len(syllables))
    return [
        (word.start + bounds[index], word.start + bounds[index + 1])
        for index in range(len(syllables))
    ]


__all__ = [
    "Syllable",
    "SyllableInstance",
    "VOWEL_LETTERS",
    "align_syllables",
    "encoded_syllable",
    "split_syllables",
    "syllable_boundaries",
]
