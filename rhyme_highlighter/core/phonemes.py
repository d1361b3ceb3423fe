"""Resolve words to phoneme sequences.

Dictionary pronunciations are preferred; words the dictionary does not know
are handed to a phonetic encoder and come back as a single pseudo-syllable
made of the encoder's codes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from rhyme_highlighter.utils.observability import get_logger

from .cmudict_loader import PronunciationDictionary

PhonemeEncoder = Callable[[str], Sequence[str]]

SOURCE_DICTIONARY = "dictionary"
SOURCE_ENCODER = "encoder"

_SUFFIX_PATTERN = re.compile(r"(ing|ed|es|s)$")
_NON_LETTER_PATTERN = re.compile(r"[^a-z]")
_STRESS_PATTERN = re.compile(r"[012]$")
_MAX_CODES = 2

_logger = get_logger(__name__).bind(component="phoneme_resolver")


@dataclass(frozen=True)
class ResolvedPronunciation:
    """Phonemes for one word and where they came from."""

    word: str
    lookup_key: str
    phonemes: Tuple[str, ...]
    source: str

    @property
    def encoded(self) -> bool:
        return self.source == SOURCE_ENCODER


def phoneme_stress(symbol: str) -> Optional[int]:
    """Return the stress digit carried by ``symbol`` or ``None``."""

    match = _STRESS_PATTERN.search(symbol)
    return int(match.group(0)) if match else None


def normalize_word(word: str) -> str:
    """Lowercase ``word``, drop one inflection suffix, keep only letters."""

    lowered = word.lower()
    # Leftmost match of the alternation is also the longest suffix.
    stripped = _SUFFIX_PATTERN.sub("", lowered, count=1)
    return _NON_LETTER_PATTERN.sub("", stripped)


def _lookup_candidates(normalized: str) -> Tuple[str, ...]:
    if not normalized:
        return ()
    if normalized.endswith("y"):
        # Terminal "y" is usually a long "e" ("happy" -> "happee").
        return (normalized, normalized[:-1] + "ee")
    return (normalized,)


def _encode(word: str, encoder: PhonemeEncoder) -> Tuple[str, ...]:
    try:
        raw_codes = encoder(word)
    except Exception as exc:
        _logger.warning(
            "Phonetic encoder failed; using literal code",
            context={"word": word, "error": str(exc)},
        )
        raw_codes = ()

    codes = []
    for code in raw_codes or ():
        if isinstance(code, str) and code.strip():
            codes.append(code.strip())
        if len(codes) == _MAX_CODES:
            break
    if not codes:
        codes.append(word.upper())
    return tuple(codes)


def resolve_pronunciation(
    word: str,
    dictionary: PronunciationDictionary,
    encoder: PhonemeEncoder,
) -> ResolvedPronunciation:
    """Resolve ``word`` to phonemes. Never raises for string input."""

    normalized = normalize_word(word)
    for candidate in _lookup_candidates(normalized):
        phonemes = dictionary.lookup(candidate)
        if phonemes:
            return ResolvedPronunciation(word, candidate, phonemes, SOURCE_DICTIONARY)

    encoder_input = normalized or word.lower()
    return ResolvedPronunciation(
        word,
        encoder_input,
        _encode(encoder_input, encoder),
        SOURCE_ENCODER,
    )


__all__ = [
    "PhonemeEncoder",
    "ResolvedPronunciation",
    "SOURCE_DICTIONARY",
    "SOURCE_ENCODER",
    "normalize_word",
    "phoneme_stress",
    "resolve_pronunciation",
]
