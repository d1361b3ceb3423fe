"""Phonetic rhyme detection and highlight computation."""

from .cmudict_loader import CMUDictLoader, PronunciationDictionary
from .encoder import DoubleMetaphoneEncoder
from .grouping import (
    DEFAULT_PALETTE,
    RhymeGroup,
    assign_colors,
    group_by_rhyme_key,
    validate_palette,
)
from .highlighter import (
    HighlightSpan,
    RhymeHighlighter,
    build_decorations,
    collect_syllable_instances,
    compute_highlights,
)
from .phonemes import ResolvedPronunciation, normalize_word, resolve_pronunciation
from .rhyme_key import collapse_phoneme, rhyme_key
from .syllables import Syllable, SyllableInstance, align_syllables, split_syllables
from .words import WordToken, extract_words

__all__ = [
    "CMUDictLoader",
    "PronunciationDictionary",
    "DoubleMetaphoneEncoder",
    "DEFAULT_PALETTE",
    "RhymeGroup",
    "assign_colors",
    "group_by_rhyme_key",
    "validate_palette",
    "HighlightSpan",
    "RhymeHighlighter",
    "build_decorations",
    "collect_syllable_instances",
    "compute_highlights",
    "ResolvedPronunciation",
    "normalize_word",
    "resolve_pronunciation",
    "collapse_phoneme",
    "rhyme_key",
    "Syllable",
    "SyllableInstance",
    "align_syllables",
    "split_syllables",
    "WordToken",
    "extract_words",
]
