"""Live phonetic rhyme highlighting for lyric documents."""

from .core import (
    CMUDictLoader,
    DoubleMetaphoneEncoder,
    HighlightSpan,
    PronunciationDictionary,
    RhymeHighlighter,
    compute_highlights,
)

__all__ = [
    "CMUDictLoader",
    "DoubleMetaphoneEncoder",
    "HighlightSpan",
    "PronunciationDictionary",
    "RhymeHighlighter",
    "compute_highlights",
]
