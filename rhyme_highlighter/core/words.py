"""Word tokenisation with document offsets."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

WORD_PATTERN = re.compile(r"[A-Za-z0-9_]+")


@dataclass(frozen=True)
class WordToken:
    """A maximal run of word characters and its position in the document."""

    text: str
    start: int
    end: int


def extract_words(text: str) -> List[WordToken]:
    """Return every word in ``text`` in document order."""

    return [
        WordToken(match.group(0), match.start(), match.end())
        for match in WORD_PATTERN.finditer(text or "")
    ]


__all__ = ["WordToken", "WORD_PATTERN", "extract_words"]
