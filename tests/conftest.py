from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from rhyme_highlighter.core import PronunciationDictionary

SAMPLE_ENTRIES = {
    "cat": "K AE1 T",
    "hat": "HH AE1 T",
    "bat": "B AE1 T",
    "mat": "M AE1 T",
    "dog": "D AO1 G",
    "fog": "F AO1 G",
    "bog": "B AO1 G",
    "bag": "B AE1 G",
    "back": "B AE1 K",
    "buzz": "B AH1 Z",
    "loose": "L UW1 S",
    "lose": "L UW1 Z",
    "happy": "HH AE1 P IY0",
    "paper": "P EY1 P ER0",
    "citee": "S IH1 T IY0",
    "rhythm": "R IH1 DH AH0 M",
    "blank": "",
}


class StubEncoder:
    """Deterministic encoder that records the words it was asked about."""

    def __init__(self) -> None:
        self.calls: List[str] = []

    def __call__(self, word: str) -> List[str]:
        self.calls.append(word)
        return [word.upper()]


@pytest.fixture
def dictionary() -> PronunciationDictionary:
    return PronunciationDictionary(SAMPLE_ENTRIES)


@pytest.fixture
def encoder() -> StubEncoder:
    return StubEncoder()
