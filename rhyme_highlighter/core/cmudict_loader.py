"""Read-only pronunciation table and loaders for the CMU dictionary."""

from __future__ import annotations

import re
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional, Tuple

import pronouncing

from rhyme_highlighter.utils.observability import get_logger

_WORD_VARIANT_PATTERN = re.compile(r"\(\d+\)$")

_logger = get_logger(__name__).bind(component="cmudict_loader")


def _strip_variant(word: str) -> str:
    return _WORD_VARIANT_PATTERN.sub("", word).lower()


class PronunciationDictionary(Mapping):
    """Immutable mapping of normalized word to space-delimited phonemes."""

    def __init__(self, entries: Optional[Mapping[str, str] | Iterable[Tuple[str, str]]] = None) -> None:
        table: Dict[str, str] = {}
        items = entries.items() if isinstance(entries, Mapping) else (entries or ())
        for word, phones in items:
            key = str(word).lower()
            # First pronunciation wins; later variants are alternatives.
            if key and key not in table:
                table[key] = str(phones)
        self._table = table

    def __getitem__(self, word: str) -> str:
        return self._table[word]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self._table)} entries)"

    def lookup(self, word: str) -> Optional[Tuple[str, ...]]:
        """Return the phonemes for ``word`` or ``None`` when absent or empty."""

        entry = self._table.get(word)
        if entry is None:
            return None
        phonemes = tuple(entry.split())
        return phonemes or None


class CMUDictLoader:
    """Lazy loader producing a shared :class:`PronunciationDictionary`.

    With ``dict_path`` set the file must exist and use the ``cmudict`` text
    format (``WORD  PH1 PH2``, ``;;;`` comments, ``WORD(2)`` variants).
    Without it, a ``cmudict.7b`` next to the package is used when present,
    otherwise the CMU data bundled with :mod:`pronouncing`.
    """

    def __init__(self, dict_path: Optional[Path | str] = None) -> None:
        self.dict_path: Optional[Path] = Path(dict_path) if dict_path is not None else None
        self._dictionary: Optional[PronunciationDictionary] = None
        self._lock = threading.Lock()

    def _default_path(self) -> Optional[Path]:
        module_path = Path(__file__).resolve()
        for candidate in (
            module_path.with_name("cmudict.7b"),
            module_path.parents[1] / "cmudict.7b",
            module_path.parents[2] / "cmudict.7b",
        ):
            try:
                if candidate.exists():
                    return candidate
            except OSError:
                continue
        return None

    @staticmethod
    def parse_lines(lines: Iterable[str]) -> Iterator[Tuple[str, str]]:
        """Yield ``(word, phonemes)`` pairs from ``cmudict`` formatted lines."""

        for line in lines:
            entry = line.strip()
            if not entry or entry.startswith(";;;"):
                continue
            parts = entry.split()
            if len(parts) < 2:
                continue
            raw_word, *phones = parts
            word = _strip_variant(raw_word)
            if word:
                yield word, " ".join(phones)

    def _read_file(self, path: Path) -> PronunciationDictionary:
        with path.open("r", encoding="utf-8", errors="replace") as handle:
            return PronunciationDictionary(self.parse_lines(handle))

    def _read_bundled(self) -> PronunciationDictionary:
        pronouncing.init_cmu()
        return PronunciationDictionary(pronouncing.pronunciations)

    def load(self) -> PronunciationDictionary:
        """Load the dictionary once and return the shared instance."""

        with self._lock:
            if self._dictionary is not None:
                return self._dictionary

            if self.dict_path is not None:
                if not self.dict_path.exists():
                    raise FileNotFoundError(f"Pronunciation dictionary not found: {self.dict_path}")
                source = str(self.dict_path)
                dictionary = self._read_file(self.dict_path)
            else:
                default_path = self._default_path()
                if default_path is not None:
                    source = str(default_path)
                    dictionary = self._read_file(default_path)
                else:
                    source = "pronouncing"
                    dictionary = self._read_bundled()

            _logger.info(
                "Pronunciation dictionary loaded",
                context={"source": source, "entries": len(dictionary)},
            )
            self._dictionary = dictionary
            return dictionary

    @property
    def loaded(self) -> bool:
        return self._dictionary is not None


__all__ = ["CMUDictLoader", "PronunciationDictionary"]
