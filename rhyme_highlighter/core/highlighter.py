"""Whole-document rhyme highlighting.

:func:`compute_highlights` is a pure function of the document text, the
pronunciation dictionary, the fallback encoder and the palette. It is rerun
from scratch on every document change; :class:`RhymeHighlighter` wraps it for
hosts that push change notifications and want instrumentation plus
last-write-wins publishing of results.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from rhyme_highlighter.utils.observability import (
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    start_span,
)
from rhyme_highlighter.utils.telemetry import PassTelemetry

from .cmudict_loader import PronunciationDictionary
from .encoder import DoubleMetaphoneEncoder
from .grouping import DEFAULT_PALETTE, RhymeGroup, assign_colors, group_by_rhyme_key
from .phonemes import PhonemeEncoder, resolve_pronunciation
from .rhyme_key import rhyme_key
from .syllables import (
    Syllable,
    SyllableInstance,
    align_syllables,
    encoded_syllable,
    split_syllables,
)
from .words import WordToken, extract_words

_logger = get_logger(__name__).bind(component="rhyme_highlighter")

_metric_passes = create_counter(
    "rhyme_highlight_passes_total",
    "Highlighting passes computed.",
)
_metric_fallback_words = create_counter(
    "rhyme_highlight_fallback_words_total",
    "Words resolved through the phonetic encoder instead of the dictionary.",
)
_metric_pass_seconds = create_histogram(
    "rhyme_highlight_pass_seconds",
    "Duration of a full highlighting pass.",
)


@dataclass(frozen=True)
class HighlightSpan:
    """One colored background span with its tooltip."""

    char_start: int
    char_end: int
    color_hex: str
    tooltip_label: str

    def as_dict(self) -> Dict[str, Any]:
        return {
            "char_start": self.char_start,
            "char_end": self.char_end,
            "color_hex": self.color_hex,
            "tooltip_label": self.tooltip_label,
        }


def word_syllables(
    word: WordToken,
    dictionary: PronunciationDictionary,
    encoder: PhonemeEncoder,
) -> List[Syllable]:
    """Resolve ``word`` and return its syllables (at least one)."""

    resolved = resolve_pronunciation(word.text, dictionary, encoder)
    if resolved.encoded:
        return [encoded_syllable(resolved.phonemes)]
    return split_syllables(resolved.phonemes)


def _syllables_or_literal(
    word: WordToken,
    dictionary: PronunciationDictionary,
    encoder: PhonemeEncoder,
) -> List[Syllable]:
    try:
        return word_syllables(word, dictionary, encoder)
    except Exception as exc:
        # A misbehaving dictionary must not blank the rest of the document.
        _logger.warning(
            "Word resolution failed; treating as unknown",
            context={"word": word.text, "error": str(exc)},
        )
        return [encoded_syllable((word.text.upper(),))]


def _instances(word: WordToken, syllables: Sequence[Syllable]) -> List[SyllableInstance]:
    spans = align_syllables(word, syllables)
    return [
        SyllableInstance(word, start, end, rhyme_key(syllable))
        for syllable, (start, end) in zip(syllables, spans)
    ]


@dataclass
class _Scan:
    instances: List[SyllableInstance]
    words: int = 0
    fallback_words: int = 0


def _scan(
    text: str,
    dictionary: PronunciationDictionary,
    encoder: PhonemeEncoder,
) -> _Scan:
    scan = _Scan([])
    for word in extract_words(text):
        syllables = _syllables_or_literal(word, dictionary, encoder)
        scan.words += 1
        if syllables and syllables[0].encoded:
            scan.fallback_words += 1
        scan.instances.extend(_instances(word, syllables))
    return scan


def collect_syllable_instances(
    text: str,
    dictionary: PronunciationDictionary,
    encoder: PhonemeEncoder,
) -> List[SyllableInstance]:
    """Scan ``text`` and return every syllable instance in document order."""

    return _scan(text, dictionary, encoder).instances


def build_decorations(
    groups: Sequence[RhymeGroup],
    colors: Dict[str, str],
) -> List[HighlightSpan]:
    """Emit one span per group member, sorted by position.

    Zero-width members are skipped: a word with fewer characters than
    syllables gets empty slices from the equal-chunk split, and those still
    count toward their group's size but have nothing to paint.
    """

    spans = [
        HighlightSpan(member.char_start, member.char_end, colors[group.key], group.key)
        for group in groups
        for member in group.members
        if member.char_end > member.char_start
    ]
    spans.sort(key=lambda span: (span.char_start, span.char_end))
    return spans


def compute_highlights(
    text: str,
    dictionary: PronunciationDictionary,
    encoder: Optional[PhonemeEncoder] = None,
    palette: Sequence[str] = DEFAULT_PALETTE,
) -> List[HighlightSpan]:
    """Run the full pipeline over ``text`` and return the highlight spans."""

    encoder = encoder or DoubleMetaphoneEncoder()
    groups = group_by_rhyme_key(collect_syllable_instances(text, dictionary, encoder))
    return build_decorations(groups, assign_colors(groups, palette))


class RhymeHighlighter:
    """Stateful host adapter around :func:`compute_highlights`.

    Only the latest published span list is retained. Hosts that compute on
    worker threads call :meth:`begin_pass` before computing and
    :meth:`publish` afterwards; results from a pass older than the one
    already published are dropped.
    """

    def __init__(
        self,
        dictionary: PronunciationDictionary,
        *,
        encoder: Optional[PhonemeEncoder] = None,
        palette: Sequence[str] = DEFAULT_PALETTE,
        telemetry: Optional[PassTelemetry] = None,
    ) -> None:
        if not palette:
            raise ValueError("Palette must contain at least one color")
        self.dictionary = dictionary
        self.encoder: PhonemeEncoder = encoder or DoubleMetaphoneEncoder()
        self.palette = tuple(palette)
        self.telemetry = telemetry or PassTelemetry()
        self._lock = threading.Lock()
        self._generation = 0
        self._published_generation = 0
        self._latest: List[HighlightSpan] = []

    @property
    def latest(self) -> List[HighlightSpan]:
        with self._lock:
            return list(self._latest)

    @property
    def published_generation(self) -> int:
        with self._lock:
            return self._published_generation

    def begin_pass(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def publish(self, generation: int, spans: Sequence[HighlightSpan]) -> bool:
        """Store ``spans`` unless a newer pass has already been published."""

        with self._lock:
            if generation < self._published_generation:
                _logger.debug(
                    "Discarding stale highlight pass",
                    context={
                        "generation": generation,
                        "published": self._published_generation,
                    },
                )
                return False
            self._published_generation = generation
            self._latest = list(spans)
            return True

    def compute(self, text: str) -> List[HighlightSpan]:
        """Run one instrumented pass without publishing it."""

        telemetry = self.telemetry
        telemetry.start_pass()
        with _metric_pass_seconds.time(), start_span("rhyme_highlight.pass") as span:
            with telemetry.stage("syllables"):
                scan = _scan(text, self.dictionary, self.encoder)
            with telemetry.stage("grouping"):
                groups = group_by_rhyme_key(scan.instances)
                colors = assign_colors(groups, self.palette)
            with telemetry.stage("decorations"):
                spans = build_decorations(groups, colors)

            telemetry.count("words", scan.words)
            telemetry.count("fallback_words", scan.fallback_words)
            telemetry.count("syllables", len(scan.instances))
            telemetry.count("groups", len(groups))
            telemetry.count("spans", len(spans))
            add_span_attributes(
                span,
                {"words": scan.words, "groups": len(groups), "spans": len(spans)},
            )

        telemetry.finish_pass()
        _metric_passes.inc()
        _metric_fallback_words.inc(scan.fallback_words)
        _logger.debug(
            "Highlight pass computed",
            context={
                "characters": len(text),
                "words": scan.words,
                "groups": len(groups),
                "spans": len(spans),
            },
        )
        return spans

    def on_document_changed(self, text: str) -> List[HighlightSpan]:
        """Recompute highlights for ``text`` and make them the latest result."""

        generation = self.begin_pass()
        spans = self.compute(text)
        self.publish(generation, spans)
        return spans


__all__ = [
    "HighlightSpan",
    "RhymeHighlighter",
    "build_decorations",
    "collect_syllable_instances",
    "compute_highlights",
    "word_syllables",
]
