from __future__ import annotations

import pytest

from rhyme_highlighter.core import (
    DEFAULT_PALETTE,
    DoubleMetaphoneEncoder,
    HighlightSpan,
    PronunciationDictionary,
    RhymeHighlighter,
    collect_syllable_instances,
    compute_highlights,
    extract_words,
)

LYRICS = "The cat in the hat sat on a bag\nThe dog on the bog buzzed back to the bus"


def _spans_by_text(text, spans):
    return [(text[span.char_start : span.char_end], span.color_hex, span.tooltip_label) for span in spans]


def test_cat_hat_bat_share_colors_and_dog_is_left_plain(dictionary, encoder):
    text = "cat hat bat dog"

    spans = compute_highlights(text, dictionary, encoder)

    assert [(s.char_start, s.char_end) for s in spans] == [
        (0, 1), (1, 3), (4, 5), (5, 7), (8, 9), (9, 11)
    ]
    assert {s.tooltip_label for s in spans} == {"AE1", "T"}
    vowel_colors = {s.color_hex for s in spans if s.tooltip_label == "AE1"}
    tail_colors = {s.color_hex for s in spans if s.tooltip_label == "T"}
    assert vowel_colors == {DEFAULT_PALETTE[0]}
    assert tail_colors == {DEFAULT_PALETTE[1]}
    assert all(s.char_start < 12 for s in spans)


def test_empty_document_produces_no_spans(dictionary, encoder):
    assert compute_highlights("", dictionary, encoder) == []
    assert compute_highlights("   \n\t", dictionary, encoder) == []


def test_unknown_word_is_one_fallback_syllable_without_spans(dictionary):
    encoder = DoubleMetaphoneEncoder()

    instances = collect_syllable_instances("xqz", dictionary, encoder)

    assert len(instances) == 1
    assert (instances[0].char_start, instances[0].char_end) == (0, 3)
    assert compute_highlights("xqz", dictionary, encoder) == []


def test_bag_and_back_rhyme_with_same_colors(dictionary, encoder):
    text = "bag back"

    spans = compute_highlights(text, dictionary, encoder)

    assert _spans_by_text(text, spans) == [
        ("b", DEFAULT_PALETTE[0], "AE1"),
        ("ag", DEFAULT_PALETTE[1], "K"),
        ("ba", DEFAULT_PALETTE[0], "AE1"),
        ("ck", DEFAULT_PALETTE[1], "K"),
    ]


def test_colors_wrap_after_sixteen_groups():
    vowels = ["AA", "EH", "IH", "OW"]
    codas = ["M", "N", "L", "R", "SH"]
    keys = [f"{vowel} {coda}" for vowel in vowels for coda in codas]
    letters = "abcdefghijklmnopqrst"
    entries = {}
    words = []
    for letter, key in zip(letters, keys):
        entries[f"q{letter}a"] = key
        entries[f"z{letter}o"] = key
        words.extend([f"q{letter}a", f"z{letter}o"])
    text = " ".join(words)

    spans = compute_highlights(text, PronunciationDictionary(entries))

    assert len(spans) == 40
    color_by_key = {span.tooltip_label: span.color_hex for span in spans}
    assert len(color_by_key) == 20
    assert color_by_key[keys[0]] == color_by_key[keys[16]] == DEFAULT_PALETTE[0]
    assert color_by_key[keys[1]] != color_by_key[keys[0]]


def test_single_occurrence_is_never_highlighted(dictionary, encoder):
    assert compute_highlights("dog", dictionary, encoder) == []
    spans = compute_highlights("dog fog", dictionary, encoder)
    assert spans and all(span.char_end <= 7 for span in spans)


def test_pipeline_is_deterministic(dictionary, encoder):
    first = compute_highlights(LYRICS, dictionary, encoder)
    second = compute_highlights(LYRICS, dictionary, encoder)

    assert first == second
    assert repr(first) == repr(second)


def test_spans_are_sorted_and_disjoint(dictionary, encoder):
    spans = compute_highlights(LYRICS, dictionary, encoder)

    assert spans
    for previous, current in zip(spans, spans[1:]):
        assert previous.char_end <= current.char_start


def test_syllable_instances_partition_each_word(dictionary, encoder):
    text = "Happy paper cats buzz by the rhythm xqz"

    instances = collect_syllable_instances(text, dictionary, encoder)

    for word in extract_words(text):
        own = [i for i in instances if i.source_word == word]
        assert own[0].char_start == word.start
        assert own[-1].char_end == word.end
        for before, after in zip(own, own[1:]):
            assert before.char_end == after.char_start


def test_voicing_pair_words_rhyme(dictionary, encoder):
    text = "loose lose"

    spans = compute_highlights(text, dictionary, encoder)

    assert _spans_by_text(text, spans) == [
        ("lo", DEFAULT_PALETTE[0], "UW1"),
        ("ose", DEFAULT_PALETTE[1], "S"),
        ("lo", DEFAULT_PALETTE[0], "UW1"),
        ("se", DEFAULT_PALETTE[1], "S"),
    ]
    assert encoder.calls == []


def test_appending_an_unrelated_word_keeps_existing_colors(dictionary, encoder):
    text = "cat hat fog bog"
    appended = text + " xqz"

    before = compute_highlights(text, dictionary, encoder)
    after = compute_highlights(appended, dictionary, encoder)

    assert set(before) <= set(after)
    assert after == before


def test_fallback_words_rhyme_on_identical_codes(dictionary, encoder):
    spans = compute_highlights("xqz xqz", dictionary, encoder)

    assert [(s.char_start, s.char_end, s.tooltip_label) for s in spans] == [
        (0, 3, "XQZ"),
        (4, 7, "XQZ"),
    ]


def test_broken_dictionary_does_not_blank_document(encoder):
    class ExplodingDictionary(PronunciationDictionary):
        def lookup(self, word):
            if word == "boom":
                raise KeyError(word)
            return super().lookup(word)

    dictionary = ExplodingDictionary({"cat": "K AE1 T", "hat": "HH AE1 T"})

    spans = compute_highlights("cat boom hat", dictionary, encoder)

    assert {s.tooltip_label for s in spans} == {"AE1", "T"}


def test_zero_width_syllables_are_not_emitted(encoder):
    dictionary = PronunciationDictionary({"x": "EH1 K S"})

    spans = compute_highlights("x x", dictionary, encoder)

    assert spans == [
        HighlightSpan(0, 1, DEFAULT_PALETTE[1], "S"),
        HighlightSpan(2, 3, DEFAULT_PALETTE[1], "S"),
    ]


def test_highlight_span_as_dict():
    span = HighlightSpan(1, 3, "#ffb347", "AE1")

    assert span.as_dict() == {
        "char_start": 1,
        "char_end": 3,
        "color_hex": "#ffb347",
        "tooltip_label": "AE1",
    }


def test_highlighter_publishes_latest_result(dictionary, encoder):
    highlighter = RhymeHighlighter(dictionary, encoder=encoder)

    spans = highlighter.on_document_changed("cat hat")

    assert highlighter.latest == spans
    assert highlighter.published_generation == 1

    highlighter.on_document_changed("dog")
    assert highlighter.latest == []
    assert highlighter.published_generation == 2


def test_highlighter_discards_stale_passes(dictionary, encoder):
    highlighter = RhymeHighlighter(dictionary, encoder=encoder)
    older = highlighter.begin_pass()
    newer = highlighter.begin_pass()
    fresh = highlighter.compute("cat hat")

    assert highlighter.publish(newer, fresh) is True
    assert highlighter.publish(older, []) is False
    assert highlighter.latest == fresh


def test_highlighter_records_pass_telemetry(dictionary, encoder):
    highlighter = RhymeHighlighter(dictionary, encoder=encoder)

    highlighter.on_document_changed("cat hat xqz")
    snapshot = highlighter.telemetry.latest_snapshot()

    assert snapshot["pass_id"] == 1
    assert snapshot["counters"]["words"] == 3
    assert snapshot["counters"]["fallback_words"] == 1
    assert snapshot["counters"]["groups"] == 2
    assert snapshot["counters"]["spans"] == 4
    assert set(snapshot["stages"]) == {"syllables", "grouping", "decorations"}


def test_highlighter_uses_custom_palette(dictionary, encoder):
    highlighter = RhymeHighlighter(dictionary, encoder=encoder, palette=["#111111", "#222222"])

    spans = highlighter.on_document_changed("cat hat")

    assert [s.color_hex for s in spans] == ["#111111", "#222222", "#111111", "#222222"]


def test_highlighter_rejects_empty_palette(dictionary):
    with pytest.raises(ValueError):
        RhymeHighlighter(dictionary, palette=[])
