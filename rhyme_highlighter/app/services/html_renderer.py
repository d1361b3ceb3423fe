"""Render highlight spans over the document as HTML."""

from __future__ import annotations

from html import escape
from typing import List, Sequence

from rhyme_highlighter.core.highlighter import HighlightSpan

_MARK_TEMPLATE = (
    '<mark class="rhyme-highlight" '
    'style="background: {color}; border-radius: 3px; padding: 0 2px;" '
    'title="Phonemes: {label}">{text}</mark>'
)


def render_highlighted_html(text: str, spans: Sequence[HighlightSpan]) -> str:
    """Return ``text`` as escaped HTML with each span wrapped in a ``<mark>``.

    Spans are expected sorted and non-overlapping, which is what the
    highlighter produces. Line breaks are kept with ``white-space: pre-wrap``.
    """

    text = text or ""
    chunks: List[str] = []
    cursor = 0
    for span in spans:
        if span.char_start < cursor or span.char_end > len(text):
            continue
        chunks.append(escape(text[cursor : span.char_start]))
        chunks.append(
            _MARK_TEMPLATE.format(
                color=escape(span.color_hex, quote=True),
                label=escape(span.tooltip_label, quote=True),
                text=escape(text[span.char_start : span.char_end]),
            )
        )
        cursor = span.char_end
    chunks.append(escape(text[cursor:]))
    return '<div class="rhyme-document" style="white-space: pre-wrap;">' + "".join(chunks) + "</div>"


def summarize_groups(spans: Sequence[HighlightSpan]) -> str:
    """Return a markdown legend listing each rhyme key with its color."""

    if not spans:
        return "_No rhymes yet. Keep writing._"

    counts: dict[str, int] = {}
    colors: dict[str, str] = {}
    for span in sorted(spans, key=lambda item: item.char_start):
        counts[span.tooltip_label] = counts.get(span.tooltip_label, 0) + 1
        colors.setdefault(span.tooltip_label, span.color_hex)

    lines = ["| Color | Rhyme | Syllables |", "| --- | --- | --- |"]
    for label, total in counts.items():
        color = colors[label]
        swatch = f'<span style="background: {escape(color, quote=True)};">&nbsp;&nbsp;&nbsp;&nbsp;</span>'
        lines.append(f"| {swatch} `{color}` | `{label}` | {total} |")
    return "\n".join(lines)


__all__ = ["render_highlighted_html", "summarize_groups"]
