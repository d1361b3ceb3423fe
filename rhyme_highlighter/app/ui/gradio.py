"""Gradio front-end: a lyric editor with a live rhyme preview."""

from __future__ import annotations

from typing import Tuple

import gradio as gr

from rhyme_highlighter.core.highlighter import RhymeHighlighter
from rhyme_highlighter.utils.observability import get_logger

from ..services.html_renderer import render_highlighted_html, summarize_groups

_logger = get_logger(__name__).bind(component="gradio_ui")

EXAMPLE_LYRICS = (
    "I saw a cat up on a mat\n"
    "It wore a hat and that was that\n"
    "The fog rolled in across the bog\n"
    "And woke the dog beside the log"
)


def make_change_handler(highlighter: RhymeHighlighter):
    """Return the callback bound to the editor's change event."""

    def on_change(text: str) -> Tuple[str, str]:
        spans = highlighter.on_document_changed(text or "")
        return render_highlighted_html(text or "", spans), summarize_groups(spans)

    return on_change


def create_interface(highlighter: RhymeHighlighter) -> gr.Blocks:
    """Construct the interactive Gradio Blocks UI."""

    on_change = make_change_handler(highlighter)

    interface_css = """
    .rh-container {max-width: 1100px; margin: 0 auto; gap: 24px;}
    .rh-hero {text-align: center; padding-bottom: 12px;}
    .rh-panel {border: 1px solid rgba(15, 23, 42, 0.08); border-radius: 16px; padding: 20px;}
    .rhyme-document {font-family: ui-monospace, monospace; line-height: 1.8; min-height: 320px;}
    """

    with gr.Blocks(title="Rhyme Highlighter", theme=gr.themes.Soft(), css=interface_css) as interface:
        with gr.Column(elem_classes=["rh-container"]):
            gr.Markdown(
                "<h2>Rhyme Highlighter</h2>\n"
                "<p>Syllables that rhyme share a color. Hover a highlight to see its phonemes.</p>",
                elem_classes=["rh-hero"],
            )
            with gr.Row():
                with gr.Column(elem_classes=["rh-panel"]):
                    editor = gr.Textbox(
                        label="Lyrics",
                        value=EXAMPLE_LYRICS,
                        lines=14,
                        placeholder="Start writing...",
                    )
                with gr.Column(elem_classes=["rh-panel"]):
                    preview = gr.HTML(label="Rhymes")
                    legend = gr.Markdown()

        editor.change(on_change, inputs=editor, outputs=[preview, legend])
        interface.load(on_change, inputs=editor, outputs=[preview, legend])

    _logger.info("Gradio interface assembled")
    return interface


__all__ = ["create_interface", "make_change_handler", "EXAMPLE_LYRICS"]
