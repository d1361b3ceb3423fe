from .html_renderer import render_highlighted_html, summarize_groups

__all__ = ["render_highlighted_html", "summarize_groups"]
