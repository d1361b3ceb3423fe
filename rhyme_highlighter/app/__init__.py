"""Host application: configuration wiring and the Gradio editor."""
