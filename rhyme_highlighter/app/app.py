"""Application wiring for the rhyme highlighter."""

from __future__ import annotations

from typing import Optional

from rhyme_highlighter.config import HighlighterSettings
from rhyme_highlighter.core import (
    CMUDictLoader,
    DoubleMetaphoneEncoder,
    PronunciationDictionary,
    RhymeHighlighter,
)
from rhyme_highlighter.core.phonemes import PhonemeEncoder
from rhyme_highlighter.utils.logging_config import configure_logging
from rhyme_highlighter.utils.observability import get_logger
from rhyme_highlighter.utils.telemetry import PassTelemetry, TelemetryLogger


class RhymeHighlighterApp:
    """High-level facade bundling settings, dictionary and highlighter."""

    def __init__(
        self,
        settings: Optional[HighlighterSettings] = None,
        *,
        loader: Optional[CMUDictLoader] = None,
        dictionary: Optional[PronunciationDictionary] = None,
        encoder: Optional[PhonemeEncoder] = None,
        telemetry: Optional[PassTelemetry] = None,
    ) -> None:
        self.settings = settings or HighlighterSettings.from_env()
        self._logger = get_logger(__name__).bind(component="app_facade")

        self.loader = loader or CMUDictLoader(self.settings.dict_path)
        if dictionary is None:
            try:
                dictionary = self.loader.load()
            except Exception as exc:
                self._logger.error(
                    "Pronunciation dictionary unavailable",
                    context={"dict_path": self.settings.dict_path, "error": str(exc)},
                )
                raise
        self.dictionary = dictionary

        self.telemetry = telemetry or PassTelemetry()
        self.telemetry.add_listener(TelemetryLogger())
        self.highlighter = RhymeHighlighter(
            self.dictionary,
            encoder=encoder or DoubleMetaphoneEncoder(),
            palette=self.settings.palette,
            telemetry=self.telemetry,
        )
        self._logger.info(
            "Application dependencies wired",
            context={
                "dictionary_entries": len(self.dictionary),
                "palette_size": len(self.settings.palette),
            },
        )

    def highlight(self, text: str):
        return self.highlighter.on_document_changed(text)

    def create_gradio_interface(self):
        from rhyme_highlighter.app.ui.gradio import create_interface

        return create_interface(self.highlighter)


def main() -> None:
    settings = HighlighterSettings.from_env()
    configure_logging(settings.log_level)

    app = RhymeHighlighterApp(settings)
    interface = app.create_gradio_interface()
    interface.launch(
        server_name="0.0.0.0",
        server_port=settings.server_port,
        share=settings.share,
    )


__all__ = ["RhymeHighlighterApp", "main"]
