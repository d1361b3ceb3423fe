"""Environment driven settings for the highlighter application."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

from rhyme_highlighter.core.grouping import DEFAULT_PALETTE, validate_palette
from rhyme_highlighter.utils.logging_config import LOG_LEVEL_ENV

DICT_PATH_ENV = "RHYME_HIGHLIGHTER_DICT_PATH"
PALETTE_ENV = "RHYME_HIGHLIGHTER_PALETTE"
SHARE_ENV = "RHYME_HIGHLIGHTER_SHARE"
PORT_ENV = "RHYME_HIGHLIGHTER_PORT"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class HighlighterSettings:
    dict_path: Optional[Path] = None
    palette: Tuple[str, ...] = DEFAULT_PALETTE
    log_level: Optional[str] = None
    share: bool = False
    server_port: int = 7860

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HighlighterSettings":
        """Build settings from ``environ`` (defaults to :data:`os.environ`).

        Raises ``ValueError`` for an unusable palette or port.
        """

        env = os.environ if environ is None else environ

        raw_path = (env.get(DICT_PATH_ENV) or "").strip()
        raw_palette = (env.get(PALETTE_ENV) or "").strip()
        palette = (
            validate_palette(part for part in raw_palette.split(",") if part.strip())
            if raw_palette
            else DEFAULT_PALETTE
        )

        raw_port = (env.get(PORT_ENV) or "").strip()
        try:
            port = int(raw_port) if raw_port else 7860
        except ValueError:
            raise ValueError(f"{PORT_ENV} must be an integer, got {raw_port!r}") from None

        return cls(
            dict_path=Path(raw_path) if raw_path else None,
            palette=palette,
            log_level=(env.get(LOG_LEVEL_ENV) or "").strip() or None,
            share=str(env.get(SHARE_ENV, "")).strip().lower() in _TRUTHY,
            server_port=port,
        )


__all__ = [
    "HighlighterSettings",
    "DICT_PATH_ENV",
    "PALETTE_ENV",
    "SHARE_ENV",
    "PORT_ENV",
]
