from pathlib import Path

import pytest

from rhyme_highlighter.config import HighlighterSettings
from rhyme_highlighter.core.grouping import DEFAULT_PALETTE


def test_defaults_without_environment():
    settings = HighlighterSettings.from_env({})

    assert settings.dict_path is None
    assert settings.palette == DEFAULT_PALETTE
    assert settings.log_level is None
    assert settings.share is False
    assert settings.server_port == 7860


def test_reads_all_variables():
    settings = HighlighterSettings.from_env(
        {
            "RHYME_HIGHLIGHTER_DICT_PATH": "/data/cmudict.7b",
            "RHYME_HIGHLIGHTER_PALETTE": "#111111, #222222,",
            "RHYME_HIGHLIGHTER_LOG_LEVEL": "debug",
            "RHYME_HIGHLIGHTER_SHARE": "Yes",
            "RHYME_HIGHLIGHTER_PORT": "8080",
        }
    )

    assert settings.dict_path == Path("/data/cmudict.7b")
    assert settings.palette == ("#111111", "#222222")
    assert settings.log_level == "debug"
    assert settings.share is True
    assert settings.server_port == 8080


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("RHYME_HIGHLIGHTER_SHARE", "0")
    monkeypatch.delenv("RHYME_HIGHLIGHTER_PALETTE", raising=False)

    settings = HighlighterSettings.from_env()

    assert settings.share is False
    assert settings.palette == DEFAULT_PALETTE


@pytest.mark.parametrize(
    "environ",
    [
        {"RHYME_HIGHLIGHTER_PALETTE": "orange"},
        {"RHYME_HIGHLIGHTER_PALETTE": " , "},
        {"RHYME_HIGHLIGHTER_PORT": "eighty"},
    ],
)
def test_invalid_values_raise(environ):
    with pytest.raises(ValueError):
        HighlighterSettings.from_env(environ)
