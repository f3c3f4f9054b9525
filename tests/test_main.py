"""
tests/test_main.py — Entry Point Tests
=======================================
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from misfire.bot import __main__ as entry


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("log_format: console\n", encoding="utf-8")
    return path


@pytest.mark.parametrize("token", [None, "", "your-discord-bot-token-here"])
def test_missing_token_exits(config_file, monkeypatch, token):
    monkeypatch.setenv("MISFIRE_CONFIG", str(config_file))
    if token is None:
        monkeypatch.delenv("DISCORD_TOKEN", raising=False)
    else:
        monkeypatch.setenv("DISCORD_TOKEN", token)

    with (
        patch.object(entry, "load_dotenv"),
        patch.object(entry, "configure_logging"),
        patch.object(entry, "MisfireBot") as bot_cls,
        pytest.raises(SystemExit) as exc_info,
    ):
        entry.main()

    assert exc_info.value.code == 1
    bot_cls.assert_not_called()


def test_runs_bot_with_token(config_file, monkeypatch):
    monkeypatch.setenv("MISFIRE_CONFIG", str(config_file))
    monkeypatch.setenv("DISCORD_TOKEN", "abc.def.ghi")
    bot = MagicMock()

    with (
        patch.object(entry, "load_dotenv"),
        patch.object(entry, "configure_logging") as configure,
        patch.object(entry, "MisfireBot", return_value=bot),
    ):
        entry.main()

    configure.assert_called_once_with("console", "INFO")
    bot.run.assert_called_once_with("abc.def.ghi", log_handler=None)
