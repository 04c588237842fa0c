"""Tests for environment driven build settings."""

from __future__ import annotations

import os
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from fpl_weekly import config


def test_defaults_when_environment_is_empty() -> None:
    settings = config.load_settings(env={})
    assert settings.output_dir == Path("public")
    assert settings.curated_path == Path("curated.md")
    assert settings.display_timezone == ZoneInfo("Europe/London")


def test_environment_overrides() -> None:
    settings = config.load_settings(
        env={
            config.ENV_OUTPUT_DIR: "site",
            config.ENV_CURATED_PATH: "notes/gw.md",
            config.ENV_TIMEZONE: "UTC",
        }
    )
    assert settings.output_dir == Path("site")
    assert settings.curated_path == Path("notes/gw.md")
    assert settings.display_timezone == ZoneInfo("UTC")


def test_unknown_timezone_raises() -> None:
    with pytest.raises(config.ConfigError, match="Mars/Olympus"):
        config.load_settings(env={config.ENV_TIMEZONE: "Mars/Olympus"})


def test_load_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "\n".join(
            [
                "# comment",
                "export FPL_WEEKLY_OUTPUT_DIR=from-file",
                'FPL_WEEKLY_CURATED_PATH="quoted.md"',
                "FPL_WEEKLY_TIMEZONE=UTC # trailing comment",
                "not a pair",
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.delenv("FPL_WEEKLY_OUTPUT_DIR", raising=False)
    monkeypatch.delenv("FPL_WEEKLY_TIMEZONE", raising=False)
    monkeypatch.setenv("FPL_WEEKLY_CURATED_PATH", "already-set.md")

    config.load_env_file(env_file)

    assert os.environ["FPL_WEEKLY_OUTPUT_DIR"] == "from-file"
    assert os.environ["FPL_WEEKLY_TIMEZONE"] == "UTC"
    assert os.environ["FPL_WEEKLY_CURATED_PATH"] == "already-set.md"


def test_load_settings_reads_env_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / ".env").write_text("FPL_WEEKLY_OUTPUT_DIR=docs\n", encoding="utf-8")
    monkeypatch.delenv("FPL_WEEKLY_OUTPUT_DIR", raising=False)
    monkeypatch.chdir(tmp_path)

    settings = config.load_settings()
    assert settings.output_dir == Path("docs")


def test_missing_env_file_is_ignored(tmp_path: Path) -> None:
    config.load_env_file(tmp_path / "absent.env")
