"""Build settings read from the environment and an optional ``.env`` file."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .fpl.utils import DEFAULT_TIMEZONE

ENV_OUTPUT_DIR = "FPL_WEEKLY_OUTPUT_DIR"
ENV_CURATED_PATH = "FPL_WEEKLY_CURATED_PATH"
ENV_TIMEZONE = "FPL_WEEKLY_TIMEZONE"

DEFAULT_OUTPUT_DIR = Path("public")
DEFAULT_CURATED_PATH = Path("curated.md")


class ConfigError(ValueError):
    """Raised when a setting has an unusable value."""


@dataclass(frozen=True, slots=True)
class BuildSettings:
    output_dir: Path = DEFAULT_OUTPUT_DIR
    curated_path: Path = DEFAULT_CURATED_PATH
    display_timezone: ZoneInfo = DEFAULT_TIMEZONE


def load_env_file(path: Path) -> None:
    """Load simple KEY=VALUE pairs from an ``.env`` file into ``os.environ``.

    Variables already set in the environment win over the file.
    """

    try:
        raw_lines = path.read_text(encoding="utf-8").splitlines()
    except FileNotFoundError:
        return

    for raw_line in raw_lines:
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].strip()
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if value and value[0] in {'"', "'"} and value[-1] == value[0]:
            value = value[1:-1]
        else:
            value = value.split(" #", 1)[0].rstrip()

        os.environ.setdefault(key, os.path.expandvars(value))


def _timezone(name: str | None) -> ZoneInfo:
    if not name:
        return DEFAULT_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"Unknown timezone in {ENV_TIMEZONE}: {name!r}") from exc


def load_settings(
    env: Mapping[str, str] | None = None, env_file: Path | None = None
) -> BuildSettings:
    """Resolve settings from ``env`` (``os.environ`` by default)."""
    if env is None:
        load_env_file(env_file or Path.cwd() / ".env")
        env = os.environ
    return BuildSettings(
        output_dir=Path(env.get(ENV_OUTPUT_DIR) or DEFAULT_OUTPUT_DIR),
        curated_path=Path(env.get(ENV_CURATED_PATH) or DEFAULT_CURATED_PATH),
        display_timezone=_timezone(env.get(ENV_TIMEZONE)),
    )


__all__ = [
    "BuildSettings",
    "ConfigError",
    "load_env_file",
    "load_settings",
]
