"""Shared helpers for interacting with the public FPL API."""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any
from zoneinfo import ZoneInfo

import aiohttp
from dateutil.parser import parse as parse_datetime  # type: ignore[import-untyped]

DEFAULT_TIMEZONE = ZoneInfo("Europe/London")
FPL_TIMEZONE = ZoneInfo("UTC")

FPLClient = Any

_FPL_CLASS: type[Any] | None = None


def _ensure_fpl_class() -> type[Any]:
    """Return and cache the external ``FPL`` client class."""

    global _FPL_CLASS
    if _FPL_CLASS is None:
        module = importlib.import_module("fpl")
        if not hasattr(module, "FPL"):
            raise ImportError(
                "Imported 'fpl' module does not expose the expected 'FPL' client"
            )
        _FPL_CLASS = module.FPL
    return _FPL_CLASS


async def create_fpl_session() -> tuple[FPLClient, aiohttp.ClientSession]:
    """Open a session and build the client, which loads bootstrap-static."""
    fpl_class = _ensure_fpl_class()
    session = aiohttp.ClientSession()
    try:
        fpl = fpl_class(session)
    except BaseException:
        await session.close()
        raise
    return fpl, session


BOOTSTRAP_COLLECTIONS = ("teams", "elements", "events")


def _bootstrap_collection(fpl: FPLClient, name: str) -> list[dict[str, Any]]:
    # The client stores each bootstrap list as a mapping keyed by id.
    value = getattr(fpl, name, None) or {}
    if isinstance(value, Mapping):
        return list(value.values())
    return list(value)


def get_bootstrap_data(fpl: FPLClient) -> dict[str, Any]:
    """Return the ``bootstrap-static`` collections the client loaded on creation."""
    return {name: _bootstrap_collection(fpl, name) for name in BOOTSTRAP_COLLECTIONS}


async def get_fixtures_data(fpl: FPLClient) -> list[dict[str, Any]]:
    fixtures = await fpl.get_fixtures(return_json=True)
    return list(fixtures)


async def safe_close_session(session: aiohttp.ClientSession) -> None:
    await session.close()


def normalize_price(now_cost: int) -> float:
    return round(now_cost / 10.0, 1)


def parse_decimal(value: str | float | int | None) -> Decimal | None:
    """Parse an FPL decimal-as-string field.

    Returns ``None`` when the value cannot be read as a finite number; an
    empty or missing value is not an error and parses as zero.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return Decimal(0)
    if isinstance(value, bool):
        return None
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not parsed.is_finite():
        return None
    return parsed


def parse_fpl_datetime(value: str) -> datetime:
    parsed = parse_datetime(value)
    if not isinstance(parsed, datetime):
        raise ValueError(f"Expected datetime, got {type(parsed)}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=FPL_TIMEZONE)
    return parsed.astimezone(FPL_TIMEZONE)


__all__ = [
    "DEFAULT_TIMEZONE",
    "FPL_TIMEZONE",
    "create_fpl_session",
    "get_bootstrap_data",
    "get_fixtures_data",
    "normalize_price",
    "parse_decimal",
    "parse_fpl_datetime",
    "safe_close_session",
]
