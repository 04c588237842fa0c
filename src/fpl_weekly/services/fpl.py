"""FPL API integration implemented as importable helpers."""

from __future__ import annotations

import asyncio
from typing import Any

from ..fpl import utils as _utils


class FPLServiceError(RuntimeError):
    """Raised when FPL data cannot be retrieved."""


def _run(coro: Any) -> Any:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    return loop.run_until_complete(coro)  # pragma: no cover


async def _call(func: Any, *args: Any, **kwargs: Any) -> Any:
    try:
        return await func(*args, **kwargs)
    except Exception as exc:  # pragma: no cover - network failures
        raise FPLServiceError(str(exc)) from exc


async def fetch_raw_payload() -> dict[str, Any]:
    """Fetch ``bootstrap-static`` and ``fixtures`` once, without retries."""
    fpl, session = await _utils.create_fpl_session()
    try:
        bootstrap = _utils.get_bootstrap_data(fpl)
        fixtures = await _utils.get_fixtures_data(fpl)
    finally:
        await _utils.safe_close_session(session)
    return {"bootstrap": bootstrap, "fixtures": fixtures}


def get_raw_payload() -> dict[str, Any]:
    return _run(_call(fetch_raw_payload))  # type: ignore[no-any-return]


__all__ = [
    "FPLServiceError",
    "fetch_raw_payload",
    "get_raw_payload",
]
