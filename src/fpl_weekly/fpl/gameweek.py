"""Select the reference gameweek and describe its deadline."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, tzinfo

from ..types import Gameweek, SelectionMethod
from .utils import FPL_TIMEZONE


class EmptyDataSetError(ValueError):
    """Raised when the snapshot contains no gameweeks."""


GameweekPicker = Callable[[Sequence[Gameweek]], Gameweek | None]


def _first(
    gameweeks: Sequence[Gameweek], predicate: Callable[[Gameweek], bool]
) -> Gameweek | None:
    return next((gameweek for gameweek in gameweeks if predicate(gameweek)), None)


# The report looks forward to the next deadline; it only falls back to the
# running or most recent gameweek when the season has no upcoming deadline.
# Evaluated top to bottom over gameweeks sorted by id; first match wins.
SELECTION_RULES: tuple[tuple[SelectionMethod, GameweekPicker], ...] = (
    ("is_next_flag", lambda gws: _first(gws, lambda gw: gw.is_next)),
    ("is_current_flag", lambda gws: _first(gws, lambda gw: gw.is_current)),
    ("first_unfinished", lambda gws: _first(gws, lambda gw: not gw.finished)),
    ("last_gameweek", lambda gws: gws[-1]),
)


def resolve_reference_gameweek(
    gameweeks: Sequence[Gameweek],
) -> tuple[Gameweek, SelectionMethod]:
    """Return the reference gameweek and the rule that selected it."""
    if not gameweeks:
        raise EmptyDataSetError("No gameweek data found in FPL bootstrap response")
    ordered = sorted(gameweeks, key=lambda gameweek: gameweek.id)
    for method, picker in SELECTION_RULES:
        selected = picker(ordered)
        if selected is not None:
            return selected, method
    raise AssertionError("last_gameweek rule always matches")  # pragma: no cover


def select_reference_gameweek(gameweeks: Sequence[Gameweek]) -> Gameweek:
    return resolve_reference_gameweek(gameweeks)[0]


def time_until_deadline(deadline: datetime | None, reference_time: datetime) -> str:
    """Compact countdown to ``deadline``: ``"2d 5h"``, ``"3h 12m"``, ``"45m"``."""
    if deadline is None:
        return "TBC"
    diff = deadline - reference_time.astimezone(FPL_TIMEZONE)
    if diff.total_seconds() < 0:
        return "PASSED"
    seconds = int(diff.total_seconds())
    days, remainder = divmod(seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes = remainder // 60
    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_deadline(deadline: datetime | None, local_tz: tzinfo = FPL_TIMEZONE) -> str:
    if deadline is None:
        return "TBC"
    local = deadline.astimezone(local_tz)
    return f"{local:%a} {local.day} {local:%b}, {local:%H:%M} {local.tzname()}"


__all__ = [
    "SELECTION_RULES",
    "EmptyDataSetError",
    "format_deadline",
    "resolve_reference_gameweek",
    "select_reference_gameweek",
    "time_until_deadline",
]
