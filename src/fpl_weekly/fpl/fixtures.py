"""Group a gameweek's fixtures into kickoff days."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from typing import cast

from ..types import Fixture
from .utils import FPL_TIMEZONE


def _kickoff(fixture: Fixture) -> datetime:
    # Only called on fixtures that passed the kickoff filter.
    return cast(datetime, fixture.kickoff)


def fixture_day(fixture: Fixture) -> date | None:
    """Calendar day of the kickoff, truncated in UTC."""
    if fixture.kickoff is None:
        return None
    return fixture.kickoff.astimezone(FPL_TIMEZONE).date()


def group_fixtures_by_date(
    fixtures: Iterable[Fixture], gameweek_id: int
) -> dict[date, list[Fixture]]:
    """Return the gameweek's fixtures keyed by day, days and entries in kickoff order.

    Fixtures without a gameweek or without a kickoff time are left out. A blank
    gameweek gives an empty mapping. Equal kickoffs keep their input order.
    """
    buckets: dict[date, list[Fixture]] = {}
    for fixture in fixtures:
        if fixture.gameweek_id != gameweek_id:
            continue
        day = fixture_day(fixture)
        if day is None:
            continue
        buckets.setdefault(day, []).append(fixture)

    return {day: sorted(buckets[day], key=_kickoff) for day in sorted(buckets)}


__all__ = ["fixture_day", "group_fixtures_by_date"]
