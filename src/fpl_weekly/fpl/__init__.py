"""FPL snapshot parsing, gameweek selection, fixture grouping and player rankings."""

from .fixtures import group_fixtures_by_date
from .gameweek import (
    EmptyDataSetError,
    resolve_reference_gameweek,
    select_reference_gameweek,
)
from .rankings import (
    availability_risks,
    form_leaders,
    price_fallers,
    price_risers,
    top_transfers_in,
    top_transfers_out,
)
from .snapshot import SnapshotError, build_snapshot

__all__ = [
    "EmptyDataSetError",
    "SnapshotError",
    "availability_risks",
    "build_snapshot",
    "form_leaders",
    "group_fixtures_by_date",
    "price_fallers",
    "price_risers",
    "resolve_reference_gameweek",
    "select_reference_gameweek",
    "top_transfers_in",
    "top_transfers_out",
]
