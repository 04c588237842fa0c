"""Shared type definitions for the weekly report pipeline."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Closed provider enums
# =============================================================================


class Position(IntEnum):
    """FPL ``element_type`` codes."""

    GKP = 1
    DEF = 2
    MID = 3
    FWD = 4

    @property
    def label(self) -> str:
        return self.name


class PlayerStatus(str, Enum):
    """FPL availability status codes."""

    AVAILABLE = "a"
    DOUBTFUL = "d"
    INJURED = "i"
    SUSPENDED = "s"
    UNAVAILABLE = "u"


class DiagnosticKind(str, Enum):
    MALFORMED_NUMERIC_FIELD = "malformed_numeric_field"
    UNKNOWN_ENUM_VALUE = "unknown_enum_value"


# =============================================================================
# Snapshot Models (Pydantic)
# =============================================================================


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Team(_Frozen):
    id: int
    name: str
    short_name: str


class Gameweek(_Frozen):
    """A scheduling round with a transfer deadline."""

    id: int
    name: str
    deadline: datetime | None = None
    is_next: bool = False
    is_current: bool = False
    finished: bool = False


class Fixture(_Frozen):
    """A single match. ``gameweek_id`` is ``None`` until the provider schedules it."""

    id: int
    gameweek_id: int | None = None
    home_team_id: int
    away_team_id: int
    kickoff: datetime | None = None
    home_difficulty: int | None = None
    away_difficulty: int | None = None


class Player(_Frozen):
    """Player record with numeric fields already parsed.

    ``position`` and ``status`` are ``None`` when the provider sent a code
    outside the known set; the occurrence is reported as a diagnostic.
    """

    id: int
    web_name: str
    team_id: int | None = None
    position: Position | None = None
    status: PlayerStatus | None = None
    news: str = ""
    ownership: Decimal = Decimal(0)
    form: Decimal = Decimal(0)
    transfers_in_event: int = 0
    transfers_out_event: int = 0
    cost_change_event: int = 0  # tenths of £m
    now_cost: int = 0  # tenths of £m


class Diagnostic(_Frozen):
    """Non-fatal data problem found while reading the snapshot."""

    kind: DiagnosticKind
    collection: str
    record_id: int | None
    field: str
    value: str
    message: str


class Snapshot(_Frozen):
    """One immutable capture of the provider data set for a single build."""

    teams: tuple[Team, ...] = ()
    gameweeks: tuple[Gameweek, ...] = ()
    fixtures: tuple[Fixture, ...] = ()
    players: tuple[Player, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()

    def team_lookup(self) -> dict[int, Team]:
        return {team.id: team for team in self.teams}


# =============================================================================
# Output record handed to the presentation adapter
# =============================================================================

SelectionMethod = Literal[
    "is_next_flag", "is_current_flag", "first_unfinished", "last_gameweek"
]


class PlayerEntry(_Frozen):
    """Ranked player with display fields resolved."""

    id: int
    web_name: str
    team_short_name: str
    position: str
    status: PlayerStatus | None
    news: str
    ownership: Decimal
    form: Decimal
    transfers_in_event: int
    transfers_out_event: int
    cost_change_event: int
    now_cost: int


class FixtureEntry(_Frozen):
    id: int
    kickoff: datetime
    home_team: str
    away_team: str
    home_difficulty: int | None
    away_difficulty: int | None


class FixtureDay(_Frozen):
    day: date
    fixtures: list[FixtureEntry]


class WeeklyReport(_Frozen):
    """Everything the presentation adapter needs, already filtered and ordered."""

    gameweek: Gameweek
    selection_method: SelectionMethod
    fixture_days: list[FixtureDay] = Field(default_factory=list)
    top_transfers_in: list[PlayerEntry] = Field(default_factory=list)
    top_transfers_out: list[PlayerEntry] = Field(default_factory=list)
    form_leaders: list[PlayerEntry] = Field(default_factory=list)
    availability_risks: list[PlayerEntry] = Field(default_factory=list)
    price_risers: list[PlayerEntry] = Field(default_factory=list)
    price_fallers: list[PlayerEntry] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)


__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "Fixture",
    "FixtureDay",
    "FixtureEntry",
    "Gameweek",
    "Player",
    "PlayerEntry",
    "PlayerStatus",
    "Position",
    "SelectionMethod",
    "Snapshot",
    "Team",
    "WeeklyReport",
]
