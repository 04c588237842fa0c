"""Build a validated :class:`Snapshot` from the raw provider payload."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any

from ..types import (
    Diagnostic,
    DiagnosticKind,
    Fixture,
    Gameweek,
    Player,
    PlayerStatus,
    Position,
    Snapshot,
    Team,
)
from .utils import parse_decimal, parse_fpl_datetime

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """Raised when the payload is too malformed to build a snapshot from."""


class _Reader:
    """Collects diagnostics while coercing individual fields."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def report(
        self,
        kind: DiagnosticKind,
        collection: str,
        record_id: int | None,
        field: str,
        value: Any,
        message: str,
    ) -> None:
        diagnostic = Diagnostic(
            kind=kind,
            collection=collection,
            record_id=record_id,
            field=field,
            value=repr(value),
            message=message,
        )
        logger.warning(
            "%s %s[%s].%s=%r: %s",
            kind.value,
            collection,
            record_id,
            field,
            value,
            message,
        )
        self.diagnostics.append(diagnostic)

    def decimal(
        self, record: Mapping[str, Any], collection: str, record_id: int, field: str
    ) -> Decimal:
        raw = record.get(field)
        parsed = parse_decimal(raw)
        if parsed is None:
            self.report(
                DiagnosticKind.MALFORMED_NUMERIC_FIELD,
                collection,
                record_id,
                field,
                raw,
                "not a decimal number; treated as 0",
            )
            return Decimal(0)
        return parsed

    def optional_integer(
        self, record: Mapping[str, Any], collection: str, record_id: int, field: str
    ) -> int | None:
        raw = record.get(field)
        if raw is None or raw == "":
            return None
        if isinstance(raw, int) and not isinstance(raw, bool):
            return raw
        try:
            return int(str(raw).strip())
        except ValueError:
            self.report(
                DiagnosticKind.MALFORMED_NUMERIC_FIELD,
                collection,
                record_id,
                field,
                raw,
                "not an integer",
            )
            return None

    def integer(
        self, record: Mapping[str, Any], collection: str, record_id: int, field: str
    ) -> int:
        value = self.optional_integer(record, collection, record_id, field)
        return 0 if value is None else value

    def timestamp(
        self, record: Mapping[str, Any], collection: str, record_id: int, field: str
    ) -> datetime | None:
        raw = record.get(field)
        if not raw:
            return None
        try:
            return parse_fpl_datetime(str(raw))
        except (ValueError, OverflowError):
            self.report(
                DiagnosticKind.MALFORMED_NUMERIC_FIELD,
                collection,
                record_id,
                field,
                raw,
                "not a timestamp; treated as missing",
            )
            return None

    def position(self, record: Mapping[str, Any], record_id: int) -> Position | None:
        raw = record.get("element_type")
        try:
            return Position(int(raw))
        except (TypeError, ValueError):
            self.report(
                DiagnosticKind.UNKNOWN_ENUM_VALUE,
                "elements",
                record_id,
                "element_type",
                raw,
                "unknown position code",
            )
            return None

    def status(self, record: Mapping[str, Any], record_id: int) -> PlayerStatus | None:
        raw = record.get("status")
        try:
            return PlayerStatus(raw)
        except ValueError:
            self.report(
                DiagnosticKind.UNKNOWN_ENUM_VALUE,
                "elements",
                record_id,
                "status",
                raw,
                "unknown status code",
            )
            return None


def _require_id(record: Any, collection: str) -> int:
    if not isinstance(record, Mapping):
        raise SnapshotError(f"Expected an object in '{collection}', got {record!r}")
    raw = record.get("id")
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise SnapshotError(
            f"Record in '{collection}' has no usable id: {raw!r}"
        ) from exc


def _records(container: Mapping[str, Any], key: str) -> list[Any]:
    value = container.get(key) or []
    if not isinstance(value, list):
        raise SnapshotError(f"Expected '{key}' to be a list")
    return value


def _build_team(record: Mapping[str, Any]) -> Team:
    team_id = _require_id(record, "teams")
    name = str(record.get("name") or "")
    return Team(
        id=team_id,
        name=name,
        short_name=str(record.get("short_name") or name[:3].upper() or "???"),
    )


def _build_gameweek(reader: _Reader, record: Mapping[str, Any]) -> Gameweek:
    gameweek_id = _require_id(record, "events")
    return Gameweek(
        id=gameweek_id,
        name=str(record.get("name") or f"Gameweek {gameweek_id}"),
        deadline=reader.timestamp(record, "events", gameweek_id, "deadline_time"),
        is_next=bool(record.get("is_next")),
        is_current=bool(record.get("is_current")),
        finished=bool(record.get("finished")),
    )


def _build_fixture(reader: _Reader, record: Mapping[str, Any]) -> Fixture:
    fixture_id = _require_id(record, "fixtures")
    return Fixture(
        id=fixture_id,
        gameweek_id=reader.optional_integer(record, "fixtures", fixture_id, "event"),
        home_team_id=reader.integer(record, "fixtures", fixture_id, "team_h"),
        away_team_id=reader.integer(record, "fixtures", fixture_id, "team_a"),
        kickoff=reader.timestamp(record, "fixtures", fixture_id, "kickoff_time"),
        home_difficulty=reader.optional_integer(
            record, "fixtures", fixture_id, "team_h_difficulty"
        ),
        away_difficulty=reader.optional_integer(
            record, "fixtures", fixture_id, "team_a_difficulty"
        ),
    )


def _build_player(reader: _Reader, record: Mapping[str, Any]) -> Player:
    player_id = _require_id(record, "elements")
    return Player(
        id=player_id,
        web_name=str(record.get("web_name") or ""),
        team_id=reader.optional_integer(record, "elements", player_id, "team"),
        position=reader.position(record, player_id),
        status=reader.status(record, player_id),
        news=str(record.get("news") or ""),
        ownership=reader.decimal(record, "elements", player_id, "selected_by_percent"),
        form=reader.decimal(record, "elements", player_id, "form"),
        transfers_in_event=reader.integer(
            record, "elements", player_id, "transfers_in_event"
        ),
        transfers_out_event=reader.integer(
            record, "elements", player_id, "transfers_out_event"
        ),
        cost_change_event=reader.integer(
            record, "elements", player_id, "cost_change_event"
        ),
        now_cost=reader.integer(record, "elements", player_id, "now_cost"),
    )


def build_snapshot(payload: Mapping[str, Any]) -> Snapshot:
    """Validate ``{"bootstrap": {...}, "fixtures": [...]}`` into a frozen snapshot.

    Closed-set codes and numeric strings are checked here once, so that the
    ranking and grouping code never sees raw provider values. Problems that
    only affect a single field are recorded in ``Snapshot.diagnostics``.
    """
    if not isinstance(payload, Mapping):
        raise SnapshotError("Snapshot payload must be an object")
    bootstrap = payload.get("bootstrap")
    if not isinstance(bootstrap, Mapping):
        raise SnapshotError("Snapshot payload is missing 'bootstrap'")
    fixtures_raw = payload.get("fixtures") or []
    if not isinstance(fixtures_raw, list):
        raise SnapshotError("Expected 'fixtures' to be a list")

    reader = _Reader()
    teams = tuple(_build_team(record) for record in _records(bootstrap, "teams"))
    gameweeks = tuple(
        sorted(
            (
                _build_gameweek(reader, record)
                for record in _records(bootstrap, "events")
            ),
            key=lambda gameweek: gameweek.id,
        )
    )
    fixtures = tuple(_build_fixture(reader, record) for record in fixtures_raw)
    players = tuple(
        _build_player(reader, record) for record in _records(bootstrap, "elements")
    )

    logger.debug(
        "Snapshot built: %d teams, %d gameweeks, %d fixtures, %d players",
        len(teams),
        len(gameweeks),
        len(fixtures),
        len(players),
    )
    return Snapshot(
        teams=teams,
        gameweeks=gameweeks,
        fixtures=fixtures,
        players=players,
        diagnostics=tuple(reader.diagnostics),
    )


__all__ = ["SnapshotError", "build_snapshot"]
