"""Core pipeline orchestration for the weekly FPL report."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Literal

from .config import BuildSettings
from .fpl import rankings
from .fpl.fixtures import group_fixtures_by_date
from .fpl.gameweek import EmptyDataSetError, resolve_reference_gameweek
from .fpl.snapshot import SnapshotError, build_snapshot
from .fpl.utils import FPL_TIMEZONE
from .report import render_markdown
from .services.fpl import FPLServiceError, get_raw_payload
from .types import (
    FixtureDay,
    FixtureEntry,
    Player,
    PlayerEntry,
    Snapshot,
    Team,
    WeeklyReport,
)

LogLevel = Literal["info", "success", "warning", "error", "debug"]
LogCallback = Callable[[str, LogLevel], None]
OutputFormat = Literal["markdown", "json"]

MARKDOWN_FILENAME = "index.md"
JSON_FILENAME = "report.json"
RAW_FILENAME = "data.json"
UNKNOWN_TEAM = "???"


class BuildError(RuntimeError):
    """Raised when a build step fails."""


@dataclass(slots=True)
class BuildOutcome:
    """Metadata about a completed build run."""

    report: WeeklyReport
    written: dict[str, Path] = field(default_factory=dict)


def _noop_log(_message: str, _level: LogLevel) -> None:
    return None


def _team_name(teams: Mapping[int, Team], team_id: int | None) -> str:
    team = teams.get(team_id) if team_id is not None else None
    return team.short_name if team else UNKNOWN_TEAM


def _player_entry(player: Player, teams: Mapping[int, Team]) -> PlayerEntry:
    return PlayerEntry(
        id=player.id,
        web_name=player.web_name,
        team_short_name=_team_name(teams, player.team_id),
        position=player.position.label if player.position is not None else "UNK",
        status=player.status,
        news=player.news,
        ownership=player.ownership,
        form=player.form,
        transfers_in_event=player.transfers_in_event,
        transfers_out_event=player.transfers_out_event,
        cost_change_event=player.cost_change_event,
        now_cost=player.now_cost,
    )


def _entries(players: Iterable[Player], teams: Mapping[int, Team]) -> list[PlayerEntry]:
    return [_player_entry(player, teams) for player in players]


def build_weekly_report(snapshot: Snapshot) -> WeeklyReport:
    """Derive every report section from ``snapshot``.

    Pure: the same snapshot always gives an equal report. Raises
    :class:`EmptyDataSetError` when there are no gameweeks.
    """
    gameweek, method = resolve_reference_gameweek(snapshot.gameweeks)
    teams = snapshot.team_lookup()
    players = snapshot.players

    fixture_days = [
        FixtureDay(
            day=day,
            fixtures=[
                FixtureEntry(
                    id=fixture.id,
                    kickoff=fixture.kickoff,  # type: ignore[arg-type]
                    home_team=_team_name(teams, fixture.home_team_id),
                    away_team=_team_name(teams, fixture.away_team_id),
                    home_difficulty=fixture.home_difficulty,
                    away_difficulty=fixture.away_difficulty,
                )
                for fixture in day_fixtures
            ],
        )
        for day, day_fixtures in group_fixtures_by_date(
            snapshot.fixtures, gameweek.id
        ).items()
    ]

    return WeeklyReport(
        gameweek=gameweek,
        selection_method=method,
        fixture_days=fixture_days,
        top_transfers_in=_entries(rankings.top_transfers_in(players), teams),
        top_transfers_out=_entries(rankings.top_transfers_out(players), teams),
        form_leaders=_entries(rankings.form_leaders(players), teams),
        availability_risks=_entries(rankings.availability_risks(players), teams),
        price_risers=_entries(rankings.price_risers(players), teams),
        price_fallers=_entries(rankings.price_fallers(players), teams),
        diagnostics=list(snapshot.diagnostics),
    )


def format_report_json(report: WeeklyReport, *, pretty: bool = True) -> str:
    return report.model_dump_json(indent=2 if pretty else None)


def load_raw_payload(path: Path) -> dict[str, Any]:
    """Read a payload previously saved with ``--save-raw``."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise BuildError(f"Snapshot file missing: {path}") from exc
    except json.JSONDecodeError as exc:
        raise BuildError(f"Snapshot file is not valid JSON: {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise BuildError(f"Snapshot file must contain an object: {path}")
    return payload


def _read_curated(path: Path | None) -> str | None:
    if path is None or not path.exists():
        return None
    return path.read_text(encoding="utf-8")


def build(
    *,
    settings: BuildSettings,
    input_path: Path | None = None,
    formats: Sequence[OutputFormat] = ("markdown", "json"),
    save_raw: bool = False,
    dry_run: bool = False,
    reference_time: datetime | None = None,
    fetch: Callable[[], dict[str, Any]] = get_raw_payload,
    log: LogCallback = _noop_log,
) -> BuildOutcome:
    """Fetch (or load) a snapshot, build the report and write the artifacts."""

    if input_path is not None:
        log(f"Loading snapshot from {input_path}", "info")
        payload = load_raw_payload(input_path)
    else:
        log("Fetching FPL data...", "info")
        try:
            payload = fetch()
        except FPLServiceError as exc:
            raise BuildError(f"Failed to fetch FPL data: {exc}") from exc
        log("Data fetched", "success")

    try:
        snapshot = build_snapshot(payload)
        report = build_weekly_report(snapshot)
    except (SnapshotError, EmptyDataSetError) as exc:
        raise BuildError(str(exc)) from exc

    for diagnostic in report.diagnostics:
        log(
            f"{diagnostic.kind.value}: {diagnostic.collection} "
            f"#{diagnostic.record_id} {diagnostic.field}={diagnostic.value}",
            "warning",
        )
    log(
        f"Report built for {report.gameweek.name} ({report.selection_method})",
        "success",
    )

    now = reference_time or datetime.now(UTC)
    contents: dict[str, tuple[Path, str]] = {}
    for fmt in formats:
        if fmt == "markdown":
            text = render_markdown(
                report,
                curated=_read_curated(settings.curated_path),
                reference_time=now.astimezone(FPL_TIMEZONE),
                display_tz=settings.display_timezone,
            )
            contents["markdown"] = (settings.output_dir / MARKDOWN_FILENAME, text)
        elif fmt == "json":
            contents["json"] = (
                settings.output_dir / JSON_FILENAME,
                format_report_json(report),
            )
        else:
            raise BuildError(f"Unsupported format: {fmt}")
    if save_raw:
        contents["raw"] = (
            settings.output_dir / RAW_FILENAME,
            json.dumps(payload, indent=2),
        )

    outcome = BuildOutcome(report=report)
    if dry_run:
        log("Dry run: nothing written", "info")
        return outcome

    try:
        settings.output_dir.mkdir(parents=True, exist_ok=True)
        for key, (path, text) in contents.items():
            path.write_text(text, encoding="utf-8")
            outcome.written[key] = path
            log(f"Written to {path}", "success")
    except OSError as exc:
        raise BuildError(f"Could not write artifacts: {exc}") from exc
    return outcome


__all__ = [
    "BuildError",
    "BuildOutcome",
    "LogCallback",
    "LogLevel",
    "build",
    "build_weekly_report",
    "format_report_json",
    "load_raw_payload",
]
