"""Markdown rendering of a :class:`WeeklyReport`."""

from __future__ import annotations

from datetime import date, datetime, tzinfo

from .fpl.gameweek import format_deadline, time_until_deadline
from .fpl.utils import FPL_TIMEZONE, normalize_price
from .types import FixtureDay, PlayerEntry, PlayerStatus, WeeklyReport

STATUS_EMOJI = {
    PlayerStatus.AVAILABLE: "✅",
    PlayerStatus.DOUBTFUL: "⚠️",
    PlayerStatus.INJURED: "🤕",
    PlayerStatus.SUSPENDED: "🟥",
    PlayerStatus.UNAVAILABLE: "❌",
}
UNKNOWN_STATUS_EMOJI = "❓"


def _escape(text: str) -> str:
    return text.replace("|", "\\|")


def format_day_heading(day: date) -> str:
    return f"{day:%A} {day.day} {day:%b}"


def format_kickoff(kickoff: datetime) -> str:
    return f"{kickoff.astimezone(FPL_TIMEZONE):%H:%M} UTC"


def format_thousands(count: int) -> str:
    return f"{round(count / 1000)}k"


def format_price_change(cost_change: int) -> str:
    sign = "+" if cost_change > 0 else "-"
    return f"{sign}£{abs(normalize_price(cost_change)):.1f}"


def generate_header(
    report: WeeklyReport, reference_time: datetime, display_tz: tzinfo
) -> str:
    gameweek = report.gameweek
    lines = [
        f"# FPL Weekly - {gameweek.name}\n",
        f"⏰ **{time_until_deadline(gameweek.deadline, reference_time)}**"
        f" until the deadline ({format_deadline(gameweek.deadline, display_tz)})\n",
    ]
    return "\n".join(lines)


def generate_fixtures_section(days: list[FixtureDay]) -> str:
    lines = ["## Fixtures\n"]
    if not days:
        lines.append("*No fixtures scheduled this gameweek.*\n")
        return "\n".join(lines)

    for day in days:
        lines.append(f"### {format_day_heading(day.day)}\n")
        lines.append("| Kickoff | Home | FDR | Away | FDR |")
        lines.append("|---------|------|-----|------|-----|")
        for fixture in day.fixtures:
            lines.append(
                f"| {format_kickoff(fixture.kickoff)} | {fixture.home_team}"
                f" | {fixture.home_difficulty or '-'} | {fixture.away_team}"
                f" | {fixture.away_difficulty or '-'} |"
            )
        lines.append("")
    return "\n".join(lines)


def generate_injury_section(players: list[PlayerEntry]) -> str:
    if not players:
        return ""
    lines = ["## Injury & Availability Watch\n"]
    for player in players:
        emoji = (
            STATUS_EMOJI[player.status]
            if player.status is not None
            else UNKNOWN_STATUS_EMOJI
        )
        line = (
            f"- {emoji} **{player.web_name}** ({player.team_short_name})"
            f" - {player.ownership}% owned"
        )
        if player.news:
            line += f"  \n  _{player.news}_"
        lines.append(line)
    lines.append("")
    return "\n".join(lines)


def _transfer_rows(players: list[PlayerEntry], inbound: bool) -> list[str]:
    rows = []
    for player in players:
        if inbound:
            stat = f"+{format_thousands(player.transfers_in_event)}"
        else:
            stat = f"-{format_thousands(player.transfers_out_event)}"
        rows.append(f"| {player.position} | {_escape(player.web_name)} | {stat} |")
    return rows


def generate_transfers_section(
    transfers_in: list[PlayerEntry], transfers_out: list[PlayerEntry]
) -> str:
    lines = ["## Transfer Trends\n", "### Most Transferred In\n"]
    lines.append("| Pos | Player | Transfers |")
    lines.append("|-----|--------|-----------|")
    lines.extend(_transfer_rows(transfers_in, inbound=True))
    lines.append("")
    lines.append("### Most Transferred Out\n")
    lines.append("| Pos | Player | Transfers |")
    lines.append("|-----|--------|-----------|")
    lines.extend(_transfer_rows(transfers_out, inbound=False))
    lines.append("")
    return "\n".join(lines)


def generate_form_section(players: list[PlayerEntry]) -> str:
    lines = ["## In Form\n"]
    if not players:
        lines.append("*No qualifying players.*\n")
        return "\n".join(lines)
    lines.append("| Pos | Player | Team | Form |")
    lines.append("|-----|--------|------|------|")
    for player in players:
        lines.append(
            f"| {player.position} | {_escape(player.web_name)}"
            f" | {player.team_short_name} | {player.form} pts |"
        )
    lines.append("")
    return "\n".join(lines)


def generate_price_section(
    risers: list[PlayerEntry], fallers: list[PlayerEntry]
) -> str:
    lines = ["## Price Changes\n", "### Risers\n"]
    if risers:
        for player in risers:
            lines.append(
                f"- {player.web_name} {format_price_change(player.cost_change_event)}"
            )
    else:
        lines.append("*No rises this GW yet*")
    lines.append("")
    lines.append("### Fallers\n")
    if fallers:
        for player in fallers:
            lines.append(
                f"- {player.web_name} {format_price_change(player.cost_change_event)}"
            )
    else:
        lines.append("*No falls this GW yet*")
    lines.append("")
    return "\n".join(lines)


def generate_curated_section(report: WeeklyReport, curated: str | None) -> str:
    body = (curated or "").strip()
    if not body:
        body = (
            f"*No curated content yet for {report.gameweek.name}."
            " Check back closer to deadline!*"
        )
    return "\n".join(["## Analysis\n", body, ""])


def render_markdown(
    report: WeeklyReport,
    *,
    curated: str | None = None,
    reference_time: datetime,
    display_tz: tzinfo = FPL_TIMEZONE,
) -> str:
    """Render the full page. ``reference_time`` drives the deadline countdown."""
    sections = [
        generate_header(report, reference_time, display_tz),
        generate_fixtures_section(report.fixture_days),
        generate_injury_section(report.availability_risks),
        generate_transfers_section(report.top_transfers_in, report.top_transfers_out),
        generate_form_section(report.form_leaders),
        generate_price_section(report.price_risers, report.price_fallers),
        generate_curated_section(report, curated),
        f"---\n\nData from FPL API • Updated {reference_time.isoformat()}\n",
    ]
    return "\n".join(section for section in sections if section)


__all__ = [
    "format_day_heading",
    "format_kickoff",
    "format_price_change",
    "render_markdown",
]
