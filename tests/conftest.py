"""Shared payload builders for the test suite."""

from __future__ import annotations

from typing import Any

import pytest


def make_player(player_id: int, **overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": player_id,
        "web_name": f"Player{player_id}",
        "team": 1,
        "element_type": 3,
        "status": "a",
        "news": "",
        "selected_by_percent": "1.0",
        "form": "0.0",
        "transfers_in_event": 0,
        "transfers_out_event": 0,
        "cost_change_event": 0,
        "now_cost": 55,
    }
    record.update(overrides)
    return record


def make_payload(
    *,
    events: list[dict[str, Any]] | None = None,
    elements: list[dict[str, Any]] | None = None,
    fixtures: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    return {
        "bootstrap": {
            "teams": [
                {"id": 1, "name": "Arsenal", "short_name": "ARS"},
                {"id": 2, "name": "Chelsea", "short_name": "CHE"},
                {"id": 3, "name": "Liverpool", "short_name": "LIV"},
            ],
            "events": events
            if events is not None
            else [
                {
                    "id": 1,
                    "name": "Gameweek 1",
                    "deadline_time": "2025-08-15T17:30:00Z",
                    "is_current": True,
                    "finished": False,
                },
                {
                    "id": 2,
                    "name": "Gameweek 2",
                    "deadline_time": "2025-08-22T17:30:00Z",
                    "is_next": True,
                },
            ],
            "elements": elements if elements is not None else [make_player(1)],
        },
        "fixtures": fixtures if fixtures is not None else [],
    }


@pytest.fixture
def sample_payload() -> dict[str, Any]:
    return make_payload(
        elements=[
            make_player(
                1,
                web_name="Salah",
                team=3,
                selected_by_percent="45.2",
                form="8.5",
                transfers_in_event=150000,
                cost_change_event=1,
            ),
            make_player(
                2,
                web_name="Saka",
                team=1,
                status="d",
                news="Knock - 75% chance of playing",
                selected_by_percent="30.1",
                form="6.0",
                transfers_out_event=90000,
            ),
            make_player(
                3,
                web_name="Palmer",
                team=2,
                selected_by_percent="25.0",
                form="7.1",
                transfers_in_event=80000,
                cost_change_event=-1,
            ),
        ],
        fixtures=[
            {
                "id": 11,
                "event": 2,
                "team_h": 1,
                "team_a": 2,
                "kickoff_time": "2025-08-23T14:00:00Z",
                "team_h_difficulty": 4,
                "team_a_difficulty": 4,
            },
            {
                "id": 12,
                "event": 2,
                "team_h": 3,
                "team_a": 1,
                "kickoff_time": "2025-08-23T11:30:00Z",
                "team_h_difficulty": 5,
                "team_a_difficulty": 3,
            },
            {
                "id": 13,
                "event": 2,
                "team_h": 2,
                "team_a": 3,
                "kickoff_time": "2025-08-24T15:30:00Z",
                "team_h_difficulty": 5,
                "team_a_difficulty": 3,
            },
            {
                "id": 14,
                "event": 1,
                "team_h": 2,
                "team_a": 1,
                "kickoff_time": "2025-08-16T15:00:00Z",
                "team_h_difficulty": 4,
                "team_a_difficulty": 4,
            },
            {
                "id": 15,
                "event": None,
                "team_h": 3,
                "team_a": 2,
                "kickoff_time": None,
            },
        ],
    )
