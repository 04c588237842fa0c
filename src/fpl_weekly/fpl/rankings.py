"""Rank players by transfer activity, form, price movement and availability."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import Decimal

from ..types import Player, PlayerStatus

FORM_MIN_OWNERSHIP = Decimal("2.0")
RISK_MIN_OWNERSHIP = Decimal("3.0")


@dataclass(frozen=True, slots=True)
class RankingRule:
    """Filter, sort key and cut-off for one ranked list."""

    name: str
    key: Callable[[Player], int | Decimal]
    predicate: Callable[[Player], bool] | None = None
    descending: bool = True
    limit: int = 5


def apply_ranking(
    players: Iterable[Player], rule: RankingRule, limit: int | None = None
) -> list[Player]:
    """Filter, stable-sort and cut ``players`` according to ``rule``.

    Ties keep the snapshot order, so the provider's own ordering decides
    between equal values. Returns an empty list when nothing matches.
    """
    cutoff = rule.limit if limit is None else limit
    if cutoff <= 0:
        return []
    candidates = [p for p in players if rule.predicate is None or rule.predicate(p)]
    # list.sort with reverse=True keeps equal elements in their original order
    candidates.sort(key=rule.key, reverse=rule.descending)
    return candidates[:cutoff]


def _is_form_candidate(player: Player) -> bool:
    return player.ownership > FORM_MIN_OWNERSHIP and player.form > 0


def _is_availability_risk(player: Player) -> bool:
    # Unknown status codes are excluded rather than assumed unavailable.
    if player.status is None or player.status is PlayerStatus.AVAILABLE:
        return False
    return player.ownership > RISK_MIN_OWNERSHIP


TOP_TRANSFERS_IN = RankingRule(
    name="top_transfers_in", key=lambda p: p.transfers_in_event
)
TOP_TRANSFERS_OUT = RankingRule(
    name="top_transfers_out", key=lambda p: p.transfers_out_event
)
FORM_LEADERS = RankingRule(
    name="form_leaders", key=lambda p: p.form, predicate=_is_form_candidate
)
AVAILABILITY_RISKS = RankingRule(
    name="availability_risks",
    key=lambda p: p.ownership,
    predicate=_is_availability_risk,
    limit=8,
)
PRICE_RISERS = RankingRule(
    name="price_risers",
    key=lambda p: p.cost_change_event,
    predicate=lambda p: p.cost_change_event > 0,
)
PRICE_FALLERS = RankingRule(
    name="price_fallers",
    key=lambda p: p.cost_change_event,
    predicate=lambda p: p.cost_change_event < 0,
    descending=False,
)

RANKINGS: tuple[RankingRule, ...] = (
    TOP_TRANSFERS_IN,
    TOP_TRANSFERS_OUT,
    FORM_LEADERS,
    AVAILABILITY_RISKS,
    PRICE_RISERS,
    PRICE_FALLERS,
)


def top_transfers_in(
    players: Iterable[Player], limit: int | None = None
) -> list[Player]:
    return apply_ranking(players, TOP_TRANSFERS_IN, limit)


def top_transfers_out(
    players: Iterable[Player], limit: int | None = None
) -> list[Player]:
    return apply_ranking(players, TOP_TRANSFERS_OUT, limit)


def form_leaders(players: Iterable[Player], limit: int | None = None) -> list[Player]:
    """Players over 2% ownership with positive form, best form first."""
    return apply_ranking(players, FORM_LEADERS, limit)


def availability_risks(
    players: Iterable[Player], limit: int | None = None
) -> list[Player]:
    """Flagged players (doubtful, injured, suspended, unavailable) over 3% ownership."""
    return apply_ranking(players, AVAILABILITY_RISKS, limit)


def price_risers(
    players: Iterable[Player], limit: int | None = None
) -> list[Player]:
    return apply_ranking(players, PRICE_RISERS, limit)


def price_fallers(players: Iterable[Player], limit: int | None = None) -> list[Player]:
    """Biggest price drops first."""
    return apply_ranking(players, PRICE_FALLERS, limit)


__all__ = [
    "AVAILABILITY_RISKS",
    "FORM_LEADERS",
    "PRICE_FALLERS",
    "PRICE_RISERS",
    "RANKINGS",
    "TOP_TRANSFERS_IN",
    "TOP_TRANSFERS_OUT",
    "RankingRule",
    "apply_ranking",
    "availability_risks",
    "form_leaders",
    "price_fallers",
    "price_risers",
    "top_transfers_in",
    "top_transfers_out",
]
