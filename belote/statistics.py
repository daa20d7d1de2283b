"""Summary statistics over a game's score sheet."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .ledger import GameLedger, RoundResult


@dataclass(frozen=True)
class TeamStatistics:
    contracts_played: int
    contract_percentage: float
    success_rate: float
    average_points: float
    belote_count: int
    coinche_count: int
    contract_distribution: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class GameStatistics:
    total_rounds: int
    teams: Tuple[TeamStatistics, TeamStatistics]
    lead_changes: int
    score_progression: List[Tuple[int, int, int]]


def team_statistics(rows: Sequence[RoundResult]) -> TeamStatistics:
    declared = [row for row in rows if row.contract.is_declared]
    succeeded = [row for row in declared if row.fulfilled]
    rounds = len(rows)
    return TeamStatistics(
        contracts_played=len(declared),
        contract_percentage=100.0 * len(declared) / rounds if rounds else 0.0,
        success_rate=100.0 * len(succeeded) / (len(declared) or 1),
        average_points=sum(row.points_awarded for row in rows) / rounds if rounds else 0.0,
        belote_count=sum(1 for row in rows if row.announcement.points > 0),
        coinche_count=sum(1 for row in rows if row.remark.is_challenge),
        contract_distribution=dict(Counter(row.contract.label for row in declared)),
    )


def count_lead_changes(totals: Sequence[Tuple[int, int]]) -> int:
    """Count how often the leading team changed; ties keep the previous leader."""
    changes = 0
    leader: Optional[int] = None
    for total_a, total_b in totals:
        if total_a == total_b:
            continue
        current = 0 if total_a > total_b else 1
        if leader is not None and current != leader:
            changes += 1
        leader = current
    return changes


def compute_statistics(ledger: GameLedger) -> Optional[GameStatistics]:
    if not ledger.rows:
        return None
    totals = [(a.cumulative_total, b.cumulative_total) for a, b in ledger.rows]
    return GameStatistics(
        total_rounds=len(ledger),
        teams=(team_statistics(ledger.team_rows(0)), team_statistics(ledger.team_rows(1))),
        lead_changes=count_lead_changes(totals),
        score_progression=[(index, a, b) for index, (a, b) in enumerate(totals, start=1)],
    )
