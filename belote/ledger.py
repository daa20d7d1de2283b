"""Score sheet state: appended rounds, running totals and undo."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .exceptions import BeloteError, RoundRejected
from .rules_schema import GameConfig
from .scoring import RoundDeclaration, TeamRoundScore, score_round
from .seating import TableLayout, Team
from .validation import ensure_valid_round
from .values import Announcement, Contract, Realized, Remark

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundResult:
    """One team's line on the score sheet for a single mène."""

    round_number: int
    contract: Contract
    fulfilled: bool
    realized: Realized
    gap: int
    cumulative_theoretical_gap: int
    announcement: Announcement
    remark: Remark
    points_awarded: int
    cumulative_total: int
    theoretical_points: int = 0

    @property
    def chute(self) -> str:
        return "Non" if self.fulfilled else "Oui"

    def as_row(self) -> dict:
        return {
            "mene": self.round_number,
            "contrat": self.contract.label,
            "chute": self.chute,
            "realise": self.realized.label,
            "ecart": self.gap,
            "ecarts_theo": self.cumulative_theoretical_gap,
            "belote": "" if self.announcement is Announcement.NONE else self.announcement.label,
            "remarques": "" if self.remark is Remark.NONE else self.remark.label,
            "points": self.points_awarded,
            "total": self.cumulative_total,
        }


RoundPair = Tuple[RoundResult, RoundResult]


def _next_row(
    previous: Optional[RoundResult],
    round_number: int,
    declaration: RoundDeclaration,
    score: TeamRoundScore,
) -> RoundResult:
    prior_total = previous.cumulative_total if previous else 0
    prior_gap = previous.cumulative_theoretical_gap if previous else 0
    counted_gap = score.gap if declaration.contract.is_declared else 0
    return RoundResult(
        round_number=round_number,
        contract=declaration.contract,
        fulfilled=score.fulfilled,
        realized=declaration.realized,
        gap=score.gap,
        cumulative_theoretical_gap=prior_gap + counted_gap,
        announcement=declaration.announcement,
        remark=declaration.remark,
        points_awarded=score.points,
        cumulative_total=prior_total + score.points,
        theoretical_points=score.theoretical_points,
    )


@dataclass
class GameLedger:
    """Ordered rounds for both teams, index-aligned."""

    rows: List[RoundPair] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def last(self) -> Optional[RoundPair]:
        return self.rows[-1] if self.rows else None

    @property
    def totals(self) -> Tuple[int, int]:
        if not self.rows:
            return (0, 0)
        team_a, team_b = self.rows[-1]
        return (team_a.cumulative_total, team_b.cumulative_total)

    @property
    def theoretical_gaps(self) -> Tuple[int, int]:
        if not self.rows:
            return (0, 0)
        team_a, team_b = self.rows[-1]
        return (team_a.cumulative_theoretical_gap, team_b.cumulative_theoretical_gap)

    def team_rows(self, team: int) -> List[RoundResult]:
        return [pair[team] for pair in self.rows]

    def add_round(self, team_a: RoundDeclaration, team_b: RoundDeclaration) -> RoundPair:
        """Validate, score and append a round.

        Raises:
            RoundRejected: the declarations break a round rule; nothing is appended.
        """
        ensure_valid_round(team_a, team_b)
        score = score_round(team_a, team_b)
        previous = self.last
        round_number = len(self.rows) + 1
        pair = (
            _next_row(previous[0] if previous else None, round_number, team_a, score.team_a),
            _next_row(previous[1] if previous else None, round_number, team_b, score.team_b),
        )
        self.rows.append(pair)
        return pair

    def undo_round(self) -> Optional[RoundPair]:
        if not self.rows:
            return None
        return self.rows.pop()

    def clear(self) -> None:
        self.rows.clear()


@dataclass
class GameSession:
    """A game in progress: teams, seating, configuration and the ledger."""

    config: GameConfig = field(default_factory=GameConfig)
    teams: List[Team] = field(init=False)
    ledger: GameLedger = field(default_factory=GameLedger)
    layout: Optional[TableLayout] = None

    def __post_init__(self) -> None:
        self.teams = [Team(name) for name in self.config.team_names]

    @property
    def totals(self) -> Tuple[int, int]:
        return self.ledger.totals

    @property
    def dealer(self) -> Optional[int]:
        return self.layout.dealer if self.layout else None

    def add_round(self, team_a: RoundDeclaration, team_b: RoundDeclaration) -> RoundPair:
        try:
            pair = self.ledger.add_round(team_a, team_b)
        except RoundRejected as exc:
            logger.warning("Round %d rejected: %s", len(self.ledger) + 1, exc)
            raise
        if self.layout is not None and self.config.rotate_dealer:
            self.layout = self.layout.advance_dealer()
        logger.info(
            "Round %d added: %s=%d, %s=%d",
            pair[0].round_number,
            self.teams[0].name,
            pair[0].points_awarded,
            self.teams[1].name,
            pair[1].points_awarded,
        )
        winner = self.winner()
        if winner is not None:
            logger.info("%s wins with %d points.", self.teams[winner].name, self.totals[winner])
        return pair

    def undo_round(self) -> Optional[RoundPair]:
        pair = self.ledger.undo_round()
        if pair is None:
            return None
        if self.layout is not None and self.config.rotate_dealer:
            self.layout = self.layout.rewind_dealer()
        logger.info("Round %d undone.", pair[0].round_number)
        return pair

    def restart(self) -> None:
        """Clear every round; teams, seating and dealer are kept."""
        self.ledger.clear()
        logger.info("Game restarted.")

    def winner(self) -> Optional[int]:
        """Index of the team at or past the victory threshold, if any."""
        threshold = self.config.victory_threshold
        for index, total in enumerate(self.totals):
            if total >= threshold:
                return index
        return None

    def rename_team(self, index: int, name: str) -> Team:
        if index not in (0, 1):
            raise IndexError(f"Team index must be 0 or 1, got {index}.")
        name = name.strip()
        if not name:
            raise BeloteError("Team names must not be empty.")
        if name == self.teams[1 - index].name:
            raise BeloteError("Both teams cannot share the same name.")
        self.teams[index] = Team(name)
        return self.teams[index]

    def set_layout(self, seats: List[str], dealer_name: str) -> TableLayout:
        self.layout = TableLayout.build(self.teams[0], self.teams[1], seats, dealer_name)
        logger.info("Player layout saved, first dealer: %s", self.layout.dealer_name)
        return self.layout
