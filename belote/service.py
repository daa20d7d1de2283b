"""Convenience service layer for UI and API consumers."""

from __future__ import annotations

import threading
from dataclasses import asdict, dataclass
from typing import List, Mapping, Optional, Sequence, Tuple

from .ledger import GameSession, RoundPair, RoundResult
from .rules_schema import GameConfig
from .scoring import RoundDeclaration
from .statistics import GameStatistics, compute_statistics
from .validation import ValidationResult, can_submit_round, validate_round
from .values import announcement_labels, contract_labels, realized_labels, remark_labels


@dataclass
class RoundRowView:
    mene: int
    contrat: str
    chute: str
    realise: str
    ecart: int
    ecarts_theo: int
    belote: str
    remarques: str
    points: int
    total: int


@dataclass
class TeamView:
    name: str
    players: List[str]
    total: int
    theoretical_gap: int
    rows: List[RoundRowView]


@dataclass
class SessionView:
    teams: List[TeamView]
    rounds_played: int
    victory_threshold: int
    winner: Optional[str]
    dealer: Optional[str]
    seats: Optional[List[str]]
    can_undo: bool
    options: dict


def declaration_from_payload(payload: Mapping[str, object]) -> RoundDeclaration:
    """Build a declaration from a mapping of labels; missing keys mean N/A or 0."""
    return RoundDeclaration.from_labels(
        contract=payload.get("contract"),
        realized=payload.get("realized"),
        announcement=payload.get("announcement"),
        remark=payload.get("remark"),
    )


def row_view(row: RoundResult) -> RoundRowView:
    return RoundRowView(**row.as_row())


class ScoreService:
    """Facade around GameSession for UI consumers.

    Every transition and view holds the service lock, so concurrent callers
    see each add, undo or restart applied whole.
    """

    def __init__(self, session: Optional[GameSession] = None) -> None:
        self.session = session or GameSession()
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: GameConfig) -> "ScoreService":
        return cls(GameSession(config=config))

    # Rounds ------------------------------------------------------------

    def check_round(self, team_a: Mapping[str, object], team_b: Mapping[str, object]) -> ValidationResult:
        return validate_round(declaration_from_payload(team_a), declaration_from_payload(team_b))

    def is_round_ready(self, team_a: Mapping[str, object], team_b: Mapping[str, object]) -> bool:
        return can_submit_round(declaration_from_payload(team_a), declaration_from_payload(team_b))

    def record_round(
        self, team_a: Mapping[str, object], team_b: Mapping[str, object]
    ) -> Tuple[RoundPair, SessionView]:
        """Add a round and return its rows with the view taken right after it."""
        declaration_a = declaration_from_payload(team_a)
        declaration_b = declaration_from_payload(team_b)
        with self._lock:
            pair = self.session.add_round(declaration_a, declaration_b)
            return pair, self._build_view()

    def add_round(self, team_a: Mapping[str, object], team_b: Mapping[str, object]) -> SessionView:
        _, view = self.record_round(team_a, team_b)
        return view

    def undo_round(self) -> SessionView:
        with self._lock:
            self.session.undo_round()
            return self._build_view()

    def last_round(self) -> RoundPair:
        with self._lock:
            pair = self.session.ledger.last
        if pair is None:
            raise RuntimeError("No rounds played.")
        return pair

    def restart(self, victory_threshold: Optional[int] = None) -> SessionView:
        with self._lock:
            if victory_threshold is not None:
                data = self.session.config.model_dump()
                data["victory_threshold"] = victory_threshold
                self.session.config = GameConfig.from_mapping(data)
            self.session.restart()
            return self._build_view()

    # Setup -------------------------------------------------------------

    def rename_team(self, index: int, name: str) -> SessionView:
        with self._lock:
            self.session.rename_team(index, name)
            return self._build_view()

    def set_layout(self, seats: Sequence[str], dealer_name: str) -> SessionView:
        with self._lock:
            self.session.set_layout(list(seats), dealer_name)
            return self._build_view()

    # Views -------------------------------------------------------------

    def get_statistics(self) -> Optional[GameStatistics]:
        with self._lock:
            return compute_statistics(self.session.ledger)

    def get_statistics_payload(self) -> Optional[dict]:
        stats = self.get_statistics()
        return asdict(stats) if stats is not None else None

    def get_session_view(self) -> SessionView:
        with self._lock:
            return self._build_view()

    def _build_view(self) -> SessionView:
        session = self.session
        ledger = session.ledger
        totals = ledger.totals
        gaps = ledger.theoretical_gaps
        teams = [
            TeamView(
                name=team.name,
                players=team.players if team.is_complete else [],
                total=totals[index],
                theoretical_gap=gaps[index],
                rows=[row_view(row) for row in ledger.team_rows(index)],
            )
            for index, team in enumerate(session.teams)
        ]
        winner = session.winner()
        layout = session.layout
        return SessionView(
            teams=teams,
            rounds_played=len(ledger),
            victory_threshold=session.config.victory_threshold,
            winner=session.teams[winner].name if winner is not None else None,
            dealer=layout.dealer_name if layout else None,
            seats=list(layout.seats) if layout else None,
            can_undo=len(ledger) > 0,
            options={
                "contracts": contract_labels(),
                "realized": realized_labels(),
                "announcements": announcement_labels(),
                "remarks": remark_labels(),
            },
        )
