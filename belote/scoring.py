"""Round scoring rules for Belote-Coinchée."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

from .values import (
    MINIMUM_TRICK_POINTS,
    TOTAL_TRICK_POINTS,
    Announcement,
    Contract,
    LabelInput,
    Realized,
    Remark,
    effective_remark,
    parse_announcement,
    parse_contract,
    parse_realized,
    parse_remark,
)


@dataclass(frozen=True)
class RoundDeclaration:
    """One team's declared contract, realized trick points, belote and remark."""

    contract: Contract = Contract.NONE
    realized: Realized = Realized.R0
    announcement: Announcement = Announcement.NONE
    remark: Remark = Remark.NONE

    @classmethod
    def from_labels(
        cls,
        contract: LabelInput = None,
        realized: LabelInput = None,
        announcement: LabelInput = None,
        remark: LabelInput = None,
    ) -> "RoundDeclaration":
        return cls(
            contract=parse_contract(contract),
            realized=parse_realized(realized),
            announcement=parse_announcement(announcement),
            remark=parse_remark(remark),
        )

    @property
    def made_target(self) -> bool:
        """True when realized plus belote reaches the contract value."""
        return self.realized.points + self.announcement.points >= self.contract.points


@dataclass(frozen=True)
class PointsResolution:
    points: int
    fulfilled: bool

    def __iter__(self) -> Iterator[Union[int, bool]]:
        yield self.points
        yield self.fulfilled


@dataclass(frozen=True)
class TeamRoundScore:
    gap: int
    theoretical_points: int
    points: int
    fulfilled: bool


@dataclass(frozen=True)
class RoundScore:
    team_a: TeamRoundScore
    team_b: TeamRoundScore


def compute_gap(contract: Contract, realized: Realized) -> int:
    """Absolute distance between the contract and the realized trick points."""
    return abs(contract.points - realized.points)


def compute_theoretical_points(contract: Contract, realized: Realized, announcement: Announcement) -> int:
    """Points a declaring team would score ignoring the opponents' remarks."""
    if not contract.is_declared:
        return 0
    if contract.is_slam and realized.took_every_trick:
        return contract.points + announcement.points
    return realized.points + announcement.points


def is_fulfilled(declaration: RoundDeclaration) -> bool:
    """Return False when the team is "chute" (failed its contract).

    The rule is applied to both teams, so a team without a contract always
    counts as fulfilled. Capot/Générale only fail here on the 80-point floor;
    whether they were actually made is decided when awarding points.
    """
    contract = declaration.contract
    below_floor = declaration.realized.points < MINIMUM_TRICK_POINTS and contract.is_declared
    short_of_target = not declaration.made_target and not contract.is_slam
    return not (below_floor or short_of_target)


def resolve_points(own: RoundDeclaration, opponent: RoundDeclaration) -> PointsResolution:
    """Points earned by ``own`` this round, given the opposing declaration.

    Call once per team with the roles swapped.
    """
    fulfilled = is_fulfilled(own)
    multiplier = effective_remark(own.remark, opponent.remark).multiplier
    belote = own.announcement.points

    if not own.contract.is_declared:
        return PointsResolution(_defender_points(own, opponent, multiplier), fulfilled)

    contract = own.contract.points
    realized = own.realized.points

    if own.contract.is_slam:
        if own.realized.took_every_trick:
            return PointsResolution(multiplier * contract + belote, fulfilled)
        return PointsResolution(belote, fulfilled)

    made = own.made_target and realized >= MINIMUM_TRICK_POINTS
    if opponent.remark.is_challenge:
        if made:
            return PointsResolution(multiplier * contract + realized + belote, fulfilled)
        return PointsResolution(belote, fulfilled)

    if made:
        return PointsResolution(contract + realized + belote, fulfilled)
    return PointsResolution(belote, fulfilled)


def _defender_points(own: RoundDeclaration, opponent: RoundDeclaration, multiplier: int) -> int:
    belote = own.announcement.points
    if not opponent.contract.is_declared:
        return belote

    contract = opponent.contract.points
    challenged = own.remark.is_challenge

    if opponent.contract.is_slam and opponent.realized.took_every_trick:
        return 0 if challenged else belote

    opponent_failed = not opponent.made_target
    if opponent_failed and multiplier == 1:
        return TOTAL_TRICK_POINTS + contract + belote
    if opponent_failed and challenged:
        return multiplier * contract + TOTAL_TRICK_POINTS
    if not opponent_failed and challenged and opponent.realized.points >= MINIMUM_TRICK_POINTS:
        return belote
    return TOTAL_TRICK_POINTS - opponent.realized.points + belote


def score_round(team_a: RoundDeclaration, team_b: RoundDeclaration) -> RoundScore:
    """Resolve both sides of a round; no validation is applied."""
    return RoundScore(team_a=_score_team(team_a, team_b), team_b=_score_team(team_b, team_a))


def _score_team(own: RoundDeclaration, opponent: RoundDeclaration) -> TeamRoundScore:
    points, fulfilled = resolve_points(own, opponent)
    return TeamRoundScore(
        gap=compute_gap(own.contract, own.realized),
        theoretical_points=compute_theoretical_points(own.contract, own.realized, own.announcement),
        points=points,
        fulfilled=fulfilled,
    )
