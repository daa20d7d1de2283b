"""Checks that a round's two declarations may be scored together."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .exceptions import RoundRejected
from .scoring import RoundDeclaration
from .values import MAX_ANNOUNCEMENT_TOTAL

SINGLE_CONTRACT_MESSAGE = "Only one team can declare a contract per round."
SAME_REMARK_MESSAGE = "Both teams cannot have the same Coinche or Sur Coinche remark."
ANNOUNCEMENT_SUM_MESSAGE = f"The sum of Belote announcements cannot exceed {MAX_ANNOUNCEMENT_TOTAL} points."


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def rejected(cls, message: str) -> "ValidationResult":
        return cls(valid=False, message=message)

    def __bool__(self) -> bool:
        return self.valid


def validate_round(team_a: RoundDeclaration, team_b: RoundDeclaration) -> ValidationResult:
    """Apply the round rules in order; the first violation is reported.

    Realized values are not cross-checked: the two teams' trick points are
    not required to add up to 160.
    """
    if team_a.contract.is_declared and team_b.contract.is_declared:
        return ValidationResult.rejected(SINGLE_CONTRACT_MESSAGE)

    if team_a.remark.is_challenge and team_a.remark is team_b.remark:
        return ValidationResult.rejected(SAME_REMARK_MESSAGE)

    if team_a.announcement.points + team_b.announcement.points > MAX_ANNOUNCEMENT_TOTAL:
        return ValidationResult.rejected(ANNOUNCEMENT_SUM_MESSAGE)

    return ValidationResult.ok()


def ensure_valid_round(team_a: RoundDeclaration, team_b: RoundDeclaration) -> None:
    """Raise RoundRejected when the round fails validation."""
    result = validate_round(team_a, team_b)
    if not result.valid:
        raise RoundRejected(result.message or "")


def can_submit_round(team_a: RoundDeclaration, team_b: RoundDeclaration) -> bool:
    """True once some team has entered both a contract and its realized points."""
    return any(
        team.contract.is_declared and team.realized.points > 0
        for team in (team_a, team_b)
    )
