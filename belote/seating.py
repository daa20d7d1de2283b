"""Teams, seating around the table and dealer rotation."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Sequence, Tuple

from .exceptions import InvalidLayout

SEAT_COUNT = 4
PLAYER_SEPARATOR = "/"
DEFAULT_TEAM_NAMES: Tuple[str, str] = ("Équipe 1", "Équipe 2")

# Seat order is clockwise starting at the top left of the table.
SEAT_NAMES: Tuple[str, ...] = ("top_left", "top_right", "bottom_right", "bottom_left")


@dataclass
class Team:
    """A team named ``"Player1/Player2"``."""

    name: str

    @property
    def players(self) -> List[str]:
        return [part.strip() for part in self.name.split(PLAYER_SEPARATOR)]

    @property
    def is_complete(self) -> bool:
        parts = self.players
        return len(parts) == 2 and all(parts)


def partner_seat(seat: int) -> int:
    return (seat + 2) % SEAT_COUNT


@dataclass(frozen=True)
class TableLayout:
    seats: Tuple[str, str, str, str]
    dealer: int

    @classmethod
    def build(cls, team_a: Team, team_b: Team, seats: Sequence[str], dealer_name: str) -> "TableLayout":
        """Validate a seating plan and return the layout.

        Raises:
            InvalidLayout: a seat is empty, a player is seated twice, a player
                belongs to neither team, partners are not opposite each other,
                or the dealer is not seated.
        """
        if not team_a.is_complete or not team_b.is_complete:
            raise InvalidLayout("Team names must use the format Name1/Name2.")
        names = [seat.strip() for seat in seats]
        if len(names) != SEAT_COUNT or not all(names):
            raise InvalidLayout("Please select players for all positions.")
        if len(set(names)) != SEAT_COUNT:
            raise InvalidLayout("Each player can only be in one position.")

        team_of = {player: 0 for player in team_a.players}
        team_of.update({player: 1 for player in team_b.players})
        for name in names:
            if name not in team_of:
                raise InvalidLayout(f"Player {name!r} does not belong to either team.")
        for seat, name in enumerate(names):
            if team_of[name] != team_of[names[partner_seat(seat)]]:
                raise InvalidLayout("Partners must sit opposite each other.")

        dealer_name = dealer_name.strip()
        if dealer_name not in names:
            raise InvalidLayout("The dealer must be one of the seated players.")
        return cls(seats=(names[0], names[1], names[2], names[3]), dealer=names.index(dealer_name))

    @property
    def dealer_name(self) -> str:
        return self.seats[self.dealer]

    def advance_dealer(self) -> "TableLayout":
        return replace(self, dealer=(self.dealer + 1) % SEAT_COUNT)

    def rewind_dealer(self) -> "TableLayout":
        return replace(self, dealer=(self.dealer - 1) % SEAT_COUNT)

    def as_dict(self) -> dict:
        return {
            "seats": dict(zip(SEAT_NAMES, self.seats)),
            "dealer": self.dealer,
            "dealer_name": self.dealer_name,
        }
