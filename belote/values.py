"""Closed value sets of a Belote-Coinchée round and their point values."""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Type, TypeVar, Union

logger = logging.getLogger(__name__)

# Trick points available in a single deal.
TOTAL_TRICK_POINTS = 160
# Minimum trick points a declaring team must take.
MINIMUM_TRICK_POINTS = 80
# Contracts at or above this value are Capot/Générale.
SLAM_THRESHOLD = 500
# Highest belote value the two teams may announce together in one deal.
MAX_ANNOUNCEMENT_TOTAL = 80


class _Labelled(Enum):
    """Enum whose members carry a display label and a point value."""

    def __init__(self, label: str, points: int) -> None:
        self.label = label
        self.points = points

    def __str__(self) -> str:
        return self.label


class Contract(_Labelled):
    NONE = ("0", 0)
    C80 = ("80", 80)
    C90 = ("90", 90)
    C100 = ("100", 100)
    C110 = ("110", 110)
    C120 = ("120", 120)
    C130 = ("130", 130)
    C140 = ("140", 140)
    C150 = ("150", 150)
    C160 = ("160", 160)
    CAPOT = ("Capot", 500)
    GENERALE = ("Générale", 1000)

    @property
    def is_declared(self) -> bool:
        return self.points > 0

    @property
    def is_slam(self) -> bool:
        """True for Capot and Générale."""
        return self.points >= SLAM_THRESHOLD


class Realized(_Labelled):
    R0 = ("0", 0)
    R10 = ("10", 10)
    R20 = ("20", 20)
    R30 = ("30", 30)
    R40 = ("40", 40)
    R50 = ("50", 50)
    R60 = ("60", 60)
    R70 = ("70", 70)
    R80 = ("80", 80)
    R90 = ("90", 90)
    R100 = ("100", 100)
    R110 = ("110", 110)
    R120 = ("120", 120)
    R130 = ("130", 130)
    R140 = ("140", 140)
    R150 = ("150", 150)
    R160 = ("160", 160)
    CAPOT = ("Capot", 160)
    GENERALE = ("Générale", 160)

    @property
    def took_every_trick(self) -> bool:
        return self.points == TOTAL_TRICK_POINTS


class Announcement(_Labelled):
    NONE = ("N/A", 0)
    BELOTE = ("Belote", 20)
    DOUBLE_BELOTE = ("Double Belote", 40)
    TRIPLE_BELOTE = ("Triple Belote", 60)
    QUADRUPLE_BELOTE = ("Quadruple Belote", 80)


class Remark(_Labelled):
    # Points are the reference values shown to players; scoring only uses the multiplier.
    NONE = ("N/A", 0)
    COINCHE = ("Coinche", 90)
    SUR_COINCHE = ("Sur Coinche", 100)

    @property
    def is_challenge(self) -> bool:
        return self is not Remark.NONE

    @property
    def multiplier(self) -> int:
        return REMARK_MULTIPLIERS[self]


REMARK_MULTIPLIERS: dict[Remark, int] = {
    Remark.NONE: 1,
    Remark.COINCHE: 2,
    Remark.SUR_COINCHE: 4,
}

# Spellings seen on score sheets that are not the canonical labels.
_LABEL_ALIASES: dict[str, str] = {
    "généralé": "Générale",
    "generale": "Générale",
    "générale": "Générale",
    "na": "N/A",
    "n/a": "N/A",
    "": "N/A",
    "surcoinche": "Sur Coinche",
    "sur-coinche": "Sur Coinche",
    "doublebelote": "Double Belote",
    "triplebelote": "Triple Belote",
    "quadruplebelote": "Quadruple Belote",
}

E = TypeVar("E", bound=_Labelled)
LabelInput = Union[str, int, _Labelled, None]


def _lookup(enum_cls: Type[E], value: LabelInput, fallback: E) -> E:
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return fallback
    text = str(value).strip()
    by_label = {member.label: member for member in enum_cls}
    if text in by_label:
        return by_label[text]
    alias = _LABEL_ALIASES.get(text.lower())
    if alias is not None and alias in by_label:
        return by_label[alias]
    name = text.upper().replace(" ", "_").replace("-", "_")
    if name in enum_cls.__members__:
        return enum_cls[name]
    logger.warning("Unknown %s label %r, scoring it as %s.", enum_cls.__name__, value, fallback.label)
    return fallback


def parse_contract(value: LabelInput) -> Contract:
    return _lookup(Contract, value, Contract.NONE)


def parse_realized(value: LabelInput) -> Realized:
    return _lookup(Realized, value, Realized.R0)


def parse_announcement(value: LabelInput) -> Announcement:
    return _lookup(Announcement, value, Announcement.NONE)


def parse_remark(value: LabelInput) -> Remark:
    return _lookup(Remark, value, Remark.NONE)


def contract_labels() -> List[str]:
    return [member.label for member in Contract]


def realized_labels() -> List[str]:
    return [member.label for member in Realized]


def announcement_labels() -> List[str]:
    return [member.label for member in Announcement]


def remark_labels() -> List[str]:
    return [member.label for member in Remark]


def effective_remark(first: Remark, second: Remark) -> Remark:
    """Return the highest challenge level declared by either team."""
    if Remark.SUR_COINCHE in (first, second):
        return Remark.SUR_COINCHE
    if Remark.COINCHE in (first, second):
        return Remark.COINCHE
    return Remark.NONE


def reference_table() -> dict[str, dict[str, int]]:
    """Label to point mapping for every value set, for reference displays."""
    return {
        "contracts": {member.label: member.points for member in Contract},
        "realized": {member.label: member.points for member in Realized},
        "announcements": {member.label: member.points for member in Announcement},
        "remarks": {member.label: member.points for member in Remark},
    }
