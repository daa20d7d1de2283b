"""Validation schema for score sheet configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Tuple, Union

from pydantic import BaseModel, Field, field_validator

from .seating import DEFAULT_TEAM_NAMES

DEFAULT_VICTORY_THRESHOLD = 2000


class GameConfig(BaseModel):
    victory_threshold: int = Field(
        DEFAULT_VICTORY_THRESHOLD,
        gt=0,
        description="Cumulative total at which a team is announced as winner.",
    )
    team_names: Tuple[str, str] = Field(DEFAULT_TEAM_NAMES, description="Initial names of the two teams.")
    rotate_dealer: bool = Field(True, description="Move the dealer clockwise after every round.")

    @field_validator("team_names")
    @classmethod
    def ensure_names(cls, value: Tuple[str, str]) -> Tuple[str, str]:
        stripped = tuple(name.strip() for name in value)
        if not all(stripped):
            raise ValueError("Team names must not be empty.")
        if stripped[0] == stripped[1]:
            raise ValueError("Both teams cannot share the same name.")
        return stripped  # type: ignore[return-value]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GameConfig":
        return cls(**dict(data))

    @classmethod
    def load(cls, path: Union[str, Path]) -> "GameConfig":
        with Path(path).open("r", encoding="utf-8") as handle:
            return cls.from_mapping(json.load(handle))
