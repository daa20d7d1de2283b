"""Error types raised by the Belote engine."""

from __future__ import annotations


class BeloteError(ValueError):
    """Base class for user-correctable Belote input errors."""


class RoundRejected(BeloteError):
    """Raised when a round's declarations violate a validation rule."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidLayout(BeloteError):
    """Raised when a table layout cannot seat the two teams."""
