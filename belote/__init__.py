"""Core scoring engine package for Belote-Coinchée score sheets."""

__all__ = [
    "values",
    "exceptions",
    "scoring",
    "validation",
    "seating",
    "ledger",
    "statistics",
    "rules_schema",
    "service",
]
