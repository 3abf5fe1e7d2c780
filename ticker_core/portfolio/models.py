"""Typed portfolio models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PortfolioBucket:
    """Portfolio totals for the held stocks quoted in one currency."""

    currency: str | None
    value: float = 0.0
    old_value: float = 0.0
    purchase_value: float = 0.0


@dataclass
class ValidationIssue:
    field: str
    message: str
    row: int | None = None
    code: str = "invalid_value"
