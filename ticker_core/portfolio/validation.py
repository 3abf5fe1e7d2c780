"""Holdings table validation logic."""

from __future__ import annotations

import math

import pandas as pd

from ticker_core.portfolio.data_loader import REQUIRED_COLUMNS
from ticker_core.portfolio.models import ValidationIssue


def _missing_columns(frame: pd.DataFrame) -> list[str]:
    return [col for col in REQUIRED_COLUMNS if col not in frame.columns]


def _optional_number(value: object) -> float | None:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return math.nan


def validate_holdings_frame(frame: pd.DataFrame) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    missing = _missing_columns(frame)
    if missing:
        for col in missing:
            issues.append(
                ValidationIssue(
                    field=col,
                    code="missing_column",
                    message=f"Required column is missing: {col}",
                )
            )
        return issues

    seen: set[str] = set()
    for idx, row in frame.iterrows():
        row_num = int(idx) + 2
        raw_symbol = row["Symbol"]
        symbol = "" if pd.isna(raw_symbol) else str(raw_symbol).strip().upper()
        if not symbol:
            issues.append(
                ValidationIssue(field="Symbol", row=row_num, code="missing_symbol", message="Symbol is required.")
            )
        elif symbol in seen:
            issues.append(
                ValidationIssue(
                    field="Symbol",
                    row=row_num,
                    code="duplicate_symbol",
                    message=f"Symbol appears more than once: {symbol}",
                )
            )
        seen.add(symbol)

        for column, code in (("Quantity", "invalid_quantity"), ("Purchase_Price", "invalid_purchase_price")):
            if column not in frame.columns:
                continue
            number = _optional_number(row[column])
            if number is None:
                continue
            if not math.isfinite(number) or number < 0:
                issues.append(
                    ValidationIssue(
                        field=column,
                        row=row_num,
                        code=code,
                        message=f"{column} must be a non-negative number when present.",
                    )
                )
    return issues
