"""Holdings file loading helpers."""

from __future__ import annotations

import math
import os

import pandas as pd

from ticker_core.config.settings import StockConfig

REQUIRED_COLUMNS = ["Symbol"]
OPTIONAL_COLUMNS = ["Name", "Quantity", "Purchase_Price", "Hidden"]


def load_holdings_table(file_path: str) -> pd.DataFrame:
    absolute_path = file_path if os.path.isabs(file_path) else os.path.abspath(file_path)
    ext = os.path.splitext(absolute_path)[1].lower()
    if ext != ".csv":
        raise ValueError("Holdings input must be a CSV file (.csv).")
    return pd.read_csv(absolute_path)


def _cell(row: pd.Series, column: str) -> object | None:
    if column not in row.index:
        return None
    value = row[column]
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _hidden(value: object | None) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def stocks_from_frame(frame: pd.DataFrame) -> list[StockConfig]:
    """Turn a validated holdings frame into stock configs; blank cells become None."""
    stocks: list[StockConfig] = []
    for _, row in frame.iterrows():
        name = _cell(row, "Name")
        quantity = _cell(row, "Quantity")
        purchase_price = _cell(row, "Purchase_Price")
        stocks.append(
            StockConfig(
                symbol=str(row["Symbol"]).strip().upper(),
                name=str(name) if name is not None else None,
                quantity=float(quantity) if quantity is not None else None,
                purchase_price=float(purchase_price) if purchase_price is not None else None,
                hidden=_hidden(_cell(row, "Hidden")),
            )
        )
    return stocks
