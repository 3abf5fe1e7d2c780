"""Quote and holding models shared by metrics, aggregation and formatting."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping


def _as_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _as_datetime(value: Any) -> datetime | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


@dataclass(frozen=True)
class PriceQuote:
    """Snapshot of upstream market data for one symbol; any field may be missing."""

    symbol: str | None = None
    currency: str | None = None
    regular_market_price: float | None = None
    regular_market_change: float | None = None
    regular_market_change_percent: float | None = None
    regular_market_previous_close: float | None = None
    regular_market_time: datetime | None = None
    long_name: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> PriceQuote:
        """Build a quote from a camelCase provider payload."""
        return cls(
            symbol=_as_text(payload.get("symbol")),
            currency=_as_text(payload.get("currency")),
            regular_market_price=_as_number(payload.get("regularMarketPrice")),
            regular_market_change=_as_number(payload.get("regularMarketChange")),
            regular_market_change_percent=_as_number(payload.get("regularMarketChangePercent")),
            regular_market_previous_close=_as_number(payload.get("regularMarketPreviousClose")),
            regular_market_time=_as_datetime(payload.get("regularMarketTime")),
            long_name=_as_text(payload.get("longName")),
        )


@dataclass(frozen=True)
class HoldingMeta:
    symbol: str
    name: str | None = None
    quantity: float | None = None
    hidden: bool = False
    purchase_price: float | None = None


@dataclass(frozen=True)
class StockEntry:
    meta: HoldingMeta
    price: PriceQuote | None = None
