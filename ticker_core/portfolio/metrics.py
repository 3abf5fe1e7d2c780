"""Per-stock metrics derived from a quote and its holding meta.

Every function here is total: a missing quote or field yields 0 (or an
empty string) rather than an exception.
"""

from __future__ import annotations

from typing import Sequence

from ticker_core.config.settings import DisplayConfig
from ticker_core.providers.models import StockEntry


def get_stock_change(entry: StockEntry) -> float:
    if entry.price is None or entry.price.regular_market_change is None:
        return 0
    return entry.price.regular_market_change


def get_stock_change_percent(entry: StockEntry) -> float:
    """Percent change as reported upstream, not rescaled."""
    if entry.price is None or entry.price.regular_market_change_percent is None:
        return 0
    return entry.price.regular_market_change_percent


def get_current_value(entry: StockEntry) -> float:
    if entry.price is None or entry.price.regular_market_price is None:
        return 0
    return entry.price.regular_market_price


def get_stock_performance(entry: StockEntry) -> float:
    """Current price minus purchase price, 0 without a quote or a purchase price."""
    if entry.price is None or entry.meta.purchase_price is None:
        return 0
    return get_current_value(entry) - entry.meta.purchase_price


def get_stock_performance_sum(entry: StockEntry) -> float:
    if entry.meta.quantity is None:
        return 0
    return get_stock_performance(entry) * entry.meta.quantity


def get_stock_performance_percent(entry: StockEntry) -> float:
    """Performance as a fraction of the purchase price."""
    purchase_price = entry.meta.purchase_price
    if purchase_price is None or purchase_price == 0:
        return 0
    return get_stock_performance(entry) / purchase_price


def get_stock_name(entry: StockEntry) -> str:
    # A user-provided name wins over the provider's long name.
    if entry.meta.name:
        return entry.meta.name
    if entry.price is not None and entry.price.long_name:
        return entry.price.long_name
    return ""


def get_displayed_stocks(entries: Sequence[StockEntry], config: DisplayConfig) -> list[StockEntry]:
    if config.show_hidden_stocks:
        return list(entries)
    return [entry for entry in entries if not entry.meta.hidden]


def get_number_of_displayed_stocks(entries: Sequence[StockEntry], config: DisplayConfig) -> int:
    return len(get_displayed_stocks(entries, config))
