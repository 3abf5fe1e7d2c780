"""Currency-bucketed portfolio aggregation."""

from __future__ import annotations

import logging
from typing import Sequence

from ticker_core.config.settings import DisplayConfig
from ticker_core.portfolio.metrics import get_current_value, get_stock_change
from ticker_core.portfolio.models import PortfolioBucket
from ticker_core.providers.models import StockEntry

LOGGER = logging.getLogger(__name__)


def get_portfolio(entries: Sequence[StockEntry], config: DisplayConfig) -> list[PortfolioBucket]:
    """Sum held stocks into one bucket per quote currency.

    Only entries with a quote and a defined quantity count; a quantity of 0
    still opens a bucket. Buckets come back in order of first appearance.
    Holdings without a purchase price are valued at the current price, so
    they contribute nothing to the bucket's performance.
    """
    totals: dict[str | None, list[float]] = {}
    for entry in entries:
        if entry.price is None:
            LOGGER.debug("portfolio skip: symbol=%s reason=no_quote", entry.meta.symbol)
            continue
        quantity = entry.meta.quantity
        if quantity is None:
            LOGGER.debug("portfolio skip: symbol=%s reason=watch_only", entry.meta.symbol)
            continue

        current = get_current_value(entry)
        purchase_price = entry.meta.purchase_price
        bucket = totals.setdefault(entry.price.currency, [0.0, 0.0, 0.0])
        bucket[0] += quantity * current
        bucket[1] += quantity * (current - get_stock_change(entry))
        bucket[2] += quantity * (purchase_price if purchase_price is not None else current)

    return [
        PortfolioBucket(currency=currency, value=value, old_value=old_value, purchase_value=purchase_value)
        for currency, (value, old_value, purchase_value) in totals.items()
    ]


def get_portfolio_performance(bucket: PortfolioBucket) -> float:
    return bucket.value - bucket.purchase_value


def get_portfolio_performance_percent(bucket: PortfolioBucket) -> float:
    if bucket.purchase_value == 0:
        return 0.0
    return get_portfolio_performance(bucket) / bucket.purchase_value


def get_portfolio_change(bucket: PortfolioBucket) -> float:
    return bucket.value - bucket.old_value


def get_portfolio_change_percent(bucket: PortfolioBucket) -> float:
    if bucket.old_value == 0:
        return 0.0
    return get_portfolio_change(bucket) / bucket.old_value
