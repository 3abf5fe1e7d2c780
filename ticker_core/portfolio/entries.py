"""Pair configured holdings with fetched quotes."""

from __future__ import annotations

from typing import Iterable

from ticker_core.config.settings import DisplayConfig
from ticker_core.providers.models import HoldingMeta, PriceQuote, StockEntry


def build_entries(config: DisplayConfig, quotes: Iterable[PriceQuote]) -> list[StockEntry]:
    """Return one entry per configured stock, in configuration order.

    Symbols match case-insensitively; a stock without a matching quote gets
    an entry with no price.
    """
    by_symbol: dict[str, PriceQuote] = {}
    for quote in quotes:
        if quote.symbol:
            by_symbol[quote.symbol.strip().upper()] = quote

    entries: list[StockEntry] = []
    for stock in config.stocks:
        meta = HoldingMeta(
            symbol=stock.symbol,
            name=stock.name,
            quantity=stock.quantity,
            hidden=stock.hidden,
            purchase_price=stock.purchase_price,
        )
        entries.append(StockEntry(meta=meta, price=by_symbol.get(stock.symbol.upper())))
    return entries
