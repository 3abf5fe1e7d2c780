"""Portfolio metrics and aggregation package."""

from ticker_core.portfolio.aggregator import get_portfolio
from ticker_core.portfolio.entries import build_entries
from ticker_core.portfolio.models import PortfolioBucket

__all__ = ["PortfolioBucket", "build_entries", "get_portfolio"]
