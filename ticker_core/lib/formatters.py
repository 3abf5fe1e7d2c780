"""Locale-aware display strings for stock and portfolio numbers."""

from __future__ import annotations

import copy
import decimal
import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Literal, Sequence

from babel import Locale, UnknownLocaleError
from babel.dates import format_datetime
from babel.numbers import NumberPattern, format_currency, parse_pattern

from ticker_core.config.settings import MAX_FRACTION_DIGITS, DisplayConfig
from ticker_core.portfolio.aggregator import (
    get_portfolio_change,
    get_portfolio_change_percent,
    get_portfolio_performance,
    get_portfolio_performance_percent,
)
from ticker_core.portfolio.metrics import (
    get_current_value,
    get_stock_change,
    get_stock_change_percent,
    get_stock_performance,
    get_stock_performance_percent,
    get_stock_performance_sum,
)
from ticker_core.portfolio.models import PortfolioBucket
from ticker_core.providers.models import StockEntry

LOGGER = logging.getLogger(__name__)
DEFAULT_LOCALE = "en-US"
DEFAULT_TIME_FORMAT = "HH:mm"
StyleKind = Literal["currency", "decimal", "percent"]
_CURRENCY_CODE = re.compile(r"(¤¤)(?=[#0-9])")


@dataclass(frozen=True)
class NumberStyle:
    style: StyleKind
    currency_display: str | None
    use_grouping: bool
    minimum_fraction_digits: int
    maximum_fraction_digits: int


def _fraction_digits(decimals: int) -> int:
    return max(0, min(int(decimals), MAX_FRACTION_DIGITS))


def _value_style(show_currency: bool, config: DisplayConfig) -> NumberStyle:
    digits = _fraction_digits(config.number_decimals_values)
    return NumberStyle(
        style="currency" if show_currency else "decimal",
        currency_display=config.currency_style,
        use_grouping=config.use_grouping,
        minimum_fraction_digits=digits,
        maximum_fraction_digits=digits,
    )


def get_current_value_style(config: DisplayConfig) -> NumberStyle:
    return _value_style(config.show_currency, config)


def get_change_value_style(config: DisplayConfig) -> NumberStyle:
    return _value_style(config.show_change_value_currency, config)


def get_percent_style(config: DisplayConfig) -> NumberStyle:
    digits = _fraction_digits(config.number_decimals_percentages)
    return NumberStyle(
        style="percent",
        currency_display=None,
        use_grouping=config.use_grouping,
        minimum_fraction_digits=digits,
        maximum_fraction_digits=digits,
    )


@lru_cache(maxsize=64)
def _resolve_locale(tag: str) -> Locale:
    try:
        return Locale.parse(tag.replace("-", "_"))
    except (UnknownLocaleError, ValueError, TypeError):
        LOGGER.warning("unknown locale %r, falling back to %s", tag, DEFAULT_LOCALE)
        return Locale.parse(DEFAULT_LOCALE.replace("-", "_"))


def _currency_source(locale: Locale, currency_display: str | None) -> str:
    source = locale.currency_formats["standard"].pattern
    if currency_display == "code":
        # An ISO code needs a gap before the digits.
        source = _CURRENCY_CODE.sub("\\1\u00a0", source.replace("¤", "¤¤"))
    return source


def _number_pattern(style: NumberStyle, locale: Locale) -> NumberPattern:
    if style.style == "currency" and style.currency_display != "name":
        pattern = parse_pattern(_currency_source(locale, style.currency_display))
    elif style.style == "percent":
        pattern = copy.copy(locale.percent_formats[None])
    else:
        pattern = copy.copy(locale.decimal_formats[None])
    pattern.frac_prec = (style.minimum_fraction_digits, style.maximum_fraction_digits)
    return pattern


def format_number(value: float, style: NumberStyle, locale: str, currency: str | None = None) -> str:
    """Render a number with the given style.

    Percent styles multiply by 100. A currency style without a currency code
    renders as a plain decimal, and non-finite input renders as zero.
    """
    if value is None or not math.isfinite(value):
        value = 0.0
    if style.style == "currency" and not currency:
        style = NumberStyle(
            style="decimal",
            currency_display=style.currency_display,
            use_grouping=style.use_grouping,
            minimum_fraction_digits=style.minimum_fraction_digits,
            maximum_fraction_digits=style.maximum_fraction_digits,
        )
    babel_locale = _resolve_locale(locale)
    pattern = _number_pattern(style, babel_locale)
    # Ties round away from zero, as the widget always rendered them.
    with decimal.localcontext() as ctx:
        ctx.rounding = decimal.ROUND_HALF_UP
        if style.style == "currency" and style.currency_display == "name":
            return format_currency(
                value,
                currency,
                format=pattern,
                locale=babel_locale,
                currency_digits=False,
                format_type="name",
                group_separator=style.use_grouping,
            )
        return pattern.apply(
            value,
            babel_locale,
            currency=currency if style.style == "currency" else None,
            currency_digits=False,
            group_separator=style.use_grouping,
        )


def _currency(entry: StockEntry) -> str | None:
    return entry.price.currency if entry.price is not None else None


def get_current_value_as_string(entry: StockEntry, config: DisplayConfig) -> str:
    return format_number(get_current_value(entry), get_current_value_style(config), config.locale, _currency(entry))


def get_stock_change_as_string(entry: StockEntry, config: DisplayConfig) -> str:
    return format_number(get_stock_change(entry), get_change_value_style(config), config.locale, _currency(entry))


def get_stock_change_percent_as_string(entry: StockEntry, config: DisplayConfig) -> str:
    # Upstream already reports this as a whole-number percentage; it is
    # passed through as-is, so 2.75 renders as 275%.
    return format_number(get_stock_change_percent(entry), get_percent_style(config), config.locale)


def get_stock_performance_as_string(entry: StockEntry, config: DisplayConfig) -> str:
    return format_number(
        get_stock_performance(entry), get_current_value_style(config), config.locale, _currency(entry)
    )


def get_stock_performance_sum_as_string(entry: StockEntry, config: DisplayConfig) -> str:
    return format_number(
        get_stock_performance_sum(entry), get_current_value_style(config), config.locale, _currency(entry)
    )


def get_stock_performance_percent_as_string(entry: StockEntry, config: DisplayConfig) -> str:
    return format_number(get_stock_performance_percent(entry), get_percent_style(config), config.locale)


def get_purchase_price_as_string(entry: StockEntry, config: DisplayConfig) -> str:
    purchase_price = entry.meta.purchase_price if entry.meta.purchase_price is not None else 0
    return format_number(purchase_price, get_current_value_style(config), config.locale, _currency(entry))


def get_portfolio_value_as_string(bucket: PortfolioBucket, config: DisplayConfig) -> str:
    return format_number(bucket.value, get_current_value_style(config), config.locale, bucket.currency)


def get_portfolio_performance_value_as_string(bucket: PortfolioBucket, config: DisplayConfig) -> str:
    return format_number(
        get_portfolio_performance(bucket), get_current_value_style(config), config.locale, bucket.currency
    )


def get_portfolio_performance_percent_as_string(bucket: PortfolioBucket, config: DisplayConfig) -> str:
    return format_number(get_portfolio_performance_percent(bucket), get_percent_style(config), config.locale)


def get_portfolio_change_as_string(bucket: PortfolioBucket, config: DisplayConfig) -> str:
    return format_number(get_portfolio_change(bucket), get_change_value_style(config), config.locale, bucket.currency)


def get_portfolio_change_percent_as_string(bucket: PortfolioBucket, config: DisplayConfig) -> str:
    return format_number(get_portfolio_change_percent(bucket), get_percent_style(config), config.locale)


def get_last_update_as_string(
    entries: Sequence[StockEntry],
    config: DisplayConfig,
    tzinfo: object | None = None,
) -> str:
    """Render the newest quote time with the configured LDML pattern, or ""."""
    times: list[datetime] = [
        entry.price.regular_market_time
        for entry in entries
        if entry.price is not None and entry.price.regular_market_time is not None
    ]
    if not times:
        return ""
    latest = max(times)
    babel_locale = _resolve_locale(config.locale)
    try:
        return format_datetime(latest, config.last_update_format, tzinfo=tzinfo, locale=babel_locale)
    except (KeyError, ValueError, AttributeError):
        LOGGER.warning("invalid lastUpdateFormat %r, using %s", config.last_update_format, DEFAULT_TIME_FORMAT)
        return format_datetime(latest, DEFAULT_TIME_FORMAT, tzinfo=tzinfo, locale=babel_locale)
