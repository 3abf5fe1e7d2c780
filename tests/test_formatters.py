from dataclasses import replace
from datetime import datetime, timezone

from ticker_core.config.settings import DisplayConfig
from ticker_core.lib.formatters import (
    format_number,
    get_change_value_style,
    get_current_value_as_string,
    get_current_value_style,
    get_last_update_as_string,
    get_percent_style,
    get_portfolio_change_as_string,
    get_portfolio_change_percent_as_string,
    get_portfolio_performance_percent_as_string,
    get_portfolio_performance_value_as_string,
    get_portfolio_value_as_string,
    get_purchase_price_as_string,
    get_stock_change_as_string,
    get_stock_change_percent_as_string,
    get_stock_performance_as_string,
    get_stock_performance_percent_as_string,
    get_stock_performance_sum_as_string,
)
from ticker_core.portfolio.models import PortfolioBucket
from ticker_core.providers.models import HoldingMeta, PriceQuote, StockEntry

CONFIG = DisplayConfig(
    currency_style="symbol",
    locale="en-US",
    number_decimals_percentages=2,
    number_decimals_values=2,
    show_currency=True,
    show_change_value_currency=True,
    use_grouping=True,
)
STOCK = StockEntry(
    meta=HoldingMeta(symbol="AAPL", name="Apple Inc.", quantity=10, purchase_price=150.0),
    price=PriceQuote(
        symbol="AAPL",
        currency="USD",
        regular_market_price=200.0,
        regular_market_change=5.5,
        regular_market_change_percent=2.75,
        regular_market_previous_close=194.5,
        regular_market_time=datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc),
        long_name="Apple Inc.",
    ),
)
BUCKET = PortfolioBucket(currency="USD", value=10000.0, old_value=9500.0, purchase_value=8000.0)


def test_current_value_style() -> None:
    style = get_current_value_style(CONFIG)
    assert style.style == "currency"
    assert style.currency_display == "symbol"
    assert style.use_grouping is True
    assert style.minimum_fraction_digits == 2
    assert style.maximum_fraction_digits == 2
    assert get_current_value_style(replace(CONFIG, show_currency=False)).style == "decimal"
    assert get_current_value_style(replace(CONFIG, currency_style="code")).currency_display == "code"
    assert get_current_value_style(replace(CONFIG, use_grouping=False)).use_grouping is False


def test_fraction_digits_are_clamped() -> None:
    style = get_current_value_style(replace(CONFIG, number_decimals_values=10))
    assert (style.minimum_fraction_digits, style.maximum_fraction_digits) == (8, 8)
    percent = get_percent_style(replace(CONFIG, number_decimals_percentages=12))
    assert (percent.minimum_fraction_digits, percent.maximum_fraction_digits) == (8, 8)
    assert get_percent_style(replace(CONFIG, number_decimals_percentages=-3)).minimum_fraction_digits == 0


def test_change_value_style_follows_its_own_toggle() -> None:
    assert get_change_value_style(CONFIG).style == "currency"
    assert get_change_value_style(replace(CONFIG, show_change_value_currency=False)).style == "decimal"
    assert get_change_value_style(replace(CONFIG, show_currency=False)).style == "currency"


def test_percent_style() -> None:
    style = get_percent_style(CONFIG)
    assert style.style == "percent"
    assert style.currency_display is None
    assert style.use_grouping is True
    assert style.minimum_fraction_digits == 2


def test_current_value_strings() -> None:
    assert "$200.00" in get_current_value_as_string(STOCK, CONFIG)
    assert "200,00" in get_current_value_as_string(STOCK, replace(CONFIG, locale="de-DE"))
    plain = get_current_value_as_string(STOCK, replace(CONFIG, show_currency=False))
    assert "$" not in plain
    assert "200.00" in plain
    euro = replace(STOCK, price=replace(STOCK.price, currency="EUR"))
    assert "€" in get_current_value_as_string(euro, CONFIG)
    assert "USD" in get_current_value_as_string(STOCK, replace(CONFIG, currency_style="code"))


def test_change_strings() -> None:
    assert "$5.50" in get_stock_change_as_string(STOCK, CONFIG)
    assert "$" not in get_stock_change_as_string(STOCK, replace(CONFIG, show_change_value_currency=False))
    # Upstream percent change is already scaled, so it renders 100x.
    assert "275" in get_stock_change_percent_as_string(STOCK, CONFIG)
    assert "275.0000" in get_stock_change_percent_as_string(STOCK, replace(CONFIG, number_decimals_percentages=4))


def test_performance_strings() -> None:
    assert "$50.00" in get_stock_performance_as_string(STOCK, CONFIG)
    assert "$500.00" in get_stock_performance_sum_as_string(STOCK, CONFIG)
    assert "33.33" in get_stock_performance_percent_as_string(STOCK, CONFIG)
    assert "$150.00" in get_purchase_price_as_string(STOCK, CONFIG)

    no_purchase = replace(STOCK, meta=replace(STOCK.meta, purchase_price=None))
    assert "0.00" in get_stock_performance_as_string(no_purchase, CONFIG)
    assert "0.00" in get_stock_performance_percent_as_string(no_purchase, CONFIG)
    assert "0.00" in get_purchase_price_as_string(no_purchase, CONFIG)
    assert "0.00" in get_stock_performance_sum_as_string(replace(STOCK, meta=replace(STOCK.meta, quantity=0)), CONFIG)


def test_unquoted_stock_renders_zero_without_currency() -> None:
    stock = StockEntry(meta=HoldingMeta(symbol="AAPL"))
    assert get_current_value_as_string(stock, CONFIG) == "0.00"


def test_portfolio_strings() -> None:
    assert "$10,000.00" in get_portfolio_value_as_string(BUCKET, CONFIG)
    assert "10.000,00" in get_portfolio_value_as_string(BUCKET, replace(CONFIG, locale="de-DE"))
    assert "10000.00" in get_portfolio_value_as_string(BUCKET, replace(CONFIG, use_grouping=False))
    assert "$2,000.00" in get_portfolio_performance_value_as_string(BUCKET, CONFIG)
    assert "25" in get_portfolio_performance_percent_as_string(BUCKET, CONFIG)
    assert "$500.00" in get_portfolio_change_as_string(BUCKET, CONFIG)
    assert "5.26" in get_portfolio_change_percent_as_string(BUCKET, CONFIG)


def test_portfolio_percent_with_zero_base_renders_zero() -> None:
    bucket = PortfolioBucket(currency="USD", value=100.0)
    assert get_portfolio_performance_percent_as_string(bucket, CONFIG) == "0.00%"
    assert get_portfolio_change_percent_as_string(bucket, CONFIG) == "0.00%"


def test_format_number_fallbacks() -> None:
    style = get_current_value_style(CONFIG)
    assert format_number(1234.5, style, "xx-NOPE", "USD") == "$1,234.50"
    assert format_number(float("nan"), style, "en-US", "USD") == "$0.00"
    assert format_number(0.3333, get_percent_style(CONFIG), "en_US") == "33.33%"


def test_last_update_string() -> None:
    assert get_last_update_as_string([STOCK], CONFIG) == "10:00"
    later = replace(STOCK, price=replace(STOCK.price, regular_market_time=datetime(2024, 1, 1, 15, 30, tzinfo=timezone.utc)))
    assert get_last_update_as_string([STOCK, later], CONFIG) == "15:30"
    assert get_last_update_as_string([StockEntry(meta=HoldingMeta(symbol="AAPL"))], CONFIG) == ""


def test_currency_name_follows_the_number() -> None:
    style = get_current_value_style(replace(CONFIG, currency_style="name"))
    assert format_number(5, style, "en-US", "USD") == "5.00 US dollars"
    assert format_number(1234.5, style, "en-US", "USD") == "1,234.50 US dollars"


def test_ties_round_away_from_zero() -> None:
    whole = get_current_value_style(replace(CONFIG, show_currency=False, number_decimals_values=0))
    assert format_number(2.5, whole, "en-US") == "3"
    assert format_number(-2.5, whole, "en-US") == "-3"
    cents = get_current_value_style(replace(CONFIG, show_currency=False))
    assert format_number(0.125, cents, "en-US") == "0.13"
    assert format_number(0.00125, get_percent_style(CONFIG), "en-US") == "0.13%"
