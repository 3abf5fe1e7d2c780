"""Widget display settings."""

from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import dataclass, fields
from typing import Any, Mapping

from dotenv import load_dotenv

LOGGER = logging.getLogger(__name__)
MAX_FRACTION_DIGITS = 8
CURRENCY_STYLES = {"symbol", "narrowSymbol", "code", "name"}


@dataclass(frozen=True)
class StockConfig:
    """One configured symbol. A missing quantity means watch-only."""

    symbol: str
    name: str | None = None
    quantity: float | None = None
    purchase_price: float | None = None
    hidden: bool = False


@dataclass(frozen=True)
class DisplayConfig:
    """User-chosen display options for the ticker widget."""

    currency_style: str = "symbol"
    fade_speed_in_seconds: float = 3.5
    last_update_format: str = "HH:mm"
    locale: str = "en-US"
    max_change_age: int = 0
    max_width: str = "100%"
    number_decimals_percentages: int = 1
    number_decimals_values: int = 2
    display_mode: str = "vertical"
    show_currency: bool = True
    show_colors: bool = True
    show_change_percent: bool = True
    show_change_value: bool = False
    show_change_value_currency: bool = False
    show_hidden_stocks: bool = False
    show_last_update: bool = True
    show_portfolio_growth: bool = False
    show_portfolio_growth_percent: bool = False
    show_portfolio_value: bool = False
    show_portfolio_performance_value: bool = False
    show_portfolio_performance_percent: bool = False
    show_stock_performance_value: bool = False
    show_stock_performance_value_sum: bool = False
    show_stock_performance_percent: bool = False
    stocks: tuple[StockConfig, ...] = ()
    stocks_per_page: int = 0
    update_interval_in_seconds: int = 600
    use_grouping: bool = False
    virtual_horizontal_multiplier: int = 2


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _as_int(value: Any, default: int) -> int:
    if value is None or value == "" or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        number = math.nan
    if not math.isfinite(number):
        LOGGER.warning("config value %r is not an integer, using %s", value, default)
        return default
    return int(number)


def _as_float(value: Any, default: float | None) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        number = math.nan
    if not math.isfinite(number):
        LOGGER.warning("config value %r is not a number, using %s", value, default)
        return default
    return number


def _as_bool(value: Any, default: bool) -> bool:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _as_str(value: Any, default: str) -> str:
    if value is None:
        return default
    return str(value).strip() or default


def load_stock_config(raw: Mapping[str, Any]) -> StockConfig:
    name = raw.get("name")
    return StockConfig(
        symbol=str(raw.get("symbol", "")).strip().upper(),
        name=str(name) if name is not None else None,
        quantity=_as_float(raw.get("quantity"), None),
        purchase_price=_as_float(raw.get("purchasePrice"), None),
        hidden=_as_bool(raw.get("hidden"), False),
    )


def load_display_config(raw: Mapping[str, Any]) -> DisplayConfig:
    """Build a DisplayConfig from the widget's camelCase mapping.

    Missing keys keep their defaults; malformed scalars fall back to the
    default with a warning instead of raising.
    """
    defaults = DisplayConfig()
    values: dict[str, Any] = {}
    for field in fields(DisplayConfig):
        if field.name == "stocks":
            continue
        default = getattr(defaults, field.name)
        value = raw.get(_camel(field.name))
        if isinstance(default, bool):
            values[field.name] = _as_bool(value, default)
        elif isinstance(default, int):
            values[field.name] = _as_int(value, default)
        elif isinstance(default, float):
            values[field.name] = _as_float(value, default)
        else:
            values[field.name] = _as_str(value, default)

    if values["currency_style"] not in CURRENCY_STYLES:
        LOGGER.warning("unknown currencyStyle %r, using symbol", values["currency_style"])
        values["currency_style"] = "symbol"

    stocks = tuple(
        load_stock_config(item)
        for item in raw.get("stocks") or ()
        if isinstance(item, Mapping) and str(item.get("symbol", "")).strip()
    )
    return DisplayConfig(stocks=stocks, **values)


def get_display_config() -> DisplayConfig:
    """Load display settings from TICKER_* environment variables.

    TICKER_CONFIG_FILE, when set, names a JSON file whose contents form the
    base mapping; individual variables override it.
    """
    load_dotenv()

    raw: dict[str, Any] = {}
    config_file = os.getenv("TICKER_CONFIG_FILE")
    if config_file:
        with open(config_file, encoding="utf-8") as handle:
            raw.update(json.load(handle))

    for field in fields(DisplayConfig):
        if field.name == "stocks":
            continue
        env_value = os.getenv(f"TICKER_{field.name.upper()}")
        if env_value is not None:
            raw[_camel(field.name)] = env_value
    return load_display_config(raw)
