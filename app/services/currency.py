"""Fixed-rate currency table and display formatting.

The table is built once from settings at import time and exposed read-only.
Rates are expressed against the base currency the figures are stored in.
Unsupported codes raise ``KeyError``: they are a configuration error, callers
validate user input with :func:`is_supported` first.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict

from app.config import Settings, settings


class CurrencyConfig(BaseModel):
    """Display and conversion details for one currency."""

    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    symbol: str
    display_name: str
    rate_from_base: float


def load_currencies(cfg: Settings) -> Mapping[str, CurrencyConfig]:
    """Build the read-only currency table for *cfg*.

    The configured FX rate is quoted per GBP; every ``rate_from_base`` is
    rescaled so that ``cfg.base_currency`` has rate 1.0.

    Raises:
        ValueError: ``cfg.base_currency`` is not in the table.
    """
    per_gbp = {"GBP": 1.0, "EUR": cfg.eur_rate_from_gbp}
    if cfg.base_currency not in per_gbp:
        raise ValueError(
            f"Unsupported base currency '{cfg.base_currency}'. Use one of {sorted(per_gbp)}."
        )
    base_rate = per_gbp[cfg.base_currency]

    table = {
        "GBP": CurrencyConfig(
            code="GBP",
            name="British Pound",
            symbol="£",
            display_name="£ GBP",
            rate_from_base=per_gbp["GBP"] / base_rate,
        ),
        "EUR": CurrencyConfig(
            code="EUR",
            name="Euro",
            symbol="€",
            display_name="€ EUR",
            rate_from_base=per_gbp["EUR"] / base_rate,
        ),
    }
    return MappingProxyType(table)


CURRENCIES: Mapping[str, CurrencyConfig] = load_currencies(settings)
BASE_CURRENCY: str = settings.base_currency


def is_supported(code: str | None) -> bool:
    return code is not None and code in CURRENCIES


def convert_amount(amount: float | None, from_code: str, to_code: str) -> float | None:
    """Convert *amount* between two supported currencies via the base currency."""
    if amount is None:
        return None
    if from_code == to_code:
        return amount
    from_rate = CURRENCIES[from_code].rate_from_base
    to_rate = CURRENCIES[to_code].rate_from_base
    return amount / from_rate * to_rate


def currency_symbol(code: str) -> str:
    return CURRENCIES[code].symbol


def currency_display_name(code: str) -> str:
    return CURRENCIES[code].display_name


def format_amount(amount: float) -> str:
    """Thousands-grouped with at most two decimals: 1234.5 -> '1,234.5'."""
    text = f"{amount:,.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def format_currency(amount: float | None, code: str | None = None) -> str:
    """Render an amount in millions, e.g. '£583M'."""
    if amount is None:
        return "N/A"
    return f"{currency_symbol(code or BASE_CURRENCY)}{format_amount(amount)}M"


def format_percentage(value: float | None) -> str:
    """One decimal with an explicit '+' for growth, e.g. '+18.0%'."""
    if value is None:
        return "N/A"
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.1f}%"
