"""Lenient price parsing for scraped price text."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from catalog_scraper_core.constants import (
    PRICE_DECIMAL_POINT,
    PRICE_DIGITS,
    PRICE_MINUS_SIGN,
)
from catalog_scraper_core.exceptions import PriceParseError

_SIGNED_CHARS = frozenset(PRICE_DIGITS + PRICE_DECIMAL_POINT + PRICE_MINUS_SIGN)
_UNSIGNED_CHARS = frozenset(PRICE_DIGITS + PRICE_DECIMAL_POINT)


def filter_price_text(raw: str, allow_negative: bool = True) -> str:
    """Drop everything but ASCII digits, '.' and (optionally) '-'."""
    keep = _SIGNED_CHARS if allow_negative else _UNSIGNED_CHARS
    return "".join(ch for ch in raw if ch in keep)


def _parse_filtered(raw: str, filtered: str) -> Decimal:
    """Parse already-filtered text as an exact decimal."""
    if not filtered:
        raise PriceParseError(raw, filtered)
    try:
        value = Decimal(filtered)
    except InvalidOperation as e:
        raise PriceParseError(raw, filtered) from e
    if not value.is_finite():
        raise PriceParseError(raw, filtered)
    return value


def parse_price_nonstrict(raw: str) -> Decimal:
    """Parse a displayed price such as ``"$1,234.56 USD"`` into a Decimal.

    Currency symbols, thousands separators, whitespace and letters are
    discarded; digits, '.' and '-' are kept. The remainder must be a valid
    decimal number, otherwise PriceParseError is raised. No rounding is done.
    """
    return _parse_filtered(raw, filter_price_text(raw, allow_negative=True))


def parse_price_strict(raw: str) -> Decimal:
    """Like parse_price_nonstrict, but '-' is discarded as well."""
    return _parse_filtered(raw, filter_price_text(raw, allow_negative=False))
