"""GTIN/EAN-13 barcode parsing and validation."""

from __future__ import annotations

from typing import Annotated

from pydantic import BeforeValidator

from catalog_scraper_core.exceptions import BarcodeError

DEFAULT_EAN13 = "0000000000000"

_SEPARATORS = (" ", "-")


def ean13_check_digit(first12: str) -> int:
    """Compute the GS1 check digit for the first 12 digits of an EAN-13."""
    if len(first12) != 12 or not first12.isdigit():
        raise BarcodeError(first12, "check digit needs exactly 12 digits")
    total = sum(int(d) * (3 if i % 2 else 1) for i, d in enumerate(first12))
    return (10 - total % 10) % 10


def parse_ean13(raw: str) -> str:
    """Normalise and validate a barcode, returning its 13-digit form.

    Spaces and hyphens are ignored. A 12-digit UPC-A code is promoted to
    GTIN-13 with a leading zero.
    """
    if not isinstance(raw, str):
        raise BarcodeError(str(raw), "barcode must be a string")
    digits = raw.strip()
    for sep in _SEPARATORS:
        digits = digits.replace(sep, "")
    if not digits.isascii() or not digits.isdigit():
        raise BarcodeError(raw, "barcode must contain only digits")
    if len(digits) == 12:
        digits = "0" + digits
    if len(digits) != 13:
        raise BarcodeError(raw, f"expected 13 digits, got {len(digits)}")
    if ean13_check_digit(digits[:12]) != int(digits[12]):
        raise BarcodeError(raw, "check digit mismatch")
    return digits


def is_valid_ean13(raw: str) -> bool:
    """Return True if ``raw`` parses as a GTIN/EAN-13 barcode."""
    try:
        parse_ean13(raw)
    except BarcodeError:
        return False
    return True


Ean13 = Annotated[str, BeforeValidator(parse_ean13)]
