"""Custom exception hierarchy for catalog-scraper."""

from __future__ import annotations

from enum import StrEnum


class CatalogScraperError(Exception):
    """Base exception for all catalog-scraper errors."""


class CommandErrorKind(StrEnum):
    """Category of a failed browser command."""

    NAVIGATION = "navigation"
    NO_SUCH_ELEMENT = "no_such_element"
    TIMEOUT = "timeout"
    READ = "read"
    INPUT = "input"
    SESSION = "session"


class CommandError(CatalogScraperError):
    """Raised when a browser session command fails."""

    def __init__(self, kind: CommandErrorKind, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(f"{kind}: {message}")


class InvalidArgumentError(CatalogScraperError):
    """Raised when a required page element for an operation cannot be located."""

    def __init__(self, argument: str, explanation: str) -> None:
        self.argument = argument
        self.explanation = explanation
        super().__init__(f"invalid argument: {argument}: {explanation}")


class PriceParseError(CatalogScraperError, ValueError):
    """Raised when a price string has no parseable decimal value."""

    def __init__(self, raw: str, filtered: str) -> None:
        self.raw = raw
        self.filtered = filtered
        super().__init__(f"cannot parse price from {raw!r} (filtered: {filtered!r})")


class BarcodeError(CatalogScraperError, ValueError):
    """Raised when a string is not a valid GTIN/EAN-13 barcode."""

    def __init__(self, raw: str, reason: str) -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(f"invalid barcode {raw!r}: {reason}")


class ConfigurationError(CatalogScraperError):
    """Raised when a vendor is missing credentials or a profile."""
