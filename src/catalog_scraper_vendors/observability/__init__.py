"""Observability: structured logging."""

from catalog_scraper_vendors.observability.logging import (
    bind_vendor_context,
    clear_vendor_context,
    configure_logging,
)

__all__ = [
    "bind_vendor_context",
    "clear_vendor_context",
    "configure_logging",
]
