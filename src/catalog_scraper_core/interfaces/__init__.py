"""Public interface re-exports for catalog_scraper_core."""

from catalog_scraper_core.interfaces.browser import BrowserSession, Element

__all__ = [
    "BrowserSession",
    "Element",
]
