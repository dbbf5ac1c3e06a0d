"""Factory functions for creating browser clients and controllers from settings."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from catalog_scraper_vendors.controllers.configurable import ConfigurableVendorController

if TYPE_CHECKING:
    from catalog_scraper_core.config.settings import Settings
    from catalog_scraper_core.interfaces.browser import BrowserSession
    from catalog_scraper_vendors.tools.chrome import ChromeClient


async def create_chrome_client(settings: Settings) -> ChromeClient:
    """Create a Chrome client based on settings.

    ``browser_mode == "connect"`` attaches to Chrome on ``settings.cdp_port``;
    ``"launch"`` starts a new Chromium honouring ``settings.headless``.
    """
    from catalog_scraper_vendors.tools.chrome import ChromeClient

    wait_at_most = timedelta(seconds=settings.wait_at_most_seconds)
    if settings.browser_mode == "connect":
        return await ChromeClient.connect(
            settings.cdp_port, wait_at_most, window_size=settings.window_size
        )
    return await ChromeClient.launch(
        wait_at_most, headless=settings.headless, window_size=settings.window_size
    )


def create_vendor_controller(
    settings: Settings, vendor: str, client: BrowserSession
) -> ConfigurableVendorController:
    """Create a selector-driven controller for a configured vendor."""
    return ConfigurableVendorController(
        client,
        profile=settings.profile_for(vendor),
        credentials=settings.credentials_for(vendor),
    )
