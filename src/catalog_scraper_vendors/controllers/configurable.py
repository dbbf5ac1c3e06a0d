"""Vendor controller driven by a selector profile."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from catalog_scraper_core.exceptions import CommandError, CommandErrorKind
from catalog_scraper_core.models.product import Product
from catalog_scraper_vendors.controllers.base import VendorController

if TYPE_CHECKING:
    from catalog_scraper_core.interfaces.browser import BrowserSession
    from catalog_scraper_core.models.vendor import VendorCredentials, VendorProfile

logger = structlog.get_logger()


class ConfigurableVendorController(VendorController):
    """Scrapes any vendor whose catalog can be described by a VendorProfile."""

    def __init__(
        self,
        client: BrowserSession,
        profile: VendorProfile,
        credentials: VendorCredentials,
    ) -> None:
        super().__init__(client, profile.login_url, credentials)
        self.profile = profile
        self.vendor_name = profile.name

    async def product_from_identifier(self, barcode: str) -> Product | None:
        """Search the catalog for ``barcode`` and read the listing it lands on."""
        session = self.client
        profile = self.profile
        await session.navigate(profile.search_url(barcode))

        if not await self._listing_found():
            logger.info("product_not_found", vendor=self.vendor_name, barcode=barcode)
            return None

        product = Product.new().with_identifier(barcode)

        if profile.description_selector:
            description = await self._first_text(profile.description_selector)
            if description is not None:
                product = product.with_description(description)
        if profile.sku_selector:
            sku = await self._first_text(profile.sku_selector)
            if sku is not None:
                product = product.with_sku(sku)
        if profile.image_selector:
            images = await session.find_all_elements(profile.image_selector)
            src = await session.read_property(images[0], "src") if images else None
            if src:
                product = product.with_image_url(src)

        for field, selector, setter in (
            ("wholesale_cost", profile.wholesale_selector, Product.with_wholesale_cost),
            ("msrp", profile.msrp_selector, Product.with_msrp),
            ("imap", profile.imap_selector, Product.with_imap),
        ):
            if not selector:
                continue
            price = await self.price_from_element(selector)
            if price is None:
                logger.warning(
                    "price_not_found",
                    vendor=self.vendor_name,
                    barcode=barcode,
                    field=field,
                )
                continue
            product = setter(product, price)

        if profile.alternate_identifier_selector:
            for element in await session.find_all_elements(
                profile.alternate_identifier_selector
            ):
                code = (await session.read_text(element)).strip()
                if code:
                    product = product.add_alternate_identifier(code)

        for key, selector in profile.property_selectors.items():
            value = await self._first_text(selector)
            if value is not None:
                product = product.with_property(key, value)

        return product

    async def _listing_found(self) -> bool:
        """Wait for the search page to show a product or a no-results marker.

        Without a no-results selector, a product selector that does not appear
        within the session wait means "not found".
        """
        session = self.client
        profile = self.profile
        if profile.no_results_selector:
            await session.find_element(
                f"{profile.product_selector}, {profile.no_results_selector}"
            )
            return bool(await session.find_all_elements(profile.product_selector))
        try:
            await session.find_element(profile.product_selector)
        except CommandError as e:
            if e.kind != CommandErrorKind.TIMEOUT:
                raise
            return False
        return True

    async def _first_text(self, selector: str) -> str | None:
        """Stripped text of the first match, None when nothing matches."""
        matches = await self.client.find_all_elements(selector)
        if not matches:
            return None
        return (await self.client.read_text(matches[0])).strip()
