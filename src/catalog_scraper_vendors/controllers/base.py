"""Base vendor controller with the default login and price algorithms."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from decimal import Decimal
from typing import TYPE_CHECKING

import structlog

from catalog_scraper_core.constants import (
    LOGIN_FORM_SELECTOR,
    LOGIN_INPUT_SELECTOR,
    PASSWORD_NAME_HINT,
    USERNAME_NAME_HINT,
)
from catalog_scraper_core.exceptions import InvalidArgumentError, PriceParseError
from catalog_scraper_core.models.barcode import parse_ean13
from catalog_scraper_core.pricing import parse_price_strict

if TYPE_CHECKING:
    from catalog_scraper_core.interfaces.browser import BrowserSession, Element
    from catalog_scraper_core.models.product import Product
    from catalog_scraper_core.models.vendor import VendorCredentials

logger = structlog.get_logger()


class VendorController(ABC):
    """Abstract base class for one vendor website scraper.

    Subclasses must implement ``product_from_identifier``. ``login`` and
    ``price_from_element`` have default implementations that suit sites with
    conventionally named login inputs and plain price elements; override them
    for anything else.

    A controller drives a single browser session, and operations on it must
    run one at a time. ``login`` and ``lookup`` hold ``exclusive()`` for their
    whole duration.
    """

    vendor_name: str = "base"

    def __init__(
        self,
        client: BrowserSession,
        base_url: str,
        credentials: VendorCredentials,
    ) -> None:
        """Initialize with a browser session, login URL and credentials."""
        self._client = client
        self._base_url = base_url
        self._credentials = credentials
        self._operation_lock = asyncio.Lock()
        self._lock_owner: asyncio.Task[object] | None = None

    @property
    def client(self) -> BrowserSession:
        return self._client

    @property
    def base_url(self) -> str:
        """Vendor login page URL."""
        return self._base_url

    @property
    def credentials(self) -> tuple[str, str]:
        """(username, password) for the vendor."""
        return self._credentials.as_pair()

    @asynccontextmanager
    async def exclusive(self) -> AsyncIterator[None]:
        """Hold the controller's operation lock.

        Re-entering from the task that already holds the lock does not wait,
        so an operation may call another (e.g. re-login during a lookup).
        """
        current = asyncio.current_task()
        if current is not None and self._lock_owner is current:
            yield
            return
        async with self._operation_lock:
            self._lock_owner = current
            try:
                yield
            finally:
                self._lock_owner = None

    async def login(self) -> None:
        """Log in by filling the first form on the login page.

        The username field is the first input whose lower-cased ``name``
        contains "user"; the password field is the first containing "pass".
        Raises InvalidArgumentError when either is missing. Browser command
        failures propagate unchanged.
        """
        async with self.exclusive():
            session = self.client
            logger.info("vendor_login_start", vendor=self.vendor_name, url=self.base_url)
            await session.navigate(self.base_url)

            form = await session.find_element(LOGIN_FORM_SELECTOR)
            inputs = await session.find_all_elements(LOGIN_INPUT_SELECTOR, within=form)

            user_input: Element | None = None
            passwd_input: Element | None = None
            for element in inputs:
                name = (await session.read_property(element, "name") or "").lower()
                if USERNAME_NAME_HINT in name and user_input is None:
                    user_input = element
                elif PASSWORD_NAME_HINT in name and passwd_input is None:
                    passwd_input = element
                if user_input is not None and passwd_input is not None:
                    break

            if user_input is None:
                raise InvalidArgumentError(
                    "user_input", "no login form input has a name containing 'user'"
                )
            if passwd_input is None:
                raise InvalidArgumentError(
                    "passwd_input", "no login form input has a name containing 'pass'"
                )

            username, password = self.credentials
            await session.send_keys(user_input, username)
            await session.send_keys(passwd_input, password + "\n")
            logger.info("vendor_login_submitted", vendor=self.vendor_name)

    @abstractmethod
    async def product_from_identifier(self, barcode: str) -> Product | None:
        """Fetch the product listed under ``barcode``, None if the vendor has none."""
        ...

    async def lookup(self, barcode: str) -> Product | None:
        """Validate ``barcode`` and run product_from_identifier exclusively."""
        ean = parse_ean13(barcode)
        async with self.exclusive():
            product = await self.product_from_identifier(ean)
        logger.info(
            "vendor_lookup_complete",
            vendor=self.vendor_name,
            barcode=ean,
            found=product is not None,
        )
        return product

    async def price_from_element(self, selector: str) -> Decimal | None:
        """Read a non-negative price from the element matching ``selector``.

        Input elements are read through their ``value`` property, anything
        else (or an empty value) through its rendered text. Returns None when
        no price can be parsed. Failing to find the element raises.
        """
        session = self.client
        element = await session.find_element(selector)
        raw = await session.read_property(element, "value")
        if not raw:
            raw = await session.read_text(element)
        try:
            return parse_price_strict(raw)
        except PriceParseError:
            logger.debug("price_not_parsed", vendor=self.vendor_name, selector=selector, raw=raw)
            return None
