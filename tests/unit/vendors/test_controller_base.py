"""Tests for the VendorController default algorithms."""

from __future__ import annotations

import asyncio
from decimal import Decimal

import pytest

from catalog_scraper_core.exceptions import (
    BarcodeError,
    CommandError,
    CommandErrorKind,
    InvalidArgumentError,
)
from catalog_scraper_core.models.product import Product
from catalog_scraper_core.models.vendor import VendorCredentials
from catalog_scraper_vendors.controllers.base import VendorController
from tests.mocks.mock_browser import FakeBrowserSession, FakeElement, make_login_page

LOGIN_URL = "https://vendor.example.com/login"


class StubController(VendorController):
    """Minimal controller returning a fixed product per lookup."""

    vendor_name = "stub"

    def __init__(self, client: FakeBrowserSession, credentials: VendorCredentials) -> None:
        super().__init__(client, LOGIN_URL, credentials)
        self.lookups: list[str] = []
        self.active = 0
        self.max_active = 0

    async def product_from_identifier(self, barcode: str) -> Product | None:
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        await asyncio.sleep(0)
        self.lookups.append(barcode)
        self.active -= 1
        return Product.new().with_identifier(barcode)


class ReloginController(StubController):
    """Logs in again from inside a lookup."""

    async def product_from_identifier(self, barcode: str) -> Product | None:
        await self.login()
        return await super().product_from_identifier(barcode)


def _typed(page: dict[str, list[FakeElement]]) -> dict[str, list[str]]:
    form = page["form"][0]
    return {str(e.properties["name"]): e.typed for e in form.children}


@pytest.mark.unit
class TestLogin:
    """Test the field-name sniffing login heuristic."""

    @pytest.mark.asyncio
    async def test_login_fills_named_fields(self, credentials: VendorCredentials) -> None:
        """Case-insensitive match picks Username and Password, not q."""
        page = make_login_page("q", "Username", "Password")
        browser = FakeBrowserSession({LOGIN_URL: page["form"]})
        controller = StubController(browser, credentials)

        result = await controller.login()

        assert result is None
        assert browser.visited == [LOGIN_URL]
        assert _typed(page) == {
            "q": [],
            "Username": ["buyer"],
            "Password": ["hunter2\n"],
        }

    @pytest.mark.asyncio
    async def test_first_matching_field_wins(self, credentials: VendorCredentials) -> None:
        """Later inputs that also contain 'user' are ignored."""
        page = make_login_page("username", "other_user_field", "password")
        browser = FakeBrowserSession({LOGIN_URL: page["form"]})
        controller = StubController(browser, credentials)

        await controller.login()

        typed = _typed(page)
        assert typed["username"] == ["buyer"]
        assert typed["other_user_field"] == []
        assert typed["password"] == ["hunter2\n"]

    @pytest.mark.asyncio
    async def test_scan_stops_once_both_found(self, credentials: VendorCredentials) -> None:
        """A second password-like input after both matches is untouched."""
        page = make_login_page("user", "pass", "passcode")
        browser = FakeBrowserSession({LOGIN_URL: page["form"]})

        await StubController(browser, credentials).login()

        assert _typed(page)["passcode"] == []

    @pytest.mark.asyncio
    async def test_missing_user_field_raises(self, credentials: VendorCredentials) -> None:
        """No 'user' input raises InvalidArgumentError naming user_input."""
        page = make_login_page("email", "password")
        browser = FakeBrowserSession({LOGIN_URL: page["form"]})

        with pytest.raises(InvalidArgumentError) as exc_info:
            await StubController(browser, credentials).login()

        assert exc_info.value.argument == "user_input"
        assert _typed(page)["password"] == []

    @pytest.mark.asyncio
    async def test_missing_password_field_raises(self, credentials: VendorCredentials) -> None:
        """No 'pass' input raises InvalidArgumentError naming passwd_input."""
        page = make_login_page("username", "pin")
        browser = FakeBrowserSession({LOGIN_URL: page["form"]})

        with pytest.raises(InvalidArgumentError) as exc_info:
            await StubController(browser, credentials).login()

        assert exc_info.value.argument == "passwd_input"

    @pytest.mark.asyncio
    async def test_nameless_inputs_skipped(self, credentials: VendorCredentials) -> None:
        """Inputs without a name property do not match anything."""
        form = FakeElement(
            "form",
            children=[
                FakeElement("input", properties={"name": None}),
                FakeElement("input", properties={"name": "user_id"}),
                FakeElement("input", properties={"name": "passwd"}),
            ],
        )
        browser = FakeBrowserSession({LOGIN_URL: [form]})

        await StubController(browser, credentials).login()

        assert form.children[0].typed == []
        assert form.children[1].typed == ["buyer"]

    @pytest.mark.asyncio
    async def test_missing_form_propagates(self, credentials: VendorCredentials) -> None:
        """A page with no form surfaces the session's CommandError."""
        browser = FakeBrowserSession({LOGIN_URL: []})

        with pytest.raises(CommandError) as exc_info:
            await StubController(browser, credentials).login()

        assert exc_info.value.kind == CommandErrorKind.TIMEOUT

    @pytest.mark.asyncio
    async def test_navigation_failure_propagates(self, credentials: VendorCredentials) -> None:
        """Navigation errors are not retried or wrapped."""
        browser = FakeBrowserSession()
        error = CommandError(CommandErrorKind.NAVIGATION, "net::ERR_NAME_NOT_RESOLVED")
        browser.fail_on_navigate = error

        with pytest.raises(CommandError) as exc_info:
            await StubController(browser, credentials).login()

        assert exc_info.value is error


@pytest.mark.unit
class TestPriceFromElement:
    """Test the default price-from-element helper."""

    def _controller(
        self, element: FakeElement, credentials: VendorCredentials
    ) -> StubController:
        browser = FakeBrowserSession({"page": [element]})
        browser.current_url = "page"
        return StubController(browser, credentials)

    @pytest.mark.asyncio
    async def test_value_property_preferred(self, credentials: VendorCredentials) -> None:
        """An input's value wins over its text."""
        element = FakeElement(
            "input", properties={"id": "price", "value": "$1,299.00"}, text="ignored 5"
        )
        price = await self._controller(element, credentials).price_from_element("#price")
        assert price == Decimal("1299.00")

    @pytest.mark.asyncio
    async def test_falls_back_to_text(self, credentials: VendorCredentials) -> None:
        """Missing value property falls back to rendered text."""
        element = FakeElement("span", properties={"id": "price"}, text="Now only $42.50!")
        price = await self._controller(element, credentials).price_from_element("#price")
        assert price == Decimal("42.50")

    @pytest.mark.asyncio
    async def test_unparseable_is_none(self, credentials: VendorCredentials) -> None:
        """Empty value and 'Call for price' text yields None, not an error."""
        element = FakeElement(
            "input", properties={"id": "price", "value": ""}, text="Call for price"
        )
        price = await self._controller(element, credentials).price_from_element("#price")
        assert price is None

    @pytest.mark.asyncio
    async def test_minus_dropped(self, credentials: VendorCredentials) -> None:
        """Page prices are read as non-negative."""
        element = FakeElement("span", properties={"id": "price"}, text="-$3.00")
        price = await self._controller(element, credentials).price_from_element("#price")
        assert price == Decimal("3.00")

    @pytest.mark.asyncio
    async def test_missing_element_raises(self, credentials: VendorCredentials) -> None:
        """Locator failures are hard errors."""
        element = FakeElement("span", properties={"id": "other"})
        with pytest.raises(CommandError):
            await self._controller(element, credentials).price_from_element("#price")


@pytest.mark.unit
class TestLookup:
    """Test barcode validation and operation serialization."""

    @pytest.mark.asyncio
    async def test_lookup_normalises_barcode(self, credentials: VendorCredentials) -> None:
        """UPC-A input reaches product_from_identifier as GTIN-13."""
        controller = StubController(FakeBrowserSession(), credentials)
        product = await controller.lookup("036000291452")
        assert controller.lookups == ["0036000291452"]
        assert product is not None
        assert product.identifier == "0036000291452"

    @pytest.mark.asyncio
    async def test_lookup_rejects_bad_barcode(self, credentials: VendorCredentials) -> None:
        """Invalid barcodes never reach the browser."""
        controller = StubController(FakeBrowserSession(), credentials)
        with pytest.raises(BarcodeError):
            await controller.lookup("not-a-barcode")
        assert controller.lookups == []

    @pytest.mark.asyncio
    async def test_concurrent_lookups_serialized(self, credentials: VendorCredentials) -> None:
        """Two lookups on one controller never overlap."""
        controller = StubController(FakeBrowserSession(), credentials)
        await asyncio.gather(
            controller.lookup("4006381333931"),
            controller.lookup("5901234123457"),
        )
        assert controller.max_active == 1
        assert sorted(controller.lookups) == ["4006381333931", "5901234123457"]

    @pytest.mark.asyncio
    async def test_relogin_inside_lookup(self, credentials: VendorCredentials) -> None:
        """The operation lock is re-entrant for the task holding it."""
        page = make_login_page("username", "password")
        browser = FakeBrowserSession({LOGIN_URL: page["form"]})
        controller = ReloginController(browser, credentials)

        product = await asyncio.wait_for(controller.lookup("4006381333931"), timeout=1)

        assert product is not None
        assert _typed(page)["username"] == ["buyer"]

    def test_credentials_pair(self, credentials: VendorCredentials) -> None:
        """credentials exposes the plain (username, password) tuple."""
        controller = StubController(FakeBrowserSession(), credentials)
        assert controller.credentials == ("buyer", "hunter2")
        assert controller.base_url == LOGIN_URL

    def test_product_from_identifier_is_abstract(self) -> None:
        """VendorController cannot be instantiated without a lookup."""
        with pytest.raises(TypeError):
            VendorController(  # type: ignore[abstract]
                FakeBrowserSession(), LOGIN_URL, VendorCredentials(username="u", password="p")  # type: ignore[arg-type]
            )
