"""Chrome browser session backed by Playwright."""

from __future__ import annotations

from datetime import timedelta
from types import TracebackType
from typing import TYPE_CHECKING, Any

import structlog
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from catalog_scraper_core.constants import DEFAULT_WINDOW_SIZE
from catalog_scraper_core.exceptions import CommandError, CommandErrorKind

if TYPE_CHECKING:
    from playwright.async_api import Browser, ElementHandle, Page, Playwright

logger = structlog.get_logger()


def _window_arg(window_size: tuple[int, int]) -> str:
    width, height = window_size
    return f"--window-size={width},{height}"


class PlaywrightSession:
    """BrowserSession over a single Playwright page.

    Playwright errors are re-raised as CommandError so callers never depend
    on the automation backend.
    """

    def __init__(self, page: Page, wait_at_most: timedelta) -> None:
        """Initialize with the page to drive and the element wait limit."""
        self._page = page
        self.wait_at_most = wait_at_most

    @property
    def page(self) -> Page:
        return self._page

    @property
    def _timeout_ms(self) -> float:
        return self.wait_at_most.total_seconds() * 1000

    async def navigate(self, url: str) -> None:
        """Load a URL, waiting for the load event."""
        logger.debug("browser_navigate", url=url)
        try:
            await self._page.goto(url, timeout=self._timeout_ms)
        except PlaywrightTimeoutError as e:
            raise CommandError(CommandErrorKind.TIMEOUT, f"navigating to {url}: {e}") from e
        except PlaywrightError as e:
            raise CommandError(CommandErrorKind.NAVIGATION, f"navigating to {url}: {e}") from e

    async def find_element(
        self, selector: str, within: ElementHandle | None = None
    ) -> ElementHandle:
        """Wait up to wait_at_most for the first match of ``selector``."""
        scope: Any = within if within is not None else self._page
        try:
            element = await scope.wait_for_selector(
                selector, state="attached", timeout=self._timeout_ms
            )
        except PlaywrightTimeoutError as e:
            msg = f"no element matched {selector!r} within {self.wait_at_most.total_seconds()}s"
            raise CommandError(CommandErrorKind.TIMEOUT, msg) from e
        except PlaywrightError as e:
            raise CommandError(CommandErrorKind.NO_SUCH_ELEMENT, f"{selector!r}: {e}") from e
        if element is None:
            raise CommandError(CommandErrorKind.NO_SUCH_ELEMENT, f"no element matched {selector!r}")
        return element

    async def find_all_elements(
        self, selector: str, within: ElementHandle | None = None
    ) -> list[ElementHandle]:
        """Return current matches of ``selector`` without waiting."""
        scope: Any = within if within is not None else self._page
        try:
            return list(await scope.query_selector_all(selector))
        except PlaywrightError as e:
            raise CommandError(CommandErrorKind.NO_SUCH_ELEMENT, f"{selector!r}: {e}") from e

    async def read_property(self, element: ElementHandle, name: str) -> str | None:
        """Read a DOM property as a string, None when null or undefined."""
        try:
            handle = await element.get_property(name)
            value = await handle.json_value()
        except PlaywrightError as e:
            raise CommandError(CommandErrorKind.READ, f"property {name!r}: {e}") from e
        if value is None:
            return None
        return str(value)

    async def read_text(self, element: ElementHandle) -> str:
        """Read the rendered text of an element."""
        try:
            return await element.inner_text()
        except PlaywrightError as e:
            raise CommandError(CommandErrorKind.READ, f"text: {e}") from e

    async def send_keys(self, element: ElementHandle, text: str) -> None:
        """Type into an element; a trailing newline becomes an Enter key press."""
        submit = text.endswith("\n")
        if submit:
            text = text[:-1]
        try:
            if text:
                await element.type(text)
            if submit:
                await element.press("Enter")
        except PlaywrightError as e:
            raise CommandError(CommandErrorKind.INPUT, f"send keys: {e}") from e


class ChromeClient:
    """Owns a Playwright driver, a Chrome browser and one session over it."""

    def __init__(
        self,
        playwright: Playwright,
        browser: Browser,
        session: PlaywrightSession,
        wait_at_most: timedelta,
    ) -> None:
        self._playwright = playwright
        self._browser = browser
        self.session = session
        self.wait_at_most = wait_at_most

    @classmethod
    async def connect(
        cls,
        port: int,
        wait_at_most: timedelta,
        window_size: tuple[int, int] = DEFAULT_WINDOW_SIZE,
    ) -> ChromeClient:
        """Attach to a Chrome started with ``--remote-debugging-port=<port>``."""
        endpoint = f"http://localhost:{port}"
        playwright = await async_playwright().start()
        try:
            browser = await playwright.chromium.connect_over_cdp(endpoint)
            if browser.contexts:
                context = browser.contexts[0]
            else:
                width, height = window_size
                context = await browser.new_context(
                    viewport={"width": width, "height": height}
                )
            page = context.pages[0] if context.pages else await context.new_page()
        except PlaywrightError as e:
            await playwright.stop()
            raise CommandError(CommandErrorKind.SESSION, f"connecting to {endpoint}: {e}") from e

        logger.info("chrome_connected", endpoint=endpoint)
        return cls(playwright, browser, PlaywrightSession(page, wait_at_most), wait_at_most)

    @classmethod
    async def launch(
        cls,
        wait_at_most: timedelta,
        headless: bool = True,
        window_size: tuple[int, int] = DEFAULT_WINDOW_SIZE,
    ) -> ChromeClient:
        """Start a fresh Chromium instance."""
        playwright = await async_playwright().start()
        try:
            browser = await playwright.chromium.launch(
                headless=headless, args=[_window_arg(window_size)]
            )
            width, height = window_size
            page = await browser.new_page(viewport={"width": width, "height": height})
        except PlaywrightError as e:
            await playwright.stop()
            raise CommandError(CommandErrorKind.SESSION, f"launching chromium: {e}") from e

        logger.info("chrome_launched", headless=headless, window_size=window_size)
        return cls(playwright, browser, PlaywrightSession(page, wait_at_most), wait_at_most)

    async def close(self) -> None:
        """Close the browser and stop the Playwright driver."""
        try:
            await self._browser.close()
        finally:
            await self._playwright.stop()
        logger.info("chrome_closed")

    async def __aenter__(self) -> ChromeClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
