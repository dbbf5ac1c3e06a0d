"""Abstract browser-automation session interface."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

# Opaque handle to an element in the remote page.
Element = Any


@runtime_checkable
class BrowserSession(Protocol):
    """Command surface of one remote browser session.

    Commands are round-trips to the browser and may raise CommandError.
    """

    async def navigate(self, url: str) -> None:
        """Load ``url`` in the session's page."""
        ...

    async def find_element(self, selector: str, within: Element | None = None) -> Element:
        """Wait for the first element matching ``selector``."""
        ...

    async def find_all_elements(
        self, selector: str, within: Element | None = None
    ) -> list[Element]:
        """Return every element currently matching ``selector``."""
        ...

    async def read_property(self, element: Element, name: str) -> str | None:
        """Read a DOM property, None when unset."""
        ...

    async def read_text(self, element: Element) -> str:
        """Read the element's rendered text."""
        ...

    async def send_keys(self, element: Element, text: str) -> None:
        """Type ``text`` into the element; a trailing newline presses Enter."""
        ...
