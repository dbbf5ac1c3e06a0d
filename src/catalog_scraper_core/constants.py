"""Shared constants for catalog-scraper."""

from __future__ import annotations

# Product defaults
DEFAULT_IMAGE_URL = "about:blank"

# Login form discovery
LOGIN_FORM_SELECTOR = "form"
LOGIN_INPUT_SELECTOR = "input"
USERNAME_NAME_HINT = "user"
PASSWORD_NAME_HINT = "pass"

# Characters kept when reading a price off a page
PRICE_DIGITS = "0123456789"
PRICE_DECIMAL_POINT = "."
PRICE_MINUS_SIGN = "-"

# Browser defaults
DEFAULT_CDP_PORT = 9222
DEFAULT_WINDOW_SIZE = (1920, 1080)
DEFAULT_WAIT_SECONDS = 10.0
