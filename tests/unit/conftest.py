"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from catalog_scraper_core.models.vendor import VendorCredentials, VendorProfile
from tests.mocks.mock_browser import FakeBrowserSession
from tests.mocks.mock_settings import make_credentials, make_profile, make_settings


@pytest.fixture
def mock_settings() -> MagicMock:
    """Return a MagicMock Settings with sensible defaults."""
    return make_settings()


@pytest.fixture
def credentials() -> VendorCredentials:
    """Return test vendor credentials."""
    return make_credentials()


@pytest.fixture
def profile() -> VendorProfile:
    """Return the fake 'acme' vendor profile."""
    return make_profile()


@pytest.fixture
def browser() -> FakeBrowserSession:
    """Return an empty fake browser session."""
    return FakeBrowserSession()
