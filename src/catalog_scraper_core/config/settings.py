"""Application settings using pydantic-settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from catalog_scraper_core.constants import (
    DEFAULT_CDP_PORT,
    DEFAULT_WAIT_SECONDS,
    DEFAULT_WINDOW_SIZE,
)
from catalog_scraper_core.exceptions import ConfigurationError
from catalog_scraper_core.models.vendor import VendorCredentials, VendorProfile


class Settings(BaseSettings):
    """Central configuration for catalog-scraper."""

    model_config = SettingsConfigDict(
        env_prefix="CS_", env_file=".env", env_nested_delimiter="__"
    )

    # --- Browser ---
    browser_mode: Literal["connect", "launch"] = Field(
        default="connect",
        description="'connect' attaches to a running Chrome over CDP, 'launch' starts Chromium",
    )
    cdp_port: int = Field(
        default=DEFAULT_CDP_PORT,
        description="Chrome remote-debugging port used in connect mode",
    )
    wait_at_most_seconds: float = Field(
        default=DEFAULT_WAIT_SECONDS,
        description="Longest wait for an element or browser command",
    )
    headless: bool = Field(
        default=True,
        description="Run launched Chromium without a window",
    )
    window_width: int = Field(default=DEFAULT_WINDOW_SIZE[0], description="Browser window width")
    window_height: int = Field(default=DEFAULT_WINDOW_SIZE[1], description="Browser window height")

    # --- Logging ---
    log_level: str = Field(default="INFO", description="Root log level")
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log renderer: 'json' for machines, 'console' for humans",
    )

    # --- Vendors ---
    vendor_credentials: dict[str, VendorCredentials] = Field(
        default_factory=dict,
        description="Login credentials keyed by vendor name",
    )
    vendor_profiles: dict[str, VendorProfile] = Field(
        default_factory=dict,
        description="Catalog selector profiles keyed by vendor name",
    )

    @model_validator(mode="after")
    def validate_browser_config(self) -> Settings:
        """Reject non-positive waits and window sizes."""
        if self.wait_at_most_seconds <= 0:
            msg = "wait_at_most_seconds must be positive"
            raise ValueError(msg)
        if self.window_width <= 0 or self.window_height <= 0:
            msg = "window size must be positive"
            raise ValueError(msg)
        return self

    @property
    def window_size(self) -> tuple[int, int]:
        """Browser window size as (width, height)."""
        return self.window_width, self.window_height

    def credentials_for(self, vendor: str) -> VendorCredentials:
        """Return credentials for a vendor or raise ConfigurationError."""
        try:
            return self.vendor_credentials[vendor]
        except KeyError:
            msg = f"no credentials configured for vendor {vendor!r}"
            raise ConfigurationError(msg) from None

    def profile_for(self, vendor: str) -> VendorProfile:
        """Return the selector profile for a vendor or raise ConfigurationError."""
        try:
            return self.vendor_profiles[vendor]
        except KeyError:
            msg = f"no profile configured for vendor {vendor!r}"
            raise ConfigurationError(msg) from None
