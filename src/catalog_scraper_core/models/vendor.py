"""Vendor credentials and selector profiles."""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr, field_validator

BARCODE_PLACEHOLDER = "{barcode}"


class VendorCredentials(BaseModel):
    """Login credentials for one vendor website."""

    username: str = Field(description="Login username or email")
    password: SecretStr = Field(description="Login password")

    def as_pair(self) -> tuple[str, str]:
        """Return (username, password) with the password revealed."""
        return self.username, self.password.get_secret_value()


class VendorProfile(BaseModel):
    """CSS selectors describing how to read products off a vendor's catalog."""

    name: str = Field(description="Vendor name (e.g. 'acme-wholesale')")
    login_url: str = Field(description="URL of the vendor login page")
    search_url_template: str = Field(
        description="Catalog search URL with a '{barcode}' placeholder"
    )
    product_selector: str = Field(
        description="Selector present only when the search found a product"
    )
    no_results_selector: str | None = Field(
        default=None,
        description="Selector present only when the search found nothing",
    )
    description_selector: str | None = Field(default=None, description="Product title/description")
    sku_selector: str | None = Field(default=None, description="Vendor stock code")
    image_selector: str | None = Field(default=None, description="Main product <img>")
    wholesale_selector: str | None = Field(default=None, description="Wholesale price element")
    msrp_selector: str | None = Field(default=None, description="MSRP element")
    imap_selector: str | None = Field(default=None, description="IMAP element")
    alternate_identifier_selector: str | None = Field(
        default=None, description="Elements holding other barcodes for the product"
    )
    property_selectors: dict[str, str] = Field(
        default_factory=dict, description="Extra fields keyed by property name"
    )

    @field_validator("search_url_template")
    @classmethod
    def validate_search_template(cls, value: str) -> str:
        """Require the barcode placeholder in the search URL."""
        if BARCODE_PLACEHOLDER not in value:
            msg = f"search_url_template must contain {BARCODE_PLACEHOLDER}"
            raise ValueError(msg)
        return value

    def search_url(self, barcode: str) -> str:
        """Build the catalog search URL for a barcode."""
        return self.search_url_template.replace(BARCODE_PLACEHOLDER, barcode)
