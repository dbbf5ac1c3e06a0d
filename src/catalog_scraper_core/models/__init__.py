"""Domain models for catalog-scraper."""

from catalog_scraper_core.models.barcode import (
    DEFAULT_EAN13,
    Ean13,
    ean13_check_digit,
    is_valid_ean13,
    parse_ean13,
)
from catalog_scraper_core.models.product import Product, PropertyMap
from catalog_scraper_core.models.vendor import VendorCredentials, VendorProfile

__all__ = [
    "DEFAULT_EAN13",
    "Ean13",
    "Product",
    "PropertyMap",
    "VendorCredentials",
    "VendorProfile",
    "ean13_check_digit",
    "is_valid_ean13",
    "parse_ean13",
]
