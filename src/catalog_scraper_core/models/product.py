"""Product listing model as scraped from a vendor catalog."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from decimal import Decimal
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    field_serializer,
)

from catalog_scraper_core.constants import DEFAULT_IMAGE_URL
from catalog_scraper_core.exceptions import PriceParseError
from catalog_scraper_core.models.barcode import DEFAULT_EAN13, Ean13, parse_ean13
from catalog_scraper_core.pricing import parse_price_nonstrict


def _to_decimal(value: Decimal | int | str) -> Decimal:
    """Coerce a monetary value, parsing strings leniently."""
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise PriceParseError(str(value), str(value))
        return value
    if isinstance(value, bool):
        msg = "monetary value cannot be a bool"
        raise TypeError(msg)
    if isinstance(value, int):
        return Decimal(value)
    return parse_price_nonstrict(value)


class PropertyMap(Mapping[str, str]):
    """Read-only, hashable mapping of vendor-specific product properties."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(data or {})

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __hash__(self) -> int:
        return hash(frozenset(self._data.items()))

    def __repr__(self) -> str:
        return f"PropertyMap({self._data!r})"


def _freeze_properties(value: dict[str, str]) -> PropertyMap:
    return PropertyMap(value)


def _dump_properties(value: Mapping[str, str]) -> dict[str, str]:
    return dict(value)


Properties = Annotated[
    dict[str, str],
    AfterValidator(_freeze_properties),
    PlainSerializer(_dump_properties, return_type=dict[str, str]),
]


class Product(BaseModel):
    """One catalog listing from a vendor website.

    Holds the EAN-13 identifier, description, SKU, image, wholesale cost,
    manufacturer suggested retail (MSRP) and minimum advertised price (IMAP),
    plus any other barcodes and vendor-specific extras.

    Instances are immutable. Start from ``Product.new()`` and chain the
    ``with_*`` transforms, each of which returns a new Product.
    """

    model_config = ConfigDict(frozen=True)

    identifier: Ean13 = Field(default=DEFAULT_EAN13, description="GTIN/EAN-13 barcode")
    description: str = Field(default="", description="Free-text product description")
    sku: str = Field(default="", description="Vendor-internal stock code")
    image_url: str = Field(default=DEFAULT_IMAGE_URL, description="Product image URL")
    wholesale_cost: Decimal = Field(default=Decimal(0), description="Wholesale cost")
    msrp: Decimal = Field(default=Decimal(0), description="Manufacturer suggested retail")
    imap: Decimal = Field(default=Decimal(0), description="Minimum advertised price")
    alternate_identifiers: frozenset[str] = Field(
        default_factory=frozenset, description="Other codes for the same product"
    )
    miscellaneous_properties: Properties = Field(
        default_factory=PropertyMap, description="Vendor-specific extra fields"
    )

    @classmethod
    def new(cls) -> Product:
        """Create a Product with every field at its default.

        * ``identifier`` - 0000000000000
        * ``description`` / ``sku`` - empty string
        * ``image_url`` - "about:blank"
        * ``wholesale_cost`` / ``msrp`` / ``imap`` - 0
        * ``alternate_identifiers`` / ``miscellaneous_properties`` - empty
        """
        return cls()

    @field_serializer("alternate_identifiers")
    def _serialize_alternates(self, value: frozenset[str]) -> list[str]:
        return sorted(value)

    def with_identifier(self, identifier: str) -> Product:
        return self.model_copy(update={"identifier": parse_ean13(identifier)})

    def with_description(self, description: object) -> Product:
        return self.model_copy(update={"description": str(description)})

    def with_sku(self, sku: object) -> Product:
        return self.model_copy(update={"sku": str(sku)})

    def with_image_url(self, image_url: object) -> Product:
        return self.model_copy(update={"image_url": str(image_url)})

    def with_wholesale_cost(self, wholesale_cost: Decimal | int | str) -> Product:
        return self.model_copy(update={"wholesale_cost": _to_decimal(wholesale_cost)})

    def with_msrp(self, msrp: Decimal | int | str) -> Product:
        return self.model_copy(update={"msrp": _to_decimal(msrp)})

    def with_imap(self, imap: Decimal | int | str) -> Product:
        return self.model_copy(update={"imap": _to_decimal(imap)})

    def add_alternate_identifier(self, identifier: object) -> Product:
        """Return a copy with ``identifier`` added to the alternate identifiers."""
        alternates = self.alternate_identifiers | {str(identifier)}
        return self.model_copy(update={"alternate_identifiers": alternates})

    def with_property(self, key: str, value: object) -> Product:
        """Return a copy with one miscellaneous property set."""
        properties = PropertyMap({**self.miscellaneous_properties, key: str(value)})
        return self.model_copy(update={"miscellaneous_properties": properties})
