"""Normalized marketplace listings.

Both marketplace shapes share one scanning capability: a stable
``identifier``, an optional ``url``, searchable text via :meth:`text` and
structured attributes via :meth:`attribute`. Rules only ever read listings
through that capability, so the scanner stays platform-agnostic.
"""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from listing_compliance.errors import ListingParseError
from listing_compliance.models import Platform

ETSY_LISTING_URL = "https://www.etsy.com/listing/{listing_id}"


class ScannableListing(BaseModel, ABC):
    """Common capability of every listing shape."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = ""
    url: Optional[str] = None

    @property
    @abstractmethod
    def identifier(self) -> str:
        """Stable per-platform listing ID."""

    @property
    def platform_tag(self) -> Platform:
        return Platform(self.platform)  # type: ignore[attr-defined]

    def attribute(self, name: str, default: Any = None) -> Any:
        """Structured attribute by field name; ``default`` when absent or unset."""
        value = getattr(self, name, None)
        return default if value is None else value

    def text(self, *fields: str) -> str:
        """Space-joined text of the named fields. Sequences are flattened."""
        parts = []
        for name in fields:
            value = self.attribute(name)
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                parts.append(" ".join(str(v) for v in value))
            else:
                parts.append(str(value))
        return " ".join(parts)


# ── Etsy ──────────────────────────────────────────────────────

class EtsyPrice(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: int
    divisor: int = 100
    currency_code: str = "USD"

    @property
    def value(self) -> Decimal:
        if not self.divisor:
            return Decimal(self.amount)
        return Decimal(self.amount) / Decimal(self.divisor)


class EtsyImage(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    url_fullxfull: str


class EtsyListing(ScannableListing):
    platform: Literal["etsy"] = "etsy"
    listing_id: int
    description: str = ""
    price: Optional[EtsyPrice] = None
    quantity: int = 0
    state: str = "active"
    tags: tuple[str, ...] = ()
    materials: tuple[str, ...] = ()
    taxonomy_id: Optional[int] = None
    shipping_profile_id: Optional[int] = None
    processing_min: Optional[int] = None
    processing_max: Optional[int] = None
    who_made: Optional[str] = None
    when_made: Optional[str] = None
    is_supply: Optional[bool] = None
    images: tuple[EtsyImage, ...] = ()
    shop_section_id: Optional[int] = None

    @property
    def identifier(self) -> str:
        return str(self.listing_id)

    @property
    def listing_url(self) -> str:
        return self.url or ETSY_LISTING_URL.format(listing_id=self.listing_id)

    @property
    def price_value(self) -> Optional[Decimal]:
        return self.price.value if self.price is not None else None


# ── Amazon ────────────────────────────────────────────────────

class Dimensions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    unit: Optional[str] = None


class AmazonListing(ScannableListing):
    """Amazon SP-API style listing. Accepts camelCase or snake_case keys."""

    model_config = ConfigDict(
        frozen=True, extra="ignore", alias_generator=to_camel, populate_by_name=True,
    )

    platform: Literal["amazon"] = "amazon"
    asin: str
    sku: str = ""
    seller_sku: Optional[str] = None
    description: Optional[str] = None
    bullet_points: tuple[str, ...] = ()
    brand: Optional[str] = None
    manufacturer: Optional[str] = None
    product_type: Optional[str] = None
    price: Optional[float] = None
    currency: Optional[str] = None
    list_price: Optional[float] = None
    business_price: Optional[float] = None
    quantity: Optional[int] = None
    fulfillment_channel: Optional[str] = None
    condition: Optional[str] = None
    condition_note: Optional[str] = None
    main_image_url: Optional[str] = None
    images: tuple[str, ...] = ()
    category: Optional[str] = None
    product_category: Optional[str] = None
    browse_nodes: tuple[str, ...] = ()
    attributes: dict[str, Any] = Field(default_factory=dict)
    dimensions: Optional[Dimensions] = None
    keywords: tuple[str, ...] = ()
    search_terms: tuple[str, ...] = ()
    target_audience: Optional[str] = None
    status: Optional[str] = None

    @property
    def identifier(self) -> str:
        return self.asin

    @property
    def listing_url(self) -> Optional[str]:
        return self.url

    @property
    def is_fba(self) -> bool:
        return "AMAZON" in (self.fulfillment_channel or "")


Listing = Annotated[Union[EtsyListing, AmazonListing], Field(discriminator="platform")]

_listing_adapter = TypeAdapter(Listing)


def parse_listing(data: dict, platform: Optional[str] = None) -> Union[EtsyListing, AmazonListing]:
    """Validate one raw listing dict. ``platform`` fills in a missing tag."""
    if not isinstance(data, dict):
        raise ListingParseError(f"Listing must be an object, got {type(data).__name__}")
    if platform and "platform" not in data:
        data = {**data, "platform": Platform(platform).value}
    try:
        return _listing_adapter.validate_python(data)
    except ValidationError as e:
        raise ListingParseError(f"Invalid listing: {e}") from e


def parse_listings(records: list, platform: Optional[str] = None) -> list:
    return [parse_listing(r, platform) for r in records]


def load_listings(text: str, platform: Optional[str] = None) -> list:
    """Parse listings from JSON text.

    Accepts an array of listing objects or {"listings": [...]} / {"items": [...]}.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ListingParseError(f"Listings file is not valid JSON: {e}") from e
    if isinstance(data, dict):
        data = data.get("listings", data.get("items", []))
    if not isinstance(data, list):
        raise ListingParseError("JSON must be an array or contain a 'listings' array")
    return parse_listings(data, platform)
