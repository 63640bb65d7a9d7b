"""Shared listing fixtures."""
import pytest

from listing_compliance.catalog import build_catalog
from listing_compliance.listings import parse_listing
from listing_compliance.models import ListingViolationSet, Severity, Violation

TIMESTAMP = "2024-03-01T12:00:00.000Z"

CLEAN_ETSY = {
    "platform": "etsy",
    "listing_id": 1001,
    "title": "Handmade Ceramic Coffee Mug with Speckled Glaze for Tea and Coffee Lovers",
    "description": (
        "This stoneware mug is thrown by hand on the wheel and finished with a speckled "
        "glaze. It measures 4 inches tall and holds 12 oz of coffee or tea. Dishwasher "
        "and microwave safe. Returns accepted within 30 days."
    ),
    "price": {"amount": 3800, "divisor": 100, "currency_code": "USD"},
    "quantity": 5,
    "state": "active",
    "tags": [
        "ceramic mug", "handmade mug", "coffee mug", "tea mug", "pottery mug",
        "gift for her", "speckled mug", "stoneware", "kitchen decor", "coffee lover",
        "tea lover", "housewarming", "ceramic cup",
    ],
    "materials": ["stoneware clay", "glaze"],
    "shipping_profile_id": 77,
    "processing_min": 1,
    "processing_max": 3,
    "who_made": "i_did",
    "when_made": "made_to_order",
    "is_supply": False,
    "images": [
        {"url_fullxfull": "https://i.etsystatic.com/1.jpg"},
        {"url_fullxfull": "https://i.etsystatic.com/2.jpg"},
        {"url_fullxfull": "https://i.etsystatic.com/3.jpg"},
    ],
    "shop_section_id": 5,
}

BASE_AMAZON = {
    "platform": "amazon",
    "asin": "B0TEST0001",
    "sku": "ACME-LAMP-01",
    "title": "Acme LED Desk Lamp with Adjustable Arm and Touch Dimmer for Home Office Reading",
    "description": "A" * 250,
    "bulletPoints": ["B" * 160] * 5,
    "brand": "Acme",
    "manufacturer": "Acme Lighting Co",
    "productType": "LAMP",
    "price": 39.99,
    "quantity": 20,
    "fulfillmentChannel": "DEFAULT",
    "condition": "New",
    "mainImageUrl": "https://m.media-amazon.com/images/main.jpg",
    "images": [f"https://m.media-amazon.com/images/{i}.jpg" for i in range(7)],
    "category": "Home & Kitchen",
    "attributes": {"brandRegistry": True},
    "dimensions": {"length": 12, "width": 6, "height": 15, "weight": 3, "unit": "in"},
    "searchTerms": ["desk lamp", "reading light"],
    "status": "BUYABLE",
}


@pytest.fixture
def make_etsy():
    def factory(**overrides):
        return parse_listing({**CLEAN_ETSY, **overrides})
    return factory


@pytest.fixture
def make_amazon():
    def factory(**overrides):
        return parse_listing({**BASE_AMAZON, **overrides})
    return factory


@pytest.fixture(scope="session")
def catalog():
    return build_catalog()


def violation(rule_id, severity=Severity.WARNING, message="issue", **kwargs):
    return Violation(rule_id=rule_id, severity=Severity(severity), message=message, **kwargs)


def flagged(listing_id, *violations, title=None):
    return ListingViolationSet(
        listing_id=str(listing_id),
        listing_title=title or f"Listing {listing_id}",
        violations=tuple(violations),
    )
