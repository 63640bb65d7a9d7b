"""Tests for listing parsing and the scannable capability."""
import json
from decimal import Decimal

import pytest
from pydantic import ValidationError

from conftest import BASE_AMAZON, CLEAN_ETSY
from listing_compliance.errors import ComplianceError, ListingParseError
from listing_compliance.listings import (
    AmazonListing, EtsyListing, ScannableListing, load_listings, parse_listing, parse_listings,
)
from listing_compliance.models import Platform


class TestEtsyListing:
    def setup_method(self):
        self.listing = parse_listing(CLEAN_ETSY)

    def test_parsed_type(self):
        assert isinstance(self.listing, EtsyListing)
        assert self.listing.platform_tag == Platform.ETSY
        assert self.listing.identifier == "1001"

    def test_price_value(self):
        assert self.listing.price_value == Decimal("38")

    def test_price_with_divisor(self):
        price = {"amount": 1999, "divisor": 100, "currency_code": "USD"}
        listing = parse_listing({**CLEAN_ETSY, "price": price})
        assert listing.price_value == Decimal("19.99")

    def test_default_listing_url(self):
        assert self.listing.listing_url == "https://www.etsy.com/listing/1001"

    def test_explicit_url_kept(self):
        listing = parse_listing({**CLEAN_ETSY, "url": "https://shop.example/item"})
        assert listing.listing_url == "https://shop.example/item"

    def test_text_joins_fields(self):
        listing = EtsyListing(listing_id=1, title="Mug", description="Blue", tags=["a", "b"])
        assert listing.text("title", "description") == "Mug Blue"
        assert listing.text("tags") == "a b"

    def test_attribute_default(self):
        listing = EtsyListing(listing_id=1)
        assert listing.attribute("shipping_profile_id") is None
        assert listing.attribute("shipping_profile_id", 0) == 0

    def test_frozen(self):
        with pytest.raises(ValidationError):
            self.listing.title = "changed"


class TestAmazonListing:
    def test_camel_case_keys(self):
        listing = parse_listing(BASE_AMAZON)
        assert isinstance(listing, AmazonListing)
        assert listing.bullet_points[0].startswith("B")
        assert listing.product_type == "LAMP"
        assert listing.dimensions.height == 15
        assert listing.identifier == "B0TEST0001"

    def test_snake_case_keys(self):
        listing = AmazonListing(asin="B0X", bullet_points=["one"], product_type="T")
        assert listing.bullet_points == ("one",)

    def test_is_fba(self):
        assert parse_listing({**BASE_AMAZON, "fulfillmentChannel": "AMAZON_NA"}).is_fba
        assert not parse_listing(BASE_AMAZON).is_fba

    def test_no_default_url(self):
        assert parse_listing(BASE_AMAZON).listing_url is None


class TestParsing:
    def test_platform_argument_fills_tag(self):
        data = {k: v for k, v in CLEAN_ETSY.items() if k != "platform"}
        assert isinstance(parse_listing(data, "etsy"), EtsyListing)

    def test_missing_platform(self):
        data = {k: v for k, v in CLEAN_ETSY.items() if k != "platform"}
        with pytest.raises(ListingParseError):
            parse_listing(data)

    def test_missing_required_field(self):
        with pytest.raises(ListingParseError):
            parse_listing({"platform": "etsy", "title": "no id"})

    def test_not_an_object(self):
        with pytest.raises(ListingParseError):
            parse_listing(["etsy"])

    def test_parse_error_is_value_error(self):
        assert issubclass(ListingParseError, ValueError)
        assert issubclass(ListingParseError, ComplianceError)

    def test_parse_listings(self):
        listings = parse_listings([CLEAN_ETSY, BASE_AMAZON])
        assert [l.platform_tag for l in listings] == [Platform.ETSY, Platform.AMAZON]


class TestLoadListings:
    def test_array(self):
        listings = load_listings(json.dumps([CLEAN_ETSY]))
        assert len(listings) == 1

    def test_wrapped_object(self):
        assert len(load_listings(json.dumps({"listings": [CLEAN_ETSY]}))) == 1
        assert len(load_listings(json.dumps({"items": [BASE_AMAZON]}))) == 1

    def test_invalid_json(self):
        with pytest.raises(ListingParseError):
            load_listings("{not json")

    def test_wrong_shape(self):
        with pytest.raises(ListingParseError):
            load_listings(json.dumps({"listings": "nope"}))


class TestScannableListing:
    def test_base_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            ScannableListing(title="Anything")

    def test_shapes_share_capability(self):
        for listing in (parse_listing(CLEAN_ETSY), parse_listing(BASE_AMAZON)):
            assert isinstance(listing, ScannableListing)
            assert listing.identifier
