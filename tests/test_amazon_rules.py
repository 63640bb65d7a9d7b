"""Tests for Amazon rules."""
import pytest

from listing_compliance.models import Severity
from listing_compliance.scanner import ListingScanner

FBA = "AMAZON_NA"


class TestAmazonRules:
    @pytest.fixture(autouse=True)
    def _scanner(self, catalog):
        self.catalog = catalog
        self.scanner = ListingScanner(catalog)

    def violations(self, listing):
        return {v.rule_id: v for v in self.scanner.scan(listing).violations}

    def test_baseline_listing(self, make_amazon):
        ids = [v.rule_id for v in self.scanner.scan(make_amazon()).violations]
        assert ids == ["AMZN-TR-008", "AMZN-TR-009"]

    def test_title_of_fifty_characters(self, make_amazon):
        title = "Acme LED Desk Lamp with Adjustable Arm for Offices"
        assert len(title) == 50
        v = self.violations(make_amazon(title=title))["AMZN-PDP-001"]
        assert v.severity == Severity.CRITICAL
        assert "50" in v.message
        assert v.field == "title"

    def test_title_too_long(self, make_amazon):
        v = self.violations(make_amazon(title="Acme " + "lamp " * 45))["AMZN-PDP-001"]
        assert "too long" in v.message

    def test_promotional_title_with_links(self, make_amazon):
        listing = make_amazon(
            title="FREE SHIPPING!!!",
            description="Visit www.acme-lamps.example.com or email support@acme.example for help.",
        )
        found = self.violations(listing)
        assert found["AMZN-PDP-010"].matched_value == "free shipping"
        assert "AMZN-CP-002" in found
        assert "AMZN-CP-003" in found
        for v in found.values():
            assert v.severity == self.catalog.get(v.rule_id).severity

    def test_bullet_points(self, make_amazon):
        found = self.violations(make_amazon(bulletPoints=[]))
        assert found["AMZN-PDP-002"].message == "No bullet points provided"
        assert found["AMZN-PDP-002"].field == "bulletPoints"
        found = self.violations(make_amazon(bulletPoints=["B" * 160] * 3))
        assert found["AMZN-PDP-002"].message.startswith("Only 3 bullet points")

    def test_images(self, make_amazon):
        found = self.violations(make_amazon(mainImageUrl=None, images=[]))
        assert found["AMZN-PDP-004"].severity == Severity.CRITICAL
        assert "AMZN-TR-009" not in found
        found = self.violations(make_amazon(images=["a.jpg"] * 4))
        assert found["AMZN-PDP-005"].message == "4 images provided. Consider adding 2 more for better conversion."

    def test_search_terms_bytes(self, make_amazon):
        found = self.violations(make_amazon(searchTerms=[]))
        assert found["AMZN-PDP-012"].message == "No backend search terms provided"
        found = self.violations(make_amazon(searchTerms=["é" * 125]))
        assert found["AMZN-PDP-012"].message == "Search terms exceed 249 byte limit (250 bytes)"

    def test_trademark_without_compatibility(self, make_amazon):
        listing = make_amazon(title="Acme Phone Case with Apple Logo Cutout, Slim Shockproof Cover for Travel")
        assert self.violations(listing)["AMZN-BT-002"].matched_value == "apple"

    def test_trademark_compatible_wording(self, make_amazon):
        listing = make_amazon(title="Acme Phone Case for Apple iPhone 15, Slim Shockproof Cover for Travel")
        assert "AMZN-BT-002" not in self.violations(listing)

    def test_trademark_own_brand(self, make_amazon):
        listing = make_amazon(brand="Sony", title="Sony Wireless Headphones with Noise Cancelling and Long Battery")
        assert "AMZN-BT-002" not in self.violations(listing)

    def test_missing_brand(self, make_amazon):
        found = self.violations(make_amazon(brand=None))
        assert found["AMZN-BT-001"].severity == Severity.CRITICAL
        assert "AMZN-BT-005" not in found

    def test_alcohol_accessories_exempt(self, make_amazon):
        glasses = make_amazon(title="Acme Crystal Wine Glasses Set of 4 with Gift Box for Dinner Parties")
        assert "AMZN-RC-008" not in self.violations(glasses)

    def test_lingerie_category_exempt(self, make_amazon):
        text = "Acme Sexy Lace Bralette with Adjustable Straps for Everyday Comfort Wear"
        assert "AMZN-CP-008" in self.violations(make_amazon(title=text))
        assert "AMZN-CP-008" not in self.violations(make_amazon(title=text, category="Lingerie"))

    def test_variation_words_need_boundaries(self, make_amazon):
        found = self.violations(make_amazon(title="Acme Smart LED Desk Lamp with Adjustable Arm and Touch Dimmer for Home"))
        assert "AMZN-TR-005" not in found
        found = self.violations(make_amazon(title="Acme LED Desk Lamp with Adjustable Arm and Touch Dimmer, Black Finish"))
        assert "AMZN-TR-005" in found

    def test_short_sku(self, make_amazon):
        assert self.violations(make_amazon(sku="AB"))["AMZN-TR-002"].message == "SKU is very short - may be unclear"

    def test_unknown_status(self, make_amazon):
        found = self.violations(make_amazon(status="SUPPRESSED"))
        assert found["AMZN-TR-010"].message == 'Product status is "SUPPRESSED" - not buyable'
        found = self.violations(make_amazon(status="DELETED"))
        assert found["AMZN-TR-010"].message == "Product is deleted"

    def test_used_without_condition_note(self, make_amazon):
        v = self.violations(make_amazon(condition="Used"))["AMZN-TR-007"]
        assert v.field == "conditionNote"
        assert v.severity == Severity.INFO


class TestFbaRules:
    @pytest.fixture(autouse=True)
    def _scanner(self, catalog):
        self.scanner = ListingScanner(catalog)

    def fba_ids(self, listing):
        return [v.rule_id for v in self.scanner.scan(listing).violations
                if v.rule_id.startswith("AMZN-FBA-")]

    def test_merchant_fulfilled_skips_fba(self, make_amazon):
        assert self.fba_ids(make_amazon(category="Health & Household")) == []

    def test_fba_label_always(self, make_amazon):
        assert self.fba_ids(make_amazon(fulfillmentChannel=FBA)) == ["AMZN-FBA-001"]

    def test_fba_expirable_and_liquid(self, make_amazon):
        listing = make_amazon(fulfillmentChannel=FBA, category="Beauty",
                              title="Acme Hydrating Face Serum with Hyaluronic Acid for Dry Skin Care")
        ids = self.fba_ids(listing)
        assert "AMZN-FBA-003" in ids
        assert "AMZN-FBA-005" in ids

    def test_fba_oversized(self, make_amazon):
        listing = make_amazon(fulfillmentChannel=FBA,
                              dimensions={"length": 30, "width": 6, "height": 6, "weight": 5})
        assert "AMZN-FBA-004" in self.fba_ids(listing)

    def test_fba_small_and_light(self, make_amazon):
        listing = make_amazon(fulfillmentChannel=FBA, price=8.5)
        assert "AMZN-FBA-007" in self.fba_ids(listing)
