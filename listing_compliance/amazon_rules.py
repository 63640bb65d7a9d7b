"""Amazon rule catalog.

60 rules in six categories:
- Product Detail Page (PDP, 12)
- Brand & Trademarks (BT, 8)
- Restricted Categories (RC, 10)
- FBA Requirements (FBA, 8)
- Content Policy (CP, 12)
- Technical Requirements (TR, 10)

Reported ``field`` names use the camelCase keys of the listing feed.
"""
import re
from typing import Optional

from listing_compliance.models import Platform, Severity
from listing_compliance.rules import (
    CrossField, Finding, KeywordMatch, PatternMatch, Presence, Rule, Threshold,
    first_of, has_terms, unless, when,
)

CRITICAL, WARNING, INFO = Severity.CRITICAL, Severity.WARNING, Severity.INFO

CONTENT_FIELDS = ("description", "bullet_points")

SEARCH_TERMS_BYTE_LIMIT = 249


def _rule(rule_id, category, severity, name, description, check) -> Rule:
    return Rule(rule_id, Platform.AMAZON, category, severity, name, description, check)


def _is_fba(listing) -> bool:
    return listing.is_fba


def _category_contains(*terms):
    def condition(listing) -> bool:
        category = (listing.category or "").lower()
        return any(t in category for t in terms)
    return condition


# =============================================================================
# Product Detail Page
# =============================================================================

def _title_length(listing) -> Optional[Finding]:
    length = len(listing.title)
    if length < 60:
        return Finding(
            f"Title is too short ({length} characters). Amazon recommends 60-200 characters.",
            field="title",
            recommendation="Add product details like brand, size, color, and key features",
        )
    if length > 200:
        return Finding(
            f"Title is too long ({length} characters). Amazon limits to 200 characters.",
            field="title",
            recommendation="Shorten title to 200 characters or less",
        )
    return None


def _bullet_length(listing) -> Optional[Finding]:
    bullets = listing.bullet_points
    short = [b for b in bullets if len(b) < 100]
    if short:
        return Finding(f"{len(short)} bullet point(s) are too short (under 100 characters)",
                       field="bulletPoints",
                       recommendation="Expand bullet points with more detailed product information")
    long_ = [b for b in bullets if len(b) > 250]
    if long_:
        return Finding(f"{len(long_)} bullet point(s) are too long (over 250 characters)",
                       field="bulletPoints",
                       recommendation="Shorten bullet points for better readability")
    return None


def _missing_main_image(listing) -> Optional[Finding]:
    if listing.main_image_url or listing.images:
        return None
    return Finding("No product images provided", field="images",
                   recommendation="Add at least one main product image on white background")


def _image_count(listing) -> int:
    return len(listing.images)


def _caps_words(listing) -> Optional[Finding]:
    words = re.findall(r"\b[A-Z]{3,}\b", listing.title)
    if len(words) <= 2:
        return None
    return Finding("Title contains excessive capitalization", field="title",
                   matched_value=", ".join(words),
                   recommendation="Use Title Case instead of ALL CAPS for better readability")


def _brand_not_in_title(listing) -> Optional[Finding]:
    if not listing.brand or listing.brand.lower() in listing.title.lower():
        return None
    return Finding("Brand name not found in title", field="title",
                   recommendation="Start title with brand name for better recognition")


_SPECIAL_CHARS = re.compile(r"""[!@#$%^&*()+=\[\]{}|;:'",.<>?/~`]""")


def _search_terms_bytes(listing) -> int:
    terms = listing.search_terms or listing.keywords
    return len(" ".join(terms).encode("utf-8"))


PRODUCT_DETAIL_PAGE = [
    _rule(
        "AMZN-PDP-001", "product_detail_page", CRITICAL,
        "Title Length Violation",
        "Product title must be between 60-200 characters for optimal display",
        _title_length,
    ),
    _rule(
        "AMZN-PDP-002", "product_detail_page", WARNING,
        "Missing Bullet Points",
        "Product should have 5 bullet points for best conversion",
        first_of(
            Presence("bullet_points", "No bullet points provided",
                     "Add 5 bullet points highlighting key features and benefits",
                     field="bulletPoints"),
            Presence("bullet_points",
                     "Only {count} bullet points. Amazon recommends 5 for optimal conversion.",
                     "Add more bullet points to reach the recommended 5",
                     field="bulletPoints", minimum=5),
        ),
    ),
    _rule(
        "AMZN-PDP-003", "product_detail_page", WARNING,
        "Bullet Point Length",
        "Each bullet point should be 150-200 characters for readability",
        _bullet_length,
    ),
    _rule(
        "AMZN-PDP-004", "product_detail_page", CRITICAL,
        "Missing Main Image",
        "Product must have a main image",
        _missing_main_image,
    ),
    _rule(
        "AMZN-PDP-005", "product_detail_page", WARNING,
        "Insufficient Images",
        "Products should have 6-7 images for best conversion",
        first_of(
            Presence("images", "Only {count} image(s). Amazon recommends 6-7 images.",
                     "Add lifestyle shots, detail shots, and infographics", minimum=3),
            Threshold(
                _image_count,
                lambda value: (f"{value} images provided. Consider adding {6 - value} more "
                               "for better conversion."),
                "Add more product angles and use cases",
                field="images", minimum=6,
            ),
        ),
    ),
    _rule(
        "AMZN-PDP-006", "product_detail_page", WARNING,
        "Missing Product Description",
        "Product description should be comprehensive and detailed",
        first_of(
            Presence("description", "No product description provided",
                     "Add detailed product description with specifications and benefits"),
            Threshold(
                lambda listing: len(listing.description or ""),
                "Product description is too short ({value} characters)",
                "Expand description to at least 200 characters with product details",
                field="description", minimum=200,
            ),
        ),
    ),
    _rule(
        "AMZN-PDP-007", "product_detail_page", WARNING,
        "Title Capitalization",
        "Title should use Title Case, not ALL CAPS",
        _caps_words,
    ),
    _rule(
        "AMZN-PDP-008", "product_detail_page", INFO,
        "Title Structure Best Practices",
        "Title should follow format: Brand + Product Type + Key Features",
        _brand_not_in_title,
    ),
    _rule(
        "AMZN-PDP-009", "product_detail_page", WARNING,
        "HTML in Bullet Points",
        "Bullet points should not contain HTML tags",
        PatternMatch(
            [r"<[^>]+>"],
            "Bullet points contain HTML tags",
            "Remove HTML tags from bullet points",
            fields=("bullet_points",), field="bulletPoints",
        ),
    ),
    _rule(
        "AMZN-PDP-010", "product_detail_page", CRITICAL,
        "Prohibited Promotional Language in Title",
        "Title cannot contain promotional phrases",
        KeywordMatch(
            ["free shipping", "sale", "best seller", "best price", "lowest price",
             "on sale", "discount", "limited time", "#1", "hot"],
            "Title contains prohibited promotional language",
            "Remove promotional phrases - Amazon prohibits them in titles",
            fields=("title",), field="title",
        ),
    ),
    _rule(
        "AMZN-PDP-011", "product_detail_page", WARNING,
        "Special Characters in Title",
        "Avoid excessive special characters in title",
        Threshold(
            lambda listing: len(_SPECIAL_CHARS.findall(listing.title)),
            "Title contains {value} special characters",
            "Reduce special characters for cleaner title",
            field="title", maximum=3,
        ),
    ),
    _rule(
        "AMZN-PDP-012", "product_detail_page", INFO,
        "Search Terms Optimization",
        "Utilize backend search terms for SEO",
        first_of(
            Threshold(
                _search_terms_bytes,
                "No backend search terms provided",
                "Add search terms to improve product discoverability (max 249 bytes)",
                field="searchTerms", minimum=1,
            ),
            Threshold(
                _search_terms_bytes,
                "Search terms exceed 249 byte limit ({value} bytes)",
                "Reduce search terms to fit within 249 byte limit",
                field="searchTerms", maximum=SEARCH_TERMS_BYTE_LIMIT,
            ),
        ),
    ),
]


# =============================================================================
# Brand & Trademarks
# =============================================================================

def _brand_is(name):
    def condition(listing) -> bool:
        return (listing.brand or "").strip().lower() == name
    return condition


def _own_brand(listing, matched: str) -> bool:
    # the seller's own brand, or no brand to compare against
    return not listing.brand or matched.lower() in listing.brand.lower()


def _generic_brand(listing) -> Optional[Finding]:
    if not _brand_is("generic")(listing):
        return None
    return Finding('Product is branded as "Generic"', field="brand",
                   recommendation="Consider registering your own brand for better visibility "
                                  "and brand protection")


def _brand_registry(listing) -> Optional[Finding]:
    if not listing.brand or _brand_is("generic")(listing):
        return None
    if listing.attributes.get("brandRegistry"):
        return None
    return Finding("Consider enrolling in Amazon Brand Registry",
                   recommendation="Brand Registry provides enhanced brand protection and "
                                  "marketing tools")


_COMPATIBLE_MENTION = re.compile(r"(for|compatible|fits|works with) (apple|samsung|sony|microsoft)",
                                 re.IGNORECASE)
_COMPATIBLE_PREFIX = re.compile(r"^(compatible|for|replacement)", re.IGNORECASE)


def _compatible_labeling(listing) -> Optional[Finding]:
    if not listing.brand or not _COMPATIBLE_MENTION.search(listing.title):
        return None
    if _COMPATIBLE_PREFIX.match(listing.title):
        return None
    return Finding('Compatible product should start with "Compatible with" or "For"', field="title",
                   recommendation="Clearly indicate this is a compatible product, not the "
                                  "original brand")


BRAND_TRADEMARKS = [
    _rule(
        "AMZN-BT-001", "brand_trademarks", CRITICAL,
        "Missing Brand Name",
        "All products must have a brand name",
        Presence("brand", "No brand name provided",
                 'Add your registered brand name or use "Generic" if unbranded'),
    ),
    _rule(
        "AMZN-BT-002", "brand_trademarks", CRITICAL,
        "Trademark Violation - Major Brands",
        "Cannot use trademarked brand names without authorization",
        CrossField(
            KeywordMatch(
                ["apple", "samsung", "nike", "adidas", "sony", "microsoft", "dell",
                 "hp", "canon", "nikon", "lego", "disney", "marvel", "gucci", "prada",
                 "louis vuitton", "chanel", "rolex", "omega", "ray-ban", "oakley"],
                "Potential trademark violation detected",
            ),
            ["compatible with", "for {match}", "works with"],
            "Potential trademark violation detected",
            'Only mention other brands if selling compatible accessories and clearly state '
            '"Compatible with [Brand]"',
            exempt=_own_brand,
        ),
    ),
    _rule(
        "AMZN-BT-003", "brand_trademarks", WARNING,
        "Generic Brand Name",
        'Using "Generic" as brand may limit visibility',
        _generic_brand,
    ),
    _rule(
        "AMZN-BT-004", "brand_trademarks", CRITICAL,
        "Counterfeit Keywords",
        "Cannot use terms suggesting counterfeit products",
        KeywordMatch(
            ["replica", "fake", "knockoff", "copy", "imitation", "inspired by",
             "look-alike", "dupe"],
            "Listing contains counterfeit-related terms",
            "Remove all terms suggesting counterfeit or replica products",
        ),
    ),
    _rule(
        "AMZN-BT-005", "brand_trademarks", INFO,
        "Brand Registry Recommended",
        "Enroll in Amazon Brand Registry for protection",
        _brand_registry,
    ),
    _rule(
        "AMZN-BT-006", "brand_trademarks", CRITICAL,
        "Designer Brand Misuse",
        "Cannot claim designer brand without authorization",
        KeywordMatch(
            ["gucci", "prada", "versace", "armani", "dolce gabbana", "fendi",
             "burberry", "givenchy", "valentino", "balenciaga", "saint laurent"],
            "Listing claims designer brand - requires authorization",
            "Ensure you are authorized seller of this designer brand",
            fields=("brand",), field="brand",
        ),
    ),
    _rule(
        "AMZN-BT-007", "brand_trademarks", WARNING,
        "Compatible Product Labeling",
        "Compatible products must clearly indicate compatibility",
        _compatible_labeling,
    ),
    _rule(
        "AMZN-BT-008", "brand_trademarks", INFO,
        "Manufacturer Information",
        "Including manufacturer information builds trust",
        Presence("manufacturer", "No manufacturer information provided",
                 "Add manufacturer details for transparency"),
    ),
]


# =============================================================================
# Restricted Categories
# =============================================================================

_JEWELRY_CATEGORY = _category_contains("jewelry")
_PRECIOUS_METAL = has_terms(["gold", "silver", "platinum", "diamond", "gemstone"])
_KARAT = re.compile(r"\d+k\b|\bkarat\b", re.IGNORECASE)


def _uncertified_fine_jewelry(listing) -> Optional[Finding]:
    if not _JEWELRY_CATEGORY(listing) or not _PRECIOUS_METAL(listing):
        return None
    if not _KARAT.search(listing.title) or "certified" in (listing.description or ""):
        return None
    return Finding("Fine jewelry should include metal certification",
                   recommendation="Include metal purity certification and authenticity "
                                  "documentation")


RESTRICTED_CATEGORIES = [
    _rule(
        "AMZN-RC-001", "restricted_categories", CRITICAL,
        "Hazardous Materials (HAZMAT)",
        "Hazmat products require special approval and labeling",
        KeywordMatch(
            ["battery", "lithium", "aerosol", "flammable", "compressed gas",
             "nail polish", "perfume", "alcohol", "paint", "solvent", "propane",
             "butane", "lighter fluid", "pesticide", "insecticide"],
            "Product may contain hazardous materials",
            "Ensure product has proper HAZMAT approval and labeling for FBA",
        ),
    ),
    _rule(
        "AMZN-RC-002", "restricted_categories", CRITICAL,
        "FDA Regulated Products",
        "Medical devices and supplements require FDA compliance",
        KeywordMatch(
            ["medical device", "thermometer", "blood pressure monitor",
             "dietary supplement", "vitamin", "cbd", "cbd oil", "prescription",
             "medicine", "drug", "pharmaceutical", "fda approved"],
            "Product appears to be FDA regulated",
            "Ensure FDA compliance and required documentation",
        ),
    ),
    _rule(
        "AMZN-RC-003", "restricted_categories", CRITICAL,
        "Topical Products",
        "Topical products (skin, hair) require approval",
        when(
            _category_contains("health"),
            KeywordMatch(
                ["skin cream", "lotion", "moisturizer", "sunscreen", "anti-aging",
                 "acne treatment", "wrinkle cream", "hair growth", "shampoo", "conditioner"],
                "Topical product requires category approval",
                "Apply for topical products category approval in Seller Central",
            ),
        ),
    ),
    _rule(
        "AMZN-RC-004", "restricted_categories", CRITICAL,
        "Pesticides and Insecticides",
        "Pest control products are highly regulated",
        KeywordMatch(
            ["pesticide", "insecticide", "rodenticide", "herbicide", "fungicide",
             "bug spray", "rat poison", "weed killer", "roach killer"],
            "Pesticide product requires EPA registration",
            "Provide EPA registration number and follow pesticide regulations",
        ),
    ),
    _rule(
        "AMZN-RC-005", "restricted_categories", CRITICAL,
        "Automotive Parts Safety",
        "Automotive parts must meet safety standards",
        KeywordMatch(
            ["brake pad", "brake rotor", "tire", "airbag", "seatbelt",
             "child car seat", "catalytic converter", "suspension"],
            "Safety-critical automotive part detected",
            "Ensure part meets DOT/FMVSS safety standards",
        ),
    ),
    _rule(
        "AMZN-RC-006", "restricted_categories", CRITICAL,
        "Laser Products",
        "Laser products must comply with FDA regulations",
        KeywordMatch(
            ["laser pointer", "laser pen", "laser light", "laser show"],
            "Laser product requires FDA compliance",
            "Ensure laser product is FDA certified and properly labeled",
        ),
    ),
    _rule(
        "AMZN-RC-007", "restricted_categories", WARNING,
        "Jewelry and Precious Metals",
        "Fine jewelry requires approval and certification",
        _uncertified_fine_jewelry,
    ),
    _rule(
        "AMZN-RC-008", "restricted_categories", CRITICAL,
        "Alcohol Products",
        "Alcohol sales require special authorization",
        unless(
            has_terms(["glass", "glasses", "opener", "openers", "holder", "holders",
                       "rack", "racks"]),
            KeywordMatch(
                ["wine", "beer", "liquor", "vodka", "whiskey", "rum", "tequila",
                 "alcoholic beverage", "spirits", "champagne"],
                "Alcohol products require special authorization",
                "Contact Amazon for alcohol selling authorization",
            ),
        ),
    ),
    _rule(
        "AMZN-RC-009", "restricted_categories", CRITICAL,
        "Weapons and Weapon Accessories",
        "Weapons are prohibited or heavily restricted",
        KeywordMatch(
            ["gun", "firearm", "pistol", "rifle", "ammunition", "ammo",
             "brass knuckles", "nunchucks", "throwing star", "switchblade",
             "taser", "stun gun", "pepper spray", "mace"],
            "Weapon or weapon accessory detected",
            "Review Amazon weapons policy - most weapons are prohibited",
        ),
    ),
    _rule(
        "AMZN-RC-010", "restricted_categories", WARNING,
        "Surveillance Equipment",
        "Surveillance devices have restrictions",
        KeywordMatch(
            ["hidden camera", "spy camera", "nanny cam", "gps tracker",
             "phone tap", "listening device", "bug detector"],
            "Surveillance equipment requires compliance verification",
            "Ensure product complies with federal and state surveillance laws",
        ),
    ),
]


# =============================================================================
# FBA Requirements
# =============================================================================

_EXPIRABLE_CATEGORY = _category_contains("grocery", "health", "beauty", "food", "supplement")
_FRAGILE_TITLE = has_terms(["glass", "fragile"], fields=("title",))
_FRAGILE_DESCRIPTION = has_terms(["fragile"], fields=("description",))


def _fba_label(listing) -> Optional[Finding]:
    return Finding("FBA product - ensure proper FNSKU labeling",
                   recommendation="All FBA units must have FNSKU labels unless manufacturer "
                                  "barcoded")


def _fragile(listing) -> Optional[Finding]:
    if not (_FRAGILE_TITLE(listing) or _FRAGILE_DESCRIPTION(listing)):
        return None
    return Finding("Fragile product requires special FBA prep",
                   recommendation='Use bubble wrap and "Fragile" labels per FBA prep requirements')


def _expirable(listing) -> Optional[Finding]:
    if not _EXPIRABLE_CATEGORY(listing):
        return None
    return Finding("Expirable product - must meet FBA freshness requirements",
                   recommendation="Ensure products have at least 90 days until expiration "
                                  "when received at FBA")


def _oversized(listing) -> Optional[Finding]:
    dims = listing.dimensions
    if dims is None:
        return None
    longest = max(dims.length or 0, dims.width or 0, dims.height or 0)
    if longest <= 18 and not (dims.weight and dims.weight > 20):
        return None
    return Finding("Oversized product - higher FBA fees apply",
                   recommendation="Review FBA oversized fees and packaging requirements")


_LIQUID = has_terms(["liquid", "oil", "lotion", "cream", "gel", "serum", "shampoo"])


def _liquid(listing) -> Optional[Finding]:
    if not _LIQUID(listing):
        return None
    return Finding("Liquid product requires FBA prep",
                   recommendation="Seal liquids in polybags with suffocation warning per FBA "
                                  "requirements")


def _small_and_light(listing) -> Optional[Finding]:
    dims = listing.dimensions
    if not listing.price or dims is None:
        return None
    if not (listing.price < 10 and dims.weight and dims.weight < 10):
        return None
    return Finding("Product may qualify for FBA Small and Light program",
                   recommendation="Enroll in Small and Light for lower fulfillment fees")


FBA_REQUIREMENTS = [
    _rule(
        "AMZN-FBA-001", "fba_requirements", INFO,
        "FBA Label Requirements",
        "FBA inventory must have proper FNSKU labels",
        when(_is_fba, _fba_label),
    ),
    _rule(
        "AMZN-FBA-002", "fba_requirements", WARNING,
        "FBA Packaging Requirements",
        "Products must meet FBA packaging standards",
        when(_is_fba, _fragile),
    ),
    _rule(
        "AMZN-FBA-003", "fba_requirements", CRITICAL,
        "FBA Expiration Date Requirements",
        "Products with expiration dates must meet freshness requirements",
        when(_is_fba, _expirable),
    ),
    _rule(
        "AMZN-FBA-004", "fba_requirements", WARNING,
        "FBA Product Dimensions",
        "Oversized products have special FBA requirements",
        when(_is_fba, _oversized),
    ),
    _rule(
        "AMZN-FBA-005", "fba_requirements", WARNING,
        "FBA Liquid Product Prep",
        "Liquids require special FBA prep",
        when(_is_fba, _liquid),
    ),
    _rule(
        "AMZN-FBA-006", "fba_requirements", INFO,
        "FBA Multi-Pack Requirements",
        "Multi-packs require special labeling",
        when(_is_fba, PatternMatch(
            [r"\d+[-\s]?(pack|count|piece|set)"],
            "Multi-pack product detected",
            'Ensure all units in set have "Sold as a set" label if cannot be separated',
            fields=("title",),
        )),
    ),
    _rule(
        "AMZN-FBA-007", "fba_requirements", INFO,
        "FBA Small and Light Program",
        "Eligible products can use FBA Small and Light for lower fees",
        when(_is_fba, _small_and_light),
    ),
    _rule(
        "AMZN-FBA-008", "fba_requirements", CRITICAL,
        "FBA Prohibited Prep",
        "Some prep services are not allowed",
        when(_is_fba, KeywordMatch(
            ["assembly required", "installation required"],
            "Product requires prep that FBA does not provide",
            "FBA cannot assemble or install products - must be ready to ship",
        )),
    ),
]


# =============================================================================
# Content Policy
# =============================================================================

def _trademark_symbol_without_brand(listing) -> Optional[Finding]:
    if listing.brand or not ("™" in listing.title or "®" in listing.title):
        return None
    return Finding("Trademark symbol used without brand registration",
                   recommendation="Only use ™ or ® if you own the registered trademark")


CONTENT_POLICY = [
    _rule(
        "AMZN-CP-001", "content_policy", CRITICAL,
        "Prohibited Health Claims",
        "Cannot make unsubstantiated health claims",
        KeywordMatch(
            ["cures cancer", "treats diabetes", "cures covid", "prevents disease",
             "treats illness", "medical treatment", "fda approved", "clinically proven",
             "miracle cure", "guaranteed results"],
            "Prohibited health claim detected",
            "Remove unsubstantiated health claims - violates Amazon policy",
        ),
    ),
    _rule(
        "AMZN-CP-002", "content_policy", CRITICAL,
        "External Links Prohibited",
        "Product listings cannot contain external links",
        PatternMatch(
            [r"(https?://|www\.|\.com|\.net|\.org)"],
            "External links found in product content",
            "Remove all external URLs - violates Amazon policy",
            fields=CONTENT_FIELDS,
        ),
    ),
    _rule(
        "AMZN-CP-003", "content_policy", CRITICAL,
        "Contact Information Prohibited",
        "Cannot include direct contact information",
        PatternMatch(
            [r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b",
             r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b",
             r"whatsapp",
             r"contact us at",
             r"email us",
             r"call us",
             r"visit our website"],
            "Direct contact information found",
            "Remove all contact info - use Amazon messaging system",
            fields=CONTENT_FIELDS,
        ),
    ),
    _rule(
        "AMZN-CP-004", "content_policy", WARNING,
        "Promotional Language",
        "Avoid time-sensitive promotional language",
        KeywordMatch(
            ["limited time", "act now", "hurry", "while supplies last",
             "today only", "special offer", "exclusive deal", "discount",
             "sale price", "reduced price"],
            "Promotional language detected in product content",
            "Remove time-sensitive promotional language",
            fields=CONTENT_FIELDS,
        ),
    ),
    _rule(
        "AMZN-CP-005", "content_policy", WARNING,
        "Subjective Claims",
        'Avoid subjective claims like "best" or "#1"',
        KeywordMatch(
            ["best seller", "best quality", "best price", "best value",
             "#1", "number one", "top rated", "highest quality", "world's best"],
            "Subjective claim detected",
            "Remove subjective claims unless verified by third party",
        ),
    ),
    _rule(
        "AMZN-CP-006", "content_policy", WARNING,
        "Customer Review Solicitation",
        "Cannot solicit reviews in product content",
        KeywordMatch(
            ["leave a review", "write a review", "review us", "rate us",
             "leave feedback", "5 star", "five star review"],
            "Review solicitation detected",
            "Remove review solicitation - violates Amazon policy",
            fields=CONTENT_FIELDS,
        ),
    ),
    _rule(
        "AMZN-CP-007", "content_policy", WARNING,
        "Warranty Information",
        "Warranty claims must be clear and accurate",
        KeywordMatch(
            ["lifetime warranty", "forever warranty"],
            "Lifetime warranty claim detected",
            "Ensure warranty terms are clearly defined and legitimate",
            fields=CONTENT_FIELDS,
        ),
    ),
    _rule(
        "AMZN-CP-008", "content_policy", CRITICAL,
        "Offensive Content",
        "Content must not be offensive or inappropriate",
        unless(
            _category_contains("lingerie", "intimate apparel"),
            KeywordMatch(
                ["sexy", "adult", "explicit", "xxx", "nude", "erotic"],
                "Potentially offensive content detected",
                "Review content for appropriateness per Amazon standards",
            ),
        ),
    ),
    _rule(
        "AMZN-CP-009", "content_policy", INFO,
        "Comparison to Competitors",
        "Avoid direct comparisons to competitor products",
        KeywordMatch(
            ["better than", "superior to", "beats", "outperforms",
             "unlike other brands", "compared to competitors"],
            "Competitor comparison detected",
            "Focus on your product benefits without comparing to competitors",
            fields=CONTENT_FIELDS,
        ),
    ),
    _rule(
        "AMZN-CP-010", "content_policy", WARNING,
        "Stock Status Mentions",
        "Do not mention stock levels or availability",
        PatternMatch(
            [r"\bin stock\b", r"\bout of stock\b", r"\bback in stock\b", r"\blow stock\b",
             r"\bonly\b.*\bleft\b", r"\blimited quantity\b", r"\blimited stock\b"],
            "Stock status mention detected",
            "Remove stock level references - Amazon displays availability",
            fields=("title", "description"),
        ),
    ),
    _rule(
        "AMZN-CP-011", "content_policy", CRITICAL,
        "Prohibited Symbols",
        "Cannot use certain symbols (trademark, copyright) inappropriately",
        _trademark_symbol_without_brand,
    ),
    _rule(
        "AMZN-CP-012", "content_policy", WARNING,
        "Shipping Claims",
        "Cannot make shipping promises in product content",
        KeywordMatch(
            ["free shipping", "fast shipping", "overnight shipping",
             "2-day shipping", "prime shipping", "ships immediately"],
            "Shipping claim in product content",
            "Remove shipping claims - Amazon controls shipping display",
        ),
    ),
]


# =============================================================================
# Technical Requirements
# =============================================================================

def _external_identifier(listing) -> Optional[Finding]:
    # B0-prefixed ASINs are Amazon-generated
    if listing.asin.startswith("B0"):
        return None
    return Finding("Ensure product has valid UPC, EAN, or ISBN",
                   recommendation="Register product with GS1 for legitimate barcodes")


def _sku_convention(listing) -> Optional[Finding]:
    sku = listing.sku
    if len(sku) < 3:
        return Finding("SKU is very short - may be unclear", field="sku",
                       recommendation="Use descriptive SKUs like BRAND-PRODUCT-SIZE-COLOR")
    if len(sku) > 8 and not re.search(r"[-_]", sku):
        return Finding("Consider using structured SKU format", field="sku",
                       recommendation="Use dashes or underscores to separate SKU components")
    return None


def _dimensions(listing) -> Optional[Finding]:
    dims = listing.dimensions
    if dims is None:
        return Finding("No product dimensions provided", field="dimensions",
                       recommendation="Add package dimensions (L x W x H) and weight")
    if not (dims.length and dims.width and dims.height and dims.weight):
        return Finding("Incomplete dimension information", field="dimensions",
                       recommendation="Provide complete dimensions: length, width, height, "
                                      "and weight")
    return None


def _price_reasonable(listing) -> Optional[Finding]:
    price = listing.price
    if not price:
        return Finding("No price set for product", field="price",
                       recommendation="Set a competitive price for the product")
    if price < 1:
        return Finding(f"Price is very low (${price:.2f})", field="price",
                       recommendation="Ensure price covers costs and Amazon fees")
    if price > 10000:
        return Finding(f"Price is very high (${price:.2f})", field="price",
                       recommendation="Verify price is accurate - unusually high prices may "
                                      "be flagged")
    return None


def _condition(listing) -> Optional[Finding]:
    if not listing.condition:
        return Finding("No condition specified", field="condition",
                       recommendation="Specify product condition (New, Used, Refurbished, etc.)")
    if listing.condition != "New" and not listing.condition_note:
        return Finding("Used/refurbished product lacks condition note", field="conditionNote",
                       recommendation="Add condition note describing product state")
    return None


def _duplicate_check(listing) -> Optional[Finding]:
    return Finding("Ensure this is not a duplicate listing",
                   recommendation="Search Amazon catalog before creating new listing - "
                                  "duplicates violate policy")


def _image_quality(listing) -> Optional[Finding]:
    if not (listing.main_image_url or listing.images):
        return None
    return Finding("Verify image quality standards",
                   recommendation="Main image: white background, 1000x1000px minimum, product "
                                  "fills 85% of frame")


_STATUS_MESSAGES = {
    "DELETED": "Product is deleted",
    "DISCOVERABLE": "Product is discoverable but not buyable",
}


def _buyable_status(listing) -> Optional[Finding]:
    status = listing.status
    if not status or status == "BUYABLE":
        return None
    message = _STATUS_MESSAGES.get(status, f'Product status is "{status}" - not buyable')
    return Finding(message, field="status",
                   recommendation="Review listing issues preventing buyable status")


TECHNICAL_REQUIREMENTS = [
    _rule(
        "AMZN-TR-001", "technical_requirements", INFO,
        "Missing Product Identifiers",
        "Products must have UPC, EAN, or ISBN",
        _external_identifier,
    ),
    _rule(
        "AMZN-TR-002", "technical_requirements", WARNING,
        "SKU Naming Convention",
        "Use clear, logical SKU naming system",
        _sku_convention,
    ),
    _rule(
        "AMZN-TR-003", "technical_requirements", CRITICAL,
        "Product Type Selection",
        "Product must be in correct product type",
        Presence("product_type", "No product type specified",
                 "Select the most specific product type for proper categorization",
                 field="productType"),
    ),
    _rule(
        "AMZN-TR-004", "technical_requirements", WARNING,
        "Product Dimensions Required",
        "Physical products should include dimensions",
        _dimensions,
    ),
    _rule(
        "AMZN-TR-005", "technical_requirements", INFO,
        "Variation Relationships",
        "Related products should be in parent-child relationships",
        PatternMatch(
            [r"\b(small|medium|large|xs|s|m|l|xl|xxl)\b",
             r"\b\d+(\.\d+)?\s*(oz|ml|lb|kg|inch|cm)\b",
             r"\b(black|white|blue|red|green|yellow|pink|purple|gray|brown|orange)\b"],
            "Product appears to have variations (size/color)",
            "Consider creating parent-child variations for better customer experience",
            fields=("title",),
        ),
    ),
    _rule(
        "AMZN-TR-006", "technical_requirements", WARNING,
        "Price Reasonableness",
        "Price should be reasonable for product category",
        _price_reasonable,
    ),
    _rule(
        "AMZN-TR-007", "technical_requirements", INFO,
        "Product Condition",
        "Condition should match product state",
        _condition,
    ),
    _rule(
        "AMZN-TR-008", "technical_requirements", INFO,
        "Duplicate Listings",
        "Avoid creating duplicate ASINs",
        _duplicate_check,
    ),
    _rule(
        "AMZN-TR-009", "technical_requirements", INFO,
        "Image Quality Requirements",
        "Main image must be on white background, 1000x1000 pixels minimum",
        _image_quality,
    ),
    _rule(
        "AMZN-TR-010", "technical_requirements", INFO,
        "Buyable Status",
        "Product should be in buyable status",
        _buyable_status,
    ),
]


def amazon_rules() -> list:
    """All Amazon rules in catalog order."""
    return (PRODUCT_DETAIL_PAGE + BRAND_TRADEMARKS + RESTRICTED_CATEGORIES
            + FBA_REQUIREMENTS + CONTENT_POLICY + TECHNICAL_REQUIREMENTS)
