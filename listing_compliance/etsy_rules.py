"""Etsy rule catalog.

48 rules in five categories:
- Prohibited Items (PI, 15)
- Title & Description Quality (TD, 10)
- Policy Compliance (PC, 10)
- Pricing & Fees (PF, 5)
- Shop Standards (SS, 8)

Declaration order here is catalog order: violations on a listing are
reported in this order and ties in "most common issue" fall back to it.
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from listing_compliance.models import Platform, Severity
from listing_compliance.rules import (
    Finding, KeywordMatch, PatternMatch, Presence, Rule, Threshold,
    first_of, has_terms, unless, when,
)

CRITICAL, WARNING, INFO = Severity.CRITICAL, Severity.WARNING, Severity.INFO

DIGITAL_TERMS = ("digital", "printable", "download", "downloadable")

# Etsy fee schedule (USD)
TRANSACTION_FEE_RATE = Decimal("0.065")
PAYMENT_FEE_RATE = Decimal("0.03")
PAYMENT_FEE_FIXED = Decimal("0.25")
LISTING_FEE = Decimal("0.20")
CENT = Decimal("0.01")

FREE_SHIPPING_THRESHOLD = Decimal(35)


def _rule(rule_id, category, severity, name, description, check) -> Rule:
    return Rule(rule_id, Platform.ETSY, category, severity, name, description, check)


def money(value: Decimal) -> Decimal:
    """Round to cents, half up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def etsy_fees(price: Decimal) -> Decimal:
    """Transaction + payment processing + listing fee for one sale."""
    transaction = price * TRANSACTION_FEE_RATE
    payment = price * PAYMENT_FEE_RATE + PAYMENT_FEE_FIXED
    return transaction + payment + LISTING_FEE


def _price(listing) -> Optional[Decimal]:
    return listing.price_value


def _title_length(listing) -> int:
    return len(listing.title)


def _description_length(listing) -> int:
    return len(listing.description)


# =============================================================================
# Prohibited Items
# =============================================================================

_VINTAGE = has_terms(["vintage"])
_HAIR = has_terms(["hair"])
_JEWELRY = has_terms(["jewelry", "locket"])


def _vintage_hair_jewelry(listing) -> bool:
    return _VINTAGE(listing) and _HAIR(listing) and _JEWELRY(listing)


PROHIBITED_ITEMS = [
    _rule(
        "ETSY-PI-001", "prohibited_items", CRITICAL,
        "Weapons and Weapon Accessories",
        "Listings cannot contain weapons, firearms, or weapon accessories",
        KeywordMatch(
            ["gun", "firearm", "rifle", "pistol", "revolver", "shotgun", "ammunition",
             "ammo", "bullet", "weapon", "AR-15", "AK-47", "glock", "beretta",
             "brass knuckles", "nunchucks", "throwing star", "switchblade", "taser"],
            "Weapons and weapon accessories are prohibited on Etsy",
            "Remove this listing immediately to avoid account suspension",
        ),
    ),
    _rule(
        "ETSY-PI-002", "prohibited_items", CRITICAL,
        "Illegal Drugs and Drug Paraphernalia",
        "Listings cannot promote illegal drugs or drug paraphernalia",
        KeywordMatch(
            ["cocaine", "heroin", "methamphetamine", "meth", "crack", "lsd", "ecstasy",
             "mdma", "marijuana", "weed", "cannabis", "thc", "cbd oil", "bong",
             "crack pipe", "meth pipe", "drug test", "synthetic urine"],
            "Illegal drugs and drug paraphernalia are strictly prohibited",
            "Remove this listing immediately",
        ),
    ),
    _rule(
        "ETSY-PI-003", "prohibited_items", CRITICAL,
        "Adult Content and Services",
        "Adult content, pornography, and adult services are prohibited",
        KeywordMatch(
            ["porn", "pornography", "xxx", "adult toy", "sex toy", "vibrator",
             "dildo", "escort", "webcam show", "nude photo", "explicit content",
             "adult entertainment", "sexual service", "erotic massage"],
            "Adult content and services are prohibited on Etsy",
            "Remove adult content or reclassify listing",
        ),
    ),
    _rule(
        "ETSY-PI-004", "prohibited_items", CRITICAL,
        "Counterfeit and Trademark Violations",
        "Cannot sell counterfeit items or violate trademarks",
        when(
            has_terms(["replica", "inspired by", "style", "type", "like", "similar to"]),
            KeywordMatch(
                ["nike", "adidas", "gucci", "louis vuitton", "chanel", "prada", "rolex",
                 "disney", "marvel", "star wars", "pokemon", "hello kitty", "supreme",
                 "versace", "burberry", "coach", "tiffany", "cartier", "hermes",
                 "ray-ban", "oakley", "michael kors", "kate spade", "yeezy", "jordan"],
                "Potential trademark violation or counterfeit product",
                "Remove brand references unless you have proper licensing",
            ),
        ),
    ),
    _rule(
        "ETSY-PI-005", "prohibited_items", CRITICAL,
        "Prescription Drugs and Medical Devices",
        "Prescription medications and regulated medical devices are prohibited",
        KeywordMatch(
            ["prescription", "viagra", "cialis", "xanax", "adderall", "oxycodone",
             "medical device", "insulin pump", "nebulizer", "cpap", "pacemaker",
             "prescription drug", "rx medication", "pharmacy", "pharmaceutical"],
            "Prescription drugs and medical devices require proper authorization",
            "Remove unless you have proper medical licensing",
        ),
    ),
    _rule(
        "ETSY-PI-006", "prohibited_items", CRITICAL,
        "Hazardous Materials",
        "Hazardous chemicals and flammable materials have restrictions",
        KeywordMatch(
            ["asbestos", "mercury", "lead paint", "radioactive", "explosive",
             "fireworks", "gasoline", "kerosene", "toxic chemical", "poison",
             "pesticide", "aerosol spray", "compressed gas", "lithium battery"],
            "Hazardous materials require special handling and may be prohibited",
            "Verify compliance with shipping regulations or remove",
        ),
    ),
    _rule(
        "ETSY-PI-007", "prohibited_items", CRITICAL,
        "Recalled Items",
        "Items subject to government recalls cannot be sold",
        KeywordMatch(
            ["recalled product", "safety recall", "government recall", "cpsc recall"],
            "Recalled items cannot be sold on Etsy",
            "Remove recalled products immediately",
        ),
    ),
    _rule(
        "ETSY-PI-008", "prohibited_items", WARNING,
        "Tobacco Products",
        "Tobacco and vaping products have restrictions",
        KeywordMatch(
            ["cigarette", "cigar", "tobacco", "vape", "e-cigarette", "vaping",
             "e-liquid", "nicotine", "hookah", "smoking pipe", "rolling papers"],
            "Tobacco and vaping products may be restricted",
            "Review Etsy tobacco policy or consider removal",
        ),
    ),
    _rule(
        "ETSY-PI-009", "prohibited_items", WARNING,
        "Alcohol Products",
        "Alcoholic beverages require special compliance",
        # accessories (wine glass, beer holder, bottle opener) are fine
        unless(
            has_terms(["holder", "holders", "glass", "glasses", "opener", "openers",
                       "rack", "racks"]),
            KeywordMatch(
                ["wine", "beer", "liquor", "vodka", "whiskey", "rum", "tequila",
                 "moonshine", "alcoholic beverage", "spirits", "champagne", "sake"],
                "Alcohol sales require special licensing and compliance",
                "Ensure proper licensing or only sell non-alcoholic items",
            ),
        ),
    ),
    _rule(
        "ETSY-PI-010", "prohibited_items", CRITICAL,
        "Animal Products - Endangered Species",
        "Products from endangered or protected animals are prohibited",
        KeywordMatch(
            ["ivory", "elephant tusk", "rhino horn", "tiger skin", "turtle shell",
             "coral", "whale bone", "seal fur", "big cat", "pangolin", "bear bile"],
            "Products from endangered species are strictly prohibited",
            "Remove immediately - may result in legal action",
        ),
    ),
    _rule(
        "ETSY-PI-011", "prohibited_items", WARNING,
        "Live Animals",
        "Live animals and certain animal products are restricted",
        KeywordMatch(
            ["live animal", "live pet", "puppy for sale", "kitten for sale",
             "live bird", "live fish", "live reptile", "animal breeding"],
            "Live animals cannot be sold on Etsy",
            "Only sell animal-related supplies and accessories",
        ),
    ),
    _rule(
        "ETSY-PI-012", "prohibited_items", CRITICAL,
        "Human Remains",
        "Human remains and body parts are prohibited",
        unless(
            _vintage_hair_jewelry,
            KeywordMatch(
                ["human skull", "human bone", "human remains", "cremated remains",
                 "human teeth", "human hair"],
                "Human remains are prohibited except vintage hair jewelry",
                "Remove immediately unless vintage hair jewelry",
            ),
        ),
    ),
    _rule(
        "ETSY-PI-013", "prohibited_items", CRITICAL,
        "Hate Items and Nazi Memorabilia",
        "Items promoting hate, violence, or Nazi ideology are prohibited",
        KeywordMatch(
            ["swastika", "nazi", "kkk", "white supremacy", "hate group",
             "confederate flag", "hitler", "third reich", "ss officer"],
            "Items promoting hate or featuring Nazi symbols are prohibited",
            "Remove immediately - violates Etsy anti-discrimination policy",
        ),
    ),
    _rule(
        "ETSY-PI-014", "prohibited_items", WARNING,
        "Medical and Health Claims",
        "Unsubstantiated medical or health claims are prohibited",
        KeywordMatch(
            ["cures cancer", "treats diabetes", "cures covid", "fda approved",
             "medical grade", "clinically proven", "guaranteed to cure", "heals",
             "treats disease", "prevents illness", "miracle cure", "medical treatment"],
            "Unsubstantiated medical claims violate Etsy policy",
            "Remove medical claims or provide FDA approval documentation",
        ),
    ),
    _rule(
        "ETSY-PI-015", "prohibited_items", CRITICAL,
        "Downloadable Items - Resale Rights",
        "Digital items must not violate copyright or resale rights",
        when(
            has_terms(["digital download", "printable", "pdf"]),
            KeywordMatch(
                ["resale rights", "plr", "private label rights", "master resale rights"],
                "Digital items with resale rights may violate Etsy handmade policy",
                "Only sell your own original digital creations",
            ),
        ),
    ),
]


# =============================================================================
# Title & Description Quality
# =============================================================================

_HAS_SIZE = PatternMatch(
    [r"\b\d+\.?\d*\s*(inch|inches|cm|mm|meter|foot|ft|\"|x|×)", r"dimensions", r"size:"],
    "size information present",
    fields=("title", "description"),
)
_DIGITAL_TEXT = has_terms(DIGITAL_TERMS)
_DIGITAL_DESCRIPTION = has_terms(DIGITAL_TERMS, fields=("description",))


def _missing_size_info(listing) -> Optional[Finding]:
    if listing.quantity <= 0 or _DIGITAL_TEXT(listing) or _HAS_SIZE(listing):
        return None
    return Finding("Consider adding size or dimension information",
                   recommendation="Include measurements to reduce customer questions")


_MATERIAL_MENTIONED = has_terms(["material", "materials", "made of", "fabric:"],
                                fields=("description",))


def _missing_material_info(listing) -> Optional[Finding]:
    if listing.materials or _DIGITAL_DESCRIPTION(listing) or _MATERIAL_MENTIONED(listing):
        return None
    return Finding("Consider adding material information to description",
                   recommendation="Specify materials used for transparency and SEO")


TITLE_DESCRIPTION = [
    _rule(
        "ETSY-TD-001", "title_description", WARNING,
        "Title Too Short",
        "Title should be at least 20 characters for better SEO",
        Threshold(
            _title_length,
            "Title is only {value} characters - should be at least 20",
            "Add descriptive keywords to improve search visibility",
            field="title", minimum=20,
        ),
    ),
    _rule(
        "ETSY-TD-002", "title_description", INFO,
        "Title Optimal Length",
        "Title should use most of the 140 character limit for best SEO",
        when(
            lambda listing: len(listing.title) >= 20,
            Threshold(
                _title_length,
                "Title is {value} characters - consider using up to 140 for better SEO",
                "Add more descriptive keywords and product details",
                field="title", minimum=60,
            ),
        ),
    ),
    _rule(
        "ETSY-TD-003", "title_description", WARNING,
        "Excessive Capitalization",
        "Avoid excessive capital letters in titles",
        PatternMatch(
            [r"[A-Z]{5,}"],
            "Title contains excessive capitalization",
            "Use title case or sentence case for better readability",
            fields=("title",), field="title", ignore_case=False,
        ),
    ),
    _rule(
        "ETSY-TD-004", "title_description", INFO,
        "Excessive Punctuation",
        "Avoid excessive exclamation marks or special characters",
        Threshold(
            lambda listing: listing.title.count("!"),
            "Title contains {value} exclamation marks",
            "Use minimal punctuation for professional appearance",
            field="title", maximum=2,
        ),
    ),
    _rule(
        "ETSY-TD-005", "title_description", WARNING,
        "Description Too Short",
        "Description should be at least 100 characters",
        Threshold(
            _description_length,
            "Description is only {value} characters - should be at least 100",
            "Add product details, dimensions, materials, and care instructions",
            field="description", minimum=100,
        ),
    ),
    _rule(
        "ETSY-TD-006", "title_description", CRITICAL,
        "External Links in Description",
        "Descriptions cannot contain external links",
        PatternMatch(
            [r"(https?://|www\.|\.com|\.net|\.org)"],
            "Description contains external links or URLs",
            "Remove all external links - violates Etsy policy",
            field="description",
        ),
    ),
    _rule(
        "ETSY-TD-007", "title_description", WARNING,
        "Contact Information in Description",
        "Avoid including direct contact information",
        PatternMatch(
            [r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b",
             r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b",
             r"whatsapp",
             r"contact me at",
             r"email me",
             r"call me"],
            "Description contains contact information",
            "Use Etsy messaging system - direct contact violates policy",
            field="description",
        ),
    ),
    _rule(
        "ETSY-TD-008", "title_description", WARNING,
        "Spam Keywords",
        "Avoid spammy marketing language",
        KeywordMatch(
            ["buy now", "click here", "limited time", "act now", "order today",
             "best price", "lowest price", "cheap", "deal of the day", "hurry"],
            "Description contains spammy marketing language",
            "Use professional, descriptive language instead",
            fields=("description",), field="description",
        ),
    ),
    _rule(
        "ETSY-TD-009", "title_description", INFO,
        "Missing Size Information",
        "Physical items should include size/dimension information",
        _missing_size_info,
    ),
    _rule(
        "ETSY-TD-010", "title_description", INFO,
        "Missing Material Information",
        "Include material composition in description",
        _missing_material_info,
    ),
]


# =============================================================================
# Policy Compliance
# =============================================================================

_DIGITAL_TITLE = has_terms(["digital"], fields=("title",))
_DIGITAL_DOWNLOAD = has_terms(["digital download"], fields=("description",))


def _digital_listing(listing) -> bool:
    return _DIGITAL_TITLE(listing) or _DIGITAL_DOWNLOAD(listing)


def _not_marked_supply(listing) -> Optional[Finding]:
    if listing.is_supply:
        return None
    return Finding("Item appears to be a supply but not marked as such", field="is_supply",
                   recommendation="Mark as supply if selling craft supplies or materials")


POLICY_COMPLIANCE = [
    _rule(
        "ETSY-PC-001", "policy_compliance", WARNING,
        "Missing Required Tags",
        "Listings should have at least 3 tags for discoverability",
        Presence("tags", "Only {count} tags - should have at least 3",
                 "Add more relevant tags to improve search visibility", minimum=3),
    ),
    _rule(
        "ETSY-PC-002", "policy_compliance", INFO,
        "Optimize Tag Usage",
        "Use all 13 available tags for maximum visibility",
        Presence("tags", "Using {count}/13 tags - add more for better SEO",
                 "Maximize tag usage with relevant keywords", minimum=13),
    ),
    _rule(
        "ETSY-PC-003", "policy_compliance", WARNING,
        "Missing Materials",
        "Physical items should specify materials used",
        unless(
            _digital_listing,
            Presence("materials", "No materials specified for physical item",
                     "Add materials for transparency and compliance"),
        ),
    ),
    _rule(
        "ETSY-PC-004", "policy_compliance", WARNING,
        "Missing Shipping Profile",
        "All listings must have a shipping profile",
        Presence("shipping_profile_id", "No shipping profile assigned",
                 "Assign a shipping profile to this listing"),
    ),
    _rule(
        "ETSY-PC-005", "policy_compliance", INFO,
        "Missing Processing Time",
        "Specify processing time for customer expectations",
        first_of(
            Presence("processing_min", "Processing time not specified",
                     "Set processing time to manage customer expectations"),
            Presence("processing_max", "Processing time not specified",
                     "Set processing time to manage customer expectations"),
        ),
    ),
    _rule(
        "ETSY-PC-006", "policy_compliance", CRITICAL,
        "Handmade Attribute Required",
        "Must specify who made the item (I did, collective, someone else)",
        Presence("who_made", '"Who Made" attribute is missing',
                 "Specify whether item is handmade, by collective, or produced"),
    ),
    _rule(
        "ETSY-PC-007", "policy_compliance", CRITICAL,
        "When Made Attribute Required",
        "Must specify when the item was made",
        Presence("when_made", '"When Made" attribute is missing',
                 "Specify time period when item was made"),
    ),
    _rule(
        "ETSY-PC-008", "policy_compliance", WARNING,
        "Supply Items Designation",
        "Craft supplies should be marked as supplies",
        when(
            has_terms(["supply", "supplies", "craft supply", "beads",
                       "fabric by the yard", "yarn"]),
            _not_marked_supply,
        ),
    ),
    _rule(
        "ETSY-PC-009", "policy_compliance", WARNING,
        "Missing Product Photos",
        "Listings should have multiple high-quality photos",
        Presence("images", "Only {count} image(s) - recommend at least 3-5",
                 "Add multiple angles and detail shots for better conversion", minimum=3),
    ),
    _rule(
        "ETSY-PC-010", "policy_compliance", INFO,
        "Shop Sections Organization",
        "Organize listings into shop sections",
        Presence("shop_section_id", "Listing not assigned to a shop section",
                 "Organize listings into sections for better navigation"),
    ),
]


# =============================================================================
# Pricing & Fees
# =============================================================================

def _low_price_message(value: Decimal) -> str:
    price, fees = money(value), money(etsy_fees(value))
    return (f"Price ${price} may not be profitable "
            f"(fees: ${fees}, profit: ${price - fees})")


def _fee_percentage(listing) -> Optional[Decimal]:
    price = listing.price_value
    if price is None or price <= 0:
        return None
    return etsy_fees(price) / price * 100


def _fee_percentage_message(value: Decimal) -> str:
    pct = value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"Fees are {pct}% of price - consider pricing strategy"


def _not_charm_priced(listing) -> Optional[Finding]:
    price = listing.price_value
    if price is None or price <= 10:
        return None
    cents = (price % 1 * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    if cents in (99, 95, 0):
        return None
    return Finding("Consider charm pricing (e.g., $19.99 instead of $20.37)", field="price",
                   recommendation="Prices ending in .99 or .95 may improve conversion")


def _near_free_shipping(listing) -> Optional[Finding]:
    price = listing.price_value
    if price is None or not (25 <= price < FREE_SHIPPING_THRESHOLD):
        return None
    return Finding("Consider free shipping - item close to $35 threshold",
                   recommendation="Etsy promotes listings with free shipping on orders $35+")


PRICING_FEES = [
    _rule(
        "ETSY-PF-001", "pricing_fees", WARNING,
        "Price Too Low",
        "Price may be too low to be profitable after fees",
        Threshold(
            _price, _low_price_message,
            "Consider raising price to cover fees and materials",
            field="price", minimum=5,
        ),
    ),
    _rule(
        "ETSY-PF-002", "pricing_fees", INFO,
        "Competitive Pricing Analysis",
        "Review pricing relative to production costs",
        Threshold(
            _fee_percentage, _fee_percentage_message,
            "Higher prices reduce fee percentage impact",
            field="price", maximum=25,
        ),
    ),
    _rule(
        "ETSY-PF-003", "pricing_fees", WARNING,
        "Unusually High Price",
        "Very high prices may indicate an error",
        Threshold(
            _price,
            lambda value: f"Price ${money(value)} is very high - verify this is correct",
            "Ensure price is accurate and justified in description",
            field="price", maximum=5000,
        ),
    ),
    _rule(
        "ETSY-PF-004", "pricing_fees", INFO,
        "Psychological Pricing",
        "Consider charm pricing strategies",
        _not_charm_priced,
    ),
    _rule(
        "ETSY-PF-005", "pricing_fees", INFO,
        "Free Shipping Consideration",
        "Consider offering free shipping by adjusting price",
        _near_free_shipping,
    ),
]


# =============================================================================
# Shop Standards
# =============================================================================

SUMMER_TERMS = ("beach", "summer", "swimsuit", "sandals", "sunglasses")
WINTER_TERMS = ("winter", "christmas", "snow", "sweater", "coat", "holiday")
WINTER_MONTHS = (11, 12, 1, 2)
SUMMER_MONTHS = (5, 6, 7, 8, 9)

GIFT_TERMS = ("gift", "gifts", "present", "birthday", "wedding", "anniversary",
              "mothers day", "fathers day")
GIFT_WORTHY_TERMS = ("jewelry", "home decor", "personalized", "custom", "handmade")


def _inactive(listing) -> Optional[Finding]:
    if listing.state == "active":
        return None
    return Finding(f'Listing state is "{listing.state}" - not visible to buyers', field="state",
                   recommendation="Activate listing to make it available for purchase")


def _weak_tag_reinforcement(listing) -> Optional[Finding]:
    tags = [t.lower() for t in listing.tags]
    words = [w for w in listing.title.lower().split() if len(w) > 3]
    reinforced = [w for w in words if any(w in tag for tag in tags)]
    if len(reinforced) >= 3:
        return None
    return Finding("Consider reinforcing title keywords in tags",
                   recommendation="Repeat important keywords from title in tags for better SEO")


def seasonal_relevance(season_month: Optional[int]):
    """Seasonal check bound to a fixed reference month.

    With no month the check never fires, so evaluation never reads the clock.
    """
    summer = has_terms(SUMMER_TERMS)
    winter = has_terms(WINTER_TERMS)

    def check(listing) -> Optional[Finding]:
        if season_month is None:
            return None
        if season_month in WINTER_MONTHS and summer(listing):
            return Finding("Summer item during winter season - consider seasonal marketing",
                           recommendation="Adjust keywords or prepare for off-season")
        if season_month in SUMMER_MONTHS and winter(listing):
            return Finding("Winter item during summer season - plan ahead for peak season",
                           recommendation="Stock up for holiday season or adjust marketing")
        return None

    return check


_GIFT_WORTHY = has_terms(GIFT_WORTHY_TERMS)
_GIFT_MENTIONED = has_terms(GIFT_TERMS, fields=("title", "description", "tags"))


def _missing_gift_keywords(listing) -> Optional[Finding]:
    if not _GIFT_WORTHY(listing) or _GIFT_MENTIONED(listing):
        return None
    return Finding("Item may be gift-worthy - consider adding gift keywords",
                   recommendation='Add "gift", "birthday gift", etc. to increase visibility')


_VARIATION_HINT = has_terms(["color", "colour", "black", "white", "blue", "red", "green",
                             "size", "small", "medium", "large", "xs", "xl"])


def _variation_opportunity(listing) -> Optional[Finding]:
    if listing.quantity <= 5 or not _VARIATION_HINT(listing):
        return None
    return Finding("Consider offering variations (colors, sizes) for this item",
                   recommendation="Variations improve customer choice and can increase sales")


_RETURN_POLICY = has_terms(["return", "returns", "refund", "refunds", "exchange",
                            "exchanges", "policy", "policies"], fields=("description",))


def _missing_return_policy(listing) -> Optional[Finding]:
    if _RETURN_POLICY(listing) or _DIGITAL_DESCRIPTION(listing):
        return None
    return Finding("Consider mentioning return policy in description",
                   recommendation="Clear return policy builds buyer confidence")


def shop_standards(season_month: Optional[int] = None) -> list:
    return [
        _rule(
            "ETSY-SS-001", "shop_standards", WARNING,
            "Out of Stock",
            "Listing shows as out of stock",
            Threshold(
                lambda listing: listing.quantity,
                "Item is out of stock",
                "Restock or deactivate listing to maintain shop quality",
                field="quantity", minimum=1,
            ),
        ),
        _rule(
            "ETSY-SS-002", "shop_standards", INFO,
            "Low Stock Warning",
            "Inventory running low",
            when(
                lambda listing: listing.quantity > 0,
                Threshold(
                    lambda listing: listing.quantity,
                    "Low stock: only {value} remaining",
                    "Consider restocking popular items",
                    field="quantity", minimum=4,
                ),
            ),
        ),
        _rule(
            "ETSY-SS-003", "shop_standards", WARNING,
            "Listing Not Active",
            "Listing is in draft or inactive state",
            _inactive,
        ),
        _rule(
            "ETSY-SS-004", "shop_standards", INFO,
            "SEO Keyword Optimization",
            "Ensure keywords are used effectively",
            _weak_tag_reinforcement,
        ),
        _rule(
            "ETSY-SS-005", "shop_standards", INFO,
            "Seasonal Relevance",
            "Consider seasonal trends and keywords",
            seasonal_relevance(season_month),
        ),
        _rule(
            "ETSY-SS-006", "shop_standards", INFO,
            "Gift-Worthy Optimization",
            "Consider gift-related keywords for occasions",
            _missing_gift_keywords,
        ),
        _rule(
            "ETSY-SS-007", "shop_standards", INFO,
            "Variation Opportunities",
            "Consider offering product variations",
            _variation_opportunity,
        ),
        _rule(
            "ETSY-SS-008", "shop_standards", INFO,
            "Return Policy Clarity",
            "Ensure return policy is mentioned",
            _missing_return_policy,
        ),
    ]


def etsy_rules(season_month: Optional[int] = None) -> list:
    """All Etsy rules in catalog order."""
    return (PROHIBITED_ITEMS + TITLE_DESCRIPTION + POLICY_COMPLIANCE
            + PRICING_FEES + shop_standards(season_month))
