from dealdesk.models.fields import MultipleTriplet

# SDE multiples (low, mid, high) for main-street businesses.
INDUSTRY_MULTIPLES: dict[str, MultipleTriplet] = {
    "service": (2.0, 2.8, 3.5),
    "ecommerce": (2.5, 3.2, 4.0),
    "manufacturing/light industrial": (3.0, 4.0, 5.0),
    "manufacturing": (3.0, 4.0, 5.0),
    "restaurant": (1.5, 2.2, 3.0),
    "restaurant/food": (1.5, 2.2, 3.0),
    "retail": (1.8, 2.5, 3.0),
    "construction/trades": (2.5, 3.2, 4.0),
    "construction": (2.5, 3.2, 4.0),
    "landscaping": (2.0, 2.7, 3.5),
    "landscaping/lawn care": (2.0, 2.7, 3.5),
    "trucking/logistics": (2.0, 2.8, 3.5),
    "trucking": (2.0, 2.8, 3.5),
    "software": (3.5, 4.5, 6.0),
    "saas": (3.5, 4.5, 6.0),
    "fallback": (2.5, 3.0, 3.5),
}

FALLBACK_KEY = "fallback"

# Evaluated top to bottom; the first entry with any matching needle wins.
_FUZZY_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("home service",), "service"),
    (("professional service",), "service"),
    (("landscap",), "landscaping"),
    (("restaur", "food"), "restaurant"),
    (("construct",), "construction"),
    (("retail",), "retail"),
    (("e-comm", "ecomm", "commerce"), "ecommerce"),
    (("manufact",), "manufacturing"),
    (("truck", "logist"), "trucking/logistics"),
    (("soft", "saas"), "software"),
)


def normalize_industry(text: str | None = "") -> str:
    """Map free-text industry input to a key of INDUSTRY_MULTIPLES."""
    key = str(text or "").strip().lower()
    if not key:
        return FALLBACK_KEY
    if key in INDUSTRY_MULTIPLES:
        return key

    for needles, result in _FUZZY_RULES:
        if any(needle in key for needle in needles):
            return result

    return FALLBACK_KEY


def industry_multiples(text: str | None = "") -> MultipleTriplet:
    return INDUSTRY_MULTIPLES[normalize_industry(text)]
