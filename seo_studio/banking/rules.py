"""
Banking Rule Tables

Static data for the ENBD and Emirates Islamic channels:
- Page type detection signals (ordered, first match wins)
- Organization presets per channel
- Credit card alias lists
- Islamic finance terminology mapping
"""

from enum import Enum
from typing import Dict, List


class Channel(str, Enum):
    """Institution family whose identity and terminology apply."""
    ENBD = "ENBD"
    EI = "EI"


# =============================================================================
# CHANNEL DETECTION
# =============================================================================

EI_DOMAIN_FRAGMENTS = ("emiratesislamic.ae",)

CHANNEL_BASE_URLS: Dict[Channel, str] = {
    Channel.ENBD: "https://www.emiratesnbd.com",
    Channel.EI: "https://www.emiratesislamic.ae",
}

CHANNEL_NAMES: Dict[Channel, str] = {
    Channel.ENBD: "Emirates NBD",
    Channel.EI: "Emirates Islamic",
}


# =============================================================================
# PAGE TYPE SIGNALS
# =============================================================================

# Declaration order is the priority order. Real pages match several
# categories (a card campaign hits ProductPage and CampaignPage), so the
# first category with a hit decides which conditional nodes are requested.
PAGE_TYPE_SIGNALS: Dict[str, List[str]] = {
    "ProductPage": [
        "credit card", "account", "loan", "finance", "mortgage", "deposit",
        "personal finance", "home finance", "auto finance", "savings",
    ],
    "CampaignPage": [
        "offer", "limited time", "apply now", "promotion", "win", "cashback",
        "exclusive deal", "seasonal",
    ],
    "PressRelease": [
        "announces", "launched", "partnership", "award", "milestone",
        "appointed", "signed",
    ],
    "BlogArticle": [
        "guide", "tips", "how to", "explained", "what is", "vs", "comparison",
        "understanding", "top 5", "top 10",
    ],
    "BranchPage": ["branch", "location", "ATM", "address", "opening hours", "find us"],
    "SupportPage": ["help", "FAQ", "contact us", "documents required", "how do I", "support"],
    "ListingPage": ["all credit cards", "compare cards", "all accounts", "full list", "browse"],
}

DEFAULT_PAGE_LABEL = "WebPage"


# =============================================================================
# ORGANIZATION PRESETS
# =============================================================================

ENBD_ORGANIZATION = {
    "@type": "Organization",
    "@id": "https://www.emiratesnbd.com/#organization",
    "name": "Emirates NBD",
    "alternateName": [
        "ENBD",
        "Emirates NBD Bank",
        "Emirates National Bank of Dubai",
        "Emirates NBD PJSC",
    ],
    "url": "https://www.emiratesnbd.com",
    "logo": {
        "@type": "ImageObject",
        "url": "https://www.emiratesnbd.com/assets/en/images/logo.svg",
        "width": 200,
        "height": 60,
    },
    "description": (
        "Emirates NBD is one of the leading banking groups in the Middle East and North Africa, "
        "headquartered in Dubai, UAE, offering retail, corporate, Islamic and investment banking services."
    ),
    "foundingDate": "2007",
    "areaServed": {"@type": "Country", "name": "United Arab Emirates"},
    "sameAs": [
        "https://en.wikipedia.org/wiki/Emirates_NBD",
        "https://www.linkedin.com/company/emirates-nbd",
        "https://twitter.com/emiratesnbd",
        "https://www.facebook.com/EmiratesNBD",
        "https://www.wikidata.org/wiki/Q5372506",
    ],
}

EI_ORGANIZATION = {
    "@type": "Organization",
    "@id": "https://www.emiratesislamic.ae/#organization",
    "name": "Emirates Islamic",
    "alternateName": [
        "EI",
        "Emirates Islamic Bank",
        "Emirates Islamic PJSC",
        "EIB",
        "Emirates Islamic Financial Institution",
        "Emirates NBD Islamic Banking Arm",
        "Emirates Islamic – Sharia Compliant Banking",
    ],
    "url": "https://www.emiratesislamic.ae",
    "logo": {
        "@type": "ImageObject",
        "url": "https://www.emiratesislamic.ae/-/media/ei/images/header/emirates-islamic-logo.svg",
        "width": 200,
        "height": 60,
    },
    "description": (
        "Emirates Islamic is a leading Islamic bank in the UAE, offering Sharia-compliant retail and "
        "corporate banking products including financing, savings, cards, and investment solutions."
    ),
    "foundingDate": "2004",
    "areaServed": {"@type": "Country", "name": "United Arab Emirates"},
    "sameAs": [
        "https://en.wikipedia.org/wiki/Emirates_Islamic_Bank",
        "https://www.linkedin.com/company/emirates-islamic",
        "https://www.twitter.com/emiratesislamic",
        "https://www.wikidata.org/wiki/Q5372510",
    ],
}

ORGANIZATION_PRESETS = {
    Channel.ENBD: ENBD_ORGANIZATION,
    Channel.EI: EI_ORGANIZATION,
}


# =============================================================================
# ALTERNATE NAME TABLES
# =============================================================================

# Both channels
GENERIC_CREDIT_CARD_ALIASES = [
    "travel credit card UAE",
    "Skywards miles card",
    "Emirates miles credit card",
    "premium travel card UAE",
    "airport lounge card UAE",
    "Visa Infinite card UAE",
    "best travel credit card UAE",
    "rewards credit card UAE",
]

# EI channel only
ISLAMIC_CREDIT_CARD_ALIASES = [
    "Islamic credit card UAE",
    "Sharia compliant credit card",
    "halal credit card UAE",
    "Islamic finance card",
    "Murabaha credit card",
    "Islamic travel card UAE",
    "Emirates Islamic finance card",
    "profit rate card UAE",
    "no interest credit card UAE",
]

CARD_TYPE_MARKERS = ("credit card", "card")

# Conventional product key -> Islamic contract terms and conventional aliases
ISLAMIC_FINANCE_MAPPING: Dict[str, Dict[str, List[str]]] = {
    "home finance": {
        "islamic_terms": ["Ijara", "Murabaha"],
        "conventional_aliases": ["mortgage", "home loan", "property loan", "housing loan UAE"],
    },
    "personal finance": {
        "islamic_terms": ["Murabaha"],
        "conventional_aliases": ["personal loan", "cash loan", "unsecured loan UAE"],
    },
    "auto finance": {
        "islamic_terms": ["Murabaha", "Ijara"],
        "conventional_aliases": ["car loan", "auto loan", "vehicle finance UAE"],
    },
    "savings account": {
        "islamic_terms": ["Mudaraba"],
        "conventional_aliases": ["savings account", "deposit account", "interest-free savings"],
    },
    "fixed deposit": {
        "islamic_terms": ["Wakala"],
        "conventional_aliases": ["fixed deposit", "term deposit", "investment account UAE"],
    },
    "business finance": {
        "islamic_terms": ["Musharaka", "Murabaha"],
        "conventional_aliases": ["business loan", "SME loan", "corporate finance UAE"],
    },
    "current account": {
        "islamic_terms": ["Qard"],
        "conventional_aliases": ["current account", "checking account", "bank account UAE"],
    },
    "credit card": {
        "islamic_terms": ["Murabaha-based card"],
        "conventional_aliases": ["credit card", "rewards card", "charge card"],
    },
}

# Copy substitutions enforced for the EI channel
EI_TERMINOLOGY = {
    "Interest Rate": "Profit Rate",
}

# Path segments skipped when inferring breadcrumbs
LANGUAGE_SEGMENTS = ("en", "ar")
