"""
Banking Schema Rules

Deterministic rule layer for ENBD and Emirates Islamic pages.

Usage:
    from seo_studio.banking import detect_channel, detect_page_type, generate_alternate_names

    channel = detect_channel("https://www.emiratesislamic.ae/en/cards")
    label = detect_page_type(page_text)
    aliases = generate_alternate_names("Platinum Credit Card", channel, "Platinum Card")
"""

from .rules import (
    Channel,
    PAGE_TYPE_SIGNALS,
    ENBD_ORGANIZATION,
    EI_ORGANIZATION,
    GENERIC_CREDIT_CARD_ALIASES,
    ISLAMIC_CREDIT_CARD_ALIASES,
    ISLAMIC_FINANCE_MAPPING,
)
from .detection import (
    detect_channel,
    detect_page_type,
    to_page_type,
    PAGE_LABEL_TO_PAGE_TYPE,
)
from .alternate_names import generate_alternate_names
from .anchors import (
    build_id,
    build_breadcrumb_list,
    get_organization,
    get_website,
    infer_breadcrumb,
)

__all__ = [
    # Rules
    "Channel",
    "PAGE_TYPE_SIGNALS",
    "ENBD_ORGANIZATION",
    "EI_ORGANIZATION",
    "GENERIC_CREDIT_CARD_ALIASES",
    "ISLAMIC_CREDIT_CARD_ALIASES",
    "ISLAMIC_FINANCE_MAPPING",
    # Detection
    "detect_channel",
    "detect_page_type",
    "to_page_type",
    "PAGE_LABEL_TO_PAGE_TYPE",
    # Alternate names
    "generate_alternate_names",
    # Anchors
    "build_id",
    "build_breadcrumb_list",
    "get_organization",
    "get_website",
    "infer_breadcrumb",
]
