"""
Channel & Page-Type Detection

Deterministic substring classification of a request:
- Channel from the domain or URL
- Page type label from the content, first declared category wins
"""

import logging

from .rules import (
    Channel,
    DEFAULT_PAGE_LABEL,
    EI_DOMAIN_FRAGMENTS,
    PAGE_TYPE_SIGNALS,
)
from ..models import PageType

logger = logging.getLogger(__name__)


PAGE_LABEL_TO_PAGE_TYPE = {
    "ProductPage": PageType.PRODUCT,
    "CampaignPage": PageType.CAMPAIGN,
    "PressRelease": PageType.PRESS_RELEASE,
}


def detect_channel(domain_or_url: str) -> Channel:
    """
    Detect banking channel from a domain or URL.

    Unknown domains fall back to the primary (ENBD) channel.
    """
    lowered = (domain_or_url or "").lower()
    for fragment in EI_DOMAIN_FRAGMENTS:
        if fragment in lowered:
            return Channel.EI
    return Channel.ENBD


def detect_page_type(content: str) -> str:
    """
    Detect page type label from content signals.

    Categories are checked in declaration order of PAGE_TYPE_SIGNALS.

    Returns:
        A label such as "ProductPage", or "WebPage" when nothing matches
    """
    lowered = (content or "").lower()

    for label, signals in PAGE_TYPE_SIGNALS.items():
        for signal in signals:
            if signal.lower() in lowered:
                logger.debug(f"Page type {label} matched on signal '{signal}'")
                return label

    return DEFAULT_PAGE_LABEL


def to_page_type(label: str) -> PageType:
    """Map a detection label onto the stored PageType enum."""
    return PAGE_LABEL_TO_PAGE_TYPE.get(label, PageType.GENERIC)
