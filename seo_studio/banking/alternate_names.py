"""
AlternateName generation for FinancialProduct nodes.

Combines generic card aliases, Islamic finance terminology (EI channel only)
and product-name variants into one de-duplicated list.
"""

from typing import List

from .rules import (
    CARD_TYPE_MARKERS,
    Channel,
    GENERIC_CREDIT_CARD_ALIASES,
    ISLAMIC_CREDIT_CARD_ALIASES,
    ISLAMIC_FINANCE_MAPPING,
)


def generate_alternate_names(
    product_type: str,
    channel: Channel,
    product_name: str,
) -> List[str]:
    """
    Generate alternateName values for a product.

    Every matching finance mapping key contributes, not just the first.

    Args:
        product_type: Product category label (e.g. "Platinum Credit Card")
        channel: Banking channel
        product_name: Display name of the product

    Returns:
        Aliases in first-seen order without duplicates
    """
    aliases: List[str] = []
    lowered = (product_type or "").lower()

    is_card = any(marker in lowered for marker in CARD_TYPE_MARKERS)
    if is_card:
        aliases.extend(GENERIC_CREDIT_CARD_ALIASES)
        if channel == Channel.EI:
            aliases.extend(ISLAMIC_CREDIT_CARD_ALIASES)

    if channel == Channel.EI:
        for key, mapping in ISLAMIC_FINANCE_MAPPING.items():
            if key in lowered:
                aliases.extend(mapping["conventional_aliases"])
                aliases.extend(f"{term} {product_type}" for term in mapping["islamic_terms"])

    aliases.append(f"{product_name} UAE")
    aliases.append(f"{product_name} Dubai")

    return list(dict.fromkeys(aliases))
