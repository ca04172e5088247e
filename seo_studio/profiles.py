"""
Brand profiles available in the dashboard.

Reference data, loaded once at import and never mutated.
"""

from typing import Dict, Tuple

from .models import BrandProfile, ContactPoint


BRAND_PROFILES: Tuple[BrandProfile, ...] = (
    BrandProfile(
        id="ei",
        name="Emirates Islamic",
        legal_name="Emirates Islamic Bank PJSC",
        org_type="BankOrCreditUnion",
        domain="www.emiratesislamic.ae",
        logo_url="https://www.emiratesislamic.ae/-/media/ei/images/header/emirates-islamic-logo.svg",
        address=(
            "Executive Office Building - G Floor, Building 16 - Dubai Healthcare City, Dubai, 6564, AE",
        ),
        contact_points=(ContactPoint(type="Customer Service", value="+971 600 599 995"),),
        same_as=(
            "https://www.facebook.com/emiratesislamic",
            "https://twitter.com/emiratesislamic",
            "https://www.linkedin.com/company/emirates-islamic-bank/",
            "https://www.instagram.com/emiratesislamic",
            "https://www.youtube.com/channel/UCdrZqwAbeRNTTkDhZcuNQ3Q",
        ),
        primary_color="#461e57",
        accent_color="#51c8bc",
        surface_color="#f3f4f6",
    ),
    BrandProfile(
        id="enbd",
        name="Emirates NBD",
        legal_name="Emirates NBD Bank PJSC",
        org_type="BankOrCreditUnion",
        domain="www.emiratesnbd.com",
        logo_url="https://www.emiratesnbd.com/en/assets/images/logo.png",
        address=("Baniyas Road, Deira, Dubai, UAE",),
        contact_points=(ContactPoint(type="Customer Service", value="+971 600 54 0000"),),
        same_as=(
            "https://www.facebook.com/EmiratesNBD",
            "https://twitter.com/EmiratesNBD",
            "https://www.linkedin.com/company/emirates-nbd",
        ),
        primary_color="#072447",
        accent_color="#2765ff",
        surface_color="#f0f7ff",
    ),
)

_PROFILES_BY_ID: Dict[str, BrandProfile] = {p.id: p for p in BRAND_PROFILES}

DEFAULT_PROFILE = BRAND_PROFILES[0]


def get_profile(profile_id: str) -> BrandProfile:
    """
    Look up a brand profile by id.

    Raises:
        KeyError: If no profile has that id
    """
    return _PROFILES_BY_ID[profile_id]
