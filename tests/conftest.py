"""
Pytest Configuration and Shared Fixtures

Provides common fixtures and configuration for all test modules.
"""

import copy
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock

import pytest

from seo_studio.models import Generation, GroundingSource, ModelProvider
from seo_studio.persistence import GenerationArchive, HistoryStore
from seo_studio.profiles import get_profile
from seo_studio.providers import ModelAdapter, ProviderResult, TokenUsage


# ============================================================================
# Mock Data Fixtures
# ============================================================================

SAMPLE_SCHEMA = {
    "@context": "https://schema.org",
    "@graph": [
        {
            "@type": "Organization",
            "@id": "https://www.emiratesislamic.ae/#organization",
            "name": "Emirates Islamic",
        },
        {
            "@type": ["FinancialProduct", "Product"],
            "@id": "https://www.emiratesislamic.ae/en/cards/skywards-infinite#card",
            "name": "Skywards Infinite Credit Card",
        },
    ],
}


def make_variant(index: int) -> Dict[str, Any]:
    return {
        "h1": f"Skywards Infinite Card Option {index}",
        "metaTitle": f"Skywards Infinite Credit Card | Emirates Islamic {index}",
        "metaDescription": f"Earn Skywards miles with a Sharia compliant card. Variant {index}.",
        "keyphrases": ["Islamic credit card UAE", "Skywards miles card"],
        "rationale": "Leads with the miles benefit",
        "bestFor": "Frequent travellers",
        "justification": "High commercial intent",
        "situationalComparison": "Stronger than variant 1 for travel queries",
    }


@pytest.fixture
def provider_data() -> Dict[str, Any]:
    """Provider reply in the audit JSON contract shape."""
    return {
        "pageType": "product",
        "extraction": {
            "titleCurrent": "Skywards Infinite Credit Card",
            "metaCurrent": "Apply for the card",
            "h1Current": "Skywards Infinite",
            "headings": ["Benefits", "Fees"],
            "mainTextPreview": "Earn up to 2.5 Skywards miles...",
        },
        "seoVariants": [make_variant(1), make_variant(2), make_variant(3)],
        "aiRecommendation": {
            "winnerIndex": 1,
            "expertRationale": "Variant 2 balances compliance and intent",
            "comparisonNotes": "Variant 3 is too long",
        },
        "strategicImpact": {
            "visibilityScore": 82,
            "trustScore": 91,
            "complianceScore": 95,
            "growthRationale": "Rich results eligibility",
            "entityLinkage": ["Emirates Skywards"],
        },
        "schemaJsonld": copy.deepcopy(SAMPLE_SCHEMA),
        "schemaCommentary": "Graph covers Organization and FinancialProduct.",
        "validation": {"errors": [], "warnings": ["Missing FAQ"], "suggestions": []},
    }


@pytest.fixture
def provider_result(provider_data) -> ProviderResult:
    return ProviderResult(
        data=provider_data,
        grounding_sources=[GroundingSource(title="Emirates Islamic", uri="https://www.emiratesislamic.ae")],
        usage=TokenUsage(input_tokens=1200, output_tokens=900),
        model="gemini-2.5-pro",
    )


@pytest.fixture
def generation_record(provider_data) -> Dict[str, Any]:
    """Archived generation in wire format."""
    return {
        "id": "gen-1",
        "timestamp": 1717000000000,
        "url": "https://www.emiratesislamic.ae/en/cards/skywards-infinite",
        "profileId": "ei",
        "pageType": "product",
        "modelProvider": "gemini",
        "extracted": provider_data["extraction"],
        "seoVariants": provider_data["seoVariants"],
        "aiRecommendation": provider_data["aiRecommendation"],
        "strategicImpact": provider_data["strategicImpact"],
        "schemaJsonld": provider_data["schemaJsonld"],
        "schemaCommentary": provider_data["schemaCommentary"],
        "validation": provider_data["validation"],
        "groundingSources": [],
    }


@pytest.fixture
def generation(generation_record) -> Generation:
    return Generation.from_dict(generation_record)


@pytest.fixture
def ei_profile():
    return get_profile("ei")


@pytest.fixture
def enbd_profile():
    return get_profile("enbd")


# ============================================================================
# Mock Services
# ============================================================================

@pytest.fixture
def mock_adapter(provider_result) -> MagicMock:
    """Adapter whose complete() returns the sample provider result."""
    adapter = MagicMock(spec=ModelAdapter)
    adapter.provider = ModelProvider.GEMINI
    adapter.complete = AsyncMock(return_value=provider_result)
    adapter.chat = AsyncMock(return_value="Here is my advice.")
    return adapter


@pytest.fixture
def adapter_factory(mock_adapter) -> MagicMock:
    return MagicMock(return_value=mock_adapter)


@pytest.fixture
def archive(tmp_path) -> GenerationArchive:
    return GenerationArchive(HistoryStore(str(tmp_path / "history")))
