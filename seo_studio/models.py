"""
Banking SEO Studio - Data Models

Shared records used across the audit, assistant and archive layers.
Wire format (API bodies, archive file) is camelCase; attributes are snake_case.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

ENHANCED_SCHEMA_NOTE = "\n\n[Enhanced via Chat Assistant]"


# =============================================================================
# ENUMS
# =============================================================================


class PageType(str, Enum):
    """Coarse content category stored on a Generation."""
    PRODUCT = "product"
    CAMPAIGN = "campaign"
    OFFER = "offer"
    PRESS_RELEASE = "press_release"
    GENERIC = "generic"

    @classmethod
    def coerce(cls, value: Any, default: "PageType" = None) -> Optional["PageType"]:
        """Return the matching member, or default for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return default


class ModelProvider(str, Enum):
    """Model-completion provider used for an audit."""
    GEMINI = "gemini"
    OPENAI = "openai"


# =============================================================================
# HELPERS
# =============================================================================


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _str_tuple(value: Any) -> Tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value)
    return (str(value),)


def _mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _number(value: Any, default: float = 0) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return int(number) if number.is_integer() else number


def normalize_schema(schema: Any) -> Any:
    """
    Parse a schema graph delivered as a JSON string.

    Objects pass through untouched. Strings that fail to parse are kept as-is.
    """
    if isinstance(schema, str):
        try:
            return json.loads(schema)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse schemaJsonld string, keeping as is: {e}")
    return schema


# =============================================================================
# BRAND PROFILE
# =============================================================================


@dataclass(frozen=True)
class ContactPoint:
    type: str
    value: str


@dataclass(frozen=True)
class BrandProfile:
    """Identity record for one institution."""
    id: str
    name: str
    legal_name: str
    org_type: str
    domain: str
    logo_url: str
    address: Tuple[str, ...] = ()
    contact_points: Tuple[ContactPoint, ...] = ()
    same_as: Tuple[str, ...] = ()
    primary_color: str = ""
    accent_color: str = ""
    surface_color: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "legalName": self.legal_name,
            "orgType": self.org_type,
            "domain": self.domain,
            "logoUrl": self.logo_url,
            "address": list(self.address),
            "contactPoints": [{"type": c.type, "value": c.value} for c in self.contact_points],
            "sameAs": list(self.same_as),
            "primaryColor": self.primary_color,
            "accentColor": self.accent_color,
            "surfaceColor": self.surface_color,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BrandProfile":
        return cls(
            id=_str(data.get("id")),
            name=_str(data.get("name")),
            legal_name=_str(data.get("legalName")),
            org_type=_str(data.get("orgType")),
            domain=_str(data.get("domain")),
            logo_url=_str(data.get("logoUrl")),
            address=_str_tuple(data.get("address")),
            contact_points=tuple(
                ContactPoint(type=_str(c.get("type")), value=_str(c.get("value")))
                for c in data.get("contactPoints") or []
                if isinstance(c, dict)
            ),
            same_as=_str_tuple(data.get("sameAs")),
            primary_color=_str(data.get("primaryColor")),
            accent_color=_str(data.get("accentColor")),
            surface_color=_str(data.get("surfaceColor")),
        )


# =============================================================================
# AUDIT RESULT PARTS
# =============================================================================


@dataclass(frozen=True)
class SEOVariant:
    """One candidate SEO metadata package."""
    h1: str
    meta_title: str
    meta_description: str
    keyphrases: Tuple[str, ...] = ()
    rationale: str = ""
    best_for: str = ""
    justification: str = ""
    situational_comparison: str = ""
    is_enhanced: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "h1": self.h1,
            "metaTitle": self.meta_title,
            "metaDescription": self.meta_description,
            "keyphrases": list(self.keyphrases),
            "rationale": self.rationale,
            "bestFor": self.best_for,
            "justification": self.justification,
            "situationalComparison": self.situational_comparison,
        }
        if self.is_enhanced:
            data["isEnhanced"] = True
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SEOVariant":
        return cls(
            h1=_str(data.get("h1")),
            meta_title=_str(data.get("metaTitle")),
            meta_description=_str(data.get("metaDescription")),
            keyphrases=_str_tuple(data.get("keyphrases")),
            rationale=_str(data.get("rationale")),
            best_for=_str(data.get("bestFor")),
            justification=_str(data.get("justification")),
            situational_comparison=_str(data.get("situationalComparison")),
            is_enhanced=data.get("isEnhanced") is True,
        )


@dataclass(frozen=True)
class AIRecommendation:
    winner_index: int
    expert_rationale: str
    comparison_notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "winnerIndex": self.winner_index,
            "expertRationale": self.expert_rationale,
            "comparisonNotes": self.comparison_notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AIRecommendation":
        return cls(
            winner_index=int(_number(data.get("winnerIndex"))),
            expert_rationale=_str(data.get("expertRationale")),
            comparison_notes=_str(data.get("comparisonNotes")),
        )


@dataclass(frozen=True)
class StrategicImpact:
    visibility_score: float
    trust_score: float
    compliance_score: float
    growth_rationale: str = ""
    entity_linkage: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "visibilityScore": self.visibility_score,
            "trustScore": self.trust_score,
            "complianceScore": self.compliance_score,
            "growthRationale": self.growth_rationale,
            "entityLinkage": list(self.entity_linkage),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StrategicImpact":
        return cls(
            visibility_score=_number(data.get("visibilityScore")),
            trust_score=_number(data.get("trustScore")),
            compliance_score=_number(data.get("complianceScore")),
            growth_rationale=_str(data.get("growthRationale")),
            entity_linkage=_str_tuple(data.get("entityLinkage")),
        )


@dataclass(frozen=True)
class ValidationSummary:
    errors: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    suggestions: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "suggestions": list(self.suggestions),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ValidationSummary":
        data = _mapping(data)
        return cls(
            errors=_str_tuple(data.get("errors")),
            warnings=_str_tuple(data.get("warnings")),
            suggestions=_str_tuple(data.get("suggestions")),
        )


@dataclass(frozen=True)
class ExtractedContent:
    """Snapshot of what the model read from the source."""
    title_current: str = ""
    meta_current: str = ""
    h1_current: str = ""
    headings: Tuple[str, ...] = ()
    main_text_preview: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "titleCurrent": self.title_current,
            "metaCurrent": self.meta_current,
            "h1Current": self.h1_current,
            "headings": list(self.headings),
            "mainTextPreview": self.main_text_preview,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ExtractedContent":
        data = _mapping(data)
        return cls(
            title_current=_str(data.get("titleCurrent")),
            meta_current=_str(data.get("metaCurrent")),
            h1_current=_str(data.get("h1Current")),
            headings=_str_tuple(data.get("headings")),
            main_text_preview=_str(data.get("mainTextPreview")),
        )


@dataclass(frozen=True)
class GroundingSource:
    """Citation returned by a provider that used web search."""
    title: str
    uri: str

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "uri": self.uri}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GroundingSource":
        return cls(title=_str(data.get("title")), uri=_str(data.get("uri")))


# =============================================================================
# GENERATION
# =============================================================================


@dataclass(frozen=True)
class Generation:
    """
    The unit of persisted work: one audit and its later refinements.

    Mutations go through with_enhanced_variant() / with_schema(), which
    return a new record.
    """
    id: str
    timestamp: int
    url: str
    profile_id: str
    page_type: PageType
    model_provider: ModelProvider
    extracted: ExtractedContent
    seo_variants: Tuple[SEOVariant, ...]
    schema_jsonld: Any = None
    schema_commentary: str = ""
    validation: ValidationSummary = field(default_factory=ValidationSummary)
    ai_recommendation: Optional[AIRecommendation] = None
    strategic_impact: Optional[StrategicImpact] = None
    grounding_sources: Tuple[GroundingSource, ...] = ()

    def with_enhanced_variant(self, variant: SEOVariant) -> "Generation":
        """Append an assistant-contributed variant."""
        enhanced = replace(variant, is_enhanced=True)
        return replace(self, seo_variants=self.seo_variants + (enhanced,))

    def with_schema(self, schema: Any) -> "Generation":
        """Replace the structured-data graph and note the enhancement."""
        return replace(
            self,
            schema_jsonld=normalize_schema(schema),
            schema_commentary=(self.schema_commentary or "") + ENHANCED_SCHEMA_NOTE,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = {
            "id": self.id,
            "timestamp": self.timestamp,
            "url": self.url,
            "profileId": self.profile_id,
            "pageType": self.page_type.value,
            "modelProvider": self.model_provider.value,
            "extracted": self.extracted.to_dict(),
            "seoVariants": [v.to_dict() for v in self.seo_variants],
            "schemaJsonld": self.schema_jsonld,
            "schemaCommentary": self.schema_commentary,
            "validation": self.validation.to_dict(),
            "groundingSources": [s.to_dict() for s in self.grounding_sources],
        }
        if self.ai_recommendation is not None:
            data["aiRecommendation"] = self.ai_recommendation.to_dict()
        if self.strategic_impact is not None:
            data["strategicImpact"] = self.strategic_impact.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Generation":
        recommendation = data.get("aiRecommendation")
        impact = data.get("strategicImpact")
        return cls(
            id=_str(data.get("id")),
            timestamp=int(_number(data.get("timestamp"))),
            url=_str(data.get("url")),
            profile_id=_str(data.get("profileId")),
            page_type=PageType.coerce(data.get("pageType"), PageType.GENERIC),
            model_provider=ModelProvider(data.get("modelProvider") or ModelProvider.GEMINI.value),
            extracted=ExtractedContent.from_dict(data.get("extracted")),
            seo_variants=tuple(
                SEOVariant.from_dict(v) for v in data.get("seoVariants") or [] if isinstance(v, dict)
            ),
            schema_jsonld=normalize_schema(data.get("schemaJsonld")),
            schema_commentary=_str(data.get("schemaCommentary")),
            validation=ValidationSummary.from_dict(data.get("validation")),
            ai_recommendation=AIRecommendation.from_dict(recommendation) if isinstance(recommendation, dict) else None,
            strategic_impact=StrategicImpact.from_dict(impact) if isinstance(impact, dict) else None,
            grounding_sources=tuple(
                GroundingSource.from_dict(s) for s in data.get("groundingSources") or [] if isinstance(s, dict)
            ),
        )


# =============================================================================
# ASSISTANT MESSAGES
# =============================================================================


@dataclass(frozen=True)
class Message:
    """One turn of an assistant conversation."""
    role: str  # "user" or "assistant"
    content: str
    timestamp: int
    new_variant: Optional[SEOVariant] = None
    new_schema: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"role": self.role, "content": self.content, "timestamp": self.timestamp}
        if self.new_variant is not None:
            data["newVariant"] = self.new_variant.to_dict()
        if self.new_schema is not None:
            data["newSchema"] = self.new_schema
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        variant = data.get("newVariant")
        schema = data.get("newSchema")
        return cls(
            role=_str(data.get("role")) or "user",
            content=_str(data.get("content")),
            timestamp=int(_number(data.get("timestamp"))),
            new_variant=SEOVariant.from_dict(variant) if isinstance(variant, dict) else None,
            new_schema=schema if isinstance(schema, dict) else None,
        )
