"""
Prompt Composer

Builds the exact text handed to the model-completion service:
- Audit system instruction (persona, missions, banking rules, JSON contract)
- Audit user message (task frame plus routing hints)
- Assistant system framing with the active generation as context
"""

import json
import logging
from typing import List, Optional, TYPE_CHECKING

from ..banking import (
    Channel,
    detect_channel,
    detect_page_type,
    generate_alternate_names,
    infer_breadcrumb,
)
from ..banking.rules import CHANNEL_NAMES, EI_TERMINOLOGY
from ..models import BrandProfile, Generation, PageType
from .banking_schema import BANKING_SCHEMA_INSTRUCTION

if TYPE_CHECKING:
    from ..audit.upload import AuditInput

logger = logging.getLogger(__name__)

MAX_CONTENT_CHARS = 20000

VARIANT_COUNT = 3


AUDIT_PERSONA = """You are an elite Enterprise SEO Architect specializing in banking and financial services. Your goal is to analyze the provided content and optimize it for Google's "Helpful Content" era, LLM search agents, and Rich Snippets."""


CORE_MISSIONS = f"""### CORE MISSIONS:
1. **De-noise**: Extract only the core semantic body. Ignore navigation, headers, footers, and sidebars.
2. **Strategic Audit**: Provide EXACTLY {VARIANT_COUNT} distinct SEO Growth Strategies (variants) optimized for banking products.
3. **Analytics**: Calculate 0-100 scores for Visibility, Trust, and Compliance.
4. **World-Class Banking Schema**: Generate comprehensive, specification-compliant schema.org markup."""


CRITICAL_CONSTRAINTS = """### CRITICAL CONSTRAINTS:
- NO mentions of "AI", "Gemini", or "LLM" in user-facing output text.
- For Emirates Islamic (emiratesislamic.ae): ALWAYS use "Profit Rate" instead of "Interest Rate"
- For Emirates Islamic: Include Islamic finance terminology in alternateName (Murabaha, Ijara, etc.)
- Use "Strategic Impact" instead of "AI Recommendations"
- Schema must be a complete @graph JSON object, not a string
- All @id references must be cross-reference consistent
- FAQPage answers must be plain text only (no HTML tags)"""


RESULT_CONTRACT = f"""Return a valid JSON object with the following structure:
- IMPORTANT: seoVariants array must contain EXACTLY {VARIANT_COUNT} objects, each with the variant fields below
- IMPORTANT: schemaJsonld must be a complete JSON object (not a string) with @context and @graph array
{{
  "pageType": "product|campaign|offer|press_release|generic",
  "extraction": {{
    "titleCurrent": "string",
    "metaCurrent": "string",
    "h1Current": "string",
    "headings": ["string"],
    "mainTextPreview": "string"
  }},
  "seoVariants": [
    {{
      "h1": "string",
      "metaTitle": "string",
      "metaDescription": "string",
      "keyphrases": ["string"],
      "rationale": "string",
      "bestFor": "string",
      "justification": "string",
      "situationalComparison": "string"
    }}
  ],
  "aiRecommendation": {{
    "winnerIndex": 0,
    "expertRationale": "string",
    "comparisonNotes": "string"
  }},
  "strategicImpact": {{
    "visibilityScore": 0-100,
    "trustScore": 0-100,
    "complianceScore": 0-100,
    "growthRationale": "string",
    "entityLinkage": ["string"]
  }},
  "schemaJsonld": {{
    "@context": "https://schema.org",
    "@graph": [
      {{
        "@type": "Organization",
        "@id": "...",
        "...": "..."
      }}
    ]
  }},
  "schemaCommentary": "string",
  "validation": {{
    "errors": ["string"],
    "warnings": ["string"],
    "suggestions": ["string"]
  }}
}}"""


URL_TASK = "Perform an Enterprise Growth Audit for this URL: {url}"
DOCUMENT_TASK = "Deep-dive analysis of the attached document. Extract core message and technical SEO requirements."
TEXT_TASK = "Semantic analysis of provided content: {content}"


ASSISTANT_FRAMING = """You are an expert SEO Assistant helping users understand and optimize their SEO strategies. You provide clear, actionable advice about SEO variants, schema markup, and content optimization.

CRITICAL: When users ask you to create, modify, or enhance SEO variants or schema, you MUST:
1. Provide a clear explanation of what you're changing and why
2. Generate the complete new variant or schema wrapped in the EXACT markers shown below
3. ALWAYS include the markers - they are required for the system to detect your output

For NEW SEO VARIANTS, you MUST use this EXACT format (include the markers):
---NEW_VARIANT---
{
  "h1": "Your improved H1 here",
  "metaTitle": "Your improved meta title here",
  "metaDescription": "Your improved meta description here",
  "keyphrases": ["keyword1", "keyword2", "keyword3"],
  "rationale": "Why this variant works",
  "bestFor": "Target audience/use case",
  "justification": "Technical justification",
  "situationalComparison": "How it compares to others"
}
---END_VARIANT---

For SCHEMA MODIFICATIONS or ENHANCEMENTS, you MUST use this EXACT format (include the markers):
---NEW_SCHEMA---
{
  "@context": "https://schema.org",
  "@graph": [
    {
      "@type": "Organization",
      "...": "..."
    }
  ]
}
---END_SCHEMA---

IMPORTANT RULES:
- ALWAYS wrap JSON output in the markers (---NEW_VARIANT--- or ---NEW_SCHEMA---)
- Do NOT use markdown code blocks (no ```json)
- The markers MUST be on their own lines
- Without the markers, the user won't see the "Add to Dashboard" button
- If user asks for schema enhancement, ALWAYS include ---NEW_SCHEMA--- markers
- Schema rules still apply: Organization/WebSite @id with a trailing slash before #, other nodes use [PAGE_URL]#fragment
- For Emirates Islamic, use "Profit Rate" instead of "Interest Rate" in all copy"""


# =============================================================================
# AUDIT PROMPTS
# =============================================================================


def build_brand_context(profile: BrandProfile) -> str:
    """Render the brand identity block for a profile."""
    return (
        f"BRAND CONTEXT: {profile.legal_name} ({profile.name})\n"
        f"- Website: https://{profile.domain}/\n"
        f"- Logo: {profile.logo_url}\n"
        f"- Org Type: {profile.org_type}"
    )


def build_audit_system_prompt(profile: BrandProfile) -> str:
    """Build the system instruction for a single-shot audit."""
    sections = [
        AUDIT_PERSONA,
        build_brand_context(profile),
        CORE_MISSIONS,
        BANKING_SCHEMA_INSTRUCTION.strip(),
        CRITICAL_CONSTRAINTS,
        RESULT_CONTRACT,
    ]
    return "\n\n".join(sections)


def _task_frame(audit_input: "AuditInput") -> str:
    if audit_input.url:
        return URL_TASK.format(url=audit_input.url)
    if audit_input.document is not None:
        return DOCUMENT_TASK
    return TEXT_TASK.format(content=audit_input.text[:MAX_CONTENT_CHARS])


def _classification_text(audit_input: "AuditInput") -> str:
    if audit_input.url:
        # Slugs carry the signals ("credit-cards" -> "Credit Cards")
        return " ".join(infer_breadcrumb(audit_input.url))
    if audit_input.document is not None:
        return audit_input.document.name
    return audit_input.text[:MAX_CONTENT_CHARS]


def _alternate_name_hints(breadcrumb: List[str], channel: Channel) -> List[str]:
    trail = breadcrumb[1:]
    if not trail:
        return []
    product_name = trail[-1]
    product_type = trail[-2] if len(trail) > 1 else trail[-1]
    return generate_alternate_names(product_type, channel, product_name)


def build_routing_hints(
    audit_input: "AuditInput",
    profile: BrandProfile,
    page_type_override: Optional[PageType] = None,
) -> List[str]:
    """
    Deterministic hints computed before the model call.

    Channel and page type are recomputed on every request.
    """
    channel = detect_channel(audit_input.url or profile.domain)
    hints = [f"- Channel: {CHANNEL_NAMES[channel]} ({channel.value})"]

    if page_type_override is not None:
        hints.append(f"- Page type (selected by user): {page_type_override.value}")
    else:
        label = detect_page_type(_classification_text(audit_input))
        hints.append(f"- Detected page type: {label}")

    if audit_input.url:
        breadcrumb = infer_breadcrumb(audit_input.url)
        hints.append(f"- Breadcrumb: {' > '.join(breadcrumb)}")

        aliases = _alternate_name_hints(breadcrumb, channel)
        if aliases:
            hints.append(f"- Suggested alternateName values: {', '.join(aliases)}")

    if channel == Channel.EI:
        for conventional, islamic in EI_TERMINOLOGY.items():
            hints.append(f'- Use "{islamic}" instead of "{conventional}" in all copy')

    logger.debug(f"Routing hints for {audit_input.source_label}: {hints}")
    return hints


def build_audit_user_message(
    audit_input: "AuditInput",
    profile: BrandProfile,
    page_type_override: Optional[PageType] = None,
) -> str:
    """Build the user message for a single-shot audit."""
    hints = build_routing_hints(audit_input, profile, page_type_override)
    return _task_frame(audit_input) + "\n\n### Routing hints:\n" + "\n".join(hints)


# =============================================================================
# ASSISTANT PROMPTS
# =============================================================================


def build_generation_context(generation: Generation) -> str:
    """Serialize a generation into a compact human-readable context block."""
    lines = [
        "Current SEO Generation Context:",
        f"- URL: {generation.url}",
        f"- Page Type: {generation.page_type.value}",
        f"- Model Used: {generation.model_provider.value}",
    ]

    if generation.seo_variants:
        lines.extend(["", "SEO Variants:"])
        for idx, variant in enumerate(generation.seo_variants, start=1):
            lines.extend([
                "",
                f"Variant {idx}:",
                f"- H1: {variant.h1}",
                f"- Meta Title: {variant.meta_title}",
                f"- Meta Description: {variant.meta_description}",
                f"- Best For: {variant.best_for}",
                f"- Keyphrases: {', '.join(variant.keyphrases)}",
            ])

    recommendation = generation.ai_recommendation
    if recommendation is not None:
        lines.extend([
            "",
            f"Recommended Variant: Variant {recommendation.winner_index + 1}",
            f"Rationale: {recommendation.expert_rationale}",
        ])

    impact = generation.strategic_impact
    if impact is not None:
        lines.extend([
            "",
            "Strategic Impact Scores:",
            f"- Visibility: {impact.visibility_score}/100",
            f"- Trust: {impact.trust_score}/100",
            f"- Compliance: {impact.compliance_score}/100",
        ])

    if generation.schema_jsonld:
        lines.extend(["", "Current Schema:", json.dumps(generation.schema_jsonld, indent=2)])

    return "\n".join(lines)


def build_assistant_system_prompt(generation: Optional[Generation] = None) -> str:
    """Build the assistant framing, with the generation context when present."""
    if generation is None:
        return ASSISTANT_FRAMING
    return ASSISTANT_FRAMING + "\n\n" + build_generation_context(generation)
