"""
Generation Orchestrator

Runs one audit end to end:
1. Validate the input (exactly one source)
2. Compose prompts and call the selected provider adapter
3. Race the call against the audit timeout
4. Build the Generation record from the provider result
"""

import asyncio
import logging
import time
import uuid
from typing import Any, Callable, Dict, Optional, Union

from ..errors import AuditFailureError, AuditTimeoutError
from ..models import (
    AIRecommendation,
    BrandProfile,
    ExtractedContent,
    Generation,
    ModelProvider,
    PageType,
    SEOVariant,
    StrategicImpact,
    ValidationSummary,
    normalize_schema,
)
from ..prompts import build_audit_system_prompt, build_audit_user_message
from ..providers import CompletionRequest, ModelAdapter, ProviderResult, get_adapter
from .upload import AuditInput

logger = logging.getLogger(__name__)

AdapterFactory = Callable[[ModelProvider], ModelAdapter]

DEFAULT_TIMEOUT_SECONDS = 120.0


def _discard_late_result(task: "asyncio.Future") -> None:
    """Consume the outcome of a call that lost the race against the timeout."""
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.debug(f"Late provider error discarded: {error}")
    else:
        logger.debug("Late provider result discarded")


class AuditOrchestrator:
    """
    Audit runner written once against ModelAdapter.

    Usage:
        orchestrator = AuditOrchestrator()
        generation = await orchestrator.run_audit(
            AuditInput(url="https://www.emiratesislamic.ae/en/cards"),
            get_profile("ei"),
            ModelProvider.GEMINI,
        )
    """

    def __init__(
        self,
        adapter_factory: AdapterFactory = get_adapter,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Initialize orchestrator.

        Args:
            adapter_factory: Maps a provider to its adapter
            timeout_seconds: Wall-clock limit for the provider call
        """
        self.adapter_factory = adapter_factory
        self.timeout_seconds = timeout_seconds

    async def run_audit(
        self,
        audit_input: AuditInput,
        profile: BrandProfile,
        provider: Union[ModelProvider, str] = ModelProvider.GEMINI,
        page_type_override: Optional[PageType] = None,
    ) -> Generation:
        """
        Run an audit and return the new Generation.

        Persisting the record is the caller's job.

        Raises:
            InputValidationError: No source, or more than one
            AuditTimeoutError: Provider did not answer in time
            AuditFailureError: Provider answered with zero variants
            ProviderConfigError / ProviderError / RateLimitError: From the adapter
        """
        audit_input.validate()
        provider = ModelProvider(provider)

        request = CompletionRequest(
            system_instruction=build_audit_system_prompt(profile),
            user_message=build_audit_user_message(audit_input, profile, page_type_override),
            is_url=audit_input.is_url,
            document=audit_input.document,
        )

        logger.info(f"Starting {provider.value} audit for {audit_input.source_label} ({profile.id})")
        start_time = time.monotonic()

        adapter = self.adapter_factory(provider)
        result = await self._race(adapter.complete(request))

        generation = self.build_generation(result, audit_input, profile, provider, page_type_override)

        logger.info(
            f"Audit complete in {time.monotonic() - start_time:.1f}s: "
            f"{len(generation.seo_variants)} variants, {result.usage.total_tokens} tokens"
        )
        return generation

    async def _race(self, call) -> ProviderResult:
        """First settled wins; a late provider call is left to finish on its own."""
        task = asyncio.ensure_future(call)
        done, _ = await asyncio.wait({task}, timeout=self.timeout_seconds)

        if task not in done:
            logger.warning(f"Provider call exceeded {self.timeout_seconds}s")
            task.add_done_callback(_discard_late_result)
            raise AuditTimeoutError()

        return task.result()

    def build_generation(
        self,
        result: ProviderResult,
        audit_input: AuditInput,
        profile: BrandProfile,
        provider: ModelProvider,
        page_type_override: Optional[PageType] = None,
    ) -> Generation:
        """
        Build the record from a provider result.

        Raises:
            AuditFailureError: If the result holds no SEO variants
        """
        data = result.data or {}

        variants = tuple(
            SEOVariant.from_dict(v) for v in data.get("seoVariants") or [] if isinstance(v, dict)
        )
        if not variants:
            logger.error(f"Audit of {audit_input.source_label} returned no SEO variants")
            raise AuditFailureError("Audit returned no SEO variants")

        recommendation = data.get("aiRecommendation")
        impact = data.get("strategicImpact")

        return Generation(
            id=uuid.uuid4().hex,
            timestamp=int(time.time() * 1000),
            url=audit_input.source_label,
            profile_id=profile.id,
            page_type=page_type_override or PageType.coerce(data.get("pageType"), PageType.GENERIC),
            model_provider=provider,
            extracted=ExtractedContent.from_dict(data.get("extraction")),
            seo_variants=variants,
            schema_jsonld=normalize_schema(data.get("schemaJsonld")),
            schema_commentary=str(data.get("schemaCommentary") or ""),
            validation=ValidationSummary.from_dict(data.get("validation")),
            ai_recommendation=AIRecommendation.from_dict(recommendation) if isinstance(recommendation, dict) else None,
            strategic_impact=StrategicImpact.from_dict(impact) if isinstance(impact, dict) else None,
            grounding_sources=tuple(result.grounding_sources),
        )


def result_payload(generation: Generation) -> Dict[str, Any]:
    """The audit result in the provider's JSON contract shape."""
    record = generation.to_dict()
    return {
        "pageType": record["pageType"],
        "extraction": record["extracted"],
        "seoVariants": record["seoVariants"],
        "aiRecommendation": record.get("aiRecommendation"),
        "strategicImpact": record.get("strategicImpact"),
        "schemaJsonld": record["schemaJsonld"],
        "schemaCommentary": record["schemaCommentary"],
        "validation": record["validation"],
    }
