"""
Gemini adapter (google-genai).

URL audits use the pro model with Google Search grounding; pasted content
and documents use the flash model with a JSON response schema.
"""

import logging
from typing import List, Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from ..errors import ProviderError, RateLimitError
from ..models import GroundingSource, ModelProvider
from ..output import extract_json_object
from .base import ChatMessage, CompletionRequest, ModelAdapter, ProviderResult, TokenUsage

logger = logging.getLogger(__name__)

DEFAULT_URL_MODEL = "gemini-2.5-pro"
DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
TEMPERATURE = 0.1
CHAT_TEMPERATURE = 0.7
PRO_THINKING_BUDGET = 16000
FLASH_THINKING_BUDGET = 8000
DEFAULT_SOURCE_TITLE = "Source Reference"


def _string() -> types.Schema:
    return types.Schema(type=types.Type.STRING)


def _string_list() -> types.Schema:
    return types.Schema(type=types.Type.ARRAY, items=_string())


def _number() -> types.Schema:
    return types.Schema(type=types.Type.NUMBER)


# schemaJsonld is declared as a string: the graph has no fixed shape.
AUDIT_RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "pageType": _string(),
        "extraction": types.Schema(
            type=types.Type.OBJECT,
            properties={
                "titleCurrent": _string(),
                "metaCurrent": _string(),
                "h1Current": _string(),
                "headings": _string_list(),
                "mainTextPreview": _string(),
            },
            required=["titleCurrent", "metaCurrent", "h1Current", "headings", "mainTextPreview"],
        ),
        "seoVariants": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "h1": _string(),
                    "metaTitle": _string(),
                    "metaDescription": _string(),
                    "keyphrases": _string_list(),
                    "rationale": _string(),
                    "bestFor": _string(),
                    "justification": _string(),
                    "situationalComparison": _string(),
                },
                required=["h1", "metaTitle", "metaDescription", "keyphrases", "bestFor", "situationalComparison"],
            ),
        ),
        "aiRecommendation": types.Schema(
            type=types.Type.OBJECT,
            properties={
                "winnerIndex": _number(),
                "expertRationale": _string(),
                "comparisonNotes": _string(),
            },
            required=["winnerIndex", "expertRationale"],
        ),
        "strategicImpact": types.Schema(
            type=types.Type.OBJECT,
            properties={
                "visibilityScore": _number(),
                "trustScore": _number(),
                "complianceScore": _number(),
                "growthRationale": _string(),
                "entityLinkage": _string_list(),
            },
            required=["visibilityScore", "trustScore", "complianceScore", "growthRationale", "entityLinkage"],
        ),
        "schemaJsonld": _string(),
        "schemaCommentary": _string(),
        "validation": types.Schema(
            type=types.Type.OBJECT,
            properties={
                "errors": _string_list(),
                "warnings": _string_list(),
                "suggestions": _string_list(),
            },
            required=["errors", "warnings", "suggestions"],
        ),
    },
    required=[
        "pageType", "extraction", "seoVariants", "aiRecommendation",
        "strategicImpact", "schemaJsonld", "schemaCommentary", "validation",
    ],
)


def thinking_budget_for(model: str) -> int:
    return PRO_THINKING_BUDGET if "pro" in model else FLASH_THINKING_BUDGET


class GeminiAdapter(ModelAdapter):
    """
    Async Gemini adapter.

    Usage:
        adapter = GeminiAdapter(api_key="...")
        result = await adapter.complete(CompletionRequest(system, message, is_url=True))
    """

    provider = ModelProvider.GEMINI

    def __init__(
        self,
        api_key: str,
        url_model: str = DEFAULT_URL_MODEL,
        text_model: str = DEFAULT_TEXT_MODEL,
        client: Optional[genai.Client] = None,
    ):
        super().__init__()
        self.url_model = url_model
        self.text_model = text_model
        self.client = client or genai.Client(api_key=api_key)

    def model_for(self, request: CompletionRequest) -> str:
        return self.url_model if request.is_url else self.text_model

    def build_config(self, request: CompletionRequest, model: str) -> types.GenerateContentConfig:
        """
        Assemble the generation config.

        The search tool cannot be combined with a JSON response schema, so
        grounded (URL) calls rely on the prompt contract and JSON recovery.
        """
        config = {
            "system_instruction": request.system_instruction,
            "temperature": TEMPERATURE,
            "thinking_config": types.ThinkingConfig(thinking_budget=thinking_budget_for(model)),
        }
        if request.is_url:
            config["tools"] = [types.Tool(google_search=types.GoogleSearch())]
        else:
            config["response_mime_type"] = "application/json"
            config["response_schema"] = AUDIT_RESPONSE_SCHEMA
        return types.GenerateContentConfig(**config)

    def build_contents(self, request: CompletionRequest) -> List[types.Content]:
        parts = []
        if request.document is not None:
            parts.append(types.Part.from_bytes(
                data=request.document.raw_bytes(),
                mime_type=request.document.mime_type,
            ))
        parts.append(types.Part.from_text(text=request.user_message))
        return [types.Content(role="user", parts=parts)]

    async def complete(self, request: CompletionRequest) -> ProviderResult:
        model = self.model_for(request)
        logger.info(f"Gemini audit with {model} (grounded={request.is_url})")

        try:
            response = await self.client.aio.models.generate_content(
                model=model,
                contents=self.build_contents(request),
                config=self.build_config(request, model),
            )
        except genai_errors.APIError as e:
            raise self._translate(e) from e

        usage = self._usage(response)
        self._track(usage)

        text = response.text or ""
        if not text:
            logger.warning("Gemini returned an empty result")

        return ProviderResult(
            data=extract_json_object(text) or {},
            grounding_sources=self._grounding_sources(response),
            usage=usage,
            model=model,
        )

    async def chat(self, messages: List[ChatMessage], system: str) -> str:
        contents = [
            types.Content(
                role="model" if m.role == "assistant" else "user",
                parts=[types.Part.from_text(text=m.content)],
            )
            for m in messages
        ]

        try:
            response = await self.client.aio.models.generate_content(
                model=self.text_model,
                contents=contents,
                config=types.GenerateContentConfig(
                    system_instruction=system,
                    temperature=CHAT_TEMPERATURE,
                ),
            )
        except genai_errors.APIError as e:
            raise self._translate(e) from e

        self._track(self._usage(response))
        return response.text or ""

    @staticmethod
    def _translate(error: "genai_errors.APIError") -> Exception:
        logger.error(f"Gemini API error {error.code}: {error.message}")
        if error.code == 429:
            return RateLimitError(f"429: {error.message}")
        return ProviderError(str(error.message or "Gemini request failed"), status_code=error.code)

    @staticmethod
    def _usage(response) -> TokenUsage:
        metadata = getattr(response, "usage_metadata", None)
        if metadata is None:
            return TokenUsage()
        return TokenUsage(
            input_tokens=metadata.prompt_token_count or 0,
            output_tokens=metadata.candidates_token_count or 0,
        )

    @staticmethod
    def _grounding_sources(response) -> List[GroundingSource]:
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return []

        metadata = getattr(candidates[0], "grounding_metadata", None)
        chunks = getattr(metadata, "grounding_chunks", None) or []

        sources = []
        for chunk in chunks:
            web = getattr(chunk, "web", None)
            if web is None or not web.uri:
                continue
            sources.append(GroundingSource(title=web.title or DEFAULT_SOURCE_TITLE, uri=web.uri))
        return sources
