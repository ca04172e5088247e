"""
Model-completion providers.

get_adapter() is the single place that branches on ModelProvider.

Usage:
    from seo_studio.providers import get_adapter

    adapter = get_adapter(ModelProvider.GEMINI)
    result = await adapter.complete(request)
"""

import logging
from typing import Optional, Union

from ..errors import ProviderConfigError
from ..models import ModelProvider
from ..utils.config import Settings, get_settings
from .base import (
    ChatMessage,
    CompletionRequest,
    ModelAdapter,
    ProviderResult,
    TokenUsage,
)
from .gemini import GeminiAdapter
from .openai_adapter import OpenAIAdapter

logger = logging.getLogger(__name__)


def get_adapter(
    provider: Union[ModelProvider, str],
    settings: Optional[Settings] = None,
) -> ModelAdapter:
    """
    Build the adapter for a provider.

    Raises:
        ProviderConfigError: If the provider's API key is not configured
        ValueError: If the provider name is unknown
    """
    settings = settings or get_settings()
    provider = ModelProvider(provider)

    if provider == ModelProvider.GEMINI:
        if not settings.GEMINI_API_KEY:
            logger.error("GEMINI_API_KEY is not configured")
            raise ProviderConfigError("GEMINI_API_KEY not configured")
        return GeminiAdapter(
            api_key=settings.GEMINI_API_KEY,
            url_model=settings.GEMINI_URL_MODEL,
            text_model=settings.GEMINI_TEXT_MODEL,
        )

    if not settings.OPENAI_API_KEY:
        logger.error("OPENAI_API_KEY is not configured")
        raise ProviderConfigError("OPENAI_API_KEY not configured")
    return OpenAIAdapter(
        api_key=settings.OPENAI_API_KEY,
        audit_model=settings.OPENAI_AUDIT_MODEL,
        chat_model=settings.OPENAI_CHAT_MODEL,
    )


__all__ = [
    "ChatMessage",
    "CompletionRequest",
    "ModelAdapter",
    "ProviderResult",
    "TokenUsage",
    "GeminiAdapter",
    "OpenAIAdapter",
    "get_adapter",
]
