"""
OpenAI adapter (openai).

Audits request raw JSON-object output; assistant turns are free text.
"""

import logging
from typing import Any, List, Optional

import openai
from openai import AsyncOpenAI

from ..errors import ProviderError, RateLimitError
from ..models import ModelProvider
from ..output import extract_json_object
from ..prompts import MAX_CONTENT_CHARS
from .base import ChatMessage, CompletionRequest, ModelAdapter, ProviderResult, TokenUsage

logger = logging.getLogger(__name__)

DEFAULT_AUDIT_MODEL = "gpt-4o"
DEFAULT_CHAT_MODEL = "gpt-4o-mini"
TEMPERATURE = 0.1
CHAT_TEMPERATURE = 0.7
CHAT_MAX_TOKENS = 1500


class OpenAIAdapter(ModelAdapter):
    """
    Async OpenAI adapter.

    Usage:
        adapter = OpenAIAdapter(api_key="...")
        reply = await adapter.chat([ChatMessage("user", "Improve variant 2")], system_prompt)
    """

    provider = ModelProvider.OPENAI

    def __init__(
        self,
        api_key: str,
        audit_model: str = DEFAULT_AUDIT_MODEL,
        chat_model: str = DEFAULT_CHAT_MODEL,
        client: Optional[AsyncOpenAI] = None,
    ):
        super().__init__()
        self.audit_model = audit_model
        self.chat_model = chat_model
        self.client = client or AsyncOpenAI(api_key=api_key)

    def build_user_content(self, request: CompletionRequest) -> Any:
        """User turn: plain text, or text plus one document part."""
        document = request.document
        if document is None:
            return request.user_message

        data_url = f"data:{document.mime_type};base64,{document.data}"
        if document.mime_type.startswith("text/"):
            body = document.raw_bytes().decode("utf-8", errors="replace")[:MAX_CONTENT_CHARS]
            part = {"type": "text", "text": f"Document ({document.name}):\n{body}"}
        elif document.mime_type.startswith("image/"):
            part = {"type": "image_url", "image_url": {"url": data_url}}
        else:
            part = {"type": "file", "file": {"filename": document.name, "file_data": data_url}}

        return [{"type": "text", "text": request.user_message}, part]

    async def complete(self, request: CompletionRequest) -> ProviderResult:
        logger.info(f"OpenAI audit with {self.audit_model}")

        completion = await self._create(
            model=self.audit_model,
            messages=[
                {"role": "system", "content": request.system_instruction},
                {"role": "user", "content": self.build_user_content(request)},
            ],
            response_format={"type": "json_object"},
            temperature=TEMPERATURE,
        )

        usage = self._usage(completion)
        self._track(usage)

        text = completion.choices[0].message.content or ""
        return ProviderResult(
            data=extract_json_object(text) or {},
            grounding_sources=[],
            usage=usage,
            model=self.audit_model,
        )

    async def chat(self, messages: List[ChatMessage], system: str) -> str:
        completion = await self._create(
            model=self.chat_model,
            messages=[{"role": "system", "content": system}] + [m.to_dict() for m in messages],
            temperature=CHAT_TEMPERATURE,
            max_tokens=CHAT_MAX_TOKENS,
        )

        self._track(self._usage(completion))
        return completion.choices[0].message.content or ""

    async def _create(self, **kwargs: Any):
        try:
            return await self.client.chat.completions.create(**kwargs)
        except openai.RateLimitError as e:
            logger.warning(f"OpenAI rate limit: {e}")
            raise RateLimitError(f"429: {e.message}") from e
        except openai.APIStatusError as e:
            logger.error(f"OpenAI API error {e.status_code}: {e.message}")
            raise ProviderError(e.message, status_code=e.status_code) from e
        except openai.APIConnectionError as e:
            logger.error(f"OpenAI connection error: {e}")
            raise ProviderError("OpenAI service unreachable") from e

    @staticmethod
    def _usage(completion) -> TokenUsage:
        usage = getattr(completion, "usage", None)
        if usage is None:
            return TokenUsage()
        return TokenUsage(
            input_tokens=usage.prompt_tokens or 0,
            output_tokens=usage.completion_tokens or 0,
        )
