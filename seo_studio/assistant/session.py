"""
Assistant Session

Conversational refinement of a Generation. One turn:
1. Frame the system prompt with the active generation as context
2. Send system + history + new user turn to the chat service
3. Run the Response Extractor on the reply

Merging an extracted variant or schema into the Generation is left to the
caller (Generation.with_enhanced_variant / with_schema).
"""

import logging
import time
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..models import Generation, Message, SEOVariant
from ..output import ResponseExtractor
from ..prompts import build_assistant_system_prompt
from ..providers import ChatMessage, ModelAdapter

logger = logging.getLogger(__name__)

APOLOGY_MESSAGE = "Sorry, I encountered an error. Please try again."


def _now_ms() -> int:
    return int(time.time() * 1000)


async def request_reply(
    chat_service: ModelAdapter,
    history: Sequence[Message],
    new_user_text: str,
    generation_context: Optional[Generation] = None,
) -> str:
    """Send one turn and return the raw reply text."""
    messages = [ChatMessage(role=m.role, content=m.content) for m in history]
    messages.append(ChatMessage(role="user", content=new_user_text))

    system = build_assistant_system_prompt(generation_context)
    return await chat_service.chat(messages, system)


def build_reply_message(
    reply_text: str,
    extractor: Optional[ResponseExtractor] = None,
) -> Message:
    """Turn a raw reply into an assistant Message with any extracted payloads."""
    extraction = (extractor or ResponseExtractor()).extract(reply_text)

    variant = None
    if extraction.variant is not None:
        variant = SEOVariant.from_dict(extraction.variant)

    if extraction.variant_method or extraction.schema_method:
        logger.info(
            f"Assistant reply payloads: variant={extraction.variant_method}, "
            f"schema={extraction.schema_method}"
        )

    return Message(
        role="assistant",
        content=extraction.cleaned_text,
        timestamp=_now_ms(),
        new_variant=variant,
        new_schema=extraction.schema,
    )


async def send_turn(
    chat_service: ModelAdapter,
    history: Sequence[Message],
    new_user_text: str,
    generation_context: Optional[Generation] = None,
    extractor: Optional[ResponseExtractor] = None,
) -> Message:
    """
    Run one assistant turn.

    Args:
        chat_service: Adapter providing chat()
        history: Prior turns, oldest first
        new_user_text: The user's new message
        generation_context: Generation the conversation is about, if any
        extractor: Response extractor (a default one when omitted)

    Returns:
        Assistant Message with cleaned text and optional variant / schema
    """
    reply = await request_reply(chat_service, history, new_user_text, generation_context)
    return build_reply_message(reply, extractor)


class SessionState(str, Enum):
    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"


class AssistantSession:
    """
    Owns one conversation's history.

    idle -> awaiting_reply (on send) -> idle (on reply or error). A send while
    awaiting a reply, or with blank text, is ignored.
    """

    def __init__(
        self,
        chat_service: ModelAdapter,
        generation: Optional[Generation] = None,
        extractor: Optional[ResponseExtractor] = None,
    ):
        self.chat_service = chat_service
        self.generation = generation
        self.extractor = extractor or ResponseExtractor()
        self.state = SessionState.IDLE
        self._history: List[Message] = []

    @property
    def history(self) -> Tuple[Message, ...]:
        return tuple(self._history)

    @property
    def is_busy(self) -> bool:
        return self.state == SessionState.AWAITING_REPLY

    def set_generation(self, generation: Optional[Generation]) -> None:
        """Switch the context the assistant talks about."""
        self.generation = generation

    async def send(self, text: str) -> Optional[Message]:
        """
        Send a user message.

        Returns:
            The assistant reply (an apology on failure), or None when ignored
        """
        text = (text or "").strip()
        if not text or self.is_busy:
            return None

        prior = list(self._history)
        self._history.append(Message(role="user", content=text, timestamp=_now_ms()))
        self.state = SessionState.AWAITING_REPLY

        try:
            reply = await send_turn(self.chat_service, prior, text, self.generation, self.extractor)
        except Exception as e:
            logger.error(f"Assistant turn failed: {e}")
            reply = Message(role="assistant", content=APOLOGY_MESSAGE, timestamp=_now_ms())
        finally:
            self.state = SessionState.IDLE

        self._history.append(reply)
        return reply
