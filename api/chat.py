"""
Assistant API

Endpoints:
- POST /api/chat - One assistant turn about the active generation
"""

import logging
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from seo_studio.assistant import build_reply_message, request_reply
from seo_studio.errors import InputValidationError
from seo_studio.models import Generation, Message
from seo_studio.providers import ModelAdapter

from .dependencies import get_chat_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Assistant"])


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Full conversation so far; the last turn is the new user message."""
    messages: List[ChatTurn]
    context: Optional[Dict[str, Any]] = None


def _context_generation(context: Optional[Dict[str, Any]]) -> Optional[Generation]:
    if not context:
        return None
    try:
        return Generation.from_dict(context)
    except (AttributeError, TypeError, ValueError) as e:
        logger.warning(f"Ignoring unreadable chat context: {e}")
        return None


@router.post("/chat")
async def chat(
    request: ChatRequest,
    chat_service: ModelAdapter = Depends(get_chat_service),
):
    """
    Run one assistant turn.

    message is the raw reply (markers included); cleanedMessage has the
    marker spans removed.
    """
    if not request.messages or request.messages[-1].role != "user":
        raise InputValidationError("Invalid request: messages must end with a user message")

    *prior, latest = request.messages
    if not latest.content.strip():
        raise InputValidationError("Invalid request: empty message")

    history = [Message(role=t.role, content=t.content, timestamp=0) for t in prior]
    raw_reply = await request_reply(
        chat_service,
        history,
        latest.content,
        _context_generation(request.context),
    )
    reply = build_reply_message(raw_reply)

    return {
        "message": raw_reply,
        "cleanedMessage": reply.content,
        "newVariant": reply.new_variant.to_dict() if reply.new_variant else None,
        "newSchema": reply.new_schema,
    }
