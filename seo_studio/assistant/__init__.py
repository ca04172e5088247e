"""
Conversational assistant for refining generations.
"""

from .session import (
    APOLOGY_MESSAGE,
    AssistantSession,
    SessionState,
    build_reply_message,
    request_reply,
    send_turn,
)

__all__ = [
    "APOLOGY_MESSAGE",
    "AssistantSession",
    "SessionState",
    "build_reply_message",
    "request_reply",
    "send_turn",
]
