"""
Prompt templates and composition for audits and the assistant.
"""

from .banking_schema import BANKING_SCHEMA_INSTRUCTION
from .composer import (
    MAX_CONTENT_CHARS,
    build_brand_context,
    build_audit_system_prompt,
    build_audit_user_message,
    build_routing_hints,
    build_generation_context,
    build_assistant_system_prompt,
)

__all__ = [
    "BANKING_SCHEMA_INSTRUCTION",
    "MAX_CONTENT_CHARS",
    "build_brand_context",
    "build_audit_system_prompt",
    "build_audit_user_message",
    "build_routing_hints",
    "build_generation_context",
    "build_assistant_system_prompt",
]
