"""
Assistant Session Tests

Covers single turns, payload extraction and the idle / awaiting-reply states.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest

from seo_studio.assistant import (
    APOLOGY_MESSAGE,
    AssistantSession,
    SessionState,
    build_reply_message,
    send_turn,
)
from seo_studio.errors import ProviderError
from seo_studio.models import Message


NEW_VARIANT = {
    "h1": "Skywards Infinite: Miles Without Interest",
    "metaTitle": "Skywards Infinite Card | Emirates Islamic",
    "metaDescription": "A Sharia compliant card that earns Skywards miles.",
    "keyphrases": ["Islamic credit card UAE"],
}

NEW_SCHEMA = {"@context": "https://schema.org", "@graph": [{"@type": "FAQPage"}]}


def variant_reply(note: str = "Here is a sharper variant.") -> str:
    return f"{note}\n---NEW_VARIANT---\n{json.dumps(NEW_VARIANT)}\n---END_VARIANT---"


class TestSendTurn:
    """Tests for a single assistant turn."""

    @pytest.mark.asyncio
    async def test_messages_and_system(self, mock_adapter, generation):
        history = [
            Message(role="user", content="Hi", timestamp=1),
            Message(role="assistant", content="Hello", timestamp=2),
        ]

        await send_turn(mock_adapter, history, "Improve variant 2", generation)

        messages, system = mock_adapter.chat.call_args.args
        assert [m.to_dict() for m in messages] == [
            {"role": "user", "content": "Hi"},
            {"role": "assistant", "content": "Hello"},
            {"role": "user", "content": "Improve variant 2"},
        ]
        assert "Current SEO Generation Context:" in system

    @pytest.mark.asyncio
    async def test_plain_reply(self, mock_adapter):
        reply = await send_turn(mock_adapter, [], "Any tips?")

        assert reply.role == "assistant"
        assert reply.content == "Here is my advice."
        assert reply.new_variant is None
        assert reply.new_schema is None
        system = mock_adapter.chat.call_args.args[1]
        assert "Current SEO Generation Context" not in system

    @pytest.mark.asyncio
    async def test_variant_extracted(self, mock_adapter):
        mock_adapter.chat = AsyncMock(return_value=variant_reply())

        reply = await send_turn(mock_adapter, [], "Make it punchier")

        assert reply.content == "Here is a sharper variant."
        assert reply.new_variant.meta_title == NEW_VARIANT["metaTitle"]
        assert reply.new_variant.keyphrases == ("Islamic credit card UAE",)

    @pytest.mark.asyncio
    async def test_provider_error_propagates(self, mock_adapter):
        mock_adapter.chat = AsyncMock(side_effect=ProviderError("boom", 500))

        with pytest.raises(ProviderError):
            await send_turn(mock_adapter, [], "Hello")

    def test_build_reply_message_schema(self):
        text = "Added an FAQ.\n---NEW_SCHEMA---\n" + json.dumps(NEW_SCHEMA) + "\n---END_SCHEMA---"

        message = build_reply_message(text)

        assert message.content == "Added an FAQ."
        assert message.new_schema == NEW_SCHEMA
        assert message.new_variant is None


class TestAssistantSession:
    """Tests for the session state machine."""

    @pytest.mark.asyncio
    async def test_send_appends_both_turns(self, mock_adapter, generation):
        session = AssistantSession(mock_adapter, generation)

        reply = await session.send("  What is weak here?  ")

        assert [m.role for m in session.history] == ["user", "assistant"]
        assert session.history[0].content == "What is weak here?"
        assert session.history[1] is reply
        assert session.state == SessionState.IDLE

    @pytest.mark.asyncio
    async def test_history_passed_on_next_turn(self, mock_adapter):
        session = AssistantSession(mock_adapter)

        await session.send("First")
        await session.send("Second")

        messages = mock_adapter.chat.call_args.args[0]
        assert [m.content for m in messages] == ["First", "Here is my advice.", "Second"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", None])
    async def test_blank_text_ignored(self, mock_adapter, text):
        session = AssistantSession(mock_adapter)

        assert await session.send(text) is None
        assert session.history == ()
        mock_adapter.chat.assert_not_called()

    @pytest.mark.asyncio
    async def test_send_while_awaiting_is_ignored(self, mock_adapter):
        release = asyncio.Event()

        async def slow_chat(messages, system):
            await release.wait()
            return "Done."

        mock_adapter.chat = AsyncMock(side_effect=slow_chat)
        session = AssistantSession(mock_adapter)

        pending = asyncio.ensure_future(session.send("First"))
        await asyncio.sleep(0)
        assert session.is_busy

        assert await session.send("Second") is None

        release.set()
        reply = await pending

        assert reply.content == "Done."
        assert len(session.history) == 2
        assert not session.is_busy

    @pytest.mark.asyncio
    async def test_failure_becomes_apology(self, mock_adapter):
        mock_adapter.chat = AsyncMock(side_effect=ProviderError("OpenAI service unreachable"))
        session = AssistantSession(mock_adapter)

        reply = await session.send("Hello")

        assert reply.content == APOLOGY_MESSAGE
        assert reply.role == "assistant"
        assert session.state == SessionState.IDLE
        assert len(session.history) == 2

    @pytest.mark.asyncio
    async def test_set_generation(self, mock_adapter, generation):
        session = AssistantSession(mock_adapter)
        session.set_generation(generation)

        await session.send("Review the schema")

        system = mock_adapter.chat.call_args.args[1]
        assert generation.url in system
