"""Tests for Gradio event handlers (no Gradio server needed)."""

import pytest

from relay_chat import handlers, state
from relay_chat.config import DEFAULT_SYSTEM_PROMPT, Message, ProviderId
from relay_chat.session import ChatSession


@pytest.fixture
def installed_session(session):
    state.reset_session(session)
    return session


def settings_panel(**overrides):
    values = {
        "provider": "cloud",
        "cloud_model": "llama-3.1-70b-versatile",
        "temperature": 1.0,
        "max_tokens": 1024,
        "top_p": 1.0,
        "frequency_penalty": 0.0,
        "presence_penalty": 0.0,
        "system_prompt": "You are a security expert.",
    }
    values.update(overrides)
    return values


class TestChatbotFormat:

    def test_to_chatbot_messages(self):
        messages = (
            Message(role="user", content="hello"),
            Message(role="assistant", content="hi", model=ProviderId.CLOUD),
        )

        assert handlers.to_chatbot_messages(messages) == [
            {"role": "user", "content": "hello"},
            {"role": "assistant", "content": "**Groq Cloud:** hi"},
        ]

    @pytest.mark.asyncio
    async def test_each_reply_names_its_provider(self, installed_session):
        await installed_session.submit("a")
        installed_session.update_settings(provider=ProviderId.LOCAL)
        await installed_session.submit("b")

        chatbot = handlers.to_chatbot_messages(installed_session.messages)

        assert [m["content"] for m in chatbot] == [
            "a",
            "**Groq Cloud:** reply from cloud",
            "b",
            "**Local LM:** reply from local",
        ]


class TestSubmitHandler:

    @pytest.mark.asyncio
    async def test_submit_clears_input_and_renders_reply(self, installed_session):
        outputs = [out async for out in handlers.handle_submit("hello")]

        chatbot, input_text, status = outputs[-1]
        assert chatbot == [
            {"role": "user", "content": "hello"},
            {"role": "assistant", "content": "**Groq Cloud:** reply from cloud"},
        ]
        assert input_text == ""
        assert status.startswith("✅ Ready")
        assert all(out[1] == "" for out in outputs)

    @pytest.mark.asyncio
    async def test_blank_submit_keeps_input(self, installed_session):
        outputs = [out async for out in handlers.handle_submit("   ")]

        assert len(outputs) == 1
        chatbot, input_text, status = outputs[0]
        assert chatbot == []
        assert input_text == "   "
        assert status == "❌ Empty message"

    @pytest.mark.asyncio
    async def test_new_thread_replaces_conversation(self, installed_session):
        await installed_session.submit("old")

        outputs = [out async for out in handlers.handle_new_thread("start over")]

        chatbot, seed_text, _ = outputs[-1]
        assert [m["content"] for m in chatbot] == ["start over", "**Groq Cloud:** reply from cloud"]
        assert seed_text == ""

    @pytest.mark.asyncio
    async def test_clear(self, installed_session):
        await installed_session.submit("old")

        chatbot, input_text, status = handlers.handle_clear()

        assert chatbot == []
        assert installed_session.messages == ()
        assert "cleared" in status

    def test_lazily_creates_session(self):
        status = handlers.handle_clear()[2]

        assert isinstance(state.session, ChatSession)
        assert "cleared" in status


class TestSettingsHandler:

    def test_applies_settings(self, installed_session):
        status = handlers.handle_settings_change(
            **settings_panel(provider="local", temperature=0.4, max_tokens=2048.0)
        )

        assert installed_session.settings.provider == ProviderId.LOCAL
        assert installed_session.settings.temperature == 0.4
        assert installed_session.settings.max_tokens == 2048
        assert "Local LM" in status

    def test_invalid_settings_reported(self, installed_session):
        before = installed_session.settings

        status = handlers.handle_settings_change(**settings_panel(temperature=3.0))

        assert status.startswith("❌ Invalid settings")
        assert installed_session.settings is before

    def test_unknown_provider_reported(self, installed_session):
        status = handlers.handle_settings_change(**settings_panel(provider="openai"))

        assert status.startswith("❌ Invalid settings")

    def test_cloud_status_names_model(self, installed_session):
        status = handlers.handle_settings_change(**settings_panel(cloud_model="gemma2-9b-it"))

        assert "Groq Cloud · Gemma 2 9B" in status


class TestHelpers:

    def test_describe_cloud_model(self):
        text = handlers.describe_cloud_model("mixtral-8x7b-32768")

        assert "Mixtral 8x7B" in text
        assert "32,768 tokens" in text

    def test_describe_unknown_model(self):
        assert handlers.describe_cloud_model("nope") == ""

    def test_reset_system_prompt(self):
        assert handlers.reset_system_prompt() == DEFAULT_SYSTEM_PROMPT

    @pytest.mark.asyncio
    async def test_show_transcript(self, installed_session):
        await installed_session.submit("hello")

        text = handlers.show_transcript()

        assert "**User:** hello" in text
        assert "**Groq Cloud:** reply from cloud" in text
