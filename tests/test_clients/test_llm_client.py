"""Tests for LLMClient (Claude API wrapper)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from resume_ats.clients.llm_client import LLMClient, LLMResponse


def _make_api_message(text: str, input_tokens: int = 100, output_tokens: int = 50) -> MagicMock:
    """Build a mock anthropic Message-like object."""
    message = MagicMock()
    message.usage.input_tokens = input_tokens
    message.usage.output_tokens = output_tokens
    message.content = [MagicMock(text=text)]
    return message


def _patched_client(mock_cls: MagicMock, **create_kwargs) -> MagicMock:
    mock_client = MagicMock()
    mock_client.messages.create = AsyncMock(**create_kwargs)
    mock_cls.return_value = mock_client
    return mock_client


class TestLLMClientInit:
    def test_init_default_creates_client_with_no_kwargs(self):
        with patch("resume_ats.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            LLMClient()
            mock_cls.assert_called_once_with()

    def test_init_passes_key_timeout_and_retries(self):
        with patch("resume_ats.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            LLMClient(api_key="test-key", timeout=30.0, max_retries=2)
            mock_cls.assert_called_once_with(api_key="test-key", timeout=30.0, max_retries=2)


class TestLLMClientGenerate:
    async def test_generate_returns_llm_response(self):
        with patch("resume_ats.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            _patched_client(mock_cls, return_value=_make_api_message("hello", 100, 50))
            llm = LLMClient()
            result = await llm.generate("say hello")

        assert isinstance(result, LLMResponse)
        assert result.text == "hello"
        assert result.input_tokens == 100
        assert result.output_tokens == 50

    async def test_system_prompt_is_forwarded(self):
        with patch("resume_ats.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            client = _patched_client(mock_cls, return_value=_make_api_message("ok"))
            llm = LLMClient()
            await llm.generate("prompt", system="be strict", max_tokens=512)

        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["system"] == "be strict"
        assert kwargs["max_tokens"] == 512
        assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]

    async def test_empty_system_prompt_is_omitted(self):
        with patch("resume_ats.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            client = _patched_client(mock_cls, return_value=_make_api_message("ok"))
            llm = LLMClient()
            await llm.generate("prompt")

        assert "system" not in client.messages.create.call_args.kwargs

    async def test_token_log_stores_model_and_counts(self):
        with patch("resume_ats.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            _patched_client(mock_cls, return_value=_make_api_message("resp", 20, 8))
            llm = LLMClient()
            await llm.generate("one", model="claude-haiku-4-5-20251001")
            await llm.generate("two", model="claude-haiku-4-5-20251001")

        assert len(llm._token_log) == 2
        assert llm._token_log[0] == ("claude-haiku-4-5-20251001", 20, 8)

    def test_token_summary_totals_and_resets(self):
        with patch("resume_ats.clients.llm_client.anthropic.AsyncAnthropic"):
            llm = LLMClient()
        llm._token_log = [("m", 100, 40), ("m", 30, 10)]

        summary = llm.get_token_summary()

        assert summary["input"] == 130
        assert summary["output"] == 50
        assert len(summary["calls"]) == 2
        assert llm.get_token_summary()["calls"] == []

    async def test_retries_then_succeeds(self):
        with patch("resume_ats.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls, \
                patch("asyncio.sleep", new=AsyncMock()):
            client = _patched_client(
                mock_cls,
                side_effect=[RuntimeError("overloaded"), _make_api_message("recovered")],
            )
            llm = LLMClient()
            result = await llm.generate("prompt")

        assert result.text == "recovered"
        assert client.messages.create.await_count == 2

    async def test_reraises_after_three_attempts(self):
        with patch("resume_ats.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls, \
                patch("asyncio.sleep", new=AsyncMock()):
            client = _patched_client(mock_cls, side_effect=RuntimeError("down"))
            llm = LLMClient()
            with pytest.raises(RuntimeError, match="down"):
                await llm.generate("prompt")

        assert client.messages.create.await_count == 3
        assert llm._token_log == []


class TestLLMClientGenerateJson:
    async def test_generate_json_parses_fenced_reply(self):
        with patch("resume_ats.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            _patched_client(
                mock_cls, return_value=_make_api_message('```json\n{"score": 81, "status": "good"}\n```')
            )
            llm = LLMClient()
            result = await llm.generate_json("score this")

        assert result == {"score": 81, "status": "good"}

    async def test_generate_json_raises_on_non_json_response(self):
        with patch("resume_ats.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            _patched_client(mock_cls, return_value=_make_api_message("this is plain text"))
            llm = LLMClient()
            with pytest.raises(ValueError):
                await llm.generate_json("score this")


class TestLLMClientTokenSummary:
    def test_get_token_summary_returns_totals_and_clears(self):
        with patch("resume_ats.clients.llm_client.anthropic.AsyncAnthropic"):
            llm = LLMClient()
        llm._token_log = [
            ("claude-haiku-4-5-20251001", 100, 50),
            ("claude-haiku-4-5-20251001", 200, 80),
        ]

        summary = llm.get_token_summary()
        assert summary["input"] == 300
        assert summary["output"] == 130
        assert len(summary["calls"]) == 2
        assert llm.get_token_summary() == {"input": 0, "output": 0, "calls": []}
