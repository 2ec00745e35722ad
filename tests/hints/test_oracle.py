# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for the LLM-backed hint oracle."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from wildtrails.errors import OracleTimeout, OracleUnavailable
from wildtrails.hints import LLMHintOracle
from wildtrails.llm.base import CompletionResponse
from wildtrails.llm.config import GeminiConfig, LLMConfig
from wildtrails.llm.exceptions import ProviderRateLimitError, ProviderTimeoutError


def _provider(**kwargs) -> MagicMock:
    provider = MagicMock()
    provider.name = "fake"
    provider.complete = AsyncMock(**kwargs)
    provider.close = AsyncMock()
    return provider


@pytest.mark.asyncio
async def test_complete_builds_request_from_config():
    provider = _provider(return_value=CompletionResponse(text="North of the chapel.", model="gemini-2.5-flash"))
    oracle = LLMHintOracle(LLMConfig(), provider=provider)

    text = await oracle.complete("prompt", temperature=0.8, max_retries=2)

    assert text == "North of the chapel."
    request = provider.complete.call_args.args[0]
    assert request.model == "gemini-2.5-flash"
    assert request.temperature == 0.8
    assert request.max_retries == 2


@pytest.mark.asyncio
async def test_disabled_provider_is_unavailable():
    oracle = LLMHintOracle(LLMConfig(provider="none"))
    with pytest.raises(OracleUnavailable):
        await oracle.complete("prompt", temperature=0.8, max_retries=2)


@pytest.mark.asyncio
async def test_missing_api_key_is_unavailable():
    oracle = LLMHintOracle(LLMConfig(provider="gemini", gemini=GeminiConfig(api_key=None)))
    with pytest.raises(OracleUnavailable, match="API key"):
        await oracle.complete("prompt", temperature=0.8, max_retries=2)


@pytest.mark.asyncio
async def test_provider_error_is_unavailable():
    oracle = LLMHintOracle(LLMConfig(), provider=_provider(side_effect=ProviderRateLimitError("slow down")))
    with pytest.raises(OracleUnavailable) as exc_info:
        await oracle.complete("prompt", temperature=0.8, max_retries=2)
    assert not isinstance(exc_info.value, OracleTimeout)


@pytest.mark.asyncio
async def test_provider_timeout_is_oracle_timeout():
    oracle = LLMHintOracle(LLMConfig(), provider=_provider(side_effect=ProviderTimeoutError("timeout")))
    with pytest.raises(OracleTimeout):
        await oracle.complete("prompt", temperature=0.8, max_retries=2)


@pytest.mark.asyncio
async def test_slow_provider_hits_time_budget():
    async def _hang(request):
        await asyncio.sleep(5)

    oracle = LLMHintOracle(LLMConfig(), timeout_seconds=0.01, provider=_provider(side_effect=_hang))
    with pytest.raises(OracleTimeout):
        await oracle.complete("prompt", temperature=0.8, max_retries=0)


@pytest.mark.asyncio
async def test_close_releases_provider():
    provider = _provider()
    oracle = LLMHintOracle(LLMConfig(), provider=provider)
    await oracle.close()
    provider.close.assert_awaited_once()
