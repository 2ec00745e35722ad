# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for LLM configuration and provider factory."""

import pytest

from wildtrails.llm.config import GeminiConfig, LLMConfig, OllamaConfig
from wildtrails.llm.exceptions import ProviderAuthError, ProviderError
from wildtrails.llm.providers import get_provider
from wildtrails.llm.providers.gemini import GeminiProvider
from wildtrails.llm.providers.ollama import OllamaProvider


def test_default_config():
    config = LLMConfig()
    assert config.provider == "gemini"
    assert config.get_model() == "gemini-2.5-flash"
    assert config.ollama.model == "gemma3"


def test_get_model_follows_provider():
    assert LLMConfig(provider="ollama", ollama=OllamaConfig(model="llama3")).get_model() == "llama3"
    with pytest.raises(ValueError):
        LLMConfig(provider="none").get_model()


@pytest.mark.asyncio
async def test_get_provider_ollama():
    provider = get_provider(LLMConfig(provider="ollama"))
    assert isinstance(provider, OllamaProvider)
    await provider.close()


@pytest.mark.asyncio
async def test_get_provider_gemini_with_key():
    provider = get_provider(LLMConfig(provider="gemini", gemini=GeminiConfig(api_key="k")))
    assert isinstance(provider, GeminiProvider)
    await provider.close()


def test_get_provider_gemini_without_key():
    with pytest.raises(ProviderAuthError):
        get_provider(LLMConfig(provider="gemini"))


def test_get_provider_disabled():
    with pytest.raises(ProviderError):
        get_provider(LLMConfig(provider="none"))
