# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Provider factory."""

from wildtrails.llm.base import LLMProvider
from wildtrails.llm.config import LLMConfig
from wildtrails.llm.exceptions import ProviderAuthError, ProviderError


def get_provider(config: LLMConfig) -> LLMProvider:
    """Create the provider selected by *config*.

    Raises:
        ProviderAuthError: If Gemini is selected without an API key
        ProviderError: If the oracle is disabled
    """
    if config.provider == "ollama":
        from wildtrails.llm.providers.ollama import OllamaProvider

        return OllamaProvider(config.ollama)

    if config.provider == "gemini":
        if not config.gemini.api_key:
            raise ProviderAuthError("Gemini API key not configured (WILDTRAILS_LLM__GEMINI__API_KEY)")

        from wildtrails.llm.providers.gemini import GeminiProvider

        return GeminiProvider(config.gemini)

    raise ProviderError(f"No hint provider configured (provider={config.provider})")


__all__ = ["get_provider"]
