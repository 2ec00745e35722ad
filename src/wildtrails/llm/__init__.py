# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""LLM providers behind the hint oracle.

Supports a local Ollama model and Google Gemini. Select one with
``WILDTRAILS_LLM__PROVIDER`` (``none`` disables natural-language hints).
"""

from wildtrails.llm.base import CompletionRequest, CompletionResponse, LLMProvider, TokenUsage
from wildtrails.llm.config import GeminiConfig, LLMConfig, OllamaConfig
from wildtrails.llm.exceptions import (
    InvalidResponseError,
    ModelNotFoundError,
    ProviderAuthError,
    ProviderConnectionError,
    ProviderError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)

__all__ = [
    "CompletionRequest",
    "CompletionResponse",
    "GeminiConfig",
    "InvalidResponseError",
    "LLMConfig",
    "LLMProvider",
    "ModelNotFoundError",
    "OllamaConfig",
    "ProviderAuthError",
    "ProviderConnectionError",
    "ProviderError",
    "ProviderRateLimitError",
    "ProviderTimeoutError",
    "TokenUsage",
]
