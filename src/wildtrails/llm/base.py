# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Provider protocol and the request/response values it exchanges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from wildtrails.defaults import HINT_TEMPERATURE


@dataclass
class TokenUsage:
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass
class CompletionRequest:
    """One single-shot prompt for a hint."""

    prompt: str
    model: str
    temperature: float = HINT_TEMPERATURE
    max_tokens: int | None = None
    max_retries: int | None = None  # None = provider config default


@dataclass
class CompletionResponse:
    text: str
    model: str
    finish_reason: str | None = None
    usage: TokenUsage | None = None


class LLMProvider(Protocol):
    """Text generator behind the hint oracle.

    Hints only need single-shot completions, so that is the whole surface.
    """

    name: str

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Generate text for *request*.

        Raises:
            ProviderError: On any provider failure
        """
        ...

    async def health_check(self) -> bool:
        """True if the provider answers and the model exists."""
        ...

    async def close(self) -> None:
        """Release the HTTP client."""
        ...
