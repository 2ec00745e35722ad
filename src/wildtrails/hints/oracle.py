# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Hint oracle: the text generator behind natural-language hints."""

from __future__ import annotations

import asyncio
from typing import Protocol

from wildtrails.defaults import HINT_TIMEOUT_SECONDS
from wildtrails.errors import OracleTimeout, OracleUnavailable
from wildtrails.llm.base import CompletionRequest, LLMProvider
from wildtrails.llm.config import LLMConfig
from wildtrails.logging import get_logger

logger = get_logger(__name__)


class HintOracle(Protocol):
    """Turns a prompt into hint prose. May fail or time out."""

    async def complete(self, prompt: str, temperature: float, max_retries: int) -> str:
        """Generate text for *prompt*.

        Raises:
            OracleUnavailable: On any failure
            OracleTimeout: When the call exceeds its time budget
        """
        ...


class LLMHintOracle:
    """Hint oracle backed by the configured LLM provider.

    The provider is created on first use. A provider that cannot be created
    (e.g. missing API key) makes every call raise OracleUnavailable.
    """

    def __init__(
        self,
        config: LLMConfig,
        timeout_seconds: float = HINT_TIMEOUT_SECONDS,
        provider: LLMProvider | None = None,
    ):
        self.config = config
        self.timeout_seconds = timeout_seconds
        self._provider = provider

    def _get_provider(self) -> LLMProvider:
        if self._provider is None:
            from wildtrails.llm.providers import get_provider

            self._provider = get_provider(self.config)
            logger.info("llm_provider_initialized", provider=self.config.provider, name=self._provider.name)
        return self._provider

    async def complete(self, prompt: str, temperature: float, max_retries: int) -> str:
        if not self.config.enabled:
            raise OracleUnavailable("Hint oracle disabled")
        provider = self._get_provider()
        request = CompletionRequest(
            prompt=prompt,
            model=self.config.get_model(),
            temperature=temperature,
            max_retries=max_retries,
        )
        try:
            response = await asyncio.wait_for(provider.complete(request), timeout=self.timeout_seconds)
        except TimeoutError as e:
            raise OracleTimeout(f"Hint oracle timed out after {self.timeout_seconds}s") from e
        return response.text

    async def close(self) -> None:
        if self._provider is not None:
            await self._provider.close()
            logger.info("llm_provider_closed", provider=self.config.provider)
            self._provider = None
