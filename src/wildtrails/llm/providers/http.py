# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared plumbing for JSON-over-HTTP providers."""

from __future__ import annotations

from typing import Any

import httpx

from wildtrails.llm.base import CompletionRequest, CompletionResponse
from wildtrails.llm.config import ProviderConfig
from wildtrails.llm.exceptions import (
    RETRYABLE_ERRORS,
    InvalidResponseError,
    ModelNotFoundError,
    ProviderAuthError,
    ProviderConnectionError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)
from wildtrails.logging import get_logger
from wildtrails.retry import retry_with_backoff

logger = get_logger(__name__)


class HTTPProvider:
    """Base class: one POST per completion, HTTP errors mapped to provider errors.

    Subclasses define the endpoint, the request body and the response parser.
    """

    name = "http"
    health_path = "/"

    def __init__(self, config: ProviderConfig, base_url: str, headers: dict[str, str] | None = None):
        self.config = config
        self.base_url = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(config.timeout_seconds),
            headers=headers or {},
        )

    def _endpoint(self, request: CompletionRequest) -> str:
        raise NotImplementedError

    def _payload(self, request: CompletionRequest) -> dict[str, Any]:
        raise NotImplementedError

    def _parse(self, data: dict[str, Any], request: CompletionRequest) -> CompletionResponse:
        raise NotImplementedError

    async def _post_once(self, request: CompletionRequest) -> CompletionResponse:
        try:
            response = await self._client.post(self._endpoint(request), json=self._payload(request))
            response.raise_for_status()
            data = response.json()
        except httpx.ConnectError as e:
            raise ProviderConnectionError(f"Failed to connect to {self.name} at {self.base_url}") from e
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(f"{self.name} timed out after {self.config.timeout_seconds}s") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 429:
                raise ProviderRateLimitError(f"{self.name} rate limit exceeded") from e
            if status in (401, 403):
                raise ProviderAuthError(f"{self.name} rejected the credentials") from e
            if status == 404:
                raise ModelNotFoundError(f"Model '{request.model}' not found on {self.name}") from e
            raise InvalidResponseError(f"{self.name} returned HTTP {status}") from e
        except ValueError as e:
            raise InvalidResponseError(f"{self.name} returned malformed JSON") from e
        return self._parse(data, request)

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Generate a completion, retrying timeouts and rate limits.

        Raises:
            ProviderError: When the call fails for good
        """
        retries = self.config.max_retries if request.max_retries is None else request.max_retries
        return await retry_with_backoff(
            lambda: self._post_once(request),
            retryable=RETRYABLE_ERRORS,
            operation=f"{self.name}_completion",
            max_retries=retries,
            initial_delay=self.config.retry_delay_seconds,
            backoff_multiplier=self.config.retry_backoff_multiplier,
        )

    async def health_check(self) -> bool:
        try:
            response = await self._client.get(self.health_path)
            return response.status_code == 200
        except httpx.HTTPError as e:
            logger.warning("provider_health_check_failed", provider=self.name, error=str(e))
            return False

    async def close(self) -> None:
        await self._client.aclose()
