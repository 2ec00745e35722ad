# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Errors raised by LLM providers.

Every provider error is an OracleUnavailable, so the hint synthesizer's
fallback covers them without a translation layer. Timeouts are also
OracleTimeout.
"""

from wildtrails.errors import OracleTimeout, OracleUnavailable


class ProviderError(OracleUnavailable):
    """An LLM provider call failed."""

    pass


class ProviderConnectionError(ProviderError):
    """Provider endpoint could not be reached."""

    pass


class ProviderTimeoutError(ProviderError, OracleTimeout):
    """Provider did not answer within its HTTP timeout."""

    pass


class ProviderRateLimitError(ProviderError):
    """Provider quota or rate limit hit (HTTP 429)."""

    pass


class ProviderAuthError(ProviderError):
    """API key missing or rejected."""

    pass


class ModelNotFoundError(ProviderError):
    """Configured model does not exist on the provider."""

    pass


class InvalidResponseError(ProviderError):
    """Provider answered with an error status or an unusable body."""

    pass


# Transient failures; everything else fails the hint immediately.
RETRYABLE_ERRORS: tuple[type[Exception], ...] = (ProviderTimeoutError, ProviderRateLimitError)
