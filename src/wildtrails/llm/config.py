"""Configuration models for LLM providers."""

from typing import Literal

from pydantic import BaseModel, Field

from wildtrails.defaults import HINT_MAX_RETRIES


class ProviderConfig(BaseModel):
    """Settings every provider shares: model, HTTP timeout and retry policy."""

    model: str
    timeout_seconds: float = 15.0
    max_retries: int = HINT_MAX_RETRIES
    retry_delay_seconds: float = 1.0
    retry_backoff_multiplier: float = 2.0


class OllamaConfig(ProviderConfig):
    """Local Ollama server."""

    base_url: str = "http://localhost:11434"
    model: str = "gemma3"
    timeout_seconds: float = 30.0  # local models are slow to load


class GeminiConfig(ProviderConfig):
    """Google Generative Language API."""

    api_key: str | None = None
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    model: str = "gemini-2.5-flash"


class LLMConfig(BaseModel):
    """Which provider backs the hint oracle.

    ``provider="none"`` disables the oracle; every hint then comes from the
    deterministic fallback.
    """

    provider: Literal["none", "ollama", "gemini"] = "gemini"
    ollama: OllamaConfig = Field(default_factory=OllamaConfig)
    gemini: GeminiConfig = Field(default_factory=GeminiConfig)

    @property
    def enabled(self) -> bool:
        return self.provider != "none"

    def active(self) -> ProviderConfig:
        """Config block of the selected provider.

        Raises:
            ValueError: If the oracle is disabled
        """
        if self.provider == "ollama":
            return self.ollama
        if self.provider == "gemini":
            return self.gemini
        raise ValueError("LLM provider is disabled (provider=none)")

    def get_model(self) -> str:
        return self.active().model
