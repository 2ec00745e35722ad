"""Gemini provider using the Generative Language REST API."""

from typing import Any

from wildtrails.llm.base import CompletionRequest, CompletionResponse, TokenUsage
from wildtrails.llm.config import GeminiConfig
from wildtrails.llm.exceptions import InvalidResponseError
from wildtrails.llm.providers.http import HTTPProvider


class GeminiProvider(HTTPProvider):
    """Google Gemini via ``models/{model}:generateContent``."""

    name = "gemini"

    def __init__(self, config: GeminiConfig):
        super().__init__(config, config.base_url, headers={"x-goog-api-key": config.api_key or ""})
        self.health_path = f"/models/{config.model}"

    def _endpoint(self, request: CompletionRequest) -> str:
        return f"/models/{request.model}:generateContent"

    def _payload(self, request: CompletionRequest) -> dict[str, Any]:
        generation_config: dict[str, Any] = {"temperature": request.temperature}
        if request.max_tokens:
            generation_config["maxOutputTokens"] = request.max_tokens
        return {
            "contents": [{"role": "user", "parts": [{"text": request.prompt}]}],
            "generationConfig": generation_config,
        }

    def _parse(self, data: dict[str, Any], request: CompletionRequest) -> CompletionResponse:
        candidates = data.get("candidates") or []
        if not candidates:
            # Blocked prompts come back with promptFeedback and no candidates.
            raise InvalidResponseError("Gemini returned no candidates")
        candidate = candidates[0]
        parts = (candidate.get("content") or {}).get("parts") or []
        usage = None
        meta = data.get("usageMetadata")
        if meta:
            usage = TokenUsage(
                prompt_tokens=meta.get("promptTokenCount", 0),
                completion_tokens=meta.get("candidatesTokenCount", 0),
                total_tokens=meta.get("totalTokenCount", 0),
            )
        return CompletionResponse(
            text="".join(part.get("text", "") for part in parts),
            model=request.model,
            finish_reason=candidate.get("finishReason"),
            usage=usage,
        )
