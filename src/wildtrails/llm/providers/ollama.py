"""Ollama provider: local models through ``/api/generate``."""

from typing import Any

from wildtrails.llm.base import CompletionRequest, CompletionResponse, TokenUsage
from wildtrails.llm.config import OllamaConfig
from wildtrails.llm.providers.http import HTTPProvider


class OllamaProvider(HTTPProvider):
    """Non-streaming completions from a local Ollama server."""

    name = "ollama"
    health_path = "/api/tags"

    def __init__(self, config: OllamaConfig):
        super().__init__(config, config.base_url)

    def _endpoint(self, request: CompletionRequest) -> str:
        return "/api/generate"

    def _payload(self, request: CompletionRequest) -> dict[str, Any]:
        options: dict[str, Any] = {"temperature": request.temperature}
        if request.max_tokens:
            options["num_predict"] = request.max_tokens
        return {"model": request.model, "prompt": request.prompt, "stream": False, "options": options}

    def _parse(self, data: dict[str, Any], request: CompletionRequest) -> CompletionResponse:
        usage = None
        if "prompt_eval_count" in data and "eval_count" in data:
            usage = TokenUsage(
                prompt_tokens=data["prompt_eval_count"],
                completion_tokens=data["eval_count"],
                total_tokens=data["prompt_eval_count"] + data["eval_count"],
            )
        return CompletionResponse(
            text=data.get("response", ""),
            model=request.model,
            finish_reason=data.get("done_reason"),
            usage=usage,
        )
