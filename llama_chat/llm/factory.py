from __future__ import annotations

from llama_chat.config import ConfigError, Settings

from .base import LLMClient
from .mock import MockLLM
from .ollama import OllamaLLM


def build_llm(settings: Settings) -> LLMClient:
    backend = settings.backend
    if backend == "mock":
        return MockLLM()
    if backend == "ollama":
        return OllamaLLM(
            endpoint_url=settings.endpoint_url,
            model=settings.model_name,
            context_window_size=settings.context_window_size,
            timeout_s=settings.timeout_s,
        )
    raise ConfigError(f"unknown backend {backend!r}, expected: ollama|mock")
