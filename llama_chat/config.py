from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import load_dotenv

BACKENDS = ("ollama", "mock")

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."


class ConfigError(ValueError):
    """Raised when the session configuration cannot be loaded."""


@dataclass(frozen=True)
class Settings:
    backend: str

    endpoint_url: str
    model_name: str
    context_window_size: int

    human_name: str
    ai_name: str
    system_prompt: str

    timeout_s: float
    log_dir: Path | None

    def with_overrides(
        self,
        *,
        human_name: str | None = None,
        ai_name: str | None = None,
        system_prompt: str | None = None,
    ) -> Settings:
        # Settings stay read-only; overrides produce a new value.
        changes: dict[str, str] = {}
        if human_name is not None:
            changes["human_name"] = human_name
        if ai_name is not None:
            changes["ai_name"] = ai_name
        if system_prompt is not None:
            changes["system_prompt"] = system_prompt
        return replace(self, **changes)


def load_settings() -> Settings:
    # Allow users to keep their preferences in a local `.env`.
    load_dotenv(override=False)

    def getenv(key: str, default: str | None = None) -> str | None:
        v = os.getenv(key)
        if v is None or v == "":
            return default
        return v

    backend = (getenv("LLAMA_CHAT_BACKEND", "ollama") or "ollama").strip().lower()
    if backend not in BACKENDS:
        raise ConfigError(f"unknown LLAMA_CHAT_BACKEND={backend!r}, expected one of: {'|'.join(BACKENDS)}")

    endpoint_url = (getenv("LLAMA_CHAT_URL", "http://localhost:11434/api/chat") or "").strip()
    model_name = (getenv("LLAMA_CHAT_MODEL", "llama3") or "").strip()
    if not endpoint_url:
        raise ConfigError("LLAMA_CHAT_URL must not be empty")
    if not model_name:
        raise ConfigError("LLAMA_CHAT_MODEL must not be empty")

    context_window_size = _parse_int("LLAMA_CHAT_CONTEXT_WINDOW", getenv("LLAMA_CHAT_CONTEXT_WINDOW", "2048"))
    if context_window_size <= 0:
        raise ConfigError(f"LLAMA_CHAT_CONTEXT_WINDOW must be positive, got {context_window_size}")

    timeout_s = _parse_float("LLAMA_CHAT_TIMEOUT", getenv("LLAMA_CHAT_TIMEOUT", "120"))
    if timeout_s <= 0:
        raise ConfigError(f"LLAMA_CHAT_TIMEOUT must be positive, got {timeout_s}")

    raw_log_dir = getenv("LLAMA_CHAT_LOG_DIR", None)
    log_dir = Path(raw_log_dir).resolve() if raw_log_dir else None

    return Settings(
        backend=backend,
        endpoint_url=endpoint_url,
        model_name=model_name,
        context_window_size=context_window_size,
        human_name=getenv("LLAMA_CHAT_HUMAN_NAME", "Human") or "Human",
        ai_name=getenv("LLAMA_CHAT_AI_NAME", "Llama") or "Llama",
        system_prompt=getenv("LLAMA_CHAT_SYSTEM_PROMPT", DEFAULT_SYSTEM_PROMPT) or DEFAULT_SYSTEM_PROMPT,
        timeout_s=timeout_s,
        log_dir=log_dir,
    )


def _parse_int(key: str, raw: str | None) -> int:
    try:
        return int(raw or "")
    except ValueError as e:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from e


def _parse_float(key: str, raw: str | None) -> float:
    try:
        return float(raw or "")
    except ValueError as e:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from e
