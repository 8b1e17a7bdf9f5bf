from __future__ import annotations

import re
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

# Ollama reports nanosecond timestamps; datetime only holds microseconds.
_EXTRA_FRACTION = re.compile(r"(\.\d{6})\d+")


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """One entry of the conversation transcript."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Kept as plain text: replies are stored with whatever role the server sent.
    role: str
    content: str

    @classmethod
    def system(cls, content: str) -> ChatMessage:
        return cls(role=Role.SYSTEM.value, content=content)

    @classmethod
    def user(cls, content: str) -> ChatMessage:
        return cls(role=Role.USER.value, content=content)


class ChatRequest(BaseModel):
    """Body of a single POST to the chat endpoint, rebuilt on every turn."""

    model_config = ConfigDict(frozen=True)

    model: str
    messages: list[ChatMessage]
    stream: bool = False
    context_window_size: int


class ChatResponse(BaseModel):
    """Decoded reply. Only `message` is required; the rest is informational."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    message: ChatMessage
    model: str | None = None
    created_at: datetime | None = None
    done: bool | None = None

    total_duration: int | None = None
    load_duration: int | None = None
    prompt_eval_count: int | None = None
    prompt_eval_duration: int | None = None
    eval_count: int | None = None
    eval_duration: int | None = None

    @field_validator("created_at", mode="before")
    @classmethod
    def trim_fraction(cls, v):
        if isinstance(v, str):
            return _EXTRA_FRACTION.sub(r"\1", v)
        return v

    def metrics(self) -> dict[str, int]:
        """Timing and evaluation counters that the server actually reported."""
        fields = (
            "total_duration",
            "load_duration",
            "prompt_eval_count",
            "prompt_eval_duration",
            "eval_count",
            "eval_duration",
        )
        out: dict[str, int] = {}
        for name in fields:
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        return out

