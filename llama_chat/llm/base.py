from __future__ import annotations

from typing import Protocol

from llama_chat.schema import ChatMessage, ChatResponse


class LLMClient(Protocol):
    def chat(self, messages: list[ChatMessage]) -> ChatResponse:
        """Return the full decoded reply for the given transcript."""
        raise NotImplementedError

    def send(self, messages: list[ChatMessage]) -> ChatMessage:
        """Return only the reply message."""
        raise NotImplementedError
