from __future__ import annotations

from llama_chat.schema import ChatMessage, ChatResponse, Role


class MockLLM:
    """Deterministic offline backend: useful to try the chat loop without a server."""

    model = "mock"

    def chat(self, messages: list[ChatMessage]) -> ChatResponse:
        last_user = next((m.content for m in reversed(messages) if m.role == Role.USER.value), "")
        return ChatResponse(
            model=self.model,
            message=ChatMessage(role=Role.ASSISTANT.value, content=f"[mock] you said: {last_user}"),
            done=True,
        )

    def send(self, messages: list[ChatMessage]) -> ChatMessage:
        return self.chat(messages).message
