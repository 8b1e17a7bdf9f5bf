from __future__ import annotations

from collections.abc import Iterator

from llama_chat.schema import ChatMessage, Role


def format_system_prompt(system_prompt: str, human_name: str, ai_name: str) -> str:
    return f"{system_prompt} Your name is {ai_name}. My name is {human_name}."


class Transcript:
    """Append-only conversation history, always headed by one system message.

    Nothing is ever trimmed locally: the context window size is only a hint
    for the server, which decides how much history to consider.
    """

    def __init__(self, system_message: ChatMessage) -> None:
        if system_message.role != Role.SYSTEM.value:
            raise ValueError(f"transcript must start with a system message, got role={system_message.role!r}")
        self._messages: list[ChatMessage] = [system_message]

    @classmethod
    def initialize(cls, system_prompt: str, human_name: str, ai_name: str) -> Transcript:
        return cls(ChatMessage.system(format_system_prompt(system_prompt, human_name, ai_name)))

    def append_user(self, content: str) -> ChatMessage:
        msg = ChatMessage.user(content)
        self._messages.append(msg)
        return msg

    def append_assistant(self, message: ChatMessage) -> ChatMessage:
        # Stored verbatim, whatever role the server reported.
        self._messages.append(message)
        return message

    @property
    def messages(self) -> list[ChatMessage]:
        """Snapshot of the history; mutating it does not affect the transcript."""
        return list(self._messages)

    @property
    def system_message(self) -> ChatMessage:
        return self._messages[0]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(list(self._messages))

    def __repr__(self) -> str:
        return f"Transcript(len={len(self._messages)})"
