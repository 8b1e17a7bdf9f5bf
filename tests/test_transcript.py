"""Unit tests for the transcript."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from llama_chat.schema import ChatMessage, Role
from llama_chat.transcript import Transcript, format_system_prompt


class TestInitialize:
    """Tests for building the opening system message."""

    def test_system_prompt_with_names(self):
        """Test the exact wording of the system message."""
        transcript = Transcript.initialize("be nice", "Bob", "Ava")

        assert transcript.messages == [
            ChatMessage(role="system", content="be nice Your name is Ava. My name is Bob.")
        ]

    def test_format_system_prompt(self):
        """Test formatting with empty prompt text."""
        assert format_system_prompt("", "Bob", "Ava") == " Your name is Ava. My name is Bob."

    @given(st.text(), st.text(), st.text())
    def test_first_message_is_always_system(self, prompt: str, human: str, ai: str):
        """Property test: any prompt and names yield one leading system message."""
        transcript = Transcript.initialize(prompt, human, ai)

        assert len(transcript) == 1
        assert transcript.system_message.role == Role.SYSTEM.value

    def test_rejects_non_system_head(self):
        """Test that a transcript cannot start with a user message."""
        with pytest.raises(ValueError):
            Transcript(ChatMessage.user("hello"))


class TestAppend:
    """Tests for appending messages."""

    def test_append_user_and_assistant_in_order(self):
        """Test that messages keep their append order."""
        transcript = Transcript.initialize("be nice", "Bob", "Ava")
        transcript.append_user("hello")
        transcript.append_assistant(ChatMessage(role="assistant", content="hi"))

        assert [(m.role, m.content) for m in transcript] == [
            ("system", "be nice Your name is Ava. My name is Bob."),
            ("user", "hello"),
            ("assistant", "hi"),
        ]

    def test_empty_user_message_is_kept(self):
        """Test that an empty line is still a message."""
        transcript = Transcript.initialize("p", "h", "a")
        msg = transcript.append_user("")

        assert msg == ChatMessage(role="user", content="")
        assert len(transcript) == 2

    def test_assistant_role_is_not_revalidated(self):
        """Test that a reply is stored with whatever role the server sent."""
        transcript = Transcript.initialize("p", "h", "a")
        transcript.append_assistant(ChatMessage(role="tool", content="odd"))

        assert transcript.messages[-1].role == "tool"

    def test_messages_is_a_snapshot(self):
        """Test that callers cannot mutate the transcript through a snapshot."""
        transcript = Transcript.initialize("p", "h", "a")
        snapshot = transcript.messages
        snapshot.append(ChatMessage.user("sneaky"))

        assert len(transcript) == 1

    def test_messages_are_immutable(self):
        """Test that stored messages cannot be edited in place."""
        transcript = Transcript.initialize("p", "h", "a")

        with pytest.raises(ValueError):
            transcript.system_message.content = "changed"  # type: ignore[misc]

    @given(st.lists(st.tuples(st.text(), st.text()), max_size=30))
    def test_no_local_trimming(self, exchanges: list[tuple[str, str]]):
        """Property test: history grows by two per exchange and is never trimmed."""
        transcript = Transcript.initialize("p", "h", "a")
        for question, answer in exchanges:
            transcript.append_user(question)
            transcript.append_assistant(ChatMessage(role="assistant", content=answer))

        assert len(transcript) == 1 + 2 * len(exchanges)
        assert transcript.messages[0].role == "system"
