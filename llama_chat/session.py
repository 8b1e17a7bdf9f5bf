from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from llama_chat.config import Settings
from llama_chat.llm import InferenceError, LLMClient
from llama_chat.schema import ChatMessage, ChatResponse
from llama_chat.transcript import Transcript
from llama_chat.utils.run_log import RunLogPaths, append_event

EXIT_COMMAND = "exit"

Ask = Callable[[str], str]


class TurnState(str, Enum):
    IDLE = "idle"
    SENDING = "sending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class TurnResult:
    state: TurnState
    user_message: ChatMessage
    response: ChatResponse | None = None
    error: InferenceError | None = None

    @property
    def reply(self) -> ChatMessage | None:
        return self.response.message if self.response is not None else None


class ChatSession:
    """Drives one blocking request per user line against a single transcript.

    A failed turn leaves the user's message in place without an answer, so the
    next request carries the whole unanswered backlog.
    """

    def __init__(
        self,
        *,
        llm: LLMClient,
        transcript: Transcript,
        ai_name: str,
        console: Console | None = None,
        run_log: RunLogPaths | None = None,
    ) -> None:
        self.llm = llm
        self.transcript = transcript
        self.ai_name = ai_name
        self.console = console or Console()
        self.run_log = run_log
        self._state = TurnState.IDLE

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        llm: LLMClient,
        *,
        console: Console | None = None,
        run_log: RunLogPaths | None = None,
    ) -> ChatSession:
        transcript = Transcript.initialize(settings.system_prompt, settings.human_name, settings.ai_name)
        return cls(llm=llm, transcript=transcript, ai_name=settings.ai_name, console=console, run_log=run_log)

    @property
    def state(self) -> TurnState:
        return self._state

    def turn(self, line: str) -> TurnResult:
        user_msg = self.transcript.append_user(line)
        self._state = TurnState.SENDING
        try:
            response = self.llm.chat(self.transcript.messages)
        except InferenceError as e:
            self._state = TurnState.FAILED
            self.console.print(f"[red]Error sending message:[/red] {escape(str(e))}")
            self._log("turn_failed", {"error_type": type(e).__name__, "error": str(e)})
            self._state = TurnState.IDLE
            return TurnResult(TurnState.FAILED, user_msg, error=e)

        self._state = TurnState.SUCCEEDED
        self.transcript.append_assistant(response.message)
        self.console.print(
            Text.assemble((f"{self.ai_name}: ", "bold cyan"), response.message.content),
            soft_wrap=True,
        )
        self._log("turn_ok", {"model": response.model, "metrics": response.metrics()})
        self._state = TurnState.IDLE
        return TurnResult(TurnState.SUCCEEDED, user_msg, response=response)

    def run(self, lines: Iterable[str]) -> list[TurnResult]:
        results: list[TurnResult] = []
        self._log("start")
        for line in lines:
            if line == EXIT_COMMAND:
                break
            results.append(self.turn(line))
        self._log("end", {"turns": len(results)})
        return results

    def _log(self, event: str, extra: dict | None = None) -> None:
        if self.run_log is not None:
            append_event(self.run_log, event, self.transcript, extra=extra)


def read_lines(ask: Ask, prompt: str) -> Iterator[str]:
    """Yield user lines until end of input."""
    while True:
        try:
            yield ask(prompt)
        except EOFError:
            return


def prompt_overrides(settings: Settings, ask: Ask, console: Console | None = None) -> Settings:
    console = console or Console()
    console.print("Press 'Enter' to use default values from config or 'y' to enter custom values.")
    try:
        choice = ask("")
    except EOFError:
        return settings
    if choice.strip().lower() != "y":
        return settings

    answers: dict[str, str] = {}
    for key, label in (
        ("human_name", "Enter custom human name: "),
        ("ai_name", "Enter custom AI name: "),
        ("system_prompt", "Enter custom system prompt: "),
    ):
        try:
            answers[key] = ask(label)
        except EOFError:
            break
    return settings.with_overrides(**answers)
