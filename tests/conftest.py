"""Pytest configuration and shared fixtures."""
import io
import json

import httpx
import pytest
from rich.console import Console

from llama_chat.config import Settings
from llama_chat.llm import OllamaLLM

ENDPOINT = "http://ollama.test/api/chat"


class FakeServer:
    """Scripted chat endpoint that records every request body it receives."""

    def __init__(self):
        self.requests: list[dict] = []
        self._replies: list = []

    def reply(self, content: str, role: str = "assistant", **extra) -> "FakeServer":
        body = {
            "model": "m1",
            "created_at": "2024-05-01T10:00:00.123456789Z",
            "message": {"role": role, "content": content},
            "done": True,
            **extra,
        }
        self._replies.append(httpx.Response(200, json=body))
        return self

    def respond(self, response: httpx.Response) -> "FakeServer":
        self._replies.append(response)
        return self

    def fail(self, exc: Exception | None = None) -> "FakeServer":
        self._replies.append(exc or httpx.ConnectError("connection refused"))
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        if not self._replies:
            raise AssertionError("unexpected request: no scripted reply left")
        nxt = self._replies.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def server():
    """Return a fresh scripted chat endpoint."""
    return FakeServer()


@pytest.fixture
def llm(server):
    """Return an Ollama client wired to the scripted endpoint."""
    return OllamaLLM(
        endpoint_url=ENDPOINT,
        model="m1",
        context_window_size=1000,
        transport=server.transport,
    )


@pytest.fixture
def settings():
    """Return the settings used throughout the chat scenarios."""
    return Settings(
        backend="ollama",
        endpoint_url=ENDPOINT,
        model_name="m1",
        context_window_size=1000,
        human_name="Bob",
        ai_name="Ava",
        system_prompt="be nice",
        timeout_s=5.0,
        log_dir=None,
    )


@pytest.fixture
def output():
    """Return a buffer that collects console output."""
    return io.StringIO()


@pytest.fixture
def console(output):
    """Return a plain console writing into the output buffer."""
    return Console(file=output, width=200, color_system=None, force_terminal=False)
