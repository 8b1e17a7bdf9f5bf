from __future__ import annotations

import json

import httpx
from pydantic import ValidationError

from llama_chat.schema import ChatMessage, ChatRequest, ChatResponse

from .errors import DecodeError, TransportError


class OllamaLLM:
    """Blocking client for an Ollama-style `/api/chat` endpoint.

    One POST per call, non-streaming, no retries. Network failures surface as
    `TransportError`; anything that is not a decodable reply as `DecodeError`.
    """

    def __init__(
        self,
        *,
        endpoint_url: str,
        model: str,
        context_window_size: int,
        timeout_s: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.endpoint_url = endpoint_url
        self.model = model
        self.context_window_size = context_window_size
        self.timeout_s = timeout_s
        self._transport = transport

    def build_request(self, messages: list[ChatMessage]) -> ChatRequest:
        return ChatRequest(
            model=self.model,
            messages=list(messages),
            stream=False,
            context_window_size=self.context_window_size,
        )

    def chat(self, messages: list[ChatMessage]) -> ChatResponse:
        payload = self.build_request(messages).model_dump(mode="json")
        try:
            with httpx.Client(timeout=self.timeout_s, transport=self._transport) as client:
                r = client.post(self.endpoint_url, json=payload)
                body = r.text
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(self.endpoint_url, e) from e
        return decode_response(body, status_code=r.status_code)

    def send(self, messages: list[ChatMessage]) -> ChatMessage:
        # `done` is not checked: with stream=false one body is the whole reply.
        return self.chat(messages).message


def decode_response(body: str, *, status_code: int = 200) -> ChatResponse:
    bad_status = status_code if not 200 <= status_code < 300 else None
    try:
        return ChatResponse.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(_describe(body, e), status_code=bad_status, body=body) from e


def _describe(body: str, err: ValidationError) -> str:
    # Ollama reports failures as {"error": "..."}.
    try:
        data = json.loads(body)
    except ValueError:
        data = None
    if isinstance(data, dict) and isinstance(data.get("error"), str):
        return f"server error: {data['error']}"
    first = err.errors()[0] if err.errors() else {}
    if first.get("type") == "json_invalid":
        return "response body is not valid JSON"
    loc = ".".join(str(p) for p in first.get("loc", ())) or "body"
    return f"malformed reply at {loc}: {first.get('msg', 'invalid')}"
