from __future__ import annotations


class InferenceError(Exception):
    """A turn could not produce a reply. Recoverable: the chat loop keeps going."""


class TransportError(InferenceError):
    """The request never completed (refused, timed out, DNS or TLS failure)."""

    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(f"request to {url} failed: {cause}")
        self.url = url
        self.cause = cause


class DecodeError(InferenceError):
    """The server answered, but not with a usable chat reply."""

    def __init__(self, reason: str, *, status_code: int | None = None, body: str = "") -> None:
        detail = f"unexpected response (HTTP {status_code}): {reason}" if status_code else reason
        super().__init__(detail)
        self.reason = reason
        self.status_code = status_code
        self.body = body
