"""
Error types raised by the chat client.

Only InitError is fatal. The others describe a single failed turn and are
reported by the REPL, which then waits for the next input.
"""

from typing import Optional


class ChatClientError(Exception):
    """Base class for chat client errors, with an optional remediation hint."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\n{self.hint}"
        return self.message


class InitError(ChatClientError):
    """The client could not be constructed."""


class TransportError(ChatClientError):
    """The request never produced an HTTP response (refused, timeout, DNS)."""


class ApiError(ChatClientError):
    """The server answered with a status other than 200."""

    def __init__(self, status_code: int, body: str, hint: Optional[str] = None):
        super().__init__(f"Ollama API request failed with HTTP {status_code}: {body}", hint)
        self.status_code = status_code
        self.body = body


class DecodeError(ChatClientError):
    """The response body was not valid JSON."""
