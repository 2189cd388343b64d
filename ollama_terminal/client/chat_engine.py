"""
Core chat functionality: one user turn in, one assistant reply out.

This module talks to Ollama's /api/chat endpoint. The same request shape is
used for both delivery modes; only the ``stream`` field and the decoding of
the body differ:

    streaming=True   body is newline-delimited JSON chunks
                     {"message": {"content": "Hel"}, "done": false}
                     {"message": {"content": "lo"}, "done": false}
                     {"done": true}
    streaming=False  body is a single JSON object
                     {"message": {"role": "assistant", "content": "Hello"}}

A turn either succeeds, in which case the reply is appended to the history,
or raises one of TransportError, ApiError or DecodeError and leaves the
history without an assistant reply.
"""

import json
import logging
import requests
from typing import Any, Optional

from .config import ChatConfig
from .errors import TransportError, ApiError, DecodeError
from .history_manager import HistoryManager
from .response_handler import NullDisplay


logger = logging.getLogger(__name__)

STREAM_PREFIX = "data: "
STREAM_DONE = "[DONE]"


def _truncate(text: str, limit: int = 500) -> str:
    return f"{text[:limit]}{'...' if len(text) > limit else ''}"


def extract_content(chunk: Any) -> str:
    """Return ``chunk["message"]["content"]``, or "" when it is absent."""
    if not isinstance(chunk, dict):
        return ""
    message = chunk.get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return content if isinstance(content, str) else ""


class ChatEngine:
    """Sends the conversation to Ollama and records the reply.

    Dependencies:
    - HistoryManager: the conversation sent on every request
    - display: any object with ``thinking()`` and ``notice()``
    """

    def __init__(self, config: ChatConfig, history_manager: HistoryManager,
                 display=None, session: Optional[requests.Session] = None):
        self.config = config
        self.history_manager = history_manager
        self.display = display if display is not None else NullDisplay()
        self.session = session if session is not None else requests.Session()

    @property
    def chat_url(self) -> str:
        return f"{self.config.base_url}/api/chat"

    def send_turn(self, message: str) -> str:
        """Send a user message and return the assistant's reply.

        Args:
            message: User's chat message

        Returns:
            str: Assistant's reply, possibly empty

        Raises:
            TransportError: The server could not be reached
            ApiError: The server answered with a non-200 status
            DecodeError: A non-streaming body was not valid JSON
        """
        self.history_manager.append_user(message)
        payload = self.history_manager.to_wire_payload(self.config.model, self.config.stream)

        if self.config.debug:
            logger.debug("=== CHAT PROMPT ===")
            logger.debug("Model: %s, Stream: %s", self.config.model, self.config.stream)
            for msg in payload["messages"]:
                logger.debug("%s: %s", msg["role"].upper(), _truncate(msg["content"]))

        try:
            with self.display.thinking():
                response = self.session.post(
                    self.chat_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                    timeout=self.config.chat_timeout,
                )
        except requests.exceptions.RequestException as e:
            raise TransportError(
                f"HTTP request failed: {e}",
                hint="Make sure Ollama is running: ollama serve",
            ) from e

        if response.status_code != 200:
            model = self.config.model
            raise ApiError(
                response.status_code,
                response.text,
                hint=f"Make sure the model '{model}' is installed: ollama pull {model}",
            )

        if self.config.stream:
            reply = self.decode_streaming(response.text)
        else:
            reply = self.decode_regular(response.text)

        if self.config.debug:
            logger.debug("=== CHAT RESPONSE ===")
            logger.debug("Response: %s", _truncate(reply))

        self.history_manager.append_assistant(reply)
        return reply

    def decode_streaming(self, body: str) -> str:
        """Join the content of every newline-delimited chunk in ``body``.

        A ``data: `` prefix is stripped, blank lines and ``[DONE]`` are
        skipped, and a line that is not JSON is reported and skipped without
        losing the chunks after it.
        """
        parts = []
        # Only "\n" separates chunks; U+0085 and U+2028 are legal inside JSON strings
        for line in body.split("\n"):
            line = line.rstrip("\r")
            if line.startswith(STREAM_PREFIX):
                line = line[len(STREAM_PREFIX):]
            if line == "" or line == STREAM_DONE:
                continue

            try:
                chunk = json.loads(line)
            except json.JSONDecodeError as e:
                logger.warning("Stream JSON parse error: %s", e)
                self.display.notice(f"Stream JSON parse error: {e}")
                continue
            parts.append(extract_content(chunk))
        return "".join(parts)

    def decode_regular(self, body: str) -> str:
        """Return the content of a single JSON response object."""
        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise DecodeError(f"JSON parsing error: {e}") from e
        return extract_content(data)
