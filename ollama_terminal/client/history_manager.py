"""
Conversation history management.

The history is the ordered list of messages sent to Ollama on every turn.
It always starts with the system prompt; everything after it is appended
in turn order and only ever removed all at once by reset().
"""

from dataclasses import dataclass, asdict
from typing import List, Dict, Any

from .config import ChatConfig


SYSTEM_PROMPT = (
    "You are a helpful terminal assistant. Provide clear, concise responses "
    "focused on programming and technical help."
)

ROLE_SYSTEM = "system"
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single chat message."""
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


class HistoryManager:
    """Manages conversation history."""

    def __init__(self, config: ChatConfig):
        self.config = config
        self._messages: List[Message] = []
        self.reset()

    def append_user(self, text: str) -> None:
        """Add a user message to the conversation history."""
        self._messages.append(Message(ROLE_USER, text))

    def append_assistant(self, text: str) -> None:
        """Add an assistant reply to the conversation history."""
        self._messages.append(Message(ROLE_ASSISTANT, text))

    def reset(self) -> None:
        """Drop every message and start over from the system prompt."""
        self._messages = [Message(ROLE_SYSTEM, SYSTEM_PROMPT)]

    def turn_count(self) -> int:
        """Number of messages, not counting the system prompt."""
        return len(self._messages) - 1

    def __len__(self) -> int:
        return self.turn_count()

    def to_wire_payload(self, model: str, streaming: bool) -> Dict[str, Any]:
        """Build the request body for Ollama's /api/chat endpoint.

        Args:
            model: Name of the model that should answer
            streaming: Whether Ollama should send newline-delimited chunks

        Returns:
            Dict with ``model``, the full ``messages`` list (system prompt
            included) and ``stream``.
        """
        return {
            "model": model,
            "messages": [msg.to_dict() for msg in self._messages],
            "stream": streaming,
        }

    def get_history(self) -> List[Dict[str, str]]:
        """Get the current conversation history, system prompt included."""
        return [msg.to_dict() for msg in self._messages]

    def conversation(self) -> List[Message]:
        """Messages the user actually exchanged, without the system prompt."""
        return [msg for msg in self._messages if msg.role != ROLE_SYSTEM]
