"""
Ollama chat client with separation of concerns.

This package splits the client into focused components: configuration,
conversation history, server connection, the chat engine, display and the
command-line REPL.
"""

from .chat_client import ChatClient
from .config import ChatConfig
from .errors import ChatClientError, InitError, TransportError, ApiError, DecodeError
from .cli import main

__all__ = [
    'ChatClient', 'ChatConfig', 'main',
    'ChatClientError', 'InitError', 'TransportError', 'ApiError', 'DecodeError',
]
