"""
Main chat client that orchestrates all components.
"""

import logging
from typing import Callable, List, Optional

import requests
from rich.console import Console

from .config import ChatConfig
from .errors import InitError
from .connection_manager import ConnectionManager
from .history_manager import HistoryManager
from .response_handler import ResponseHandler
from .ui_manager import UIManager
from .chat_engine import ChatEngine


logger = logging.getLogger(__name__)


class ChatClient:
    """Terminal chat client for a local Ollama server."""

    def __init__(self, config: ChatConfig, console: Optional[Console] = None,
                 session: Optional[requests.Session] = None):
        self.config = config

        # Any failure while wiring the components is fatal for the CLI
        try:
            console = console if console is not None else Console()
            session = session if session is not None else requests.Session()

            self.connection_manager = ConnectionManager(config, session=session)
            self.history_manager = HistoryManager(config)
            self.response_handler = ResponseHandler(config, console=console)
            self.ui_manager = UIManager(config, console=console)
            self.chat_engine = ChatEngine(config, self.history_manager,
                                          display=self.response_handler, session=session)
        except Exception as e:
            raise InitError(f"Failed to initialize Ollama assistant: {e}") from e

    def chat(self, message: str) -> str:
        """Send a chat message, display the reply and return it."""
        reply = self.chat_engine.send_turn(message)
        self.response_handler.display_response(reply)
        return reply

    def check_connection(self) -> bool:
        """Check whether the Ollama server is reachable."""
        return self.connection_manager.check_connection()

    def get_available_models(self) -> List[str]:
        """Get available models from the server."""
        return self.connection_manager.list_models()

    def set_model(self, model: str) -> None:
        """Set the model to use. The conversation is kept as is."""
        logger.debug("Switching model from %s to %s", self.config.model, model)
        self.config.model = model

    def clear_history(self) -> None:
        """Clear conversation history."""
        self.history_manager.reset()
        self.ui_manager.show_success("Conversation history cleared.")

    def show_history(self) -> None:
        """Show conversation history."""
        self.ui_manager.show_history(self.history_manager.conversation())

    def show_models(self) -> None:
        """List installed models, marking the active one."""
        self.ui_manager.show_info("Fetching available models...")
        models = self.get_available_models()
        if models:
            self.ui_manager.show_models(models)
        else:
            self.ui_manager.show_no_models()
        self.ui_manager.console.print()

    def change_model(self, name: Optional[str] = None,
                     ask: Callable[[str], str] = input) -> None:
        """Switch the active model.

        With ``name`` the switch is immediate. Otherwise the installed models
        are listed and ``ask`` is used to read a 1-based choice; an empty
        answer cancels.
        """
        if name:
            self.set_model(name)
            self.ui_manager.show_model_changed()
            return

        models = self.get_available_models()
        if not models:
            self.ui_manager.show_no_models()
            return

        self.ui_manager.show_models(models)
        answer = ask("Enter model number (or press Enter to cancel): ").strip()
        if not answer:
            return

        try:
            choice = int(answer)
        except ValueError:
            self.ui_manager.show_error("Invalid input!")
            return

        if 1 <= choice <= len(models):
            self.set_model(models[choice - 1])
            self.ui_manager.show_model_changed()
        else:
            self.ui_manager.show_error("Invalid choice!")

    def show_status(self) -> None:
        """Run a connection check and report server, model and streaming state."""
        self.ui_manager.show_info("Checking Ollama connection...")
        self.ui_manager.show_status(self.check_connection())

    def toggle_streaming(self) -> None:
        """Flip the streaming flag used for the next request."""
        self.config.stream = not self.config.stream
        self.ui_manager.show_streaming_toggled()
