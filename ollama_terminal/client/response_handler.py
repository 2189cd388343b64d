"""
Response handling for displaying assistant replies.

The chat engine never prints. It talks to a display sink that offers two
hooks, ``thinking()`` and ``notice()``. ResponseHandler is the terminal
implementation built on rich; NullDisplay is the silent one used when no
terminal is attached (tests, scripting).
"""

import time
from contextlib import contextmanager
from typing import Iterator, Optional
from rich.console import Console
from rich.text import Text

from .config import ChatConfig


# Multipliers applied to the base typing delay after a character
PAUSE_FACTORS = {
    ".": 4, "!": 4, "?": 4,
    ",": 2, ";": 2, ":": 2,
    "\n": 3,
    " ": 0.5,
}


def char_delay(char: str, base: float) -> float:
    """Seconds to wait after typing ``char``."""
    return base * PAUSE_FACTORS.get(char, 1)


class NullDisplay:
    """Display sink that shows nothing."""

    @contextmanager
    def thinking(self) -> Iterator[None]:
        yield

    def notice(self, message: str) -> None:
        pass


class ResponseHandler:
    """Displays assistant replies and the progress indicator."""

    def __init__(self, config: ChatConfig, console: Optional[Console] = None):
        self.config = config
        self.console = console if console is not None else Console()

    @contextmanager
    def thinking(self) -> Iterator[None]:
        """Show a spinner while the blocking request is in flight."""
        with self.console.status("[bold yellow]Thinking...", spinner="dots"):
            yield

    def notice(self, message: str) -> None:
        """Show a non-fatal diagnostic, e.g. a skipped stream chunk."""
        self.console.print(Text(f"⚠ {message}", style="yellow"))

    def display_response(self, content: str, title: str = "Ollama") -> None:
        """Print the reply, typed out character by character when streaming is on."""
        self.console.print(f"[bold green]{title}:[/bold green] ", end="")
        if self.config.stream:
            self.type_text(content)
        else:
            self.console.print(content, end="", markup=False, highlight=False)
        self.console.print("\n")

    def type_text(self, text: str, style: str = "white") -> None:
        """Print text one character at a time, pausing longer after punctuation."""
        for char in text:
            self.console.print(char, style=style, end="", markup=False, highlight=False)
            self.console.file.flush()
            delay = char_delay(char, self.config.typing_delay)
            if delay > 0:
                time.sleep(delay)
