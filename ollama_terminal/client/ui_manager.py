"""
UI management for displaying messages and status.
"""

from typing import List, Optional
from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.table import Table

from .config import ChatConfig
from .history_manager import Message, ROLE_USER


class UIManager:
    """Manages user interface elements."""

    def __init__(self, config: ChatConfig, console: Optional[Console] = None):
        self.config = config
        self.console = console if console is not None else Console()

    def _streaming_label(self) -> Text:
        if self.config.stream:
            return Text("ENABLED", style="green")
        return Text("DISABLED", style="red")

    def show_welcome(self):
        """Show welcome message with rich formatting."""
        welcome_text = Text()
        welcome_text.append("Ollama Terminal Assistant\n\n", style="bold magenta")
        welcome_text.append("Running locally with model: ", style="green")
        welcome_text.append(f"{self.config.model}\n", style="bold cyan")
        welcome_text.append("Streaming mode: ", style="green")
        welcome_text.append_text(self._streaming_label())
        welcome_text.append("\n\nCommands: /help, /clear, /history, /models, /model, /status, /stream, /quit\n", style="dim")
        welcome_text.append("Type your message and press Enter to chat!", style="italic")

        self.console.print(Panel(welcome_text, title="Welcome", border_style="magenta"))

    def show_help(self):
        """Show help message."""
        help_table = Table(title="Available Commands")
        help_table.add_column("Command", style="yellow", no_wrap=True)
        help_table.add_column("Description", style="white")
        help_table.add_row("/help", "Show this help message")
        help_table.add_row("/clear", "Clear conversation history")
        help_table.add_row("/history", "Show conversation history")
        help_table.add_row("/models", "List available models")
        help_table.add_row("/model [name]", "Change the current model")
        help_table.add_row("/status", "Check Ollama connection status")
        help_table.add_row("/stream", "Toggle streaming output")
        help_table.add_row("/quit, /exit", "Exit the chat")
        self.console.print(help_table)

        self.console.print("[green]Just type your message and press Enter to chat![/green]")
        self.console.print(f"[dim]   Current model: {self.config.model}[/dim]")
        self.console.print("[dim]   Streaming: [/dim]", self._streaming_label())
        self.console.print()

    def show_history(self, messages: List[Message]):
        """Show the conversation so far, without the system prompt."""
        if not messages:
            self.console.print("[dim]No conversation history yet.[/dim]\n")
            return

        table = Table(title="Conversation History", show_header=True, header_style="bold cyan")
        table.add_column("Turn", style="cyan", no_wrap=True, width=4)
        table.add_column("Role", style="bold", width=8)
        table.add_column("Content", style="white", overflow="fold")

        for i, msg in enumerate(messages, 1):
            if msg.role == ROLE_USER:
                role = Text("You", style="bold blue")
            else:
                role = Text("Ollama", style="bold green")
            table.add_row(str(i), role, Text(msg.content))

        self.console.print(table)
        self.console.print()

    def show_models(self, models: List[str], title: str = "Available Models"):
        """List models, marking the active one."""
        self.console.print(f"[bold cyan]{title}:[/bold cyan]")
        for i, name in enumerate(models, 1):
            if name == self.config.model:
                self.console.print(f"[bold green]➤ {i}. {name}[/bold green]", highlight=False)
            else:
                self.console.print(f"  {i}. {name}", highlight=False)

    def show_no_models(self):
        """Tell the user how to install a model."""
        self.console.print("[red]No models found. Install a model first:[/red]")
        self.console.print("[cyan]   ollama pull llama3.2[/cyan]")
        self.console.print("[cyan]   ollama pull codellama[/cyan]")

    def show_status(self, connected: bool):
        """Show the result of a connection check."""
        if connected:
            self.console.print("[green]✓ Ollama is running and accessible![/green]")
            self.console.print(f"[cyan]  Server: {self.config.base_url}[/cyan]")
            self.console.print(f"[cyan]  Current model: [/cyan][bold green]{self.config.model}[/bold green]")
            self.console.print("[cyan]  Streaming: [/cyan]", self._streaming_label())
        else:
            self.show_server_unreachable()
        self.console.print()

    def show_server_unreachable(self):
        """Tell the user how to start the server."""
        self.console.print("[red]❌ Cannot connect to Ollama![/red]")
        self.console.print("[yellow]Make sure Ollama is running:[/yellow]")
        self.console.print("[bold cyan]   ollama serve[/bold cyan]")

    def show_streaming_toggled(self):
        """Report the new streaming state after /stream."""
        if self.config.stream:
            self.console.print("[green]Streaming output ENABLED[/green]")
            self.console.print("[cyan]Responses will now appear character by character.[/cyan]\n")
        else:
            self.console.print("[red]Streaming output DISABLED[/red]")
            self.console.print("[cyan]Responses will now appear instantly.[/cyan]\n")

    def show_model_changed(self):
        self.console.print(f"[green]Model changed to: [/green][bold cyan]{self.config.model}[/bold cyan]\n")

    def show_unknown_command(self, command: str):
        self.console.print(Text("Unknown command: ", style="red"), Text(command), sep="")
        self.console.print("[yellow]Type '/help' for available commands.[/yellow]\n")

    def show_goodbye(self):
        self.console.print("[green]👋 Goodbye! Thanks for using Ollama Terminal Assistant![/green]")

    def show_info(self, message: str):
        """Show informational message."""
        self.console.print(f"[yellow]{message}[/yellow]")

    def show_error(self, message: str):
        """Show error message."""
        self.console.print(Text(f"❌ {message}\n", style="red"))

    def show_success(self, message: str):
        """Show success message."""
        self.console.print(f"[green]✓ {message}[/green]")
