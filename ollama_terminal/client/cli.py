"""
CLI interface for the chat client.

This module provides the command-line interface for chatting with a local
Ollama server, implementing a REPL (Read-Eval-Print Loop):

- Read: a line from prompt_toolkit (history with the arrow keys)
- Eval: a slash command, or a chat turn sent to Ollama
- Print: the reply, typed out when streaming is enabled
- Loop: until /quit, /exit, Ctrl+C or Ctrl+D

Failed turns are reported and the loop carries on. Only a client that
cannot be constructed ends the program with exit code 1.
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional
from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from .config import ChatConfig, DEFAULT_BASE_URL, DEFAULT_MODEL
from .chat_client import ChatClient
from .errors import ChatClientError, InitError


logger = logging.getLogger(__name__)

QUIT_COMMANDS = ('/quit', '/exit')
PROMPT_MESSAGE = [('class:prompt', 'You: ')]
MODEL_COMMAND_PREFIX = '/model '


def create_prompt_session() -> PromptSession:
    """Create a prompt session with in-memory history and a styled prompt."""
    style = Style.from_dict({
        'prompt': 'bold ansiblue',
    })
    return PromptSession(
        history=InMemoryHistory(),
        style=style,
        message=PROMPT_MESSAGE,
    )


def setup_logging(config: ChatConfig) -> None:
    """Send debug records to ollama_debug.log when --debug is given."""
    if config.debug:
        logging.basicConfig(
            filename='ollama_debug.log',
            level=logging.DEBUG,
            format='%(asctime)s - %(levelname)s - %(message)s',
            filemode='w'
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Interactive terminal chat client for a local Ollama server",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        'model',
        nargs='?',
        default=DEFAULT_MODEL,
        help='Model name to chat with'
    )
    parser.add_argument(
        '--base-url',
        default=DEFAULT_BASE_URL,
        help='Ollama server base URL'
    )
    parser.add_argument(
        '--no-stream',
        action='store_true',
        help='Ask for a single JSON reply and print it instantly'
    )
    parser.add_argument(
        '--typing-delay',
        type=float,
        default=0.015,
        help='Seconds between characters when typing out a streamed reply'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Log prompts and responses to ollama_debug.log'
    )
    return parser


def handle_command(client: ChatClient, user_input: str,
                   ask: Callable[[str], str] = input) -> bool:
    """Run a slash command.

    Commands match exactly; ``/model NAME`` is the only one taking an argument.

    Returns:
        bool: False when the command ends the session, True otherwise
    """
    command, argument = user_input, ''
    if user_input.startswith(MODEL_COMMAND_PREFIX):
        command = '/model'
        argument = user_input[len(MODEL_COMMAND_PREFIX):].strip()

    if command in QUIT_COMMANDS:
        client.ui_manager.show_goodbye()
        return False
    elif command == '/help':
        client.ui_manager.show_help()
    elif command == '/clear':
        client.clear_history()
    elif command == '/history':
        client.show_history()
    elif command == '/models':
        client.show_models()
    elif command == '/model':
        client.change_model(argument or None, ask=ask)
    elif command == '/status':
        client.show_status()
    elif command == '/stream':
        client.toggle_streaming()
    else:
        client.ui_manager.show_unknown_command(user_input)
    return True


def run_repl(client: ChatClient, read_input: Callable[[], str],
             ask: Callable[[str], str] = input) -> None:
    """Read lines until the user quits, dispatching commands and chat turns."""
    while True:
        try:
            user_input = read_input()
            if not user_input.strip():
                continue

            if user_input.startswith('/'):
                if not handle_command(client, user_input, ask=ask):
                    break
                continue

            client.chat(user_input)

        except ChatClientError as e:
            # Transport, API and decode failures only cost the current turn
            logger.debug("Turn failed: %r", e)
            client.ui_manager.show_error(f"Error: {e}")

        except KeyboardInterrupt:
            client.ui_manager.console.print()
            client.ui_manager.show_goodbye()
            break

        except EOFError:
            break


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI function.

    Exit Codes:
        0: Normal exit (user quit, or server not reachable at startup)
        1: The client could not be constructed
    """
    args = build_parser().parse_args(argv)
    config = ChatConfig.from_args(args)
    setup_logging(config)

    try:
        client = ChatClient(config)
    except InitError as e:
        print(f"❌ Fatal error: {e}", file=sys.stderr)
        sys.exit(1)

    client.ui_manager.show_info("Checking Ollama connection...")
    if not client.check_connection():
        client.ui_manager.show_server_unreachable()
        client.ui_manager.show_info("Then run this program again.")
        return
    client.ui_manager.show_success("Connected to Ollama successfully!")

    client.ui_manager.show_welcome()

    session = create_prompt_session()
    # prompt() keeps the last message it was given, so restore it on every read
    run_repl(client, lambda: session.prompt(PROMPT_MESSAGE), ask=session.prompt)


if __name__ == "__main__":
    main()
