"""
Configuration management for the chat client.
"""

from dataclasses import dataclass


DEFAULT_BASE_URL = "http://localhost:11434"
DEFAULT_MODEL = "llama3.2"


@dataclass
class ChatConfig:
    """Configuration for the chat client.

    The active model and the streaming flag live here and are shared by
    reference with every component, so ``/model`` and ``/stream`` take
    effect on the next request without any global state.
    """
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    stream: bool = True
    debug: bool = False
    typing_delay: float = 0.015
    health_timeout: float = 5.0
    models_timeout: float = 10.0
    chat_timeout: float = 60.0

    def __post_init__(self):
        """Validate and normalize configuration."""
        self.base_url = self.base_url.rstrip('/')

    @classmethod
    def from_args(cls, args) -> 'ChatConfig':
        """Create config from parsed command line arguments."""
        return cls(
            base_url=getattr(args, 'base_url', DEFAULT_BASE_URL),
            model=getattr(args, 'model', None) or DEFAULT_MODEL,
            stream=not getattr(args, 'no_stream', False),
            debug=getattr(args, 'debug', False),
            typing_delay=getattr(args, 'typing_delay', 0.015),
        )
