import io
from unittest.mock import MagicMock

import pytest
import requests
from rich.console import Console

from ollama_terminal.client.config import ChatConfig
from ollama_terminal.client.chat_client import ChatClient


def make_response(status_code=200, text=""):
    """Build a stand-in for requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.text = text
    response.ok = 200 <= status_code < 400
    return response


@pytest.fixture
def config():
    return ChatConfig(typing_delay=0)


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def http():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(config, console, http):
    return ChatClient(config, console=console, session=http)


def output(console):
    return console.file.getvalue()
