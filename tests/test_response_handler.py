from unittest.mock import patch

import pytest

from ollama_terminal.client.response_handler import ResponseHandler, NullDisplay

from .conftest import output


def test_streaming_reply_is_typed_out(config, console):
    handler = ResponseHandler(config, console=console)
    handler.display_response("Hello [world]")
    assert "Ollama: Hello [world]" in output(console)


def test_instant_reply_when_streaming_disabled(config, console):
    config.stream = False
    handler = ResponseHandler(config, console=console)
    handler.display_response("done")
    assert "Ollama: done" in output(console)


def test_notice_is_printed(config, console):
    ResponseHandler(config, console=console).notice("Stream JSON parse error: x")
    assert "Stream JSON parse error: x" in output(console)


def test_thinking_context_manager(config, console):
    handler = ResponseHandler(config, console=console)
    with handler.thinking():
        pass


def test_null_display_is_silent():
    display = NullDisplay()
    with display.thinking():
        display.notice("ignored")


def test_char_delay_pauses_longer_after_punctuation():
    from ollama_terminal.client.response_handler import char_delay

    assert char_delay("a", 0.01) == 0.01
    assert char_delay(".", 0.01) == pytest.approx(0.04)
    assert char_delay("?", 0.01) == pytest.approx(0.04)
    assert char_delay(",", 0.01) == pytest.approx(0.02)
    assert char_delay(":", 0.01) == pytest.approx(0.02)
    assert char_delay("\n", 0.01) == pytest.approx(0.03)
    assert char_delay(" ", 0.01) == pytest.approx(0.005)


def test_type_text_sleeps_per_character(config, console):
    config.typing_delay = 0.01
    handler = ResponseHandler(config, console=console)

    with patch("ollama_terminal.client.response_handler.time.sleep") as sleep:
        handler.type_text("Hi, you.")

    delays = [c[0][0] for c in sleep.call_args_list]
    assert delays == pytest.approx([0.01, 0.01, 0.02, 0.005, 0.01, 0.01, 0.01, 0.04])
    assert "Hi, you." in output(console)
