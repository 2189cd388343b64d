import pytest

from ollama_terminal.client.config import ChatConfig
from ollama_terminal.client.history_manager import HistoryManager, Message, SYSTEM_PROMPT


@pytest.fixture
def history():
    return HistoryManager(ChatConfig())


def test_starts_with_system_prompt_only(history):
    messages = history.get_history()
    assert messages == [{"role": "system", "content": SYSTEM_PROMPT}]
    assert history.turn_count() == 0
    assert len(history) == 0


def test_appends_keep_order_and_system_prompt_first(history):
    history.append_user("hi")
    history.append_assistant("hello")
    history.append_user("")

    messages = history.get_history()
    assert [m["role"] for m in messages] == ["system", "user", "assistant", "user"]
    assert [m["content"] for m in messages[1:]] == ["hi", "hello", ""]
    assert history.turn_count() == 3


def test_reset_restores_single_system_prompt(history):
    for i in range(3):
        history.append_user(f"q{i}")
        history.append_assistant(f"a{i}")
        history.reset()
        messages = history.get_history()
        assert len(messages) == 1
        assert messages[0]["role"] == "system"
        assert history.turn_count() == 0

    history.append_user("again")
    roles = [m["role"] for m in history.get_history()]
    assert roles.count("system") == 1
    assert roles[0] == "system"


def test_wire_payload_carries_model_stream_and_all_messages(history):
    history.append_user("What is a closure?")
    history.append_assistant("A function with captured variables.")

    payload = history.to_wire_payload("codellama", False)

    assert payload["model"] == "codellama"
    assert payload["stream"] is False
    assert payload["messages"] == [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": "What is a closure?"},
        {"role": "assistant", "content": "A function with captured variables."},
    ]


def test_get_history_returns_a_copy(history):
    history.get_history().append({"role": "user", "content": "sneaky"})
    assert history.turn_count() == 0


def test_conversation_excludes_system_prompt(history):
    history.append_user("hi")
    history.append_assistant("hello")
    assert history.conversation() == [Message("user", "hi"), Message("assistant", "hello")]


def test_message_is_immutable():
    message = Message("user", "hi")
    with pytest.raises(AttributeError):
        message.content = "changed"
