import requests

from ollama_terminal.client.connection_manager import ConnectionManager, parse_model_list

from .conftest import make_response


def test_check_connection_true_on_success(config, http):
    http.get.return_value = make_response(200, '{"models": []}')
    manager = ConnectionManager(config, session=http)

    assert manager.check_connection() is True
    http.get.assert_called_once_with("http://localhost:11434/api/tags", timeout=5.0)


def test_check_connection_false_when_unreachable(config, http):
    http.get.side_effect = requests.exceptions.ConnectionError("Connection refused")
    manager = ConnectionManager(config, session=http)

    assert manager.check_connection() is False


def test_check_connection_false_on_timeout(config, http):
    http.get.side_effect = requests.exceptions.Timeout("timed out")
    assert ConnectionManager(config, session=http).check_connection() is False


def test_check_connection_false_on_error_status(config, http):
    http.get.return_value = make_response(500, "boom")
    assert ConnectionManager(config, session=http).check_connection() is False


def test_list_models(config, http):
    http.get.return_value = make_response(
        200, '{"models":[{"name":"llama3.2"},{"name":"codellama"}]}'
    )
    manager = ConnectionManager(config, session=http)

    assert manager.list_models() == ["llama3.2", "codellama"]
    http.get.assert_called_once_with("http://localhost:11434/api/tags", timeout=10.0)


def test_list_models_empty_on_transport_failure(config, http):
    http.get.side_effect = requests.exceptions.ConnectionError("refused")
    assert ConnectionManager(config, session=http).list_models() == []


def test_list_models_empty_on_error_status(config, http):
    http.get.return_value = make_response(404, '{"models":[{"name":"x"}]}')
    assert ConnectionManager(config, session=http).list_models() == []


def test_parse_model_list_degrades_to_empty():
    assert parse_model_list("{}") == []
    assert parse_model_list("not json") == []
    assert parse_model_list("[1, 2]") == []
    assert parse_model_list('{"models": "nope"}') == []


def test_parse_model_list_skips_entries_without_name():
    body = '{"models":[{"name":"llama3.2"},{"size":12},"junk",{"name":"mistral"}]}'
    assert parse_model_list(body) == ["llama3.2", "mistral"]


def test_base_url_trailing_slash_is_stripped(http):
    from ollama_terminal.client.config import ChatConfig

    http.get.return_value = make_response(200, "{}")
    manager = ConnectionManager(ChatConfig(base_url="http://gpu-box:11434/"), session=http)
    manager.check_connection()

    http.get.assert_called_once_with("http://gpu-box:11434/api/tags", timeout=5.0)
