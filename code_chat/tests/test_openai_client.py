import json

import httpx
import pytest

from code_chat.domain.exceptions import ApiError, NetworkError, ValidationError
from code_chat.domain.models import ChatMessage, ChatRequest
from code_chat.providers.openai_client import OpenAIClient


class SettingsStub:
    openai_api_key = "sk-test"
    http_timeout = None
    openai_base_url = "https://api.openai.com/v1"


def _request():
    return ChatRequest(
        provider="openai",
        model="code-chat",
        messages=(
            ChatMessage(role="system", content="You are a helpful assistant."),
            ChatMessage(role="user", content="hi"),
        ),
    )


def _fake_client(monkeypatch, response=None, error=None, captured=None):
    class Client:
        def __init__(self, *a, **kw):
            if captured is not None:
                captured["client_kwargs"] = kw

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, url, json=None, headers=None):
            if captured is not None:
                captured.update(url=url, json=json, headers=headers)
            if error is not None:
                raise error
            return response

    monkeypatch.setattr("httpx.Client", Client)


class Resp:
    def __init__(self, data, status_code=200):
        self._data = data
        self.status_code = status_code
        self.text = str(data)

    def json(self):
        if isinstance(self._data, Exception):
            raise self._data
        return self._data


def test_openai_client_parse_basic(monkeypatch):
    captured = {}
    data = {
        "id": "chatcmpl-1",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": "ok"}, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 3, "completion_tokens": 1, "total_tokens": 4},
    }
    _fake_client(monkeypatch, response=Resp(data), captured=captured)
    res = OpenAIClient(SettingsStub()).chat(_request())

    assert res.first_content == "ok"
    assert res.choices[0].finish_reason == "stop"
    assert res.usage.total_tokens == 4
    assert captured["url"] == "https://api.openai.com/v1/chat/completions"
    assert captured["headers"] == {"Authorization": "Bearer sk-test", "Content-Type": "application/json"}
    assert captured["json"] == {
        "model": "gpt-3.5-turbo",
        "messages": [
            {"role": "system", "content": "You are a helpful assistant."},
            {"role": "user", "content": "hi"},
        ],
    }
    assert captured["client_kwargs"]["timeout"] is None


def test_openai_client_error_field(monkeypatch):
    data = {"error": {"message": "Incorrect API key provided", "type": "invalid_request_error"}}
    _fake_client(monkeypatch, response=Resp(data, status_code=401))
    with pytest.raises(ApiError) as ei:
        OpenAIClient(SettingsStub()).chat(_request())
    assert ei.value.code == "API_ERROR"
    assert "Incorrect API key" in ei.value.message
    assert ei.value.http_status == 401


def test_openai_client_error_field_with_200(monkeypatch):
    _fake_client(monkeypatch, response=Resp({"error": "overloaded"}))
    with pytest.raises(ApiError):
        OpenAIClient(SettingsStub()).chat(_request())


def test_openai_client_invalid_json(monkeypatch):
    _fake_client(monkeypatch, response=Resp(json.JSONDecodeError("Expecting value", "<html>", 0), status_code=502))
    with pytest.raises(ApiError) as ei:
        OpenAIClient(SettingsStub()).chat(_request())
    assert ei.value.code == "INVALID_JSON"


def test_openai_client_non_object_json(monkeypatch):
    _fake_client(monkeypatch, response=Resp(["not", "an", "object"]))
    with pytest.raises(ApiError):
        OpenAIClient(SettingsStub()).chat(_request())


def test_openai_client_network_error(monkeypatch):
    _fake_client(monkeypatch, error=httpx.ConnectError("connection refused"))
    with pytest.raises(NetworkError):
        OpenAIClient(SettingsStub()).chat(_request())


def test_openai_client_missing_api_key(monkeypatch):
    class NoKey(SettingsStub):
        openai_api_key = None

    _fake_client(monkeypatch, error=AssertionError("post should not be called without a key"))
    with pytest.raises(ValidationError):
        OpenAIClient(NoKey()).chat(_request())


def test_openai_client_missing_content(monkeypatch):
    _fake_client(monkeypatch, response=Resp({"choices": [{"index": 0, "message": {"role": "assistant"}}]}))
    res = OpenAIClient(SettingsStub()).chat(_request())
    assert res.choices[0].message is None
    assert res.first_content is None


def test_openai_client_no_choices(monkeypatch):
    _fake_client(monkeypatch, response=Resp({"choices": []}))
    res = OpenAIClient(SettingsStub()).chat(_request())
    assert res.first_content is None
    assert res.usage is None


def test_openai_client_non_string_content(monkeypatch):
    _fake_client(monkeypatch, response=Resp({"choices": [{"index": 0, "message": {"role": "assistant", "content": 123}}]}))
    res = OpenAIClient(SettingsStub()).chat(_request())
    assert res.choices[0].message is None
    assert res.first_content is None


def test_openai_client_keeps_position_of_invalid_first_choice(monkeypatch):
    data = {"choices": [None, {"index": 1, "message": {"role": "assistant", "content": "second"}}]}
    _fake_client(monkeypatch, response=Resp(data))
    res = OpenAIClient(SettingsStub()).chat(_request())
    assert len(res.choices) == 2
    assert res.choices[0].index == 0
    assert res.choices[1].message.content == "second"
    assert res.first_content is None


def test_openai_client_server_error_without_error_field(monkeypatch):
    _fake_client(monkeypatch, response=Resp({}, status_code=500))
    with pytest.raises(ApiError) as ei:
        OpenAIClient(SettingsStub()).chat(_request())
    assert ei.value.code == "API_ERROR"
    assert ei.value.http_status == 500
