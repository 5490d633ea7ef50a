import pytest

from code_chat.domain.exceptions import ValidationError
from code_chat.providers import create_provider
from code_chat.providers.openai_client import OpenAIClient
from code_chat.providers.registry import get_provider_config


def test_create_provider_default(monkeypatch):
    class DummySettings:
        default_provider = "openai"
        openai_api_key = "sk-test"
        http_timeout = None
        openai_base_url = "https://api.openai.com/v1"

    monkeypatch.setattr("code_chat.providers.settings", DummySettings())
    provider = create_provider()
    assert isinstance(provider, OpenAIClient)


def test_create_provider_explicit_case_insensitive():
    assert isinstance(create_provider("OpenAI"), OpenAIClient)


def test_create_provider_unknown():
    with pytest.raises(ValidationError):
        create_provider("kimi")


def test_registry_maps_logical_model():
    cfg = get_provider_config("openai")
    assert cfg.models["code-chat"].provider_model == "gpt-3.5-turbo"
    with pytest.raises(KeyError):
        get_provider_config("unknown")
