"""Tests for Settings and client construction."""

import pytest

from clients import SkillBridgeAIClient, SkillBridgeClient, build_clients, get_api_client
from config import Settings


ENV_VARS = (
    "SKILLBRIDGE_API_BASE",
    "EXPO_PUBLIC_SKILLBRIDGE_API_BASE",
    "SKILLBRIDGE_AI_API_BASE",
    "EXPO_PUBLIC_IA_BASE",
    "SKILLBRIDGE_DEVICE_TARGET",
    "SKILLBRIDGE_API_TOKEN",
    "SKILLBRIDGE_REQUEST_TIMEOUT_SECONDS",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:

    def test_host_defaults(self, clean_env):
        config = Settings(_env_file=None)
        assert config.resolve_api_base() == "http://localhost:5028"
        assert config.resolve_ai_api_base() == "http://localhost:8080"
        assert config.request_timeout_seconds is None

    def test_android_emulator_defaults(self, clean_env):
        config = Settings(_env_file=None, device_target="Android")
        assert config.resolve_api_base() == "http://10.0.2.2:5028"
        assert config.resolve_ai_api_base() == "http://10.0.2.2:8080"

    def test_explicit_base_wins(self, clean_env):
        config = Settings(_env_file=None, device_target="android", api_base=" http://lan:5028 ")
        assert config.resolve_api_base() == "http://lan:5028"

    def test_prefixed_env(self, clean_env):
        clean_env.setenv("SKILLBRIDGE_AI_API_BASE", "https://ai.example.com")
        clean_env.setenv("SKILLBRIDGE_API_TOKEN", "tok")
        config = Settings(_env_file=None)
        assert config.resolve_ai_api_base() == "https://ai.example.com"
        assert config.api_token == "tok"

    def test_expo_env_fallback(self, clean_env):
        clean_env.setenv("EXPO_PUBLIC_SKILLBRIDGE_API_BASE", "http://192.168.0.15:5028")
        assert Settings(_env_file=None).resolve_api_base() == "http://192.168.0.15:5028"


class TestFactory:

    def test_get_api_client_from_settings(self, clean_env):
        config = Settings(_env_file=None, api_base="http://api.test/", api_token="t",
                          request_timeout_seconds=3)
        client = get_api_client(config)
        assert isinstance(client, SkillBridgeClient)
        assert client.base_url == "http://api.test"
        assert client.token == "t"
        assert client.timeout == 3

    def test_build_clients_are_independent(self, clean_env):
        config = Settings(_env_file=None)
        first = build_clients(config)
        second = build_clients(config)
        assert isinstance(first.ai, SkillBridgeAIClient)
        first.api.configure_base("http://staging.test")
        first.api.configure_auth("x")
        assert second.api.base_url == "http://localhost:5028"
        assert second.api.token is None
        assert first.ai.token is None
