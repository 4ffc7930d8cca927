from pathlib import Path

import pytest

from api_tag_client.config import DEFAULT_TIMEOUT, ClientConfig, load_config
from api_tag_client.errors import ConfigError
from api_tag_client.request.builder import AcceptSource

FIXTURES = Path(__file__).parent / "fixtures"


class TestClientConfig:
    def test_defaults(self):
        config = ClientConfig()
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.consume_content_type == "application/json"
        assert config.produce_content_type == "application/json"
        assert config.accept_from is AcceptSource.PRODUCE
        assert config.strict_placeholders is False

    @pytest.mark.parametrize("timeout", [0, -1])
    def test_non_positive_timeout_uses_default(self, timeout):
        assert ClientConfig(timeout=timeout).timeout == DEFAULT_TIMEOUT

    def test_frozen(self):
        config = ClientConfig()
        with pytest.raises(Exception):
            config.timeout = 1


class TestLoadConfig:
    def test_client_section(self):
        config = load_config(FIXTURES / "client.yaml")
        assert config.timeout == 12.5
        assert config.strict_placeholders is True
        assert config.accept_from is AcceptSource.PRODUCE

    def test_flat_document(self):
        config = load_config(FIXTURES / "flat_client.yaml")
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.produce_content_type == "application/vnd.api+json"

    def test_unknown_key_rejected(self):
        with pytest.raises(ConfigError):
            load_config(FIXTURES / "bad_client.yaml")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "nope.yaml")

    def test_not_a_mapping(self, tmp_path):
        f = tmp_path / "list.yaml"
        f.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(f)

    def test_empty_file_gives_defaults(self, tmp_path):
        f = tmp_path / "empty.yaml"
        f.write_text("")
        assert load_config(f) == ClientConfig()


class TestFromEnv:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("API_TAG_CLIENT_TIMEOUT", "7")
        monkeypatch.setenv("API_TAG_CLIENT_PRODUCE", "text/plain")
        monkeypatch.delenv("API_TAG_CLIENT_CONSUME", raising=False)
        config = ClientConfig.from_env()
        assert config.timeout == 7
        assert config.produce_content_type == "text/plain"
        assert config.consume_content_type == "application/json"

    def test_invalid_value(self, monkeypatch):
        monkeypatch.setenv("API_TAG_CLIENT_TIMEOUT", "soon")
        with pytest.raises(ConfigError):
            ClientConfig.from_env()
