"""
Configuration Tests
-------------------
YAML loading, environment overrides and credential lookup.
"""

from pathlib import Path
import sys

import pytest
import yaml

sys.path.insert(0, str(Path(__file__).parent.parent))

from infra.config import (
    DEFAULT_BASE_URL, ClientConfig, ConfigManager, load_credentials,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("HOTELLOOK_MARKER", "HOTELLOOK_TOKEN",
                 "HOTELLOOK_CREDENTIALS_MARKER", "HOTELLOOK_CREDENTIALS_TOKEN",
                 "HOTELLOOK_CLIENT_TIMEOUT_SECONDS", "HOTELLOOK_CLIENT_BASE_URL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "hotellook.yaml"
    path.write_text(yaml.safe_dump({
        "credentials": {"marker": 77777, "token": "from-file"},
        "client": {"timeout_seconds": 12.5, "user_agent": "tests/1.0"},
    }), encoding="utf-8")
    return path


class TestConfigManager:

    def test_missing_file_uses_defaults(self, tmp_path):
        config = ConfigManager(str(tmp_path / "absent.yaml"))

        assert config.get("client.timeout_seconds", 30) == 30
        client_config = config.client_config()
        assert client_config.base_url == DEFAULT_BASE_URL
        assert client_config.demo_results_path.name == "search_results_demo.json"

    def test_dot_notation(self, config_file):
        config = ConfigManager(str(config_file))

        assert config.get("credentials.token") == "from-file"
        assert config.get("credentials.missing", "x") == "x"

    def test_env_overrides_file(self, config_file, monkeypatch):
        monkeypatch.setenv("HOTELLOOK_CLIENT_TIMEOUT_SECONDS", "3")
        config = ConfigManager(str(config_file))

        assert config.client_config().timeout_seconds == 3.0

    def test_base_url_from_env(self, config_file, monkeypatch):
        monkeypatch.setenv("HOTELLOOK_CLIENT_BASE_URL", "http://localhost:8080/api/v2")
        config = ConfigManager(str(config_file))

        assert config.client_config().base_url == "http://localhost:8080/api/v2/"

    def test_client_config_from_file(self, config_file):
        client_config = ConfigManager(str(config_file)).client_config()

        assert isinstance(client_config, ClientConfig)
        assert client_config.timeout_seconds == 12.5
        assert client_config.user_agent == "tests/1.0"


class TestCredentials:

    def test_from_file(self, config_file):
        assert load_credentials(ConfigManager(str(config_file))) == (77777, "from-file")

    def test_env_wins(self, config_file, monkeypatch):
        monkeypatch.setenv("HOTELLOOK_CREDENTIALS_MARKER", "35290")
        monkeypatch.setenv("HOTELLOOK_CREDENTIALS_TOKEN", "from-env")

        assert load_credentials(ConfigManager(str(config_file))) == (35290, "from-env")

    def test_short_env_names(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOTELLOOK_MARKER", "1234")
        monkeypatch.setenv("HOTELLOOK_TOKEN", "short")

        assert load_credentials(ConfigManager(str(tmp_path / "absent.yaml"))) == (1234, "short")

    def test_nothing_configured(self, tmp_path):
        assert load_credentials(ConfigManager(str(tmp_path / "absent.yaml"))) == (0, "")

    def test_non_numeric_marker(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOTELLOOK_MARKER", "abc")

        marker, _ = load_credentials(ConfigManager(str(tmp_path / "absent.yaml")))
        assert marker == 0
