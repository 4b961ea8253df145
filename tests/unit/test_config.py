"""Unit tests for server configuration loading.

Run with: uv run pytest tests/unit/test_config.py -v
"""

__test__ = True

import logging

import pytest

from intentui import config as config_module
from intentui.config import ServerConfig, load_config

_ENV_VARS = (
    "INTENTUI_SERVER_NAME",
    "INTENTUI_TRANSPORT",
    "INTENTUI_HOST",
    "INTENTUI_PORT",
    "INTENTUI_PATH",
    "INTENTUI_LOG_LEVEL",
    "INTENTUI_DEFAULT_PRESETS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate from the developer's environment and any .env file."""
    monkeypatch.setattr(config_module, "_ENV_LOADED", True)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# load_config
# =============================================================================


class TestLoadConfig:

    def test_defaults(self):
        cfg = load_config()
        assert cfg == ServerConfig()
        assert cfg.transport == "stdio"
        assert (cfg.host, cfg.port, cfg.path) == ("127.0.0.1", 8000, None)
        assert cfg.default_presets == ()

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("INTENTUI_SERVER_NAME", "UI Brain")
        monkeypatch.setenv("INTENTUI_TRANSPORT", " HTTP ")
        monkeypatch.setenv("INTENTUI_HOST", "0.0.0.0")
        monkeypatch.setenv("INTENTUI_PORT", "9100")
        monkeypatch.setenv("INTENTUI_PATH", "/mcp")
        monkeypatch.setenv("INTENTUI_LOG_LEVEL", "debug")
        cfg = load_config()
        assert cfg.server_name == "UI Brain"
        assert cfg.transport == "http"
        assert (cfg.host, cfg.port, cfg.path) == ("0.0.0.0", 9100, "/mcp")
        assert cfg.log_level == "DEBUG"

    def test_default_presets(self, monkeypatch):
        monkeypatch.setenv("INTENTUI_DEFAULT_PRESETS", "mobile, Screen_Reader,,")
        assert load_config().default_presets == ("mobile", "screen-reader")

    def test_unknown_default_preset(self, monkeypatch):
        monkeypatch.setenv("INTENTUI_DEFAULT_PRESETS", "mobile,tv")
        with pytest.raises(ValueError, match="unknown presets"):
            load_config()

    @pytest.mark.parametrize("port", ["abc", "0", "70000"])
    def test_bad_port(self, monkeypatch, port):
        monkeypatch.setenv("INTENTUI_PORT", port)
        with pytest.raises(ValueError, match="INTENTUI_PORT"):
            load_config()

    def test_bad_transport(self, monkeypatch):
        monkeypatch.setenv("INTENTUI_TRANSPORT", "carrier-pigeon")
        with pytest.raises(ValueError, match="INTENTUI_TRANSPORT"):
            load_config()

    def test_bad_log_level(self, monkeypatch):
        monkeypatch.setenv("INTENTUI_LOG_LEVEL", "chatty")
        with pytest.raises(ValueError, match="not a valid log level"):
            load_config()


# =============================================================================
# ServerConfig
# =============================================================================


class TestServerConfig:

    def test_with_overrides(self):
        cfg = ServerConfig().with_overrides(transport="sse", port=9000, log_level="warning")
        assert (cfg.transport, cfg.port, cfg.log_level) == ("sse", 9000, "WARNING")

    def test_none_overrides_keep_values(self):
        cfg = ServerConfig(host="10.0.0.1")
        assert cfg.with_overrides() == cfg

    def test_empty_path_clears(self):
        assert ServerConfig(path="/mcp").with_overrides(path="").path is None

    def test_invalid_override(self):
        with pytest.raises(ValueError, match="--transport"):
            ServerConfig().with_overrides(transport="ftp")

    def test_numeric_log_level(self):
        assert ServerConfig(log_level="DEBUG").numeric_log_level == logging.DEBUG

    def test_frozen(self):
        with pytest.raises(AttributeError):
            ServerConfig().port = 1
