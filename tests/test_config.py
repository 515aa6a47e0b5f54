"""
Tests for configuration loading.
"""

import json

import pytest
import structlog

from calc_studio import config
from calc_studio.config import Settings, configure_logging, load_yaml_config


class TestYamlConfig:

    def test_missing_file_gives_empty_dict(self, tmp_path):
        assert load_yaml_config(tmp_path / "missing.yaml") == {}

    def test_empty_file_gives_empty_dict(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml_config(path) == {}

    def test_from_yaml(self, tmp_path, monkeypatch):
        monkeypatch.delenv("CALC_PORT", raising=False)
        path = tmp_path / "settings.yaml"
        path.write_text("port: 9000\ngreeting_name: Ada\nunknown_key: 1\n")

        settings = Settings.from_yaml(path)
        assert settings.port == 9000
        assert settings.greeting_name == "Ada"

    def test_environment_overrides_yaml(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CALC_GREETING_NAME", "Env")
        path = tmp_path / "settings.yaml"
        path.write_text("greeting_name: Yaml\n")

        assert Settings.from_yaml(path).greeting_name == "Env"

    def test_dotenv_file_overrides_yaml(self, tmp_path, monkeypatch):
        monkeypatch.delenv("CALC_GREETING_NAME", raising=False)
        monkeypatch.delenv("CALC_PORT", raising=False)
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text("CALC_GREETING_NAME=Dotenv\n")
        path = tmp_path / "settings.yaml"
        path.write_text("greeting_name: Yaml\nport: 9000\n")

        settings = Settings.from_yaml(path)
        assert settings.greeting_name == "Dotenv"
        assert settings.port == 9000


class TestSettings:

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("CALC_APP_NAME", "Other")
        assert Settings().app_name == "Other"

    def test_load_settings_replaces_active_settings(self, tmp_path, monkeypatch):
        monkeypatch.delenv("CALC_GREETING_NAME", raising=False)
        path = tmp_path / "settings.yaml"
        path.write_text("greeting_name: Ada\n")
        try:
            config.load_settings(path)
            assert config.get_settings().greeting_name == "Ada"
        finally:
            config.load_settings()

    def test_load_settings_reads_exported_config_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("CALC_GREETING_NAME", raising=False)
        path = tmp_path / "settings.yaml"
        path.write_text("greeting_name: Exported\n")
        monkeypatch.setenv(config.CONFIG_FILE_ENV, str(path))
        try:
            assert config.load_settings().greeting_name == "Exported"
        finally:
            monkeypatch.delenv(config.CONFIG_FILE_ENV)
            config.load_settings()


class TestConfigureLogging:

    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        yield
        structlog.reset_defaults()

    def test_json_rendering(self, capsys):
        configure_logging("INFO", json=True)
        structlog.get_logger().info("Server started", port=8000)

        line = capsys.readouterr().err.strip().splitlines()[-1]
        entry = json.loads(line)
        assert entry["event"] == "Server started"
        assert entry["level"] == "info"
        assert entry["port"] == 8000
        assert "timestamp" in entry

    def test_console_rendering_is_not_json(self, capsys):
        configure_logging("INFO", json=False)
        structlog.get_logger().info("Server started", port=8000)

        err = capsys.readouterr().err
        assert "Server started" in err
        assert not err.lstrip().startswith("{")

    def test_level_filtering(self, capsys):
        configure_logging("ERROR", json=True)
        logger = structlog.get_logger()
        logger.warning("Dropped")
        logger.error("Kept")

        lines = capsys.readouterr().err.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["Kept"]
