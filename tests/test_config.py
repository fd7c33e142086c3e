"""Tests for settings loading."""

import logging

import pytest

from config import ConfigError, Settings, load_settings
from constants import Constants


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings(environ={})
        assert settings == Settings()
        assert settings.request_timeout == Constants.REQUEST_TIMEOUT

    def test_yaml_section(self, tmp_path):
        cfg = tmp_path / "hangar.yml"
        cfg.write_text(
            "hangar_upload:\n"
            "  papermc_api_base: http://papermc.local/v2/\n"
            "  request_timeout: 5\n"
            "  max_workers: 4\n"
        )

        settings = load_settings(str(cfg), environ={})

        assert settings.papermc_api_base == "http://papermc.local/v2"
        assert settings.request_timeout == 5.0
        assert settings.max_workers == 4

    def test_top_level_keys_accepted(self, tmp_path):
        cfg = tmp_path / "hangar.yml"
        cfg.write_text("hangar_api_base: http://hangar.local/api/v1\n")

        assert load_settings(str(cfg), environ={}).hangar_api_base == "http://hangar.local/api/v1"

    def test_environment_overrides_file(self, tmp_path):
        cfg = tmp_path / "hangar.yml"
        cfg.write_text("request_timeout: 5\n")

        settings = load_settings(str(cfg), environ={"HANGAR_UPLOAD_REQUEST_TIMEOUT": "12.5"})

        assert settings.request_timeout == 12.5

    def test_missing_file_warns(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            settings = load_settings(str(tmp_path / "absent.yml"), environ={})

        assert settings == Settings()
        assert "Config file not found" in caplog.text

    def test_malformed_yaml(self, tmp_path):
        cfg = tmp_path / "hangar.yml"
        cfg.write_text("hangar_upload: [unclosed\n")

        with pytest.raises(ConfigError):
            load_settings(str(cfg), environ={})

    @pytest.mark.parametrize("value", ["zero", "0", "-3"])
    def test_invalid_numeric(self, value):
        with pytest.raises(ConfigError):
            load_settings(environ={"HANGAR_UPLOAD_MAX_WORKERS": value})
