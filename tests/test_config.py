"""Tests for ConfigManager and logging setup."""

from __future__ import annotations

import logging

import pytest

from diabreport.config_manager import ConfigManager, as_bool, configure_logging, read_env_file

_KEYS = (
    "DIABREPORT_LOG_LEVEL",
    "DIABREPORT_TIMEZONE",
    "DIABREPORT_OUTPUT_DIR",
    "DIABREPORT_DATA_FILE",
    "DIABREPORT_PAGE_SIZE",
    "DIABREPORT_PDF_COMPRESSION",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in _KEYS + ("DIABREPORT_ENV",):
        monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# load_config
# ---------------------------------------------------------------------------


class TestLoadConfig:

    def test_defaults(self, tmp_path):
        config = ConfigManager().load_config(tmp_path)
        assert set(config) == set(_KEYS)
        assert config["DIABREPORT_LOG_LEVEL"] == "DEBUG"
        assert config["DIABREPORT_TIMEZONE"] == "America/Sao_Paulo"
        assert config["DIABREPORT_PAGE_SIZE"] == "25"
        assert config["DIABREPORT_PDF_COMPRESSION"] == "false"

    def test_production_profile(self, tmp_path):
        config = ConfigManager("production").load_config(tmp_path)
        assert config["DIABREPORT_LOG_LEVEL"] == "WARNING"
        assert config["DIABREPORT_PDF_COMPRESSION"] == "true"

    def test_profile_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DIABREPORT_ENV", "testing")
        manager = ConfigManager()
        assert manager.profile == "testing"
        assert manager.load_config(tmp_path)["DIABREPORT_TIMEZONE"] == "UTC"

    def test_unknown_profile_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="diabreport"):
            assert ConfigManager("staging").profile == "development"
        assert "Unknown profile" in caplog.text

    def test_env_file_overrides_profile(self, tmp_path):
        (tmp_path / ".env").write_text(
            "# local\nDIABREPORT_OUTPUT_DIR = reports\n\nDIABREPORT_LOG_LEVEL=ERROR\n", encoding="utf-8"
        )
        config = ConfigManager().load_config(tmp_path)
        assert config["DIABREPORT_OUTPUT_DIR"] == "reports"
        assert config["DIABREPORT_LOG_LEVEL"] == "ERROR"

    def test_environment_wins(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("DIABREPORT_TIMEZONE=Europe/Lisbon\n", encoding="utf-8")
        monkeypatch.setenv("DIABREPORT_TIMEZONE", "UTC")
        assert ConfigManager().load_config(tmp_path)["DIABREPORT_TIMEZONE"] == "UTC"

    @pytest.mark.parametrize("size", ["20", "abc", ""])
    def test_bad_page_size_reset(self, tmp_path, monkeypatch, caplog, size):
        monkeypatch.setenv("DIABREPORT_PAGE_SIZE", size)
        with caplog.at_level(logging.WARNING, logger="diabreport"):
            assert ConfigManager().load_config(tmp_path)["DIABREPORT_PAGE_SIZE"] == "25"
        assert "DIABREPORT_PAGE_SIZE" in caplog.text

    def test_unknown_time_zone_reset(self, tmp_path, monkeypatch, caplog):
        monkeypatch.setenv("DIABREPORT_TIMEZONE", "Mars/Olympus_Mons")
        with caplog.at_level(logging.WARNING, logger="diabreport"):
            config = ConfigManager().load_config(tmp_path)
        assert config["DIABREPORT_TIMEZONE"] == "America/Sao_Paulo"
        assert "Unknown time zone" in caplog.text


class TestEnvFiles:

    def test_read_env_file(self, tmp_path):
        path = tmp_path / ".env"
        path.write_text('# comment\nA=1\nB = "two"\nnot a pair\n', encoding="utf-8")
        assert read_env_file(path) == {"A": "1", "B": "two"}

    def test_missing_env_file(self, tmp_path):
        assert read_env_file(tmp_path / ".env") == {}

    def test_template_lists_every_key(self, tmp_path):
        path = ConfigManager().generate_env_template(tmp_path)
        assert path == tmp_path / ".env.example"
        text = path.read_text(encoding="utf-8")
        for key in _KEYS:
            assert f"{key}=" in text
        assert "DIABREPORT_PAGE_SIZE=25" in text
        assert read_env_file(path)["DIABREPORT_TIMEZONE"] == "America/Sao_Paulo"


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


class TestLogging:

    @pytest.mark.parametrize("value,expected", [
        ("true", True), ("1", True), (" YES ", True), ("on", True),
        ("false", False), ("", False), (None, False), ("maybe", False),
    ])
    def test_as_bool(self, value, expected):
        assert as_bool(value) is expected

    def test_sets_package_level(self):
        logger = configure_logging("warning")
        assert logger.name == "diabreport"
        assert logger.level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        assert configure_logging("LOUD").level == logging.INFO

    def test_numeric_level(self):
        assert configure_logging(logging.DEBUG).level == logging.DEBUG
