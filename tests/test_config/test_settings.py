"""Test BuildMatrixSettings."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from buildmatrix.config import BuildMatrixSettings, create_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate settings from the user environment and any .env file."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "BUILDMATRIX_LOG_LEVEL",
        "BUILDMATRIX_JSON_LOGS",
        "BUILDMATRIX_LOG_FILE",
        "BUILDMATRIX_DEFINITION_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


class TestBuildMatrixSettings:
    """Test settings defaults, validation and environment precedence."""

    def test_defaults(self):
        settings = BuildMatrixSettings()
        assert settings.log_level == "WARNING"
        assert settings.json_logs is False
        assert settings.log_file is None
        assert settings.definition_file is None

    def test_log_level_normalized(self):
        settings = create_settings(log_level=" debug ")
        assert settings.log_level == "DEBUG"
        assert settings.get_log_level_int() == logging.DEBUG

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError, match="Log level must be one of"):
            BuildMatrixSettings(log_level="LOUD")

    def test_environment_overrides_arguments(self, monkeypatch):
        monkeypatch.setenv("BUILDMATRIX_LOG_LEVEL", "ERROR")
        settings = create_settings(log_level="INFO")
        assert settings.log_level == "ERROR"

    def test_environment_values(self, monkeypatch):
        monkeypatch.setenv("BUILDMATRIX_JSON_LOGS", "true")
        monkeypatch.setenv("BUILDMATRIX_DEFINITION_FILE", "matrix.yaml")
        settings = create_settings()
        assert settings.json_logs is True
        assert settings.definition_file == Path("matrix.yaml")

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("BUILDMATRIX_LOG_LEVEL=info\n", encoding="utf-8")
        assert create_settings().log_level == "INFO"
