"""Unit tests for configuration loading."""

from pathlib import Path

import pytest

from astrolab.config import AppConfig, default_config_path, load_config, settings


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "app-config.yaml"
    path.write_text(
        "TEXT_MODEL: text-model\n"
        "IMAGE_MODEL: image-model\n"
        "RETRY_ATTEMPTS: 5\n"
        "RETRY_BASE_DELAY_SECONDS: 0.5\n"
    )
    return path


class TestLoadConfig:
    def test_reads_yaml_and_key(self, config_file):
        config = load_config(config_file, environ={"GEMINI_API_KEY": "secret"})

        assert isinstance(config, AppConfig)
        assert config.GEMINI_API_KEY == "secret"
        assert config.TEXT_MODEL == "text-model"
        assert config.RETRY_ATTEMPTS == 5
        assert config.RETRY_BASE_DELAY_SECONDS == 0.5
        assert config.ALLOWED_MIME_TYPES == ["image/png", "image/jpeg"]

    @pytest.mark.parametrize("environ", [{}, {"GEMINI_API_KEY": ""}, {"GEMINI_API_KEY": "   "}])
    def test_missing_key_fails_fast(self, config_file, environ):
        with pytest.raises(RuntimeError, match="GEMINI_API_KEY"):
            load_config(config_file, environ=environ)

    def test_path_from_environment(self, config_file):
        config = load_config(environ={"GEMINI_API_KEY": "k", "APP_CONFIG_PATH": str(config_file)})

        assert config.IMAGE_MODEL == "image-model"

    def test_shipped_config(self):
        config = load_config(default_config_path(), environ={"GEMINI_API_KEY": "k"})

        assert config.TEXT_MODEL == "gemini-3-pro-preview"
        assert config.IMAGE_MODEL == "gemini-3-pro-image-preview"
        assert config.RETRY_ATTEMPTS == 3
        assert config.RETRY_BASE_DELAY_SECONDS == 1.0

    def test_settings_singleton_has_key(self):
        assert settings.GEMINI_API_KEY
