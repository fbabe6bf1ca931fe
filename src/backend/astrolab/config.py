import logging
import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

API_KEY_ENV = "GEMINI_API_KEY"
CONFIG_PATH_ENV = "APP_CONFIG_PATH"


class AppConfig(BaseModel):
    GEMINI_API_KEY: str = Field(min_length=1)
    TEXT_MODEL: str = "gemini-3-pro-preview"
    IMAGE_MODEL: str = "gemini-3-pro-image-preview"
    RETRY_ATTEMPTS: int = Field(default=3, ge=0)
    RETRY_BASE_DELAY_SECONDS: float = Field(default=1.0, ge=0)
    ALLOWED_MIME_TYPES: List[str] = ["image/png", "image/jpeg"]
    MAX_UPLOAD_BYTES: int = 50 * 1024 * 1024
    FRONTEND_URL: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"


def default_config_path() -> Path:
    return Path(__file__).parent.parent / 'configs' / 'app-config.yaml'


def load_config(config_path: Optional[Path] = None, environ: Optional[dict] = None) -> AppConfig:
    """
    Loads app-config.yaml and attaches the Gemini API key from the environment.

    The key is mandatory: a missing or empty key raises here so the process
    never gets as far as serving requests.
    """
    environ = os.environ if environ is None else environ
    if config_path is None:
        config_path = Path(environ.get(CONFIG_PATH_ENV) or default_config_path())

    with open(config_path, 'r') as config_file:
        config_data = yaml.safe_load(config_file) or {}

    api_key = (environ.get(API_KEY_ENV) or "").strip()
    if not api_key:
        logger.critical(f"{API_KEY_ENV} is not set. Refusing to start.")
        raise RuntimeError(f"{API_KEY_ENV} is not set in the environment.")

    config_data[API_KEY_ENV] = api_key
    return AppConfig(**config_data)


settings = load_config()
