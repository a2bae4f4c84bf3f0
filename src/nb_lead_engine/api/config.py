"""Environment-based configuration for the scoring API."""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


class Settings:
    """API configuration loaded from environment variables."""

    def __init__(self):
        self.api_secret = os.getenv("NB_API_SECRET", "")
        if not self.api_secret:
            raise RuntimeError(
                "NB_API_SECRET environment variable is required. "
                "Generate one with: openssl rand -hex 32"
            )
        self.host = os.getenv("NB_API_HOST", "0.0.0.0")
        self.port = int(os.getenv("NB_API_PORT", "8000"))
        self.scoring_config_path: Optional[str] = os.getenv("NB_SCORING_CONFIG") or None
        self.debug = os.getenv("NB_ENGINE_ENV", "production") != "production"

        origins = os.getenv("NB_API_ALLOWED_ORIGINS", "")
        self.allowed_origins = [o.strip() for o in origins.split(",") if o.strip()] or DEFAULT_ALLOWED_ORIGINS

        self.max_batch_size = int(os.getenv("NB_API_MAX_BATCH", "50"))


_settings = None


def _get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings():
    """Drop cached settings so the next access re-reads the environment."""
    global _settings
    _settings = None


class _SettingsProxy:
    """Lazy proxy so settings aren't loaded until first access."""

    def __getattr__(self, name):
        return getattr(_get_settings(), name)


settings = _SettingsProxy()
