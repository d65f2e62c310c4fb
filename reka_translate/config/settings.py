from functools import lru_cache

from pydantic import ValidationError

from reka_translate.models.errors import ConfigError

from .settings_base import AppSettings


class Settings(AppSettings):
    """Settings resolved from the environment."""


@lru_cache(maxsize=None)
def get_settings() -> AppSettings:
    """Return the process-wide settings instance.

    Raises:
        ConfigError: If a REKA_* environment variable holds an invalid value
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigError(f"Invalid REKA_* setting: {e}") from e
