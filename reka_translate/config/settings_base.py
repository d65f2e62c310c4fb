from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _default_api_key_file() -> Path:
    return Path.home() / ".config" / "reka" / "api_key"


class AppSettings(BaseSettings):
    """Client settings with sensible defaults."""

    model_config = SettingsConfigDict(env_prefix="REKA_")

    api_endpoint: str = "https://api.reka.ai/v1/transcription_or_translation"
    api_key_file: Path = Field(default_factory=_default_api_key_file)
    sampling_rate: int = 16000
    temperature: float = 0
    max_tokens: int = 1024
    ffmpeg_binary: str = "ffmpeg"
    log_level: LogLevel = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value
