"""Shared pytest fixtures and configuration."""

import io
import json
import logging
import math
import os
import struct
import wave
from unittest.mock import MagicMock

import pytest

from reka_translate.config.settings import get_settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the key file at a temp location and drop cached settings."""
    monkeypatch.setenv("REKA_API_KEY_FILE", str(tmp_path / "config" / "api_key"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    original_level = root.level
    original_handlers = list(root.handlers)
    levels = {name: logging.getLogger(name).level for name in ("reka", "urllib3")}

    yield

    root.handlers[:] = original_handlers
    root.setLevel(original_level)
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


def make_tone_wav(freq=440.0, duration=0.2, rate=16000):
    frames = int(duration * rate)
    buf = io.BytesIO()
    with wave.open(buf, "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(rate)
        for n in range(frames):
            val = int(32767.0 * math.sin(2 * math.pi * freq * n / rate))
            w.writeframesraw(struct.pack("<h", val))
    return buf.getvalue()


@pytest.fixture
def sample_wav_bytes():
    """Generate a sample WAV file as bytes."""
    return make_tone_wav()


@pytest.fixture
def sample_audio_file(tmp_path, sample_wav_bytes):
    """Create a temporary WAV file for testing."""
    audio_file = tmp_path / "test_audio.wav"
    audio_file.write_bytes(sample_wav_bytes)
    return audio_file


@pytest.fixture
def api_key_file():
    """Write a key with owner-only permissions to the configured location."""
    path = get_settings().api_key_file
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("test-api-key\n")
    os.chmod(path, 0o600)
    return path


@pytest.fixture
def make_response():
    """Build a fake requests.Response carrying the given JSON payload."""
    def _make(payload=None, status_code=200, text=None):
        response = MagicMock()
        response.status_code = status_code
        response.text = text if text is not None else json.dumps(payload)
        if payload is None and text is not None:
            response.json.side_effect = ValueError("No JSON object could be decoded")
        else:
            response.json.return_value = payload
        return response
    return _make


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Provide mock environment variables."""
    def set_env(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key, str(value))
        get_settings.cache_clear()
    return set_env
