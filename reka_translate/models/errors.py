"""
Errors raised by the client. Every failure is terminal.
"""


class RekaError(Exception):
    """Base class for all client failures."""

    exit_code = 1


class InvalidArgumentError(RekaError):
    """Bad command line input or unsupported target language."""


class AudioNotFoundError(RekaError):
    """Local audio file does not exist."""


class ConversionError(RekaError):
    """ffmpeg is missing or failed to produce a WAV file."""


class ConfigError(RekaError):
    """API key file is missing or empty."""


class NetworkError(RekaError):
    """The HTTP request could not be completed."""


class ApiError(RekaError):
    """The API answered with an error or an unreadable body."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
