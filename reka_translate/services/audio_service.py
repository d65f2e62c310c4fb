"""
Audio service - turns a local file, URL or data URI into the audio_url field.
"""

import base64
import binascii
import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Tuple

from reka_translate.config.logging import get_logger
from reka_translate.models.errors import AudioNotFoundError, ConversionError, InvalidArgumentError

logger = get_logger("service.audio")

DEFAULT_MIME_TYPE = "application/octet-stream"

MIME_TYPES = {
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
    "flac": "audio/flac",
    "m4a": "audio/mp4",
}


def is_remote_source(source: str) -> bool:
    """True for http(s) URLs and data URIs, which are sent as-is."""
    return source.startswith(("http://", "https://", "data:"))


def ensure_ffmpeg(binary: str = "ffmpeg") -> str:
    path = shutil.which(binary)
    if path is None:
        raise ConversionError(
            f"{binary} is required to convert audio files to WAV. "
            "Please install ffmpeg (e.g. brew install ffmpeg or apt install ffmpeg)"
        )
    return path


def normalize_to_wav_16k_mono(in_path: str, binary: str = "ffmpeg") -> str:
    """Convert ``in_path`` to a uniquely named ``<stem>_*_tmp.wav`` beside it and return the new path."""
    ensure_ffmpeg(binary)
    source = Path(in_path)
    try:
        out_fd, out_path = tempfile.mkstemp(dir=source.parent, prefix=f"{source.stem}_", suffix="_tmp.wav")
    except OSError as e:
        raise ConversionError(f"Could not create WAV file next to {in_path}: {e}") from e
    os.close(out_fd)
    # 16kHz mono s16le PCM without metadata chunks
    cmd = [
        binary, "-hide_banner", "-loglevel", "error",
        "-i", in_path,
        "-vn",
        "-acodec", "pcm_s16le",
        "-ar", "16000",
        "-ac", "1",
        "-write_bext", "0",
        "-fflags", "+bitexact",
        "-map_metadata", "-1",
        out_path,
        "-y",
    ]
    logger.info("Converting %s to WAV...", source.suffix.lstrip(".") or source.name)
    try:
        subprocess.run(cmd, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as e:
        _cleanup_temp_file(out_path)
        detail = (e.stderr or "").strip()
        logger.error("ffmpeg failed for %s: %s", in_path, detail)
        raise ConversionError(f"Failed to convert audio file to WAV: {detail or e}") from e
    except OSError as e:
        _cleanup_temp_file(out_path)
        raise ConversionError(f"Failed to run {binary}: {e}") from e

    if not os.path.isfile(out_path) or os.path.getsize(out_path) == 0:
        _cleanup_temp_file(out_path)
        raise ConversionError("Failed to convert audio file to WAV")
    logger.info("Conversion complete: %s", out_path)
    return out_path


def mime_type_for(path: str) -> str:
    ext = Path(path).suffix.lower().lstrip(".")
    return MIME_TYPES.get(ext, DEFAULT_MIME_TYPE)


def encode_data_uri(data: bytes, mime_type: str) -> str:
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    """Return ``(mime_type, data)`` for a base64 data URI."""
    if not uri.startswith("data:") or "," not in uri:
        raise InvalidArgumentError("Malformed data URI")
    header, payload = uri[len("data:"):].split(",", 1)
    if not header.endswith(";base64"):
        raise InvalidArgumentError("Only base64 data URIs are supported")
    mime_type = header[: -len(";base64")] or DEFAULT_MIME_TYPE
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidArgumentError(f"Malformed data URI payload: {e}") from e
    return mime_type, data


def file_to_data_uri(path: str) -> str:
    """Read a local file and encode it with the MIME type of its extension."""
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise InvalidArgumentError(f"Could not read audio file {path}: {e}") from e
    logger.info("File size: %d bytes", len(data))
    uri = encode_data_uri(data, mime_type_for(path))
    logger.info("Data URI length: %d characters", len(uri))
    return uri


def resolve_audio_source(source: str, ffmpeg_binary: str = "ffmpeg") -> str:
    """
    Turn the ``--file`` argument into the payload's audio_url.

    Args:
        source: Local path, http(s) URL or data URI
        ffmpeg_binary: Transcoder used for non-WAV files

    Returns:
        The URL or data URI unchanged, or a data URI built from the local file

    Raises:
        AudioNotFoundError: If the local file does not exist
        InvalidArgumentError: If the local file cannot be read
        ConversionError: If ffmpeg is missing or fails
    """
    if is_remote_source(source):
        logger.debug("Using remote audio source as-is")
        return source

    audio_path = os.path.expanduser(source)
    if not os.path.isfile(audio_path):
        raise AudioNotFoundError(f"Audio file not found: {audio_path}")

    if Path(audio_path).suffix.lower() == ".wav":
        return file_to_data_uri(audio_path)

    logger.info("File is not WAV format, checking for ffmpeg...")
    wav_path = normalize_to_wav_16k_mono(audio_path, ffmpeg_binary)
    try:
        return file_to_data_uri(wav_path)
    finally:
        _cleanup_temp_file(wav_path)


def _cleanup_temp_file(path: str) -> None:
    try:
        os.remove(path)
    except OSError as e:
        logger.warning("Could not remove temporary file %s: %s", path, e)
