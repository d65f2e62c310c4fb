"""
Translation Service - builds the request, calls the API and reads the answer.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError

from reka_translate.config.logging import get_logger
from reka_translate.config.settings_base import AppSettings
from reka_translate.models.errors import ApiError, InvalidArgumentError, NetworkError
from reka_translate.models.schemas import SUPPORTED_LANGUAGES, TranslationRequest, TranslationResponse

logger = get_logger("service.translation")

RAW_RESPONSE_LOG_LIMIT = 1000


@dataclass(frozen=True)
class RequestParams:
    audio_source: str
    target_language: str = "english"
    is_translate: bool = False
    return_audio: bool = False


@dataclass
class TranslationResult:
    text: Optional[str]
    audio: Optional[str]
    raw: Dict[str, Any]


def validate_language(language: str) -> str:
    if language not in SUPPORTED_LANGUAGES:
        raise InvalidArgumentError(
            f"Invalid target language: {language}\n"
            f"Supported languages: {' '.join(SUPPORTED_LANGUAGES)}"
        )
    return language


class TranslationService:
    """Single-shot client for the transcription_or_translation endpoint."""

    def __init__(self, settings: AppSettings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()

    def build_payload(self, params: RequestParams, audio_url: str) -> TranslationRequest:
        return TranslationRequest(
            audio_url=audio_url,
            sampling_rate=self.settings.sampling_rate,
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_tokens,
            target_language=validate_language(params.target_language),
            is_translate=params.is_translate,
            return_translation_audio=params.return_audio,
        )

    def submit(self, payload: TranslationRequest, api_key: str) -> Dict[str, Any]:
        """
        POST the payload and decode the JSON body.

        Raises:
            NetworkError: If the request could not be sent
            ApiError: If the body is not a JSON object
        """
        body = payload.model_dump_json()
        logger.info("Request payload size: %d bytes", len(body.encode("utf-8")))
        logger.info("Sending request to API...")

        try:
            response = self.session.post(
                self.settings.api_endpoint,
                data=body,
                headers={"X-Api-Key": api_key, "Content-Type": "application/json"},
            )
        except requests.RequestException as e:
            logger.debug("Request to %s failed", self.settings.api_endpoint, exc_info=True)
            raise NetworkError(f"Failed to connect to API: {e}") from e

        logger.info("Response length: %d characters", len(response.text))
        try:
            data = response.json()
        except ValueError as e:
            raise ApiError(
                f"API returned a non-JSON response (HTTP {response.status_code}): {response.text[:200]}",
                status_code=response.status_code,
            ) from e

        if len(response.text) < RAW_RESPONSE_LOG_LIMIT:
            logger.debug("Raw response:\n%s", json.dumps(data, indent=2, ensure_ascii=False))

        if not isinstance(data, dict):
            raise ApiError(f"Unexpected API response: {response.text[:200]}", status_code=response.status_code)
        return data

    def parse_response(self, data: Dict[str, Any], want_audio: bool) -> TranslationResult:
        # error is reported whatever the rest of the body looks like
        error = data.get("error")
        if error:
            message = error if isinstance(error, str) else json.dumps(error, ensure_ascii=False)
            raise ApiError(message)

        try:
            parsed = TranslationResponse.model_validate(data)
        except ValidationError as e:
            raise ApiError(f"Unexpected API response shape: {e}") from e

        return TranslationResult(
            text=parsed.first_text(),
            audio=parsed.first_audio() if want_audio else None,
            raw=data,
        )

    def translate(self, params: RequestParams, audio_url: str, api_key: str) -> TranslationResult:
        payload = self.build_payload(params, audio_url)
        data = self.submit(payload, api_key)
        return self.parse_response(data, params.return_audio)
