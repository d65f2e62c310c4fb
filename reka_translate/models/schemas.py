from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict

SUPPORTED_LANGUAGES = (
    "english",
    "french",
    "spanish",
    "japanese",
    "chinese",
    "korean",
    "italian",
    "portuguese",
    "german",
)

TargetLanguage = Literal[
    "english",
    "french",
    "spanish",
    "japanese",
    "chinese",
    "korean",
    "italian",
    "portuguese",
    "german",
]


class TranslationRequest(BaseModel):
    """JSON body sent to the transcription_or_translation endpoint."""

    model_config = ConfigDict(frozen=True)

    audio_url: str
    sampling_rate: int = 16000
    temperature: float = 0
    max_tokens: int = 1024
    target_language: TargetLanguage = "english"
    is_translate: bool = False
    return_translation_audio: bool = False


class ResultItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    text: Optional[Any] = None
    audio_url: Optional[Any] = None


def _first_string(*candidates: Any) -> Optional[str]:
    for candidate in candidates:
        if isinstance(candidate, str):
            return candidate
    return None


class TranslationResponse(BaseModel):
    """Response body. Candidate fields of the wrong type are skipped, not rejected."""

    model_config = ConfigDict(extra="allow")

    error: Optional[Any] = None
    transcript: Optional[Any] = None
    text: Optional[Any] = None
    results: Optional[List[Optional[ResultItem]]] = None
    audio_url: Optional[Any] = None
    audio_data: Optional[Any] = None

    def _first_result(self) -> ResultItem:
        if self.results and self.results[0] is not None:
            return self.results[0]
        return ResultItem()

    def first_text(self) -> Optional[str]:
        """Return the first text field the API filled in."""
        return _first_string(self.transcript, self._first_result().text, self.text)

    def first_audio(self) -> Optional[str]:
        return _first_string(self._first_result().audio_url, self.audio_url, self.audio_data)
