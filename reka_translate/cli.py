"""
Command line entry point: reka-translate -f <file|url|data-uri> [options]
"""

import argparse
import json
import sys
from typing import List, Optional

from reka_translate.config.logging import configure_logging, get_logger
from reka_translate.config.settings import get_settings
from reka_translate.models.errors import InvalidArgumentError, RekaError
from reka_translate.models.schemas import SUPPORTED_LANGUAGES
from reka_translate.services.audio_service import resolve_audio_source
from reka_translate.services.credentials_service import load_api_key
from reka_translate.services.translation_service import (
    RequestParams,
    TranslationResult,
    TranslationService,
    validate_language,
)

logger = get_logger("cli")

EXAMPLES = """Examples:
  reka-translate -f "audio.mp3"
  reka-translate -f "~/audio.wav" --translate true --language french
  reka-translate --file "https://example.com/audio.mp3" --translate true --language french
  reka-translate -f "audio.mp3" -t true -l spanish -a true"""


class CliArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports errors through InvalidArgumentError."""

    def error(self, message):
        raise InvalidArgumentError(f"{message}\n{self.format_usage().rstrip()}")


def str2bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got '{value}'")


def build_parser() -> argparse.ArgumentParser:
    ap = CliArgumentParser(
        prog="reka-translate",
        description="Transcribe or translate audio with the Reka API.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("-f", "--file", required=True, dest="audio_source",
                    help="Local audio file path, URL, or data URI")
    ap.add_argument("-l", "--language", default="english",
                    help=f"Target language (default: english). Supported: {', '.join(SUPPORTED_LANGUAGES)}")
    ap.add_argument("-t", "--translate", type=str2bool, default=False, metavar="{true,false}",
                    help="true for translation, false for transcription (default: false)")
    ap.add_argument("-a", "--audio", type=str2bool, default=False, metavar="{true,false}",
                    help="true to return translated audio (default: false, only with -t true)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log debug output, including the raw response")
    return ap


def parse_params(argv: Optional[List[str]] = None) -> tuple[RequestParams, bool]:
    args = build_parser().parse_args(argv)
    params = RequestParams(
        audio_source=args.audio_source,
        target_language=args.language,
        is_translate=args.translate,
        return_audio=args.audio,
    )
    return params, args.verbose


def print_result(result: TranslationResult) -> None:
    text = result.text
    if text and text.strip():
        print(text)
    else:
        logger.warning("No text found in response")

    if result.audio:
        print()
        print(f"Audio: {result.audio}")

    if not text:
        print("Response:")
        print(json.dumps(result.raw, indent=2, ensure_ascii=False))


def run(params: RequestParams) -> TranslationResult:
    settings = get_settings()

    audio_url = resolve_audio_source(params.audio_source, settings.ffmpeg_binary)
    validate_language(params.target_language)
    if params.return_audio and not params.is_translate:
        logger.warning("Translated audio is only returned with --translate true")
    api_key = load_api_key(settings.api_key_file)

    service = TranslationService(settings)
    return service.translate(params, audio_url, api_key)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        params, verbose = parse_params(argv)
        settings = get_settings()
        configure_logging("DEBUG" if verbose else settings.log_level)
        result = run(params)
    except RekaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code

    print_result(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
