import asyncio
import logging
from time import perf_counter

from deep_translator import GoogleTranslator
from deep_translator.exceptions import TranslationNotFound
from fastapi import Request

from .config import Settings
from .errors import ProviderResponseError
from .models import TranslationResult

LOGGER = logging.getLogger("tokenwise.translation")

PROVIDER_NAME = "google-translate"
INVALID_RESPONSE = "Invalid response from translation provider."


class GoogleTranslateClient:
    """Google Translate through deep-translator, run off the event loop."""

    provider = PROVIDER_NAME

    def __init__(self, settings: Settings) -> None:
        self.timeout = settings.translate_timeout_seconds

    def _translate_blocking(self, text: str, target_lang: str, source_lang: str) -> str | None:
        translator = GoogleTranslator(source=source_lang, target=target_lang)
        try:
            return translator.translate(text)
        except TranslationNotFound as e:
            raise ProviderResponseError(INVALID_RESPONSE) from e

    async def translate(self, text: str, target_lang: str, source_lang: str = "en") -> TranslationResult:
        started = perf_counter()
        # deep-translator has no timeout of its own; on expiry the worker thread is abandoned.
        translated = await asyncio.wait_for(
            asyncio.to_thread(self._translate_blocking, text, target_lang, source_lang),
            timeout=self.timeout,
        )
        latency_ms = (perf_counter() - started) * 1000

        if not isinstance(translated, str) or not translated.strip():
            LOGGER.error("Translation provider returned no text for %s->%s", source_lang, target_lang)
            raise ProviderResponseError(INVALID_RESPONSE)

        return TranslationResult(
            text=translated,
            source_lang=source_lang,
            target_lang=target_lang,
            latency_ms=latency_ms,
        )


def get_translator(request: Request) -> GoogleTranslateClient:
    return request.app.state.translator
