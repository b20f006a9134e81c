"""Translation adapter tests with deep-translator's GoogleTranslator patched out."""

from __future__ import annotations

import asyncio
import time

import pytest
from deep_translator import GoogleTranslator
from deep_translator.exceptions import TranslationNotFound

from tokenwise.app.config import Settings
from tokenwise.app.errors import ProviderResponseError
from tokenwise.app.translation import GoogleTranslateClient


@pytest.fixture
def calls(monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, str, str]]:
    """Replace the network call and record (text, source, target)."""
    seen: list[tuple[str, str, str]] = []

    def fake_translate(self: GoogleTranslator, text: str, **kwargs: object) -> str:
        seen.append((text, self.source, self.target))
        return "Hello. How are you?"

    monkeypatch.setattr(GoogleTranslator, "translate", fake_translate)
    return seen


def make_client(timeout: float = 3.0) -> GoogleTranslateClient:
    return GoogleTranslateClient(Settings(translate_timeout_seconds=timeout))


def test_translate_returns_provider_text(calls: list[tuple[str, str, str]]) -> None:
    result = asyncio.run(make_client().translate("你好。你好吗？", "en", "zh-CN"))

    assert result.text == "Hello. How are you?"
    assert result.source_lang == "zh-CN"
    assert result.target_lang == "en"
    assert result.latency_ms >= 0
    assert calls == [("你好。你好吗？", "zh-CN", "en")]


def test_long_reply_is_handed_to_library(calls: list[tuple[str, str, str]]) -> None:
    """A reply of a few thousand characters goes through the library unchanged."""
    text = "日本語の文章です。" * 300

    asyncio.run(make_client().translate(text, "en", "ja"))

    assert calls == [(text, "ja", "en")]


def test_same_language_still_reaches_provider(calls: list[tuple[str, str, str]]) -> None:
    result = asyncio.run(make_client().translate("Hello", "en", "en"))

    assert result.text == "Hello. How are you?"
    assert len(calls) == 1


@pytest.mark.parametrize("answer", [None, "", "   "])
def test_empty_result_raises_provider_error(monkeypatch: pytest.MonkeyPatch, answer: str | None) -> None:
    monkeypatch.setattr(GoogleTranslator, "translate", lambda self, text, **kwargs: answer)

    with pytest.raises(ProviderResponseError, match="Invalid response from translation provider."):
        asyncio.run(make_client().translate("hello", "ko"))


def test_translation_not_found_raises_provider_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def not_found(self: GoogleTranslator, text: str, **kwargs: object) -> str:
        raise TranslationNotFound(text)

    monkeypatch.setattr(GoogleTranslator, "translate", not_found)

    with pytest.raises(ProviderResponseError):
        asyncio.run(make_client().translate("hello", "ko"))


def test_other_library_errors_propagate(monkeypatch: pytest.MonkeyPatch) -> None:
    """Transport failures are left for the route's 500 handling."""

    def boom(self: GoogleTranslator, text: str, **kwargs: object) -> str:
        raise ConnectionError("socket closed")

    monkeypatch.setattr(GoogleTranslator, "translate", boom)

    with pytest.raises(ConnectionError):
        asyncio.run(make_client().translate("hello", "ko"))


def test_slow_provider_times_out(monkeypatch: pytest.MonkeyPatch) -> None:
    def slow(self: GoogleTranslator, text: str, **kwargs: object) -> str:
        time.sleep(0.5)
        return "late"

    monkeypatch.setattr(GoogleTranslator, "translate", slow)

    with pytest.raises(asyncio.TimeoutError):
        asyncio.run(make_client(timeout=0.05).translate("hello", "ko"))
