"""Bedrock provider families: request bodies, text probes and usage parsing.

Every model identifier is classified once into a :class:`ProviderFamily`.
The family decides how the legacy ``InvokeModel`` body is built and which
response shape is probed first when pulling text out of the reply.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping

from .errors import ProviderResponseError
from .models import TokenUsage

NON_GENERATIVE_PATTERN = re.compile(r"rerank|embed|embedding", re.IGNORECASE)

ANTHROPIC_VERSION = "bedrock-2023-05-31"

LANGUAGE_NAMES = {
    "en": "English",
    "zh": "Chinese",
    "zh-cn": "Chinese (Simplified)",
    "zh-tw": "Chinese (Traditional)",
    "ja": "Japanese",
    "ko": "Korean",
    "pl": "Polish",
    "de": "German",
    "fr": "French",
    "es": "Spanish",
    "it": "Italian",
    "pt": "Portuguese",
    "ru": "Russian",
    "ar": "Arabic",
    "hi": "Hindi",
    "vi": "Vietnamese",
    "th": "Thai",
}


class ProviderFamily(str, Enum):
    ANTHROPIC = "anthropic"
    META = "meta"
    COHERE = "cohere"
    TITAN = "titan"
    GENERIC = "generic"


def is_generative_model(model_id: str) -> bool:
    return NON_GENERATIVE_PATTERN.search(model_id) is None


def classify_model(model_id: str) -> ProviderFamily:
    normalized = model_id.lower()
    if "anthropic." in normalized or "claude" in normalized:
        return ProviderFamily.ANTHROPIC
    if "meta." in normalized or "llama" in normalized:
        return ProviderFamily.META
    if "cohere." in normalized or "command" in normalized:
        return ProviderFamily.COHERE
    if "amazon.titan" in normalized:
        return ProviderFamily.TITAN
    return ProviderFamily.GENERIC


def language_name(code: str) -> str:
    normalized = code.strip().lower()
    if normalized in LANGUAGE_NAMES:
        return LANGUAGE_NAMES[normalized]
    base = normalized.split("-")[0]
    return LANGUAGE_NAMES.get(base, code)


def build_prompt(text: str, language: str) -> str:
    name = language_name(language)
    return (
        f"Respond entirely in {name}. "
        f"If the request asks for a translation, translate into {name}; "
        f"otherwise perform the task as asked.\n\n{text}"
    )


# ---------------------------------------------------------------------------
# Legacy InvokeModel bodies
# ---------------------------------------------------------------------------

def _anthropic_body(prompt: str, max_tokens: int, temperature: float) -> dict[str, Any]:
    return {
        "anthropic_version": ANTHROPIC_VERSION,
        "max_tokens": max_tokens,
        "temperature": temperature,
        "messages": [{"role": "user", "content": [{"type": "text", "text": prompt}]}],
    }


def _meta_body(prompt: str, max_tokens: int, temperature: float) -> dict[str, Any]:
    return {"prompt": prompt, "max_gen_len": max_tokens, "temperature": temperature}


def _cohere_body(prompt: str, max_tokens: int, temperature: float) -> dict[str, Any]:
    return {"message": prompt, "max_tokens": max_tokens, "temperature": temperature}


def _titan_body(prompt: str, max_tokens: int, temperature: float) -> dict[str, Any]:
    return {
        "inputText": prompt,
        "textGenerationConfig": {"maxTokenCount": max_tokens, "temperature": temperature},
    }


def _generic_body(prompt: str, max_tokens: int, temperature: float) -> dict[str, Any]:
    return {"prompt": prompt, "max_tokens": max_tokens, "temperature": temperature}


# ---------------------------------------------------------------------------
# Text probes: each returns the generated text or None when the shape differs
# ---------------------------------------------------------------------------

def _first(value: Any) -> Any:
    if isinstance(value, list) and value:
        return value[0]
    return None


def _non_empty(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _join_blocks(blocks: Any) -> str | None:
    if not isinstance(blocks, list):
        return None
    parts = [block["text"] for block in blocks if isinstance(block, dict) and isinstance(block.get("text"), str)]
    return _non_empty("".join(parts))


def probe_content_blocks(body: Mapping[str, Any]) -> str | None:
    text = _join_blocks(body.get("content"))
    if text is not None:
        return text
    output = body.get("output")
    if isinstance(output, dict) and isinstance(output.get("message"), dict):
        return _join_blocks(output["message"].get("content"))
    return None


def probe_titan_results(body: Mapping[str, Any]) -> str | None:
    result = _first(body.get("results"))
    return _non_empty(result.get("outputText")) if isinstance(result, dict) else None


def probe_generation(body: Mapping[str, Any]) -> str | None:
    return _non_empty(body.get("generation"))


def probe_generations(body: Mapping[str, Any]) -> str | None:
    generation = _first(body.get("generations"))
    return _non_empty(generation.get("text")) if isinstance(generation, dict) else None


def probe_text_field(body: Mapping[str, Any]) -> str | None:
    return _non_empty(body.get("text"))


def probe_outputs(body: Mapping[str, Any]) -> str | None:
    output = _first(body.get("outputs"))
    return _non_empty(output.get("text")) if isinstance(output, dict) else None


def probe_choices(body: Mapping[str, Any]) -> str | None:
    choice = _first(body.get("choices"))
    if not isinstance(choice, dict):
        return None
    message = choice.get("message")
    if isinstance(message, dict):
        return _non_empty(message.get("content"))
    return _non_empty(choice.get("text"))


TEXT_PROBES: tuple[Callable[[Mapping[str, Any]], str | None], ...] = (
    probe_content_blocks,
    probe_titan_results,
    probe_generation,
    probe_generations,
    probe_text_field,
    probe_outputs,
    probe_choices,
)


@dataclass(frozen=True)
class FamilyAdapter:
    build_body: Callable[[str, int, float], dict[str, Any]]
    text_probe: Callable[[Mapping[str, Any]], str | None]


ADAPTERS: dict[ProviderFamily, FamilyAdapter] = {
    ProviderFamily.ANTHROPIC: FamilyAdapter(_anthropic_body, probe_content_blocks),
    ProviderFamily.META: FamilyAdapter(_meta_body, probe_generation),
    ProviderFamily.COHERE: FamilyAdapter(_cohere_body, probe_text_field),
    ProviderFamily.TITAN: FamilyAdapter(_titan_body, probe_titan_results),
    ProviderFamily.GENERIC: FamilyAdapter(_generic_body, probe_outputs),
}


def build_invoke_body(family: ProviderFamily, prompt: str, max_tokens: int, temperature: float) -> dict[str, Any]:
    return ADAPTERS[family].build_body(prompt, max_tokens, temperature)


def extract_text(family: ProviderFamily, body: Any) -> str:
    """Pull generated text out of a provider reply.

    The family's native shape is tried first, then every other known shape.
    A bare string body is taken as the text itself.

    Raises:
        ProviderResponseError: when no known shape carries text.
    """
    if isinstance(body, str):
        text = _non_empty(body)
        if text is not None:
            return text
        raise ProviderResponseError("Unparseable model response")
    if isinstance(body, Mapping):
        preferred = ADAPTERS[family].text_probe
        for probe in (preferred, *[p for p in TEXT_PROBES if p is not preferred]):
            text = probe(body)
            if text is not None:
                return text
    raise ProviderResponseError("Unparseable model response")


# ---------------------------------------------------------------------------
# Token usage
# ---------------------------------------------------------------------------

INPUT_TOKEN_HEADER = "x-amzn-bedrock-input-token-count"
OUTPUT_TOKEN_HEADER = "x-amzn-bedrock-output-token-count"


def _count(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return max(0, int(value))
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _pair(input_value: Any, output_value: Any) -> TokenUsage | None:
    input_tokens, output_tokens = _count(input_value), _count(output_value)
    if input_tokens is None and output_tokens is None:
        return None
    return TokenUsage(input=input_tokens or 0, output=output_tokens or 0)


def extract_usage(body: Any, headers: Mapping[str, str] | None = None) -> TokenUsage:
    """Read token counters from any known reply shape; zeros when none match."""
    if isinstance(body, Mapping):
        usage = body.get("usage")
        if isinstance(usage, Mapping):
            for input_key, output_key in (
                ("inputTokens", "outputTokens"),
                ("input_tokens", "output_tokens"),
                ("prompt_tokens", "completion_tokens"),
            ):
                found = _pair(usage.get(input_key), usage.get(output_key))
                if found is not None:
                    return found

        if "inputTextTokenCount" in body:
            result = _first(body.get("results"))
            output_count = result.get("tokenCount") if isinstance(result, dict) else None
            found = _pair(body.get("inputTextTokenCount"), output_count)
            if found is not None:
                return found

        found = _pair(body.get("prompt_token_count"), body.get("generation_token_count"))
        if found is not None:
            return found

    if headers:
        lowered = {key.lower(): value for key, value in headers.items()}
        found = _pair(lowered.get(INPUT_TOKEN_HEADER), lowered.get(OUTPUT_TOKEN_HEADER))
        if found is not None:
            return found

    return TokenUsage()
