import json
import logging
from dataclasses import dataclass
from time import perf_counter
from typing import Any

import boto3
from botocore.config import Config
from fastapi import Request

from .config import Settings
from .models import GenerationResult
from .providers import (
    ProviderFamily,
    build_invoke_body,
    build_prompt,
    classify_model,
    extract_text,
    extract_usage,
    is_generative_model,
)

LOGGER = logging.getLogger("tokenwise.bedrock")

CONVERSE = "converse"
INVOKE = "invoke"


@dataclass(frozen=True)
class Attempt:
    """Outcome of one generation strategy: either a result or the error that stopped it."""

    strategy: str
    result: GenerationResult | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None


def _decode_body(raw: bytes | str) -> Any:
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    try:
        return json.loads(text)
    except ValueError:
        return text


def _elapsed_ms(started: float) -> float:
    return (perf_counter() - started) * 1000


class BedrockGateway:
    """Bedrock runtime and catalog access.

    Generation tries the unified Converse API first and falls back to the
    legacy InvokeModel API with a family-specific body. Both clients are
    created once and shared across requests.
    """

    def __init__(
        self,
        settings: Settings,
        runtime_client: Any | None = None,
        catalog_client: Any | None = None,
    ) -> None:
        self.settings = settings
        boto_config = Config(
            connect_timeout=settings.connect_timeout_seconds,
            read_timeout=settings.read_timeout_seconds,
            retries={"total_max_attempts": 1, "mode": "standard"},
        )
        self.runtime = runtime_client or boto3.client(
            service_name="bedrock-runtime", region_name=settings.region, config=boto_config
        )
        self.catalog = catalog_client or boto3.client(
            service_name="bedrock", region_name=settings.region, config=boto_config
        )

    @property
    def region(self) -> str:
        return self.settings.region

    def generate(self, text: str, language: str, model_id: str) -> GenerationResult:
        prompt = build_prompt(text, language)
        family = classify_model(model_id)

        attempt = self.converse(model_id, family, prompt)
        if attempt.ok:
            return attempt.result

        LOGGER.warning(
            "Converse failed for model=%s family=%s, falling back to InvokeModel: %s",
            model_id,
            family.value,
            attempt.error,
        )
        fallback = self.invoke(model_id, family, prompt)
        if fallback.ok:
            return fallback.result
        raise fallback.error

    def converse(self, model_id: str, family: ProviderFamily, prompt: str) -> Attempt:
        started = perf_counter()
        try:
            response = self.runtime.converse(
                modelId=model_id,
                messages=[{"role": "user", "content": [{"text": prompt}]}],
                inferenceConfig={
                    "maxTokens": self.settings.max_tokens,
                    "temperature": self.settings.temperature,
                },
            )
            latency_ms = _elapsed_ms(started)
            text = extract_text(family, response)
        except Exception as e:
            return Attempt(strategy=CONVERSE, error=e)

        return Attempt(
            strategy=CONVERSE,
            result=GenerationResult(
                text=text,
                usage=extract_usage(response),
                latency_ms=latency_ms,
                strategy=CONVERSE,
            ),
        )

    def invoke(self, model_id: str, family: ProviderFamily, prompt: str) -> Attempt:
        payload = build_invoke_body(family, prompt, self.settings.max_tokens, self.settings.temperature)
        started = perf_counter()
        try:
            response = self.runtime.invoke_model(
                modelId=model_id,
                body=json.dumps(payload),
                contentType="application/json",
                accept="application/json",
            )
            body = _decode_body(response["body"].read())
            latency_ms = _elapsed_ms(started)
            text = extract_text(family, body)
        except Exception as e:
            return Attempt(strategy=INVOKE, error=e)

        headers = response.get("ResponseMetadata", {}).get("HTTPHeaders", {})
        return Attempt(
            strategy=INVOKE,
            result=GenerationResult(
                text=text,
                usage=extract_usage(body, headers),
                latency_ms=latency_ms,
                strategy=INVOKE,
                fell_back=True,
            ),
        )

    def list_text_models(self) -> list[dict[str, Any]]:
        response = self.catalog.list_foundation_models(byOutputModality="TEXT")
        models = []
        for summary in response.get("modelSummaries", []):
            model_id = summary.get("modelId", "")
            if "TEXT" not in (summary.get("outputModalities") or []):
                continue
            if not model_id or not is_generative_model(model_id):
                continue
            models.append(
                {
                    "modelId": model_id,
                    "modelName": summary.get("modelName"),
                    "providerName": summary.get("providerName"),
                    "inputModalities": summary.get("inputModalities") or [],
                    "outputModalities": summary.get("outputModalities") or [],
                    "inferenceTypesSupported": summary.get("inferenceTypesSupported") or [],
                }
            )
        return models


def get_gateway(request: Request) -> BedrockGateway:
    return request.app.state.gateway
