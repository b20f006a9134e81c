import asyncio
import logging
from time import perf_counter

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from ..bedrock import BedrockGateway, get_gateway
from ..errors import upstream_errors
from ..pricing import price_for_model
from ..schemas import (
    GenerateMetrics,
    GenerateRequest,
    GenerateResponse,
    GenerateTranslateResponse,
    Latencies,
    ModelsResponse,
    ModelSummary,
    OptimizedTokens,
    PerformanceMetrics,
)
from ..services import build_savings_report, token_counts
from ..translation import GoogleTranslateClient, get_translator

LOGGER = logging.getLogger("tokenwise.routers.bedrock")

BASELINE_LANGUAGE = "en"

router = APIRouter(prefix="/api/bedrock", tags=["bedrock"])


@router.get("/models", response_model=ModelsResponse)
async def list_models(gateway: BedrockGateway = Depends(get_gateway)) -> ModelsResponse:
    with upstream_errors("Model catalog"):
        summaries = await run_in_threadpool(gateway.list_text_models)
    return ModelsResponse(
        region=gateway.region,
        models=[ModelSummary.model_validate(summary) for summary in summaries],
    )


@router.post("/generate", response_model=GenerateResponse, response_model_exclude_none=True)
async def generate(
    payload: GenerateRequest,
    gateway: BedrockGateway = Depends(get_gateway),
) -> GenerateResponse:
    started = perf_counter()
    with upstream_errors("Generate route"):
        result = await run_in_threadpool(gateway.generate, payload.text, payload.language, payload.model)
    processing_time = (perf_counter() - started) * 1000

    return GenerateResponse(
        output_text=result.text,
        model=payload.model,
        language=payload.language,
        region=gateway.region,
        metrics=GenerateMetrics(
            tokens=OptimizedTokens(optimized=token_counts(result.usage)),
            performance=PerformanceMetrics(
                processing_time=processing_time,
                latencies=Latencies(optimized=result.latency_ms),
                strategies={"optimized": result.strategy},
            ),
        ),
    )


@router.post("/generate-translate", response_model=GenerateTranslateResponse)
async def generate_and_translate(
    payload: GenerateRequest,
    gateway: BedrockGateway = Depends(get_gateway),
    translator: GoogleTranslateClient = Depends(get_translator),
) -> GenerateTranslateResponse:
    started = perf_counter()
    with upstream_errors("Generate-translate route"):
        optimized, baseline = await asyncio.gather(
            run_in_threadpool(gateway.generate, payload.text, payload.language, payload.model),
            run_in_threadpool(gateway.generate, payload.text, BASELINE_LANGUAGE, payload.model),
        )
        translation = await translator.translate(optimized.text, BASELINE_LANGUAGE, payload.language)
    processing_time = (perf_counter() - started) * 1000

    report = build_savings_report(
        baseline=baseline,
        optimized=optimized,
        price=price_for_model(payload.model),
        input_chars=len(payload.text),
        translation_latency_ms=translation.latency_ms,
        processing_time_ms=processing_time,
    )
    LOGGER.info(
        "model=%s language=%s tokens english=%s optimized=%s saved=%s%%",
        payload.model,
        payload.language,
        baseline.usage.total,
        optimized.usage.total,
        report.tokens.savings.percentage,
    )
    return GenerateTranslateResponse(
        generated_text=optimized.text,
        translated_text=translation.text,
        source_lang=payload.language,
        target_lang=BASELINE_LANGUAGE,
        model=payload.model,
        region=gateway.region,
        metrics=report,
    )
