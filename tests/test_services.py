"""Savings calculator tests."""

from __future__ import annotations

import pytest

from tokenwise.app.models import GenerationResult, TokenUsage
from tokenwise.app.pricing import DEFAULT_PRICE, ModelPrice, price_for_model
from tokenwise.app.services import (
    break_even_chars,
    build_savings_report,
    calculate_cost,
    latency_increase,
    percentage,
)

PRICE = ModelPrice(input=1.0, output=3.0)


def result(input_tokens: int, output_tokens: int, latency_ms: float = 100.0) -> GenerationResult:
    return GenerationResult(
        text="text",
        usage=TokenUsage(input=input_tokens, output=output_tokens),
        latency_ms=latency_ms,
        strategy="converse",
    )


def report(baseline: GenerationResult, optimized: GenerationResult, price: ModelPrice = PRICE, chars: int = 120):
    return build_savings_report(
        baseline=baseline,
        optimized=optimized,
        price=price,
        input_chars=chars,
        translation_latency_ms=20.0,
        processing_time_ms=250.0,
    )


def test_reference_comparison() -> None:
    """100/100 vs 100/50 tokens at $1/$3 per million."""
    metrics = report(result(100, 100), result(100, 50))

    assert metrics.tokens.english.total == 200
    assert metrics.tokens.optimized.total == 150
    assert metrics.tokens.savings.absolute == 50
    assert metrics.tokens.savings.percentage == 25
    assert metrics.tokens.savings.output_savings_percent == 50
    assert metrics.costs.english.total == pytest.approx(0.0004)
    assert metrics.costs.optimized.total == pytest.approx(0.00025)
    assert metrics.costs.savings.absolute == pytest.approx(0.00015)
    assert metrics.costs.savings.percentage == 37.5
    assert metrics.costs.break_even == 120


def test_zero_baseline_has_no_division_by_zero() -> None:
    metrics = report(result(0, 0), result(10, 10))

    assert metrics.tokens.savings.absolute == 0
    assert metrics.tokens.savings.percentage == 0
    assert metrics.tokens.savings.output_savings_percent == 0
    assert metrics.costs.savings.absolute == 0
    assert metrics.costs.savings.percentage == 0


def test_identical_generations_report_no_savings() -> None:
    """Equal usage falls back to the character-count break-even."""
    metrics = report(result(80, 40), result(80, 40), chars=57)

    assert metrics.tokens.savings.absolute == 0
    assert metrics.tokens.savings.percentage == 0
    assert metrics.tokens.savings.output_savings_percent == 0
    assert metrics.costs.savings.absolute == 0
    assert metrics.costs.savings.percentage == 0
    assert metrics.costs.break_even == 57


def test_more_expensive_optimized_path_clamps_to_zero() -> None:
    metrics = report(result(100, 50), result(100, 200))

    assert metrics.tokens.savings.absolute == 0
    assert metrics.costs.savings.absolute == 0
    assert metrics.costs.optimized.total > metrics.costs.english.total


def test_break_even_scales_when_tokens_drop_but_cost_does_not() -> None:
    """Cheaper in tokens, dearer in dollars: break-even grows by the token ratio."""
    price = ModelPrice(input=10.0, output=1.0)
    metrics = report(result(100, 100), result(150, 0), price=price, chars=30)

    assert metrics.tokens.savings.percentage == 25
    assert metrics.costs.savings.absolute == 0
    assert metrics.costs.break_even == 40


def test_break_even_guards_full_token_savings() -> None:
    assert break_even_chars(50, has_cost_savings=False, token_savings_percent=100) == 0
    assert break_even_chars(50, has_cost_savings=True, token_savings_percent=100) == 50


def test_percentage_and_cost_helpers() -> None:
    assert percentage(1, 0) == 0
    assert percentage(1, 4) == 25
    assert calculate_cost(TokenUsage(input=2_000_000, output=1_000_000), PRICE) == pytest.approx(5.0)


def test_latency_increase_ratio() -> None:
    assert latency_increase(400.0, 600.0, 50.0) == "1.6x"
    assert latency_increase(0.0, 600.0, 50.0) == "0.0x"


def test_performance_section() -> None:
    metrics = report(result(10, 10, latency_ms=100.0), result(10, 5, latency_ms=200.0))

    assert metrics.performance.processing_time == 250.0
    assert metrics.performance.latencies.baseline == 100.0
    assert metrics.performance.latencies.optimized == 200.0
    assert metrics.performance.latencies.translation == 20.0
    assert metrics.performance.estimated_latency_increase == "2.2x"


def test_token_usage_invariants() -> None:
    usage = TokenUsage(input=7, output=5)
    assert usage.total == 12
    with pytest.raises(ValueError):
        TokenUsage(input=-1, output=0)


@pytest.mark.parametrize(
    "model_id, expected",
    [
        ("anthropic.claude-3-haiku-20240307-v1:0", ModelPrice(input=0.25, output=1.25)),
        ("us.anthropic.claude-3-5-haiku-20241022-v1:0", ModelPrice(input=0.8, output=4.0)),
        ("cohere.command-r-plus-v1:0", ModelPrice(input=3.0, output=15.0)),
        ("cohere.command-r-v1:0", ModelPrice(input=0.5, output=1.5)),
        ("AMAZON.TITAN-TEXT-EXPRESS-V1", ModelPrice(input=0.2, output=0.6)),
        ("someone.unknown-model", DEFAULT_PRICE),
    ],
)
def test_price_lookup(model_id: str, expected: ModelPrice) -> None:
    assert price_for_model(model_id) == expected
