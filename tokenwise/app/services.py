import math

from .models import GenerationResult, TokenUsage
from .pricing import ModelPrice
from .schemas import (
    CostMetrics,
    CostSavings,
    EnglishCost,
    Latencies,
    OptimizedCost,
    PerformanceMetrics,
    SavingsReport,
    TokenCounts,
    TokenMetrics,
    TokenSavings,
)

TOKENS_PER_PRICE_UNIT = 1_000_000

# The translation provider is keyless and free.
TRANSLATION_COST = 0.0


def percentage(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    return part / whole * 100


def calculate_cost(usage: TokenUsage, price: ModelPrice) -> float:
    return (
        usage.input / TOKENS_PER_PRICE_UNIT * price.input
        + usage.output / TOKENS_PER_PRICE_UNIT * price.output
    )


def token_counts(usage: TokenUsage) -> TokenCounts:
    return TokenCounts(input=usage.input, output=usage.output, total=usage.total)


def break_even_chars(input_chars: int, has_cost_savings: bool, token_savings_percent: float) -> int:
    if has_cost_savings:
        return input_chars
    denominator = 1 - token_savings_percent / 100
    if denominator <= 0:
        return 0
    return math.ceil(input_chars / denominator)


def latency_increase(baseline_ms: float, optimized_ms: float, translation_ms: float) -> str:
    ratio = (optimized_ms + translation_ms) / baseline_ms if baseline_ms > 0 else 0.0
    return f"{ratio:.1f}x"


def build_savings_report(
    baseline: GenerationResult,
    optimized: GenerationResult,
    price: ModelPrice,
    input_chars: int,
    translation_latency_ms: float,
    processing_time_ms: float,
) -> SavingsReport:
    baseline_total = baseline.usage.total
    token_savings = max(0, baseline_total - optimized.usage.total)
    token_savings_percent = round(percentage(token_savings, baseline_total), 1)
    output_savings = max(0, baseline.usage.output - optimized.usage.output)
    output_savings_percent = round(percentage(output_savings, baseline.usage.output), 1)

    english_cost = calculate_cost(baseline.usage, price)
    optimized_model_cost = calculate_cost(optimized.usage, price)
    optimized_cost = optimized_model_cost + TRANSLATION_COST
    cost_savings = max(0.0, english_cost - optimized_cost)
    cost_savings_percent = round(percentage(cost_savings, english_cost), 1)

    return SavingsReport(
        tokens=TokenMetrics(
            english=token_counts(baseline.usage),
            optimized=token_counts(optimized.usage),
            savings=TokenSavings(
                absolute=token_savings,
                percentage=token_savings_percent,
                output_savings_percent=output_savings_percent,
            ),
        ),
        costs=CostMetrics(
            english=EnglishCost(total=english_cost),
            optimized=OptimizedCost(
                model=optimized_model_cost,
                translation=TRANSLATION_COST,
                total=optimized_cost,
            ),
            savings=CostSavings(absolute=cost_savings, percentage=cost_savings_percent),
            break_even=break_even_chars(input_chars, cost_savings > 0, token_savings_percent),
        ),
        performance=PerformanceMetrics(
            processing_time=processing_time_ms,
            latencies=Latencies(
                baseline=baseline.latency_ms,
                optimized=optimized.latency_ms,
                translation=translation_latency_ms,
            ),
            strategies={"baseline": baseline.strategy, "optimized": optimized.strategy},
            estimated_latency_increase=latency_increase(
                baseline.latency_ms, optimized.latency_ms, translation_latency_ms
            ),
        ),
    )
