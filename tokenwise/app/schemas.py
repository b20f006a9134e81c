from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from .providers import is_generative_model


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, protected_namespaces=())


def _require_non_blank(value: str, info: ValidationInfo) -> str:
    if not value.strip():
        raise ValueError(f'Parameter "{to_camel(info.field_name)}" (non-empty string) is required.')
    return value


class TranslateRequest(CamelModel):
    text: str
    target_lang: str
    source_lang: str | None = "en"

    @field_validator("text", "target_lang")
    @classmethod
    def _non_blank(cls, value: str, info: ValidationInfo) -> str:
        return _require_non_blank(value, info)

    @field_validator("source_lang")
    @classmethod
    def _default_source(cls, value: str | None) -> str:
        return value.strip() if value and value.strip() else "en"


class GenerateRequest(CamelModel):
    text: str
    language: str
    model: str

    @field_validator("text", "language", "model")
    @classmethod
    def _non_blank(cls, value: str, info: ValidationInfo) -> str:
        value = _require_non_blank(value, info)
        if info.field_name == "model" and not is_generative_model(value):
            raise ValueError(f'Model "{value}" is not a text-generation model.')
        return value


class TranslateResponse(CamelModel):
    translated_text: str
    provider: str
    target_lang: str
    source_lang: str


class ModelSummary(CamelModel):
    model_id: str
    model_name: str | None = None
    provider_name: str | None = None
    input_modalities: list[str] = Field(default_factory=list)
    output_modalities: list[str] = Field(default_factory=list)
    inference_types_supported: list[str] = Field(default_factory=list)


class ModelsResponse(CamelModel):
    region: str
    models: list[ModelSummary]


class TokenCounts(CamelModel):
    input: int = Field(..., ge=0)
    output: int = Field(..., ge=0)
    total: int = Field(..., ge=0)


class TokenSavings(CamelModel):
    absolute: int = Field(..., ge=0)
    percentage: float = Field(..., ge=0)
    output_savings_percent: float = Field(..., ge=0)


class TokenMetrics(CamelModel):
    english: TokenCounts
    optimized: TokenCounts
    savings: TokenSavings


class EnglishCost(CamelModel):
    total: float = Field(..., ge=0)


class OptimizedCost(CamelModel):
    model: float = Field(..., ge=0)
    translation: float = Field(..., ge=0)
    total: float = Field(..., ge=0)


class CostSavings(CamelModel):
    absolute: float = Field(..., ge=0)
    percentage: float = Field(..., ge=0)


class CostMetrics(CamelModel):
    english: EnglishCost
    optimized: OptimizedCost
    savings: CostSavings
    break_even: int = Field(..., ge=0)


class Latencies(CamelModel):
    baseline: float | None = None
    optimized: float
    translation: float | None = None


class PerformanceMetrics(CamelModel):
    processing_time: float
    latencies: Latencies
    strategies: dict[str, str] = Field(default_factory=dict)
    estimated_latency_increase: str | None = None


class SavingsReport(CamelModel):
    tokens: TokenMetrics
    costs: CostMetrics
    performance: PerformanceMetrics


class OptimizedTokens(CamelModel):
    optimized: TokenCounts


class GenerateMetrics(CamelModel):
    tokens: OptimizedTokens
    performance: PerformanceMetrics


class GenerateResponse(CamelModel):
    output_text: str
    model: str
    language: str
    region: str
    metrics: GenerateMetrics


class GenerateTranslateResponse(CamelModel):
    generated_text: str
    translated_text: str
    source_lang: str
    target_lang: str = "en"
    model: str
    region: str
    metrics: SavingsReport
