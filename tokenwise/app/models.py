from dataclasses import dataclass


@dataclass(frozen=True)
class TokenUsage:
    input: int = 0
    output: int = 0

    def __post_init__(self) -> None:
        if self.input < 0 or self.output < 0:
            raise ValueError("Token counts must be non-negative.")

    @property
    def total(self) -> int:
        return self.input + self.output


@dataclass(frozen=True)
class GenerationResult:
    text: str
    usage: TokenUsage
    latency_ms: float
    strategy: str
    fell_back: bool = False


@dataclass(frozen=True)
class TranslationResult:
    text: str
    source_lang: str
    target_lang: str
    latency_ms: float = 0.0
