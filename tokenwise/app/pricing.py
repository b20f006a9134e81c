from dataclasses import dataclass


@dataclass(frozen=True)
class ModelPrice:
    """USD per million tokens."""

    input: float
    output: float


# First matching substring wins, so more specific patterns come first.
PRICE_TABLE: tuple[tuple[str, ModelPrice], ...] = (
    ("claude-3-5-haiku", ModelPrice(input=0.8, output=4.0)),
    ("claude-3-haiku", ModelPrice(input=0.25, output=1.25)),
    ("claude-haiku-4", ModelPrice(input=1.0, output=5.0)),
    ("claude-3-opus", ModelPrice(input=15.0, output=75.0)),
    ("claude-opus-4", ModelPrice(input=15.0, output=75.0)),
    ("claude-3-sonnet", ModelPrice(input=3.0, output=15.0)),
    ("claude-3-5-sonnet", ModelPrice(input=3.0, output=15.0)),
    ("claude-3-7-sonnet", ModelPrice(input=3.0, output=15.0)),
    ("claude-sonnet-4", ModelPrice(input=3.0, output=15.0)),
    ("titan-text-lite", ModelPrice(input=0.15, output=0.2)),
    ("titan-text-express", ModelPrice(input=0.2, output=0.6)),
    ("titan-text-premier", ModelPrice(input=0.5, output=1.5)),
    ("nova-micro", ModelPrice(input=0.035, output=0.14)),
    ("nova-lite", ModelPrice(input=0.06, output=0.24)),
    ("nova-pro", ModelPrice(input=0.8, output=3.2)),
    ("llama3-8b", ModelPrice(input=0.3, output=0.6)),
    ("llama3-70b", ModelPrice(input=2.65, output=3.5)),
    ("llama3-1-8b", ModelPrice(input=0.22, output=0.22)),
    ("llama3-1-70b", ModelPrice(input=0.72, output=0.72)),
    ("mistral-7b", ModelPrice(input=0.15, output=0.2)),
    ("mixtral-8x7b", ModelPrice(input=0.45, output=0.7)),
    ("mistral-large", ModelPrice(input=4.0, output=12.0)),
    ("command-r-plus", ModelPrice(input=3.0, output=15.0)),
    ("command-r", ModelPrice(input=0.5, output=1.5)),
)

DEFAULT_PRICE = ModelPrice(input=3.0, output=15.0)


def price_for_model(model_id: str) -> ModelPrice:
    normalized = model_id.lower()
    for pattern, price in PRICE_TABLE:
        if pattern in normalized:
            return price
    return DEFAULT_PRICE
