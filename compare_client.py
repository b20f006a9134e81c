import argparse
import os
from typing import Any

import requests

TOKENWISE_URL = os.getenv("TOKENWISE_URL", "http://127.0.0.1:5000")
DEFAULT_MODEL = "anthropic.claude-3-haiku-20240307-v1:0"
DEFAULT_LANGUAGES = ["zh-CN", "ja", "ko", "pl"]


def list_models() -> list[dict[str, Any]]:
    response = requests.get(f"{TOKENWISE_URL}/api/bedrock/models", timeout=30)
    response.raise_for_status()
    return response.json()["models"]


def compare(text: str, language: str, model: str) -> dict[str, Any]:
    response = requests.post(
        f"{TOKENWISE_URL}/api/bedrock/generate-translate",
        json={"text": text, "language": language, "model": model},
        timeout=180,
    )
    if response.status_code >= 400:
        raise RuntimeError(f"{language}: HTTP {response.status_code} {response.json().get('error')}")
    return response.json()


def main() -> None:
    ap = argparse.ArgumentParser(description="Compare English vs multilingual token usage for one prompt")
    ap.add_argument("--text", required=True, help="Prompt to send")
    ap.add_argument("--model", default=DEFAULT_MODEL, help="Bedrock model id")
    ap.add_argument("--languages", nargs="+", default=DEFAULT_LANGUAGES, help="Target language codes")
    ap.add_argument("--list-models", action="store_true", help="Print available text models and exit")
    args = ap.parse_args()

    if args.list_models:
        for model in list_models():
            print(f"{model['modelId']:60} {model.get('providerName') or ''}")
        return

    print(f"Model: {args.model}")
    for language in args.languages:
        result = compare(args.text, language, args.model)
        tokens = result["metrics"]["tokens"]
        costs = result["metrics"]["costs"]
        print(
            f"[{language}] tokens {tokens['english']['total']} -> {tokens['optimized']['total']} "
            f"({tokens['savings']['percentage']}% saved), "
            f"cost ${costs['english']['total']:.6f} -> ${costs['optimized']['total']:.6f} "
            f"({costs['savings']['percentage']}% saved), break-even {costs['breakEven']} chars"
        )
        print("  back-translated:", result["translatedText"][:200])

    print("Comparison complete.")


if __name__ == "__main__":
    main()
