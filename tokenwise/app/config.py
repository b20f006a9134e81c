import os
from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 5000
    region: str = "us-east-1"
    connect_timeout_seconds: float = 10.0
    read_timeout_seconds: float = 60.0
    translate_timeout_seconds: float = 15.0
    max_tokens: int = 1024
    temperature: float = 0.2
    cors_origins: tuple[str, ...] = ("*",)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = cls()
        origins = env.get("CORS_ORIGINS")
        return cls(
            host=env.get("HOST", defaults.host),
            port=int(env.get("PORT", defaults.port)),
            region=env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or defaults.region,
            connect_timeout_seconds=float(env.get("CONNECT_TIMEOUT_SECONDS", defaults.connect_timeout_seconds)),
            read_timeout_seconds=float(env.get("READ_TIMEOUT_SECONDS", defaults.read_timeout_seconds)),
            translate_timeout_seconds=float(env.get("TRANSLATE_TIMEOUT_SECONDS", defaults.translate_timeout_seconds)),
            max_tokens=int(env.get("MAX_TOKENS", defaults.max_tokens)),
            temperature=float(env.get("TEMPERATURE", defaults.temperature)),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()) if origins else defaults.cors_origins,
            log_level=env.get("LOG_LEVEL", defaults.log_level).upper(),
        )
