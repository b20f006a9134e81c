import logging
from contextlib import asynccontextmanager
from pathlib import Path
from time import perf_counter

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from .bedrock import BedrockGateway
from .config import Settings
from .errors import register_error_handlers
from .logging_setup import setup_logging
from .routers import bedrock, translate
from .translation import GoogleTranslateClient

LOGGER = logging.getLogger("tokenwise.access")

BASE_DIR = Path(__file__).resolve().parent
STATIC_DIR = BASE_DIR / "static"


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.settings = settings
        app.state.gateway = BedrockGateway(settings)
        app.state.translator = GoogleTranslateClient(settings)
        LOGGER.info("Serving on %s:%s, Bedrock region %s", settings.host, settings.port, settings.region)
        yield

    app = FastAPI(
        title="TokenWise API",
        version="0.1.0",
        description="Multilingual token and cost comparison for Bedrock foundation models",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        started = perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            LOGGER.info(
                "%s %s %s %.1fms",
                request.method,
                request.url.path,
                status_code,
                (perf_counter() - started) * 1000,
            )

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/example", tags=["health"])
    def example() -> dict[str, str]:
        return {"message": "API is working"}

    @app.get("/", include_in_schema=False)
    def landing_page() -> FileResponse:
        return FileResponse(STATIC_DIR / "index.html")

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    app.include_router(translate.router)
    app.include_router(bedrock.router)
    return app


app = create_app()


def run() -> None:
    settings = Settings.from_env()
    uvicorn.run(
        "tokenwise.app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    run()
