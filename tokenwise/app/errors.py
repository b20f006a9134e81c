import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

LOGGER = logging.getLogger("tokenwise.errors")


class TokenwiseError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ClientInputError(TokenwiseError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request."


class ProviderResponseError(TokenwiseError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Invalid response from provider."


class UnexpectedError(TokenwiseError):
    pass


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def validation_message(exc: RequestValidationError) -> str:
    """Turn the first pydantic error into the message clients see."""
    errors = exc.errors()
    if not errors:
        return "Invalid request body."
    first = errors[0]
    loc = [part for part in first.get("loc", ()) if part != "body"]
    if first.get("type") == "value_error":
        ctx_error = (first.get("ctx") or {}).get("error")
        if ctx_error is not None:
            return str(ctx_error)
        return str(first.get("msg", "")).removeprefix("Value error, ")
    if not loc or not isinstance(loc[0], str):
        return "Request body must be a JSON object."
    return f'Parameter "{loc[0]}" (non-empty string) is required.'


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(TokenwiseError)
    async def _tokenwise_error(_: Request, exc: TokenwiseError) -> JSONResponse:
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        error = ClientInputError(validation_message(exc))
        LOGGER.info("Rejected request: %s", error.message)
        return error_response(error.status_code, error.message)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return error_response(UnexpectedError.status_code, UnexpectedError.default_message)


@contextmanager
def upstream_errors(action: str) -> Iterator[None]:
    """Let TokenwiseError through; log anything else and surface it as a 500."""
    try:
        yield
    except TokenwiseError:
        raise
    except Exception as e:
        LOGGER.exception("%s failed", action)
        raise UnexpectedError() from e
