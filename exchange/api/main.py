"""FastAPI application for the exchange sandbox.

Engine failures are returned as JSON bodies carrying the stable reason
code, with the status chosen by the failure kind.
"""

import logging
import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from exchange import __version__
from exchange.api.endpoints import router
from exchange.api.schemas import ErrorResponse
from exchange.errors import ErrorKind, ExchangeError, PoolNotFound, Reentrancy, Unauthorized, UnknownAsset

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("EXCHANGE_HOST", "0.0.0.0")
PORT = int(os.environ.get("EXCHANGE_PORT", "8000"))
DEBUG = os.environ.get("EXCHANGE_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (1 MB)
MAX_REQUEST_SIZE = 1024 * 1024

logger = structlog.get_logger()

STATUS_BY_KIND = {
    ErrorKind.PRECONDITION: 400,
    ErrorKind.ECONOMIC: 422,
    ErrorKind.COLLABORATOR: 502,
    ErrorKind.ARITHMETIC: 500,
}

STATUS_BY_ERROR: dict[type[ExchangeError], int] = {
    PoolNotFound: 404,
    UnknownAsset: 404,
    Unauthorized: 403,
    Reentrancy: 409,
}

app = FastAPI(
    title="Constant-Product Exchange",
    description="Sandbox service for a constant-product exchange engine",
    version=__version__,
)


def status_for(error: ExchangeError) -> int:
    """HTTP status for an engine error."""
    for error_type, status in STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            return status
    return STATUS_BY_KIND[error.kind]


@app.exception_handler(ExchangeError)
async def exchange_error_handler(request: Request, exc: ExchangeError) -> JSONResponse:
    """Render an engine failure with its reason code."""
    status = status_for(exc)
    logger.warning(
        "request_failed",
        path=request.url.path,
        reason=exc.reason,
        kind=exc.kind.value,
        status=status,
    )
    body = ErrorResponse(error=exc.reason, kind=exc.kind.value, detail=str(exc))
    return JSONResponse(status_code=status, content=body.model_dump())


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def configure_logging(verbose: bool = False) -> None:
    """Console logging for the service process."""
    log_level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )


def run() -> None:
    """Run the exchange API server.

    Configuration via environment variables:
    - EXCHANGE_HOST: Host to bind to (default: 0.0.0.0)
    - EXCHANGE_PORT: Port to bind to (default: 8000)
    - EXCHANGE_DEBUG: Enable debug logging and reload mode (default: false)
    - EXCHANGE_ADDRESS, EXCHANGE_ADMIN, EXCHANGE_FEE: see EngineConfig.from_env
    """
    configure_logging(verbose=DEBUG)
    uvicorn.run(
        "exchange.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
