"""FastAPI application for the exchange.

Note: callers identify themselves by the account field of each request.
Authentication is expected at the infrastructure layer in front of the
service.
"""

import logging
import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dex import __version__
from dex.api.endpoints import router
from dex.errors import DexError, EmptyPool, InsufficientShares, InvalidAmount, TransferFailed
from dex.safe_int import SafeIntError

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("DEX_HOST", "0.0.0.0")
PORT = int(os.environ.get("DEX_PORT", "8000"))
DEBUG = os.environ.get("DEX_DEBUG", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = os.environ.get("DEX_LOG_LEVEL", "INFO").upper()

# HTTP status per error class; the first matching base class wins
ERROR_STATUS: list[tuple[type[Exception], int]] = [
    (InvalidAmount, 400),
    (InsufficientShares, 409),
    (EmptyPool, 409),
    (TransferFailed, 402),
    (SafeIntError, 400),
]

logger = structlog.get_logger()

app = FastAPI(
    title="CPMM DEX",
    description="A two-asset constant-product exchange with liquidity provider shares",
    version=__version__,
)


def status_for(error: Exception) -> int:
    for error_type, status in ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    return 500


@app.exception_handler(DexError)
@app.exception_handler(SafeIntError)
async def exchange_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a rejected operation as {"error": <class>, "detail": <message>}."""
    status = status_for(exc)
    logger.info(
        "request_rejected",
        path=request.url.path,
        error=type(exc).__name__,
        status=status,
    )
    return JSONResponse(
        status_code=status,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure structlog for console output at the given level name."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping().get(level, logging.INFO)
        ),
    )


def run() -> None:
    """Run the exchange API server.

    Configuration via environment variables:
    - DEX_HOST: Host to bind to (default: 0.0.0.0)
    - DEX_PORT: Port to bind to (default: 8000)
    - DEX_DEBUG: Enable debug/reload mode (default: false)
    - DEX_LOG_LEVEL: Log level name (default: INFO)
    - DEX_FEE_NUMERATOR / DEX_FEE_DENOMINATOR: Swap fee multiplier (default: 997/1000)
    """
    configure_logging()
    uvicorn.run(
        "dex.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
