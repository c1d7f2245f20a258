"""FastAPI application for the Plinko engine."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from api.routes import game, stats
from api.session import get_kv_store
from config import config, setup_logging
from plinko.errors import ConfigurationError, PlinkoError, StorageError

setup_logging()
logger = logging.getLogger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    enabled=config.rate_limit.enabled,
    default_limits=[f"{config.rate_limit.requests_per_minute}/minute"],
)


def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


def _plinko_error_handler(request: Request, exc: PlinkoError) -> JSONResponse:
    """Map engine errors that escape a route to an HTTP status."""
    if isinstance(exc, ConfigurationError):
        status = 400
    elif isinstance(exc, StorageError):
        status = 503
    else:
        status = 500
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"detail": str(exc)})


app = FastAPI(
    title="Plinko",
    description="Plinko ball physics and payout settlement API",
    version="0.1.0",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(PlinkoError, _plinko_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors.allowed_origins,
    allow_credentials=config.cors.allow_credentials,
    allow_methods=config.cors.allow_methods,
    allow_headers=config.cors.allow_headers,
)


@app.get("/api/health")
@limiter.limit(f"{config.rate_limit.requests_per_minute}/minute")
async def health_check(request: Request) -> dict[str, str]:
    """Liveness plus the storage backend actually in use."""
    return {"status": "healthy", "storage": type(get_kv_store()).__name__}


app.include_router(game.router, prefix="/api/game", tags=["game"])
app.include_router(stats.router, prefix="/api/stats", tags=["stats"])


def main() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("api.main:app", host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
