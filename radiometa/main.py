import logging

from fastapi import FastAPI
from fastapi import Request as FastAPIRequest
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from radiometa.api import api_router, stream_metadata
from radiometa.core.config import get_settings
from radiometa.core.rate_limit import limiter, rate_limit_exceeded_handler
from radiometa.core.security_headers import (
    CORS_HEADERS,
    CorsHeadersMiddleware,
    SecurityHeadersMiddleware,
)
from radiometa.services.stations import validate_registry

settings = get_settings()
validate_registry()

# Module loggers (upstream, parsers, artwork) emit INFO-level diagnostics
logging.getLogger("radiometa").setLevel(logging.INFO)

app = FastAPI(
    title="radiometa",
    description="Now-playing metadata for internet radio stations",
    version="0.1.0",
    # Disable API docs in production
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
    openapi_url=None if settings.is_production else "/openapi.json",
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

logger = logging.getLogger(__name__)


@app.exception_handler(Exception)
async def global_exception_handler(request: FastAPIRequest, exc: Exception) -> JSONResponse:
    """Catch unhandled exceptions and return a generic 500 response."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    content = {"error": "Internal server error"}
    if not settings.is_production:
        content["debug"] = str(exc)
    # Raised errors skip the middleware stack, so CORS headers are set here
    return JSONResponse(status_code=500, content=content, headers=CORS_HEADERS)


# Security headers (added first, runs last in middleware chain)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(CorsHeadersMiddleware)

app.include_router(api_router, prefix="/api")
# Same endpoints without the /api prefix, for the long-running server deployment
app.include_router(stream_metadata.router, prefix="/stream-metadata", include_in_schema=False)


@app.get("/health")
def health_check():
    return {"status": "ok"}
