from fastapi import APIRouter

from radiometa.api import stream_metadata

api_router = APIRouter()


@api_router.get("/health", tags=["health"])
def api_health_check():
    """Health check endpoint for monitoring and load balancers."""
    return {"status": "ok", "service": "api"}


api_router.include_router(
    stream_metadata.router, prefix="/stream-metadata", tags=["stream-metadata"]
)
