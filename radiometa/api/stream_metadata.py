"""Public now-playing endpoints (no authentication required)."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from radiometa.core.config import get_settings
from radiometa.core.rate_limit import limiter
from radiometa.schemas.now_playing import (
    StationListResponse,
    StreamMetadataResponse,
    UnknownStationResponse,
    UpstreamErrorResponse,
)
from radiometa.services.stations import UnknownStationError, list_station_ids
from radiometa.services.stream_metadata import get_stream_metadata
from radiometa.services.upstream import UpstreamFetchError

router = APIRouter()
settings = get_settings()
logger = logging.getLogger(__name__)


@router.get("", response_model=StationListResponse)
def list_stations() -> StationListResponse:
    """List every station id that has now-playing metadata."""
    return StationListResponse(
        stations=list_station_ids(),
        description="Fetch now playing metadata from radio stations",
    )


@router.get(
    "/{station_id}",
    response_model=StreamMetadataResponse,
    response_model_exclude_none=True,
    responses={
        404: {"model": UnknownStationResponse},
        500: {"model": UpstreamErrorResponse},
    },
)
@limiter.limit(lambda: f"{settings.stream_metadata_rate_limit_per_minute}/minute")
async def get_station_now_playing(station_id: str, request: Request):
    """Get the normalized now-playing record for a station."""
    try:
        return await get_stream_metadata(station_id)
    except UnknownStationError as e:
        body = UnknownStationResponse(
            error="Unknown station", available_stations=e.available_stations
        )
        return JSONResponse(status_code=404, content=body.model_dump(by_alias=True))
    except UpstreamFetchError as e:
        logger.warning("Error fetching metadata for %s: %s", station_id, e)
        body = UpstreamErrorResponse(error=str(e) or "Upstream fetch failed", station=station_id)
        return JSONResponse(status_code=500, content=body.model_dump())
