from radiometa.schemas.now_playing import (
    NowPlayingTrack,
    StationListResponse,
    StreamMetadataResponse,
    UnknownStationResponse,
    UpstreamErrorResponse,
)

__all__ = [
    "NowPlayingTrack",
    "StationListResponse",
    "StreamMetadataResponse",
    "UnknownStationResponse",
    "UpstreamErrorResponse",
]
