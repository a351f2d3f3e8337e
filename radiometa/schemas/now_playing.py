"""Schemas for normalized now-playing records and stream-metadata responses."""

from pydantic import BaseModel, ConfigDict, Field, computed_field

# --- Normalized record ---


class NowPlayingTrack(BaseModel):
    """Normalized now-playing record produced by a format parser (or the fallback)."""

    title: str = Field(..., min_length=1)
    artist: str = Field(..., min_length=1)
    album: str
    artwork: str | None = None
    listeners: int | None = None
    source: str

    @computed_field(alias="sourceFormat")
    @property
    def source_format(self) -> str:
        return self.source


# --- Public Outbound Responses ---


class StreamMetadataResponse(BaseModel):
    """Now-playing response for a single station."""

    model_config = ConfigDict(populate_by_name=True)

    station: str
    now_playing: NowPlayingTrack = Field(..., alias="nowPlaying")
    timestamp: str


class StationListResponse(BaseModel):
    """Discovery listing of every station id."""

    stations: list[str]
    description: str


class UnknownStationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    error: str
    available_stations: list[str] = Field(..., alias="availableStations")


class UpstreamErrorResponse(BaseModel):
    error: str
    station: str
