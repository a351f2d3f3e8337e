"""Now-playing lookup for a station: fetch, parse, enrich, assemble."""

import logging

from radiometa.core.time import iso_timestamp
from radiometa.schemas.now_playing import NowPlayingTrack, StreamMetadataResponse
from radiometa.services.artwork import enrich_with_artwork
from radiometa.services.parsers import LIVE_STREAM_ALBUM, parse_now_playing
from radiometa.services.stations import StationConfig, lookup_station
from radiometa.services.upstream import fetch_upstream

logger = logging.getLogger(__name__)

FALLBACK_TITLE = "Live Broadcast"
FALLBACK_SOURCE = "fallback"


def build_fallback(station: StationConfig) -> NowPlayingTrack:
    """Placeholder record for when the upstream has nothing usable."""
    return NowPlayingTrack(
        title=FALLBACK_TITLE,
        artist=station.display_name or station.id,
        album=LIVE_STREAM_ALBUM,
        source=FALLBACK_SOURCE,
    )


async def get_stream_metadata(station_id: str) -> StreamMetadataResponse:
    """Build the now-playing response for one station.

    Raises UnknownStationError for ids not in the registry and
    UpstreamFetchError when the status endpoint is unreachable. Empty or
    malformed upstream data is not an error: it yields the fallback record.
    """
    station = lookup_station(station_id)

    body = await fetch_upstream(station.metadata_url)

    track = parse_now_playing(body, station)
    if track is None:
        logger.info("No usable now-playing data for station %s, serving fallback", station.id)
        track = build_fallback(station)
    else:
        track = await enrich_with_artwork(track, station)

    return StreamMetadataResponse(
        station=station.id,
        now_playing=track,
        timestamp=iso_timestamp(),
    )
