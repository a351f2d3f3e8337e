"""Format parsers: upstream status payload -> normalized now-playing record.

Each parser is a pure function ``(body, station) -> NowPlayingTrack | None``.
``None`` means the upstream answered but carried nothing usable; callers
turn that into the "Live Broadcast" fallback rather than an error.
"""

import logging
from collections.abc import Callable

from pydantic import ValidationError

from radiometa.schemas.now_playing import NowPlayingTrack
from radiometa.schemas.upstream import (
    IcecastSource,
    IcecastStatus,
    RadioJarNowPlaying,
    ShoutcastV2Stats,
    ZenoMetadata,
)
from radiometa.services.stations import SourceFormat, StationConfig
from radiometa.services.upstream import UpstreamBody

logger = logging.getLogger(__name__)

# Literal separator between artist and title. Not a regex: "Spider-Man" stays whole.
SONG_SEPARATOR = " - "

UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_ARTIST = "Unknown Artist"
LIVE_STREAM_ALBUM = "Live Stream"
TOP_40_ALBUM = "Top 40"

PLACEHOLDERS = frozenset({UNKNOWN_TITLE, UNKNOWN_ARTIST})

Parser = Callable[[UpstreamBody, StationConfig], NowPlayingTrack | None]


def _clean(value: str | None) -> str | None:
    """Strip a text field; blank counts as missing."""
    if value is None:
        return None
    return value.strip() or None


def split_song_title(text: str) -> tuple[str | None, str]:
    """Split "ARTIST - TITLE" on the first separator.

    Returns ``(artist, title)``. Everything after the first separator stays
    in the title, so "A - B - C" gives ``("A", "B - C")``. Without a
    separator the artist is None and the title is the stripped input.
    """
    text = text.strip()
    artist, sep, title = text.partition(SONG_SEPARATOR)
    if not sep:
        return None, text
    return artist.strip() or None, title.strip()


def _select_icecast_source(
    source: IcecastSource | list[IcecastSource], mount_hint: str | None
) -> IcecastSource | None:
    """Pick the mount matching the hint on multi-mount servers, else the first one."""
    if isinstance(source, IcecastSource):
        return source
    if not source:
        return None
    if mount_hint:
        for candidate in source:
            if candidate.listenurl and mount_hint in candidate.listenurl:
                return candidate
    return source[0]


def parse_icecast(body: UpstreamBody, station: StationConfig) -> NowPlayingTrack | None:
    status = IcecastStatus.model_validate(body.data)
    if status.icestats is None or status.icestats.source is None:
        return None

    source = _select_icecast_source(status.icestats.source, station.mount_hint)
    if source is None:
        return None

    artist, title = split_song_title(source.title or source.yp_currently_playing or "")
    return NowPlayingTrack(
        title=title or UNKNOWN_TITLE,
        artist=artist or UNKNOWN_ARTIST,
        album=_clean(source.genre) or LIVE_STREAM_ALBUM,
        listeners=source.listeners,
        source=SourceFormat.ICECAST.value,
    )


def _parse_shoutcast_song(
    song: str, station: StationConfig, listeners: int | None = None
) -> NowPlayingTrack | None:
    if not song or not song.strip():
        return None

    artist, title = split_song_title(song)
    return NowPlayingTrack(
        title=title or UNKNOWN_TITLE,
        # No separator: the station name stands in for the artist
        artist=artist or station.display_name or station.id,
        album=TOP_40_ALBUM,
        listeners=listeners,
        source=station.source_format.value,
    )


def parse_shoutcast_v2(body: UpstreamBody, station: StationConfig) -> NowPlayingTrack | None:
    stats = ShoutcastV2Stats.model_validate(body.data)
    return _parse_shoutcast_song(stats.songtitle or "", station, stats.currentlisteners)


def parse_shoutcast(body: UpstreamBody, station: StationConfig) -> NowPlayingTrack | None:
    """Shoutcast v1 ``currentsong``: the whole body is "ARTIST - TITLE"."""
    return _parse_shoutcast_song(body.text, station)


def parse_zeno(body: UpstreamBody, station: StationConfig) -> NowPlayingTrack | None:
    meta = ZenoMetadata.model_validate(body.data)
    title, artist = _clean(meta.title), _clean(meta.artist)
    if not title and not artist:
        return None

    return NowPlayingTrack(
        title=title or UNKNOWN_TITLE,
        artist=artist or UNKNOWN_ARTIST,
        album=_clean(meta.album) or LIVE_STREAM_ALBUM,
        artwork=_clean(meta.artwork),
        source=SourceFormat.ZENO.value,
    )


def parse_radiojar(body: UpstreamBody, station: StationConfig) -> NowPlayingTrack | None:
    meta = RadioJarNowPlaying.model_validate(body.data)
    title = _clean(meta.title) or _clean(meta.name)
    artist = _clean(meta.artist)
    if not title and not artist:
        return None

    return NowPlayingTrack(
        title=title or UNKNOWN_TITLE,
        artist=artist or UNKNOWN_ARTIST,
        album=_clean(meta.album) or LIVE_STREAM_ALBUM,
        artwork=_clean(meta.image_url) or _clean(meta.artwork),
        source=SourceFormat.RADIOJAR.value,
    )


PARSERS: dict[SourceFormat, Parser] = {
    SourceFormat.ICECAST: parse_icecast,
    SourceFormat.SHOUTCAST: parse_shoutcast,
    SourceFormat.SHOUTCAST_V2: parse_shoutcast_v2,
    SourceFormat.ZENO: parse_zeno,
    SourceFormat.RADIOJAR: parse_radiojar,
}


def parse_now_playing(body: UpstreamBody, station: StationConfig) -> NowPlayingTrack | None:
    """Dispatch to the station's format parser.

    Never raises: unexpected payload shapes are logged and reported as
    "no data" so the caller can serve the fallback record.
    """
    parser = PARSERS.get(station.source_format)
    if parser is None:
        logger.error(
            "No parser for source format %s (station %s)", station.source_format, station.id
        )
        return None

    try:
        return parser(body, station)
    except ValidationError as e:
        logger.warning(
            "Unexpected %s payload for station %s: %d validation error(s)",
            station.source_format.value,
            station.id,
            e.error_count(),
        )
    except Exception:
        logger.exception(
            "Error parsing %s metadata for station %s", station.source_format.value, station.id
        )
    return None
