"""Station registry: station id -> upstream metadata source.

The table is static configuration. It is built once per process (built-in
stations plus an optional ``STATIONS_FILE`` overlay) and exposed read-only.
"""

import json
import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from radiometa.core.config import get_settings

logger = logging.getLogger(__name__)


class SourceFormat(str, Enum):
    ICECAST = "icecast"
    SHOUTCAST = "shoutcast"
    SHOUTCAST_V2 = "shoutcast-v2"
    ZENO = "zeno"
    RADIOJAR = "radiojar"


@dataclass(frozen=True)
class StationConfig:
    id: str
    source_format: SourceFormat
    metadata_url: str
    display_name: str
    # Only used by the icecast parser to pick a source on multi-mount servers
    mount_hint: str | None = None


class UnknownStationError(LookupError):
    """Raised when a station id is not in the registry."""

    def __init__(self, station_id: str, available_stations: list[str]):
        self.station_id = station_id
        self.available_stations = available_stations
        super().__init__(f"Unknown station: {station_id}")


BUILTIN_STATIONS: tuple[StationConfig, ...] = (
    StationConfig(
        id="web3",
        source_format=SourceFormat.ICECAST,
        metadata_url="https://web3radio.cloud/status-json.xsl",
        display_name="Web3 Radio",
        mount_hint="/stream",
    ),
    StationConfig(
        id="Venus",
        source_format=SourceFormat.ZENO,
        metadata_url="https://api.zeno.fm/mounts/metadata/subscribe/3wiuocujuobtv",
        display_name="Venus FM",
    ),
    StationConfig(
        id="iradio",
        source_format=SourceFormat.RADIOJAR,
        metadata_url="https://api.radiojar.com/api/stations/4ywdgup3bnzuv/now_playing/",
        display_name="i-Radio",
    ),
    StationConfig(
        id="female",
        source_format=SourceFormat.SHOUTCAST,
        metadata_url="https://s1.cloudmu.id/listen/female_radio/currentsong?sid=1",
        display_name="Female Radio",
    ),
    StationConfig(
        id="delta",
        source_format=SourceFormat.SHOUTCAST,
        metadata_url="https://s1.cloudmu.id/listen/delta_fm/currentsong?sid=1",
        display_name="Delta FM",
    ),
    StationConfig(
        id="prambors",
        source_format=SourceFormat.SHOUTCAST,
        metadata_url="https://s2.cloudmu.id/listen/prambors/currentsong?sid=1",
        display_name="Prambors FM",
    ),
)


def _station_from_dict(station_id: str, entry: dict) -> StationConfig:
    """Build a StationConfig from one stations-file entry.

    Raises ValueError on a missing URL or an unsupported format tag.
    """
    if not isinstance(entry, dict):
        raise ValueError(f"Station '{station_id}' must be an object")

    url = entry.get("metadata_url") or entry.get("metadataUrl")
    if not url or not isinstance(url, str):
        raise ValueError(f"Station '{station_id}' is missing metadata_url")

    raw_format = entry.get("source_format") or entry.get("type")
    try:
        source_format = SourceFormat(raw_format)
    except ValueError:
        raise ValueError(
            f"Station '{station_id}' has unsupported source format: {raw_format!r}"
        ) from None

    mount_hint = entry.get("mount_hint") or entry.get("mount")
    return StationConfig(
        id=station_id,
        source_format=source_format,
        metadata_url=url,
        display_name=entry.get("display_name") or entry.get("name") or station_id,
        mount_hint=mount_hint or None,
    )


def load_stations_file(path: str | Path) -> dict[str, StationConfig]:
    """Load extra stations from a JSON file.

    The file is an object keyed by station id, e.g.::

        {"jazz": {"source_format": "icecast",
                  "metadata_url": "https://example.org/status-json.xsl",
                  "mount_hint": "/jazz", "display_name": "Jazz FM"}}
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Stations file must contain a JSON object keyed by station id")
    return {station_id: _station_from_dict(station_id, entry) for station_id, entry in data.items()}


@lru_cache(maxsize=1)
def get_registry() -> Mapping[str, StationConfig]:
    """Return the read-only station table (built-ins plus STATIONS_FILE overlay)."""
    stations = {station.id: station for station in BUILTIN_STATIONS}

    settings = get_settings()
    if settings.stations_file:
        extra = load_stations_file(settings.stations_file)
        logger.info("Loaded %d station(s) from %s", len(extra), settings.stations_file)
        stations.update(extra)

    return MappingProxyType(stations)


def list_station_ids() -> list[str]:
    """Return every known station id, in table order."""
    return list(get_registry().keys())


def lookup_station(station_id: str) -> StationConfig:
    """Exact, case-sensitive lookup. Raises UnknownStationError on a miss."""
    station = get_registry().get(station_id)
    if station is None:
        raise UnknownStationError(station_id, list_station_ids())
    return station


def validate_registry() -> None:
    """Build the station table at startup; exit if STATIONS_FILE is unusable."""
    try:
        get_registry()
    except (OSError, ValueError) as e:
        logger.error("Configuration error: STATIONS_FILE %s: %s", get_settings().stations_file, e)
        sys.exit(1)
