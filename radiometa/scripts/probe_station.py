"""Probe a station's upstream status endpoint and print the normalized record."""
import argparse
import asyncio
import json
import sys

from radiometa.services.stations import UnknownStationError, get_registry, lookup_station
from radiometa.services.stream_metadata import get_stream_metadata
from radiometa.services.upstream import UpstreamFetchError, fetch_upstream


async def probe(station_id: str, show_raw: bool) -> int:
    try:
        station = lookup_station(station_id)
    except UnknownStationError as e:
        print(f"Unknown station '{station_id}'. Available: {', '.join(e.available_stations)}")
        return 1

    try:
        if show_raw:
            body = await fetch_upstream(station.metadata_url)
            print(f"URL:    {station.metadata_url}")
            print(f"Format: {station.source_format.value} (decoded as {body.kind})")
            print(f"Body:   {body.text[:500]!r}")
            print()

        response = await get_stream_metadata(station_id)
    except UpstreamFetchError as e:
        print(f"Upstream error for '{station_id}': {e}")
        return 2

    print(json.dumps(response.model_dump(by_alias=True, exclude_none=True), indent=2))
    return 0


def main():
    parser = argparse.ArgumentParser(description="Fetch now-playing metadata for a station")
    parser.add_argument("station", nargs="?", help="Station id (case-sensitive)")
    parser.add_argument("--raw", action="store_true", help="Also print the raw upstream body")
    parser.add_argument("--list", action="store_true", help="List configured stations and exit")
    args = parser.parse_args()

    if args.list or not args.station:
        for station in get_registry().values():
            print(f"{station.id:<12} {station.source_format.value:<13} {station.metadata_url}")
        sys.exit(0)

    sys.exit(asyncio.run(probe(args.station, args.raw)))


if __name__ == "__main__":
    main()
