"""Pytest configuration and fixtures for radiometa tests."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from radiometa.main import app
from radiometa.services.stations import SourceFormat, StationConfig, get_registry


@pytest.fixture(autouse=True)
def _reset_registry():
    """Rebuild the station table for every test so settings patches take effect."""
    get_registry.cache_clear()
    yield
    get_registry.cache_clear()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def icecast_station() -> StationConfig:
    return StationConfig(
        id="web3",
        source_format=SourceFormat.ICECAST,
        metadata_url="https://web3radio.cloud/status-json.xsl",
        display_name="Web3 Radio",
        mount_hint="/stream",
    )


@pytest.fixture
def shoutcast_station() -> StationConfig:
    return StationConfig(
        id="prambors",
        source_format=SourceFormat.SHOUTCAST,
        metadata_url="https://s2.cloudmu.id/listen/prambors/currentsong?sid=1",
        display_name="Prambors FM",
    )


@pytest.fixture
def shoutcast_v2_station() -> StationConfig:
    return StationConfig(
        id="prambors-v2",
        source_format=SourceFormat.SHOUTCAST_V2,
        metadata_url="https://s2.cloudmu.id/listen/prambors/stats?sid=1&json=1",
        display_name="Prambors FM",
    )


@pytest.fixture
def zeno_station() -> StationConfig:
    return StationConfig(
        id="Venus",
        source_format=SourceFormat.ZENO,
        metadata_url="https://api.zeno.fm/mounts/metadata/subscribe/3wiuocujuobtv",
        display_name="Venus FM",
    )


@pytest.fixture
def radiojar_station() -> StationConfig:
    return StationConfig(
        id="iradio",
        source_format=SourceFormat.RADIOJAR,
        metadata_url="https://api.radiojar.com/api/stations/4ywdgup3bnzuv/now_playing/",
        display_name="i-Radio",
    )
