"""Loosely-typed shapes of the upstream status payloads, one per source format.

Every field is optional: upstream servers omit fields freely, and a missing
field must never be an error. Numbers are coerced to strings because some
servers emit numeric titles (e.g. a track called ``1999``).
"""

from pydantic import BaseModel, ConfigDict


class _UpstreamModel(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


# --- Icecast (status-json.xsl) ---


class IcecastSource(_UpstreamModel):
    title: str | None = None
    yp_currently_playing: str | None = None
    genre: str | None = None
    listeners: int | None = None
    listenurl: str | None = None
    server_name: str | None = None


class IcecastStats(_UpstreamModel):
    source: IcecastSource | list[IcecastSource] | None = None


class IcecastStatus(_UpstreamModel):
    icestats: IcecastStats | None = None


# --- Shoutcast v2 (stats?sid=1&json=1) ---


class ShoutcastV2Stats(_UpstreamModel):
    songtitle: str | None = None
    currentlisteners: int | None = None
    servertitle: str | None = None


# --- Zeno FM ---


class ZenoMetadata(_UpstreamModel):
    title: str | None = None
    artist: str | None = None
    album: str | None = None
    artwork: str | None = None


# --- RadioJar ---


class RadioJarNowPlaying(_UpstreamModel):
    title: str | None = None
    name: str | None = None
    artist: str | None = None
    album: str | None = None
    image_url: str | None = None
    artwork: str | None = None
