"""Album artwork enrichment via the iTunes Search API.

Artwork is cosmetic: every failure here ends in ``None`` and the
now-playing record is served without it.
"""

import logging
import re

import httpx

from radiometa.core.config import get_settings
from radiometa.schemas.now_playing import NowPlayingTrack
from radiometa.services.parsers import PLACEHOLDERS
from radiometa.services.stations import StationConfig

logger = logging.getLogger(__name__)

LOW_RES_TOKEN = "100x100bb"
HIGH_RES_TOKEN = "600x600bb"

# Featured/collaborating artists: "Artist [+] Other", "Artist feat. Other", "Artist ft. Other"
_FEATURING_RE = re.compile(r"\[\+|feat\.|ft\.", re.IGNORECASE)
_PAREN_RE = re.compile(r"\(.*?\)")
_MULTI_SPACE_RE = re.compile(r"\s{2,}")


def clean_artist(artist: str) -> str:
    """Drop featured artists: keep everything before the first featuring marker."""
    return _FEATURING_RE.split(artist, maxsplit=1)[0].strip()


def clean_title(title: str) -> str:
    """Strip parenthesized annotations such as "(Radio Edit)"."""
    result = _PAREN_RE.sub("", title)
    return _MULTI_SPACE_RE.sub(" ", result).strip()


def upgrade_artwork_url(url: str) -> str:
    """Swap the 100px thumbnail token for the 600px variant."""
    return url.replace(LOW_RES_TOKEN, HIGH_RES_TOKEN)


def should_enrich(track: NowPlayingTrack, station: StationConfig | None = None) -> bool:
    """True when the record lacks artwork and has a real artist and title."""
    if track.artwork:
        return False
    if not track.artist or not track.title:
        return False
    if track.artist in PLACEHOLDERS or track.title in PLACEHOLDERS:
        return False
    if station is not None and track.artist == station.display_name:
        return False
    return True


async def lookup_artwork(artist: str, title: str) -> str | None:
    """Search iTunes for the track and return a 600x600 artwork URL, or None."""
    settings = get_settings()
    term = f"{clean_artist(artist)} {clean_title(title)}".strip()
    if not term:
        return None

    params = {"term": term, "media": "music", "limit": 1}

    async with httpx.AsyncClient(timeout=settings.artwork_timeout_seconds) as client:
        try:
            response = await client.get(settings.artwork_search_url, params=params)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Artwork lookup failed for %r: %s", term, e)
            return None

    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        logger.debug("No artwork results for %r", term)
        return None

    artwork = results[0].get("artworkUrl100")
    if not artwork or not isinstance(artwork, str):
        return None

    return upgrade_artwork_url(artwork)


async def enrich_with_artwork(
    track: NowPlayingTrack, station: StationConfig | None = None
) -> NowPlayingTrack:
    """Return the track with artwork filled in when a lookup succeeds."""
    if not get_settings().artwork_lookup_enabled or not should_enrich(track, station):
        return track

    artwork = await lookup_artwork(track.artist, track.title)
    if artwork is None:
        return track
    return track.model_copy(update={"artwork": artwork})
