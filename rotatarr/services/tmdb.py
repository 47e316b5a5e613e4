"""TMDB service for searching titles and fetching the dates a plan needs."""

import asyncio
import logging
from enum import Enum
from typing import List, Optional

import requests
import tmdbsimple as tmdb
from cachetools import TTLCache, cached
from pydantic import BaseModel

from rotatarr.core.config import get_settings
from rotatarr.models.media import Episode, Movie, Season, TVSeries

logger = logging.getLogger(__name__)

POSTER_BASE = "https://image.tmdb.org/t/p/w500"
SEARCH_LIMIT = 12


class TMDBError(Exception):
    """Domain exception for TMDB failures."""

    def __init__(self, message: str, original_exception: Exception = None):
        super().__init__(message)
        self.original_exception = original_exception


# Initialize TMDB
settings = get_settings()
tmdb.API_KEY = settings.tmdb_api_key

movie_cache = TTLCache(maxsize=256, ttl=settings.tmdb_cache_ttl)
series_cache = TTLCache(maxsize=256, ttl=settings.tmdb_cache_ttl)


class MediaType(str, Enum):
    """Media type for search."""

    MOVIE = "movie"
    SERIES = "tv"
    ALL = "all"


class TMDBSearchResult(BaseModel):
    """A search result from TMDB (enough to add it to a list)."""

    id: int
    title: str
    overview: str
    poster_url: Optional[str]
    media_type: MediaType
    release_year: Optional[str]


def _poster_url(path: Optional[str]) -> Optional[str]:
    return f"{POSTER_BASE}{path}" if path else None


def _parse_search_item(item: dict, media_type: MediaType) -> TMDBSearchResult:
    if media_type == MediaType.MOVIE:
        title = item.get("title", "Unknown")
        date_str = item.get("release_date") or ""
    else:
        title = item.get("name", "Unknown")
        date_str = item.get("first_air_date") or ""

    return TMDBSearchResult(
        id=item["id"],
        title=title,
        overview=item.get("overview", ""),
        poster_url=_poster_url(item.get("poster_path")),
        media_type=media_type,
        release_year=date_str[:4] if date_str else None,
    )


def _search_sync(query: str, media_type: MediaType) -> List[TMDBSearchResult]:
    """Search TMDB (synchronous). Errors are logged and yield no results."""
    search = tmdb.Search()
    try:
        if media_type == MediaType.MOVIE:
            search.movie(query=query)
        elif media_type == MediaType.SERIES:
            search.tv(query=query)
        else:
            search.multi(query=query)
    except (requests.exceptions.RequestException, tmdb.APIError) as exc:
        logger.error(f"Error searching {media_type.value} for '{query}': {exc}")
        return []
    except Exception as exc:
        logger.exception(
            f"Unexpected error searching {media_type.value} for '{query}': {exc}"
        )
        return []

    results = []
    for item in search.results[:SEARCH_LIMIT]:
        if media_type != MediaType.ALL:
            results.append(_parse_search_item(item, media_type))
        elif item.get("media_type") == "movie":
            results.append(_parse_search_item(item, MediaType.MOVIE))
        elif item.get("media_type") == "tv":
            results.append(_parse_search_item(item, MediaType.SERIES))
        # Skip "person" results
    return results


async def search_tmdb(
    query: str, media_type: MediaType = MediaType.ALL
) -> List[TMDBSearchResult]:
    """Search TMDB based on media type."""
    return await asyncio.to_thread(_search_sync, query, media_type)


def _watch_provider_results(info: dict) -> dict:
    return (info.get("watch/providers") or {}).get("results") or {}


@cached(movie_cache)
def _get_movie_details_sync(tmdb_id: int) -> Movie:
    """Fetch movie details and watch providers from TMDB (synchronous, cached)."""
    movie_api = tmdb.Movies(tmdb_id)
    try:
        info = movie_api.info(append_to_response="watch/providers")
    except Exception as exc:
        logger.error(f"Failed to fetch movie details for ID {tmdb_id}: {exc}")
        raise TMDBError(f"Failed to fetch movie details for ID {tmdb_id}", exc)

    release_date = info.get("release_date") or ""
    return Movie(
        id=info["id"],
        title=info.get("title", "Unknown"),
        overview=info.get("overview", ""),
        poster_url=_poster_url(info.get("poster_path")),
        release_date=release_date or None,
        release_year=release_date[:4] if release_date else None,
        watch_providers=_watch_provider_results(info),
    )


async def get_movie_details(tmdb_id: int) -> Movie:
    """Fetch movie details from TMDB (async)."""
    return await asyncio.to_thread(_get_movie_details_sync, tmdb_id)


def _get_season_sync(tmdb_id: int, season_number: int) -> Season:
    """Fetch one season with its episodes (synchronous)."""
    season_api = tmdb.TV_Seasons(tmdb_id, season_number)
    try:
        info = season_api.info()
    except Exception as exc:
        logger.error(
            f"Failed to fetch season for ID {tmdb_id} S{season_number}: {exc}"
        )
        raise TMDBError(
            f"Failed to fetch season for ID {tmdb_id} S{season_number}", exc
        )

    episodes = [
        Episode(
            episode_number=ep["episode_number"],
            name=ep.get("name") or f"Episode {ep['episode_number']}",
            air_date=ep.get("air_date") or None,
        )
        for ep in info.get("episodes", [])
    ]
    return Season(
        season_number=season_number,
        name=info.get("name") or f"Season {season_number}",
        air_date=info.get("air_date") or None,
        episodes=episodes,
    )


@cached(series_cache)
def _get_series_details_sync(tmdb_id: int) -> TVSeries:
    """Fetch series details plus its latest season from TMDB (synchronous, cached)."""
    tv_api = tmdb.TV(tmdb_id)
    try:
        info = tv_api.info(append_to_response="watch/providers")
    except Exception as exc:
        logger.error(f"Failed to fetch series details for ID {tmdb_id}: {exc}")
        raise TMDBError(f"Failed to fetch series details for ID {tmdb_id}", exc)

    # The plan only cares about the newest season
    number_of_seasons = info.get("number_of_seasons") or 0
    try:
        latest_season = _get_season_sync(tmdb_id, number_of_seasons or 1)
    except TMDBError:
        # Series-level air dates are still usable without episode data
        latest_season = None

    first_air_date = info.get("first_air_date") or ""
    return TVSeries(
        id=info["id"],
        title=info.get("name", "Unknown"),
        overview=info.get("overview", ""),
        poster_url=_poster_url(info.get("poster_path")),
        first_air_date=first_air_date or None,
        last_air_date=info.get("last_air_date") or None,
        release_year=first_air_date[:4] if first_air_date else None,
        number_of_seasons=number_of_seasons,
        latest_season=latest_season,
        status=info.get("status", ""),
        watch_providers=_watch_provider_results(info),
    )


async def get_series_details(tmdb_id: int) -> TVSeries:
    """Fetch series details and its latest season from TMDB (async)."""
    return await asyncio.to_thread(_get_series_details_sync, tmdb_id)
