"""Media models for caching TMDB data."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class Episode(BaseModel):
    """An episode in a TV series."""

    episode_number: int
    name: str
    air_date: Optional[str] = None


class Season(BaseModel):
    """A season of a TV series."""

    season_number: int
    name: str
    episodes: List[Episode] = []
    air_date: Optional[str] = None


class Movie(BaseModel):
    """A movie with the TMDB fields needed for planning."""

    id: int
    title: str
    overview: str = ""
    poster_url: Optional[str] = None
    release_date: Optional[str] = None
    release_year: Optional[str] = None
    # Raw "watch/providers" results keyed by region code
    watch_providers: Dict[str, Any] = {}


class TVSeries(BaseModel):
    """A TV series with its latest season's episodes."""

    id: int
    title: str
    overview: str = ""
    poster_url: Optional[str] = None
    first_air_date: Optional[str] = None
    last_air_date: Optional[str] = None
    release_year: Optional[str] = None
    number_of_seasons: int = 0
    latest_season: Optional[Season] = None
    status: str = ""  # e.g., "Returning Series", "Ended"
    watch_providers: Dict[str, Any] = {}

    @property
    def episode_air_dates(self) -> List[Optional[str]]:
        if self.latest_season is None:
            return []
        return [ep.air_date for ep in self.latest_season.episodes]
