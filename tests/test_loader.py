import asyncio
from datetime import date
from unittest.mock import AsyncMock, patch

from rotatarr.models.library import UserShow
from rotatarr.models.media import Episode, Movie, Season, TVSeries
from rotatarr.models.plan import ComputedWindow, Show, UnknownWindow
from rotatarr.services import library
from rotatarr.services.loader import (
    PlanView,
    filter_shows,
    load_show,
    load_user_shows,
)
from rotatarr.services.tmdb import TMDBError

TODAY = date(2026, 10, 19)

US_NETFLIX = {"US": {"flatrate": [{"provider_name": "Netflix"}]}}


def airing_series(tmdb_id=66732):
    return TVSeries(
        id=tmdb_id,
        title="Stranger Things",
        first_air_date="2016-07-15",
        last_air_date="2026-11-06",
        number_of_seasons=5,
        latest_season=Season(
            season_number=5,
            name="Season 5",
            episodes=[
                Episode(episode_number=1, name="Chapter One", air_date="2026-10-09"),
                Episode(episode_number=2, name="Chapter Two", air_date="2026-11-06"),
            ],
        ),
        watch_providers=US_NETFLIX,
    )


def test_load_series_uses_latest_season_and_provider():
    row = UserShow(user_id="u", tmdb_id=66732, media_type="tv", watch_live=True)

    with patch(
        "rotatarr.services.loader.get_series_details",
        new=AsyncMock(return_value=airing_series()),
    ):
        show = asyncio.run(load_show(row, 3, TODAY))

    assert show.title == "Stranger Things"
    assert show.service == "Netflix"
    assert show.added_order == 3
    assert show.watch_live is True
    assert show.media_type == "tv"
    assert isinstance(show.window, ComputedWindow)
    assert show.window.primary_subscribe == "2026-12"
    assert show.window.secondary_subscribe == "2026-10"


def test_unannounced_episode_keeps_series_in_watch_live_view():
    series = airing_series()
    series.last_air_date = "2026-10-09"
    series.latest_season.episodes[1].air_date = None
    row = UserShow(user_id="u", tmdb_id=66732, media_type="tv", watch_live=True)

    with patch(
        "rotatarr.services.loader.get_series_details",
        new=AsyncMock(return_value=series),
    ):
        show = asyncio.run(load_show(row, 0, TODAY))

    assert show.window.is_complete is False
    assert show.window.secondary_subscribe == "2026-10"
    assert filter_shows([show], PlanView.WATCH_LIVE) == [show]


def test_load_movie_uses_release_date():
    row = UserShow(user_id="u", tmdb_id=603, media_type="movie", favorite=True)
    movie = Movie(
        id=603,
        title="The Matrix",
        release_date="1999-03-31",
        watch_providers={"GB": {"flatrate": [{"provider_name": "HBO Max"}]}},
    )

    with patch(
        "rotatarr.services.loader.get_movie_details",
        new=AsyncMock(return_value=movie),
    ):
        show = asyncio.run(load_show(row, 0, TODAY))

    assert show.service == "HBO Max"
    assert show.favorite is True
    assert show.window.is_complete is True
    assert show.window.primary_subscribe == "2026-10"


def test_tmdb_failure_keeps_show_with_unknown_window():
    row = UserShow(user_id="u", tmdb_id=1, media_type="tv")

    with patch(
        "rotatarr.services.loader.get_series_details",
        new=AsyncMock(side_effect=TMDBError("boom")),
    ):
        show = asyncio.run(load_show(row, 0, TODAY))

    assert isinstance(show.window, UnknownWindow)
    assert show.service == "Unknown"
    assert show.tmdb_id == 1


def test_load_user_shows_in_display_order(session):
    library.track(session, "user-1", 10)
    library.track(session, "user-1", 20)
    library.reorder(session, "user-1", [20, 10])

    async def fake_series(tmdb_id):
        return airing_series(tmdb_id)

    with patch("rotatarr.services.loader.get_series_details", new=fake_series):
        shows = asyncio.run(load_user_shows(session, "user-1", TODAY))

    assert [(s.tmdb_id, s.added_order) for s in shows] == [(20, 0), (10, 1)]


def test_load_user_shows_empty(session):
    assert asyncio.run(load_user_shows(session, "nobody", TODAY)) == []


def test_filter_views():
    airing = ComputedWindow(
        primary_subscribe="2026-12",
        primary_cancel="2027-01",
        secondary_subscribe="2026-10",
        is_complete=False,
    )
    done = ComputedWindow(
        primary_subscribe="2026-10", primary_cancel="2026-11", is_complete=True
    )
    fav = Show(title="A", service="Netflix", window=done, favorite=True)
    live = Show(title="B", service="Hulu", window=airing, watch_live=True)
    live_done = Show(title="C", service="Max", window=done, watch_live=True)
    plain = Show(title="D", service="Peacock", window=done)
    shows = [fav, live, live_done, plain]

    assert filter_shows(shows, PlanView.ALL) == shows
    assert filter_shows(shows, PlanView.FAVORITES) == [fav]
    assert filter_shows(shows, PlanView.WATCH_LIVE) == [live]
