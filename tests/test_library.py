import pytest

from rotatarr.services import library
from rotatarr.services.library import ShowAlreadyTrackedError, ShowNotFoundError


def tracked_ids(session, user_id="user-1"):
    return [row.tmdb_id for row in library.list_tracked(session, user_id)]


def test_track_keeps_insertion_order(session):
    library.track(session, "user-1", 1399)
    library.track(session, "user-1", 603, media_type="movie")
    library.track(session, "user-1", 66732)

    assert tracked_ids(session) == [1399, 603, 66732]
    rows = library.list_tracked(session, "user-1")
    assert rows[1].media_type == "movie"
    assert rows[0].favorite is False
    assert rows[0].watch_live is False


def test_lists_are_per_user(session):
    library.track(session, "user-1", 1399)
    library.track(session, "user-2", 603)

    assert tracked_ids(session, "user-1") == [1399]
    assert tracked_ids(session, "user-2") == [603]


def test_tracking_twice_is_rejected(session):
    library.track(session, "user-1", 1399)

    with pytest.raises(ShowAlreadyTrackedError):
        library.track(session, "user-1", 1399)


def test_untrack(session):
    library.track(session, "user-1", 1399)
    library.track(session, "user-1", 603)

    library.untrack(session, "user-1", 1399)

    assert tracked_ids(session) == [603]
    with pytest.raises(ShowNotFoundError):
        library.untrack(session, "user-1", 1399)


def test_untrack_all(session):
    library.track(session, "user-1", 1399)
    library.track(session, "user-1", 603)
    library.track(session, "user-2", 42)

    assert library.untrack_all(session, "user-1") == 2
    assert tracked_ids(session) == []
    assert tracked_ids(session, "user-2") == [42]


def test_set_flags_only_changes_given_flags(session):
    library.track(session, "user-1", 1399)

    row = library.set_flags(session, "user-1", 1399, favorite=True)
    assert row.favorite is True
    assert row.watch_live is False

    row = library.set_flags(session, "user-1", 1399, watch_live=True)
    assert row.favorite is True
    assert row.watch_live is True


def test_set_flags_on_untracked_show(session):
    with pytest.raises(ShowNotFoundError):
        library.set_flags(session, "user-1", 1399, favorite=True)


def test_reorder_puts_unordered_rows_last(session):
    for tmdb_id in (10, 20, 30):
        library.track(session, "user-1", tmdb_id)

    updated = library.reorder(session, "user-1", [30, 999, 10])

    assert updated == 2
    assert tracked_ids(session) == [30, 10, 20]
