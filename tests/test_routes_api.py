from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from rotatarr.main import app
from rotatarr.services.tmdb import MediaType, TMDBSearchResult

client = TestClient(app)

mock_results = [
    TMDBSearchResult(
        id=1396,
        title="Breaking Bad",
        overview="A chemistry teacher...",
        poster_url=None,
        media_type=MediaType.SERIES,
        release_year="2008",
    )
]


def test_health():
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "rotatarr"}


@patch(
    "rotatarr.api.routes_api.search_tmdb",
    side_effect=AsyncMock(return_value=mock_results),
)
def test_api_search(mock_search):
    response = client.get("/api/search?q=breaking&media_type=tv")

    assert response.status_code == 200, response.text
    data = response.json()
    assert len(data) == 1
    assert data[0]["title"] == "Breaking Bad"
    mock_search.assert_called_once_with("breaking", MediaType.SERIES)


def test_services_lists_catalog():
    response = client.get("/api/services")

    assert response.status_code == 200
    assert "Netflix" in response.json()["services"]


def test_window_from_episode_dates():
    response = client.post(
        "/api/windows",
        json={
            "episode_dates": ["2026-10-05", "2026-12-14"],
            "today": "2026-10-19",
        },
    )

    assert response.status_code == 200, response.text
    window = response.json()
    assert window["kind"] == "computed"
    assert window["primary_subscribe"] == "2027-01"
    assert window["primary_cancel"] == "2027-02"
    assert window["secondary_subscribe"] == "2026-10"
    assert window["is_complete"] is False


def test_window_from_release_date():
    response = client.post(
        "/api/windows", json={"release_date": "2025-06-01", "today": "2026-10-19"}
    )

    assert response.status_code == 200
    assert response.json()["primary_subscribe"] == "2026-10"
    assert response.json()["is_complete"] is True


def test_undated_episodes_fall_back_to_release_date():
    response = client.post(
        "/api/windows",
        json={
            "episode_dates": [None, None],
            "release_date": "2025-06-01",
            "today": "2026-10-19",
        },
    )

    assert response.status_code == 200, response.text
    assert response.json()["kind"] == "computed"
    assert response.json()["primary_subscribe"] == "2026-10"
    assert response.json()["is_complete"] is True


def test_window_without_usable_dates_is_unknown():
    response = client.post("/api/windows", json={"release_date": "coming soon"})

    assert response.status_code == 200
    assert response.json()["kind"] == "unknown"


def test_build_plan_from_posted_shows():
    payload = {
        "today": "2026-10-19",
        "shows": [
            {
                "title": "Dark",
                "service": "Netflix",
                "favorite": True,
                "added_order": 0,
                "window": {
                    "kind": "computed",
                    "primary_subscribe": "2026-11",
                    "primary_cancel": "2026-12",
                    "is_complete": True,
                },
            },
            {
                "title": "The Bear",
                "service": "Hulu",
                "watch_live": True,
                "added_order": 1,
                "window": {
                    "kind": "computed",
                    "primary_subscribe": "2027-01",
                    "primary_cancel": "2027-02",
                    "secondary_subscribe": "2026-11",
                    "is_complete": False,
                },
            },
            {
                "title": "Untitled",
                "service": "Max",
                "window": {"kind": "unknown"},
            },
        ],
    }

    response = client.post("/api/plan", json=payload)

    assert response.status_code == 200, response.text
    data = response.json()
    assert [m["key"] for m in data["months"]][:2] == ["2026-10", "2026-11"]
    assert data["plan"]["2026-11"]["service"] == "Hulu"
    assert data["plan"]["2026-10"]["service"] == "Netflix"
    assert data["plan"]["2026-10"]["shows"] == []
    assert data["dropped_services"] == []


def test_build_plan_rejects_invalid_window():
    payload = {
        "shows": [
            {
                "title": "Dark",
                "service": "Netflix",
                "window": {
                    "kind": "computed",
                    "primary_subscribe": "2026-11",
                    "primary_cancel": "2027-03",
                    "is_complete": True,
                },
            }
        ]
    }

    response = client.post("/api/plan", json=payload)

    assert response.status_code == 422
