"""HTTP route smoke tests for the FastAPI application."""
from __future__ import annotations

from fastapi.testclient import TestClient

from footballstats.main import create_app


class _InMemoryResultsFeedRepository:
    """Stub repository keeping the results feed in memory for testing."""

    def __init__(self, feed_text: str | None = None) -> None:
        self.feed_text = feed_text

    def save(self, feed_text: str) -> None:
        self.feed_text = feed_text

    def load(self) -> str | None:
        return self.feed_text


def _client(feed_text: str | None = None) -> TestClient:
    return TestClient(create_app(results_repo=_InMemoryResultsFeedRepository(feed_text)))


def test_root_endpoint_returns_running_message() -> None:
    """The root endpoint should return the expected heartbeat payload."""

    client = _client()

    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"message": "RUNNING FOOTBALL STATS"}


def test_status_endpoint_reports_version() -> None:
    """The status endpoint should report the service as running."""

    response = _client().get("/api/v1/status")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_queries_return_404_before_a_feed_is_uploaded() -> None:
    """Every season query should report missing data until a feed is stored."""

    client = _client()

    for path in ("/api/v1/season", "/api/v1/tables/standard", "/api/v1/teams/Arsenal"):
        assert client.get(path).status_code == 404


def test_upload_stores_feed_and_returns_summary(sample_feed_text: str) -> None:
    """A valid upload should be stored and answered with the season summary."""

    repository = _InMemoryResultsFeedRepository()
    client = TestClient(create_app(results_repo=repository))

    response = client.put(
        "/api/v1/results",
        files={"file": ("results.txt", sample_feed_text, "text/plain")},
    )

    assert response.status_code == 200
    assert response.headers["Location"] == "/api/v1/season"
    payload = response.json()
    assert payload["matches"]["played"] == 6
    assert payload["attendance"]["average"] == 23333
    assert repository.feed_text == sample_feed_text


def test_upload_rejects_invalid_feed_and_keeps_previous_one(sample_feed_text: str) -> None:
    """A feed that fails validation must not replace the stored feed."""

    repository = _InMemoryResultsFeedRepository(sample_feed_text)
    client = TestClient(create_app(results_repo=repository))

    response = client.put(
        "/api/v1/results",
        files={"file": ("results.txt", "01012020|A|x|B|0\n", "text/plain")},
    )

    assert response.status_code == 422
    assert "Line 1" in response.json()["detail"]
    assert repository.feed_text == sample_feed_text


def test_upload_rejects_out_of_order_results() -> None:
    """Results listed out of date order should be rejected as unprocessable."""

    response = _client().put(
        "/api/v1/results",
        files={"file": ("results.txt", "02012020|A|1|B|0\n01012020|C|1|D|0\n", "text/plain")},
    )

    assert response.status_code == 422


def test_upload_rejects_unexpected_content_type() -> None:
    """Only plain text uploads should be accepted."""

    response = _client().put(
        "/api/v1/results",
        files={"file": ("results.pdf", b"%PDF-1.4", "application/pdf")},
    )

    assert response.status_code == 400


def test_upload_rejects_empty_file() -> None:
    """An empty upload should be rejected before parsing."""

    response = _client().put(
        "/api/v1/results",
        files={"file": ("results.txt", b"", "text/plain")},
    )

    assert response.status_code == 400


def test_get_standard_table(sample_feed_text: str) -> None:
    """The standard table should list teams in league order with their zones."""

    response = _client(sample_feed_text).get("/api/v1/tables/standard")

    assert response.status_code == 200
    payload = response.json()
    assert payload["type"] == "standard"
    assert payload["date"] == "2020-08-15"
    assert [row["team"] for row in payload["teams"]] == ["Chelsea", "Arsenal", "Burnley", "Derby"]
    assert [row["zone"] for row in payload["teams"]] == [1, 0, 0, -1]


def test_get_form_table_for_home_matches(sample_feed_text: str) -> None:
    """The form table should honour the requested venue."""

    response = _client(sample_feed_text).get("/api/v1/tables/form", params={"venue": "home"})

    assert response.status_code == 200
    rows = {row["team"]: row for row in response.json()["teams"]}
    assert rows["Arsenal"]["form"] == "--WD"


def test_unknown_table_type_is_rejected(sample_feed_text: str) -> None:
    """An unsupported table type should fail request validation."""

    response = _client(sample_feed_text).get("/api/v1/tables/alphabetical")

    assert response.status_code == 422


def test_get_team_returns_record_and_positions(sample_feed_text: str) -> None:
    """A team lookup should include its position, adjusted points and notes."""

    response = _client(sample_feed_text).get("/api/v1/teams/Derby")

    assert response.status_code == 200
    payload = response.json()
    assert payload["position"] == 4
    assert payload["record"]["points"] == -1
    assert payload["notes"] == ["3 points deducted."]


def test_get_unknown_team_returns_404(sample_feed_text: str) -> None:
    """Requesting a team that never played should yield a 404 error."""

    response = _client(sample_feed_text).get("/api/v1/teams/Everton")

    assert response.status_code == 404


def test_get_teams_and_dates(sample_feed_text: str) -> None:
    """The directory endpoints should list teams alphabetically and dates newest first."""

    client = _client(sample_feed_text)

    assert client.get("/api/v1/teams").json() == {
        "teams": ["Arsenal", "Burnley", "Chelsea", "Derby"]
    }
    assert client.get("/api/v1/dates").json() == {
        "dates": ["2020-08-15", "2020-08-08", "2020-08-01"]
    }


def test_get_results_by_date(sample_feed_text: str) -> None:
    """Results should be listed per date, with 404 for empty dates and 400 for bad dates."""

    client = _client(sample_feed_text)

    response = client.get("/api/v1/results/08082020")

    assert response.status_code == 200
    results = response.json()["results"]
    assert [result["home_team"] for result in results] == ["Burnley", "Derby"]
    assert results[1]["attendance"] is None
    assert client.get("/api/v1/results/02082020").status_code == 404
    assert client.get("/api/v1/results/2020-08-08").status_code == 400
    assert client.get("/api/v1/results/8082020").status_code == 400


def test_get_sequence_table(sample_feed_text: str) -> None:
    """The sequence endpoint should rank teams by their best run when asked."""

    response = _client(sample_feed_text).get(
        "/api/v1/sequences/unbeaten", params={"current": "false"}
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["current"] is False
    assert [row["value"] for row in payload["teams"]] == [3, 3, 2, 1]


def test_get_attendance_tables(sample_feed_text: str) -> None:
    """The attendance endpoints should rank teams and matches by crowd size."""

    client = _client(sample_feed_text)

    average = client.get("/api/v1/attendances", params={"type": "average"}).json()
    highest = client.get("/api/v1/attendances/highest").json()
    lowest = client.get("/api/v1/attendances/lowest").json()

    assert average["teams"][0] == {"position": 1, "team": "Arsenal", "value": 40500}
    assert highest["results"][0]["attendance"] == 41000
    assert lowest["results"][0]["attendance"] == 14000
