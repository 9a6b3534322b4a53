"""Tests for api.server routes."""

from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from api.server import create_app
from models.article import AggregateResult, Article, DateRange
from utils.cache import NewsCache

NOW = datetime(2024, 1, 8, 12, 0, 0, tzinfo=timezone.utc)


def _result(now: datetime) -> AggregateResult:
    article = Article(
        search_term="Data Breach",
        title="Major Breach At Acme Corp",
        source="Example News",
        published_at=now - timedelta(hours=3),
        link="https://example.com/acme",
        keywords=["acm", "breach"],
        pub_date="2024-01-08",
        time_ago="3 hours ago",
    )
    return AggregateResult(
        generated_at=now,
        article_count=1,
        source_count=1,
        date_range=DateRange(start=(now - timedelta(days=7)).date(), end=now.date()),
        articles=[article],
    )


def _failing(now: datetime) -> AggregateResult:
    raise RuntimeError("upstream down")


def _client(loader, tmp_path) -> TestClient:
    cache = NewsCache(loader=loader, clock=lambda: NOW)
    app = create_app(cache=cache, output_dir=str(tmp_path), refresh_interval_hours=0)
    return TestClient(app)


class TestBreachNewsRoute:
    def test_returns_payload(self, tmp_path) -> None:
        response = _client(_result, tmp_path).get("/api/breach-news")

        assert response.status_code == 200
        body = response.json()
        assert body["meta"]["article_count"] == 1
        assert body["meta"]["sources"] == 1
        assert body["meta"]["date_range"] == {"start": "2024-01-01", "end": "2024-01-08"}
        assert body["articles"][0]["title"] == "Major Breach At Acme Corp"

    def test_error_returns_500_with_message(self, tmp_path) -> None:
        response = _client(_failing, tmp_path).get("/api/breach-news")

        assert response.status_code == 500
        assert response.json() == {"error": "upstream down"}

    def test_allows_cross_origin_requests(self, tmp_path) -> None:
        response = _client(_result, tmp_path).get("/api/breach-news", headers={"Origin": "https://example.org"})

        assert response.headers["access-control-allow-origin"] == "*"


class TestReportRoute:
    def test_returns_html(self, tmp_path) -> None:
        response = _client(_result, tmp_path).get("/report")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Major Breach At Acme Corp" in response.text

    def test_error_returns_html_500(self, tmp_path) -> None:
        response = _client(_failing, tmp_path).get("/report")

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/html")
        assert "<p>upstream down</p>" in response.text


class TestHealthRoute:
    def test_empty_cache(self, tmp_path) -> None:
        body = _client(_result, tmp_path).get("/health").json()

        assert body["status"] == "ok"
        assert body["cache"] == {"exists": False, "age_seconds": "N/A"}

    def test_populated_cache(self, tmp_path) -> None:
        client = _client(_result, tmp_path)
        client.get("/api/breach-news")

        body = client.get("/health").json()

        assert body["cache"] == {"exists": True, "age_seconds": 0}


class TestUpdateRoute:
    def test_writes_report_and_serves_it(self, tmp_path) -> None:
        client = _client(_result, tmp_path)

        response = client.get("/update")

        assert response.status_code == 200
        assert response.text == "Report updated successfully with 1 articles"
        assert (tmp_path / "index.html").exists()
        static = client.get("/static/index.html")
        assert static.status_code == 200
        assert "Major Breach At Acme Corp" in static.text

    def test_error_returns_plain_text_500(self, tmp_path) -> None:
        response = _client(_failing, tmp_path).get("/update")

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/plain")
        assert "upstream down" in response.text
