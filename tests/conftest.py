import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from newssearch.config import Settings


# --- Canned API responses ---

NEWS_API_ARTICLE = {
    "source": {"id": "the-verge", "name": "The Verge"},
    "author": "Jane Doe",
    "title": "Go 1.22 released",
    "description": "The new release brings range-over-int.",
    "url": "https://www.theverge.com/go-1-22",
    "urlToImage": "https://cdn.theverge.com/go.png",
    "publishedAt": "2024-02-06T17:30:00Z",
    "content": "Go 1.22 is out today... [+1200 chars]",
}

NEWS_API_ARTICLE_NO_SOURCE_ID = {
    "source": {"id": None, "name": "Hacker Noon"},
    "author": None,
    "title": "Why we rewrote our service",
    "description": None,
    "url": "https://hackernoon.com/rewrite",
    "urlToImage": None,
    "publishedAt": "2024-02-05T08:00:00Z",
    "content": None,
}

NEWS_API_RESULTS = {
    "status": "ok",
    "totalResults": 45,
    "articles": [NEWS_API_ARTICLE, NEWS_API_ARTICLE_NO_SOURCE_ID],
}

NEWS_API_EMPTY = {"status": "ok", "totalResults": 0, "articles": []}


def make_response(status_code: int = 200, json_data=None, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    if json_data is None:
        resp.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        resp.json.return_value = json_data
    return resp


@pytest.fixture
def settings():
    return Settings(news_api_key="test-key", news_api_base="https://newsapi.test/v2", request_timeout=5.0)


@pytest.fixture
def mock_session():
    """requests.Session stand-in; set get.return_value per test."""
    session = MagicMock()
    session.get.return_value = make_response(json_data=NEWS_API_RESULTS)
    return session


@pytest.fixture
def news_client(settings, mock_session):
    from newssearch.services.news import NewsClient
    return NewsClient(
        settings.news_api_key,
        base_url=settings.news_api_base,
        timeout=settings.request_timeout,
        session=mock_session,
    )


@pytest.fixture
def api_client(settings, news_client):
    """TestClient over an app wired to the mocked session."""
    from newssearch.main import create_app
    return TestClient(create_app(settings, news_client=news_client))
