import logging
import re

import requests
from pydantic import ValidationError

from newssearch.exceptions import IntegrationError, InvalidRequestError
from newssearch.http_client import get_session
from newssearch.models.news import ResultSet, SearchState

logger = logging.getLogger(__name__)

NEWS_API_BASE = "https://newsapi.org/v2"
PAGE_SIZE = 20
# int() alone would also take " 7", "1_0" and non-ASCII digits
PAGE_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_page(page: str | None) -> int:
    """Parse the `page` query parameter. Missing or empty means page 1."""
    if page is None or page == "":
        return 1
    if not PAGE_PATTERN.fullmatch(page):
        raise InvalidRequestError(f"page must be an integer, got {page!r}")
    number = int(page)
    if number < 1:
        raise InvalidRequestError(f"page must be positive, got {number}")
    return number


def _handle_response(resp: requests.Response) -> dict:
    if resp.status_code != 200:
        logger.warning("News API returned HTTP %s: %s", resp.status_code, resp.text[:200])
        raise IntegrationError(f"News API HTTP error {resp.status_code}")
    try:
        data = resp.json()
    except ValueError as e:
        raise IntegrationError(f"News API returned malformed JSON: {e}") from e
    if not isinstance(data, dict):
        raise IntegrationError("News API response is not a JSON object")
    if data.get("status") == "error":
        raise IntegrationError(f"News API error: {data.get('code', '')}: {data.get('message', '')}")
    return data


def _parse_results(data: dict) -> ResultSet:
    try:
        return ResultSet.model_validate(data)
    except ValidationError as e:
        raise IntegrationError(f"News API response has an unexpected shape: {e.error_count()} errors") from e


class NewsClient:
    """Client for the News API `everything` endpoint, bound to one access key."""

    def __init__(
        self,
        api_key: str,
        base_url: str = NEWS_API_BASE,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else get_session()

    def search_articles(self, query: str, page: int = 1, page_size: int = PAGE_SIZE) -> ResultSet:
        """Fetch one page of articles matching `query`, newest first."""
        params = {
            "q": query,
            "pageSize": page_size,
            "page": page,
            "apiKey": self.api_key,
            "sortBy": "publishedAt",
        }
        try:
            resp = self.session.get(f"{self.base_url}/everything", params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("News API request failed: %s", e)
            raise IntegrationError(f"News API request failed: {e}") from e
        return _parse_results(_handle_response(resp))

    def search(self, query: str, page: str | None = None) -> SearchState:
        """Run a search for the raw `q`/`page` parameters and paginate the result."""
        number = parse_page(page)
        results = self.search_articles(query, number)
        logger.info("Search %r page %d: %d total results", query, number, results.total_results)
        return SearchState.paginate(query, number, results, PAGE_SIZE)
