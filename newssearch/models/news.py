import math
from datetime import datetime
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ArticleSource(BaseModel):
    model_config = ConfigDict(frozen=True)

    # NewsAPI sends a slug string, a number or null depending on the source
    id: str | int | None = None
    name: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        if isinstance(value, bool):
            return None
        if isinstance(value, (str, int)):
            return value
        return None

    @field_validator("name", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value


def _web_url(value: str | None) -> str | None:
    """Return value when it is an absolute http(s) URL, otherwise None."""
    if not value:
        return None
    parts = urlsplit(value.strip())
    if parts.scheme.lower() not in ("http", "https") or not parts.netloc:
        return None
    return value.strip()


class Article(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: ArticleSource = Field(default_factory=ArticleSource)
    author: str = ""
    title: str = ""
    description: str = ""
    # only http(s) links are kept; anything else would end up in an href/src
    url: str = ""
    image_url: str | None = Field(default=None, alias="urlToImage")
    published_at: datetime | None = Field(default=None, alias="publishedAt")
    content: str = ""

    @field_validator("author", "title", "description", "content", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("url", mode="before")
    @classmethod
    def _article_url(cls, value):
        if value is not None and not isinstance(value, str):
            return value
        return _web_url(value) or ""

    @field_validator("image_url", mode="before")
    @classmethod
    def _image_url(cls, value):
        if value is not None and not isinstance(value, str):
            return value
        return _web_url(value)

    def formatted_published_date(self) -> str:
        """Publication date as e.g. 'January 2, 2006'."""
        if self.published_at is None:
            return ""
        d = self.published_at
        return f"{d.strftime('%B')} {d.day}, {d.year}"


class ResultSet(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: str = ""
    total_results: int = Field(default=0, alias="totalResults")
    articles: list[Article] = Field(default_factory=list)

    @field_validator("articles", mode="before")
    @classmethod
    def _null_articles(cls, value):
        return [] if value is None else value


def count_pages(total_results: int, page_size: int) -> int:
    """Number of pages needed to show total_results, page_size at a time."""
    return math.ceil(total_results / page_size)


class SearchState(BaseModel):
    search_key: str
    next_page: int
    total_pages: int = 0
    results: ResultSet = Field(default_factory=ResultSet)

    @property
    def is_last_page(self) -> bool:
        return self.next_page >= self.total_pages

    @property
    def current_page(self) -> int:
        if self.next_page == 1:
            return self.next_page
        return self.next_page - 1

    @property
    def previous_page(self) -> int:
        # 0 means there is no previous page
        return self.current_page - 1

    @classmethod
    def paginate(cls, search_key: str, page: int, results: ResultSet, page_size: int) -> "SearchState":
        """Build the view state for `page` and point next_page at the following page.

        On the last page next_page is left where it is, so following the
        "next" link there fetches the same page again.
        """
        state = cls(
            search_key=search_key,
            next_page=page,
            total_pages=count_pages(results.total_results, page_size),
            results=results,
        )
        if not state.is_last_page:
            state.next_page += 1
        return state
