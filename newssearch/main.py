import argparse
import logging
import sys
from pathlib import Path

import jinja2
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from newssearch.config import Settings, get_settings
from newssearch.exceptions import IntegrationError, InvalidRequestError
from newssearch.routers.search import router as search_router
from newssearch.services.news import NewsClient

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


def _internal_error() -> PlainTextResponse:
    return PlainTextResponse("Internal server error", status_code=500)


async def invalid_request_handler(request: Request, exc: InvalidRequestError):
    logger.info("Rejected %s: %s", request.url.path, exc)
    return _internal_error()


async def integration_error_handler(request: Request, exc: IntegrationError):
    logger.error("Upstream failure on %s: %s", request.url.path, exc)
    return _internal_error()


async def template_error_handler(request: Request, exc: jinja2.TemplateError):
    logger.exception("Rendering failed on %s", request.url.path, exc_info=exc)
    return _internal_error()


def create_app(settings: Settings, news_client: NewsClient | None = None) -> FastAPI:
    """Build the application around one News API client."""
    if news_client is None:
        news_client = NewsClient(
            settings.news_api_key,
            base_url=settings.news_api_base,
            timeout=settings.request_timeout,
        )

    app = FastAPI(title="newssearch", version="0.1.0")
    app.state.news_client = news_client
    app.include_router(search_router)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    app.add_exception_handler(InvalidRequestError, invalid_request_handler)
    app.add_exception_handler(IntegrationError, integration_error_handler)
    app.add_exception_handler(jinja2.TemplateError, template_error_handler)
    return app


def parse_args(argv: list[str] | None = None, settings: Settings | None = None) -> argparse.Namespace:
    settings = settings or get_settings()
    parser = argparse.ArgumentParser(prog="newssearch", description="Search news articles from newsapi.org")
    parser.add_argument("--apikey", default=settings.news_api_key, help="Newsapi.org access key")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    return parser.parse_args(argv)


def run(argv: list[str] | None = None):
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = parse_args(argv, settings)
    if not args.apikey:
        logger.critical("apikey must be set (pass --apikey or set NEWS_API_KEY)")
        sys.exit(1)

    settings = settings.model_copy(update={"news_api_key": args.apikey, "host": args.host, "port": args.port})
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
