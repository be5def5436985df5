from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from newssearch.services.news import NewsClient

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["search"])


def _news_client(request: Request) -> NewsClient:
    return request.app.state.news_client


@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    return templates.TemplateResponse(request, "index.html", {"search": None})


@router.get("/search", response_class=HTMLResponse)
def search(request: Request, q: str = "", page: str | None = None):
    state = _news_client(request).search(q, page)
    return templates.TemplateResponse(request, "index.html", {"search": state})
