from functools import lru_cache
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from directory_api.dependencies import get_fms_service, get_user_service
from directory_api.services import FmsService, UserService

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
DEFAULT_PHOTO_URL = "/static/default-user.svg"

router = APIRouter()


@lru_cache()
def get_templates() -> Jinja2Templates:
    return Jinja2Templates(directory=str(TEMPLATES_DIR))


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def directory_page(
    request: Request,
    users: UserService = Depends(get_user_service),
    fms: FmsService = Depends(get_fms_service),
) -> HTMLResponse:
    """User directory: one collapsible card per user with their photo."""
    cards = [
        {"user": user, "photo_url": users.photo_url(user) or DEFAULT_PHOTO_URL}
        for user in users.list_users()
    ]
    return get_templates().TemplateResponse(
        request,
        "directory.html",
        {
            "cards": cards,
            "default_photo_url": DEFAULT_PHOTO_URL,
            "constraints": fms.get_upload_constraints(),
        },
    )
