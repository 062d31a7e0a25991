"""FastAPI dependencies resolving the services built in `create_app`."""
from fastapi import Request

from directory_api.config.settings import Settings
from directory_api.services import FmsService, UserService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_fms_service(request: Request) -> FmsService:
    return request.app.state.fms_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service
