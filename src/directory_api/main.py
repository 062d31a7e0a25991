from pathlib import Path
from textwrap import dedent
from typing import Optional, TYPE_CHECKING
import logging

import pydantic
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from fastapi.staticfiles import StaticFiles

from directory_api.config.settings import Settings
from directory_api.database.local import init_db
from directory_api.errors import (
    FmsValidationError,
    UserNotFoundError,
    handle_broad_exceptions,
    handle_fms_validation_errors,
    handle_pydantic_validation_errors,
    handle_request_validation_errors,
    handle_user_not_found,
)
from directory_api.routers.fms import router as fms_router
from directory_api.routers.health import router as health_router
from directory_api.routers.users import router as users_router
from directory_api.routers.web import router as web_router
from directory_api.services import FmsService, UserService

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

STATIC_DIR = Path(__file__).resolve().parent / "static"

# Set up logging
logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("directory_api").setLevel(level)


def create_app(settings: Optional[Settings] = None, s3_client: Optional["S3Client"] = None) -> FastAPI:
    """Create a FastAPI application."""
    settings = settings or Settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="User Directory API",
        summary="Presigned URLs for profile photos, and the directory that shows them",
        version="v1",
        description=dedent(
            """\
        Photos never pass through this server: the browser asks for a
        presigned URL and talks to S3 (or LocalStack) directly.

        | Helpful Links | Notes |
        | --- | --- |
        | [FastAPI Documentation](https://fastapi.tiangolo.com/) | |
        | [S3 presigned URLs](https://docs.aws.amazon.com/AmazonS3/latest/userguide/using-presigned-url.html) | |
        """
        ),
        docs_url="/docs",
        generate_unique_id_function=custom_generate_unique_id,
    )

    # Added before CORS so it sits inside it; 500s still carry CORS headers
    app.middleware("http")(handle_broad_exceptions)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    logger.info(f"Initializing user database at {settings.database_path}")
    init_db(settings.database_path)

    fms_service = FmsService(settings, s3_client=s3_client)
    app.state.settings = settings
    app.state.fms_service = fms_service
    app.state.user_service = UserService(fms_service, db_path=settings.database_path)

    app.include_router(fms_router, prefix="/api", tags=["fms"])
    app.include_router(users_router, prefix="/api", tags=["users"])
    app.include_router(health_router, tags=["health"])
    app.include_router(web_router, tags=["web"])
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    app.add_exception_handler(FmsValidationError, handle_fms_validation_errors)
    app.add_exception_handler(UserNotFoundError, handle_user_not_found)
    app.add_exception_handler(RequestValidationError, handle_request_validation_errors)
    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    app = create_app()
    uvicorn.run(app, host="0.0.0.0", port=9000)
