import logging

from fastapi import APIRouter, Depends

from directory_api.config.settings import Settings
from directory_api.database import local
from directory_api.dependencies import get_app_settings, get_fms_service
from directory_api.s3.bucket_setup import bucket_exists
from directory_api.services import FmsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health_check(
    settings: Settings = Depends(get_app_settings),
    fms: FmsService = Depends(get_fms_service),
):
    """
    Health check endpoint for monitoring API status and component readiness.

    Returns status of the API, the photo bucket and the user database along
    with which S3 backend is in use.
    """
    health_status = {
        "status": "ok",
        "s3_backend": "localstack" if settings.is_localstack else "aws",
        "components": {
            "api": "ready",
            "storage": "initializing",
            "database": "initializing"
        },
        "ready": False
    }

    try:
        if bucket_exists(settings.s3_bucket_name, s3_client=fms.s3_client):
            health_status["components"]["storage"] = "ready"
        else:
            health_status["components"]["storage"] = f"missing bucket: {settings.s3_bucket_name}"
            health_status["status"] = "degraded"
    except Exception as e:
        logger.warning(f"Storage health check failed: {e}")
        health_status["components"]["storage"] = f"error: {str(e)}"
        health_status["status"] = "degraded"

    try:
        local.list_users(db_path=settings.database_path)
        health_status["components"]["database"] = "ready"
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        health_status["components"]["database"] = f"error: {str(e)}"
        health_status["status"] = "degraded"

    health_status["ready"] = all(
        value == "ready" for value in health_status["components"].values()
    )
    return health_status
