from fastapi import (
    APIRouter,
    Depends,
    Path,
    Query,
    Response,
    status
)
from fastapi.responses import PlainTextResponse

from directory_api.dependencies import get_fms_service
from directory_api.schemas import UploadConstraintsResponse
from directory_api.services import FmsService

router = APIRouter(prefix="/fms")


@router.get("/upload-constraints", response_model=UploadConstraintsResponse)
async def get_upload_constraints(fms: FmsService = Depends(get_fms_service)) -> UploadConstraintsResponse:
    """
    Allowed file types and the maximum size for photo uploads.

    The frontend can call this to reject a file before asking for an upload URL.
    """
    return UploadConstraintsResponse(**fms.get_upload_constraints())


@router.get(
    "/presigned-url/upload",
    response_class=PlainTextResponse,
    responses={
        status.HTTP_200_OK: {
            "description": "Presigned URL for a PUT, valid for 30 minutes.",
            "content": {"text/plain": {"example": "http://localhost:4566/demo-bucket/profile/john123.jpg?X-Amz-Algorithm=..."}},
        },
        status.HTTP_400_BAD_REQUEST: {
            "description": "Disallowed content type, non-positive size or size above the limit.",
        },
    },
)
async def get_presigned_upload_url(
    key: str = Query(..., min_length=1, description="S3 object key, e.g. profile/john123.jpg"),
    content_type: str = Query(..., alias="contentType", description="MIME type of the file"),
    file_size: int = Query(..., alias="fileSize", description="Exact size of the file in bytes"),
    fms: FmsService = Depends(get_fms_service),
) -> PlainTextResponse:
    """
    Get a presigned URL for uploading a file directly to S3.

    The returned URL only accepts a PUT with exactly this content type and size.
    """
    url = fms.get_presigned_upload_url(key, content_type, file_size)
    return PlainTextResponse(url)


@router.get(
    "/presigned-url/view",
    response_class=PlainTextResponse,
    responses={
        status.HTTP_200_OK: {
            "description": "Presigned URL for a GET, valid for 5 minutes.",
            "content": {"text/plain": {"example": "http://localhost:4566/demo-bucket/profile/john123.jpg?X-Amz-Algorithm=..."}},
        },
    },
)
async def get_presigned_view_url(
    key: str = Query(..., min_length=1, description="S3 object key to read"),
    fms: FmsService = Depends(get_fms_service),
) -> PlainTextResponse:
    """Get a presigned URL for viewing or downloading a file, e.g. as an image src."""
    return PlainTextResponse(fms.get_presigned_view_url(key))


@router.delete("/objects/{key:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_object(
    key: str = Path(..., min_length=1, description="S3 object key to delete"),
    fms: FmsService = Depends(get_fms_service),
) -> Response:
    """Delete an object. Deleting a key that does not exist also succeeds."""
    fms.delete_object(key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
