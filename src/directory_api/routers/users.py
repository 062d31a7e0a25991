from fastapi import (
    APIRouter,
    Depends,
    Query,
    Response,
    status
)

from directory_api.dependencies import get_user_service
from directory_api.schemas import (
    CreateUserRequest,
    GetUsersResponse,
    PhotoUploadUrlResponse,
    UpdateUserPhotoRequest,
    User,
)
from directory_api.services import UserService

router = APIRouter(prefix="/users")

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"description": "No user with the given `user_id`."}}


@router.get("", response_model=GetUsersResponse)
def list_users(users: UserService = Depends(get_user_service)) -> GetUsersResponse:
    """List every user in the directory, ordered by name."""
    return GetUsersResponse(users=users.list_users())


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(payload: CreateUserRequest, users: UserService = Depends(get_user_service)) -> User:
    """Add a user to the directory."""
    return users.create_user(payload)


@router.get("/{user_id}", response_model=User, responses=NOT_FOUND)
def get_user(user_id: int, users: UserService = Depends(get_user_service)) -> User:
    return users.get_user(user_id)


@router.get("/{user_id}/photo/upload-url", response_model=PhotoUploadUrlResponse, responses=NOT_FOUND)
def get_photo_upload_url(
    user_id: int,
    filename: str = Query(..., min_length=1, max_length=255),
    content_type: str = Query(..., alias="contentType"),
    file_size: int = Query(..., alias="fileSize"),
    users: UserService = Depends(get_user_service),
) -> PhotoUploadUrlResponse:
    """
    Choose the object key for a new profile photo and presign an upload to it.

    After the browser has PUT the file, it records the key with
    `PATCH /api/users/{user_id}/photo`.
    """
    return PhotoUploadUrlResponse(**users.photo_upload_url(user_id, filename, content_type, file_size))


@router.patch("/{user_id}/photo", response_model=User, responses=NOT_FOUND)
def update_user_photo(
    user_id: int,
    payload: UpdateUserPhotoRequest,
    users: UserService = Depends(get_user_service),
) -> User:
    """Point the user at a newly uploaded photo; the replaced photo is deleted."""
    return users.set_photo(user_id, payload.document_photo)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
def delete_user(user_id: int, users: UserService = Depends(get_user_service)) -> Response:
    """Remove a user and their profile photo."""
    users.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
