"""
User service for the directory.

Users live in SQLite; their profile photos live in S3 and are referenced by
object key. Removing a user or replacing their photo also removes the old
object so the bucket does not collect orphans.
"""

import logging
import re
from typing import List, Optional

from directory_api.database import local
from directory_api.errors import UserNotFoundError
from directory_api.schemas import CreateUserRequest, User
from directory_api.services.fms_service import FmsService

logger = logging.getLogger(__name__)

PROFILE_PHOTO_PREFIX = "profile/"

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def build_photo_key(user_id: int, filename: str) -> str:
    """Object key for a user's photo, e.g. ``profile/7-ada.jpg``."""
    safe_name = _UNSAFE_KEY_CHARS.sub("-", filename).strip("-") or "photo"
    return f"{PROFILE_PHOTO_PREFIX}{user_id}-{safe_name}"


class UserService:
    """Service for managing users and the photo objects they point to"""

    def __init__(self, fms: FmsService, db_path: str = "directory.db"):
        self.fms = fms
        self.db_path = db_path

    def list_users(self) -> List[User]:
        return [User.from_row(row) for row in local.list_users(db_path=self.db_path)]

    def get_user(self, user_id: int) -> User:
        row = local.get_user(user_id, db_path=self.db_path)
        if row is None:
            raise UserNotFoundError(user_id)
        return User.from_row(row)

    def create_user(self, request: CreateUserRequest) -> User:
        user_id = local.add_user(
            name=request.name,
            email=request.email,
            address=request.address,
            phone_country_code=request.phone_number_country_code,
            phone_number=request.phone_number,
            document_photo=request.document_photo,
            db_path=self.db_path,
        )
        logger.info(f"Created user {user_id} ({request.email})")
        return self.get_user(user_id)

    def photo_upload_url(self, user_id: int, filename: str, content_type: str, file_size: int) -> dict:
        """Pick the object key for a new photo and presign an upload to it."""
        self.get_user(user_id)
        key = build_photo_key(user_id, filename)
        upload_url = self.fms.get_presigned_upload_url(key, content_type, file_size)
        return {"key": key, "upload_url": upload_url}

    def set_photo(self, user_id: int, document_photo: Optional[str]) -> User:
        """Record a new photo key for a user, deleting the object it replaces."""
        previous = self.get_user(user_id).document_photo
        local.update_user_photo(user_id, document_photo, db_path=self.db_path)
        if previous and previous != document_photo:
            self.fms.delete_object(previous)
        return self.get_user(user_id)

    def photo_url(self, user: User) -> Optional[str]:
        """Presigned view URL for the user's photo, or None when they have none."""
        if not user.document_photo:
            return None
        return self.fms.get_presigned_view_url(user.document_photo)

    def delete_user(self, user_id: int) -> None:
        user = self.get_user(user_id)
        if user.document_photo:
            self.fms.delete_object(user.document_photo)
        local.delete_user(user_id, db_path=self.db_path)
        logger.info(f"Deleted user {user_id}")
