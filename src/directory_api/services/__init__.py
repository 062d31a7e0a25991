"""
Directory API service layer.

FmsService issues presigned photo URLs; UserService manages the user directory
and keeps photo objects in step with it.
"""

from .fms_service import FmsService, ALLOWED_MIME_TYPES, MAX_FILE_SIZE_BYTES
from .user_service import UserService

__all__ = [
    'FmsService', 'ALLOWED_MIME_TYPES', 'MAX_FILE_SIZE_BYTES',
    'UserService',
]
