####################################
# --- Request/response schemas --- #
####################################

from typing import List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


class UploadConstraintsResponse(BaseModel):
    """Response model for `GET /api/fms/upload-constraints`."""
    allowed_mime_types: List[str] = Field(alias="allowedMimeTypes")
    max_file_size_bytes: int = Field(alias="maxFileSizeBytes")
    max_file_size_mb: float = Field(alias="maxFileSizeMB")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "allowedMimeTypes": ["image/jpeg", "image/jpg", "image/png", "image/webp"],
                "maxFileSizeBytes": 5242880,
                "maxFileSizeMB": 5,
            }
        },
    )


class UserBase(BaseModel):
    name: str = Field(min_length=1, max_length=100, json_schema_extra={"example": "Ada Lovelace"})
    email: str = Field(min_length=3, max_length=255, json_schema_extra={"example": "ada@example.com"})
    address: str = Field("", max_length=255)
    phone_number_country_code: str = Field("", max_length=8, alias="phoneNumberCountryCode")
    phone_number: str = Field("", max_length=32, alias="phoneNumber")

    model_config = ConfigDict(populate_by_name=True)


class CreateUserRequest(UserBase):
    """Request body for `POST /api/users`."""
    document_photo: Optional[str] = Field(
        None,
        alias="documentPhoto",
        description="S3 key of an already uploaded profile photo.",
    )


class User(UserBase):
    """A user card in the directory."""
    id: int
    document_photo: Optional[str] = Field(
        None,
        alias="documentPhoto",
        description="S3 key of the profile photo.",
        json_schema_extra={"example": "profile/1-ada.jpg"},
    )

    @classmethod
    def from_row(cls, row: dict) -> "User":
        return cls(
            id=row["user_id"],
            name=row["name"],
            email=row["email"],
            address=row["address"],
            phone_number_country_code=row["phone_country_code"],
            phone_number=row["phone_number"],
            document_photo=row["document_photo"],
        )


class GetUsersResponse(BaseModel):
    """Response model for `GET /api/users`."""
    users: List[User]


class PhotoUploadUrlResponse(BaseModel):
    """Response model for `GET /api/users/:id/photo/upload-url`."""
    key: str = Field(description="Object key the photo must be uploaded to.")
    upload_url: str = Field(alias="uploadUrl", description="Presigned PUT URL for that key.")

    model_config = ConfigDict(populate_by_name=True)


class UpdateUserPhotoRequest(BaseModel):
    """Request body for `PATCH /api/users/:id/photo`. An explicit null clears the photo."""
    document_photo: Optional[str] = Field(
        ...,
        min_length=1,
        max_length=1024,
        alias="documentPhoto",
    )

    model_config = ConfigDict(populate_by_name=True)
