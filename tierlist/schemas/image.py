"""Image schemas."""

import uuid

from pydantic import BaseModel, ConfigDict, Field

from tierlist.schemas.common import OrderValue


class ImageCreate(BaseModel):
    """Record an image that was uploaded through a presigned URL."""

    list_id: int = Field(..., gt=0)
    container_id: int = Field(..., gt=0)
    storage_key: uuid.UUID
    url: str = Field(..., max_length=2048)
    note: str = Field("", max_length=500)
    order: int | None = None  # default: after the last image


class ImageNoteUpdate(BaseModel):
    list_id: int = Field(..., gt=0)
    container_id: int = Field(..., gt=0)
    note: str = Field(..., max_length=500)


class ImageUrlUpdate(BaseModel):
    list_id: int = Field(..., gt=0)
    container_id: int = Field(..., gt=0)
    url: str = Field(..., max_length=2048)


class ImageReorder(BaseModel):
    """Move an image within its container."""

    list_id: int = Field(..., gt=0)
    container_id: int = Field(..., gt=0)
    order: int


class ImageMove(BaseModel):
    """Move an image to another container of the same list."""

    list_id: int = Field(..., gt=0)
    from_container_id: int = Field(..., gt=0)
    to_container_id: int = Field(..., gt=0)
    order: int


class ImageResponse(BaseModel):
    """Image response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    storage_key: uuid.UUID
    url: str
    note: str
    container_id: int
    order: OrderValue


class UploadUrlResponse(BaseModel):
    """Presigned PUT URL and the storage key to save the image under."""

    model_config = ConfigDict(from_attributes=True)

    url: str
    storage_key: uuid.UUID


class DownloadUrlResponse(BaseModel):
    url: str
