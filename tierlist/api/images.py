"""Image API endpoints.

Image bytes never pass through this API: clients upload to and download from
object storage through presigned URLs and only record the result here.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from tierlist.api.dependencies import get_current_user, get_tier_list_service
from tierlist.api.errors import unwrap
from tierlist.models.user import User
from tierlist.schemas.image import (
    DownloadUrlResponse,
    ImageCreate,
    ImageMove,
    ImageNoteUpdate,
    ImageReorder,
    ImageResponse,
    ImageUrlUpdate,
    UploadUrlResponse,
)
from tierlist.services.tier_lists import TierListService

router = APIRouter(prefix="/api/v1/images", tags=["images"])


@router.get("/upload-url", response_model=UploadUrlResponse)
async def get_upload_url(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TierListService, Depends(get_tier_list_service)],
    file_name: str = Query(..., min_length=1, max_length=255),
    content_type: str = Query(..., min_length=1, max_length=100),
):
    """Get a presigned URL to upload an image and the storage key for it."""
    return unwrap(service.get_upload_url(file_name, content_type))


@router.get("/{image_id}/download-url", response_model=DownloadUrlResponse)
async def get_download_url(
    image_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TierListService, Depends(get_tier_list_service)],
    list_id: int = Query(..., gt=0),
    container_id: int = Query(..., gt=0),
):
    """Get a presigned URL to download a stored image."""
    url = unwrap(service.get_download_url(current_user.id, list_id, container_id, image_id))
    return DownloadUrlResponse(url=url)


@router.post("", response_model=ImageResponse, status_code=status.HTTP_201_CREATED)
async def save_image(
    image_data: ImageCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TierListService, Depends(get_tier_list_service)],
):
    """Record an uploaded image in a row or the backup row."""
    return unwrap(
        service.save_image(
            current_user.id,
            image_data.list_id,
            image_data.container_id,
            image_data.storage_key,
            image_data.url,
            image_data.note,
            image_data.order,
        )
    )


@router.put("/{image_id}/note", response_model=ImageResponse)
async def update_image_note(
    image_id: int,
    image_data: ImageNoteUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TierListService, Depends(get_tier_list_service)],
):
    """Change an image's note."""
    return unwrap(
        service.update_image_note(
            current_user.id, image_data.list_id, image_data.container_id, image_id, image_data.note
        )
    )


@router.put("/{image_id}/url", response_model=ImageResponse)
async def update_image_url(
    image_id: int,
    image_data: ImageUrlUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TierListService, Depends(get_tier_list_service)],
):
    """Change an image's display URL."""
    return unwrap(
        service.update_image_url(
            current_user.id, image_data.list_id, image_data.container_id, image_id, image_data.url
        )
    )


@router.put("/{image_id}/reorder", response_model=ImageResponse)
async def reorder_image(
    image_id: int,
    image_data: ImageReorder,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TierListService, Depends(get_tier_list_service)],
):
    """Move an image to a new position within its container."""
    return unwrap(
        service.reorder_image(
            current_user.id, image_data.list_id, image_data.container_id, image_id, image_data.order
        )
    )


@router.put("/{image_id}/move", response_model=ImageResponse)
async def move_image(
    image_id: int,
    image_data: ImageMove,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TierListService, Depends(get_tier_list_service)],
):
    """Move an image to a position in another container."""
    return unwrap(
        service.move_image(
            current_user.id,
            image_data.list_id,
            image_id,
            image_data.from_container_id,
            image_data.to_container_id,
            image_data.order,
        )
    )


@router.delete("/{image_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_image(
    image_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TierListService, Depends(get_tier_list_service)],
    list_id: int = Query(..., gt=0),
    container_id: int = Query(..., gt=0),
):
    """Delete an image and its stored file."""
    unwrap(service.delete_image(current_user.id, list_id, container_id, image_id))
