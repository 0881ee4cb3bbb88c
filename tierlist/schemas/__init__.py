"""Pydantic schemas for API requests and responses."""

from tierlist.schemas.auth import (
    RefreshRequest,
    TokenResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
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
from tierlist.schemas.row import (
    BackupRowResponse,
    RowColorUpdate,
    RowCreate,
    RowOrderUpdate,
    RowRankUpdate,
    RowResponse,
)
from tierlist.schemas.tier_list import (
    TierListCreate,
    TierListDataResponse,
    TierListResponse,
    TierListUpdate,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "RefreshRequest",
    "TokenResponse",
    "UserResponse",
    "TierListCreate",
    "TierListUpdate",
    "TierListResponse",
    "TierListDataResponse",
    "RowCreate",
    "RowRankUpdate",
    "RowColorUpdate",
    "RowOrderUpdate",
    "RowResponse",
    "BackupRowResponse",
    "ImageCreate",
    "ImageNoteUpdate",
    "ImageUrlUpdate",
    "ImageReorder",
    "ImageMove",
    "ImageResponse",
    "UploadUrlResponse",
    "DownloadUrlResponse",
]
