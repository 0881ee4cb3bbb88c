"""SQLAlchemy models."""

from tierlist.models.container import BackupRow, Container, Row
from tierlist.models.image import Image
from tierlist.models.tier_list import TierList
from tierlist.models.user import RefreshToken, User

__all__ = [
    "User",
    "RefreshToken",
    "TierList",
    "Container",
    "Row",
    "BackupRow",
    "Image",
]
