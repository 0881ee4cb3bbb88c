"""Image model."""

import uuid

from sqlalchemy import Column, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from tierlist.database import Base
from tierlist.domain.order import Order
from tierlist.domain.result import Result, validation
from tierlist.models.mixins import TimestampMixin
from tierlist.models.types import OrderType

MAX_NOTE_LENGTH = 500
MAX_URL_LENGTH = 2048


class Image(Base, TimestampMixin):
    """An uploaded image placed in exactly one container.

    ``storage_key`` identifies the blob in object storage; ``url`` is the link
    the client displays. Membership and order are changed only through the
    owning container, never by editing ``container_id`` directly.
    """

    __tablename__ = "images"

    id = Column(Integer, primary_key=True, index=True)
    container_id = Column(Integer, ForeignKey("containers.id"), nullable=False, index=True)
    storage_key = Column(Uuid, unique=True, nullable=False)
    url = Column(String(MAX_URL_LENGTH), nullable=False)
    note = Column(String(MAX_NOTE_LENGTH), nullable=False, default="")
    order = Column(OrderType, nullable=False)

    # Relationships
    container = relationship("Container", back_populates="images")

    @classmethod
    def create(
        cls,
        storage_key: uuid.UUID | str | None,
        url: str | None,
        container_id: int | None,
        order: Order,
        note: str = "",
    ) -> Result["Image"]:
        """Validate the attributes and build a new, not yet persisted image."""
        key_result = _parse_storage_key(storage_key)
        if key_result.is_failure:
            return Result.failure(key_result.error)

        url_error = _check_url(url)
        if url_error is not None:
            return Result.failure(url_error)

        if container_id is None or container_id <= 0:
            return Result.failure(
                validation(
                    "Container ID must be greater than zero.", code="Image.InvalidContainerId"
                )
            )

        note_error = _check_note(note)
        if note_error is not None:
            return Result.failure(note_error)

        return Result.success(
            cls(
                storage_key=key_result.value,
                url=url,
                container_id=container_id,
                order=order,
                note=note or "",
            )
        )

    def update_note(self, note: str | None) -> Result["Image"]:
        note_error = _check_note(note)
        if note_error is not None:
            return Result.failure(note_error)
        self.note = note or ""
        return Result.success(self)

    def update_url(self, url: str | None) -> Result["Image"]:
        url_error = _check_url(url)
        if url_error is not None:
            return Result.failure(url_error)
        self.url = url
        return Result.success(self)

    def __repr__(self) -> str:
        return f"<Image id={self.id} container={self.container_id} order={self.order}>"


def _parse_storage_key(storage_key: uuid.UUID | str | None) -> Result[uuid.UUID]:
    empty = validation("Storage key cannot be empty.", code="Image.EmptyStorageKey")
    if storage_key is None or storage_key == "":
        return Result.failure(empty)
    if not isinstance(storage_key, uuid.UUID):
        try:
            storage_key = uuid.UUID(str(storage_key))
        except ValueError:
            return Result.failure(
                validation("Storage key must be a valid UUID.", code="Image.InvalidStorageKey")
            )
    if storage_key.int == 0:
        return Result.failure(empty)
    return Result.success(storage_key)


def _check_url(url: str | None):
    if not url or not url.strip():
        return validation("Image URL cannot be empty.", code="Image.EmptyUrl")
    if len(url) > MAX_URL_LENGTH:
        return validation(
            f"Image URL cannot exceed {MAX_URL_LENGTH} characters.", code="Image.UrlTooLong"
        )
    return None


def _check_note(note: str | None):
    if note is not None and len(note) > MAX_NOTE_LENGTH:
        return validation(
            f"Note cannot exceed {MAX_NOTE_LENGTH} characters.", code="Image.NoteTooLong"
        )
    return None
