"""Image containers: ranked rows and the per-list backup row.

Both kinds live in one ``containers`` table, told apart by ``container_type``.
A container owns its images; their ``order`` values are kept dense (1..n)
after every operation below by rebuilding the ordered sequence and
reindexing it.
"""

import re
import uuid

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from tierlist.database import Base
from tierlist.domain.order import Order, reindex
from tierlist.domain.result import Result, not_found, validation
from tierlist.models.image import Image
from tierlist.models.mixins import TimestampMixin
from tierlist.models.types import OrderType

MAX_RANK_LENGTH = 50
COLOR_HEX_PATTERN = re.compile(r"^#([0-9A-Fa-f]{6}|[0-9A-Fa-f]{3})$")


def as_order(value: Order | int) -> Result[Order]:
    """Accept either a ready Order or a raw integer from a request."""
    if isinstance(value, Order):
        return Result.success(value)
    return Order.create(value)


def invalid_order(message: str):
    return validation(message, code="Container.InvalidOrder")


class Container(Base, TimestampMixin):
    """Base for every entity that holds an ordered collection of images."""

    __tablename__ = "containers"

    id = Column(Integer, primary_key=True, index=True)
    tier_list_id = Column(Integer, ForeignKey("tier_lists.id"), nullable=False, index=True)
    container_type = Column(String(20), nullable=False)

    # Relationships
    tier_list = relationship("TierList", back_populates="containers")
    images = relationship(
        "Image", back_populates="container", cascade="all, delete-orphan", order_by="Image.order"
    )

    __mapper_args__ = {
        "polymorphic_on": container_type,
        "polymorphic_abstract": True,
    }

    @property
    def image_count(self) -> int:
        return len(self.images)

    def ordered_images(self) -> list[Image]:
        """Images in canonical order."""
        return sorted(self.images, key=lambda image: image.order)

    def find_image(self, image_id: int) -> Image | None:
        return next((image for image in self.images if image.id == image_id), None)

    def get_image(self, image_id: int) -> Result[Image]:
        image = self.find_image(image_id)
        if image is None:
            return Result.failure(
                not_found(f"Image with ID {image_id} does not exist in container {self.id}.")
            )
        return Result.success(image)

    def add_image(
        self, storage_key: uuid.UUID | str, url: str, note: str = ""
    ) -> Result[Image]:
        """Append a new image after the current last one."""
        result = Image.create(storage_key, url, self.id, Order(self.image_count + 1), note)
        if result.is_failure:
            return result
        self.images.append(result.value)
        return result

    def reorder_image(self, image_id: int, new_order: Order | int) -> Result[Image]:
        """Move an image to ``new_order`` within this container."""
        image_result = self.get_image(image_id)
        if image_result.is_failure:
            return image_result
        image = image_result.value

        order_result = as_order(new_order)
        if order_result.is_failure:
            return Result.failure(order_result.error)
        target = order_result.value

        if target.value > self.image_count:
            return Result.failure(
                invalid_order(
                    f"Order {target} exceeds the number of images in container {self.id}."
                )
            )
        if image.order == target:
            return Result.success(image)

        sequence = self.ordered_images()
        sequence.remove(image)
        sequence.insert(target.value - 1, image)
        reindex(sequence)
        return Result.success(image)

    def remove_image(self, image_id: int) -> Result[Image]:
        """Detach and delete an image, closing the gap it leaves."""
        image_result = self.get_image(image_id)
        if image_result.is_failure:
            return image_result
        image = image_result.value

        self._detach(image)
        return Result.success(image)

    def move_image_to(
        self, image_id: int, target: "Container", new_order: Order | int
    ) -> Result[Image]:
        """Move an image from this container into ``target`` at ``new_order``."""
        if target is self:
            return self.reorder_image(image_id, new_order)

        order_result = as_order(new_order)
        if order_result.is_failure:
            return Result.failure(order_result.error)
        position = order_result.value

        if position.value > target.image_count + 1:
            return Result.failure(
                invalid_order(
                    f"Order {position} exceeds the number of images in the target "
                    f"container {target.id}."
                )
            )

        image_result = self.get_image(image_id)
        if image_result.is_failure:
            return image_result
        image = image_result.value

        self._detach(image)
        target._insert(image, position)
        return Result.success(image)

    def transfer_images_to(self, target: "Container") -> list[Image]:
        """Append every image of this container to the end of ``target``."""
        moved = self.ordered_images()
        for image in moved:
            self.images.remove(image)
            image.order = Order(target.image_count + 1)
            image.container_id = target.id
            target.images.append(image)
        return moved

    def _detach(self, image: Image) -> None:
        sequence = self.ordered_images()
        sequence.remove(image)
        self.images.remove(image)
        reindex(sequence)

    def _insert(self, image: Image, position: Order) -> None:
        sequence = self.ordered_images()
        sequence.insert(position.value - 1, image)
        image.container_id = self.id
        self.images.append(image)
        reindex(sequence)


class Row(Container):
    """A ranked row with a label, a color and a place among its sibling rows."""

    rank = Column(String(MAX_RANK_LENGTH), nullable=True)
    color_hex = Column(String(7), nullable=True)
    order = Column(OrderType, nullable=True)

    __mapper_args__ = {"polymorphic_identity": "row"}

    @classmethod
    def create(cls, rank: str, color_hex: str, order: Order | int) -> Result["Row"]:
        rank_error = _check_rank(rank)
        if rank_error is not None:
            return Result.failure(rank_error)

        color_error = _check_color(color_hex)
        if color_error is not None:
            return Result.failure(color_error)

        order_result = as_order(order)
        if order_result.is_failure:
            return Result.failure(order_result.error)

        return Result.success(cls(rank=rank, color_hex=color_hex, order=order_result.value))

    def update_rank(self, rank: str) -> Result["Row"]:
        rank_error = _check_rank(rank)
        if rank_error is not None:
            return Result.failure(rank_error)
        self.rank = rank
        return Result.success(self)

    def update_color(self, color_hex: str) -> Result["Row"]:
        color_error = _check_color(color_hex)
        if color_error is not None:
            return Result.failure(color_error)
        self.color_hex = color_hex
        return Result.success(self)

    def __repr__(self) -> str:
        return f"<Row id={self.id} rank={self.rank!r} order={self.order}>"


class BackupRow(Container):
    """The single unranked container of a list, holding images not yet placed."""

    __mapper_args__ = {"polymorphic_identity": "backup_row"}

    def __repr__(self) -> str:
        return f"<BackupRow id={self.id} images={self.image_count}>"


def _check_rank(rank: str | None):
    if not rank or not rank.strip():
        return validation("Rank cannot be empty.", code="Row.InvalidRank")
    if len(rank) > MAX_RANK_LENGTH:
        return validation(
            f"Rank cannot exceed {MAX_RANK_LENGTH} characters.", code="Row.InvalidRank"
        )
    return None


def _check_color(color_hex: str | None):
    if not color_hex or not COLOR_HEX_PATTERN.match(color_hex):
        return validation("Invalid color format. Use #RRGGBB or #RGB.", code="Row.InvalidColor")
    return None
