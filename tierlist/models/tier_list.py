"""Tier list aggregate: a titled list of ranked rows plus one backup row."""

import logging
import uuid
from collections.abc import Iterable

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from tierlist.database import Base
from tierlist.domain.order import Order, reindex
from tierlist.domain.result import Result, not_found, unexpected, validation
from tierlist.models.container import BackupRow, Container, Row, as_order, invalid_order
from tierlist.models.image import Image
from tierlist.models.mixins import TimestampMixin

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 100

# (rank, color) of the rows every new list starts with
DEFAULT_ROWS = (
    ("A", "#FFBF7F"),
    ("B", "#FFDF7F"),
    ("C", "#FFFF7F"),
)


class TierList(Base, TimestampMixin):
    """Consistency boundary for rows, the backup row and their images.

    Everything that changes container membership or ordering goes through
    the methods here so that both the dense row order and the dense image
    order of each container hold once a method returns.
    """

    __tablename__ = "tier_lists"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(MAX_TITLE_LENGTH), nullable=False)

    # Relationships
    owner = relationship("User", back_populates="tier_lists")
    containers = relationship(
        "Container",
        back_populates="tier_list",
        cascade="all, delete-orphan",
        order_by="Container.id",
    )

    @classmethod
    def create(
        cls,
        title: str,
        owner_id: int,
        default_rows: Iterable[tuple[str, str]] = DEFAULT_ROWS,
    ) -> Result["TierList"]:
        """Build a new list with the default rows and its backup row."""
        title_error = _check_title(title)
        if title_error is not None:
            return Result.failure(title_error)
        if owner_id is None or owner_id <= 0:
            return Result.failure(validation("Invalid user ID provided."))

        tier_list = cls(title=title, owner_id=owner_id)
        for position, (rank, color_hex) in enumerate(default_rows, start=1):
            row_result = Row.create(rank, color_hex, position)
            if row_result.is_failure:
                return Result.failure(row_result.error)
            tier_list.containers.append(row_result.value)
        tier_list.containers.append(BackupRow())
        return Result.success(tier_list)

    # Reads

    @property
    def rows(self) -> list[Row]:
        """Ranked rows sorted by their order."""
        return sorted(
            (c for c in self.containers if isinstance(c, Row)),
            key=lambda row: row.order,
        )

    def get_backup_row(self) -> Result[BackupRow]:
        """Return the list's backup row.

        Exactly one must exist; anything else is corrupt stored state and is
        reported as an unexpected error rather than a not-found.
        """
        backup_rows = [c for c in self.containers if isinstance(c, BackupRow)]
        if len(backup_rows) != 1:
            logger.error(
                f"Tier list {self.id} has {len(backup_rows)} backup rows, expected exactly one"
            )
            return Result.failure(
                unexpected(f"Backup row for list with ID {self.id} is missing or duplicated.")
            )
        return Result.success(backup_rows[0])

    def get_container(self, container_id: int) -> Result[Container]:
        container = next((c for c in self.containers if c.id == container_id), None)
        if container is None:
            return Result.failure(
                not_found(f"Container with ID {container_id} not found in list {self.id}.")
            )
        return Result.success(container)

    def get_row(self, row_id: int) -> Result[Row]:
        row = next((r for r in self.rows if r.id == row_id), None)
        if row is None:
            return Result.failure(not_found(f"Row with ID {row_id} not found in list {self.id}."))
        return Result.success(row)

    def get_image(self, container_id: int, image_id: int) -> Result[Image]:
        container_result = self.get_container(container_id)
        if container_result.is_failure:
            return Result.failure(container_result.error)
        return container_result.value.get_image(image_id)

    def all_images(self) -> list[Image]:
        return [image for container in self.containers for image in container.images]

    # List-level mutations

    def rename(self, title: str) -> Result["TierList"]:
        title_error = _check_title(title)
        if title_error is not None:
            return Result.failure(title_error)
        self.title = title
        self.touch()
        return Result.success(self)

    # Row mutations

    def add_row(self, rank: str, color_hex: str, order: Order | int | None = None) -> Result[Row]:
        """Insert a row at ``order`` (default: after the last row)."""
        rows = self.rows
        if order is None:
            order = len(rows) + 1

        row_result = Row.create(rank, color_hex, order)
        if row_result.is_failure:
            return row_result
        row = row_result.value

        if row.order.value > len(rows) + 1:
            return Result.failure(
                invalid_order(f"Order {row.order} exceeds the number of rows in the list.")
            )

        rows.insert(row.order.value - 1, row)
        self.containers.append(row)
        reindex(rows)
        self.touch()
        return Result.success(row)

    def remove_row(self, row_id: int) -> Result[Row]:
        """Remove a row and everything still in it, closing the gap it leaves.

        Callers that want to keep the row's images must move them out first.
        """
        row_result = self.get_row(row_id)
        if row_result.is_failure:
            return row_result
        row = row_result.value

        rows = self.rows
        if len(rows) == 1:
            return Result.failure(validation("A tier list must keep at least one row."))

        rows.remove(row)
        self.containers.remove(row)
        reindex(rows)
        self.touch()
        return Result.success(row)

    def update_row_rank(self, row_id: int, rank: str) -> Result[Row]:
        row_result = self.get_row(row_id)
        if row_result.is_failure:
            return row_result
        result = row_result.value.update_rank(rank)
        if result.is_success:
            self.touch()
        return result

    def update_row_color(self, row_id: int, color_hex: str) -> Result[Row]:
        row_result = self.get_row(row_id)
        if row_result.is_failure:
            return row_result
        result = row_result.value.update_color(color_hex)
        if result.is_success:
            self.touch()
        return result

    def update_row_order(self, row_id: int, new_order: Order | int) -> Result[Row]:
        """Move a row to ``new_order`` among its siblings."""
        row_result = self.get_row(row_id)
        if row_result.is_failure:
            return row_result
        row = row_result.value

        order_result = as_order(new_order)
        if order_result.is_failure:
            return Result.failure(order_result.error)
        target = order_result.value

        rows = self.rows
        if target.value > len(rows):
            return Result.failure(
                invalid_order(f"Order {target} exceeds the number of rows in the list.")
            )
        if row.order == target:
            return Result.success(row)

        rows.remove(row)
        rows.insert(target.value - 1, row)
        reindex(rows)
        self.touch()
        return Result.success(row)

    # Image mutations

    def add_image(
        self,
        container_id: int,
        storage_key: uuid.UUID | str,
        url: str,
        note: str = "",
        order: Order | int | None = None,
    ) -> Result[Image]:
        """Append an image to a container, then optionally move it to ``order``."""
        container_result = self.get_container(container_id)
        if container_result.is_failure:
            return Result.failure(container_result.error)
        container = container_result.value

        position = None
        if order is not None:
            order_result = as_order(order)
            if order_result.is_failure:
                return Result.failure(order_result.error)
            position = order_result.value
            if position.value > container.image_count + 1:
                return Result.failure(
                    invalid_order(
                        f"Order {position} is out of range for the number of images "
                        f"in container {container_id}."
                    )
                )

        result = container.add_image(storage_key, url, note)
        if result.is_failure:
            return result
        image = result.value

        if position is not None and position != image.order:
            # The new image has no id yet, so place it directly
            sequence = container.ordered_images()
            sequence.remove(image)
            sequence.insert(position.value - 1, image)
            reindex(sequence)
        self.touch()
        return Result.success(image)

    def reorder_image(
        self, container_id: int, image_id: int, new_order: Order | int
    ) -> Result[Image]:
        container_result = self.get_container(container_id)
        if container_result.is_failure:
            return Result.failure(container_result.error)
        return self._touched(container_result.value.reorder_image(image_id, new_order))

    def move_image(
        self,
        image_id: int,
        from_container_id: int,
        to_container_id: int,
        new_order: Order | int,
    ) -> Result[Image]:
        source_result = self.get_container(from_container_id)
        if source_result.is_failure:
            return Result.failure(source_result.error)
        target_result = self.get_container(to_container_id)
        if target_result.is_failure:
            return Result.failure(target_result.error)
        return self._touched(
            source_result.value.move_image_to(image_id, target_result.value, new_order)
        )

    def remove_image(self, container_id: int, image_id: int) -> Result[Image]:
        container_result = self.get_container(container_id)
        if container_result.is_failure:
            return Result.failure(container_result.error)
        return self._touched(container_result.value.remove_image(image_id))

    def update_image_note(self, container_id: int, image_id: int, note: str) -> Result[Image]:
        image_result = self.get_image(container_id, image_id)
        if image_result.is_failure:
            return image_result
        return self._touched(image_result.value.update_note(note))

    def update_image_url(self, container_id: int, image_id: int, url: str) -> Result[Image]:
        image_result = self.get_image(container_id, image_id)
        if image_result.is_failure:
            return image_result
        return self._touched(image_result.value.update_url(url))

    def _touched(self, result: Result) -> Result:
        if result.is_success:
            self.touch()
        return result

    def __repr__(self) -> str:
        return f"<TierList id={self.id} title={self.title!r}>"


def _check_title(title: str | None):
    if not title or not title.strip():
        return validation("List title cannot be empty.", code="TierList.InvalidTitle")
    if len(title) > MAX_TITLE_LENGTH:
        return validation(
            f"List title cannot exceed {MAX_TITLE_LENGTH} characters.",
            code="TierList.InvalidTitle",
        )
    return None
