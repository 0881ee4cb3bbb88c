"""Application service for tier lists, rows and images.

Each public method is one command or query: it loads the caller's tier list
aggregate, delegates to the aggregate's domain operation and commits the whole
change as one transaction. Outcomes are returned as ``Result`` values; the API
layer maps their errors to HTTP responses.
"""

import logging
import uuid
from dataclasses import dataclass

from sqlalchemy.orm import Session

from tierlist.database import run_in_transaction
from tierlist.domain.result import Result, not_found, validation
from tierlist.models.container import BackupRow, Row
from tierlist.models.image import Image
from tierlist.models.tier_list import TierList
from tierlist.services.repository import TierListRepository
from tierlist.services.storage import ImageStorageService, UploadTicket

logger = logging.getLogger(__name__)


@dataclass
class TierListData:
    """A list with its rows in rank order and its backup row."""

    tier_list: TierList
    rows: list[Row]
    backup_row: BackupRow


class TierListService:
    """Commands and queries over a user's tier lists."""

    def __init__(self, db: Session, storage: ImageStorageService):
        self.db = db
        self.storage = storage
        self.repository = TierListRepository(db)

    # Lists

    def get_tier_lists(self, user_id: int) -> Result[list[TierList]]:
        return Result.success(self.repository.get_all(user_id))

    def get_tier_list_data(self, user_id: int, list_id: int) -> Result[TierListData]:
        tier_list_result = self._load(user_id, list_id)
        if tier_list_result.is_failure:
            return Result.failure(tier_list_result.error)
        tier_list = tier_list_result.value

        backup_row_result = tier_list.get_backup_row()
        if backup_row_result.is_failure:
            return Result.failure(backup_row_result.error)

        return Result.success(
            TierListData(
                tier_list=tier_list,
                rows=tier_list.rows,
                backup_row=backup_row_result.value,
            )
        )

    def create_tier_list(self, user_id: int, title: str) -> Result[TierList]:
        """Create a list with the default rows and a backup row."""
        create_result = TierList.create(title, user_id)
        if create_result.is_failure:
            return create_result
        tier_list = create_result.value

        def operation() -> Result[TierList]:
            self.repository.add(tier_list)
            return Result.success(tier_list)

        result = run_in_transaction(self.db, operation)
        if result.is_success:
            logger.info(f"User {user_id} created tier list {tier_list.id}")
        return result

    def update_tier_list(self, user_id: int, list_id: int, title: str) -> Result[TierList]:
        tier_list_result = self._load(user_id, list_id, for_update=True)
        if tier_list_result.is_failure:
            return tier_list_result
        tier_list = tier_list_result.value
        return run_in_transaction(self.db, lambda: tier_list.rename(title))

    def delete_tier_list(self, user_id: int, list_id: int) -> Result[None]:
        """Delete a list with all its containers and images."""
        tier_list_result = self._load(user_id, list_id, for_update=True)
        if tier_list_result.is_failure:
            return Result.failure(tier_list_result.error)
        tier_list = tier_list_result.value
        storage_keys = [image.storage_key for image in tier_list.all_images()]

        def operation() -> Result[None]:
            self.repository.delete(tier_list)
            return Result.success()

        result = run_in_transaction(self.db, operation)
        if result.is_success:
            logger.info(f"User {user_id} deleted tier list {list_id}")
            self._delete_blobs(storage_keys)
        return result

    # Rows

    def create_row(
        self,
        user_id: int,
        list_id: int,
        rank: str,
        color_hex: str,
        order: int | None = None,
    ) -> Result[Row]:
        tier_list_result = self._load(user_id, list_id, for_update=True)
        if tier_list_result.is_failure:
            return Result.failure(tier_list_result.error)
        tier_list = tier_list_result.value
        return run_in_transaction(self.db, lambda: tier_list.add_row(rank, color_hex, order))

    def update_row_rank(self, user_id: int, list_id: int, row_id: int, rank: str) -> Result[Row]:
        tier_list_result = self._load(user_id, list_id, for_update=True)
        if tier_list_result.is_failure:
            return Result.failure(tier_list_result.error)
        tier_list = tier_list_result.value
        return run_in_transaction(self.db, lambda: tier_list.update_row_rank(row_id, rank))

    def update_row_color(
        self, user_id: int, list_id: int, row_id: int, color_hex: str
    ) -> Result[Row]:
        tier_list_result = self._load(user_id, list_id, for_update=True)
        if tier_list_result.is_failure:
            return Result.failure(tier_list_result.error)
        tier_list = tier_list_result.value
        return run_in_transaction(self.db, lambda: tier_list.update_row_color(row_id, color_hex))

    def update_row_order(self, user_id: int, list_id: int, row_id: int, order: int) -> Result[Row]:
        tier_list_result = self._load(user_id, list_id, for_update=True)
        if tier_list_result.is_failure:
            return Result.failure(tier_list_result.error)
        tier_list = tier_list_result.value
        return run_in_transaction(self.db, lambda: tier_list.update_row_order(row_id, order))

    def delete_row(
        self, user_id: int, list_id: int, row_id: int, delete_with_images: bool
    ) -> Result[None]:
        """Delete a row.

        With ``delete_with_images`` the row's images are deleted along with it
        (and their blobs removed from storage afterwards). Otherwise they are
        appended to the backup row in their current order.
        """
        tier_list_result = self._load(user_id, list_id, for_update=True)
        if tier_list_result.is_failure:
            return Result.failure(tier_list_result.error)
        tier_list = tier_list_result.value

        deleted_keys: list[uuid.UUID] = []

        def operation() -> Result[None]:
            row_result = tier_list.get_row(row_id)
            if row_result.is_failure:
                return Result.failure(row_result.error)
            row = row_result.value

            if delete_with_images:
                deleted_keys.extend(image.storage_key for image in row.images)
            else:
                backup_row_result = tier_list.get_backup_row()
                if backup_row_result.is_failure:
                    return Result.failure(backup_row_result.error)
                row.transfer_images_to(backup_row_result.value)

            remove_result = tier_list.remove_row(row_id)
            if remove_result.is_failure:
                return Result.failure(remove_result.error)
            return Result.success()

        result = run_in_transaction(self.db, operation)
        if result.is_success:
            policy = "deleted" if delete_with_images else "moved to backup row"
            logger.info(f"Deleted row {row_id} of list {list_id}; images {policy}")
            self._delete_blobs(deleted_keys)
        return result

    # Images

    def get_upload_url(self, file_name: str, content_type: str) -> Result[UploadTicket]:
        return self.storage.get_upload_url(file_name, content_type)

    def get_download_url(
        self, user_id: int, list_id: int, container_id: int, image_id: int
    ) -> Result[str]:
        tier_list_result = self._load(user_id, list_id)
        if tier_list_result.is_failure:
            return Result.failure(tier_list_result.error)
        image_result = tier_list_result.value.get_image(container_id, image_id)
        if image_result.is_failure:
            return Result.failure(image_result.error)
        return self.storage.get_download_url(image_result.value.storage_key)

    def save_image(
        self,
        user_id: int,
        list_id: int,
        container_id: int,
        storage_key: uuid.UUID | str,
        url: str,
        note: str = "",
        order: int | None = None,
    ) -> Result[Image]:
        """Record an image the client has already uploaded to storage."""
        tier_list_result = self._load(user_id, list_id, for_update=True)
        if tier_list_result.is_failure:
            return Result.failure(tier_list_result.error)
        tier_list = tier_list_result.value

        def operation() -> Result[Image]:
            add_result = tier_list.add_image(container_id, storage_key, url, note, order)
            if add_result.is_failure:
                return add_result
            image = add_result.value
            if self.repository.storage_key_exists(image.storage_key):
                return Result.failure(
                    validation(
                        f"An image with storage key {image.storage_key} already exists.",
                        code="Image.DuplicateStorageKey",
                    )
                )
            return add_result

        return run_in_transaction(self.db, operation)

    def update_image_note(
        self, user_id: int, list_id: int, container_id: int, image_id: int, note: str
    ) -> Result[Image]:
        tier_list_result = self._load(user_id, list_id, for_update=True)
        if tier_list_result.is_failure:
            return Result.failure(tier_list_result.error)
        tier_list = tier_list_result.value
        return run_in_transaction(
            self.db, lambda: tier_list.update_image_note(container_id, image_id, note)
        )

    def update_image_url(
        self, user_id: int, list_id: int, container_id: int, image_id: int, url: str
    ) -> Result[Image]:
        tier_list_result = self._load(user_id, list_id, for_update=True)
        if tier_list_result.is_failure:
            return Result.failure(tier_list_result.error)
        tier_list = tier_list_result.value
        return run_in_transaction(
            self.db, lambda: tier_list.update_image_url(container_id, image_id, url)
        )

    def reorder_image(
        self, user_id: int, list_id: int, container_id: int, image_id: int, order: int
    ) -> Result[Image]:
        tier_list_result = self._load(user_id, list_id, for_update=True)
        if tier_list_result.is_failure:
            return Result.failure(tier_list_result.error)
        tier_list = tier_list_result.value
        return run_in_transaction(
            self.db, lambda: tier_list.reorder_image(container_id, image_id, order)
        )

    def move_image(
        self,
        user_id: int,
        list_id: int,
        image_id: int,
        from_container_id: int,
        to_container_id: int,
        order: int,
    ) -> Result[Image]:
        tier_list_result = self._load(user_id, list_id, for_update=True)
        if tier_list_result.is_failure:
            return Result.failure(tier_list_result.error)
        tier_list = tier_list_result.value
        return run_in_transaction(
            self.db,
            lambda: tier_list.move_image(image_id, from_container_id, to_container_id, order),
        )

    def delete_image(
        self, user_id: int, list_id: int, container_id: int, image_id: int
    ) -> Result[None]:
        """Delete the stored blob, then the image record."""
        tier_list_result = self._load(user_id, list_id, for_update=True)
        if tier_list_result.is_failure:
            return Result.failure(tier_list_result.error)
        tier_list = tier_list_result.value

        image_result = tier_list.get_image(container_id, image_id)
        if image_result.is_failure:
            return Result.failure(image_result.error)

        storage_key = image_result.value.storage_key
        blob_result = self.storage.delete_image(storage_key)
        if blob_result.is_failure:
            return blob_result

        def operation() -> Result[None]:
            remove_result = tier_list.remove_image(container_id, image_id)
            if remove_result.is_failure:
                return Result.failure(remove_result.error)
            return Result.success()

        result = run_in_transaction(self.db, operation)
        if result.is_failure:
            # The blob is already gone but the record survives
            logger.warning(
                f"Image {image_id} of list {list_id} points at deleted blob {storage_key}: "
                f"{result.error.message}"
            )
        return result

    def _load(self, user_id: int, list_id: int, for_update: bool = False) -> Result[TierList]:
        tier_list = self.repository.get_by_id(list_id, user_id, for_update=for_update)
        if tier_list is None:
            return Result.failure(not_found(f"List with ID {list_id} not found."))
        return Result.success(tier_list)

    def _delete_blobs(self, storage_keys: list[uuid.UUID]) -> None:
        for storage_key in storage_keys:
            result = self.storage.delete_image(storage_key)
            if result.is_failure:
                logger.warning(f"Orphaned blob {storage_key}: {result.error.message}")
