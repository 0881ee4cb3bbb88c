"""Data access for the tier list aggregate."""

import uuid

from sqlalchemy.orm import Session, selectinload

from tierlist.models.container import Container
from tierlist.models.image import Image
from tierlist.models.tier_list import TierList


class TierListRepository:
    """Loads and stores whole tier list aggregates."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self, owner_id: int) -> list[TierList]:
        """Get every list owned by a user, most recently created first."""
        return (
            self.db.query(TierList)
            .filter(TierList.owner_id == owner_id)
            .order_by(TierList.created_at.desc(), TierList.id.desc())
            .all()
        )

    def get_by_id(self, list_id: int, owner_id: int, for_update: bool = False) -> TierList | None:
        """Get a list with its containers and images loaded.

        With ``for_update`` the list row is locked until the transaction ends,
        so concurrent writers to the same list are serialized.
        """
        query = self.db.query(TierList).filter(
            TierList.id == list_id, TierList.owner_id == owner_id
        )
        if for_update:
            query = query.with_for_update(of=TierList)
        return query.options(
            selectinload(TierList.containers).selectinload(Container.images)
        ).first()

    def add(self, tier_list: TierList) -> None:
        self.db.add(tier_list)

    def delete(self, tier_list: TierList) -> None:
        self.db.delete(tier_list)

    def storage_key_exists(self, storage_key: uuid.UUID) -> bool:
        """Check whether a stored image already uses ``storage_key``."""
        with self.db.no_autoflush:
            query = self.db.query(Image.id).filter(Image.storage_key == storage_key)
            return query.first() is not None
