"""Dense 1-based rank of an item among its siblings."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from tierlist.domain.result import Result, validation

MIN_ORDER = 1


@dataclass(frozen=True, order=True)
class Order:
    """Immutable position wrapper; build it with ``Order.create``."""

    value: int

    @classmethod
    def create(cls, value: int) -> Result["Order"]:
        if value < MIN_ORDER:
            return Result.failure(
                validation(
                    f"Order value must be greater than or equal to {MIN_ORDER}.",
                    code="Order.InvalidValue",
                )
            )
        return Result.success(cls(value))

    @classmethod
    def first(cls) -> "Order":
        return cls(MIN_ORDER)

    def increment(self) -> "Order":
        return Order(self.value + 1)

    def decrement(self) -> Result["Order"]:
        if self.value <= MIN_ORDER:
            return Result.failure(
                validation(
                    f"Order value cannot be less than {MIN_ORDER}.",
                    code="Order.InvalidDecrement",
                )
            )
        return Order.create(self.value - 1)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


class Ordered(Protocol):
    order: Order | None


def reindex(items: Sequence[Ordered]) -> None:
    """Assign orders 1..n to ``items`` in their current sequence."""
    for position, item in enumerate(items, start=MIN_ORDER):
        if item.order != Order(position):
            item.order = Order(position)
