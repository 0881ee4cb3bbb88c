"""Custom column types."""

from sqlalchemy import Integer
from sqlalchemy.types import TypeDecorator

from tierlist.domain.order import Order


class OrderType(TypeDecorator):
    """Stores an ``Order`` value object as a plain integer column."""

    impl = Integer
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, Order):
            return value.value
        return int(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        result = Order.create(value)
        if result.is_failure:
            # A stored order below 1 means the table was edited outside the app
            raise ValueError(f"Invalid order stored in database: {value}")
        return result.value
