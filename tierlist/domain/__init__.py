"""Domain primitives shared by the models and services."""

from tierlist.domain.order import MIN_ORDER, Order, reindex
from tierlist.domain.result import Error, ErrorType, Result

__all__ = [
    "MIN_ORDER",
    "Order",
    "reindex",
    "Error",
    "ErrorType",
    "Result",
]
