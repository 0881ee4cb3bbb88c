"""Field types shared by several schemas."""

from typing import Annotated

from pydantic import BeforeValidator

from tierlist.domain.order import Order


def _order_to_int(value):
    if isinstance(value, Order):
        return value.value
    return value


# Positions are ``Order`` objects on the models and plain integers on the wire
OrderValue = Annotated[int, BeforeValidator(_order_to_int)]
