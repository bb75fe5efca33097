# farmconnect/domain/order_status.py
from farmconnect.domain.enums import OrderStatus
from farmconnect.domain.errors import InvalidTransitionError

# legal moves for the farmer fulfilling an order
FARMER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.pending: frozenset({OrderStatus.confirmed, OrderStatus.cancelled}),
    OrderStatus.confirmed: frozenset({OrderStatus.shipped, OrderStatus.cancelled}),
    OrderStatus.shipped: frozenset({OrderStatus.delivered}),
    OrderStatus.delivered: frozenset(),
    OrderStatus.cancelled: frozenset(),
}

# buyer can only withdraw an order nobody has confirmed yet
BUYER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.pending: frozenset({OrderStatus.cancelled}),
}


def ensure_transition(
    current: OrderStatus,
    requested: OrderStatus,
    table: dict[OrderStatus, frozenset[OrderStatus]] = FARMER_TRANSITIONS,
) -> None:
    if requested not in table.get(current, frozenset()):
        raise InvalidTransitionError(current.value, requested.value)
