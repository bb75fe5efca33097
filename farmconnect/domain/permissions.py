# farmconnect/domain/permissions.py
import enum

from farmconnect.domain.enums import Role


class Action(str, enum.Enum):
    use_cart = "use_cart"
    checkout = "checkout"
    view_own_orders = "view_own_orders"
    cancel_own_order = "cancel_own_order"
    manage_listings = "manage_listings"
    fulfil_orders = "fulfil_orders"


# single source of truth for who may do what
_GRANTS: dict[Role, frozenset[Action]] = {
    Role.buyer: frozenset({
        Action.use_cart,
        Action.checkout,
        Action.view_own_orders,
        Action.cancel_own_order,
    }),
    Role.farmer: frozenset({
        Action.use_cart,
        Action.checkout,
        Action.view_own_orders,
        Action.cancel_own_order,
        Action.manage_listings,
        Action.fulfil_orders,
    }),
    Role.admin: frozenset({
        Action.view_own_orders,
    }),
}


def can(role: Role, action: Action) -> bool:
    return action in _GRANTS.get(role, frozenset())
