# import every model so SQLAlchemy registers them in Base.metadata

from farmconnect.data.models.user import UserModel
from farmconnect.data.models.product import ProductModel
from farmconnect.data.models.cart_item import CartItemModel
from farmconnect.data.models.order import OrderModel
from farmconnect.data.models.order_item import OrderItemModel

__all__ = ["UserModel", "ProductModel", "CartItemModel", "OrderModel", "OrderItemModel"]
