# farmconnect/repos/order_repo.py
from typing import List, Tuple

from sqlalchemy import select, update, func, or_
from sqlalchemy.orm import Session, aliased

from farmconnect.data.models.order import OrderModel
from farmconnect.data.models.order_item import OrderItemModel
from farmconnect.data.models.product import ProductModel
from farmconnect.data.models.user import UserModel
from farmconnect.domain.enums import ProductStatus


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    # writes used inside the checkout transaction, no commit here
    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def add_order_item(self, item: OrderItemModel) -> OrderItemModel:
        self.db.add(item)
        return item

    def decrement_stock(self, product_id: int, quantity: int) -> int:
        """Conditional decrement, 0 rows means not enough stock left."""
        result = self.db.execute(
            update(ProductModel)
            .where(
                ProductModel.id == product_id,
                ProductModel.available_quantity >= quantity,
            )
            .values(available_quantity=ProductModel.available_quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def mark_sold_out_if_empty(self, product_id: int) -> int:
        result = self.db.execute(
            update(ProductModel)
            .where(
                ProductModel.id == product_id,
                ProductModel.available_quantity == 0,
                ProductModel.status == ProductStatus.available,
            )
            .values(status=ProductStatus.sold_out)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    # reads
    def get_order_for_participant(self, order_id: int, user_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(
                OrderModel.id == order_id,
                or_(OrderModel.buyer_id == user_id, OrderModel.farmer_id == user_id),
            )
        ).scalar_one_or_none()

    def get_order_for_buyer(self, order_id: int, buyer_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(OrderModel.id == order_id, OrderModel.buyer_id == buyer_id)
        ).scalar_one_or_none()

    def get_order_for_farmer(self, order_id: int, farmer_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(OrderModel.id == order_id, OrderModel.farmer_id == farmer_id)
        ).scalar_one_or_none()

    def get_items_with_products(self, order_id: int) -> List[Tuple[OrderItemModel, ProductModel]]:
        rows = self.db.execute(
            select(OrderItemModel, ProductModel)
            .join(ProductModel, OrderItemModel.product_id == ProductModel.id)
            .where(OrderItemModel.order_id == order_id)
            .order_by(OrderItemModel.id)
        ).all()
        return [tuple(r) for r in rows]

    def list_with_counterpart(
        self, user_id: int, as_farmer: bool
    ) -> List[Tuple[OrderModel, UserModel, int]]:
        """
        Orders of a buyer (joined to the farmer) or of a farmer (joined to
        the buyer), newest first, with the number of lines in each.
        """
        counterpart = aliased(UserModel)
        owner_col = OrderModel.farmer_id if as_farmer else OrderModel.buyer_id
        other_col = OrderModel.buyer_id if as_farmer else OrderModel.farmer_id

        item_count = (
            select(func.count(OrderItemModel.id))
            .where(OrderItemModel.order_id == OrderModel.id)
            .correlate(OrderModel)
            .scalar_subquery()
        )

        rows = self.db.execute(
            select(OrderModel, counterpart, item_count)
            .join(counterpart, other_col == counterpart.id)
            .where(owner_col == user_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        ).all()
        return [tuple(r) for r in rows]

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
