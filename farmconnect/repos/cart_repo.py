# farmconnect/repos/cart_repo.py
from typing import List, Tuple

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from farmconnect.data.models.cart_item import CartItemModel
from farmconnect.data.models.product import ProductModel
from farmconnect.data.models.user import UserModel
from farmconnect.domain.enums import ProductStatus


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_available_product(self, product_id: int) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel).where(
                ProductModel.id == product_id,
                ProductModel.status == ProductStatus.available,
            )
        ).scalar_one_or_none()

    def get_item_by_product(self, user_id: int, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def get_item_with_product(
        self, user_id: int, item_id: int
    ) -> Tuple[CartItemModel, ProductModel] | None:
        row = self.db.execute(
            select(CartItemModel, ProductModel)
            .join(ProductModel, CartItemModel.product_id == ProductModel.id)
            .where(CartItemModel.id == item_id, CartItemModel.user_id == user_id)
        ).first()
        return tuple(row) if row else None

    def list_available_items(
        self, user_id: int, newest_first: bool = True
    ) -> List[Tuple[CartItemModel, ProductModel, UserModel]]:
        """Cart lines whose product is still on sale, with product and farmer."""
        stmt = (
            select(CartItemModel, ProductModel, UserModel)
            .join(ProductModel, CartItemModel.product_id == ProductModel.id)
            .join(UserModel, ProductModel.farmer_id == UserModel.id)
            .where(
                CartItemModel.user_id == user_id,
                ProductModel.status == ProductStatus.available,
            )
        )
        if newest_first:
            stmt = stmt.order_by(CartItemModel.added_at.desc(), CartItemModel.id.desc())
        else:
            stmt = stmt.order_by(CartItemModel.id)
        return [tuple(r) for r in self.db.execute(stmt).all()]

    def add_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        return item

    def delete_item(self, user_id: int, item_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.id == item_id,
                CartItemModel.user_id == user_id,
            )
        )
        return result.rowcount

    def clear(self, user_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.user_id == user_id)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
