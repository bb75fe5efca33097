# farmconnect/repos/product_repo.py
from decimal import Decimal
from typing import List, Tuple

from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from farmconnect.data.models.product import ProductModel
from farmconnect.data.models.user import UserModel
from farmconnect.domain.enums import ProductStatus


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_owned_product(self, product_id: int, farmer_id: int) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel).where(
                ProductModel.id == product_id,
                ProductModel.farmer_id == farmer_id,
            )
        ).scalar_one_or_none()

    def search_available(
        self,
        q: str | None = None,
        category: str | None = None,
        organic: bool | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Tuple[ProductModel, UserModel]], int]:
        filters = [ProductModel.status == ProductStatus.available]
        if q:
            pattern = f"%{q}%"
            filters.append(or_(ProductModel.title.ilike(pattern), ProductModel.description.ilike(pattern)))
        if category:
            filters.append(ProductModel.category == category)
        if organic is not None:
            filters.append(ProductModel.is_organic == organic)
        if min_price is not None:
            filters.append(ProductModel.price_per_kg >= min_price)
        if max_price is not None:
            filters.append(ProductModel.price_per_kg <= max_price)

        total = self.db.execute(
            select(func.count(ProductModel.id)).where(*filters)
        ).scalar_one()

        rows = self.db.execute(
            select(ProductModel, UserModel)
            .join(UserModel, ProductModel.farmer_id == UserModel.id)
            .where(*filters)
            .order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
            .limit(limit)
            .offset(offset)
        ).all()
        return [tuple(r) for r in rows], total

    def categories(self) -> List[Tuple[str, int]]:
        rows = self.db.execute(
            select(ProductModel.category, func.count(ProductModel.id))
            .where(ProductModel.status == ProductStatus.available)
            .group_by(ProductModel.category)
            .order_by(ProductModel.category)
        ).all()
        return [(name, count) for name, count in rows]

    def list_for_farmer(self, farmer_id: int) -> List[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel)
                .where(ProductModel.farmer_id == farmer_id)
                .order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
            ).scalars()
        )

    def save(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product
