# farmconnect/services/product_service.py
from typing import Dict, Any, List

from sqlalchemy.orm import Session

from farmconnect.data.models.product import ProductModel
from farmconnect.domain.enums import ProductStatus
from farmconnect.domain.errors import NotFoundError
from farmconnect.domain.schemas import ProductIn, ProductUpdate
from farmconnect.repos.product_repo import ProductRepo
from farmconnect.utils.logging import get_logger

logger = get_logger(__name__)


def _product_dict(product: ProductModel, farmer_name: str | None = None) -> Dict[str, Any]:
    return {
        "id": product.id,
        "farmer_id": product.farmer_id,
        "title": product.title,
        "description": product.description,
        "category": product.category,
        "unit": product.unit,
        "is_organic": product.is_organic,
        "price_per_kg": product.price_per_kg,
        "available_quantity": product.available_quantity,
        "status": product.status,
        "farmer_name": farmer_name,
        "created_at": product.created_at,
        "updated_at": product.updated_at,
    }


class ProductService:
    """Farmer listings and the public catalogue."""

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def search(self, **filters) -> Dict[str, Any]:
        rows, total = self.repo.search_available(**filters)
        return {
            "items": [_product_dict(p, farmer.display_name) for p, farmer in rows],
            "total": total,
        }

    def categories(self) -> List[Dict[str, Any]]:
        return [{"id": name, "count": count} for name, count in self.repo.categories()]

    def get_product(self, product_id: int) -> Dict[str, Any]:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return _product_dict(product, product.farmer.display_name)

    def list_for_farmer(self, farmer_id: int) -> List[Dict[str, Any]]:
        return [_product_dict(p) for p in self.repo.list_for_farmer(farmer_id)]

    def create_product(self, farmer_id: int, payload: ProductIn) -> Dict[str, Any]:
        product = ProductModel(farmer_id=farmer_id, **payload.model_dump())
        product.status = (
            ProductStatus.available if product.available_quantity > 0 else ProductStatus.sold_out
        )
        created = self.repo.save(product)
        logger.info(f"Farmer {farmer_id} listed product {created.id} ({created.title})")
        return _product_dict(created)

    def update_product(self, farmer_id: int, product_id: int, payload: ProductUpdate) -> Dict[str, Any]:
        product = self.repo.get_owned_product(product_id, farmer_id)
        if not product:
            raise NotFoundError("Product not found or not authorized")

        changes = {
            field: value
            for field, value in payload.model_dump(exclude_unset=True).items()
            if value is not None or field == "description"
        }
        for field, value in changes.items():
            setattr(product, field, value)

        # an empty listing cannot stay on sale, a restocked sold-out one goes back on sale
        if product.available_quantity == 0 and product.status == ProductStatus.available:
            product.status = ProductStatus.sold_out
        elif (
            product.available_quantity > 0
            and product.status == ProductStatus.sold_out
            and "status" not in changes
        ):
            product.status = ProductStatus.available

        saved = self.repo.save(product)
        logger.info(f"Product {product_id} updated by farmer {farmer_id}: {sorted(changes)}")
        return _product_dict(saved)

    def delete_product(self, farmer_id: int, product_id: int) -> None:
        product = self.repo.get_owned_product(product_id, farmer_id)
        if not product:
            raise NotFoundError("Product not found or not authorized")

        # soft delete, order_items keep pointing at the row
        product.status = ProductStatus.inactive
        self.repo.save(product)
        logger.info(f"Product {product_id} withdrawn by farmer {farmer_id}")
