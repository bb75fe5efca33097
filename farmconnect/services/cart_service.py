# farmconnect/services/cart_service.py
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.orm import Session

from farmconnect.data.models.cart_item import CartItemModel
from farmconnect.domain.errors import NotFoundError, InsufficientStockError, ValidationError
from farmconnect.repos.cart_repo import CartRepo
from farmconnect.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Per-user cart backed by the cart_items table.
    Commands (add, update, remove, clear) are single statements each,
    get_cart is read only.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)

    # query
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        rows = self.repo.list_available_items(user_id)

        total_items = 0
        total_amount = Decimal("0.00")
        items = []
        for item, product, farmer in rows:
            total_items += item.quantity
            total_amount += product.price_per_kg * item.quantity
            items.append({
                "cart_item_id": item.id,
                "quantity": item.quantity,
                "added_at": item.added_at,
                "product_id": product.id,
                "title": product.title,
                "description": product.description,
                "price_per_kg": product.price_per_kg,
                "unit": product.unit,
                "available_quantity": product.available_quantity,
                "category": product.category,
                "is_organic": product.is_organic,
                "farmer_name": farmer.display_name,
                "farmer_email": farmer.email,
            })

        return {
            "items": items,
            "summary": {
                "total_items": total_items,
                "total_amount": float(total_amount.quantize(Decimal("0.01"))),
            },
        }

    # commands
    def add_to_cart(self, user_id: int, product_id: int, quantity: int) -> bool:
        """Returns True when a new line was created, False when an existing one grew."""
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")

        product = self.repo.get_available_product(product_id)
        if not product:
            raise NotFoundError("Product not found or not available")

        if quantity > product.available_quantity:
            raise InsufficientStockError("Requested quantity exceeds available stock")

        existing = self.repo.get_item_by_product(user_id, product_id)
        if existing:
            new_quantity = existing.quantity + quantity
            if new_quantity > product.available_quantity:
                raise InsufficientStockError("Total quantity exceeds available stock")

            logger.info(
                f"Product {product_id} already in cart of user {user_id}, "
                f"quantity {existing.quantity} -> {new_quantity}"
            )
            existing.quantity = new_quantity
            self.repo.commit()
            return False

        logger.info(f"Adding product {product_id} x{quantity} to cart of user {user_id}")
        self.repo.add_item(
            CartItemModel(user_id=user_id, product_id=product_id, quantity=quantity)
        )
        self.repo.commit()
        return True

    def update_cart_item(self, user_id: int, item_id: int, quantity: int) -> str:
        found = self.repo.get_item_with_product(user_id, item_id)
        if not found:
            raise NotFoundError("Cart item not found")

        item, product = found
        # the line may point at a sold_out or inactive product; it stays editable
        # and get_cart keeps hiding it until the product is available again
        if quantity > product.available_quantity:
            raise InsufficientStockError(
                f"Only {product.available_quantity} {product.title} available"
            )

        if quantity <= 0:
            logger.info(f"Quantity {quantity} for cart item {item_id}, removing it")
            self.repo.delete_item(user_id, item_id)
            self.repo.commit()
            return "Item removed from cart"

        item.quantity = quantity
        self.repo.commit()
        logger.info(f"Cart item {item_id} of user {user_id} set to {quantity}")
        return "Cart updated successfully"

    def remove_from_cart(self, user_id: int, item_id: int) -> None:
        deleted = self.repo.delete_item(user_id, item_id)
        if deleted == 0:
            self.repo.rollback()
            raise NotFoundError("Cart item not found")

        self.repo.commit()
        logger.info(f"Cart item {item_id} removed for user {user_id}")

    def clear_cart(self, user_id: int) -> int:
        deleted = self.repo.clear(user_id)
        self.repo.commit()
        logger.info(f"Cart of user {user_id} cleared ({deleted} lines)")
        return deleted
