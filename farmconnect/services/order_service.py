# farmconnect/services/order_service.py
from decimal import Decimal
from typing import Dict, Any, List

from sqlalchemy.orm import Session

from farmconnect.data.models.order import OrderModel
from farmconnect.data.models.order_item import OrderItemModel
from farmconnect.domain.enums import OrderStatus, PaymentMethod
from farmconnect.domain.errors import EmptyCartError, InsufficientStockError, NotFoundError
from farmconnect.domain.order_status import BUYER_TRANSITIONS, FARMER_TRANSITIONS, ensure_transition
from farmconnect.repos.cart_repo import CartRepo
from farmconnect.repos.order_repo import OrderRepo
from farmconnect.services.notification_service import NotificationService
from farmconnect.utils.logging import get_logger

logger = get_logger(__name__)


def _order_dict(order: OrderModel, **extra) -> Dict[str, Any]:
    data = {
        "id": order.id,
        "buyer_id": order.buyer_id,
        "farmer_id": order.farmer_id,
        "total_amount": order.total_amount,
        "status": order.status,
        "shipping_address": order.shipping_address,
        "phone_number": order.phone_number,
        "payment_method": order.payment_method,
        "special_instructions": order.special_instructions,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
    }
    data.update(extra)
    return data


class OrderService:
    """
    Checkout, order queries and status changes.
    Checkout is the only multi-statement transaction in the service.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.notification_service = notification_service or NotificationService()

    def create_order(
        self,
        buyer_id: int,
        shipping_address: str,
        phone_number: str,
        payment_method: PaymentMethod = PaymentMethod.cash_on_delivery,
        special_instructions: str = "",
    ) -> List[Dict[str, Any]]:
        """
        Use case: checkout.

        1. Reads the cart (available products only)
        2. Groups the lines by farmer
        3. Creates one order per farmer with price snapshots and decrements
           stock with a conditional update
        4. Clears the whole cart
        5. Commits, or rolls everything back on any failure
        """
        rows = self.cart_repo.list_available_items(buyer_id, newest_first=False)
        if not rows:
            raise EmptyCartError()

        by_farmer: Dict[int, list] = {}
        for item, product, _farmer in rows:
            by_farmer.setdefault(product.farmer_id, []).append((item, product))

        logger.info(
            f"Checkout for buyer {buyer_id}: {len(rows)} lines, {len(by_farmer)} farmers"
        )

        created: List[OrderModel] = []
        try:
            for farmer_id, lines in by_farmer.items():
                total = sum(
                    (product.price_per_kg * item.quantity for item, product in lines),
                    Decimal("0.00"),
                )

                order = self.repo.add_order(
                    OrderModel(
                        buyer_id=buyer_id,
                        farmer_id=farmer_id,
                        total_amount=total,
                        status=OrderStatus.pending,
                        shipping_address=shipping_address,
                        phone_number=phone_number,
                        payment_method=payment_method,
                        special_instructions=special_instructions or "",
                    )
                )

                for item, product in lines:
                    self.repo.add_order_item(
                        OrderItemModel(
                            order_id=order.id,
                            product_id=product.id,
                            quantity=item.quantity,
                            price_per_kg=product.price_per_kg,
                            total_price=product.price_per_kg * item.quantity,
                        )
                    )

                    # UPDATE ... WHERE available_quantity >= qty, 0 rows -> oversold
                    if self.repo.decrement_stock(product.id, item.quantity) == 0:
                        raise InsufficientStockError(
                            f"Not enough {product.title} in stock to complete the order"
                        )
                    self.repo.mark_sold_out_if_empty(product.id)

                logger.info(f"Order {order.id} for farmer {farmer_id}, total {total}")
                created.append(order)

            self.cart_repo.clear(buyer_id)
            self.repo.commit()

        except Exception as e:
            logger.warning(f"Checkout for buyer {buyer_id} rolled back: {e}")
            self.repo.rollback()
            raise

        result = [
            _order_dict(
                order,
                farmer_name=order.farmer.display_name,
                farmer_email=order.farmer.email,
            )
            for order in created
        ]

        for order in created:
            self._notify(
                self.notification_service.send_order_created,
                order.farmer_id,
                order.id,
            )

        return result

    def list_buyer_orders(self, buyer_id: int) -> List[Dict[str, Any]]:
        return [
            _order_dict(
                order,
                farmer_name=farmer.display_name,
                farmer_email=farmer.email,
                item_count=count,
            )
            for order, farmer, count in self.repo.list_with_counterpart(buyer_id, as_farmer=False)
        ]

    def list_farmer_orders(self, farmer_id: int) -> List[Dict[str, Any]]:
        return [
            _order_dict(
                order,
                buyer_name=buyer.display_name,
                buyer_email=buyer.email,
                item_count=count,
            )
            for order, buyer, count in self.repo.list_with_counterpart(farmer_id, as_farmer=True)
        ]

    def get_order(self, order_id: int, user_id: int) -> Dict[str, Any]:
        """Visible to the buyer and the farmer of the order only."""
        order = self.repo.get_order_for_participant(order_id, user_id)
        if not order:
            raise NotFoundError("Order not found")

        items = [
            {
                "id": item.id,
                "order_id": item.order_id,
                "product_id": item.product_id,
                "quantity": item.quantity,
                "price_per_kg": item.price_per_kg,
                "total_price": item.total_price,
                "title": product.title,
                "description": product.description,
                "unit": product.unit,
                "category": product.category,
            }
            for item, product in self.repo.get_items_with_products(order.id)
        ]

        return _order_dict(
            order,
            farmer_name=order.farmer.display_name,
            farmer_email=order.farmer.email,
            buyer_name=order.buyer.display_name,
            buyer_email=order.buyer.email,
            item_count=len(items),
            items=items,
        )

    def update_buyer_order_status(self, order_id: int, buyer_id: int, status: OrderStatus) -> None:
        order = self.repo.get_order_for_buyer(order_id, buyer_id)
        if not order:
            raise NotFoundError("Order not found")

        ensure_transition(order.status, status, BUYER_TRANSITIONS)
        self._set_status(order, status)

    def update_farmer_order_status(self, order_id: int, farmer_id: int, status: OrderStatus) -> None:
        order = self.repo.get_order_for_farmer(order_id, farmer_id)
        if not order:
            raise NotFoundError("Order not found")

        ensure_transition(order.status, status, FARMER_TRANSITIONS)
        self._set_status(order, status)

    def _set_status(self, order: OrderModel, status: OrderStatus) -> None:
        previous = order.status
        order.status = status
        self.repo.commit()
        logger.info(f"Order {order.id}: {previous.value} -> {status.value}")

        self._notify(
            self.notification_service.send_order_status_changed,
            order.buyer_id,
            order.id,
            status.value,
        )

    def _notify(self, send, *args) -> None:
        # order is already committed, a broker outage must not fail the request
        try:
            send(*args)
        except Exception as e:
            logger.warning(f"Could not queue notification {send.__name__}{args}: {e}")
