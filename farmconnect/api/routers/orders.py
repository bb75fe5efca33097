# farmconnect/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from farmconnect.api.deps import get_notification_service, rate_limit, require
from farmconnect.data.database import get_db
from farmconnect.data.models.user import UserModel
from farmconnect.domain.permissions import Action
from farmconnect.domain.schemas import (
    CartAddIn,
    CartOut,
    CartUpdateIn,
    CheckoutIn,
    CheckoutOut,
    MessageOut,
    OrderOut,
    OrderStatusIn,
)
from farmconnect.services.cart_service import CartService
from farmconnect.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"], dependencies=[Depends(rate_limit)])

cart_user = require(Action.use_cart)
buyer = require(Action.view_own_orders)
farmer = require(Action.fulfil_orders)


def get_service(db: Session = Depends(get_db), notifications=Depends(get_notification_service)):
    return OrderService(db, notification_service=notifications)


# cart
@router.get("/cart", response_model=CartOut)
def get_cart(user: UserModel = Depends(cart_user), db: Session = Depends(get_db)):
    return CartService(db).get_cart(user.id)


@router.post("/cart/add", response_model=MessageOut)
def add_to_cart(
    payload: CartAddIn,
    response: Response,
    user: UserModel = Depends(cart_user),
    db: Session = Depends(get_db),
):
    created = CartService(db).add_to_cart(user.id, payload.product_id, payload.quantity)
    if created:
        response.status_code = 201
        return {"message": "Item added to cart"}
    return {"message": "Cart updated successfully"}


@router.put("/cart/update/{item_id}", response_model=MessageOut)
def update_cart_item(
    item_id: int,
    payload: CartUpdateIn,
    user: UserModel = Depends(cart_user),
    db: Session = Depends(get_db),
):
    message = CartService(db).update_cart_item(user.id, item_id, payload.quantity)
    return {"message": message}


@router.delete("/cart/remove/{item_id}", response_model=MessageOut)
def remove_from_cart(item_id: int, user: UserModel = Depends(cart_user), db: Session = Depends(get_db)):
    CartService(db).remove_from_cart(user.id, item_id)
    return {"message": "Item removed from cart"}


@router.delete("/cart/clear", response_model=MessageOut)
def clear_cart(user: UserModel = Depends(cart_user), db: Session = Depends(get_db)):
    CartService(db).clear_cart(user.id)
    return {"message": "Cart cleared successfully"}


# checkout and buyer orders
@router.post("/checkout", response_model=CheckoutOut, status_code=201)
def checkout(
    payload: CheckoutIn,
    user: UserModel = Depends(require(Action.checkout)),
    svc: OrderService = Depends(get_service),
):
    orders = svc.create_order(
        buyer_id=user.id,
        shipping_address=payload.shipping_address,
        phone_number=payload.phone_number,
        payment_method=payload.payment_method,
        special_instructions=payload.special_instructions,
    )
    return {"message": "Order created successfully", "orders": orders}


@router.get("/my-orders", response_model=List[OrderOut])
def my_orders(user: UserModel = Depends(buyer), svc: OrderService = Depends(get_service)):
    return svc.list_buyer_orders(user.id)


# farmer side, registered before /{order_id}
@router.get("/farmer/orders", response_model=List[OrderOut])
def farmer_orders(user: UserModel = Depends(farmer), svc: OrderService = Depends(get_service)):
    return svc.list_farmer_orders(user.id)


@router.put("/farmer/{order_id}/status", response_model=MessageOut)
def update_farmer_order_status(
    order_id: int,
    payload: OrderStatusIn,
    user: UserModel = Depends(farmer),
    svc: OrderService = Depends(get_service),
):
    svc.update_farmer_order_status(order_id, user.id, payload.status)
    return {"message": "Order status updated successfully"}


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: int, user: UserModel = Depends(buyer), svc: OrderService = Depends(get_service)):
    return svc.get_order(order_id, user.id)


@router.put("/{order_id}/status", response_model=MessageOut)
def update_order_status(
    order_id: int,
    payload: OrderStatusIn,
    user: UserModel = Depends(require(Action.cancel_own_order)),
    svc: OrderService = Depends(get_service),
):
    svc.update_buyer_order_status(order_id, user.id, payload.status)
    return {"message": "Order status updated successfully"}
