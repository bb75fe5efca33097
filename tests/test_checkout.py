# tests/test_checkout.py
import pytest

from farmconnect.data.database import SessionLocal
from farmconnect.data.models import OrderItemModel, OrderModel
from farmconnect.domain.enums import ProductStatus
from farmconnect.domain.errors import EmptyCartError
from farmconnect.repos.order_repo import OrderRepo
from farmconnect.services.cart_service import CartService
from farmconnect.services.order_service import OrderService
from tests.helpers import FakeNotifications, auth, cart_rows, count_rows, set_status, set_stock, status_of, stock_of

CHECKOUT = {
    "shippingAddress": "Bole, Addis Ababa",
    "phoneNumber": "+251911000000",
    "paymentMethod": "telebirr",
    "specialInstructions": "Call on arrival",
}


def fill_cart(client, market, qty_a=5, qty_b=2):
    client.post("/orders/cart/add", json={"productId": market["a"], "quantity": qty_a}, headers=auth("buyer"))
    client.post("/orders/cart/add", json={"productId": market["b"], "quantity": qty_b}, headers=auth("buyer"))


def test_checkout_splits_cart_by_farmer(client, market, notifications):
    fill_cart(client, market)

    resp = client.post("/orders/checkout", json=CHECKOUT, headers=auth("buyer"))

    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Order created successfully"

    orders = {o["farmerId"]: o for o in body["orders"]}
    assert set(orders) == {market["farmer1"], market["farmer2"]}

    first, second = orders[market["farmer1"]], orders[market["farmer2"]]
    assert first["totalAmount"] == 50.0
    assert first["farmerName"] == "Abebe"
    assert first["farmerEmail"] == "farmer-one@example.com"
    assert second["totalAmount"] == 40.0
    for order in body["orders"]:
        assert order["status"] == "pending"
        assert order["buyerId"] == market["buyer"]
        assert order["paymentMethod"] == "telebirr"
        assert order["shippingAddress"] == "Bole, Addis Ababa"

    assert stock_of(market["a"]) == 15
    assert stock_of(market["b"]) == 6
    assert cart_rows(market["buyer"]) == 0
    assert sorted(notifications.created) == sorted(
        (o["farmerId"], o["id"]) for o in body["orders"]
    )


def test_order_total_matches_its_items(client, market):
    fill_cart(client, market, qty_a=3, qty_b=4)
    client.post("/orders/checkout", json=CHECKOUT, headers=auth("buyer"))

    with SessionLocal() as db:
        for order in db.query(OrderModel).all():
            items_total = sum(i.total_price for i in order.items)
            assert items_total == order.total_amount
            for item in order.items:
                assert item.total_price == item.price_per_kg * item.quantity


def test_stock_decrements_across_orders(client, market):
    for _ in range(3):
        client.post("/orders/cart/add", json={"productId": market["a"], "quantity": 4}, headers=auth("buyer"))
        resp = client.post("/orders/checkout", json=CHECKOUT, headers=auth("buyer"))
        assert resp.status_code == 201

    assert stock_of(market["a"]) == 20 - 12
    assert count_rows(OrderModel) == 3


def test_product_sold_out_when_stock_reaches_zero(client, market):
    client.post("/orders/cart/add", json={"productId": market["b"], "quantity": 8}, headers=auth("buyer"))
    client.post("/orders/checkout", json=CHECKOUT, headers=auth("buyer"))

    assert stock_of(market["b"]) == 0
    assert status_of(market["b"]) == ProductStatus.sold_out


def test_checkout_with_empty_cart(client, market):
    resp = client.post("/orders/checkout", json=CHECKOUT, headers=auth("buyer"))

    assert resp.status_code == 400
    assert resp.json() == {"error": "Cart is empty"}
    assert count_rows(OrderModel) == 0


def test_checkout_with_only_unavailable_items_is_empty(client, market):
    client.post("/orders/cart/add", json={"productId": market["a"], "quantity": 1}, headers=auth("buyer"))
    set_status(market["a"], ProductStatus.inactive)

    resp = client.post("/orders/checkout", json=CHECKOUT, headers=auth("buyer"))
    assert resp.status_code == 400


def test_checkout_drops_unavailable_lines_from_cart(client, market):
    fill_cart(client, market)
    set_status(market["b"], ProductStatus.inactive)

    resp = client.post("/orders/checkout", json=CHECKOUT, headers=auth("buyer"))

    assert resp.status_code == 201
    assert len(resp.json()["orders"]) == 1
    assert stock_of(market["b"]) == 8
    assert cart_rows(market["buyer"]) == 0


def test_oversold_stock_rolls_back_every_order(client, market):
    fill_cart(client, market, qty_a=5, qty_b=2)
    # another buyer took most of the coffee after it went into this cart
    set_stock(market["b"], 1)

    resp = client.post("/orders/checkout", json=CHECKOUT, headers=auth("buyer"))

    assert resp.status_code == 400
    assert "Coffee" in resp.json()["error"]
    assert count_rows(OrderModel) == 0
    assert count_rows(OrderItemModel) == 0
    assert stock_of(market["a"]) == 20
    assert stock_of(market["b"]) == 1
    assert cart_rows(market["buyer"]) == 2


def test_failure_in_second_group_rolls_back_first(client, market, monkeypatch):
    fill_cart(client, market)

    calls = {"n": 0}
    original = OrderRepo.decrement_stock

    def flaky_decrement(self, product_id, quantity):
        calls["n"] += 1
        if calls["n"] == 2:
            raise RuntimeError("simulated constraint violation")
        return original(self, product_id, quantity)

    monkeypatch.setattr(OrderRepo, "decrement_stock", flaky_decrement)

    with SessionLocal() as db:
        svc = OrderService(db, notification_service=FakeNotifications())
        with pytest.raises(RuntimeError):
            svc.create_order(market["buyer"], "Bole", "+251911000000")

    assert calls["n"] == 2
    assert count_rows(OrderModel) == 0
    assert count_rows(OrderItemModel) == 0
    assert stock_of(market["a"]) == 20
    assert stock_of(market["b"]) == 8
    assert cart_rows(market["buyer"]) == 2


def test_service_raises_empty_cart(market):
    with SessionLocal() as db:
        with pytest.raises(EmptyCartError):
            OrderService(db, notification_service=FakeNotifications()).create_order(
                market["buyer"], "Bole", "+251911000000"
            )


def test_notification_failure_does_not_undo_checkout(market):
    class BrokenNotifications(FakeNotifications):
        def send_order_created(self, farmer_id, order_id):
            raise ConnectionError("broker down")

    with SessionLocal() as db:
        CartService(db).add_to_cart(market["buyer"], market["a"], 2)
        orders = OrderService(db, notification_service=BrokenNotifications()).create_order(
            market["buyer"], "Bole", "+251911000000"
        )

    assert len(orders) == 1
    assert count_rows(OrderModel) == 1
    assert stock_of(market["a"]) == 18


def test_checkout_requires_shipping_details(client, market):
    fill_cart(client, market)
    resp = client.post("/orders/checkout", json={"phoneNumber": "+251911000000"}, headers=auth("buyer"))

    assert resp.status_code == 422
    assert cart_rows(market["buyer"]) == 2
