# tests/helpers.py
from decimal import Decimal

from farmconnect.data.database import SessionLocal
from farmconnect.data.models import CartItemModel, ProductModel, UserModel
from farmconnect.domain.enums import ProductStatus, Role
from farmconnect.domain.errors import AuthenticationError
from farmconnect.domain.schemas import Identity


class FakeVerifier:
    """Any token is its own uid, except 'bad-token'."""

    def verify_token(self, token: str) -> Identity:
        if token == "bad-token":
            raise AuthenticationError("Invalid token")
        return Identity(uid=token, email=f"{token}@example.com")


class FakeNotifications:
    def __init__(self):
        self.created = []
        self.status_changes = []

    def send_order_created(self, farmer_id, order_id):
        self.created.append((farmer_id, order_id))

    def send_order_status_changed(self, buyer_id, order_id, status):
        self.status_changes.append((buyer_id, order_id, status))


def auth(uid: str) -> dict:
    return {"Authorization": f"Bearer {uid}"}


def make_user(uid: str, role: Role = Role.buyer, name: str | None = None) -> int:
    with SessionLocal() as db:
        user = UserModel(
            firebase_uid=uid,
            email=f"{uid}@example.com",
            display_name=name or uid.title(),
            role=role,
        )
        db.add(user)
        db.commit()
        return user.id


def make_product(
    farmer_id: int,
    price: str = "10.00",
    quantity: int = 10,
    title: str = "Teff",
    category: str = "grains",
    status: ProductStatus = ProductStatus.available,
) -> int:
    with SessionLocal() as db:
        product = ProductModel(
            farmer_id=farmer_id,
            title=title,
            category=category,
            price_per_kg=Decimal(price),
            available_quantity=quantity,
            status=status,
        )
        db.add(product)
        db.commit()
        return product.id


def stock_of(product_id: int) -> int:
    with SessionLocal() as db:
        return db.get(ProductModel, product_id).available_quantity


def status_of(product_id: int) -> ProductStatus:
    with SessionLocal() as db:
        return db.get(ProductModel, product_id).status


def set_stock(product_id: int, quantity: int) -> None:
    with SessionLocal() as db:
        db.get(ProductModel, product_id).available_quantity = quantity
        db.commit()


def set_status(product_id: int, status: ProductStatus) -> None:
    with SessionLocal() as db:
        db.get(ProductModel, product_id).status = status
        db.commit()


def count_rows(model) -> int:
    with SessionLocal() as db:
        return db.query(model).count()


def cart_rows(user_id: int) -> int:
    with SessionLocal() as db:
        return db.query(CartItemModel).filter(CartItemModel.user_id == user_id).count()
