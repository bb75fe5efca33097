# farmconnect/data/models/order.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, Text, DateTime, Numeric, Enum
from sqlalchemy.orm import relationship

from farmconnect.data.database import Base
from farmconnect.domain.enums import OrderStatus, PaymentMethod


def _values(enum_cls):
    return [m.value for m in enum_cls]


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    buyer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    farmer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    total_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(
        Enum(OrderStatus, native_enum=False, length=16, values_callable=_values),
        nullable=False,
        default=OrderStatus.pending,
    )

    shipping_address = Column(String(500), nullable=False)
    phone_number = Column(String(32), nullable=False)
    payment_method = Column(
        Enum(PaymentMethod, native_enum=False, length=32, values_callable=_values),
        nullable=False,
        default=PaymentMethod.cash_on_delivery,
    )
    special_instructions = Column(Text, nullable=False, default="")

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    buyer = relationship("UserModel", foreign_keys=[buyer_id])
    farmer = relationship("UserModel", foreign_keys=[farmer_id])
    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
    )
