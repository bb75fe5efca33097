# farmconnect/data/models/product.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, Text, Boolean, DateTime, Numeric, Enum
from sqlalchemy.orm import relationship

from farmconnect.data.database import Base
from farmconnect.domain.enums import ProductStatus


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    farmer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(64), nullable=False, index=True)
    unit = Column(String(16), nullable=False, default="kg")
    is_organic = Column(Boolean, nullable=False, default=False)

    price_per_kg = Column(Numeric(10, 2), nullable=False)
    # no CHECK constraint, the checkout decrement is conditional instead
    available_quantity = Column(Integer, nullable=False, default=0)

    status = Column(
        Enum(ProductStatus, native_enum=False, length=16, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ProductStatus.available,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    farmer = relationship("UserModel")
