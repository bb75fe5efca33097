# farmconnect/domain/enums.py
import enum


class Role(str, enum.Enum):
    farmer = "farmer"
    buyer = "buyer"
    admin = "admin"


class ProductStatus(str, enum.Enum):
    available = "available"
    sold_out = "sold_out"
    inactive = "inactive"


class OrderStatus(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    shipped = "shipped"
    delivered = "delivered"
    cancelled = "cancelled"


class PaymentMethod(str, enum.Enum):
    cash_on_delivery = "cash_on_delivery"
    telebirr = "telebirr"
    cbe_birr = "cbe_birr"
    bank_transfer = "bank_transfer"
