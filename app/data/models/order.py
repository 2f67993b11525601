from enum import Enum
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric
from sqlalchemy.orm import relationship

from app.data.database import Base


class OrderStatus(str, Enum):
    #tylko do przodu, bez powrotu do PAYMENT_INITIATED
    PAYMENT_INITIATED = "paymentInitiated"
    PAYMENT_SUCCEEDED = "paymentSucceeded"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    #null = zamowienie goscia
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    stripe_payment_intent_id = Column(String(255), nullable=False, unique=True)

    status = Column(String(32), nullable=False, default=OrderStatus.PAYMENT_INITIATED.value)
    total_price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    user = relationship("UserModel", back_populates="orders")
    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
    )
    shipping_address = relationship(
        "ShippingAddressModel",
        back_populates="order",
        uselist=False,
        cascade="all, delete-orphan",
    )
