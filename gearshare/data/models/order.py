import enum

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from gearshare.data.database import Base
from gearshare.data.models._common import new_id, utcnow


class OrderStatus(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    renting = "renting"
    returned = "returned"
    cancelled = "cancelled"


TERMINAL_STATUSES = frozenset({OrderStatus.returned.value, OrderStatus.cancelled.value})


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=new_id)
    # SET NULL: deleting a user keeps the order history
    user_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    order_number = Column(String(40), nullable=False, unique=True)

    customer_name = Column(String(255), nullable=False, default="")
    customer_phone = Column(String(32), nullable=False, default="")
    delivery_address = Column(Text, nullable=False, default="")
    note = Column(Text, nullable=False, default="")
    payment_method = Column(String(50), nullable=False, default="")

    total_amount = Column(Numeric(20, 6), nullable=False)
    status = Column(String(20), nullable=False, default=OrderStatus.pending.value)

    delivery_date = Column(DateTime(timezone=True), nullable=True)
    calculated_return_date = Column(DateTime(timezone=True), nullable=True)

    cancelled_by = Column(String(10), nullable=True)  # user, admin
    cancellation_reason = Column(Text, nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("UserModel")
    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
    )


class OrderItemModel(Base):
    """Frozen copy of a priced cart line taken at checkout."""

    __tablename__ = "order_items"

    id = Column(String(36), primary_key=True, default=new_id)
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    product_id = Column(String(36), nullable=True)
    product_name = Column(String(255), nullable=False, default="")
    product_image = Column(String(1024), nullable=False, default="")
    base_price = Column(Numeric(16, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    option_name = Column(String(100), nullable=True)
    option_extra_price = Column(Numeric(16, 2), nullable=True)
    return_date = Column(Date, nullable=True)

    # scale 6 covers price scale 2 plus rate scale 3, stored unrounded
    daily_rental_rate = Column(Numeric(20, 6), nullable=False, default=0)
    rental_days = Column(Integer, nullable=False, default=0)
    rental_extra = Column(Numeric(20, 6), nullable=False, default=0)
    per_unit_total = Column(Numeric(20, 6), nullable=False)
    line_total = Column(Numeric(20, 6), nullable=False)

    # set when the order is confirmed
    calculated_return_date = Column(DateTime(timezone=True), nullable=True)

    order = relationship("OrderModel", back_populates="items")
