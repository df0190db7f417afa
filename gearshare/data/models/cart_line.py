from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint

from gearshare.data.database import Base
from gearshare.data.models._common import new_id, utcnow


class CartLineModel(Base):
    __tablename__ = "cart_lines"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # no FK: a deleted product must not take cart lines with it
    product_id = Column(String(36), nullable=False)

    quantity = Column(Integer, nullable=False, default=1)
    option_name = Column(String(100), nullable=True)
    option_extra_price = Column(Numeric(16, 2), nullable=True)
    # "" when there is no option, part of the identity key
    option_key = Column(String(100), nullable=False, default="")
    return_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "product_id", "option_key", name="u_cart_line_identity"),
    )
