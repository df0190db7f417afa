from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from gearshare.data.database import Base
from gearshare.data.models._common import new_id, utcnow


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(16, 2), nullable=False, default=0)
    image = Column(String(1024), nullable=False, default="")
    category = Column(String(100), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    likes = relationship(
        "ProductLikeModel",
        back_populates="product",
        cascade="all, delete-orphan",
    )


class ProductLikeModel(Base):
    __tablename__ = "product_likes"

    id = Column(String(36), primary_key=True, default=new_id)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    product = relationship("ProductModel", back_populates="likes")

    __table_args__ = (UniqueConstraint("product_id", "user_id", name="u_product_like"),)
