# import every model so SQLAlchemy registers it in Base.metadata

from gearshare.data.models.user import UserModel
from gearshare.data.models.product import ProductModel, ProductLikeModel
from gearshare.data.models.cart_line import CartLineModel
from gearshare.data.models.order import OrderModel, OrderItemModel, OrderStatus

__all__ = [
    "UserModel",
    "ProductModel",
    "ProductLikeModel",
    "CartLineModel",
    "OrderModel",
    "OrderItemModel",
    "OrderStatus",
]
