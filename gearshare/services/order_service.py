# gearshare/services/order_service.py
import random
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Callable, Dict, List

from sqlalchemy.orm import Session

from gearshare.data.models.order import OrderItemModel, OrderModel, OrderStatus, TERMINAL_STATUSES
from gearshare.domain.errors import EmptyCartError, InvalidStateError, NotFoundError, ValidationError
from gearshare.domain.policies import Actor, require_admin, require_owner, require_owner_or_admin
from gearshare.repos.cart_repo import CartRepo
from gearshare.repos.order_repo import OrderRepo
from gearshare.services.cart_service import CartService, utcnow
from gearshare.services.pricing import rental_days
from gearshare.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CANCEL_REASON = {
    "user": "Cancelled by customer",
    "admin": "Cancelled by admin",
}


def generate_order_number(now: datetime) -> str:
    # unique enough: epoch millis plus a random suffix
    return f"ORD-{int(now.timestamp() * 1000)}-{random.randint(1000, 9999)}"


class OrderService:
    """
    Order domain, separate from the cart.

    An order is a frozen snapshot of the priced cart taken at checkout. After
    that only status and date fields change, through the transitions:

        pending -> confirmed -> renting -> returned
        pending | confirmed | renting -> cancelled
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.carts = CartService(db, clock=clock)
        self.clock = clock

    # =====================================================
    # COMMANDS
    # =====================================================
    def create_from_cart(self, actor: Actor, customer_info: Dict[str, Any] | None = None) -> Dict[str, Any]:
        """
        Checkout.

        1. Prices every cart line at this instant
        2. Snapshots them into order items
        3. Clears the cart

        Order insert and cart clear are committed together or not at all.
        """
        info = customer_info or {}
        now = self.clock()

        priced = self.carts.priced_lines(actor.user_id, now=now)
        if not priced:
            raise EmptyCartError("Cart is empty")

        total = sum((p.price.line_total for p in priced), Decimal("0"))

        order = OrderModel(
            user_id=actor.user_id,
            order_number=generate_order_number(now),
            customer_name=info.get("customer_name") or "",
            customer_phone=info.get("customer_phone") or "",
            delivery_address=info.get("delivery_address") or "",
            note=info.get("note") or "",
            payment_method=info.get("payment_method") or "",
            total_amount=total,
            status=OrderStatus.pending.value,
            created_at=now,
            items=[
                OrderItemModel(
                    position=position,
                    product_id=p.product_id,
                    product_name=p.product_name,
                    product_image=p.product_image,
                    base_price=p.base_price,
                    quantity=p.quantity,
                    option_name=p.option_name,
                    option_extra_price=p.option_extra_price,
                    return_date=p.return_date,
                    daily_rental_rate=p.price.daily_rental_rate,
                    rental_days=p.price.rental_days,
                    rental_extra=p.price.rental_extra,
                    per_unit_total=p.price.per_unit_total,
                    line_total=p.price.line_total,
                )
                for position, p in enumerate(priced)
            ],
        )

        try:
            self.repo.add_order(order)
            self.cart_repo.delete_lines(actor.user_id)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Order {order.order_number} created for user {actor.user_id}, total {total}")

        return {
            "order": order_to_dict(order),
            "cart": self.carts.build_cart(actor.user_id),
        }

    def confirm(self, order_id: str, delivery_days: int | None, actor: Actor) -> Dict[str, Any]:
        require_admin(actor, "Only admins can confirm orders")

        if not delivery_days or delivery_days <= 0:
            raise ValidationError("deliveryDays must be a positive number of days")

        order = self._get(order_id)
        if order.status != OrderStatus.pending.value:
            raise InvalidStateError("Order already processed")

        now = self.clock()
        delivery_date = now + timedelta(days=int(delivery_days))

        order.status = OrderStatus.confirmed.value
        order.delivery_date = delivery_date

        for item in order.items:
            if item.return_date:
                days = rental_days(item.return_date, now)
                item.calculated_return_date = delivery_date + timedelta(days=days)
                # order level keeps the last rental line, per line dates live on the items
                order.calculated_return_date = item.calculated_return_date

        self.repo.commit()
        logger.info(f"Order {order.order_number} confirmed, delivery on {delivery_date.isoformat()}")

        return {
            "order_number": order.order_number,
            "delivery_date": order.delivery_date,
            "calculated_return_date": order.calculated_return_date,
        }

    def mark_received(self, order_id: str, actor: Actor) -> Dict[str, Any]:
        order = self._get(order_id)
        require_owner(actor, order.user_id, "Not allowed to update this order")
        self._transition(order, OrderStatus.confirmed, OrderStatus.renting)
        return order_to_dict(order)

    def mark_returned(self, order_id: str, actor: Actor) -> Dict[str, Any]:
        order = self._get(order_id)
        require_owner(actor, order.user_id, "Not allowed to update this order")
        self._transition(order, OrderStatus.renting, OrderStatus.returned)
        return order_to_dict(order)

    def cancel(self, order_id: str, actor: Actor, reason: str | None = None) -> Dict[str, Any]:
        order = self._get(order_id)

        if not actor.is_admin:
            require_owner(actor, order.user_id, "Not allowed to cancel this order")

        if order.status in TERMINAL_STATUSES:
            raise InvalidStateError("Order cannot be cancelled (already returned or cancelled)")

        if not actor.is_admin and order.status != OrderStatus.pending.value:
            raise InvalidStateError("Only pending orders may be cancelled by the customer")

        order.status = OrderStatus.cancelled.value
        order.cancelled_by = actor.category
        order.cancellation_reason = reason or DEFAULT_CANCEL_REASON[actor.category]
        order.cancelled_at = self.clock()

        self.repo.commit()
        logger.info(f"Order {order.order_number} cancelled by {order.cancelled_by} {actor.user_id}")

        return order_to_dict(order)

    # =====================================================
    # QUERY
    # =====================================================
    def get_order(self, order_id: str, actor: Actor) -> Dict[str, Any]:
        order = self._get(order_id)
        require_owner_or_admin(actor, order.user_id, "Not allowed to view this order")
        return order_to_dict(order)

    def list_all(self, actor: Actor) -> List[Dict[str, Any]]:
        require_admin(actor, "Only admins can list all orders")
        return [order_to_dict(o, with_customer=True) for o in self.repo.list_all()]

    def list_mine(self, actor: Actor) -> List[Dict[str, Any]]:
        return [order_to_dict(o) for o in self.repo.list_by_user(actor.user_id)]

    # =====================================================
    # helpers
    # =====================================================
    def _get(self, order_id: str) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    def _transition(self, order: OrderModel, expected: OrderStatus, target: OrderStatus) -> None:
        if order.status != expected.value:
            raise InvalidStateError(
                f"Order must be '{expected.value}' to move to '{target.value}'"
            )
        order.status = target.value
        self.repo.commit()
        logger.info(f"Order {order.order_number}: {expected.value} -> {target.value}")


def order_to_dict(order: OrderModel, with_customer: bool = False) -> Dict[str, Any]:
    data = {
        "id": order.id,
        "order_number": order.order_number,
        "user_id": order.user_id,
        "items": [_item_to_dict(i) for i in order.items],
        "customer_name": order.customer_name,
        "customer_phone": order.customer_phone,
        "delivery_address": order.delivery_address,
        "note": order.note,
        "payment_method": order.payment_method,
        "total_amount": order.total_amount,
        "status": order.status,
        "delivery_date": order.delivery_date,
        "calculated_return_date": order.calculated_return_date,
        "cancelled_by": order.cancelled_by,
        "cancellation_reason": order.cancellation_reason,
        "cancelled_at": order.cancelled_at,
        "created_at": order.created_at,
    }
    if with_customer and order.user is not None:
        data["customer"] = {
            "username": order.user.username,
            "email": order.user.email,
            "phone_number": order.user.phone_number,
        }
    return data


def _item_to_dict(item: OrderItemModel) -> Dict[str, Any]:
    option = None
    if item.option_name is not None:
        option = {"name": item.option_name, "extra_price": item.option_extra_price or Decimal("0")}
    return {
        "product_id": item.product_id,
        "product_name": item.product_name,
        "product_image": item.product_image,
        "base_price": item.base_price,
        "quantity": item.quantity,
        "selected_option": option,
        "return_date": item.return_date,
        "daily_rental_rate": item.daily_rental_rate,
        "rental_days": item.rental_days,
        "rental_extra": item.rental_extra,
        "per_unit_total": item.per_unit_total,
        "line_total": item.line_total,
        "calculated_return_date": item.calculated_return_date,
    }
