# gearshare/services/cart_service.py
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Dict, List

from sqlalchemy.orm import Session

from gearshare.data.models.cart_line import CartLineModel
from gearshare.domain.errors import NotFoundError, ValidationError
from gearshare.repos.cart_repo import CartRepo, option_key
from gearshare.repos.product_repo import ProductRepo
from gearshare.services.pricing import LinePrice, price_line, to_decimal
from gearshare.utils.logging import get_logger

logger = get_logger(__name__)

MODE_ADD = "add"
MODE_SET = "set"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PricedLine:
    """A cart line resolved against the catalog and priced at one instant."""

    product_id: str
    product_name: str
    product_image: str
    base_price: Decimal
    quantity: int
    option_name: str | None
    option_extra_price: Decimal | None
    return_date: date | None
    price: LinePrice

    @property
    def selected_option(self) -> Dict[str, Any] | None:
        if self.option_name is None:
            return None
        return {
            "name": self.option_name,
            "extra_price": self.option_extra_price or Decimal("0"),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "product_image": self.product_image,
            "base_price": self.base_price,
            "quantity": self.quantity,
            "selected_option": self.selected_option,
            "return_date": self.return_date,
            "daily_rental_rate": self.price.daily_rental_rate,
            "rental_days": self.price.rental_days,
            "rental_extra": self.price.rental_extra,
            "per_unit_total": self.price.per_unit_total,
            "line_total": self.price.line_total,
        }


class CartService:
    """
    Cart use cases for one user's cart.

    Queries (build_cart, priced_lines) only read. Commands (add_or_update,
    update_quantity, remove, clear) commit and return a freshly built cart.
    Totals are never stored, they are recomputed from the lines on every read.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.clock = clock

    # =====================================================
    # QUERY
    # =====================================================
    def priced_lines(self, user_id: str, now: datetime | None = None) -> List[PricedLine]:
        """Price every line of the user's cart against the live catalog."""
        now = now or self.clock()
        lines = self.repo.get_lines(user_id)
        products = self.products.get_many(line.product_id for line in lines)

        priced = []
        for line in lines:
            # a deleted product degrades to an empty, zero-priced snapshot
            product = products.get(line.product_id)
            base_price = to_decimal(product.price) if product else Decimal("0")
            quantity = line.quantity or 1

            priced.append(
                PricedLine(
                    product_id=line.product_id,
                    product_name=product.name if product else "",
                    product_image=product.image if product else "",
                    base_price=base_price,
                    quantity=quantity,
                    option_name=line.option_name,
                    option_extra_price=line.option_extra_price,
                    return_date=line.return_date,
                    price=price_line(
                        base_price,
                        quantity,
                        line.option_extra_price,
                        line.return_date,
                        now,
                    ),
                )
            )
        return priced

    def build_cart(self, user_id: str) -> Dict[str, Any]:
        priced = self.priced_lines(user_id)
        return summarize(priced)

    # =====================================================
    # COMMANDS
    # =====================================================
    def add_or_update(
        self,
        user_id: str,
        product_id: str | None,
        quantity: int | None = None,
        selected_option: Dict[str, Any] | None = None,
        return_date: date | None = None,
        mode: str = MODE_SET,
    ) -> Dict[str, Any]:
        """
        Upsert a line keyed by (product, option name).

        mode "add" increments the matched line (not idempotent, every retry
        adds again). mode "set" overwrites the quantity only when a positive
        quantity is supplied.
        """
        if not product_id:
            raise ValidationError("productId is required")

        if not self.products.get_product(product_id):
            raise NotFoundError("Product not found")

        qty = int(quantity or 0)
        mode = MODE_ADD if mode == MODE_ADD else MODE_SET
        option_name = (selected_option or {}).get("name") or None
        extra_price = to_decimal((selected_option or {}).get("extra_price"))

        line = self.repo.get_line(user_id, product_id, option_name)

        if line:
            if mode == MODE_ADD:
                line.quantity = (line.quantity or 0) + (qty if qty > 0 else 1)
            elif qty > 0:
                line.quantity = qty

            # the matched line already carries this option name, its extra price is kept
            if return_date:
                line.return_date = return_date

            if line.quantity <= 0:
                logger.info(f"Cart line {product_id}/{option_key(option_name)} of user {user_id} dropped to 0, deleting")
                self.repo.delete_line(line)
            else:
                logger.info(f"Cart line {product_id}/{option_key(option_name)} of user {user_id} set to {line.quantity} ({mode})")
        else:
            self.repo.add_line(
                CartLineModel(
                    user_id=user_id,
                    product_id=product_id,
                    quantity=max(qty, 1),
                    option_name=option_name,
                    option_extra_price=extra_price if option_name else None,
                    option_key=option_key(option_name),
                    return_date=return_date,
                    created_at=self.clock(),
                )
            )
            logger.info(f"Added product {product_id} to cart of user {user_id}")

        self.repo.commit()
        return self.build_cart(user_id)

    def update_quantity(
        self,
        user_id: str,
        product_id: str | None,
        option_name: str | None,
        quantity: int,
    ) -> Dict[str, Any]:
        """Set the quantity of an existing line; 0 removes it."""
        if not product_id:
            raise ValidationError("productId is required")
        if quantity is None or quantity < 0:
            raise ValidationError("Quantity must be 0 or greater")

        line = self.repo.get_line(user_id, product_id, option_name)
        if not line:
            raise NotFoundError("Cart line not found")

        if quantity == 0:
            self.repo.delete_line(line)
            logger.info(f"Removed product {product_id} from cart of user {user_id}")
        else:
            line.quantity = quantity

        self.repo.commit()
        return self.build_cart(user_id)

    def remove(self, user_id: str, product_id: str | None, option_name: str | None = None) -> Dict[str, Any]:
        if not product_id:
            raise ValidationError("productId is required")

        line = self.repo.get_line(user_id, product_id, option_name)
        if not line:
            raise NotFoundError("Cart line not found")

        self.repo.delete_line(line)
        self.repo.commit()

        logger.info(f"Removed product {product_id}/{option_key(option_name)} from cart of user {user_id}")
        return self.build_cart(user_id)

    def clear(self, user_id: str) -> Dict[str, Any]:
        removed = self.repo.delete_lines(user_id)
        self.repo.commit()

        logger.info(f"Cleared cart of user {user_id} ({removed} lines)")
        return self.build_cart(user_id)


def summarize(priced: List[PricedLine]) -> Dict[str, Any]:
    """Cart view; item_count is the sum of quantities, line_count the number of lines."""
    return {
        "items": [p.to_dict() for p in priced],
        "total_amount": sum((p.price.line_total for p in priced), Decimal("0")),
        "item_count": sum(p.quantity for p in priced),
        "line_count": len(priced),
    }
