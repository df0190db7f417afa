# gearshare/repos/cart_repo.py
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from gearshare.data.models.cart_line import CartLineModel


def option_key(option_name: str | None) -> str:
    """Identity part of an option; None and "" both mean "no option"."""
    return option_name or ""


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_lines(self, user_id: str) -> list[CartLineModel]:
        return list(
            self.db.execute(
                select(CartLineModel)
                .where(CartLineModel.user_id == user_id)
                .order_by(CartLineModel.created_at, CartLineModel.id)
            ).scalars()
        )

    def get_line(self, user_id: str, product_id: str, option_name: str | None) -> CartLineModel | None:
        return self.db.execute(
            select(CartLineModel).where(
                CartLineModel.user_id == user_id,
                CartLineModel.product_id == product_id,
                CartLineModel.option_key == option_key(option_name),
            )
        ).scalar_one_or_none()

    def add_line(self, line: CartLineModel) -> CartLineModel:
        self.db.add(line)
        self.db.flush()
        return line

    def delete_line(self, line: CartLineModel) -> None:
        self.db.delete(line)
        self.db.flush()

    def delete_lines(self, user_id: str) -> int:
        result = self.db.execute(
            delete(CartLineModel).where(CartLineModel.user_id == user_id)
        )
        return result.rowcount or 0

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
