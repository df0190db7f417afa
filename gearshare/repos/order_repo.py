# gearshare/repos/order_repo.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from gearshare.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_by_user(self, user_id: str) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .options(selectinload(OrderModel.items))
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.created_at.desc())
            ).scalars()
        )

    def list_all(self) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .options(selectinload(OrderModel.items), selectinload(OrderModel.user))
                .order_by(OrderModel.created_at.desc())
            ).scalars()
        )

    def detach_user(self, user_id: str) -> int:
        """Keep the order history of a deleted user, owner set to NULL."""
        result = self.db.execute(
            update(OrderModel).where(OrderModel.user_id == user_id).values(user_id=None)
        )
        return result.rowcount or 0

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
