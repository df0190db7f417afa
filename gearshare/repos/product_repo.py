# gearshare/repos/product_repo.py
from typing import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from gearshare.data.models.product import ProductLikeModel, ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_many(self, product_ids: Iterable[str]) -> dict[str, ProductModel]:
        ids = set(product_ids)
        if not ids:
            return {}
        rows = self.db.execute(
            select(ProductModel).where(ProductModel.id.in_(ids))
        ).scalars()
        return {p.id: p for p in rows}

    def list_products(self) -> list[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel).order_by(ProductModel.created_at.desc())
            ).scalars()
        )

    def list_liked_by(self, user_id: str) -> list[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel)
                .join(ProductLikeModel, ProductLikeModel.product_id == ProductModel.id)
                .where(ProductLikeModel.user_id == user_id)
                .order_by(ProductModel.created_at.desc())
            ).scalars()
        )

    def like_counts(self, product_ids: Iterable[str]) -> dict[str, int]:
        ids = set(product_ids)
        if not ids:
            return {}
        rows = self.db.execute(
            select(ProductLikeModel.product_id, func.count(ProductLikeModel.id))
            .where(ProductLikeModel.product_id.in_(ids))
            .group_by(ProductLikeModel.product_id)
        ).all()
        return {product_id: count for product_id, count in rows}

    def get_like(self, product_id: str, user_id: str) -> ProductLikeModel | None:
        return self.db.execute(
            select(ProductLikeModel).where(
                ProductLikeModel.product_id == product_id,
                ProductLikeModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def add_like(self, product_id: str, user_id: str) -> ProductLikeModel:
        like = ProductLikeModel(product_id=product_id, user_id=user_id)
        self.db.add(like)
        self.db.flush()
        return like

    def delete_like(self, like: ProductLikeModel) -> None:
        self.db.delete(like)
        self.db.flush()

    def delete_likes_by_user(self, user_id: str) -> None:
        self.db.execute(delete(ProductLikeModel).where(ProductLikeModel.user_id == user_id))

    def add(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product

    def delete(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.flush()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
