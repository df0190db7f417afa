# gearshare/services/product_service.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from gearshare.data.models.product import ProductModel
from gearshare.domain.errors import NotFoundError, ValidationError
from gearshare.domain.policies import Actor, require_admin
from gearshare.repos.product_repo import ProductRepo
from gearshare.utils.logging import get_logger

logger = get_logger(__name__)

EDITABLE_FIELDS = ("name", "price", "category", "image")


class ProductService:
    """Catalog CRUD (admin) and the per-user like set."""

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def list_products(self) -> List[Dict[str, Any]]:
        products = self.repo.list_products()
        counts = self.repo.like_counts(p.id for p in products)
        return [product_to_dict(p, counts.get(p.id, 0)) for p in products]

    def get_product(self, product_id: str, viewer: Actor | None = None) -> Dict[str, Any]:
        product = self._get(product_id)
        liked_by_me = bool(viewer and self.repo.get_like(product.id, viewer.user_id))
        return {
            "product": product_to_dict(product, self._like_count(product.id)),
            "liked_by_me": liked_by_me,
        }

    def create_product(self, actor: Actor, data: Dict[str, Any]) -> Dict[str, Any]:
        require_admin(actor, "Only admins can add products")
        product = self.repo.add(
            ProductModel(
                name=data["name"],
                price=data["price"],
                category=data.get("category") or "",
                image=data.get("image") or "",
            )
        )
        self.repo.commit()
        logger.info(f"Product {product.id} created by {actor.user_id}")
        return product_to_dict(product, 0)

    def update_product(self, actor: Actor, product_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        require_admin(actor, "Only admins can edit products")
        product = self._get(product_id)

        for field in EDITABLE_FIELDS:
            if changes.get(field) is not None:
                setattr(product, field, changes[field])

        self.repo.commit()
        logger.info(f"Product {product.id} updated by {actor.user_id}")
        return product_to_dict(product, self._like_count(product.id))

    def delete_product(self, actor: Actor, product_id: str) -> None:
        require_admin(actor, "Only admins can delete products")
        product = self._get(product_id)
        self.repo.delete(product)
        self.repo.commit()
        logger.info(f"Product {product_id} deleted by {actor.user_id}")

    # =====================================================
    # likes
    # =====================================================
    def toggle_like(self, product_id: str | None, actor: Actor) -> Dict[str, Any]:
        if not product_id:
            raise ValidationError("productId is required")
        product = self._get(product_id)

        like = self.repo.get_like(product.id, actor.user_id)
        if like:
            self.repo.delete_like(like)
            liked = False
        else:
            self.repo.add_like(product.id, actor.user_id)
            liked = True

        self.repo.commit()
        return {"product_id": product.id, "liked": liked}

    def list_favorites(self, actor: Actor) -> List[Dict[str, Any]]:
        products = self.repo.list_liked_by(actor.user_id)
        counts = self.repo.like_counts(p.id for p in products)
        return [product_to_dict(p, counts.get(p.id, 0)) for p in products]

    def _like_count(self, product_id: str) -> int:
        return self.repo.like_counts([product_id]).get(product_id, 0)

    def _get(self, product_id: str) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product


def product_to_dict(product: ProductModel, like_count: int = 0) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "price": product.price,
        "image": product.image or "",
        "category": product.category or "",
        "like_count": like_count,
        "created_at": product.created_at,
    }
