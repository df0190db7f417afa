# gearshare/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gearshare.api.deps import get_current_actor, get_optional_actor
from gearshare.data.database import get_db
from gearshare.domain.policies import Actor
from gearshare.domain.schemas import (
    FavoriteToggleIn,
    LikeToggleOut,
    MessageOut,
    ProductDetailOut,
    ProductIn,
    ProductOut,
    ProductUpdateIn,
)
from gearshare.services.product_service import ProductService

router = APIRouter(prefix="/api/products", tags=["products"])
favorites_router = APIRouter(prefix="/api/favorites", tags=["favorites"])


def get_service(db: Session):
    return ProductService(db)


@router.get("", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    return get_service(db).list_products()


@router.post("", response_model=ProductOut, status_code=201)
def create_product(
    payload: ProductIn,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return get_service(db).create_product(actor, payload.model_dump())


@router.get("/{product_id}", response_model=ProductDetailOut)
def get_product(
    product_id: str,
    viewer: Actor | None = Depends(get_optional_actor),
    db: Session = Depends(get_db),
):
    return get_service(db).get_product(product_id, viewer)


@router.put("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: str,
    payload: ProductUpdateIn,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return get_service(db).update_product(actor, product_id, payload.model_dump(exclude_none=True))


@router.delete("/{product_id}", response_model=MessageOut)
def delete_product(
    product_id: str,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    get_service(db).delete_product(actor, product_id)
    return {"message": "Product deleted"}


@router.put("/{product_id}/like", response_model=LikeToggleOut)
def toggle_like(
    product_id: str,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return get_service(db).toggle_like(product_id, actor)


@favorites_router.get("", response_model=List[ProductOut])
def list_favorites(actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    return get_service(db).list_favorites(actor)


@favorites_router.post("/toggle", response_model=LikeToggleOut)
def toggle_favorite(
    payload: FavoriteToggleIn,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return get_service(db).toggle_like(payload.product_id, actor)
