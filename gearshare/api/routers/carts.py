# gearshare/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gearshare.api.deps import get_current_actor
from gearshare.data.database import get_db
from gearshare.domain.policies import Actor
from gearshare.domain.schemas import CartLineIn, CartLineQuantityIn, CartLineRemoveIn, CartOut
from gearshare.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=CartOut)
def get_cart(actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    return get_service(db).build_cart(actor.user_id)


@router.put("/update", response_model=CartOut)
def add_or_update_line(
    payload: CartLineIn,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """mode=add is not idempotent: every call adds the quantity again."""
    option = payload.selected_option.model_dump() if payload.selected_option else None
    if option is None and payload.option_name:
        option = {"name": payload.option_name}

    return get_service(db).add_or_update(
        user_id=actor.user_id,
        product_id=payload.product_id,
        quantity=payload.quantity,
        selected_option=option,
        return_date=payload.return_date,
        mode=payload.mode,
    )


@router.patch("/items", response_model=CartOut)
def update_line_quantity(
    payload: CartLineQuantityIn,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return get_service(db).update_quantity(
        actor.user_id,
        payload.product_id,
        payload.option_name,
        payload.quantity,
    )


@router.delete("/remove", response_model=CartOut)
def remove_line(
    payload: CartLineRemoveIn,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return get_service(db).remove(actor.user_id, payload.product_id, payload.option_name)


@router.delete("/clear", response_model=CartOut)
def clear_cart(actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    return get_service(db).clear(actor.user_id)
