# gearshare/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gearshare.api.deps import get_current_actor
from gearshare.data.database import get_db
from gearshare.domain.policies import Actor
from gearshare.domain.schemas import (
    CancelOrderIn,
    ConfirmOrderIn,
    OrderConfirmedOut,
    OrderCreatedOut,
    OrderCreateIn,
    OrderOut,
)
from gearshare.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("/create", response_model=OrderCreatedOut, status_code=201)
def create_order(
    payload: OrderCreateIn,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """
    Checkout: snapshots the caller's cart into a pending order and clears the cart.
    """
    return get_service(db).create_from_cart(actor, payload.model_dump())


@router.get("/all", response_model=List[OrderOut])
def list_all_orders(actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    return get_service(db).list_all(actor)


@router.get("/my-orders", response_model=List[OrderOut])
def list_my_orders(actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    return get_service(db).list_mine(actor)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: str, actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    return get_service(db).get_order(order_id, actor)


@router.put("/{order_id}/confirm", response_model=OrderConfirmedOut)
def confirm_order(
    order_id: str,
    payload: ConfirmOrderIn,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return get_service(db).confirm(order_id, payload.delivery_days, actor)


@router.put("/{order_id}/cancel", response_model=OrderOut)
def cancel_order(
    order_id: str,
    payload: CancelOrderIn | None = None,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    reason = payload.reason if payload else None
    return get_service(db).cancel(order_id, actor, reason)


@router.put("/{order_id}/received", response_model=OrderOut)
def mark_received(order_id: str, actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    return get_service(db).mark_received(order_id, actor)


@router.put("/{order_id}/returned", response_model=OrderOut)
def mark_returned(order_id: str, actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    return get_service(db).mark_returned(order_id, actor)
