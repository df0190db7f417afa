# gearshare/api/routers/users.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gearshare.api.deps import get_current_actor
from gearshare.data.database import get_db
from gearshare.domain.policies import Actor
from gearshare.domain.schemas import (
    LoginIn,
    MessageOut,
    SetAdminIn,
    TokenOut,
    UserOut,
    UserRegisterIn,
    UserUpdateIn,
)
from gearshare.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


def get_service(db: Session):
    return UserService(db)


@router.post("/register", response_model=UserOut, status_code=201)
def register(payload: UserRegisterIn, db: Session = Depends(get_db)):
    return get_service(db).register(
        username=payload.username,
        email=payload.email,
        password=payload.password,
        phone_number=payload.phone_number,
    )


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    return get_service(db).login(payload.email, payload.password)


@router.get("/me", response_model=UserOut)
def me(actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    return get_service(db).get_user(actor.user_id)


@router.get("", response_model=List[UserOut])
def list_users(actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    return get_service(db).list_users(actor)


@router.patch("/set-admin", response_model=UserOut)
def set_admin(
    payload: SetAdminIn,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return get_service(db).set_admin(actor, payload.email)


@router.patch("/{user_id}", response_model=UserOut)
def update_user(
    user_id: str,
    payload: UserUpdateIn,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return get_service(db).update_user(actor, user_id, payload.model_dump(exclude_none=True))


@router.delete("/{user_id}", response_model=MessageOut)
def delete_user(
    user_id: str,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    get_service(db).delete_user(actor, user_id)
    return {"message": "User deleted"}
