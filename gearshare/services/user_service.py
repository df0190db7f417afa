# gearshare/services/user_service.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from gearshare.data.models.user import UserModel
from gearshare.domain.errors import ForbiddenError, NotFoundError, UnauthenticatedError, ValidationError
from gearshare.domain.policies import ADMIN_ROLE, Actor, USER_ROLE, require_admin
from gearshare.repos.cart_repo import CartRepo
from gearshare.repos.order_repo import OrderRepo
from gearshare.repos.product_repo import ProductRepo
from gearshare.repos.user_repo import UserRepo
from gearshare.services.auth_service import create_access_token, hash_password, verify_password
from gearshare.utils.logging import get_logger

logger = get_logger(__name__)

EDITABLE_FIELDS = ("username", "phone_number", "password", "blocked")


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)
        self.cart_repo = CartRepo(db)
        self.order_repo = OrderRepo(db)
        self.product_repo = ProductRepo(db)

    def register(self, username: str, email: str, password: str, phone_number: str = "") -> Dict[str, Any]:
        if not username or not email or not password:
            raise ValidationError("username, email and password are required")
        if self.repo.get_by_email(email):
            raise ValidationError("Email already registered")

        user = self.repo.add(
            UserModel(
                username=username,
                email=email,
                password_hash=hash_password(password),
                role=USER_ROLE,
                phone_number=phone_number or "",
            )
        )
        self.repo.commit()
        logger.info(f"Registered user {user.id} ({email})")
        return user_to_dict(user)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        user = self.repo.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise UnauthenticatedError("Incorrect email or password")
        if user.blocked:
            raise ForbiddenError("User is blocked")

        token = create_access_token(user.id, user.role)
        return {"token": token, "user": user_to_dict(user)}

    def get_user(self, user_id: str) -> Dict[str, Any]:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user_to_dict(user)

    # =====================================================
    # admin
    # =====================================================
    def list_users(self, actor: Actor) -> List[Dict[str, Any]]:
        require_admin(actor)
        return [user_to_dict(u) for u in self.repo.list_users()]

    def set_admin(self, actor: Actor, email: str) -> Dict[str, Any]:
        require_admin(actor)
        user = self.repo.get_by_email(email)
        if not user:
            raise NotFoundError("User not found")

        user.role = ADMIN_ROLE
        self.repo.commit()
        logger.info(f"User {user.id} promoted to admin by {actor.user_id}")
        return user_to_dict(user)

    def update_user(self, actor: Actor, user_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        require_admin(actor)
        user = self._get_editable(user_id)

        for field in EDITABLE_FIELDS:
            value = changes.get(field)
            if value is None:
                continue
            if field == "password":
                user.password_hash = hash_password(value)
            else:
                setattr(user, field, value)

        self.repo.commit()
        logger.info(f"User {user.id} updated by {actor.user_id}")
        return user_to_dict(user)

    def delete_user(self, actor: Actor, user_id: str) -> None:
        require_admin(actor)
        user = self._get_editable(user_id)

        self.cart_repo.delete_lines(user.id)
        self.order_repo.detach_user(user.id)
        self.product_repo.delete_likes_by_user(user.id)
        self.repo.delete(user)
        self.repo.commit()
        logger.info(f"User {user_id} deleted by {actor.user_id}")

    def _get_editable(self, user_id: str) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.role == ADMIN_ROLE:
            raise ForbiddenError("Admin accounts cannot be modified")
        return user


def user_to_dict(user: UserModel) -> Dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "role": user.role,
        "phone_number": user.phone_number or "",
        "blocked": bool(user.blocked),
        "created_at": user.created_at,
    }
