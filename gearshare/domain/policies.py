# gearshare/domain/policies.py
from dataclasses import dataclass

from gearshare.domain.errors import ForbiddenError

ADMIN_ROLE = "admin"
USER_ROLE = "user"


@dataclass(frozen=True)
class Actor:
    """Authenticated caller as decoded from a bearer token."""

    user_id: str
    role: str = USER_ROLE

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    @property
    def category(self) -> str:
        return ADMIN_ROLE if self.is_admin else USER_ROLE


def require_admin(actor: Actor, message: str = "Admin privileges required") -> None:
    if not actor.is_admin:
        raise ForbiddenError(message)


def require_owner(actor: Actor, owner_id: str | None, message: str = "Not allowed to access this resource") -> None:
    if owner_id is None or str(owner_id) != str(actor.user_id):
        raise ForbiddenError(message)


def require_owner_or_admin(actor: Actor, owner_id: str | None, message: str = "Not allowed to access this resource") -> None:
    if actor.is_admin:
        return
    require_owner(actor, owner_id, message)
