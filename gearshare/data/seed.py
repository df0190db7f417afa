# gearshare/data/seed.py
from gearshare.data.database import SessionLocal
from gearshare.data.models.user import UserModel
from gearshare.domain.policies import ADMIN_ROLE
from gearshare.repos.user_repo import UserRepo
from gearshare.services.auth_service import hash_password
from gearshare.utils.logging import get_logger
from gearshare.utils.settings import ADMIN_EMAIL, ADMIN_PASSWORD

logger = get_logger(__name__)


def seed_admin(session_factory=SessionLocal) -> bool:
    """Create the bootstrap admin from ADMIN_EMAIL/ADMIN_PASSWORD if it does not exist."""
    if not ADMIN_EMAIL or not ADMIN_PASSWORD:
        return False

    db = session_factory()
    try:
        repo = UserRepo(db)
        existing = repo.get_by_email(ADMIN_EMAIL)
        if existing:
            if existing.role != ADMIN_ROLE:
                existing.role = ADMIN_ROLE
                repo.commit()
            return False

        repo.add(
            UserModel(
                username="admin",
                email=ADMIN_EMAIL,
                password_hash=hash_password(ADMIN_PASSWORD),
                role=ADMIN_ROLE,
            )
        )
        repo.commit()
        logger.info(f"Seeded admin account {ADMIN_EMAIL}")
        return True
    finally:
        db.close()
