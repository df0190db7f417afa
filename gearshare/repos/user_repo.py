# gearshare/repos/user_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from gearshare.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.email == email)
        ).scalar_one_or_none()

    def list_users(self) -> list[UserModel]:
        return list(
            self.db.execute(
                select(UserModel).order_by(UserModel.created_at.desc())
            ).scalars()
        )

    def add(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.flush()
        return user

    def delete(self, user: UserModel) -> None:
        self.db.delete(user)
        self.db.flush()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
