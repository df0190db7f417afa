import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("ADMIN_EMAIL", "")

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import gearshare.data.models  # noqa: F401
from gearshare.data.database import Base
from gearshare.data.models.product import ProductModel
from gearshare.data.models.user import UserModel
from gearshare.domain.policies import ADMIN_ROLE, Actor, USER_ROLE
from gearshare.services.auth_service import hash_password

NOW = datetime(2026, 10, 19, 10, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role: str = USER_ROLE, password: str = "secret", **fields) -> UserModel:
        counter["n"] += 1
        n = counter["n"]
        user = UserModel(
            username=fields.pop("username", f"user{n}"),
            email=fields.pop("email", f"user{n}@example.com"),
            password_hash=hash_password(password),
            role=role,
            phone_number=fields.pop("phone_number", f"09000000{n:02d}"),
            **fields,
        )
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def make_product(db):
    def _make(price="500000", name="Camera", **fields) -> ProductModel:
        product = ProductModel(
            name=name,
            price=Decimal(str(price)),
            image=fields.pop("image", f"{name.lower()}.jpg"),
            category=fields.pop("category", "gear"),
            **fields,
        )
        db.add(product)
        db.commit()
        return product

    return _make


@pytest.fixture
def customer(make_user):
    user = make_user()
    return Actor(user_id=user.id, role=USER_ROLE)


@pytest.fixture
def other_customer(make_user):
    user = make_user()
    return Actor(user_id=user.id, role=USER_ROLE)


@pytest.fixture
def admin(make_user):
    user = make_user(role=ADMIN_ROLE, username="admin")
    return Actor(user_id=user.id, role=ADMIN_ROLE)
