# gearshare/services/auth_service.py
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from gearshare.domain.errors import UnauthenticatedError
from gearshare.domain.policies import Actor, USER_ROLE
from gearshare.utils.settings import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, JWT_SECRET

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: str, role: str, expires_delta: timedelta | None = None) -> str:
    """JWT with sub = user id and the role claim."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {"sub": str(user_id), "role": role, "exp": expire}
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_token(token: str | None) -> Actor:
    """Decode a bearer token or raise UnauthenticatedError."""
    if not token:
        raise UnauthenticatedError("Not authenticated")
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError:
        raise UnauthenticatedError("Invalid token")

    user_id = payload.get("sub")
    if not user_id:
        raise UnauthenticatedError("Invalid token")
    return Actor(user_id=str(user_id), role=payload.get("role") or USER_ROLE)


def try_decode(token: str | None) -> Actor | None:
    """Like verify_token, but None instead of an error. For optional personalisation."""
    try:
        return verify_token(token)
    except UnauthenticatedError:
        return None
