# gearshare/api/deps.py
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from gearshare.domain.policies import Actor
from gearshare.services.auth_service import try_decode, verify_token

bearer_scheme = HTTPBearer(auto_error=False)


def _token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    return credentials.credentials if credentials else None


def get_current_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Actor:
    """Authenticated caller or 401."""
    return verify_token(_token(credentials))


def get_optional_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Actor | None:
    """Caller if a valid token was sent, else None. Never fails."""
    return try_decode(_token(credentials))
