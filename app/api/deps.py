# app/api/deps.py
from typing import Iterator, Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.repos.base import Stores
from app.services.auth_service import AuthService
from app.utils import settings

bearer_scheme = HTTPBearer(auto_error=False)


def get_stores(request: Request) -> Iterator[Stores]:
    """Stores of the configured backend, scoped to one request."""
    with request.app.state.backend.stores() as stores:
        yield stores


def get_auth_service() -> AuthService:
    return AuthService()


def current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> Optional[dict]:
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    return auth.verify_access_token(credentials.credentials)


def require_admin(claims: Optional[dict] = Depends(current_admin)) -> Optional[dict]:
    if not settings.ADMIN_AUTH_ENABLED:
        return claims
    if claims is None:
        raise HTTPException(
            status_code=401,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return claims
