# app/api/routers/auth.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import current_admin, get_auth_service
from app.domain.schemas import AuthStatusOut, Envelope, LoginIn, TokenOut
from app.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=Envelope[TokenOut])
def login(payload: LoginIn, auth: AuthService = Depends(get_auth_service)):
    if not auth.authenticate(payload.username, payload.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    token = auth.create_access_token(payload.username)
    return Envelope(
        data=TokenOut(access_token=token, expires_in=auth.expire_minutes * 60),
        message="Login successful",
    )


@router.post("/logout", response_model=Envelope[None])
def logout():
    # tokens are not stored server side, the client just drops it
    return Envelope(message="Logged out successfully")


@router.get("/status", response_model=Envelope[AuthStatusOut])
def status(claims: Optional[dict] = Depends(current_admin)):
    return Envelope(
        data=AuthStatusOut(
            is_authenticated=claims is not None,
            username=claims.get("sub") if claims else None,
        )
    )
