# app/services/auth_service.py
import hmac
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from app.utils import settings
from app.utils.logging import get_logger

logger = get_logger(__name__)


class AuthService:
    """
    Stateless admin tokens. Nothing is kept on the server: a request is an
    admin request iff it carries a valid signed token.
    """

    def __init__(
        self,
        secret_key: str = settings.SECRET_KEY,
        algorithm: str = settings.TOKEN_ALGORITHM,
        expire_minutes: int = settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def authenticate(self, username: str, password: str) -> bool:
        user_ok = hmac.compare_digest(username.encode(), settings.ADMIN_USERNAME.encode())
        password_ok = hmac.compare_digest(password.encode(), settings.ADMIN_PASSWORD.encode())
        if not (user_ok and password_ok):
            logger.warning(f"Failed admin login for '{username}'")
        return user_ok and password_ok

    def create_access_token(self, username: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": username,
            "role": "admin",
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
            "jti": str(uuid.uuid4()),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_access_token(self, token: str) -> Optional[dict]:
        """Claims of a valid admin token, None otherwise (bad signature, expired, wrong role)."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None
        if payload.get("role") != "admin":
            return None
        return payload
