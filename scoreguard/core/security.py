"""Password hashing and player access tokens"""

from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from scoreguard.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

TOKEN_TYPE = "access"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)  # type: ignore


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)  # type: ignore


def create_token_for_user(
    user_id: int, nickname: str, expires_delta: Optional[timedelta] = None
) -> str:
    """Issue a signed bearer token identifying a player"""
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {
        "sub": str(user_id),
        "nickname": nickname,
        "type": TOKEN_TYPE,
        "exp": datetime.utcnow() + lifetime,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)  # type: ignore


def decode_user_id(token: str) -> Optional[int]:
    """Return the player id carried by a valid token, or None

    Expired, tampered and malformed tokens are all treated as anonymous.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None

    if payload.get("type") != TOKEN_TYPE:
        return None

    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        return None
    return int(subject)
