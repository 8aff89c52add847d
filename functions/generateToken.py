from jose import jwt, JWTError, ExpiredSignatureError
from datetime import timedelta, datetime, timezone
from functools import lru_cache
from typing import Optional
import os
from functions.errors import Unauthenticated

SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
ALGORITHM = os.getenv("ALGORITHM", "HS256")


# Token expiration settings - cached to avoid repeated env lookups
@lru_cache(maxsize=1)
def get_token_settings():
    return {
        "access_token_expire_minutes": int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7)),
    }


def create_access_token(
    user_id: int,
    expires_delta: Optional[timedelta] = None,
    token_type: str = "access",
):
    """Sign a bearer token bound to a single user id."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=get_token_settings()["access_token_expire_minutes"])
    now = datetime.now(timezone.utc)
    to_encode = {
        "sub": str(user_id),
        "type": token_type,
        "iat": now,
        "exp": now + expires_delta
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> int:
    """
    Verify signature and expiry and return the user id the token is bound to.

    Only the user id is trusted; role and flags are re-read from the database
    by the caller.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        raise Unauthenticated("Token expired")
    except JWTError:
        raise Unauthenticated("Invalid token")

    if payload.get("type") != "access":
        raise Unauthenticated("Invalid token")
    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        raise Unauthenticated("Invalid token")
