from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol

from jose import JWTError, jwt

from .config import get_settings
from .constants import ErrorMessages
from .exceptions import AuthenticationError
from .schemas import CallerIdentity

import logging
logger = logging.getLogger(__name__)


class IdentityVerifier(Protocol):
    """Turns a bearer credential into a trusted caller identity.

    Implementations must raise AuthenticationError for anything they cannot verify.
    """

    def verify(self, token: str) -> CallerIdentity:
        ...


class JWTIdentityVerifier:
    """Verifies HS-signed JWTs.

    ``sub`` is the caller uid; ``handle`` and ``mentor_status`` are optional claims.
    """

    def __init__(self, secret_key: str, algorithm: str):
        self.secret_key = secret_key
        self.algorithm = algorithm

    def verify(self, token: str) -> CallerIdentity:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.info("JWT decode failed: %s", e)
            raise AuthenticationError(ErrorMessages.INVALID_TOKEN) from e

        uid: Optional[str] = payload.get("sub")
        if not uid:
            raise AuthenticationError(ErrorMessages.INVALID_TOKEN)
        return CallerIdentity(uid=uid, handle=payload.get("handle"), mentor_status=payload.get("mentor_status"))


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Creates a JWT access token accepted by JWTIdentityVerifier."""
    settings = get_settings()
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Returns the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError(ErrorMessages.MISSING_CREDENTIALS)
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise AuthenticationError(ErrorMessages.MISSING_CREDENTIALS)
    return token
