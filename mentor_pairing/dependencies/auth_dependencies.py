# mentor_pairing/dependencies/auth_dependencies.py
import logging
from functools import lru_cache
from typing import Optional
from fastapi import Depends, Header

from ..config import get_settings
from ..constants import ErrorMessages
from ..exceptions import AuthenticationError, ForbiddenError
from ..schemas import CallerIdentity
from ..security import IdentityVerifier, JWTIdentityVerifier, extract_bearer_token

logger = logging.getLogger(__name__)

@lru_cache()
def get_identity_verifier() -> IdentityVerifier:
    """Default verifier; override this dependency to plug in another identity provider."""
    settings = get_settings()
    return JWTIdentityVerifier(settings.SECRET_KEY, settings.ALGORITHM)

def get_current_caller(
    authorization: Optional[str] = Header(None),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> CallerIdentity:
    """
    Resolves the caller from ``Authorization: Bearer <token>``.
    Fails closed: any verifier failure is reported as Unauthorized.
    """
    token = extract_bearer_token(authorization)
    try:
        return verifier.verify(token)
    except AuthenticationError:
        raise
    except Exception as e:
        logger.error(f"Identity verifier failed: {e}", exc_info=True)
        raise AuthenticationError(ErrorMessages.INVALID_TOKEN) from e

def get_approved_mentor(caller: CallerIdentity = Depends(get_current_caller)) -> CallerIdentity:
    """Caller whose mentor application has been approved; required for directory changes."""
    if not caller.is_approved_mentor:
        raise ForbiddenError(ErrorMessages.MENTOR_NOT_APPROVED)
    return caller
