import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.core.security import decode_access_token
from jobboard.models.types import UserRole
from jobboard.repos.user_repo import get_by_id

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def _user_for_token(db: Session, token: str):
    """
    Resolve a bearer token to its account. Returns (user, reason); reason
    explains a None user.
    """
    claims = decode_access_token(token)
    if claims is None:
        return None, "Invalid or expired token"
    user = get_by_id(db, claims.user_id)
    if user is None:
        return None, "User not found"
    # Tokens name the role they were issued for; a changed role needs a new login.
    if user.role.value != claims.role:
        return None, "Invalid or expired token"
    return user, None


def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
):
    if not credentials:
        logger.info("Auth failed: missing bearer credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    user, reason = _user_for_token(db, credentials.credentials)
    if user is None:
        logger.info("Auth failed: %s", reason)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=reason)
    return user


def get_current_active_user(
    user=Depends(get_current_user),
):
    """Require an authenticated account that has not been disabled."""
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is disabled",
        )
    return user


def get_optional_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
):
    """Current user when a valid token is sent, else None. Never raises."""
    if not credentials:
        return None
    user, _ = _user_for_token(db, credentials.credentials)
    if user is None or not user.is_active:
        return None
    return user


def require_employer(
    user=Depends(get_current_active_user),
):
    if user.role != UserRole.EMPLOYER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This action requires an employer account.",
        )
    return user


def require_job_seeker(
    user=Depends(get_current_active_user),
):
    if user.role != UserRole.JOB_SEEKER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This action requires a job seeker account.",
        )
    return user


def get_current_admin(
    user=Depends(get_current_active_user),
):
    """Require authenticated user with is_admin=True."""
    if not getattr(user, "is_admin", False):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user
