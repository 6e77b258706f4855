import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from jobboard.core.errors import JobBoardError
from jobboard.core.security import verify_password, create_access_token
from jobboard.database import get_db
from jobboard.dependencies import get_current_active_user
from jobboard.models.types import UserRole
from jobboard.models.user import User
from jobboard.repos.employer_profile_repo import get_by_user_id as get_employer_profile
from jobboard.repos.user_repo import (
    DUPLICATE_ACCOUNT_MESSAGE,
    get_by_email,
    create as create_user,
    get_employer_card,
)
from jobboard.schemas.auth import EmployerCard, Token, UserLogin, UserResponse, UserSignup
from jobboard.schemas.common import ActionResult

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])

ROLE_LABELS = {UserRole.EMPLOYER: "employer", UserRole.JOB_SEEKER: "job seeker"}


def _user_to_response(db: Session, user: User) -> UserResponse:
    response = UserResponse(
        id=user.id,
        email=user.email,
        role=user.role,
        is_admin=getattr(user, "is_admin", False),
    )
    if user.role == UserRole.EMPLOYER:
        profile = get_employer_profile(db, user.id)
        if profile:
            response.company_name = profile.company_name
            response.company_logo_url = profile.company_logo_url
    return response


@router.post("/signup", response_model=ActionResult)
def signup(data: UserSignup, db: Session = Depends(get_db)):
    try:
        if get_by_email(db, data.email):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_ACCOUNT_MESSAGE)
        user = create_user(db, data.email, data.password, data.role)
        logger.info("User signed up: %s (%s)", user.email, user.role.value)
        token = create_access_token(user.id, user.role.value)
        return ActionResult(
            message="Account created successfully.",
            data=Token(access_token=token, user=_user_to_response(db, user)),
        )
    except (HTTPException, JobBoardError):
        raise
    except Exception as e:
        logger.exception("Signup failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Signup failed") from e


@router.post("/login", response_model=ActionResult)
def login(data: UserLogin, db: Session = Depends(get_db)):
    try:
        user = get_by_email(db, data.email)
        if not user or not verify_password(data.password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password.",
            )
        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Account is disabled",
            )
        if user.role != data.role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=(
                    f"You are trying to log in as {ROLE_LABELS[data.role]}, "
                    f"but this account is registered as a {ROLE_LABELS[user.role]}."
                ),
            )
        logger.info("User logged in: %s", user.email)
        token = create_access_token(user.id, user.role.value)
        return ActionResult(
            message="Login successful.",
            data=Token(access_token=token, user=_user_to_response(db, user)),
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Login failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Login failed") from e


@router.get("/me", response_model=ActionResult)
def get_me(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    return ActionResult(data=_user_to_response(db, user))


@router.get("/employer-card/{user_id}", response_model=ActionResult)
def employer_card(user_id: str, db: Session = Depends(get_db)):
    """Public: the employer shown on a QR login page."""
    row = get_employer_card(db, user_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employer not found.")
    user, profile = row
    return ActionResult(
        data=EmployerCard(
            email=user.email,
            company_name=profile.company_name if profile else None,
            company_logo_url=profile.company_logo_url if profile else None,
        )
    )
