import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobboard.core.errors import ConflictError
from jobboard.core.security import hash_password, generate_id
from jobboard.models.employer_profile import EmployerProfile
from jobboard.models.types import UserRole
from jobboard.models.user import User

logger = logging.getLogger(__name__)

DUPLICATE_ACCOUNT_MESSAGE = "An account with this email already exists."


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create(db: Session, email: str, password: str, role: UserRole) -> User:
    """
    Create an account. Employers also get a placeholder company profile,
    committed in the same transaction as the user row.
    """
    user = User(
        id=generate_id(),
        email=email,
        password_hash=hash_password(password),
        role=role,
    )
    db.add(user)
    if role == UserRole.EMPLOYER:
        db.add(
            EmployerProfile(
                id=generate_id(),
                user_id=user.id,
                company_name=f"Company for {email}",
                official_email=email,
            )
        )
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        detail = str(e.orig).lower()
        if "official_email" in detail:
            raise ConflictError(
                f"An employer profile with the email '{email}' already exists. "
                "Please use a different email or contact support."
            ) from e
        if "email" in detail:
            raise ConflictError(DUPLICATE_ACCOUNT_MESSAGE) from e
        raise
    db.refresh(user)
    logger.info("Created %s account %s", role.value, user.id)
    return user


def update(
    db: Session,
    user_id: str,
    *,
    is_admin: bool | None = None,
    is_active: bool | None = None,
) -> User | None:
    user = get_by_id(db, user_id)
    if not user:
        return None
    if is_admin is not None:
        user.is_admin = is_admin
    if is_active is not None:
        user.is_active = is_active
    db.commit()
    db.refresh(user)
    return user


def get_employer_card(db: Session, user_id: str) -> tuple[User, EmployerProfile | None] | None:
    """Employer account plus its profile, for the public QR login card."""
    row = (
        db.query(User, EmployerProfile)
        .outerjoin(EmployerProfile, EmployerProfile.user_id == User.id)
        .filter(User.id == user_id, User.role == UserRole.EMPLOYER)
        .first()
    )
    if row is None:
        return None
    return row[0], row[1]
