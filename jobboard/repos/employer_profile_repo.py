import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobboard.core.errors import ConflictError, integrity_error_message
from jobboard.core.security import generate_id
from jobboard.models.employer_profile import EmployerProfile
from jobboard.schemas.employer_profile import EmployerProfileUpdate

logger = logging.getLogger(__name__)


def get_by_user_id(db: Session, user_id: str) -> EmployerProfile | None:
    return db.query(EmployerProfile).filter(EmployerProfile.user_id == user_id).first()


def save(db: Session, user_id: str, data: EmployerProfileUpdate) -> tuple[EmployerProfile, bool]:
    """Upsert the employer's profile. Returns (profile, created)."""
    profile = get_by_user_id(db, user_id)
    created = profile is None
    if created:
        profile = EmployerProfile(id=generate_id(), user_id=user_id)
        db.add(profile)
    for field, value in data.model_dump().items():
        setattr(profile, field, value)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        message = integrity_error_message(e)
        if message:
            raise ConflictError(message) from e
        raise
    db.refresh(profile)
    logger.info("Employer profile %s for user %s", "created" if created else "updated", user_id)
    return profile, created
