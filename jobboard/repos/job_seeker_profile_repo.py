import logging

from sqlalchemy.orm import Session, selectinload

from jobboard.core.security import generate_id
from jobboard.models.job_seeker_profile import JobSeekerProfile, EducationDetail, ExperienceDetail
from jobboard.schemas.job_seeker_profile import JobSeekerProfileUpdate

logger = logging.getLogger(__name__)

COLLECTION_FIELDS = {"educational_details", "experience_details"}


def get_by_user_id(db: Session, user_id: str) -> JobSeekerProfile | None:
    return (
        db.query(JobSeekerProfile)
        .options(
            selectinload(JobSeekerProfile.education_details),
            selectinload(JobSeekerProfile.experience_details),
        )
        .filter(JobSeekerProfile.user_id == user_id)
        .first()
    )


def save(db: Session, user_id: str, data: JobSeekerProfileUpdate) -> JobSeekerProfile:
    """
    Upsert the profile row and replace its education and experience
    entries wholesale. Everything commits together or not at all.
    """
    try:
        profile = get_by_user_id(db, user_id)
        if profile is None:
            profile = JobSeekerProfile(id=generate_id(), user_id=user_id)
            db.add(profile)

        for field, value in data.model_dump(exclude=COLLECTION_FIELDS).items():
            setattr(profile, field, value)

        profile.education_details = [
            EducationDetail(id=generate_id(), position=i, **entry.model_dump())
            for i, entry in enumerate(data.educational_details)
        ]
        profile.experience_details = [
            ExperienceDetail(id=generate_id(), position=i, **entry.model_dump())
            for i, entry in enumerate(data.experience_details)
        ]
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(profile)
    logger.info(
        "Saved job seeker profile for user %s: %d education, %d experience",
        user_id,
        len(data.educational_details),
        len(data.experience_details),
    )
    return profile


def update_resume(db: Session, user_id: str, resume_url: str | None) -> tuple[JobSeekerProfile, bool]:
    """Set only the resume; creates a bare profile when none exists. Returns (profile, created)."""
    profile = db.query(JobSeekerProfile).filter(JobSeekerProfile.user_id == user_id).first()
    created = profile is None
    if created:
        profile = JobSeekerProfile(id=generate_id(), user_id=user_id)
        db.add(profile)
    profile.resume_url = resume_url
    db.commit()
    db.refresh(profile)
    logger.info("Resume %s for user %s", "set" if resume_url else "cleared", user_id)
    return profile, created
