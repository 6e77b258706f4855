import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobboard.core.errors import InvalidOperationError
from jobboard.core.security import generate_id
from jobboard.models.employer_profile import EmployerProfile
from jobboard.models.job import Job
from jobboard.models.job_application import JobApplication
from jobboard.models.saved_job import SavedJob
from jobboard.models.types import JobStatus

logger = logging.getLogger(__name__)


def get(db: Session, seeker_user_id: str, job_id: str) -> SavedJob | None:
    return (
        db.query(SavedJob)
        .filter(SavedJob.job_seeker_user_id == seeker_user_id, SavedJob.job_id == job_id)
        .first()
    )


def save(db: Session, seeker_user_id: str, job_id: str) -> bool:
    """Bookmark an active job. Returns False when it was already saved."""
    job = db.query(Job).filter(Job.id == job_id, Job.status == JobStatus.ACTIVE).first()
    if job is None:
        raise InvalidOperationError("Cannot save this job. It may no longer be available.")
    if get(db, seeker_user_id, job_id) is not None:
        return False
    db.add(SavedJob(id=generate_id(), job_seeker_user_id=seeker_user_id, job_id=job_id))
    try:
        db.commit()
    except IntegrityError:
        # Saved concurrently by another request.
        db.rollback()
        return False
    logger.info("Seeker %s saved job %s", seeker_user_id, job_id)
    return True


def unsave(db: Session, seeker_user_id: str, job_id: str) -> bool:
    """Remove a bookmark. Returns False when there was nothing to remove."""
    deleted = (
        db.query(SavedJob)
        .filter(SavedJob.job_seeker_user_id == seeker_user_id, SavedJob.job_id == job_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted > 0


def list_for_seeker(db: Session, seeker_user_id: str) -> list[tuple[SavedJob, Job, EmployerProfile | None, bool]]:
    """Saved jobs newest first, as (saved row, job, employer profile, applied)."""
    rows = (
        db.query(SavedJob, Job, EmployerProfile)
        .join(Job, Job.id == SavedJob.job_id)
        .outerjoin(EmployerProfile, EmployerProfile.user_id == Job.employer_user_id)
        .filter(SavedJob.job_seeker_user_id == seeker_user_id)
        .order_by(SavedJob.saved_at.desc())
        .all()
    )
    applied = {
        row[0]
        for row in db.query(JobApplication.job_id).filter(JobApplication.job_seeker_user_id == seeker_user_id)
    }
    return [(saved, job, profile, job.id in applied) for saved, job, profile in rows]
