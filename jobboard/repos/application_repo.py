import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobboard.core.errors import ConflictError, InvalidOperationError, NotFoundError
from jobboard.core.security import generate_id
from jobboard.models.employer_profile import EmployerProfile
from jobboard.models.job import Job
from jobboard.models.job_application import JobApplication
from jobboard.models.job_seeker_profile import JobSeekerProfile
from jobboard.models.saved_job import SavedJob
from jobboard.models.types import ApplicationStatus, JobStatus
from jobboard.models.user import User
from jobboard.schemas.application import ApplicationCreate

logger = logging.getLogger(__name__)

ALREADY_APPLIED_MESSAGE = "You have already applied for this job."


def submit(db: Session, job_id: str, seeker_user_id: str, data: ApplicationCreate) -> JobApplication:
    """
    Apply to an active job. Copies the seeker's resume onto the application
    and drops any saved-job bookmark for the pair, all in one transaction.
    """
    try:
        job = db.query(Job).filter(Job.id == job_id).first()
        if job is None:
            raise NotFoundError("Job not found. Cannot submit application.")
        if job.status != JobStatus.ACTIVE:
            raise InvalidOperationError("This job is no longer active and cannot accept applications.")
        existing = (
            db.query(JobApplication.id)
            .filter(JobApplication.job_id == job_id, JobApplication.job_seeker_user_id == seeker_user_id)
            .first()
        )
        if existing is not None:
            raise ConflictError(ALREADY_APPLIED_MESSAGE)

        profile = db.query(JobSeekerProfile).filter(JobSeekerProfile.user_id == seeker_user_id).first()
        application = JobApplication(
            id=generate_id(),
            job_id=job_id,
            job_seeker_user_id=seeker_user_id,
            employer_user_id=job.employer_user_id,
            status=ApplicationStatus.SUBMITTED,
            resume_url=profile.resume_url if profile else None,
            custom_question_answers=[a.model_dump() for a in data.custom_question_answers],
            current_working_location=data.current_working_location,
            expected_salary=data.expected_salary,
            notice_period=data.notice_period,
        )
        db.add(application)
        db.flush()
        db.query(SavedJob).filter(
            SavedJob.job_seeker_user_id == seeker_user_id, SavedJob.job_id == job_id
        ).delete(synchronize_session=False)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(ALREADY_APPLIED_MESSAGE) from e
    except Exception:
        db.rollback()
        raise
    db.refresh(application)
    logger.info("Seeker %s applied to job %s (application %s)", seeker_user_id, job_id, application.id)
    return application


def withdraw(db: Session, application_id: str, seeker_user_id: str) -> None:
    deleted = (
        db.query(JobApplication)
        .filter(JobApplication.id == application_id, JobApplication.job_seeker_user_id == seeker_user_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        db.rollback()
        raise NotFoundError("Application not found or you do not have permission to withdraw it.")
    db.commit()
    logger.info("Seeker %s withdrew application %s", seeker_user_id, application_id)


def list_for_seeker(db: Session, seeker_user_id: str) -> list[tuple[JobApplication, Job, EmployerProfile | None]]:
    return (
        db.query(JobApplication, Job, EmployerProfile)
        .join(Job, Job.id == JobApplication.job_id)
        .outerjoin(EmployerProfile, EmployerProfile.user_id == Job.employer_user_id)
        .filter(JobApplication.job_seeker_user_id == seeker_user_id)
        .order_by(JobApplication.applied_at.desc())
        .all()
    )


def _applicant_query(db: Session):
    return (
        db.query(JobApplication, Job, User, JobSeekerProfile)
        .join(Job, Job.id == JobApplication.job_id)
        .join(User, User.id == JobApplication.job_seeker_user_id)
        .outerjoin(JobSeekerProfile, JobSeekerProfile.user_id == JobApplication.job_seeker_user_id)
    )


def list_for_job(
    db: Session, job_id: str, employer_user_id: str
) -> list[tuple[JobApplication, Job, User, JobSeekerProfile | None]]:
    """Applicants for a job the employer owns, newest first."""
    owned = (
        db.query(Job.id)
        .filter(Job.id == job_id, Job.employer_user_id == employer_user_id)
        .first()
    )
    if owned is None:
        raise NotFoundError("Job not found or you do not have permission to view its applications.")
    return (
        _applicant_query(db)
        .filter(JobApplication.job_id == job_id)
        .order_by(JobApplication.applied_at.desc())
        .all()
    )


def get_for_employer(
    db: Session, application_id: str, employer_user_id: str
) -> tuple[JobApplication, Job, User, JobSeekerProfile | None]:
    row = (
        _applicant_query(db)
        .filter(JobApplication.id == application_id, Job.employer_user_id == employer_user_id)
        .first()
    )
    if row is None:
        raise NotFoundError("Application not found or you do not have permission to view it.")
    return row[0], row[1], row[2], row[3]


def update_status(
    db: Session,
    application_id: str,
    employer_user_id: str,
    new_status: ApplicationStatus,
    remarks: str,
) -> JobApplication:
    """Set status and remarks on an application to one of the employer's jobs."""
    if not remarks or not remarks.strip():
        raise InvalidOperationError("Employer remarks are mandatory when updating status.")
    application = (
        db.query(JobApplication)
        .join(Job, Job.id == JobApplication.job_id)
        .filter(JobApplication.id == application_id, Job.employer_user_id == employer_user_id)
        .first()
    )
    if application is None:
        raise NotFoundError("Application not found or you do not have permission to update it.")
    previous = application.status
    application.status = new_status
    application.employer_remarks = remarks.strip()
    db.commit()
    db.refresh(application)
    logger.info("Application %s status %s -> %s", application_id, previous.value, new_status.value)
    return application
