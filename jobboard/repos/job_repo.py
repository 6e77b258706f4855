import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from jobboard.core.errors import InvalidOperationError, NotFoundError
from jobboard.core.security import generate_id
from jobboard.models.job import Job
from jobboard.models.job_application import JobApplication
from jobboard.models.saved_job import SavedJob
from jobboard.models.types import JobStatus
from jobboard.repos.employer_profile_repo import get_by_user_id as get_employer_profile
from jobboard.schemas.job import JobCreate

logger = logging.getLogger(__name__)

JOB_NOT_OWNED_MESSAGE = "Job not found or you do not have permission to modify it."


def get_by_id(db: Session, job_id: str) -> Job | None:
    return db.query(Job).filter(Job.id == job_id).first()


def get_owned(db: Session, job_id: str, employer_user_id: str) -> Job | None:
    return (
        db.query(Job)
        .filter(Job.id == job_id, Job.employer_user_id == employer_user_id)
        .first()
    )


def _apply_form(job: Job, data: JobCreate, company_name: str) -> None:
    job.job_title = data.job_title
    job.company_name = company_name
    job.industry = data.industry
    job.industry_type = data.effective_industry_type
    job.job_type = data.job_type
    job.job_location = data.job_location
    job.number_of_vacancies = data.number_of_vacancies
    job.qualification = data.qualification
    job.minimum_experience = data.minimum_experience
    job.maximum_experience = data.maximum_experience
    job.minimum_salary = data.minimum_salary
    job.maximum_salary = data.maximum_salary
    job.skills_required = list(data.skills_required)
    job.additional_data = data.additional_data
    job.job_description = data.job_description
    job.custom_questions = [q.model_dump() for q in data.custom_questions]
    job.status = JobStatus(data.status)


def save(db: Session, employer_user_id: str, data: JobCreate, job_id: str | None = None) -> Job:
    """Create a job, or update one the employer owns when job_id is given."""
    profile = get_employer_profile(db, employer_user_id)
    if profile is None or not profile.company_name:
        raise InvalidOperationError("Please complete your company profile before posting a job.")

    if job_id is None:
        job = Job(id=generate_id(), employer_user_id=employer_user_id)
        db.add(job)
    else:
        job = get_owned(db, job_id, employer_user_id)
        if job is None:
            raise NotFoundError("Job not found or you do not have permission to edit it.")

    _apply_form(job, data, profile.company_name)
    db.commit()
    db.refresh(job)
    logger.info("Job %s %s by employer %s (status=%s)", job.id, "created" if job_id is None else "updated", employer_user_id, job.status.value)
    return job


def list_by_status(db: Session, employer_user_id: str, status: str = "all") -> list[Job]:
    q = db.query(Job).filter(Job.employer_user_id == employer_user_id)
    if status != "all":
        valid = {s.value for s in JobStatus}
        if status not in valid:
            raise InvalidOperationError(f"Invalid job status filter: {status}")
        q = q.filter(Job.status == JobStatus(status))
    return q.order_by(Job.updated_at.desc(), Job.created_at.desc()).all()


def update_status(db: Session, job_id: str, employer_user_id: str, new_status: JobStatus) -> Job:
    """Any status may move to any other; re-setting the current one is rejected."""
    job = get_owned(db, job_id, employer_user_id)
    if job is None:
        raise NotFoundError(JOB_NOT_OWNED_MESSAGE)
    if job.status == new_status:
        raise InvalidOperationError(f"Job is already {new_status.value}.")
    previous = job.status
    job.status = new_status
    db.commit()
    db.refresh(job)
    logger.info("Job %s status %s -> %s", job_id, previous.value, new_status.value)
    return job


def delete(db: Session, job_id: str, employer_user_id: str) -> dict:
    """
    Delete an owned job with its applications and saved-job rows in one
    transaction. Returns the number of dependent rows removed.
    """
    try:
        job = get_owned(db, job_id, employer_user_id)
        if job is None:
            raise NotFoundError(JOB_NOT_OWNED_MESSAGE)
        applications = (
            db.query(JobApplication)
            .filter(JobApplication.job_id == job_id)
            .delete(synchronize_session=False)
        )
        saved = (
            db.query(SavedJob)
            .filter(SavedJob.job_id == job_id)
            .delete(synchronize_session=False)
        )
        db.delete(job)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Deleted job %s (%d applications, %d saved rows)", job_id, applications, saved)
    return {"applications": applications, "saved_jobs": saved}


def list_with_application_counts(db: Session, employer_user_id: str) -> list[tuple[Job, int]]:
    rows = (
        db.query(Job, func.count(JobApplication.id))
        .outerjoin(JobApplication, JobApplication.job_id == Job.id)
        .filter(Job.employer_user_id == employer_user_id)
        .group_by(Job.id)
        .order_by(Job.updated_at.desc(), Job.created_at.desc())
        .all()
    )
    return [(job, count or 0) for job, count in rows]
