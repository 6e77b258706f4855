import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from jobboard.config import settings
from jobboard.core.errors import JobBoardError, NotFoundError
from jobboard.database import get_db
from jobboard.dependencies import get_optional_user, require_job_seeker
from jobboard.models.types import UserRole
from jobboard.models.user import User
from jobboard.repos import application_repo, job_search_repo, saved_job_repo
from jobboard.repos.job_seeker_profile_repo import get_by_user_id as get_seeker_profile
from jobboard.schemas.application import ApplicationCreate
from jobboard.schemas.common import ActionResult
from jobboard.schemas.job import CompanyInfo, JobDetail, JobListing, SuggestedJob

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])

JOB_UNAVAILABLE_MESSAGE = "Job not found or no longer available."


def _seeker_id(user: User | None) -> str | None:
    if user is not None and user.role == UserRole.JOB_SEEKER:
        return user.id
    return None


def _job_to_listing(job, profile, match_score, saved: set, applied: set) -> JobListing:
    return JobListing(
        id=job.id,
        employer_user_id=job.employer_user_id,
        job_title=job.job_title,
        job_location=job.job_location,
        industry=job.industry,
        industry_type=job.industry_type,
        job_type=job.job_type,
        qualification=job.qualification,
        minimum_experience=job.minimum_experience,
        maximum_experience=job.maximum_experience,
        minimum_salary=job.minimum_salary,
        maximum_salary=job.maximum_salary,
        skills_required=job.skills_required or [],
        created_at=job.created_at,
        company=CompanyInfo.from_job(job, profile),
        is_saved=job.id in saved,
        is_applied=job.id in applied,
        match_score=match_score,
    )


def _job_to_suggestion(job, profile) -> SuggestedJob:
    company = CompanyInfo.from_job(job, profile)
    return SuggestedJob(
        id=job.id,
        job_title=job.job_title,
        company_name=company.company_name,
        company_logo_url=company.company_logo_url,
        location=job.job_location,
    )


@router.get("", response_model=ActionResult)
def search_jobs(
    search_term: str | None = None,
    location: str | None = None,
    industry: str | None = None,
    job_type: str | None = None,
    db: Session = Depends(get_db),
    user: User | None = Depends(get_optional_user),
):
    """Active jobs; signed-in job seekers get saved/applied flags and personalized order."""
    seeker_id = _seeker_id(user)
    try:
        rows = job_search_repo.search(
            db,
            search_term=search_term,
            location=location,
            industry=industry,
            job_type=job_type,
            seeker_user_id=seeker_id,
        )
        saved, applied = job_search_repo.seeker_flags(db, seeker_id)
        logger.debug("GET /jobs seeker=%s count=%d", seeker_id, len(rows))
        return ActionResult(data=[_job_to_listing(j, p, s, saved, applied) for j, p, s in rows])
    except Exception as e:
        logger.exception("Job search failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch job listings",
        ) from e


def _active_job_or_404(db: Session, job_id: str):
    row = job_search_repo.get_active(db, job_id)
    if row is None:
        raise NotFoundError(JOB_UNAVAILABLE_MESSAGE)
    return row


@router.get("/{job_id}", response_model=ActionResult)
def job_detail(
    job_id: str,
    db: Session = Depends(get_db),
    user: User | None = Depends(get_optional_user),
):
    job, profile = _active_job_or_404(db, job_id)
    seeker_id = _seeker_id(user)
    saved, applied = job_search_repo.seeker_flags(db, seeker_id)
    resume_url = None
    if seeker_id:
        seeker_profile = get_seeker_profile(db, seeker_id)
        resume_url = seeker_profile.resume_url if seeker_profile else None
    detail = JobDetail(
        **{name: getattr(job, name) for name in JobDetail.model_fields if hasattr(job, name)},
        company=CompanyInfo.from_job(job, profile),
        is_saved=job.id in saved,
        is_applied=job.id in applied,
        job_seeker_resume_url=resume_url,
    )
    return ActionResult(data=detail)


@router.get("/{job_id}/similar", response_model=ActionResult)
def similar_jobs(job_id: str, db: Session = Depends(get_db)):
    job, _ = _active_job_or_404(db, job_id)
    rows = job_search_repo.similar(db, job, limit=settings.similar_jobs_limit)
    return ActionResult(data=[_job_to_suggestion(j, p) for j, p in rows])


@router.get("/{job_id}/company-jobs", response_model=ActionResult)
def company_jobs(job_id: str, db: Session = Depends(get_db)):
    job, _ = _active_job_or_404(db, job_id)
    rows = job_search_repo.company_jobs(db, job, limit=settings.company_jobs_limit)
    return ActionResult(data=[_job_to_suggestion(j, p) for j, p in rows])


@router.post("/{job_id}/save", response_model=ActionResult)
def save_job(
    job_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_job_seeker),
):
    try:
        created = saved_job_repo.save(db, user.id, job_id)
        return ActionResult(message="Job saved successfully." if created else "Job is already saved.")
    except JobBoardError:
        raise
    except Exception as e:
        logger.exception("Save job failed for job=%s seeker=%s: %s", job_id, user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save job") from e


@router.delete("/{job_id}/save", response_model=ActionResult)
def unsave_job(
    job_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_job_seeker),
):
    try:
        removed = saved_job_repo.unsave(db, user.id, job_id)
        return ActionResult(
            message="Job removed from your saved list." if removed else "Job was not in your saved list."
        )
    except Exception as e:
        logger.exception("Unsave job failed for job=%s seeker=%s: %s", job_id, user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to unsave job") from e


@router.post("/{job_id}/apply", response_model=ActionResult, status_code=status.HTTP_201_CREATED)
def apply_to_job(
    job_id: str,
    data: ApplicationCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_job_seeker),
):
    try:
        application = application_repo.submit(db, job_id, user.id, data)
        return ActionResult(
            message="Application submitted successfully.",
            data={"application_id": application.id, "status": application.status.value},
        )
    except JobBoardError:
        raise
    except Exception as e:
        logger.exception("Apply failed for job=%s seeker=%s: %s", job_id, user.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit application",
        ) from e
