import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from jobboard.core.errors import JobBoardError, NotFoundError
from jobboard.database import get_db
from jobboard.dependencies import require_employer
from jobboard.models.user import User
from jobboard.repos import application_repo, job_repo
from jobboard.schemas.application import (
    Applicant,
    ApplicationStatusUpdate,
    JobWithApplicationCount,
)
from jobboard.schemas.common import ActionResult
from jobboard.schemas.job import JobCreate, JobResponse, JobStatusUpdate, JobTableRow

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/employer", tags=["employer-jobs"])


def _applicant(application, job, seeker, profile) -> Applicant:
    """Flatten an application with its job and the seeker's profile."""
    p = profile
    return Applicant(
        application_id=application.id,
        job_id=job.id,
        job_title=job.job_title,
        job_seeker_user_id=seeker.id,
        job_seeker_name=(p.full_name if p and p.full_name else seeker.email),
        job_seeker_email=seeker.email,
        applied_at=application.applied_at,
        status=application.status,
        resume_url=application.resume_url,
        custom_question_answers=application.custom_question_answers or [],
        employer_remarks=application.employer_remarks,
        profile_picture_url=p.profile_picture_url if p else None,
        phone_number=p.phone_number if p else None,
        gender=p.gender if p else None,
        location=p.current_city if p else None,
        portfolio_url=p.portfolio_url if p else None,
        github_profile_url=p.github_profile_url if p else None,
        skills=(p.skills or []) if p else [],
        professional_summary=p.professional_summary if p else None,
        current_designation=p.current_designation if p else None,
        current_industry=p.current_industry if p else None,
        current_industry_type=p.current_industry_type if p else None,
        total_experience=p.total_experience if p else None,
        present_salary=p.present_salary if p else None,
        current_working_location=application.current_working_location,
        expected_salary=application.expected_salary,
        notice_period=application.notice_period,
    )


@router.post("/jobs", response_model=ActionResult, status_code=status.HTTP_201_CREATED)
def create_job(
    data: JobCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    try:
        job = job_repo.save(db, user.id, data)
        return ActionResult(message="Job posted successfully.", data=JobResponse.model_validate(job))
    except JobBoardError:
        raise
    except Exception as e:
        logger.exception("Job create failed for employer=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to post job") from e


@router.put("/jobs/{job_id}", response_model=ActionResult)
def update_job(
    job_id: str,
    data: JobCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    try:
        job = job_repo.save(db, user.id, data, job_id=job_id)
        return ActionResult(message="Job updated successfully.", data=JobResponse.model_validate(job))
    except JobBoardError:
        raise
    except Exception as e:
        logger.exception("Job update failed for job=%s: %s", job_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update job") from e


@router.get("/jobs", response_model=ActionResult)
def list_jobs(
    status_filter: str = Query("all", alias="status"),
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    """status: all, draft, active or closed."""
    jobs = job_repo.list_by_status(db, user.id, status_filter)
    return ActionResult(data=[JobTableRow.model_validate(j) for j in jobs])


@router.get("/jobs/{job_id}", response_model=ActionResult)
def get_job(
    job_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    job = job_repo.get_owned(db, job_id, user.id)
    if job is None:
        raise NotFoundError("Job not found or you do not have permission to view it.")
    return ActionResult(data=JobResponse.model_validate(job))


@router.patch("/jobs/{job_id}/status", response_model=ActionResult)
def update_job_status(
    job_id: str,
    data: JobStatusUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    try:
        job = job_repo.update_status(db, job_id, user.id, data.status)
        return ActionResult(
            message=f"Job status updated to {job.status.value}.",
            data=JobTableRow.model_validate(job),
        )
    except JobBoardError:
        raise
    except Exception as e:
        logger.exception("Job status update failed for job=%s: %s", job_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update job status",
        ) from e


@router.delete("/jobs/{job_id}", response_model=ActionResult)
def delete_job(
    job_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    try:
        removed = job_repo.delete(db, job_id, user.id)
        return ActionResult(message="Job deleted successfully.", data=removed)
    except JobBoardError:
        raise
    except Exception as e:
        logger.exception("Job delete failed for job=%s: %s", job_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete job") from e


@router.get("/applications/jobs", response_model=ActionResult)
def jobs_with_application_counts(
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    rows = job_repo.list_with_application_counts(db, user.id)
    return ActionResult(
        data=[
            JobWithApplicationCount(
                id=job.id,
                job_title=job.job_title,
                status=job.status,
                created_at=job.created_at,
                total_applications=count,
            )
            for job, count in rows
        ]
    )


@router.get("/jobs/{job_id}/applications", response_model=ActionResult)
def job_applications(
    job_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    rows = application_repo.list_for_job(db, job_id, user.id)
    return ActionResult(data=[_applicant(*row) for row in rows])


@router.get("/applications/{application_id}", response_model=ActionResult)
def application_detail(
    application_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    row = application_repo.get_for_employer(db, application_id, user.id)
    return ActionResult(data=_applicant(*row))


@router.patch("/applications/{application_id}/status", response_model=ActionResult)
def update_application_status(
    application_id: str,
    data: ApplicationStatusUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    try:
        application = application_repo.update_status(db, application_id, user.id, data.status, data.remarks)
        return ActionResult(
            message="Application status updated successfully.",
            data={
                "application_id": application.id,
                "status": application.status.value,
                "employer_remarks": application.employer_remarks,
            },
        )
    except JobBoardError:
        raise
    except Exception as e:
        logger.exception("Application status update failed for application=%s: %s", application_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update application status",
        ) from e
