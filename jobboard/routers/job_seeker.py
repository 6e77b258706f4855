import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from jobboard.core.errors import JobBoardError
from jobboard.database import get_db
from jobboard.dependencies import require_job_seeker
from jobboard.models.user import User
from jobboard.repos import application_repo, saved_job_repo
from jobboard.repos.job_seeker_profile_repo import get_by_user_id, save as save_profile, update_resume
from jobboard.schemas.application import AppliedJob, SavedJobItem
from jobboard.schemas.common import ActionResult
from jobboard.schemas.job import CompanyInfo
from jobboard.schemas.job_seeker_profile import JobSeekerProfileResponse, JobSeekerProfileUpdate, ResumeUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/job-seeker", tags=["job-seeker"])


@router.get("/applications", response_model=ActionResult)
def my_applications(
    db: Session = Depends(get_db),
    user: User = Depends(require_job_seeker),
):
    rows = application_repo.list_for_seeker(db, user.id)
    return ActionResult(
        data=[
            AppliedJob(
                application_id=application.id,
                job_id=job.id,
                job_title=job.job_title,
                company_name=CompanyInfo.from_job(job, profile).company_name,
                job_location=job.job_location,
                applied_at=application.applied_at,
                status=application.status,
                employer_remarks=application.employer_remarks,
                custom_question_answers=application.custom_question_answers or [],
            )
            for application, job, profile in rows
        ]
    )


@router.delete("/applications/{application_id}", response_model=ActionResult)
def withdraw_application(
    application_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_job_seeker),
):
    try:
        application_repo.withdraw(db, application_id, user.id)
        return ActionResult(message="Application withdrawn successfully.")
    except JobBoardError:
        raise
    except Exception as e:
        logger.exception("Withdraw failed for application=%s: %s", application_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to withdraw application",
        ) from e


@router.get("/saved-jobs", response_model=ActionResult)
def my_saved_jobs(
    db: Session = Depends(get_db),
    user: User = Depends(require_job_seeker),
):
    items = []
    for saved, job, profile, applied in saved_job_repo.list_for_seeker(db, user.id):
        company = CompanyInfo.from_job(job, profile)
        items.append(
            SavedJobItem(
                job_id=job.id,
                job_title=job.job_title,
                company_name=company.company_name,
                company_logo_url=company.company_logo_url,
                job_location=job.job_location,
                status=job.status,
                saved_at=saved.saved_at,
                is_applied=applied,
            )
        )
    return ActionResult(data=items)


@router.get("/profile", response_model=ActionResult)
def get_profile(
    db: Session = Depends(get_db),
    user: User = Depends(require_job_seeker),
):
    profile = get_by_user_id(db, user.id)
    if profile is None:
        return ActionResult(data=None)
    return ActionResult(data=JobSeekerProfileResponse.from_profile(profile, email=user.email))


@router.put("/profile", response_model=ActionResult)
def update_profile(
    data: JobSeekerProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_job_seeker),
):
    try:
        profile = save_profile(db, user.id, data)
        return ActionResult(
            message="Profile saved successfully.",
            data=JobSeekerProfileResponse.from_profile(profile, email=user.email),
        )
    except JobBoardError:
        raise
    except Exception as e:
        logger.exception("Job seeker profile save failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save profile") from e


@router.put("/profile/resume", response_model=ActionResult)
def update_profile_resume(
    data: ResumeUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_job_seeker),
):
    try:
        profile, _ = update_resume(db, user.id, data.resume_url)
        message = "Resume updated successfully." if profile.resume_url else "Resume removed."
        return ActionResult(message=message, data={"resume_url": profile.resume_url})
    except Exception as e:
        logger.exception("Resume update failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update resume") from e
