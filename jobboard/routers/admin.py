import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from jobboard.core.errors import JobBoardError
from jobboard.database import get_db
from jobboard.dependencies import get_current_admin
from jobboard.models.user import User
from jobboard.repos.admin_repo import get_stats, search_employers, search_job_seekers
from jobboard.repos.analytics_repo import resolve_range
from jobboard.schemas.common import ActionResult

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"])


def _user_to_response(u: User) -> dict:
    return {
        "id": u.id,
        "email": u.email,
        "role": u.role.value,
        "is_active": u.is_active,
        "is_admin": getattr(u, "is_admin", False),
        "created_at": u.created_at.isoformat() if u.created_at else None,
    }


def _job_to_response(j) -> dict:
    return {
        "id": j.id,
        "job_title": j.job_title,
        "status": j.status.value,
        "job_location": j.job_location,
        "created_at": j.created_at.isoformat() if j.created_at else None,
    }


@router.get("/stats")
def admin_stats(
    date_from: date | None = None,
    date_to: date | None = None,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Platform totals, plus per-period counts when both dates are given."""
    rng = resolve_range(date_from, date_to)
    try:
        return ActionResult(data=get_stats(db, rng if rng.explicit else None))
    except Exception as e:
        logger.exception("Admin stats failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load stats") from e


@router.get("/employers")
def admin_employers(
    search_type: str = "email",
    q: str = "",
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    try:
        results = search_employers(db, search_type, q)
    except JobBoardError:
        raise
    except Exception as e:
        logger.exception("Admin employer search failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to search employers") from e
    logger.info("Admin %s searched employers by %s: %d results", admin.email, search_type, len(results))
    return ActionResult(
        data=[
            {
                **_user_to_response(user),
                "company_name": profile.company_name if profile else None,
                "official_email": profile.official_email if profile else None,
                "contact_number": profile.contact_number if profile else None,
                "jobs": [_job_to_response(j) for j in jobs],
            }
            for user, profile, jobs in results
        ]
    )


@router.get("/job-seekers")
def admin_job_seekers(
    search_type: str = "email",
    q: str = "",
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    try:
        results = search_job_seekers(db, search_type, q)
    except JobBoardError:
        raise
    except Exception as e:
        logger.exception("Admin job seeker search failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to search job seekers") from e
    logger.info("Admin %s searched job seekers by %s: %d results", admin.email, search_type, len(results))
    return ActionResult(
        data=[
            {
                **_user_to_response(user),
                "full_name": profile.full_name if profile else None,
                "phone_number": profile.phone_number if profile else None,
                "applications": [
                    {
                        "application_id": application.id,
                        "status": application.status.value,
                        "applied_at": application.applied_at.isoformat() if application.applied_at else None,
                        "job": _job_to_response(job),
                    }
                    for application, job in applications
                ],
                "saved_jobs": [
                    {
                        "saved_at": saved_row.saved_at.isoformat() if saved_row.saved_at else None,
                        "job": _job_to_response(job),
                    }
                    for saved_row, job in saved
                ],
            }
            for user, profile, applications, saved in results
        ]
    )
