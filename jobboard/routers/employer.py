import logging
from datetime import date
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from jobboard.config import settings
from jobboard.core.errors import JobBoardError
from jobboard.database import get_db
from jobboard.dependencies import require_employer
from jobboard.models.user import User
from jobboard.repos import analytics_repo
from jobboard.repos.employer_profile_repo import get_by_user_id, save as save_profile
from jobboard.schemas.analytics import FunnelStage, KeyMetrics, TopJob, TrendPoint
from jobboard.schemas.common import ActionResult
from jobboard.schemas.employer_profile import (
    EmployerProfileResponse,
    EmployerProfileUpdate,
    QrCodeResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/employer", tags=["employer"])


@router.get("/profile", response_model=ActionResult)
def get_profile(
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    profile = get_by_user_id(db, user.id)
    if profile is None:
        return ActionResult(data=None)
    return ActionResult(data=EmployerProfileResponse.model_validate(profile))


@router.put("/profile", response_model=ActionResult)
def update_profile(
    data: EmployerProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    try:
        profile, created = save_profile(db, user.id, data)
        message = (
            "Company profile created successfully."
            if created
            else "Company profile updated successfully."
        )
        return ActionResult(message=message, data=EmployerProfileResponse.model_validate(profile))
    except JobBoardError:
        raise
    except Exception as e:
        logger.exception("Employer profile save failed for user=%s: %s", user.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save company profile",
        ) from e


def build_qr_code(user_id: str, company_name: str | None = None) -> QrCodeResponse:
    """URLs only; the QR image is rendered by the external service on demand."""
    login_url = f"{settings.frontend_base_url.rstrip('/')}/login-with-qr?{urlencode({'userId': user_id})}"
    query = urlencode({"data": login_url, "size": settings.qr_code_size, "format": "png"})
    return QrCodeResponse(
        login_url=login_url,
        image_url=f"{settings.qr_code_api_url}?{query}",
        company_name=company_name,
    )


@router.get("/qr-code", response_model=ActionResult)
def qr_code(
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    profile = get_by_user_id(db, user.id)
    return ActionResult(data=build_qr_code(user.id, profile.company_name if profile else None))


@router.get("/analytics/key-metrics", response_model=ActionResult)
def key_metrics(
    date_from: date | None = None,
    date_to: date | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    rng = analytics_repo.resolve_range(date_from, date_to)
    try:
        metrics = KeyMetrics(**analytics_repo.key_metrics(db, user.id, rng))
        return ActionResult(data=metrics.model_dump(exclude_none=True))
    except Exception as e:
        logger.exception("Key metrics failed for employer=%s: %s", user.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch key metrics",
        ) from e


@router.get("/analytics/applications-trend", response_model=ActionResult)
def applications_trend(
    date_from: date | None = None,
    date_to: date | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    rng = analytics_repo.resolve_range(date_from, date_to)
    try:
        points = analytics_repo.applications_trend(db, user.id, rng)
        return ActionResult(data=[TrendPoint(**p) for p in points])
    except Exception as e:
        logger.exception("Applications trend failed for employer=%s: %s", user.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch applications trend",
        ) from e


@router.get("/analytics/funnel", response_model=ActionResult)
def funnel(
    date_from: date | None = None,
    date_to: date | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    rng = analytics_repo.resolve_range(date_from, date_to)
    try:
        return ActionResult(data=[FunnelStage(**s) for s in analytics_repo.funnel(db, user.id, rng)])
    except Exception as e:
        logger.exception("Funnel failed for employer=%s: %s", user.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch hiring funnel",
        ) from e


@router.get("/analytics/top-jobs", response_model=ActionResult)
def top_jobs(
    date_from: date | None = None,
    date_to: date | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    rng = analytics_repo.resolve_range(date_from, date_to)
    try:
        return ActionResult(data=[TopJob(**j) for j in analytics_repo.top_jobs(db, user.id, rng)])
    except Exception as e:
        logger.exception("Top jobs failed for employer=%s: %s", user.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch top jobs",
        ) from e
