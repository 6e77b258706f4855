import logging
import math
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from jobboard.core.errors import JobBoardError
from jobboard.database import get_db
from jobboard.dependencies import require_employer
from jobboard.models.user import User
from jobboard.repos import candidate_repo
from jobboard.schemas.candidate import (
    CandidateFilters,
    CandidatePage,
    CandidateSummary,
    SavedSearchCreate,
    SavedSearchResponse,
    WatchlistAdd,
)
from jobboard.schemas.common import ActionResult
from jobboard.schemas.job_seeker_profile import JobSeekerProfileResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/employer", tags=["candidates"])


def age_from_dob(dob: str | None, today: date | None = None) -> int | None:
    if not dob:
        return None
    try:
        born = date.fromisoformat(dob)
    except ValueError:
        return None
    today = today or date.today()
    return today.year - born.year - ((today.month, today.day) < (born.month, born.day))


def _candidate_summary(user, profile) -> CandidateSummary:
    return CandidateSummary(
        id=user.id,
        name=profile.full_name or user.email,
        email=user.email,
        designation=profile.current_designation,
        experience=profile.total_experience,
        location=profile.current_city,
        skills=profile.skills or [],
        industry=profile.current_industry,
        gender=profile.gender,
        age=age_from_dob(profile.date_of_birth),
        profile_picture_url=profile.profile_picture_url,
        preferred_locations=profile.preferred_locations or [],
        resume_url=profile.resume_url,
    )


@router.get("/candidates", response_model=ActionResult)
def search_candidates(
    filters: Annotated[CandidateFilters, Query()],
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    try:
        rows, total = candidate_repo.search(db, filters)
        page = CandidatePage(
            items=[_candidate_summary(u, p) for u, p in rows],
            total=total,
            page=filters.page,
            limit=filters.limit,
            total_pages=math.ceil(total / filters.limit) if total else 0,
        )
        return ActionResult(data=page)
    except Exception as e:
        logger.exception("Candidate search failed for employer=%s: %s", user.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to search candidates",
        ) from e


@router.get("/candidates/{user_id}", response_model=ActionResult)
def candidate_detail(
    user_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    candidate, profile = candidate_repo.get_candidate(db, user_id)
    return ActionResult(data=JobSeekerProfileResponse.from_profile(profile, email=candidate.email))


@router.get("/watchlist", response_model=ActionResult)
def get_watchlist(
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    rows = candidate_repo.list_watchlist(db, user.id)
    return ActionResult(data=[_candidate_summary(u, p) for u, p in rows])


@router.post("/watchlist", response_model=ActionResult, status_code=status.HTTP_201_CREATED)
def add_to_watchlist(
    data: WatchlistAdd,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    try:
        candidate_repo.add_to_watchlist(db, user.id, data.candidate_id)
        return ActionResult(message="Candidate added to watchlist.")
    except JobBoardError:
        raise
    except Exception as e:
        logger.exception("Watchlist add failed for employer=%s: %s", user.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add candidate to watchlist",
        ) from e


@router.delete("/watchlist/{candidate_id}", response_model=ActionResult)
def remove_from_watchlist(
    candidate_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    candidate_repo.remove_from_watchlist(db, user.id, candidate_id)
    return ActionResult(message="Candidate removed from watchlist.")


@router.get("/saved-searches", response_model=ActionResult)
def get_saved_searches(
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    rows = candidate_repo.list_saved_searches(db, user.id)
    return ActionResult(data=[SavedSearchResponse.model_validate(s) for s in rows])


@router.post("/saved-searches", response_model=ActionResult, status_code=status.HTTP_201_CREATED)
def create_saved_search(
    data: SavedSearchCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    try:
        saved = candidate_repo.create_saved_search(db, user.id, data.name, data.filters)
        return ActionResult(message="Search saved.", data=SavedSearchResponse.model_validate(saved))
    except Exception as e:
        logger.exception("Saved search create failed for employer=%s: %s", user.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save search",
        ) from e


@router.delete("/saved-searches/{search_id}", response_model=ActionResult)
def delete_saved_search(
    search_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    candidate_repo.delete_saved_search(db, user.id, search_id)
    return ActionResult(message="Saved search deleted.")
