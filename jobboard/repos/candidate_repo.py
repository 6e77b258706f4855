import logging

from sqlalchemy import String, and_, cast, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from jobboard.core.errors import ConflictError, NotFoundError
from jobboard.core.security import generate_id
from jobboard.models.candidate import CandidateWatchlistEntry, SavedSearch
from jobboard.models.job_seeker_profile import JobSeekerProfile
from jobboard.models.types import UserRole
from jobboard.models.user import User
from jobboard.schemas.candidate import ALL_GENDERS, ALL_INDUSTRY_TYPES, CandidateFilters

logger = logging.getLogger(__name__)

WATCHLIST_DUPLICATE_MESSAGE = "Candidate already in watchlist"


def _text(column):
    return func.coalesce(column, "")


def _skills_text():
    return func.coalesce(cast(JobSeekerProfile.skills, String), "")


def search(db: Session, filters: CandidateFilters) -> tuple[list[tuple[User, JobSeekerProfile]], int]:
    """Job seekers with a named profile matching the filters. Returns (page rows, total)."""
    q = (
        db.query(User, JobSeekerProfile)
        .join(JobSeekerProfile, JobSeekerProfile.user_id == User.id)
        .filter(User.role == UserRole.JOB_SEEKER, JobSeekerProfile.full_name.isnot(None))
    )

    keywords = [k.strip() for k in filters.keywords if k and k.strip()]
    if keywords:
        q = q.filter(
            or_(
                *[
                    or_(
                        JobSeekerProfile.full_name.ilike(f"%{k}%"),
                        JobSeekerProfile.current_designation.ilike(f"%{k}%"),
                        _skills_text().ilike(f"%{k}%"),
                    )
                    for k in keywords
                ]
            )
        )
    for k in (k.strip() for k in filters.excluded_keywords if k and k.strip()):
        q = q.filter(
            and_(
                ~_text(JobSeekerProfile.full_name).ilike(f"%{k}%"),
                ~_text(JobSeekerProfile.current_designation).ilike(f"%{k}%"),
                ~_skills_text().ilike(f"%{k}%"),
            )
        )
    if filters.designation and filters.designation.strip():
        q = q.filter(JobSeekerProfile.current_designation.ilike(f"%{filters.designation.strip()}%"))
    for skill in (s.strip() for s in filters.skills if s and s.strip()):
        q = q.filter(_skills_text().ilike(f"%{skill}%"))

    locations = [loc.strip() for loc in filters.locations if loc and loc.strip()]
    if locations:
        conditions = [JobSeekerProfile.current_city.ilike(f"%{loc}%") for loc in locations]
        if filters.include_relocating:
            conditions += [
                cast(JobSeekerProfile.preferred_locations, String).ilike(f"%{loc}%") for loc in locations
            ]
        q = q.filter(or_(*conditions))

    if filters.min_experience is not None:
        q = q.filter(JobSeekerProfile.total_experience >= filters.min_experience)
    if filters.max_experience is not None:
        q = q.filter(JobSeekerProfile.total_experience <= filters.max_experience)
    if filters.gender and filters.gender != ALL_GENDERS:
        q = q.filter(JobSeekerProfile.gender == filters.gender)
    if filters.industry and filters.industry.strip():
        q = q.filter(JobSeekerProfile.current_industry.ilike(f"%{filters.industry.strip()}%"))
    if filters.industry_type and filters.industry_type != ALL_INDUSTRY_TYPES:
        q = q.filter(JobSeekerProfile.current_industry_type == filters.industry_type)

    total = q.count()
    rows = (
        q.order_by(JobSeekerProfile.updated_at.desc())
        .offset((filters.page - 1) * filters.limit)
        .limit(filters.limit)
        .all()
    )
    logger.debug("Candidate search matched %d profiles", total)
    return [(user, profile) for user, profile in rows], total


def get_candidate(db: Session, user_id: str) -> tuple[User, JobSeekerProfile]:
    row = (
        db.query(User, JobSeekerProfile)
        .join(JobSeekerProfile, JobSeekerProfile.user_id == User.id)
        .options(
            selectinload(JobSeekerProfile.education_details),
            selectinload(JobSeekerProfile.experience_details),
        )
        .filter(User.id == user_id, User.role == UserRole.JOB_SEEKER)
        .first()
    )
    if row is None:
        raise NotFoundError("Candidate not found.")
    return row[0], row[1]


def list_watchlist(db: Session, employer_user_id: str) -> list[tuple[User, JobSeekerProfile]]:
    return (
        db.query(User, JobSeekerProfile)
        .join(CandidateWatchlistEntry, CandidateWatchlistEntry.candidate_user_id == User.id)
        .join(JobSeekerProfile, JobSeekerProfile.user_id == User.id)
        .filter(CandidateWatchlistEntry.employer_user_id == employer_user_id)
        .order_by(CandidateWatchlistEntry.created_at.desc())
        .all()
    )


def add_to_watchlist(db: Session, employer_user_id: str, candidate_user_id: str) -> CandidateWatchlistEntry:
    candidate = (
        db.query(User.id)
        .filter(User.id == candidate_user_id, User.role == UserRole.JOB_SEEKER)
        .first()
    )
    if candidate is None:
        raise NotFoundError("Candidate not found.")
    entry = CandidateWatchlistEntry(
        id=generate_id(),
        employer_user_id=employer_user_id,
        candidate_user_id=candidate_user_id,
    )
    db.add(entry)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(WATCHLIST_DUPLICATE_MESSAGE) from e
    db.refresh(entry)
    return entry


def remove_from_watchlist(db: Session, employer_user_id: str, candidate_user_id: str) -> None:
    deleted = (
        db.query(CandidateWatchlistEntry)
        .filter(
            CandidateWatchlistEntry.employer_user_id == employer_user_id,
            CandidateWatchlistEntry.candidate_user_id == candidate_user_id,
        )
        .delete(synchronize_session=False)
    )
    if not deleted:
        db.rollback()
        raise NotFoundError("Candidate not in watchlist.")
    db.commit()


def list_saved_searches(db: Session, user_id: str) -> list[SavedSearch]:
    return (
        db.query(SavedSearch)
        .filter(SavedSearch.user_id == user_id)
        .order_by(SavedSearch.created_at.desc())
        .all()
    )


def create_saved_search(db: Session, user_id: str, name: str, filters: dict) -> SavedSearch:
    search_row = SavedSearch(id=generate_id(), user_id=user_id, name=name.strip(), filters=filters)
    db.add(search_row)
    db.commit()
    db.refresh(search_row)
    logger.info("User %s saved candidate search %s", user_id, search_row.id)
    return search_row


def delete_saved_search(db: Session, user_id: str, search_id: str) -> None:
    deleted = (
        db.query(SavedSearch)
        .filter(SavedSearch.id == search_id, SavedSearch.user_id == user_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        db.rollback()
        raise NotFoundError("Saved search not found.")
    db.commit()
