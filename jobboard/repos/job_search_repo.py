import logging

from sqlalchemy import String, case, cast, func, or_
from sqlalchemy.orm import Session

from jobboard.models.employer_profile import EmployerProfile
from jobboard.models.job import Job
from jobboard.models.job_application import JobApplication
from jobboard.models.job_seeker_profile import JobSeekerProfile
from jobboard.models.saved_job import SavedJob
from jobboard.models.types import JobStatus

logger = logging.getLogger(__name__)

ALL_INDUSTRIES_FILTER = "_all_industries_filter_"
ALL_JOB_TYPES_FILTER = "_all_job_types_filter_"
MAX_RANKED_SKILLS = 5


def _clean(term: str | None, sentinel: str | None = None) -> str | None:
    if term is None or not term.strip() or term == sentinel:
        return None
    return term.strip()


def personalization_score(profile: JobSeekerProfile):
    """
    SQL expression scoring a job against a seeker profile, or None when
    the profile has nothing to rank on.
    """
    terms = []
    if profile.current_designation:
        like = f"%{profile.current_designation}%"
        terms.append(case((or_(Job.job_title.ilike(like), Job.job_description.ilike(like)), 40), else_=0))
    if profile.current_department:
        terms.append(case((Job.job_description.ilike(f"%{profile.current_department}%"), 30), else_=0))
    if profile.current_industry:
        terms.append(case((Job.industry.ilike(f"%{profile.current_industry}%"), 20), else_=0))
    industry_type = profile.current_industry_type
    if industry_type and industry_type.lower() != "other":
        terms.append(case((Job.industry_type.ilike(f"%{industry_type}%"), 20), else_=0))
    locations = [loc for loc in (profile.preferred_locations or []) if loc]
    if locations:
        terms.append(case((Job.job_location.in_(locations), 15), else_=0))
    for skill in (profile.skills or [])[:MAX_RANKED_SKILLS]:
        terms.append(case((cast(Job.skills_required, String).ilike(f"%{skill}%"), 5), else_=0))
    if not terms:
        return None
    return sum(terms[1:], terms[0])


def seeker_flags(db: Session, seeker_user_id: str | None) -> tuple[set[str], set[str]]:
    """(saved job ids, applied job ids) for a seeker; empty for anonymous callers."""
    if not seeker_user_id:
        return set(), set()
    saved = {
        row[0]
        for row in db.query(SavedJob.job_id).filter(SavedJob.job_seeker_user_id == seeker_user_id)
    }
    applied = {
        row[0]
        for row in db.query(JobApplication.job_id).filter(JobApplication.job_seeker_user_id == seeker_user_id)
    }
    return saved, applied


def search(
    db: Session,
    *,
    search_term: str | None = None,
    location: str | None = None,
    industry: str | None = None,
    job_type: str | None = None,
    seeker_user_id: str | None = None,
) -> list[tuple[Job, EmployerProfile | None, int | None]]:
    """
    Active jobs matching the filters, as (job, employer profile, match score).
    Seekers with a profile get personalized ordering when no filter is set.
    """
    search_term = _clean(search_term)
    location = _clean(location)
    industry = _clean(industry, ALL_INDUSTRIES_FILTER)
    job_type = _clean(job_type, ALL_JOB_TYPES_FILTER)

    company = func.coalesce(EmployerProfile.company_name, Job.company_name)
    q = (
        db.query(Job, EmployerProfile)
        .outerjoin(EmployerProfile, EmployerProfile.user_id == Job.employer_user_id)
        .filter(Job.status == JobStatus.ACTIVE)
    )
    if search_term:
        like = f"%{search_term}%"
        q = q.filter(
            or_(
                Job.job_title.ilike(like),
                company.ilike(like),
                cast(Job.skills_required, String).ilike(like),
            )
        )
    if location:
        q = q.filter(Job.job_location.ilike(f"%{location}%"))
    if industry:
        like = f"%{industry}%"
        q = q.filter(or_(Job.industry.ilike(like), Job.industry_type.ilike(like)))
    if job_type:
        q = q.filter(Job.job_type.ilike(f"%{job_type}%"))

    score = None
    no_filters = not any((search_term, location, industry, job_type))
    if seeker_user_id and no_filters:
        profile = db.query(JobSeekerProfile).filter(JobSeekerProfile.user_id == seeker_user_id).first()
        if profile is not None:
            score = personalization_score(profile)

    if score is not None:
        rows = (
            q.add_columns(score.label("match_score"))
            .order_by(score.desc(), Job.created_at.desc())
            .all()
        )
        logger.debug("Personalized search for seeker %s: %d jobs", seeker_user_id, len(rows))
        return [(job, profile, int(match or 0)) for job, profile, match in rows]

    rows = q.order_by(Job.created_at.desc()).all()
    return [(job, profile, None) for job, profile in rows]


def get_active(db: Session, job_id: str) -> tuple[Job, EmployerProfile | None] | None:
    row = (
        db.query(Job, EmployerProfile)
        .outerjoin(EmployerProfile, EmployerProfile.user_id == Job.employer_user_id)
        .filter(Job.id == job_id, Job.status == JobStatus.ACTIVE)
        .first()
    )
    if row is None:
        return None
    return row[0], row[1]


def similar(db: Session, job: Job, limit: int = 10) -> list[tuple[Job, EmployerProfile | None]]:
    """Other active jobs sharing the industry (3 points) or industry type (2 points)."""
    match_type = bool(job.industry_type) and job.industry_type.lower() != "other"
    conditions = []
    if job.industry:
        conditions.append(Job.industry == job.industry)
    if match_type:
        conditions.append(Job.industry_type == job.industry_type)
    if not conditions:
        return []

    score = case((Job.industry == job.industry, 3), else_=0)
    if match_type:
        score = score + case((Job.industry_type == job.industry_type, 2), else_=0)
    return (
        db.query(Job, EmployerProfile)
        .outerjoin(EmployerProfile, EmployerProfile.user_id == Job.employer_user_id)
        .filter(Job.status == JobStatus.ACTIVE, Job.id != job.id, or_(*conditions))
        .order_by(score.desc(), Job.created_at.desc())
        .limit(limit)
        .all()
    )


def company_jobs(db: Session, job: Job, limit: int = 5) -> list[tuple[Job, EmployerProfile | None]]:
    return (
        db.query(Job, EmployerProfile)
        .outerjoin(EmployerProfile, EmployerProfile.user_id == Job.employer_user_id)
        .filter(
            Job.status == JobStatus.ACTIVE,
            Job.employer_user_id == job.employer_user_id,
            Job.id != job.id,
        )
        .order_by(Job.created_at.desc())
        .limit(limit)
        .all()
    )
