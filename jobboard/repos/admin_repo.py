"""Admin-specific repository functions for platform stats and account lookup."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from jobboard.core.errors import InvalidOperationError
from jobboard.models.employer_profile import EmployerProfile
from jobboard.models.job import Job
from jobboard.models.job_application import JobApplication
from jobboard.models.job_seeker_profile import JobSeekerProfile
from jobboard.models.saved_job import SavedJob
from jobboard.models.types import JobStatus, UserRole
from jobboard.models.user import User
from jobboard.repos.analytics_repo import DateRange

EMPLOYER_SEARCH_TYPES = {"email", "user_id", "company_name"}
JOB_SEEKER_SEARCH_TYPES = {"email", "user_id", "full_name", "phone_number"}
EMPLOYER_RECENT_JOBS = 10


def _count(db: Session, column, *criteria) -> int:
    return db.query(func.count(column)).filter(*criteria).scalar() or 0


def get_stats(db: Session, rng: DateRange | None = None) -> dict:
    """Platform totals; per-period counts are added when a range is given."""
    stats = {
        "users_total": _count(db, User.id),
        "employers": _count(db, User.id, User.role == UserRole.EMPLOYER),
        "job_seekers": _count(db, User.id, User.role == UserRole.JOB_SEEKER),
        "admins": _count(db, User.id, User.is_admin.is_(True)),
        "jobs_total": _count(db, Job.id),
        "active_jobs": _count(db, Job.id, Job.status == JobStatus.ACTIVE),
        "applications": _count(db, JobApplication.id),
        "saved_jobs": _count(db, SavedJob.id),
    }
    if rng is not None:
        stats["period"] = {
            "from": rng.first_day.isoformat(),
            "to": rng.last_day.isoformat(),
            "new_users": _count(db, User.id, User.created_at >= rng.start, User.created_at <= rng.end),
            "jobs_posted": _count(db, Job.id, Job.created_at >= rng.start, Job.created_at <= rng.end),
            "applications": _count(
                db,
                JobApplication.id,
                JobApplication.applied_at >= rng.start,
                JobApplication.applied_at <= rng.end,
            ),
        }
    return stats


def search_employers(db: Session, search_type: str, q: str) -> list[tuple[User, EmployerProfile | None, list[Job]]]:
    if search_type not in EMPLOYER_SEARCH_TYPES:
        raise InvalidOperationError(f"Invalid search type: {search_type}")
    term = (q or "").strip()
    if not term:
        return []
    query = (
        db.query(User, EmployerProfile)
        .outerjoin(EmployerProfile, EmployerProfile.user_id == User.id)
        .filter(User.role == UserRole.EMPLOYER)
    )
    if search_type == "email":
        query = query.filter(User.email.ilike(f"%{term}%"))
    elif search_type == "user_id":
        query = query.filter(User.id == term)
    else:
        query = query.filter(EmployerProfile.company_name.ilike(f"%{term}%"))

    results = []
    for user, profile in query.order_by(User.created_at.desc()).all():
        jobs = (
            db.query(Job)
            .filter(Job.employer_user_id == user.id)
            .order_by(Job.created_at.desc())
            .limit(EMPLOYER_RECENT_JOBS)
            .all()
        )
        results.append((user, profile, jobs))
    return results


def search_job_seekers(
    db: Session, search_type: str, q: str
) -> list[tuple[User, JobSeekerProfile | None, list[tuple[JobApplication, Job]], list[tuple[SavedJob, Job]]]]:
    if search_type not in JOB_SEEKER_SEARCH_TYPES:
        raise InvalidOperationError(f"Invalid search type: {search_type}")
    term = (q or "").strip()
    if not term:
        return []
    query = (
        db.query(User, JobSeekerProfile)
        .outerjoin(JobSeekerProfile, JobSeekerProfile.user_id == User.id)
        .filter(User.role == UserRole.JOB_SEEKER)
    )
    if search_type == "email":
        query = query.filter(User.email.ilike(f"%{term}%"))
    elif search_type == "user_id":
        query = query.filter(User.id == term)
    elif search_type == "full_name":
        query = query.filter(JobSeekerProfile.full_name.ilike(f"%{term}%"))
    else:
        query = query.filter(JobSeekerProfile.phone_number.ilike(f"%{term}%"))

    results = []
    for user, profile in query.order_by(User.created_at.desc()).all():
        applications = (
            db.query(JobApplication, Job)
            .join(Job, Job.id == JobApplication.job_id)
            .filter(JobApplication.job_seeker_user_id == user.id)
            .order_by(JobApplication.applied_at.desc())
            .all()
        )
        saved = (
            db.query(SavedJob, Job)
            .join(Job, Job.id == SavedJob.job_id)
            .filter(SavedJob.job_seeker_user_id == user.id)
            .order_by(SavedJob.saved_at.desc())
            .all()
        )
        results.append((user, profile, applications, saved))
    return results
