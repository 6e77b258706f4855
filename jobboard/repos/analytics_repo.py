import logging
from datetime import date, datetime, time, timedelta, timezone

from sqlalchemy import and_, case, func
from sqlalchemy.orm import Session

from jobboard.config import settings
from jobboard.core.errors import InvalidOperationError
from jobboard.models.job import Job
from jobboard.models.job_application import JobApplication
from jobboard.models.types import ApplicationStatus, JobStatus

logger = logging.getLogger(__name__)

INVALID_RANGE_MESSAGE = "Invalid date range: 'from' date cannot be after 'to' date."

S = ApplicationStatus
# Stage sets are nested so counts never increase along the funnel.
FUNNEL_STAGES: list[tuple[str, set[ApplicationStatus]]] = [
    ("Applied", set(S)),
    ("Reviewed", {S.VIEWED, S.SHORTLISTED, S.INTERVIEWING, S.HIRED}),
    ("Shortlisted", {S.SHORTLISTED, S.INTERVIEWING, S.HIRED}),
    ("Interviewing", {S.INTERVIEWING, S.HIRED}),
    ("Hired", {S.HIRED}),
]


class DateRange:
    """Inclusive day range, expanded to start-of-day / end-of-day bounds."""

    def __init__(self, first_day: date, last_day: date, explicit: bool):
        self.first_day = first_day
        self.last_day = last_day
        self.explicit = explicit

    @property
    def start(self) -> datetime:
        return datetime.combine(self.first_day, time.min)

    @property
    def end(self) -> datetime:
        return datetime.combine(self.last_day, time.max)

    def days(self) -> list[date]:
        span = (self.last_day - self.first_day).days
        return [self.first_day + timedelta(days=i) for i in range(span + 1)]


def resolve_range(
    date_from: date | None,
    date_to: date | None,
    today: date | None = None,
) -> DateRange:
    """
    Explicit range only when both ends are given; otherwise the trailing
    default window ending today.
    """
    if date_from and date_to and date_from > date_to:
        raise InvalidOperationError(INVALID_RANGE_MESSAGE)
    if date_from and date_to:
        return DateRange(date_from, date_to, explicit=True)
    # applied_at defaults to UTC, so the trailing window ends on the UTC date.
    today = today or datetime.now(timezone.utc).date()
    first = today - timedelta(days=settings.analytics_default_days - 1)
    return DateRange(first, today, explicit=False)


def _employer_applications(db: Session, employer_user_id: str, *columns):
    return (
        db.query(*columns)
        .select_from(JobApplication)
        .join(Job, Job.id == JobApplication.job_id)
        .filter(Job.employer_user_id == employer_user_id)
    )


def _in_range(q, rng: DateRange):
    return q.filter(JobApplication.applied_at >= rng.start, JobApplication.applied_at <= rng.end)


def key_metrics(db: Session, employer_user_id: str, rng: DateRange) -> dict:
    jobs = db.query(Job).filter(Job.employer_user_id == employer_user_id)
    result = {
        "total_active_jobs": jobs.filter(Job.status == JobStatus.ACTIVE).count(),
        "total_jobs_ever_posted": jobs.count(),
        "total_applications_ever_received": _employer_applications(
            db, employer_user_id, func.count(JobApplication.id)
        ).scalar() or 0,
    }
    if rng.explicit:
        result["applications_in_period"] = _in_range(
            _employer_applications(db, employer_user_id, func.count(JobApplication.id)), rng
        ).scalar() or 0
    return result


def _day_label(d: date) -> str:
    return f"{d:%b} {d.day}"


def applications_trend(db: Session, employer_user_id: str, rng: DateRange) -> list[dict]:
    """Daily application counts for every day in the range, zero-filled."""
    day = func.date(JobApplication.applied_at)
    rows = (
        _in_range(_employer_applications(db, employer_user_id, day, func.count(JobApplication.id)), rng)
        .group_by(day)
        .all()
    )
    # date() yields a string on SQLite and a date on PostgreSQL.
    counts = {str(d)[:10]: c for d, c in rows if d is not None}
    return [{"date": _day_label(d), "count": counts.get(d.isoformat(), 0)} for d in rng.days()]


def funnel(db: Session, employer_user_id: str, rng: DateRange) -> list[dict]:
    rows = (
        _in_range(
            _employer_applications(db, employer_user_id, JobApplication.status, func.count(JobApplication.id)),
            rng,
        )
        .group_by(JobApplication.status)
        .all()
    )
    by_status = {status: count for status, count in rows}
    return [
        {"stage": name, "count": sum(by_status.get(s, 0) for s in statuses)}
        for name, statuses in FUNNEL_STAGES
    ]


def top_jobs(db: Session, employer_user_id: str, rng: DateRange, limit: int | None = None) -> list[dict]:
    limit = limit or settings.top_jobs_limit
    join_on = [JobApplication.job_id == Job.id]
    if rng.explicit:
        join_on += [JobApplication.applied_at >= rng.start, JobApplication.applied_at <= rng.end]
    applications = func.count(JobApplication.id)
    hired = func.coalesce(func.sum(case((JobApplication.status == ApplicationStatus.HIRED, 1), else_=0)), 0)
    rows = (
        db.query(Job.id, Job.job_title, Job.status, applications.label("applications"), hired.label("hired"))
        .outerjoin(JobApplication, and_(*join_on))
        .filter(Job.employer_user_id == employer_user_id)
        .group_by(Job.id, Job.job_title, Job.status, Job.created_at)
        .order_by(applications.desc(), hired.desc(), Job.created_at.desc())
        .limit(limit)
        .all()
    )
    return [
        {"id": r.id, "title": r.job_title, "status": r.status, "applications": r.applications or 0, "hired": r.hired or 0}
        for r in rows
    ]
