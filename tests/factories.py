from dataclasses import dataclass

from jobboard.models.types import UserRole
from jobboard.schemas.application import ApplicationCreate
from jobboard.schemas.job import JobCreate


@dataclass
class StubUser:
    id: str = "user-1"
    email: str = "user@example.com"
    role: UserRole = UserRole.JOB_SEEKER
    is_admin: bool = False
    is_active: bool = True
    password_hash: str = "hashed-password"
    created_at: object | None = None


def job_form(**overrides) -> JobCreate:
    data = {
        "job_title": "Backend Engineer",
        "industry": "Information Technology",
        "industry_type": "Software",
        "job_type": "Full-time",
        "job_location": "Pune",
        "qualification": "B.Tech",
        "minimum_experience": 2,
        "maximum_experience": 5,
        "minimum_salary": 800000,
        "maximum_salary": 1500000,
        "skills_required": ["Python", "SQL"],
        "job_description": "Build and run our APIs.",
        "status": "draft",
    }
    data.update(overrides)
    return JobCreate(**data)


def application_form(**overrides) -> ApplicationCreate:
    data = {"current_working_location": "Pune", "expected_salary": "12 LPA", "notice_period": 30}
    data.update(overrides)
    return ApplicationCreate(**data)
