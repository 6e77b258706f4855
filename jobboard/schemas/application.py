from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from jobboard.models.types import ApplicationStatus, JobStatus

REMARKS_REQUIRED_MESSAGE = "Employer remarks are mandatory when updating status."


class CustomQuestionAnswer(BaseModel):
    question_text: str
    answer: str = Field(min_length=1)


class ApplicationCreate(BaseModel):
    current_working_location: str = Field(min_length=1)
    expected_salary: str = Field(min_length=1)
    notice_period: int = Field(ge=0)
    custom_question_answers: list[CustomQuestionAnswer] = Field(default_factory=list)


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus
    remarks: str

    @field_validator("remarks")
    @classmethod
    def remarks_required(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError(REMARKS_REQUIRED_MESSAGE)
        return v.strip()


class AppliedJob(BaseModel):
    application_id: str
    job_id: str
    job_title: str
    company_name: str
    job_location: str | None = None
    applied_at: datetime | None = None
    status: ApplicationStatus
    employer_remarks: str | None = None
    custom_question_answers: list[CustomQuestionAnswer] = []


class SavedJobItem(BaseModel):
    job_id: str
    job_title: str
    company_name: str
    company_logo_url: str | None = None
    job_location: str | None = None
    status: JobStatus
    saved_at: datetime | None = None
    is_applied: bool = False


class JobWithApplicationCount(BaseModel):
    id: str
    job_title: str
    status: JobStatus
    created_at: datetime | None = None
    total_applications: int = 0


class Applicant(BaseModel):
    application_id: str
    job_id: str
    job_title: str
    job_seeker_user_id: str
    job_seeker_name: str
    job_seeker_email: str
    applied_at: datetime | None = None
    status: ApplicationStatus
    resume_url: str | None = None
    custom_question_answers: list[CustomQuestionAnswer] = []
    employer_remarks: str | None = None
    profile_picture_url: str | None = None
    phone_number: str | None = None
    gender: str | None = None
    location: str | None = None
    portfolio_url: str | None = None
    github_profile_url: str | None = None
    skills: list[str] = []
    professional_summary: str | None = None
    current_designation: str | None = None
    current_industry: str | None = None
    current_industry_type: str | None = None
    total_experience: float | None = None
    present_salary: str | None = None
    current_working_location: str | None = None
    expected_salary: str | None = None
    notice_period: int | None = None
