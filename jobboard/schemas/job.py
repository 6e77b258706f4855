from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from jobboard.models.types import JobStatus
from jobboard.schemas.common import blank_to_none

OTHER_INDUSTRY_TYPE = "Other"
UNKNOWN_COMPANY = "Company Information Unavailable"


class CustomQuestion(BaseModel):
    question_text: str = Field(min_length=1, max_length=255)
    answer_type: Literal["text", "yes_no"]


class JobCreate(BaseModel):
    job_title: str = Field(min_length=1, max_length=100)
    industry: str = Field(min_length=1, max_length=100)
    industry_type: str = Field(min_length=1)
    other_industry_type: str | None = None
    job_type: str = Field(min_length=1)
    job_location: str = Field(min_length=1, max_length=100)
    number_of_vacancies: int = Field(default=1, ge=1)
    qualification: str = Field(min_length=1, max_length=100)
    minimum_experience: float = Field(default=0, ge=0)
    maximum_experience: float = Field(default=0, ge=0)
    minimum_salary: int = Field(default=0, ge=0)
    maximum_salary: int = Field(default=0, ge=0)
    skills_required: list[str] = Field(min_length=1, max_length=20)
    additional_data: str | None = Field(default=None, max_length=2000)
    job_description: str = Field(min_length=1)
    custom_questions: list[CustomQuestion] = Field(default_factory=list, max_length=10)
    status: str | None = Field(default=None, validate_default=True)

    @field_validator("skills_required")
    @classmethod
    def skills_valid(cls, v: list[str]) -> list[str]:
        for skill in v:
            if not 1 <= len(skill) <= 50:
                raise ValueError("Each skill must be between 1 and 50 characters.")
        return v

    @field_validator("additional_data")
    @classmethod
    def empty_text_is_none(cls, v: str | None) -> str | None:
        return blank_to_none(v)

    @field_validator("status")
    @classmethod
    def status_or_draft(cls, v: str | None) -> str:
        # Unknown or missing values fall back to draft.
        valid = {s.value for s in JobStatus}
        return v if v in valid else JobStatus.DRAFT.value

    @model_validator(mode="after")
    def ranges_and_other_type(self):
        if self.maximum_experience < self.minimum_experience:
            raise ValueError("Maximum experience cannot be less than minimum experience.")
        if self.maximum_salary < self.minimum_salary:
            raise ValueError("Maximum salary cannot be less than minimum salary.")
        if self.industry_type == OTHER_INDUSTRY_TYPE and not (self.other_industry_type or "").strip():
            raise ValueError("Please specify the industry type when 'Other' is selected.")
        return self

    @property
    def effective_industry_type(self) -> str:
        if self.industry_type == OTHER_INDUSTRY_TYPE:
            return self.other_industry_type.strip()
        return self.industry_type


class JobStatusUpdate(BaseModel):
    status: JobStatus


class JobTableRow(BaseModel):
    id: str
    job_title: str
    company_name: str | None = None
    job_location: str | None = None
    status: JobStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class JobResponse(BaseModel):
    id: str
    employer_user_id: str
    job_title: str
    company_name: str | None = None
    industry: str | None = None
    industry_type: str | None = None
    job_type: str | None = None
    job_location: str | None = None
    number_of_vacancies: int | None = None
    qualification: str | None = None
    minimum_experience: float | None = None
    maximum_experience: float | None = None
    minimum_salary: int | None = None
    maximum_salary: int | None = None
    skills_required: list[str] = []
    additional_data: str | None = None
    job_description: str
    custom_questions: list[CustomQuestion] = []
    status: JobStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class CompanyInfo(BaseModel):
    company_name: str
    company_logo_url: str | None = None
    company_website: str | None = None
    about_company: str | None = None
    year_of_establishment: int | None = None
    team_size: int | None = None
    linkedin_url: str | None = None
    address: str | None = None

    @classmethod
    def from_job(cls, job, profile=None) -> "CompanyInfo":
        """Profile details win; the name falls back to the one stored on the job."""
        if profile is None:
            return cls(company_name=job.company_name or UNKNOWN_COMPANY)
        return cls(
            company_name=profile.company_name or job.company_name or UNKNOWN_COMPANY,
            company_logo_url=profile.company_logo_url,
            company_website=profile.company_website,
            about_company=profile.about_company,
            year_of_establishment=profile.year_of_establishment,
            team_size=profile.team_size,
            linkedin_url=profile.linkedin_url,
            address=profile.address,
        )


class JobListing(BaseModel):
    """A job as shown in job-seeker search results."""

    id: str
    employer_user_id: str
    job_title: str
    job_location: str | None = None
    industry: str | None = None
    industry_type: str | None = None
    job_type: str | None = None
    qualification: str | None = None
    minimum_experience: float | None = None
    maximum_experience: float | None = None
    minimum_salary: int | None = None
    maximum_salary: int | None = None
    skills_required: list[str] = []
    created_at: datetime | None = None
    company: CompanyInfo
    is_saved: bool = False
    is_applied: bool = False
    match_score: int | None = None


class JobDetail(JobResponse):
    company: CompanyInfo
    is_saved: bool = False
    is_applied: bool = False
    job_seeker_resume_url: str | None = None


class SuggestedJob(BaseModel):
    id: str
    job_title: str
    company_name: str
    company_logo_url: str | None = None
    location: str | None = None
