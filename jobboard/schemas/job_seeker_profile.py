from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from jobboard.schemas.common import (
    MONTH_YEAR_PATTERN,
    PIN_CODE_PATTERN,
    blank_to_none,
    validate_image_ref,
    validate_phone,
    validate_url_or_pdf,
)

MAX_EDUCATION_ENTRIES = 5
MAX_EXPERIENCE_ENTRIES = 10


def _month_year_key(value: str) -> tuple[int, int]:
    month, year = value.split("-")
    return int(year), int(month)


class EducationDetailIn(BaseModel):
    qualification: str = Field(min_length=1)
    stream: str = Field(min_length=1, max_length=100)
    institution: str = Field(min_length=1, max_length=150)
    year_of_completion: int
    percentage_marks: float | None = Field(default=None, ge=0, le=100)

    @field_validator("year_of_completion")
    @classmethod
    def year_in_range(cls, v: int) -> int:
        if v < 1950:
            raise ValueError("Year seems too old.")
        if v > date.today().year + 2:
            raise ValueError("Year cannot be too far in the future.")
        return v


class ExperienceDetailIn(BaseModel):
    company_name: str = Field(min_length=1, max_length=100)
    designation: str = Field(min_length=1, max_length=100)
    about_company: str | None = Field(default=None, max_length=500)
    start_date: str
    end_date: str | None = None
    is_present: bool = False
    responsibilities: str | None = Field(default=None, max_length=1000)

    @field_validator("start_date")
    @classmethod
    def start_date_format(cls, v: str) -> str:
        if not MONTH_YEAR_PATTERN.match(v):
            raise ValueError("Start date format MM-YYYY (e.g., 03-2020).")
        return v

    @field_validator("end_date")
    @classmethod
    def end_date_format(cls, v: str | None) -> str | None:
        v = blank_to_none(v)
        if v is not None and not MONTH_YEAR_PATTERN.match(v):
            raise ValueError("End date format MM-YYYY (e.g., 03-2022).")
        return v

    @model_validator(mode="after")
    def end_after_start(self):
        if self.is_present:
            self.end_date = None
        elif self.end_date and _month_year_key(self.end_date) < _month_year_key(self.start_date):
            raise ValueError("End date must be after start date for past experiences.")
        return self


class JobSeekerProfileUpdate(BaseModel):
    # Personal
    full_name: str | None = Field(default=None, min_length=1, max_length=100)
    phone_number: str | None = None
    profile_picture_url: str | None = None
    resume_url: str | None = None
    gender: str | None = None
    marital_status: str | None = None
    date_of_birth: str | None = None
    current_address: str | None = Field(default=None, max_length=255)
    current_city: str | None = Field(default=None, max_length=100)
    current_pin_code: str | None = None
    correspondence_address: str | None = Field(default=None, max_length=255)
    correspondence_city: str | None = Field(default=None, max_length=100)
    correspondence_pin_code: str | None = None
    educational_details: list[EducationDetailIn] = Field(default_factory=list, max_length=MAX_EDUCATION_ENTRIES)

    # Professional
    current_designation: str | None = Field(default=None, max_length=100)
    current_department: str | None = Field(default=None, max_length=100)
    current_industry: str | None = Field(default=None, max_length=100)
    current_industry_type: str | None = None
    other_current_industry_type: str | None = Field(default=None, max_length=100)
    preferred_locations: list[str] = Field(default_factory=list, max_length=10)
    total_experience: float | None = Field(default=None, ge=0)
    present_salary: str | None = Field(default=None, max_length=50)
    skills: list[str] = Field(default_factory=list, max_length=50)
    experience_details: list[ExperienceDetailIn] = Field(default_factory=list, max_length=MAX_EXPERIENCE_ENTRIES)

    # Online presence
    portfolio_url: str | None = None
    github_profile_url: str | None = None
    linkedin_profile_url: str | None = None
    other_social_links: str | None = Field(default=None, max_length=255)
    professional_summary: str | None = Field(default=None, max_length=2000)

    @field_validator("phone_number")
    @classmethod
    def phone_format(cls, v: str | None) -> str | None:
        return validate_phone(v)

    @field_validator("profile_picture_url")
    @classmethod
    def picture_is_image(cls, v: str | None) -> str | None:
        return validate_image_ref(v)

    @field_validator("resume_url", "portfolio_url", "github_profile_url", "linkedin_profile_url")
    @classmethod
    def url_or_pdf(cls, v: str | None) -> str | None:
        return validate_url_or_pdf(v)

    @field_validator("date_of_birth")
    @classmethod
    def date_of_birth_format(cls, v: str | None) -> str | None:
        v = blank_to_none(v)
        if v is None:
            return None
        try:
            if len(v) != 10:
                raise ValueError(v)
            date.fromisoformat(v)
        except ValueError as e:
            raise ValueError("Invalid date format. Please use YYYY-MM-DD.") from e
        return v

    @field_validator("current_pin_code", "correspondence_pin_code")
    @classmethod
    def pin_code_format(cls, v: str | None) -> str | None:
        v = blank_to_none(v)
        if v is not None and not PIN_CODE_PATTERN.match(v):
            raise ValueError("Invalid Pin Code (6 digits).")
        return v

    @field_validator("preferred_locations")
    @classmethod
    def locations_valid(cls, v: list[str]) -> list[str]:
        for location in v:
            if not location.strip():
                raise ValueError("Location cannot be empty.")
            if len(location) > 100:
                raise ValueError("Location is too long.")
        return v

    @field_validator("skills")
    @classmethod
    def skills_valid(cls, v: list[str]) -> list[str]:
        for skill in v:
            if not skill.strip():
                raise ValueError("Skill cannot be empty.")
            if len(skill) > 50:
                raise ValueError("Skill is too long.")
        return v

    @model_validator(mode="after")
    def other_industry_type_given(self):
        if self.current_industry_type == "Other" and not (self.other_current_industry_type or "").strip():
            raise ValueError("Please specify your industry type when 'Other' is selected.")
        return self


class ResumeUpdate(BaseModel):
    resume_url: str | None = None

    @field_validator("resume_url")
    @classmethod
    def url_or_pdf(cls, v: str | None) -> str | None:
        return validate_url_or_pdf(v)


class EducationDetailOut(BaseModel):
    qualification: str
    stream: str | None = None
    institution: str | None = None
    year_of_completion: int | None = None
    percentage_marks: float | None = None

    class Config:
        from_attributes = True


class ExperienceDetailOut(BaseModel):
    company_name: str
    designation: str
    about_company: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    is_present: bool = False
    responsibilities: str | None = None

    class Config:
        from_attributes = True


class JobSeekerProfileResponse(BaseModel):
    id: str
    user_id: str
    email: str | None = None
    full_name: str | None = None
    phone_number: str | None = None
    profile_picture_url: str | None = None
    resume_url: str | None = None
    gender: str | None = None
    marital_status: str | None = None
    date_of_birth: str | None = None
    current_address: str | None = None
    current_city: str | None = None
    current_pin_code: str | None = None
    correspondence_address: str | None = None
    correspondence_city: str | None = None
    correspondence_pin_code: str | None = None
    educational_details: list[EducationDetailOut] = []
    current_designation: str | None = None
    current_department: str | None = None
    current_industry: str | None = None
    current_industry_type: str | None = None
    other_current_industry_type: str | None = None
    preferred_locations: list[str] = []
    total_experience: float | None = None
    present_salary: str | None = None
    skills: list[str] = []
    experience_details: list[ExperienceDetailOut] = []
    portfolio_url: str | None = None
    github_profile_url: str | None = None
    linkedin_profile_url: str | None = None
    other_social_links: str | None = None
    professional_summary: str | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_profile(cls, profile, email: str | None = None) -> "JobSeekerProfileResponse":
        fields = {
            name: getattr(profile, name)
            for name in cls.model_fields
            if name not in ("email", "educational_details", "experience_details") and hasattr(profile, name)
        }
        fields["preferred_locations"] = profile.preferred_locations or []
        fields["skills"] = profile.skills or []
        return cls(
            **fields,
            email=email,
            educational_details=[EducationDetailOut.model_validate(e) for e in profile.education_details],
            experience_details=[ExperienceDetailOut.model_validate(e) for e in profile.experience_details],
        )
