from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from jobboard.schemas.common import blank_to_none, normalize_url, validate_image_ref, validate_phone


class EmployerProfileUpdate(BaseModel):
    company_logo_url: str | None = None
    company_name: str = Field(min_length=1, max_length=100)
    address: str | None = Field(default=None, max_length=255)
    official_email: EmailStr
    contact_number: str | None = None
    company_website: str | None = None
    team_size: int | None = None
    year_of_establishment: int | None = None
    about_company: str | None = Field(default=None, max_length=1200)
    linkedin_url: str | None = None
    x_url: str | None = None

    @field_validator("company_logo_url")
    @classmethod
    def logo_is_image(cls, v: str | None) -> str | None:
        return validate_image_ref(v)

    @field_validator("contact_number")
    @classmethod
    def contact_number_format(cls, v: str | None) -> str | None:
        return validate_phone(v)

    @field_validator("company_website", "linkedin_url", "x_url")
    @classmethod
    def urls_normalized(cls, v: str | None) -> str | None:
        return normalize_url(v)

    @field_validator("address", "about_company")
    @classmethod
    def empty_text_is_none(cls, v: str | None) -> str | None:
        return blank_to_none(v)

    @field_validator("team_size")
    @classmethod
    def team_size_positive(cls, v: int | None) -> int | None:
        if not v:
            return None
        if v < 1:
            raise ValueError("Team size must be at least 1.")
        return v

    @field_validator("year_of_establishment")
    @classmethod
    def year_in_range(cls, v: int | None) -> int | None:
        if not v:
            return None
        if v < 1800:
            raise ValueError("Year seems too old.")
        if v > date.today().year:
            raise ValueError("Year cannot be in the future.")
        return v


class EmployerProfileResponse(BaseModel):
    id: str
    user_id: str
    company_logo_url: str | None = None
    company_name: str
    address: str | None = None
    official_email: str
    contact_number: str | None = None
    company_website: str | None = None
    team_size: int | None = None
    year_of_establishment: int | None = None
    about_company: str | None = None
    linkedin_url: str | None = None
    x_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class QrCodeResponse(BaseModel):
    login_url: str
    image_url: str
    company_name: str | None = None
