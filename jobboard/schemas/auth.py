from pydantic import BaseModel, EmailStr, field_validator

from jobboard.models.types import UserRole


class UserSignup(BaseModel):
    email: EmailStr
    password: str
    role: UserRole

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters.")
        return v


class UserLogin(BaseModel):
    email: EmailStr
    password: str
    role: UserRole

    @field_validator("password")
    @classmethod
    def password_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required.")
        return v


class UserResponse(BaseModel):
    id: str
    email: str
    role: UserRole
    is_admin: bool = False
    company_name: str | None = None
    company_logo_url: str | None = None

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class EmployerCard(BaseModel):
    """Public details printed on an employer's QR login card."""

    email: str
    company_name: str | None = None
    company_logo_url: str | None = None
