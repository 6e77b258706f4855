from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, model_validator

ALL_GENDERS = "All"
ALL_INDUSTRY_TYPES = "All Industry Types"


class CandidateFilters(BaseModel):
    keywords: list[str] = []
    excluded_keywords: list[str] = []
    designation: str | None = None
    skills: list[str] = []
    locations: list[str] = []
    include_relocating: bool = False
    min_experience: float | None = Field(default=None, ge=0)
    max_experience: float | None = Field(default=None, ge=0)
    gender: str | None = None
    industry: str | None = None
    industry_type: str | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)

    @model_validator(mode="after")
    def experience_range(self):
        if (
            self.min_experience is not None
            and self.max_experience is not None
            and self.max_experience < self.min_experience
        ):
            raise ValueError("Maximum experience cannot be less than minimum experience.")
        return self


class CandidateSummary(BaseModel):
    id: str
    name: str
    email: str
    designation: str | None = None
    experience: float | None = None
    location: str | None = None
    skills: list[str] = []
    industry: str | None = None
    gender: str | None = None
    age: int | None = None
    profile_picture_url: str | None = None
    preferred_locations: list[str] = []
    resume_url: str | None = None


class CandidatePage(BaseModel):
    items: list[CandidateSummary]
    total: int
    page: int
    limit: int
    total_pages: int


class WatchlistAdd(BaseModel):
    candidate_id: str = Field(min_length=1)


class SavedSearchCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    filters: dict[str, Any]


class SavedSearchResponse(BaseModel):
    id: str
    name: str
    filters: dict[str, Any]
    created_at: datetime | None = None

    class Config:
        from_attributes = True
