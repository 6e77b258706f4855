from sqlalchemy import Column, String, Integer, Float, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobboard.database import Base
from jobboard.models.types import JSONType, JobStatus, enum_column


class Job(Base):
    """An employer-authored posting. Only active jobs are visible to job seekers."""

    __tablename__ = "jobs"

    id = Column(String, primary_key=True, index=True)
    employer_user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job_title = Column(String, nullable=False)
    company_name = Column(String)
    industry = Column(String)
    industry_type = Column(String)
    job_type = Column(String)
    job_location = Column(String)
    number_of_vacancies = Column(Integer, default=1)
    qualification = Column(String)
    minimum_experience = Column(Float, default=0)
    maximum_experience = Column(Float, default=0)
    minimum_salary = Column(Integer, default=0)
    maximum_salary = Column(Integer, default=0)
    skills_required = Column(JSONType)
    additional_data = Column(Text)
    job_description = Column(Text, nullable=False)
    custom_questions = Column(JSONType)
    status = Column(enum_column(JobStatus, "job_status"), nullable=False, default=JobStatus.DRAFT, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    employer = relationship("User", back_populates="jobs")
    applications = relationship(
        "JobApplication",
        back_populates="job",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    saved_by = relationship(
        "SavedJob",
        back_populates="job",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
