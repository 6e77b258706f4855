from sqlalchemy import Column, String, Integer, Float, Boolean, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobboard.database import Base
from jobboard.models.types import JSONType


class JobSeekerProfile(Base):
    __tablename__ = "job_seeker_profiles"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)

    # Personal
    full_name = Column(String)
    phone_number = Column(String)
    profile_picture_url = Column(Text)
    resume_url = Column(Text)
    gender = Column(String)
    marital_status = Column(String)
    date_of_birth = Column(String)  # YYYY-MM-DD
    current_address = Column(String)
    current_city = Column(String)
    current_pin_code = Column(String)
    correspondence_address = Column(String)
    correspondence_city = Column(String)
    correspondence_pin_code = Column(String)

    # Professional
    current_designation = Column(String)
    current_department = Column(String)
    current_industry = Column(String)
    current_industry_type = Column(String)
    other_current_industry_type = Column(String)
    preferred_locations = Column(JSONType)
    total_experience = Column(Float)
    present_salary = Column(String)
    skills = Column(JSONType)

    # Online presence
    portfolio_url = Column(Text)
    github_profile_url = Column(Text)
    linkedin_profile_url = Column(Text)
    other_social_links = Column(String)
    professional_summary = Column(Text)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="job_seeker_profile")
    education_details = relationship(
        "EducationDetail",
        back_populates="profile",
        order_by="EducationDetail.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    experience_details = relationship(
        "ExperienceDetail",
        back_populates="profile",
        order_by="ExperienceDetail.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class EducationDetail(Base):
    __tablename__ = "education_details"

    id = Column(String, primary_key=True, index=True)
    job_seeker_profile_id = Column(
        String, ForeignKey("job_seeker_profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False, default=0)
    qualification = Column(String, nullable=False)
    stream = Column(String)
    institution = Column(String)
    year_of_completion = Column(Integer)
    percentage_marks = Column(Float)

    profile = relationship("JobSeekerProfile", back_populates="education_details")


class ExperienceDetail(Base):
    __tablename__ = "experience_details"

    id = Column(String, primary_key=True, index=True)
    job_seeker_profile_id = Column(
        String, ForeignKey("job_seeker_profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False, default=0)
    company_name = Column(String, nullable=False)
    designation = Column(String, nullable=False)
    about_company = Column(Text)
    start_date = Column(String)  # MM-YYYY
    end_date = Column(String)  # MM-YYYY, null while is_present
    is_present = Column(Boolean, default=False)
    responsibilities = Column(Text)

    profile = relationship("JobSeekerProfile", back_populates="experience_details")
