from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobboard.database import Base
from jobboard.models.types import JSONType, ApplicationStatus, enum_column


class JobApplication(Base):
    __tablename__ = "job_applications"
    __table_args__ = (
        UniqueConstraint("job_id", "job_seeker_user_id", name="uq_job_applications_job_seeker"),
    )

    id = Column(String, primary_key=True, index=True)
    job_id = Column(String, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    job_seeker_user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    employer_user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    applied_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    status = Column(
        enum_column(ApplicationStatus, "application_status"),
        nullable=False,
        default=ApplicationStatus.SUBMITTED,
    )
    resume_url = Column(Text)
    custom_question_answers = Column(JSONType)  # [{question_text, answer}]
    employer_remarks = Column(Text)
    current_working_location = Column(String)
    expected_salary = Column(String)
    notice_period = Column(Integer)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    job = relationship("Job", back_populates="applications")
    job_seeker = relationship("User", foreign_keys=[job_seeker_user_id])
