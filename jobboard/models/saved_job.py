from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobboard.database import Base


class SavedJob(Base):
    """Job-seeker bookmark; removed when the seeker applies to the job."""

    __tablename__ = "saved_jobs"
    __table_args__ = (
        UniqueConstraint("job_seeker_user_id", "job_id", name="uq_saved_jobs_seeker_job"),
    )

    id = Column(String, primary_key=True, index=True)
    job_seeker_user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = Column(String, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    saved_at = Column(DateTime(timezone=True), server_default=func.now())

    job = relationship("Job", back_populates="saved_by")
