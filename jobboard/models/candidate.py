from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobboard.database import Base
from jobboard.models.types import JSONType


class CandidateWatchlistEntry(Base):
    __tablename__ = "candidate_watchlist"
    __table_args__ = (
        UniqueConstraint("employer_user_id", "candidate_user_id", name="uq_candidate_watchlist_pair"),
    )

    id = Column(String, primary_key=True, index=True)
    employer_user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    candidate_user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    candidate = relationship("User", foreign_keys=[candidate_user_id])


class SavedSearch(Base):
    """Named candidate-search filter set an employer can re-run."""

    __tablename__ = "saved_searches"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    filters = Column(JSONType, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
