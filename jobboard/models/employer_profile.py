from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobboard.database import Base


class EmployerProfile(Base):
    """Company metadata shown on job listings; one per employer account."""

    __tablename__ = "employer_profiles"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    company_logo_url = Column(Text)
    company_name = Column(String, nullable=False)
    address = Column(String)
    official_email = Column(String, unique=True, nullable=False)
    contact_number = Column(String)
    company_website = Column(String)
    team_size = Column(Integer)
    year_of_establishment = Column(Integer)
    about_company = Column(Text)
    linkedin_url = Column(String)
    x_url = Column(String)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="employer_profile")
