from sqlalchemy import Column, Integer, String, Text, Float, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func
from quickjob.db.base import Base


class CandidatePost(Base):
    """A candidate's public "available for hire" listing. One per candidate."""
    __tablename__ = "candidate_posts"

    id = Column(Integer, primary_key=True, index=True)
    candidate_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    hourly_rate = Column(Float, nullable=False)
    currency = Column(String(10), nullable=False, default="FCFA")
    location = Column(String, nullable=False, index=True)
    skills = Column(JSON, nullable=False, default=list)
    availability = Column(String, nullable=False)
    status = Column(String, nullable=False, default="active", index=True)  # active | inactive

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
