from sqlalchemy import Column, Integer, String, Text, Boolean, Float, DateTime, ForeignKey
from sqlalchemy.sql import func
from quickjob.db.base import Base

JOB_STATUSES = ("open", "closed", "in_progress", "accomplished")


class Job(Base):
    """A paid gig posted by a recruiter."""
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    recruiter_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String, nullable=True, index=True)
    amount = Column(Float, nullable=False, default=0)
    currency = Column(String(10), nullable=False, default="FCFA")

    location = Column(String, nullable=False, index=True)
    commune = Column(String, nullable=True)
    quartier = Column(String, nullable=True)

    # Hidden from candidates until their application is accepted
    contact_phone = Column(String, nullable=True)
    contact_whatsapp = Column(String, nullable=True)

    status = Column(String, nullable=False, default="open", index=True)  # open | closed | in_progress | accomplished
    is_featured = Column(Boolean, nullable=False, default=False)
    views_count = Column(Integer, nullable=False, default=0)
    applications_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
