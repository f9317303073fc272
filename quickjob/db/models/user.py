from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from quickjob.db.base import Base

USER_ROLES = ("candidate", "recruiter", "admin")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String)
    role = Column(String, nullable=False, default="candidate", index=True)  # candidate | recruiter | admin

    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    whatsapp = Column(String, nullable=True)
    company_name = Column(String, nullable=True)

    location = Column(String, nullable=True)
    commune = Column(String, nullable=True)
    quartier = Column(String, nullable=True)

    # Plan usage counters, reset monthly for free plans
    applications_created_count = Column(Integer, nullable=False, default=0)
    jobs_published = Column(Integer, nullable=False, default=0)
    subscription_plan = Column(String, nullable=False, default="free", index=True)  # free | standard | pro
    subscription_end = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
