from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from quickjob.db.base import Base


class Subscription(Base):
    __tablename__ = "subscriptions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)

    plan = Column(String, nullable=False, default="free")  # free | standard | pro
    status = Column(String, nullable=False, default="inactive")

    paystack_subscription_id = Column(String, nullable=True, index=True)
    paystack_customer_code = Column(String, nullable=True)
    plan_id = Column(String, nullable=True)  # Paystack plan code
    amount = Column(Integer, nullable=True)  # currency subunits
    currency = Column(String(10), nullable=True)
    jobs_limit = Column(Integer, nullable=True)
    trial_days = Column(Integer, nullable=True)

    renew_date = Column(DateTime(timezone=True), nullable=True)
    next_payment_date = Column(DateTime(timezone=True), nullable=True)
    trial_end_date = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
