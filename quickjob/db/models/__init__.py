"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.

All models must be imported here to be included in database migrations and table creation.
"""
from quickjob.db.models.user import User
from quickjob.db.models.job import Job
from quickjob.db.models.application import Application
from quickjob.db.models.candidate_post import CandidatePost
from quickjob.db.models.notification import Notification
from quickjob.db.models.conversation import Conversation, Message
from quickjob.db.models.subscription import Subscription
from quickjob.db.models.knowledge_base import KnowledgeBaseEntry
from quickjob.db.models.ai_session import AISession

__all__ = [
    "User",
    "Job",
    "Application",
    "CandidatePost",
    "Notification",
    "Conversation",
    "Message",
    "Subscription",
    "KnowledgeBaseEntry",
    "AISession",
]
