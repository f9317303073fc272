"""
Development table creation.

Production deployments run Alembic instead (see quickjob.db.migrate).
"""
import logging

from quickjob.db.session import engine
from quickjob.db.base import Base
import quickjob.db.models  # noqa: F401  registers every model on Base.metadata

logger = logging.getLogger(__name__)


def init_db(bind=None) -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables ensured")
