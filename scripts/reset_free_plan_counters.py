"""
Monthly reset of free-plan usage counters, for cron.
Run: python -m scripts.reset_free_plan_counters
"""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from quickjob.core.config import LOG_LEVEL
from quickjob.core.logging_config import setup_logging
from quickjob.db.session import SessionLocal
from quickjob.services.email_service import EmailSender
from quickjob.services.quota_service import reset_free_plan_counters
import logging

logger = logging.getLogger(__name__)


def main() -> int:
    setup_logging(LOG_LEVEL)
    db = SessionLocal()
    try:
        users = reset_free_plan_counters(db)
        sent = EmailSender().send_reset_notices(users)
        logger.info(f"Reset counters for {len(users)} users, {sent} notices sent")
        return 0
    except Exception as e:
        db.rollback()
        logger.error(f"Free-plan reset failed: {e}", exc_info=True)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
