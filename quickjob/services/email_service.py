"""
Transactional email through the Resend HTTP API.
"""
import logging
from typing import Iterable, Optional

import httpx

from quickjob.core.config import NOTIFICATION_FROM_EMAIL, RESEND_API_KEY
from quickjob.db.models.user import User

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"

RESET_SUBJECT = "Votre forfait gratuit a été réinitialisé"
RESET_TEMPLATE = """
<h1>Bonjour {first_name},</h1>
<p>Bonne nouvelle ! Votre quota mensuel pour le plan gratuit a été réinitialisé.</p>
<p>Vous pouvez de nouveau postuler à des offres et/ou publier des annonces, selon votre rôle.</p>
<p>Connectez-vous à votre tableau de bord pour en profiter.</p>
<p>L'équipe QuickJob CI</p>
"""


class EmailSender:
    def __init__(self, api_key: Optional[str] = None, transport: Optional[httpx.BaseTransport] = None):
        self.api_key = api_key or RESEND_API_KEY
        self.transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def send(self, to: str, subject: str, html: str) -> None:
        with httpx.Client(transport=self.transport, timeout=15.0) as client:
            response = client.post(
                RESEND_API_URL,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={
                    "from": NOTIFICATION_FROM_EMAIL,
                    "to": to,
                    "subject": subject,
                    "html": html,
                },
            )
            response.raise_for_status()

    def send_reset_notices(self, users: Iterable[User]) -> int:
        """
        Tell each user their free quota was reset.

        Failures are logged per recipient and do not stop the batch.

        Returns:
            Number of emails accepted by Resend
        """
        if not self.enabled:
            logger.info("RESEND_API_KEY not set, skipping reset notices")
            return 0

        sent = 0
        for user in users:
            html = RESET_TEMPLATE.format(first_name=user.first_name or "")
            try:
                self.send(user.email, RESET_SUBJECT, html)
                sent += 1
            except httpx.HTTPError as e:
                logger.error(f"Failed to send reset notice to user_id={user.id}: {e}", exc_info=True)
        return sent


def get_email_sender() -> EmailSender:
    return EmailSender()
