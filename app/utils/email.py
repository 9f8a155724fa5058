import os
import logging

logger = logging.getLogger(__name__)


class EmailService:
    """Builds invitation messages; delivery is left to the auth provider, so messages are logged"""

    def __init__(self):
        self.app_base_url = os.getenv("APP_BASE_URL", "http://localhost:3000").rstrip("/")

    def send_email(self, to_email: str, subject: str, body: str):
        """Send email notification"""
        logger.info(f"EMAIL to {to_email}: {subject}\n{body}")

    def build_accept_link(self, token) -> str:
        return f"{self.app_base_url}/invitations/{token}/accept"

    def send_invitation_email(
        self, to_email: str, household_name: str, inviter_email: str, token
    ):
        """Send household invitation email"""
        subject = f"You're invited to join {household_name} on Pantry Pilot"
        body = (
            f"{inviter_email} invited you to share their pantry, shopping list and "
            f"recipes.\nAccept the invitation: {self.build_accept_link(token)}"
        )
        self.send_email(to_email, subject, body)
