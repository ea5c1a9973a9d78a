"""Email service for out-of-band notifications"""

import asyncio
import logging
import smtplib
from email.mime.text import MIMEText

from ...core.config import settings

logger = logging.getLogger(__name__)


class EmailService:
    """Fire-and-forget SMTP notifier: failures are logged and reported as False."""

    def __init__(self):
        self.smtp_host = settings.SMTP_HOST
        self.smtp_port = settings.SMTP_PORT
        self.smtp_username = settings.SMTP_USERNAME
        self.smtp_password = settings.SMTP_PASSWORD
        self.smtp_use_tls = settings.SMTP_USE_TLS
        self.from_email = settings.FROM_EMAIL
        self.from_name = settings.FROM_NAME
        self.frontend_url = settings.FRONTEND_URL

    async def send(self, recipient: str, subject: str, body: str) -> bool:
        """Send a plain-text email"""
        if not self.smtp_host:
            logger.warning("SMTP not configured; email to %s not sent", recipient)
            return False

        msg = MIMEText(body, 'plain', 'utf-8')
        msg['Subject'] = subject
        msg['From'] = f"{self.from_name} <{self.from_email}>"
        msg['To'] = recipient

        try:
            await self._send_smtp_email(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Error sending email to %s: %s", recipient, e)
            return False

        logger.info("Email sent to %s: %s", recipient, subject)
        return True

    async def _send_smtp_email(self, msg: MIMEText):
        """Send email via SMTP"""
        def send_sync():
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=30) as server:
                if self.smtp_use_tls:
                    server.starttls()
                if self.smtp_username:
                    server.login(self.smtp_username, self.smtp_password)
                server.send_message(msg)

        # Run in thread pool to avoid blocking
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, send_sync)

    async def send_password_reset_email(self, to_email: str, reset_token: str) -> bool:
        """Send the plaintext reset token; it is never stored anywhere else"""
        reset_url = f"{self.frontend_url}/reset-password/{reset_token}"
        minutes = settings.PASSWORD_RESET_EXPIRE_MINUTES

        subject = f"Your {self.from_name} password reset token (valid for {minutes} min)"
        body = (
            "Forgot your password? Submit a PATCH request with your new password "
            f"and password_confirm to: {reset_url}.\n"
            "If you didn't forget your password, please ignore this email!"
        )
        return await self.send(to_email, subject, body)
