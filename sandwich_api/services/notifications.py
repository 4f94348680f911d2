"""
Email notifications
"""
import html
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from sandwich_api.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, config: Optional[Settings] = None):
        config = config or default_settings
        self.smtp_host = config.SMTP_HOST
        self.smtp_port = config.SMTP_PORT
        self.use_tls = config.SMTP_USE_TLS
        self.smtp_username = config.SMTP_USERNAME
        self.smtp_password = config.SMTP_PASSWORD
        self.from_email = config.SMTP_FROM_ADDRESS
        self.from_name = config.SMTP_FROM_NAME
        self.public_url = config.PUBLIC_URL

    @property
    def configured(self) -> bool:
        return bool(self.smtp_host)

    def send_email(self, to_email: str, subject: str, body: str) -> bool:
        """Send an HTML email, returning False instead of raising on failure"""
        if not self.configured:
            logger.info(f"SMTP not configured, skipping email to {to_email}")
            return False

        try:
            msg = MIMEMultipart()
            msg['From'] = f"{self.from_name} <{self.from_email}>"
            msg['To'] = to_email
            msg['Subject'] = subject

            msg.attach(MIMEText(body, 'html'))

            with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
                if self.use_tls:
                    server.starttls()
                if self.smtp_username:
                    server.login(self.smtp_username, self.smtp_password or "")
                server.sendmail(self.from_email, to_email, msg.as_string())

            logger.info(f"Email sent successfully to {to_email}")
            return True

        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to_email}: {e}")
            return False

    def send_welcome(self, to_email: str, display_name: Optional[str] = None) -> bool:
        name = display_name if display_name and display_name.strip() else "there"
        body = f"""
        <div style="font-family: system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial; color: #222">
            <h2 style="color: #06629f">Welcome, {html.escape(name)}!</h2>
            <p>Thanks for registering at <strong>{html.escape(self.from_name)}</strong>.
            Head over to <a href="{self.public_url}">the app</a> to build and browse sandwiches.</p>
            <p>The Sandwich team</p>
        </div>
        """
        return self.send_email(to_email, f"Welcome to {self.from_name}", body)
