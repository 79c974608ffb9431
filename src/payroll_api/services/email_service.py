"""Email service for sending salary notifications over SMTP."""

import asyncio
import logging
import smtplib
import ssl
from concurrent.futures import ThreadPoolExecutor
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formatdate, make_msgid
from functools import partial
from html import escape as html_escape

from payroll_api.config import Settings, get_settings
from payroll_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)

# Thread pool for non-blocking SMTP operations
_smtp_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="smtp")

SALARY_NOTIFICATION_SUBJECT = "Salary Payment Notification"


class EmailService:
    """Service for sending emails via SMTP.

    Connection settings come from ``Settings``; nothing is stored in the
    database.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize email service.

        Args:
            settings: Application settings, defaults to the cached settings
        """
        self.settings = settings or get_settings()

    @property
    def is_configured(self) -> bool:
        """Check if SMTP is configured."""
        return self.settings.smtp_configured

    def _get_smtp_connection(self) -> smtplib.SMTP | smtplib.SMTP_SSL:
        """Create an authenticated SMTP connection."""
        settings = self.settings
        context = ssl.create_default_context()

        if settings.smtp_use_tls:
            # Use STARTTLS (port 587 typically)
            smtp = smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=30)
            smtp.ehlo()
            smtp.starttls(context=context)
            # EHLO again after STARTTLS as required by RFC 3207
            smtp.ehlo()
        else:
            # Direct SSL connection (port 465 typically)
            smtp = smtplib.SMTP_SSL(
                settings.smtp_host, settings.smtp_port, timeout=30, context=context
            )
            smtp.ehlo()

        if settings.smtp_username and settings.smtp_password:
            smtp.login(settings.smtp_username, settings.smtp_password.get_secret_value())
        return smtp

    def _create_message(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        plain_body: str,
    ) -> MIMEMultipart:
        """Create email message with proper headers.

        Args:
            to_email: Recipient email address
            subject: Email subject
            html_body: HTML email body
            plain_body: Plain text body

        Returns:
            Constructed email message
        """
        from_email = str(self.settings.smtp_from_email)
        msg = MIMEMultipart("alternative")

        msg["Subject"] = subject
        msg["From"] = f"{self.settings.smtp_from_name} <{from_email}>"
        msg["To"] = to_email
        msg["Message-ID"] = make_msgid(domain=from_email.split("@")[1])
        msg["Date"] = formatdate(localtime=True)
        msg["X-Mailer"] = self.settings.app_name

        msg.attach(MIMEText(plain_body, "plain", "utf-8"))
        msg.attach(MIMEText(html_body, "html", "utf-8"))
        return msg

    def _send_email_sync(self, to_email: str, msg: MIMEMultipart) -> None:
        """Synchronous email sending (runs in thread pool)."""
        smtp = None
        try:
            smtp = self._get_smtp_connection()
            smtp.sendmail(str(self.settings.smtp_from_email), to_email, msg.as_string())
        finally:
            if smtp:
                try:
                    smtp.quit()
                except smtplib.SMTPException as e:
                    logger.debug(f"SMTP quit failed: {e}")

    async def send_email(
        self,
        to_email: str,
        subject: str,
        body: str,
    ) -> bool:
        """Send a plain notification via SMTP (non-blocking).

        Uses a thread pool executor to avoid blocking the async event loop.
        The HTML part is the escaped body in a paragraph.

        Args:
            to_email: Recipient email address
            subject: Email subject
            body: Message text

        Returns:
            True if the server accepted the message, False otherwise
        """
        if not self.is_configured:
            logger.warning("SMTP not configured, cannot send email")
            return False

        html_body = (
            '<html><body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">'
            f"<p>{html_escape(body)}</p>"
            "</body></html>"
        )

        try:
            msg = self._create_message(to_email, subject, html_body, body)

            loop = asyncio.get_running_loop()
            await loop.run_in_executor(
                _smtp_executor,
                partial(self._send_email_sync, to_email, msg),
            )

            logger.info("Email sent successfully")
            return True

        except smtplib.SMTPException as e:
            log_error(logger, "SMTP error sending email", e)
            return False
        except OSError as e:
            log_error(logger, "Connection error sending email", e)
            return False
