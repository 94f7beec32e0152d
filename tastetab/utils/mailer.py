# tastetab/utils/mailer.py
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from tastetab.core.config import settings

logger = logging.getLogger(__name__)

OTP_SUBJECT = "TasteTab OTP for Password Reset"


def send_mail(to: str, subject: str, text: str) -> bool:
    """Send a plain-text mail over implicit TLS. Returns False on any failure."""
    sender = settings.SMTP_USER
    password = settings.SMTP_PASSWORD
    if not sender or not password:
        logger.error("Email credentials not configured")
        return False

    message = MIMEMultipart()
    message["Subject"] = subject
    message["From"] = f'"{settings.EMAIL_FROM_NAME}" <{sender}>'
    message["To"] = to
    message.attach(MIMEText(text, "plain"))

    try:
        with smtplib.SMTP_SSL(settings.SMTP_HOST, settings.SMTP_PORT) as server:
            server.login(sender, password)
            server.sendmail(sender, to, message.as_string())
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to send email to {to}: {e}")
        return False

    logger.info(f"Email sent successfully to {to}")
    return True


def send_otp_email(email: str, otp: str) -> bool:
    return send_mail(email, OTP_SUBJECT, f"Your OTP is: {otp}")
