# src/buku_tamu/services/notifier.py
import logging
import smtplib
from email.message import EmailMessage
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from buku_tamu.models.guest import GuestRecord
from buku_tamu.utils.config import config

logger = logging.getLogger(__name__)


class EmailConfig(BaseSettings):
    """
    SMTP settings for admin notifications, loaded from environment variables.
    """
    model_config = SettingsConfigDict(env_file='.env', env_ignore_empty=True, extra='ignore')

    smtp_server: Optional[str] = None
    smtp_port: int = 25
    sender_email: Optional[str] = None
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None


def render_notification(record: GuestRecord) -> str:
    lines = [
        "Tamu baru terdaftar",
        "",
        f"No. Registrasi: {record.registration_number}",
        f"Nama: {record.full_name}",
        f"Instansi: {record.origin}",
        f"Keperluan: {record.purpose}",
        f"Bidang: {record.department or '-'}",
        f"Kontak: {record.contact_number}",
    ]
    return "\n".join(lines)


class AdminNotifier:
    """
    Tells front-office staff a guest has registered.

    Disabled unless ADMIN_NOTIFY_ENABLED is set; then it e-mails ADMIN_RECIPIENTS.
    A delivery failure never blocks a registration.
    """

    def __init__(
        self,
        enabled: Optional[bool] = None,
        recipients: Optional[List[str]] = None,
        email_config: Optional[EmailConfig] = None,
    ):
        self.enabled = config.ADMIN_NOTIFY_ENABLED if enabled is None else enabled
        self.recipients = recipients if recipients is not None else config.ADMIN_RECIPIENTS
        self._email_config = email_config

    def notify(self, record: GuestRecord) -> bool:
        if not self.enabled:
            logger.info("Admin notification disabled; skipped for %s", record.registration_number)
            return False

        cfg = self._email_config or EmailConfig()
        if not cfg.smtp_server or not cfg.sender_email or not self.recipients:
            logger.warning("Admin notification enabled but SMTP settings or recipients missing")
            return False

        msg = EmailMessage()
        msg["From"] = cfg.sender_email
        msg["To"] = ", ".join(self.recipients)
        msg["Subject"] = f"Buku Tamu - {record.full_name} ({record.registration_number})"
        msg.set_content(render_notification(record))

        try:
            with smtplib.SMTP(cfg.smtp_server, cfg.smtp_port) as server:
                if cfg.smtp_user and cfg.smtp_password:
                    server.login(cfg.smtp_user, cfg.smtp_password)
                server.send_message(msg)
            logger.info("Admin notification sent to: %s", ", ".join(self.recipients))
            return True
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send admin notification: %s", e)
            return False
