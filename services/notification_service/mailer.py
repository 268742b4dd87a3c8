"""
SMTP delivery for customer e-mails, backed by aiosmtplib.

Port 465 connects over implicit TLS; any other port upgrades with STARTTLS
when SMTP_USE_TLS is on. With MAIL_ENABLED off, messages are only logged.
"""
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formatdate, make_msgid
from typing import Optional

import aiosmtplib
import structlog

from shared.config import settings

logger = structlog.get_logger(__name__)

IMPLICIT_TLS_PORT = 465


@dataclass(frozen=True)
class MailMessage:
    to: str
    subject: str
    html: str
    kind: str = "generic"


class Mailer:

    def __init__(
        self,
        host: str,
        port: int,
        username: Optional[str] = None,
        password: Optional[str] = None,
        sender: str = "no-reply@localhost",
        use_tls: bool = True,
        enabled: bool = True,
        timeout: float = 30.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.use_tls = use_tls
        self.enabled = enabled
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "Mailer":
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USER,
            password=settings.SMTP_PASS,
            sender=settings.SMTP_FROM,
            use_tls=settings.SMTP_USE_TLS,
            enabled=settings.MAIL_ENABLED,
        )

    def build(self, message: MailMessage) -> EmailMessage:
        mime = EmailMessage()
        mime["From"] = self.sender
        mime["To"] = message.to
        mime["Subject"] = message.subject
        mime["Date"] = formatdate(localtime=True)
        mime["Message-ID"] = make_msgid(domain=self.sender.rsplit("@", 1)[-1])
        mime.set_content("This message requires an HTML capable mail client.")
        mime.add_alternative(message.html, subtype="html")
        return mime

    async def send(self, message: MailMessage) -> bool:
        """Send one message. Returns False when delivery is switched off."""
        if not self.enabled:
            logger.info("mail_suppressed", to=message.to, subject=message.subject)
            return False

        implicit_tls = self.use_tls and self.port == IMPLICIT_TLS_PORT
        await aiosmtplib.send(
            self.build(message),
            hostname=self.host,
            port=self.port,
            username=self.username,
            password=self.password,
            use_tls=implicit_tls,
            start_tls=self.use_tls and not implicit_tls,
            timeout=self.timeout,
        )
        logger.info("mail_sent", to=message.to, subject=message.subject)
        return True
