"""SMTP delivery of the packaged EPUB.

One session per call: connect, STARTTLS, log in, send, quit. Failures are
raised rather than retried; authentication problems surface as
:class:`AuthError`, everything else during the session as :class:`SendError`.
"""

from __future__ import annotations

import os
import smtplib
from email import encoders
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path

from md2kindle.config import MailConfig
from md2kindle.errors import AuthError, SendError
from md2kindle.logger import get_logger

logger = get_logger("email")

SUBJECT = ""
BODY_HTML = '<div dir="auto"></div>'
ATTACHMENT_FILENAME = "output.epub"
EPUB_MIME_TYPE = "application/epub+zip"
SMTP_TIMEOUT = 30


class EmailSender:
    """Send a single EPUB attachment through an authenticated SMTP session."""

    def __init__(self, config: MailConfig, *, use_tls: bool = True, timeout: float = SMTP_TIMEOUT) -> None:
        self.config = config
        self.use_tls = use_tls
        self.timeout = timeout

    def build_message(self, recipient: str, attachment_path: str | os.PathLike) -> MIMEMultipart:
        path = Path(attachment_path)
        if not path.is_file():
            raise SendError(f"Attachment not found: {path}")

        msg = MIMEMultipart()
        msg["Subject"] = SUBJECT
        msg["From"] = self.config.sender_address
        msg["To"] = recipient
        msg.attach(MIMEText(BODY_HTML, "html", _charset="utf-8"))

        maintype, subtype = EPUB_MIME_TYPE.split("/", 1)
        try:
            with path.open("rb") as f:
                payload = MIMEBase(maintype, subtype)
                payload.set_payload(f.read())
        except OSError as e:
            raise SendError(f"Could not read attachment {path}: {e}") from e
        encoders.encode_base64(payload)
        payload.add_header("Content-Disposition", "attachment", filename=ATTACHMENT_FILENAME)
        msg.attach(payload)
        logger.debug(f"Attached {path} as {ATTACHMENT_FILENAME} ({path.stat().st_size} bytes)")
        return msg

    def send(self, recipient: str, attachment_path: str | os.PathLike) -> None:
        """Email ``attachment_path`` to ``recipient``.

        Raises
        ------
        AuthError: the SMTP server rejected the credentials.
        SendError: the attachment is unreadable or the session failed.
        """
        msg = self.build_message(recipient, attachment_path)
        sender = self.config.sender_address
        server_name = f"{self.config.smtp_server}:{self.config.smtp_port}"

        logger.debug(f"Opening SMTP session with {server_name}")
        try:
            with smtplib.SMTP(self.config.smtp_server, self.config.smtp_port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                try:
                    server.login(sender, self.config.password)
                except smtplib.SMTPAuthenticationError as e:
                    raise AuthError(
                        f"SMTP authentication failed for {sender}; verify EMAIL_PASSWORD app password"
                    ) from e
                server.sendmail(sender, [recipient], msg.as_string())
        except smtplib.SMTPException as e:
            raise SendError(f"SMTP error while sending to {recipient}: {e.__class__.__name__}: {e}") from e
        except OSError as e:
            raise SendError(f"Could not reach SMTP server {server_name}: {e}") from e

        logger.info(f"Email sent to {recipient}")


__all__ = ["EmailSender", "ATTACHMENT_FILENAME", "BODY_HTML"]
