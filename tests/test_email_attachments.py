import email
import smtplib
from pathlib import Path

import pytest

from md2kindle.config import MailConfig
from md2kindle.email.send_email import ATTACHMENT_FILENAME, BODY_HTML, EmailSender
from md2kindle.errors import AuthError, SendError


class FakeSMTP:
    """Fake SMTP server capturing sendmail arguments for assertions."""
    last_instance: "FakeSMTP | None" = None
    login_error: Exception | None = None
    send_error: Exception | None = None

    def __init__(self, host, port, timeout=None):  # noqa: D401
        self.host = host
        self.port = port
        self.timeout = timeout
        self.started_tls = False
        self.logged_in = False
        self.sent = []
        FakeSMTP.last_instance = self

    # Context manager protocol
    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):  # noqa: D401
        return False

    # SMTP-like methods
    def starttls(self):
        self.started_tls = True

    def login(self, user, password):
        if FakeSMTP.login_error is not None:
            raise FakeSMTP.login_error
        self.logged_in = True
        self.user = user
        self.password = password

    def sendmail(self, from_addr, to_addrs, msg):
        if FakeSMTP.send_error is not None:
            raise FakeSMTP.send_error
        self.sent.append((from_addr, to_addrs, msg))


@pytest.fixture
def config():
    return MailConfig(sender_address="noreply@example.com", password="dummy-pass")


@pytest.fixture
def fake_smtp(monkeypatch):
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    yield FakeSMTP
    FakeSMTP.last_instance = None
    FakeSMTP.login_error = None
    FakeSMTP.send_error = None


def _create_file(tmp_path: Path, name: str, content: bytes) -> Path:
    p = tmp_path / name
    p.write_bytes(content)
    return p


def test_epub_attachment_sent(tmp_path: Path, fake_smtp, config):
    epub = _create_file(tmp_path, "Some Book.epub", b"epub-bytes\n")
    EmailSender(config).send("reader@kindle.com", epub)

    inst = fake_smtp.last_instance
    assert inst.host == "smtp.gmail.com"
    assert inst.port == 587
    assert inst.started_tls is True
    assert inst.user == "noreply@example.com"
    assert inst.password == "dummy-pass"

    from_addr, to_addrs, raw_msg = inst.sent[0]
    assert from_addr == "noreply@example.com"
    assert to_addrs == ["reader@kindle.com"]

    msg = email.message_from_string(raw_msg)
    assert msg["To"] == "reader@kindle.com"
    assert not msg["Subject"]
    attachments = [part for part in msg.walk() if part.get_filename()]
    assert len(attachments) == 1
    att = attachments[0]
    # Fixed name regardless of the file on disk
    assert att.get_filename() == ATTACHMENT_FILENAME
    assert att.get_content_type() == "application/epub+zip"
    assert att.get_payload(decode=True) == b"epub-bytes\n"


def test_placeholder_html_body(tmp_path: Path, fake_smtp, config):
    epub = _create_file(tmp_path, "output.epub", b"data")
    EmailSender(config).send("reader@kindle.com", epub)

    msg = email.message_from_string(fake_smtp.last_instance.sent[0][2])
    bodies = [part for part in msg.walk() if part.get_content_type() == "text/html"]
    assert len(bodies) == 1
    assert bodies[0].get_payload(decode=True).decode("utf-8") == BODY_HTML


def test_custom_smtp_server(tmp_path: Path, fake_smtp):
    epub = _create_file(tmp_path, "output.epub", b"data")
    config = MailConfig(
        sender_address="a@example.com", password="p", smtp_server="smtp.example.com", smtp_port=2525
    )
    EmailSender(config).send("reader@kindle.com", epub)
    assert fake_smtp.last_instance.host == "smtp.example.com"
    assert fake_smtp.last_instance.port == 2525


def test_missing_attachment_raises_before_connecting(tmp_path: Path, fake_smtp, config):
    with pytest.raises(SendError):
        EmailSender(config).send("reader@kindle.com", tmp_path / "nope.epub")
    # SMTP should never have been created because attachment prep aborted early
    assert fake_smtp.last_instance is None


def test_authentication_failure_raises_auth_error(tmp_path: Path, fake_smtp, config):
    epub = _create_file(tmp_path, "output.epub", b"data")
    fake_smtp.login_error = smtplib.SMTPAuthenticationError(535, b"Bad credentials")
    with pytest.raises(AuthError):
        EmailSender(config).send("reader@kindle.com", epub)
    assert fake_smtp.last_instance.sent == []


def test_smtp_failure_raises_send_error(tmp_path: Path, fake_smtp, config):
    epub = _create_file(tmp_path, "output.epub", b"data")
    fake_smtp.send_error = smtplib.SMTPRecipientsRefused({"reader@kindle.com": (550, b"no")})
    with pytest.raises(SendError) as excinfo:
        EmailSender(config).send("reader@kindle.com", epub)
    assert "SMTPRecipientsRefused" in str(excinfo.value)


def test_connection_failure_raises_send_error(tmp_path: Path, monkeypatch, config):
    epub = _create_file(tmp_path, "output.epub", b"data")

    def refuse(*args, **kwargs):
        raise ConnectionRefusedError("connection refused")

    monkeypatch.setattr(smtplib, "SMTP", refuse)
    with pytest.raises(SendError):
        EmailSender(config).send("reader@kindle.com", epub)
