from pathlib import Path

import pytest

from md2kindle import config as config_mod
from md2kindle.config import MailConfig, load_mail_config
from md2kindle.errors import ConfigError

ALL_VARS = (
    config_mod.DESTINATION_VARS
    + config_mod.SENDER_VARS
    + config_mod.PASSWORD_VARS
    + ("EMAIL_SMTP_SERVER", "EMAIL_SMTP_PORT", "MD2KINDLE_HTTP_TIMEOUT")
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path: Path):
    for name in ALL_VARS:
        # setenv first so teardown also removes values load_dotenv adds
        monkeypatch.setenv(name, "unset")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    yield


def test_load_from_environment(monkeypatch):
    monkeypatch.setenv("EMAIL_ADDRESS", "sender@example.com")
    monkeypatch.setenv("EMAIL_PASSWORD", "secret")
    monkeypatch.setenv("KINDLE_EMAIL", "me@kindle.com")

    cfg = load_mail_config()
    assert cfg.sender_address == "sender@example.com"
    assert cfg.password == "secret"
    assert cfg.default_recipient == "me@kindle.com"
    assert cfg.smtp_server == "smtp.gmail.com"
    assert cfg.smtp_port == 587
    assert cfg.http_timeout == 30.0


def test_legacy_variable_names(monkeypatch):
    monkeypatch.setenv("emailSender", "sender@example.com")
    monkeypatch.setenv("keyEmail", "secret")
    monkeypatch.setenv("emailKindle", "me@kindle.com")

    cfg = load_mail_config()
    assert cfg.sender_address == "sender@example.com"
    assert cfg.password == "secret"
    assert cfg.default_recipient == "me@kindle.com"


def test_load_from_dotenv_file(tmp_path: Path, monkeypatch):
    (tmp_path / ".env").write_text(
        "EMAIL_ADDRESS=dotenv@example.com\nEMAIL_PASSWORD=pw\nEMAIL_SMTP_PORT=2525\n",
        encoding="utf-8",
    )
    # Real environment wins over .env
    monkeypatch.setenv("EMAIL_PASSWORD", "from-env")

    cfg = load_mail_config()
    assert cfg.sender_address == "dotenv@example.com"
    assert cfg.password == "from-env"
    assert cfg.smtp_port == 2525


def test_missing_password_raises(monkeypatch):
    monkeypatch.setenv("EMAIL_ADDRESS", "sender@example.com")
    with pytest.raises(ConfigError) as excinfo:
        load_mail_config()
    assert "EMAIL_PASSWORD" in str(excinfo.value)
    assert excinfo.value.exit_code == 8


def test_invalid_port_raises(monkeypatch):
    monkeypatch.setenv("EMAIL_ADDRESS", "sender@example.com")
    monkeypatch.setenv("EMAIL_PASSWORD", "secret")
    monkeypatch.setenv("EMAIL_SMTP_PORT", "smtp")
    with pytest.raises(ConfigError):
        load_mail_config()


def test_resolve_recipient_prefers_override():
    cfg = MailConfig("s@example.com", "pw", default_recipient="default@kindle.com")
    assert cfg.resolve_recipient("other@kindle.com") == "other@kindle.com"
    assert cfg.resolve_recipient(None) == "default@kindle.com"


def test_resolve_recipient_without_any_address_raises():
    cfg = MailConfig("s@example.com", "pw")
    with pytest.raises(ConfigError):
        cfg.resolve_recipient(None)
