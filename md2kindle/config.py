"""Mail and network settings read from the environment.

The settings are loaded once by the orchestrator and handed to the steps that
need them; nothing below the orchestrator reads ``os.environ`` directly.

Environment variables (first non-empty name wins):
    KINDLE_EMAIL / emailKindle                      -> default destination
    EMAIL_ADDRESS / email_address / emailSender     -> sender (required)
    EMAIL_PASSWORD / email_password / keyEmail      -> app password (required)
    EMAIL_SMTP_SERVER                               -> default smtp.gmail.com
    EMAIL_SMTP_PORT                                 -> default 587
    MD2KINDLE_HTTP_TIMEOUT                          -> seconds, default 30
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from md2kindle.errors import ConfigError
from md2kindle.logger import get_logger

logger = get_logger("config")

DEFAULT_SMTP_SERVER = "smtp.gmail.com"
DEFAULT_SMTP_PORT = 587
DEFAULT_HTTP_TIMEOUT = 30.0

DESTINATION_VARS = ("KINDLE_EMAIL", "emailKindle")
SENDER_VARS = ("EMAIL_ADDRESS", "email_address", "emailSender")
PASSWORD_VARS = ("EMAIL_PASSWORD", "email_password", "keyEmail")


def _first_env(*names: str) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v:
            return v
    return None


def _required_env(*names: str) -> str:
    val = _first_env(*names)
    if not val:
        raise ConfigError(f"Missing required environment variable (any of): {', '.join(names)}")
    return val


def _number_env(name: str, default, cast):
    raw = _first_env(name)
    if raw is None:
        return default
    try:
        value = cast(raw)
    except ValueError as e:
        raise ConfigError(f"Invalid value for {name}: {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class MailConfig:
    sender_address: str
    password: str
    default_recipient: Optional[str] = None
    smtp_server: str = DEFAULT_SMTP_SERVER
    smtp_port: int = DEFAULT_SMTP_PORT
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    def resolve_recipient(self, override: str | None = None) -> str:
        """Return the ``--email`` override, falling back to the configured Kindle address."""
        recipient = override or self.default_recipient
        if not recipient:
            raise ConfigError(
                f"No destination address: pass --email or set {' / '.join(DESTINATION_VARS)}"
            )
        return recipient


def load_mail_config(env_file: str | os.PathLike | None = None) -> MailConfig:
    """Build a :class:`MailConfig` from ``.env`` and the process environment.

    Variables already present in the environment take precedence over ``.env``.
    """
    env_path = env_file if env_file is not None else os.path.join(os.getcwd(), ".env")
    if load_dotenv(env_path):
        logger.debug(f"Loaded environment from {env_path}")

    config = MailConfig(
        sender_address=_required_env(*SENDER_VARS),
        password=_required_env(*PASSWORD_VARS),
        default_recipient=_first_env(*DESTINATION_VARS),
        smtp_server=_first_env("EMAIL_SMTP_SERVER") or DEFAULT_SMTP_SERVER,
        smtp_port=_number_env("EMAIL_SMTP_PORT", DEFAULT_SMTP_PORT, int),
        http_timeout=_number_env("MD2KINDLE_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT, float),
    )
    logger.debug(f"Mail config: sender={config.sender_address} smtp={config.smtp_server}:{config.smtp_port}")
    return config


__all__ = ["MailConfig", "load_mail_config"]
