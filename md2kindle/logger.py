import logging
import os
import sys

import colorama

# Initialize colorama for Windows terminals
colorama.init()

LOG_COLORS = {
    "DEBUG": colorama.Fore.BLUE,
    "INFO": colorama.Fore.GREEN,
    "WARNING": colorama.Fore.YELLOW,
    "ERROR": colorama.Fore.RED,
    "CRITICAL": colorama.Fore.RED + colorama.Style.BRIGHT,
}

# Message color overrides for loggers whose output the user should notice
MODULE_MESSAGE_COLORS = {
    "md2kindle.email": colorama.Fore.MAGENTA + colorama.Style.BRIGHT,
}

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _console_safe(text: str) -> str:
    try:
        text.encode(sys.stdout.encoding or "utf-8", errors="strict")
    except (UnicodeEncodeError, AttributeError):
        text = text.encode("ascii", errors="replace").decode("ascii")
    return text


class ColoredFormatter(logging.Formatter):
    """Formatter coloring the level name and message for console output.

    The record is restored after formatting so the file handler writes plain text.
    """

    def format(self, record: logging.LogRecord) -> str:
        original_levelname = record.levelname
        original_msg = record.msg
        original_args = record.args

        try:
            if record.levelname in LOG_COLORS:
                record.levelname = f"{LOG_COLORS[record.levelname]}{record.levelname}{colorama.Style.RESET_ALL}"

            raw_msg = _console_safe(record.getMessage())
            record.args = None

            if record.name in MODULE_MESSAGE_COLORS:
                record.msg = f"{MODULE_MESSAGE_COLORS[record.name]}{raw_msg}{colorama.Style.RESET_ALL}"
            elif original_levelname in LOG_COLORS:
                record.msg = f"{LOG_COLORS[original_levelname]}{raw_msg}{colorama.Style.RESET_ALL}"
            else:
                record.msg = raw_msg

            formatted = super().format(record)
        finally:
            record.levelname = original_levelname
            record.msg = original_msg
            record.args = original_args

        return formatted


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """Configure colored console logging and, when possible, a debug log file."""
    logger = logging.getLogger("md2kindle")
    logger.setLevel(logging.DEBUG)
    logger.handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(console_handler)

    if log_file is None:
        log_file = os.path.abspath(os.path.join("logs", "md2kindle.log"))

    try:
        os.makedirs(os.path.dirname(log_file), exist_ok=True)
        # 'w' mode: one log per run
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)
        logger.debug(f"Logging to file: {log_file}")
    except OSError as e:
        logger.warning(f"Could not set up file logging: {e}")

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name"""
    return logging.getLogger(f"md2kindle.{name}")
