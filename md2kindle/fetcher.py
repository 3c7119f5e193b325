"""Retrieve raw Markdown from a local file or a URL."""
from __future__ import annotations

from pathlib import Path

import requests

from md2kindle.config import DEFAULT_HTTP_TIMEOUT
from md2kindle.errors import FileReadError, NetworkError
from md2kindle.logger import get_logger
from md2kindle.models import MarkdownDocument, RunOptions

logger = get_logger("fetcher")


def _read_local(source: str) -> str:
    path = Path(source)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as e:
        raise FileReadError(f"Markdown file not found: {path}") from e
    except UnicodeDecodeError as e:
        raise FileReadError(f"Markdown file is not valid UTF-8: {path}") from e
    except OSError as e:
        raise FileReadError(f"Could not read {path}: {e.strerror or e}") from e
    logger.debug(f"Read {len(text)} characters from {path}")
    return text


def _download(url: str, timeout: float) -> str:
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else "unknown"
        raise NetworkError(f"GET {url} failed with HTTP status {status}") from e
    except requests.RequestException as e:
        raise NetworkError(f"GET {url} failed: {e}") from e

    # Markdown served as text/plain often arrives without a charset
    if "charset=" not in response.headers.get("Content-Type", "").lower():
        response.encoding = response.apparent_encoding or "utf-8"
    logger.debug(f"Downloaded {len(response.content)} bytes from {url} ({response.status_code})")
    return response.text


def fetch(source: str, is_local: bool, *, timeout: float = DEFAULT_HTTP_TIMEOUT) -> str:
    """Return the full Markdown text of ``source``.

    Raises
    ------
    FileReadError: the local file is missing, unreadable or not UTF-8.
    NetworkError: the request failed or returned a non-success status.
    """
    if is_local:
        return _read_local(source)
    return _download(source, timeout)


def fetch_markdown(options: RunOptions, *, timeout: float = DEFAULT_HTTP_TIMEOUT) -> MarkdownDocument:
    logger.info(f"Fetching markdown from {options.source_kind.value}: {options.source}")
    content = fetch(options.source, options.is_local, timeout=timeout)
    return MarkdownDocument(content=content, origin=options)


__all__ = ["fetch", "fetch_markdown"]
