"""Pipeline orchestration: fetch -> render -> package -> send."""
from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from md2kindle.cli import parse_args, resolve_options
from md2kindle.config import MailConfig, load_mail_config
from md2kindle.email.epub.converter import OUTPUT_PATH, package_rendered
from md2kindle.email.send_email import EmailSender
from md2kindle.errors import Md2KindleError
from md2kindle.fetcher import fetch_markdown
from md2kindle.logger import get_logger, setup_logging
from md2kindle.models import EpubArtifact, RunOptions
from md2kindle.renderer import render_document

logger = get_logger("main")


class Stage(str, Enum):
    SOURCE_RESOLVED = "source_resolved"
    CONTENT_FETCHED = "content_fetched"
    RENDERED = "rendered"
    PACKAGED = "packaged"
    SENT = "sent"
    DONE = "done"


class Sender(Protocol):
    def send(self, recipient: str, attachment_path: str | os.PathLike) -> None: ...


@dataclass
class PipelineResult:
    """Outcome of one run; ``stage`` is the last step that completed."""

    stage: Stage
    destination: Optional[str] = None
    artifact: Optional[EpubArtifact] = None
    error: Optional[Md2KindleError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        return 0 if self.error is None else self.error.exit_code


def run_pipeline(
    options: RunOptions,
    config: MailConfig | None = None,
    sender: Sender | None = None,
    output_path: str | os.PathLike = OUTPUT_PATH,
) -> PipelineResult:
    """Run every step in order, stopping at the first failure.

    Failures are returned in the result, never raised. A partially written or
    already sent EPUB is left in place.
    """
    result = PipelineResult(stage=Stage.SOURCE_RESOLVED)
    try:
        if config is None:
            config = load_mail_config()
        result.destination = config.resolve_recipient(options.email)

        document = fetch_markdown(options, timeout=config.http_timeout)
        result.stage = Stage.CONTENT_FETCHED

        rendered = render_document(document)
        result.stage = Stage.RENDERED
        logger.debug(f"Rendered {len(document.content)} characters of markdown into '{rendered.title}'")

        result.artifact = package_rendered(rendered, output_path)
        result.stage = Stage.PACKAGED

        if sender is None:
            sender = EmailSender(config)
        sender.send(result.destination, result.artifact.path)
        result.stage = Stage.SENT
    except Md2KindleError as e:
        result.error = e
        return result
    except Exception as e:  # noqa: BLE001
        logger.debug("Unexpected pipeline failure", exc_info=True)
        result.error = Md2KindleError(f"{e.__class__.__name__}: {e}")
        result.error.__cause__ = e
        return result

    result.stage = Stage.DONE
    return result


def _log_level(args) -> int:
    if args.verbose:
        return logging.DEBUG
    if args.quiet:
        return logging.ERROR
    return logging.INFO


def run_main(args) -> int:
    """Resolve options, run the pipeline and report; returns the exit code."""
    setup_logging(level=_log_level(args))

    try:
        options = resolve_options(args)
    except Md2KindleError as e:
        logger.error(f"Error: {e}")
        return e.exit_code

    result = run_pipeline(options)
    if result.ok:
        logger.info(f"EPUB successfully sent to {result.destination}")
    else:
        logger.error(f"Error: {result.error}")
        logger.debug(f"Failed after stage '{result.stage.value}' ({result.error.kind.value})")
    return result.exit_code


def main(argv=None):
    """Entry point for the md2kindle command."""
    try:
        args = parse_args(argv)
        code = run_main(args)
    except KeyboardInterrupt:
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
