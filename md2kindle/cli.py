import argparse

from md2kindle.errors import UsageError
from md2kindle.models import RunOptions, SourceKind

USAGE = "%(prog)s (--file <markdown_path> | --url <markdown_url>) [--email <kindle_email>]"


def create_parser():
    """Create the command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="md2kindle",
        usage=USAGE,
        description="Convert a Markdown document to EPUB and email it to a Kindle address",
    )
    parser.add_argument(
        "-f",
        "--file",
        type=str,
        help="Path to a local Markdown file",
    )
    parser.add_argument(
        "-u",
        "--url",
        type=str,
        help="URL to Markdown content",
    )
    parser.add_argument(
        "-e",
        "--email",
        type=str,
        help="Your Kindle email address (default: KINDLE_EMAIL from the environment)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (DEBUG level)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress all output except errors (ERROR level)",
    )
    return parser


def parse_args(args=None):
    """Parse command line arguments."""
    parser = create_parser()
    return parser.parse_args(args)


def resolve_options(args) -> RunOptions:
    """Validate parsed arguments and build RunOptions.

    Exactly one of --file / --url must be given; both or neither is a UsageError.
    """
    file_path = (args.file or "").strip()
    url = (args.url or "").strip()
    email = (getattr(args, "email", None) or "").strip() or None

    if file_path and url:
        raise UsageError("--file and --url are mutually exclusive; provide only one.")
    if file_path:
        return RunOptions(source_kind=SourceKind.FILE, source=file_path, email=email)
    if url:
        return RunOptions(source_kind=SourceKind.URL, source=url, email=email)
    raise UsageError("Please provide either --file or --url.")
