"""HTML to EPUB packaging using EbookLib.

The rendered document becomes the single chapter of an EPUB3 container with
navigation (nav + NCX) so that Kindle's converter accepts it. Metadata is
deliberately small: title, a fixed author, language and a random identifier.
"""
from __future__ import annotations

import os
import uuid
from pathlib import Path

from ebooklib import epub

from md2kindle.errors import PackagingError
from md2kindle.logger import get_logger
from md2kindle.models import EpubArtifact, RenderedContent

OUTPUT_PATH = Path("output.epub")
AUTHOR = "Markdown Converter"
CHAPTER_TITLE = "Markdown Content"
CHAPTER_FILE = "chapter.xhtml"
LANGUAGE = "en"

logger = get_logger("epub")


def build_book(title: str, html_content: str) -> epub.EpubBook:
    book = epub.EpubBook()
    book.set_identifier(f"urn:uuid:{uuid.uuid4()}")
    book.set_title(title)
    book.set_language(LANGUAGE)
    book.add_author(AUTHOR)

    chapter = epub.EpubHtml(title=CHAPTER_TITLE, file_name=CHAPTER_FILE, lang=LANGUAGE)
    # lxml rejects a body with no elements (empty string, lone comment)
    body = html_content if html_content.strip() else "<p></p>"
    chapter.content = f"<div>{body}</div>"
    book.add_item(chapter)

    book.toc = (epub.Link(CHAPTER_FILE, CHAPTER_TITLE, "chapter"),)
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", chapter]
    return book


def package(
    title: str,
    html_content: str,
    output_path: str | os.PathLike = OUTPUT_PATH,
) -> EpubArtifact:
    """Write ``html_content`` as a one-chapter EPUB, replacing any existing file.

    Raises
    ------
    PackagingError: if the container cannot be built or written.
    """
    out_path = Path(output_path)
    logger.info(f"Packaging EPUB '{title}' -> {out_path}")

    try:
        book = build_book(title, html_content)
        # write_epub() swallows IOError, so drive the writer directly
        writer = epub.EpubWriter(str(out_path), book, {})
        writer.process()
        writer.write()
    except Exception as e:  # noqa: BLE001 - EbookLib and lxml raise assorted types
        logger.debug(f"EPUB packaging failure: {e.__class__.__name__}: {e}")
        raise PackagingError(f"Could not write EPUB to {out_path}: {e}") from e

    if not out_path.is_file():
        raise PackagingError(f"EPUB writer reported success but {out_path} was not created")

    logger.debug(f"EPUB written: {out_path} ({out_path.stat().st_size} bytes)")
    return EpubArtifact(path=out_path, title=title, author=AUTHOR)


def package_rendered(rendered: RenderedContent, output_path: str | os.PathLike = OUTPUT_PATH) -> EpubArtifact:
    return package(rendered.title, rendered.html, output_path)


__all__ = ["package", "package_rendered", "build_book", "OUTPUT_PATH", "AUTHOR", "CHAPTER_TITLE"]
