"""EPUB packaging package.

Wraps rendered HTML into a single-chapter EPUB file:

from md2kindle.email.epub import package
artifact = package("book", "<h1>Title</h1>")

``artifact.path`` points at the written ``output.epub``.
"""
from .converter import (
    AUTHOR,
    CHAPTER_TITLE,
    OUTPUT_PATH,
    package,
    package_rendered,
)

__all__ = [
    "package",
    "package_rendered",
    "OUTPUT_PATH",
    "AUTHOR",
    "CHAPTER_TITLE",
]
