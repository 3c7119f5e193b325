"""Markdown to HTML rendering and EPUB title selection."""
from __future__ import annotations

import os

import markdown as md

from md2kindle.models import MarkdownDocument, RenderedContent, RunOptions

WEB_TITLE = "Web Markdown"


def render(markdown_text: str) -> str:
    """Convert Markdown text to an HTML fragment using the standard rule set."""
    # A fresh Markdown instance per call keeps output independent of earlier documents
    return md.Markdown(output_format="xhtml").convert(markdown_text)


def title_for(options: RunOptions) -> str:
    """Local files are titled after their base name without ``.md``; URLs get a fixed title."""
    if not options.is_local:
        return WEB_TITLE
    name = os.path.basename(options.source)
    if name.endswith(".md") and len(name) > len(".md"):
        name = name[: -len(".md")]
    return name


def render_document(document: MarkdownDocument) -> RenderedContent:
    return RenderedContent(html=render(document.content), title=title_for(document.origin))


__all__ = ["render", "render_document", "title_for", "WEB_TITLE"]
