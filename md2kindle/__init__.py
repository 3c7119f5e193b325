"""Send a Markdown document to a Kindle as an EPUB attachment."""

__version__ = "0.1.0"
