from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class SourceKind(str, Enum):
    FILE = "file"
    URL = "url"


@dataclass(frozen=True)
class RunOptions:
    """Parsed invocation parameters. Exactly one source is always set."""

    source_kind: SourceKind
    source: str
    email: Optional[str] = None

    @property
    def is_local(self) -> bool:
        return self.source_kind is SourceKind.FILE


@dataclass(frozen=True)
class MarkdownDocument:
    content: str
    origin: RunOptions


@dataclass(frozen=True)
class RenderedContent:
    html: str
    title: str


@dataclass(frozen=True)
class EpubArtifact:
    path: Path
    title: str
    author: str
