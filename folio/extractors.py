"""Front matter extraction for Folio.

Every content file is a YAML front matter block followed by a Markdown body.
This module splits the two apart (and joins them again for new posts).

Key functions:
- extract_frontmatter: Split raw text into (metadata, body).
- parse_document: Build a ContentDocument from raw text.
- dump_document: Serialize metadata and body back into a content file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

FRONTMATTER_RE = re.compile(
    r"^---[ \t]*\r?\n(?:(.*?)\r?\n)??---[ \t]*(?:\r?\n|$)", re.DOTALL
)


@dataclass(frozen=True)
class ContentDocument:
    """A content file split into front matter and body.

    Attributes:
        metadata: Parsed front matter mapping (empty when absent or invalid).
        body: Markdown text following the front matter block.
        path: Source file, when the document was read from disk.
    """

    metadata: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    path: Path | None = None


def extract_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML frontmatter from content.

    Malformed front matter is treated as absent: the whole text is
    returned as the body.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (frontmatter dict, remaining content).
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1) or "") or {}
        if not isinstance(data, dict):
            return {}, text
        return data, text[match.end() :]
    except yaml.YAMLError:
        return {}, text


def parse_document(text: str, path: Path | None = None) -> ContentDocument:
    """Parse raw text into a ContentDocument."""
    metadata, body = extract_frontmatter(text)
    return ContentDocument(metadata=metadata, body=body, path=path)


def read_document(path: Path) -> ContentDocument:
    """Read and parse a content file from disk."""
    return parse_document(path.read_text(encoding="utf-8"), path)


def dump_document(metadata: dict[str, Any], body: str) -> str:
    """Serialize metadata and body into front matter text.

    Args:
        metadata: Front matter values.
        body: Markdown body.

    Returns:
        Text that extract_frontmatter splits back into (metadata, body).
    """
    if not metadata:
        return body
    header = yaml.safe_dump(metadata, allow_unicode=True, sort_keys=False)
    return f"---\n{header}---\n{body}"
