"""Utility functions for Folio.

This module contains small helpers shared across the Folio codebase:
string helpers for slugs and titles, and filesystem helpers used by the
build pipeline.

Key functions:
    slugify: Convert a title to a URL slug.
    titleize: Convert a file or directory name to a human-readable title.
    is_markdown: Check if a path is a Markdown file.
    ensure_clean_dir: Ensure a directory exists and is empty.
    copy_tree: Recursively copy a directory, merging into the destination.
"""

from __future__ import annotations

import re
import shutil
from collections.abc import Callable
from pathlib import Path


def slugify(name: str) -> str:
    """Convert a title or filename stem to a slug.

    Non-ASCII words are kept (a post titled in Chinese keeps its characters),
    everything that is not a word character becomes a single hyphen.

    Args:
        name: Title or filename stem.

    Returns:
        URL-friendly slug, or "post" if nothing usable remains.

    Examples:
        >>> slugify("Hello, World!")
        'hello-world'
    """
    cleaned = re.sub(r"[^\w]+", "-", name.strip().lower())
    cleaned = cleaned.replace("_", "-").strip("-")
    return re.sub(r"-{2,}", "-", cleaned) or "post"


def titleize(filename: str) -> str:
    """Convert a filename to a human-readable title.

    Replaces hyphens and underscores with spaces and capitalizes each word.

    Args:
        filename: Filename with or without extension.

    Returns:
        Human-readable title string.

    Examples:
        >>> titleize("getting-started.md")
        'Getting Started'
    """
    base = Path(filename).stem if filename.endswith(".md") else filename
    words = re.split(r"[\s\-_]+", base)
    return " ".join(word.capitalize() for word in words if word) or "Untitled"


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.

    Returns:
        True if the file has .md extension (case-insensitive).
    """
    return path.suffix.lower() == ".md"


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty.

    If the directory exists, removes all contents. Creates the
    directory if it doesn't exist.

    Args:
        path: Directory path to clean or create.
    """
    if path.exists():
        shutil.rmtree(str(path), ignore_errors=True)
        if path.exists():
            # Fallback for stubborn directories
            for item in path.rglob("*"):
                if item.is_file():
                    item.unlink()
            for item in sorted(
                [p for p in path.rglob("*") if p.is_dir()], reverse=True
            ):
                item.rmdir()
            path.rmdir()
    path.mkdir(parents=True, exist_ok=True)


def copy_tree(
    source: Path,
    dest: Path,
    ignore: Callable[[Path], bool] | None = None,
) -> list[Path]:
    """Copy a directory tree into dest, merging with existing content.

    Args:
        source: Directory to copy from.
        dest: Directory to copy into (created as needed).
        ignore: Optional predicate; files for which it returns True are skipped.

    Returns:
        List of destination paths that were written.
    """
    written: list[Path] = []
    for src_path in sorted(source.rglob("*")):
        if src_path.is_dir():
            continue
        if ignore is not None and ignore(src_path):
            continue
        target = dest / src_path.relative_to(source)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src_path, target)
        written.append(target)
    return written
