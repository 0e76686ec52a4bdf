"""Content loading for Folio.

This module walks the content directory and turns each category of files
into sorted, normalized records ready for page assembly.

Content layout (relative to the content root):
- blog/<slug>/index.md or blog/<slug>.md: one post each.
- projects/*.md: checklist of finished projects.
- ideas/*.md: checklist of ideas, checked or not.
- tools/*.md: one tool category each, tools in "## " sections.

Key functions:
- get_blog_posts, get_projects, get_ideas, get_tools: Per-category loaders.
- load_all_content: Run every loader and bundle the results.

Missing optional fields fall back to the defaults defined below. A missing or
unreadable category directory raises DirectoryReadError.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any

from .extractors import ContentDocument, read_document
from .parsers import (
    COMPLETED,
    PLANNED,
    IdeaListParser,
    ProjectListParser,
    Tool,
    ToolLabels,
    ToolSectionParser,
)
from .protocols import SectionParser
from .utils import is_markdown, titleize

DEFAULT_COVER_IMAGE = "/images/default-cover.svg"
DEFAULT_ORDER = 999
DEFAULT_LAYOUT = "list"
LAYOUTS = ("list", "grid")
EXCERPT_LENGTH = 100
STATUS_RANK = {COMPLETED: 0, PLANNED: 1}
POST_INDEX = "index.md"
POST_ASSET_ROOT = "/images/blog"

BLOG_DIR = "blog"
PROJECTS_DIR = "projects"
IDEAS_DIR = "ideas"
TOOLS_DIR = "tools"


class DirectoryReadError(Exception):
    """A content directory could not be listed.

    Attributes:
        path: Directory that failed.
        message: Human-readable reason.
    """

    def __init__(self, path: Path, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


@dataclass
class BlogPost:
    """A blog post.

    Attributes:
        slug: Directory name (or file stem) of the post.
        title: Post title from front matter, or the titleized slug.
        date: Front matter date as parsed by YAML (date, datetime, str or None).
        excerpt: First characters of the body followed by "...".
        content: Full Markdown body.
        cover_image: Site path of the cover image.
        metadata: Complete front matter.
    """

    slug: str
    title: str
    date: Any
    excerpt: str
    content: str
    cover_image: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def display_date(self) -> str:
        if isinstance(self.date, (date, datetime)):
            return self.date.strftime("%Y-%m-%d")
        return "" if self.date is None else str(self.date)

    @property
    def sort_date(self) -> datetime | None:
        return _coerce_datetime(self.date)

    def as_dict(self) -> dict[str, Any]:
        return {
            **self.metadata,
            "slug": self.slug,
            "title": self.title,
            "date": self.date,
            "excerpt": self.excerpt,
            "content": self.content,
            "coverImage": self.cover_image,
        }


@dataclass
class Project:
    """A finished project parsed from a projects file."""

    title: str
    description: str
    source_file: str
    status: str = COMPLETED
    metadata: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {
            **self.metadata,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "sourceFile": self.source_file,
        }


@dataclass
class Idea:
    """An idea parsed from an ideas file."""

    title: str
    description: str
    completed: bool
    status: str
    source_file: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {
            **self.metadata,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "status": self.status,
            "sourceFile": self.source_file,
        }


@dataclass
class ToolCategory:
    """A tool category file and the tools listed in it."""

    slug: str
    title: str
    description: str
    order: int | float
    layout: str
    content: str
    tools: list[Tool] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class SiteContent:
    """Everything the page builders need, loaded once per build."""

    posts: list[BlogPost]
    projects: list[Project]
    ideas: list[Idea]
    tool_categories: list[ToolCategory]


def _coerce_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip()).replace(tzinfo=None)
        except ValueError:
            return None
    return None


def _coerce_order(value: Any) -> int | float:
    if isinstance(value, bool) or value is None:
        return DEFAULT_ORDER
    if isinstance(value, int):
        return value
    try:
        order = float(value) if isinstance(value, float) else float(str(value).strip())
    except ValueError:
        return DEFAULT_ORDER
    # nan and inf would break the sort
    return order if math.isfinite(order) else DEFAULT_ORDER


def _list_dir(path: Path) -> list[Path]:
    """List a directory sorted by name, surfacing failures as DirectoryReadError."""
    try:
        return sorted(path.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        reason = exc.strerror or type(exc).__name__
        raise DirectoryReadError(path, reason) from exc


def _markdown_documents(directory: Path) -> list[ContentDocument]:
    return [
        read_document(path)
        for path in _list_dir(directory)
        if path.is_file() and is_markdown(path)
    ]


def resolve_post_path(value: str, slug: str) -> str:
    """Rewrite a post-relative "./" path to the post's asset directory.

    Args:
        value: Path as written in front matter.
        slug: Post slug.

    Returns:
        "/images/blog/<slug>/..." for "./" paths; value unchanged otherwise.

    Examples:
        >>> resolve_post_path("./images/cover.png", "hello")
        '/images/blog/hello/images/cover.png'
    """
    if value.startswith("./"):
        return f"{POST_ASSET_ROOT}/{slug}/{value[2:]}"
    return value


def build_post(document: ContentDocument, slug: str) -> BlogPost:
    """Build a BlogPost from a parsed document."""
    metadata = document.metadata
    body = document.body
    cover = metadata.get("coverImage") or DEFAULT_COVER_IMAGE
    return BlogPost(
        slug=slug,
        title=str(metadata.get("title") or titleize(slug)),
        date=metadata.get("date"),
        excerpt=body.lstrip()[:EXCERPT_LENGTH] + "...",
        content=body,
        cover_image=resolve_post_path(str(cover), slug),
        metadata=dict(metadata),
    )


def sort_posts(posts: list[BlogPost]) -> list[BlogPost]:
    """Newest first; posts without a usable date go last."""
    dated = [p for p in posts if p.sort_date is not None]
    undated = [p for p in posts if p.sort_date is None]
    return sorted(dated, key=lambda p: p.sort_date, reverse=True) + undated


def get_blog_posts(content_dir: Path, limit: int | None = None) -> list[BlogPost]:
    """Load blog posts, newest first.

    Both layouts are supported: a directory holding index.md (the directory
    name is the slug) and a single Markdown file (the stem is the slug).

    Args:
        content_dir: Content root.
        limit: Optional cap on the number of posts returned.

    Returns:
        Sorted list of posts.

    Raises:
        DirectoryReadError: If the blog directory cannot be listed.
    """
    posts: list[BlogPost] = []
    for item in _list_dir(content_dir / BLOG_DIR):
        if item.is_dir():
            index = item / POST_INDEX
            if index.exists():
                posts.append(build_post(read_document(index), item.name))
        elif item.is_file() and is_markdown(item):
            posts.append(build_post(read_document(item), item.stem))
    posts = sort_posts(posts)
    return posts[:limit] if limit else posts


def _title_key(record: Project | Idea) -> tuple[str, str]:
    return (record.title.casefold(), record.title)


def get_projects(
    content_dir: Path, parser: SectionParser | None = None
) -> list[Project]:
    """Load finished projects from every projects file, sorted by title."""
    parser = parser or ProjectListParser()
    projects: list[Project] = []
    for document in _markdown_documents(content_dir / PROJECTS_DIR):
        for item in parser.parse(document.body):
            projects.append(
                Project(
                    title=item.title,
                    description=item.description,
                    source_file=document.path.stem,
                    metadata=dict(document.metadata),
                )
            )
    return sorted(projects, key=_title_key)


def sort_ideas(ideas: list[Idea]) -> list[Idea]:
    """Completed before planned, then alphabetical by title."""
    unranked = len(STATUS_RANK)
    return sorted(
        ideas, key=lambda i: (STATUS_RANK.get(i.status, unranked), *_title_key(i))
    )


def get_ideas(content_dir: Path, parser: SectionParser | None = None) -> list[Idea]:
    """Load ideas from every ideas file, completed first."""
    parser = parser or IdeaListParser()
    ideas: list[Idea] = []
    for document in _markdown_documents(content_dir / IDEAS_DIR):
        for item in parser.parse(document.body):
            ideas.append(
                Idea(
                    title=item.title,
                    description=item.description,
                    completed=item.completed,
                    status=item.status,
                    source_file=document.path.stem,
                    metadata=dict(document.metadata),
                )
            )
    return sort_ideas(ideas)


def build_tool_category(
    document: ContentDocument, slug: str, parser: SectionParser
) -> ToolCategory:
    """Build a ToolCategory, applying the order and layout defaults."""
    metadata = document.metadata
    layout = metadata.get("layout") or DEFAULT_LAYOUT
    if layout not in LAYOUTS:
        layout = DEFAULT_LAYOUT
    return ToolCategory(
        slug=slug,
        title=str(metadata.get("title") or titleize(slug)),
        description=str(metadata.get("description") or ""),
        order=_coerce_order(metadata.get("order")),
        layout=layout,
        content=document.body,
        tools=parser.parse(document.body),
        metadata=dict(metadata),
    )


def get_tools(
    content_dir: Path, labels: ToolLabels | None = None
) -> list[ToolCategory]:
    """Load tool categories ordered by their "order" field."""
    parser = ToolSectionParser(labels)
    categories = [
        build_tool_category(document, document.path.stem, parser)
        for document in _markdown_documents(content_dir / TOOLS_DIR)
    ]
    return sorted(categories, key=lambda c: c.order)


def load_all_content(
    content_dir: Path, tool_labels: ToolLabels | None = None
) -> SiteContent:
    """Load every content category.

    Args:
        content_dir: Content root.
        tool_labels: Labels used by the tool section parser.

    Returns:
        SiteContent with all posts, projects, ideas and tool categories.

    Raises:
        DirectoryReadError: If any category directory is missing or unreadable.
    """
    return SiteContent(
        posts=get_blog_posts(content_dir),
        projects=get_projects(content_dir),
        ideas=get_ideas(content_dir),
        tool_categories=get_tools(content_dir, tool_labels),
    )
