"""Site building functionality for Folio.

This module sequences a full build: it wipes the output directory, copies
static files, loads all content once, renders every page and writes it out.
Every build starts from scratch; nothing is cached between builds.

Key functions:
- build_site: Main function to build the entire site.
- copy_post_assets: Publish the files that live next to each post.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .config import SiteConfig, load_config
from .content import (
    BLOG_DIR,
    POST_ASSET_ROOT,
    DirectoryReadError,
    SiteContent,
    load_all_content,
)
from .pages import LISTING_PAGES, POST, PageContext, output_path, render_page
from .templates import BASE_SHELL, POST_SHELL, PageShell, TemplateError
from .utils import copy_tree, ensure_clean_dir, is_markdown

# Failures caused by the project's files rather than by Folio itself
BUILD_ERRORS = (
    DirectoryReadError,
    TemplateError,
    OSError,
    UnicodeDecodeError,
    yaml.YAMLError,
)


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        pages: Paths of every page written, in write order.
        output_dir: Directory where the site was built.
        content: Content the pages were rendered from.
        config: Configuration used for the build.
    """

    pages: list[Path]
    output_dir: Path
    content: SiteContent
    config: SiteConfig = field(default_factory=SiteConfig)


def copy_post_assets(posts_dir: Path, output_dir: Path) -> list[Path]:
    """Copy the non-Markdown files of each post directory.

    Files of blog/<slug>/ land in images/blog/<slug>/, so "./images/x.png"
    in a post resolves to /images/blog/<slug>/images/x.png.

    Args:
        posts_dir: The blog content directory.
        output_dir: Build output directory.

    Returns:
        Paths written.
    """
    written: list[Path] = []
    if not posts_dir.exists():
        return written
    asset_root = output_dir / POST_ASSET_ROOT.strip("/")
    for item in sorted(posts_dir.iterdir(), key=lambda p: p.name):
        if item.is_dir():
            written.extend(copy_tree(item, asset_root / item.name, ignore=is_markdown))
    return written


def _write_page(output_dir: Path, relative: str, rendered: str) -> Path:
    """Write a rendered page to the output directory.

    Args:
        output_dir: Base output directory.
        relative: Output path relative to output_dir.
        rendered: Rendered HTML content.

    Returns:
        Path of the written file.
    """
    target = output_dir / relative
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w", encoding="utf-8") as f:
        f.write(rendered)
    return target


def build_site(
    project_root: Path,
    output_dir_override: Path | None = None,
) -> BuildResult:
    """Build the entire static site.

    Args:
        project_root: Root directory of the project.
        output_dir_override: Optional path to write the build output instead of config output_dir.

    Returns:
        BuildResult with the written pages, output directory and loaded content.

    Raises:
        DirectoryReadError: If a content directory is missing or unreadable.
        FileNotFoundError: If a page shell is missing.
        TemplateError: If a page shell repeats a placeholder.
        UnicodeDecodeError: If a content file or shell is not valid UTF-8.
        yaml.YAMLError: If folio.yaml is not valid YAML.
    """
    config = load_config(project_root)
    output_dir = output_dir_override or (project_root / config.output_dir)
    content_dir = project_root / config.content_dir
    templates_dir = project_root / config.templates_dir

    ensure_clean_dir(output_dir)
    (output_dir / BLOG_DIR).mkdir(parents=True, exist_ok=True)

    public_dir = project_root / config.public_dir
    if public_dir.exists():
        copy_tree(public_dir, output_dir)
    copy_post_assets(content_dir / BLOG_DIR, output_dir)

    content = load_all_content(content_dir, config.tool_labels)
    base_shell = PageShell.load(templates_dir / BASE_SHELL)
    post_shell = PageShell.load(templates_dir / POST_SHELL)

    written: list[Path] = []
    for page_kind in LISTING_PAGES:
        context = PageContext(config=config, shell=base_shell, content=content)
        rendered = render_page(page_kind, context)
        written.append(_write_page(output_dir, output_path(page_kind), rendered))

    for post in content.posts:
        context = PageContext(
            config=config, shell=post_shell, content=content, post=post
        )
        rendered = render_page(POST, context)
        written.append(_write_page(output_dir, output_path(POST, post), rendered))

    return BuildResult(
        pages=written, output_dir=output_dir, content=content, config=config
    )
