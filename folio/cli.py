"""Command-line interface for Folio.

This module defines the CLI commands using Click framework.
It provides commands for creating new projects, building sites and adding posts.

Commands:
- new: Scaffold a new Folio project.
- build: Build the site into the output directory, optionally watching for changes.
- post: Create a new blog post interactively.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from datetime import date
from pathlib import Path

import click
import questionary

from . import __version__
from .config import load_config
from .content import BLOG_DIR, POST_INDEX
from .extractors import dump_document
from .utils import slugify

# Path to the project skeleton copied by `folio new`
_SKELETON_DIR = Path(__file__).parent / "scaffold"


@click.group()
@click.version_option(version=__version__, prog_name="folio")
def cli():
    """Folio static site generator."""


@cli.command()
@click.argument("name")
def new(name: str):
    """Scaffold a new Folio project."""
    target = Path(name).resolve()
    if target.exists() and any(target.iterdir()):
        raise click.ClickException(
            f"Refusing to initialize into non-empty directory: {target}"
        )
    _scaffold(target)
    click.echo(f"New Folio site created at {target}")


@cli.command()
@click.option("--watch", is_flag=True, help="Rebuild whenever a source file changes")
def build(watch: bool):
    """Build the site into the output directory."""
    project_root = Path.cwd()
    from .build import BUILD_ERRORS, build_site

    try:
        result = build_site(project_root)
    except BUILD_ERRORS as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  Error: {exc}", fg="yellow"), err=True)
        raise SystemExit(1) from None
    for page in result.pages:
        click.echo(f"  {page.relative_to(result.output_dir).as_posix()}")
    click.echo(f"Built {len(result.pages)} pages into {result.output_dir}")

    if watch:
        from .watcher import SiteWatcher

        SiteWatcher(project_root).start()


@cli.command()
def post():
    """Create a new blog post interactively."""
    project_root = Path.cwd()
    config = load_config(project_root)
    posts_dir = project_root / config.content_dir / BLOG_DIR

    if not posts_dir.exists():
        raise click.ClickException(
            f"No {posts_dir.relative_to(project_root)} directory found. "
            "Run this command from a Folio project root."
        )

    title = questionary.text(
        "Title:",
        validate=lambda x: len(x.strip()) > 0 or "Title cannot be empty",
        style=_questionary_style(),
    ).ask()

    if title is None:
        raise click.Abort()

    title = title.strip()

    slug = questionary.text(
        "Slug:",
        default=slugify(title),
        validate=lambda x: len(x.strip()) > 0 or "Slug cannot be empty",
        style=_questionary_style(),
    ).ask()

    if slug is None:
        raise click.Abort()

    slug = slug.strip()

    # Slugs are shared by both post layouts
    target_dir = posts_dir / slug
    if target_dir.exists() or (posts_dir / f"{slug}.md").exists():
        raise click.ClickException(f"A post with slug '{slug}' already exists")

    metadata = {
        "title": title,
        "date": date.today(),
        "coverImage": "./images/cover.svg",
    }
    (target_dir / "images").mkdir(parents=True)
    target_path = target_dir / POST_INDEX
    target_path.write_text(dump_document(metadata, f"\n# {title}\n\n"), encoding="utf-8")

    rel_path = target_path.relative_to(project_root)
    click.echo(f"Created {rel_path}")


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()


def _scaffold(root: Path) -> None:
    """Create the directory structure and files for a new Folio project.

    Args:
        root: Root directory for the new project.
    """
    for src_path in _SKELETON_DIR.rglob("*"):
        if src_path.is_dir():
            continue
        rel_path = src_path.relative_to(_SKELETON_DIR)
        dest_path = root / rel_path
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src_path, dest_path)

    _try_git_init(root)


def _try_git_init(root: Path) -> None:
    """Initialize a git repository if git is available."""
    if os.environ.get("FOLIO_SKIP_GIT_INIT") == "1":
        return
    git_bin = shutil.which("git")
    if not git_bin:
        return
    try:
        subprocess.run(
            [git_bin, "init"],
            cwd=root,
            check=True,
            capture_output=True,
        )
    except (OSError, subprocess.CalledProcessError):
        # Non-fatal: user can run git init manually
        pass
