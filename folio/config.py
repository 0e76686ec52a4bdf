"""Site configuration for Folio.

The site configuration lives in folio.yaml at the project root. It is read
once per build, merged over the defaults below and frozen into a SiteConfig
that is passed explicitly to everything that needs labels or paths.

Key objects:
- SiteConfig: Immutable configuration for one build.
- load_config: Read folio.yaml from a project root.
- config_from_mapping: Build a SiteConfig from a plain dictionary.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from .parsers import ToolLabels

CONFIG_FILE = "folio.yaml"


@dataclass(frozen=True)
class NavItem:
    name: str
    url: str
    id: str


@dataclass(frozen=True)
class SocialLink:
    url: str
    icon: str = ""
    label: str = ""


@dataclass(frozen=True)
class AvatarConfig:
    """Avatar shown on the home page.

    A local image wins; otherwise a gradient circle with an initial is drawn.
    """

    local_image: str = "/images/avatar.jpg"
    use_gradient: bool = True
    gradient_colors: str = "from-blue-400 to-purple-600"
    initial: str = "S"


@dataclass(frozen=True)
class HomepageConfig:
    name: str = "SkyBluues"
    signature: str = "很多事情，越做越简单，越想越困难，越拖越想放弃"
    tags: tuple[str, ...] = (
        "Programmer",
        "Independent Developer",
        "Guitar Enthusiast",
    )
    social: tuple[SocialLink, ...] = (
        SocialLink(url="https://github.com/skybluues", icon="📦", label="GitHub"),
        SocialLink(url="https://twitter.com/skybluues", icon="🐦", label="Twitter"),
        SocialLink(url="mailto:skybluuues@gmail.com", icon="📧", label="Email"),
    )
    latest_count: int = 3


@dataclass(frozen=True)
class PageStrings:
    """Labels for one page; each page uses the fields relevant to it."""

    title: str = ""
    description: str = ""
    page_description: str = ""
    read_more: str = ""
    project_count: str = ""
    latest_articles: str = ""
    published_on: str = ""


@dataclass(frozen=True)
class SitePages:
    home: PageStrings = PageStrings(latest_articles="最新文章")
    blog: PageStrings = PageStrings(
        title="博客文章", description="技术博客文章", read_more="阅读更多"
    )
    projects: PageStrings = PageStrings(
        title="项目展示",
        description="我的个人项目集合。",
        page_description="个人项目展示",
    )
    ideas: PageStrings = PageStrings(
        title="想法与计划",
        description="待开发的想法和计划，记录灵感和项目构思。",
        page_description="项目想法和计划",
        project_count="个项目",
    )
    tools: PageStrings = PageStrings(
        title="效率工具",
        description="日常使用的高效开发工具和资源链接，帮助提高工作效率。",
        page_description="效率工具和资源链接",
    )
    post: PageStrings = PageStrings(published_on="发布于")


@dataclass(frozen=True)
class StatusLabels:
    in_progress: str = "进行中"
    planned: str = "计划中"
    completed: str = "已完成"
    unknown: str = "未知"


DEFAULT_NAVIGATION = (
    NavItem(name="首页", url="index.html", id="home"),
    NavItem(name="博客", url="blog.html", id="blog"),
    NavItem(name="项目", url="projects.html", id="projects"),
    NavItem(name="想法", url="ideas.html", id="ideas"),
    NavItem(name="工具", url="tools.html", id="tools"),
)


@dataclass(frozen=True)
class SiteConfig:
    """Immutable configuration for one build.

    Attributes:
        title: Site title, used in every page title.
        description: Site description for the home page.
        homepage: Profile block of the home page.
        navigation: Ordered navigation entries.
        pages: Per-page labels.
        status: Status badge labels.
        avatar: Avatar rendering parameters.
        tool_labels: Field labels recognized in tool files.
        content_dir: Content root, relative to the project root.
        templates_dir: Directory holding base.html and post.html.
        public_dir: Static files copied verbatim into the output.
        output_dir: Build output directory.
    """

    title: str = "SkyBluues"
    description: str = (
        "Personal tech blog and project showcase website, sharing backend "
        "development experience, technical articles and open source projects"
    )
    homepage: HomepageConfig = HomepageConfig()
    navigation: tuple[NavItem, ...] = DEFAULT_NAVIGATION
    pages: SitePages = SitePages()
    status: StatusLabels = StatusLabels()
    avatar: AvatarConfig = AvatarConfig()
    tool_labels: ToolLabels = field(default_factory=ToolLabels)
    content_dir: str = "content"
    templates_dir: str = "templates"
    public_dir: str = "public"
    output_dir: str = "dist"

    def nav_item(self, item_id: str) -> NavItem | None:
        """Return the navigation entry with the given id, if any."""
        for item in self.navigation:
            if item.id == item_id:
                return item
        return None


def _known(cls, data: Mapping[str, Any]) -> dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


def _section(cls, data: Any, default):
    """Overlay a mapping on a default section instance."""
    if not isinstance(data, Mapping):
        return default
    values = {f.name: getattr(default, f.name) for f in fields(cls)}
    values.update(_known(cls, data))
    return cls(**values)


def _social_links(data: Any, default: tuple[SocialLink, ...]) -> tuple[SocialLink, ...]:
    if isinstance(data, Mapping):
        data = list(data.values())
    if not isinstance(data, list):
        return default
    return tuple(
        SocialLink(**_known(SocialLink, entry))
        for entry in data
        if isinstance(entry, Mapping) and entry.get("url")
    )


def _navigation(data: Any) -> tuple[NavItem, ...]:
    if not isinstance(data, list):
        return DEFAULT_NAVIGATION
    return tuple(
        NavItem(
            name=str(entry.get("name", "")),
            url=str(entry.get("url", "")),
            id=str(entry.get("id", "")),
        )
        for entry in data
        if isinstance(entry, Mapping)
    )


def config_from_mapping(data: Mapping[str, Any] | None) -> SiteConfig:
    """Build a SiteConfig from a (possibly partial) mapping.

    Unknown keys are ignored; missing keys keep their defaults.

    Args:
        data: Parsed folio.yaml content.

    Returns:
        Frozen SiteConfig.
    """
    base = SiteConfig()
    if not isinstance(data, Mapping):
        return base

    homepage = _section(HomepageConfig, data.get("homepage"), base.homepage)
    raw_home = data.get("homepage")
    if isinstance(raw_home, Mapping):
        tags = raw_home.get("tags")
        homepage = HomepageConfig(
            name=homepage.name,
            signature=homepage.signature,
            tags=tuple(str(t) for t in tags) if isinstance(tags, list) else base.homepage.tags,
            social=_social_links(raw_home.get("social"), base.homepage.social),
            latest_count=int(homepage.latest_count),
        )

    pages = base.pages
    raw_pages = data.get("pages")
    if isinstance(raw_pages, Mapping):
        pages = SitePages(
            **{
                f.name: _section(PageStrings, raw_pages.get(f.name), getattr(base.pages, f.name))
                for f in fields(SitePages)
            }
        )

    scalars = {
        key: str(data[key])
        for key in (
            "title",
            "description",
            "content_dir",
            "templates_dir",
            "public_dir",
            "output_dir",
        )
        if data.get(key) is not None
    }
    return SiteConfig(
        homepage=homepage,
        navigation=_navigation(data.get("navigation")),
        pages=pages,
        status=_section(StatusLabels, data.get("status"), base.status),
        avatar=_section(AvatarConfig, data.get("avatar"), base.avatar),
        tool_labels=_section(ToolLabels, data.get("tool_labels"), base.tool_labels),
        **scalars,
    )


def load_config(project_root: Path) -> SiteConfig:
    """Load site configuration from folio.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        SiteConfig with defaults applied for anything folio.yaml leaves out.
    """
    config_path = project_root / CONFIG_FILE
    loaded: Any = {}
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    return config_from_mapping(loaded)
