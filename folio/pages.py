"""Page assembly for Folio.

Each page kind has a builder that composes a content fragment from the site
configuration and the loaded records, then fills a page shell with it. A
page is a pure function of (config, shell, content): builders keep no state
between calls.

Page kinds:
- home: profile, social links and the latest posts.
- blog: every post with its excerpt.
- projects: finished projects, grouped by status.
- ideas: ideas grouped by status with a badge and a count.
- tools: tool categories in list or grid layout.
- post: a single rendered post.

Key functions:
- render_page: Render one page kind to its final HTML.
- output_path: Relative output path for a page kind.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .config import SiteConfig
from .content import BlogPost, Idea, Project, SiteContent, ToolCategory
from .parsers import COMPLETED, PLANNED, Tool
from .protocols import MarkupRenderer
from .renderers import default_renderer
from .templates import PageShell

HOME = "home"
BLOG = "blog"
PROJECTS = "projects"
IDEAS = "ideas"
TOOLS = "tools"
POST = "post"

LISTING_PAGES = (HOME, BLOG, PROJECTS, IDEAS, TOOLS)
STATUS_GROUPS = (COMPLETED, PLANNED)

ACTIVE_NAV_CLASS = "border-b-[#30bde8] text-[#0e181b]"
INACTIVE_NAV_CLASS = "border-b-transparent text-[#4e8697]"
BADGE_STYLES = {
    "in-progress": "bg-yellow-100 text-yellow-800",
    PLANNED: "bg-gray-100 text-gray-800",
    COMPLETED: "bg-green-100 text-green-800",
}
DEFAULT_BADGE_STYLE = "bg-gray-100 text-gray-800"


@dataclass(frozen=True)
class PageContext:
    """Inputs for rendering one page.

    Attributes:
        config: Site configuration.
        shell: Page shell to fill.
        content: Loaded site content.
        post: The post being rendered (post pages only).
        renderer: Markdown renderer for post bodies.
    """

    config: SiteConfig
    shell: PageShell
    content: SiteContent
    post: BlogPost | None = None
    renderer: MarkupRenderer = default_renderer


def output_path(page_kind: str, post: BlogPost | None = None) -> str:
    """Return the output path of a page, relative to the output directory.

    Args:
        page_kind: One of the page kind constants.
        post: The post, for post pages.

    Returns:
        "index.html" for home, "blog/<slug>.html" for posts,
        "<page_kind>.html" otherwise.
    """
    if page_kind == HOME:
        return "index.html"
    if page_kind == POST:
        if post is None:
            raise ValueError("post pages need a post")
        return f"blog/{post.slug}.html"
    return f"{page_kind}.html"


# --- shared fragments ---


def render_nav(config: SiteConfig, current: str) -> str:
    """Render the navigation bar with the current page marked active."""
    links = []
    for item in config.navigation:
        css = ACTIVE_NAV_CLASS if item.id == current else INACTIVE_NAV_CLASS
        links.append(
            f"""<a class="flex flex-col items-center justify-center border-b-[3px] {css} pb-[13px] pt-4" href="{item.url}">
        <p class="text-sm font-bold leading-normal tracking-[0.015em]">{item.name}</p>
      </a>"""
        )
    return "".join(links)


def _nav_block(config: SiteConfig, current: str) -> str:
    return f"""
      <div class="pb-3">
        <div class="flex border-b border-[#d0e1e7] px-4 gap-8">
          {render_nav(config, current)}
        </div>
      </div>"""


def render_avatar(config: SiteConfig) -> str:
    """Render the avatar: the local image if set, otherwise a gradient initial.

    With no local image and use_gradient turned off, no avatar is drawn.
    """
    avatar = config.avatar
    if avatar.local_image:
        return f"""<div class="bg-center bg-no-repeat aspect-square bg-cover rounded-full min-h-32 w-32" style="background-image: url('{avatar.local_image}');"></div>"""
    if not avatar.use_gradient:
        return ""
    return f"""<div class="bg-center bg-no-repeat aspect-square bg-cover rounded-full min-h-32 w-32 bg-gradient-to-br {avatar.gradient_colors} flex items-center justify-center">
      <span class="text-white text-4xl font-bold">{avatar.initial}</span>
    </div>"""


def render_status_badge(config: SiteConfig, status: str) -> str:
    """Render a status badge; unknown statuses get the "unknown" label."""
    labels = {
        "in-progress": config.status.in_progress,
        PLANNED: config.status.planned,
        COMPLETED: config.status.completed,
    }
    css = BADGE_STYLES.get(status, DEFAULT_BADGE_STYLE)
    text = labels.get(status, config.status.unknown)
    return f'<span class="{css} text-xs px-2 py-1 rounded-full font-medium">{text}</span>'


def _page_header(title: str, description: str) -> str:
    return f"""
      <div class="flex flex-wrap justify-between gap-3 p-4">
        <div class="flex min-w-72 flex-col gap-3">
          <p class="text-[#111618] tracking-light text-[32px] font-bold leading-tight">{title}</p>
          <p class="text-[#637f88] text-sm font-normal leading-normal">
            {description}
          </p>
        </div>
      </div>"""


def _cover(post: BlogPost) -> str:
    return f"""<div class="w-full aspect-video rounded-lg flex-1 bg-cover bg-center" style="background-image: url('{post.cover_image}');">
                <div class="w-full h-full bg-black bg-opacity-20 rounded-lg flex items-center justify-center">
                  <span class="text-white text-2xl font-bold">📝</span>
                </div>
              </div>"""


def group_by_status(
    records: Iterable[Project | Idea], statuses: Iterable[str] = STATUS_GROUPS
) -> list[tuple[str, list]]:
    """Group records by status, in the given status order, dropping empty groups."""
    records = list(records)
    groups = []
    for status in statuses:
        members = [r for r in records if r.status == status]
        if members:
            groups.append((status, members))
    return groups


def split_by_layout(
    categories: Iterable[ToolCategory],
) -> tuple[list[ToolCategory], list[ToolCategory]]:
    """Split tool categories into (list layout, grid layout)."""
    list_style: list[ToolCategory] = []
    grid_style: list[ToolCategory] = []
    for category in categories:
        (grid_style if category.layout == "grid" else list_style).append(category)
    return list_style, grid_style


def _page_title(config: SiteConfig, page_kind: str) -> str:
    item = config.nav_item(page_kind)
    name = item.name if item else getattr(config.pages, page_kind).title
    return f"{name} - {config.title}"


# --- page builders ---


def build_home(context: PageContext) -> str:
    config = context.config
    home = config.homepage
    posts = context.content.posts[: home.latest_count]
    tags = "".join(
        f'<p class="text-[#4e8697] text-base font-normal leading-normal text-center">{tag}</p>'
        for tag in home.tags
    )
    social = "".join(
        f"""
          <a href="{link.url}" class="flex items-center gap-2 text-[#4e8697] hover:text-[#30bde8] transition-colors">
            <span class="text-xl">{link.icon}</span>
            <span class="text-sm font-medium">{link.label}</span>
          </a>
        """
        for link in home.social
    )
    cards = "".join(
        f"""
        <div class="p-4">
          <a href="/blog/{post.slug}.html" class="block hover:bg-gray-50 transition-colors rounded-lg">
            <div class="flex items-stretch justify-between gap-4 rounded-lg">
              <div class="flex flex-col gap-1 flex-[2_2_0px]">
                <p class="text-[#4e8697] text-sm font-normal leading-normal">{post.display_date}</p>
                <p class="text-[#0e181b] text-base font-bold leading-tight">{post.title}</p>
                <p class="text-[#4e8697] text-sm font-normal leading-normal">{post.excerpt}</p>
              </div>
              {_cover(post)}
            </div>
          </a>
        </div>
      """
        for post in posts
    )
    fragment = f"""
      <div class="flex p-4 @container">
        <div class="flex w-full flex-col gap-4 items-center">
          <div class="flex gap-4 flex-col items-center">
            {render_avatar(config)}
            <div class="flex flex-col items-center justify-center">
              <p class="text-[#0e181b] text-[22px] font-bold leading-tight tracking-[-0.015em] text-center">{home.name}</p>
              {tags}
            </div>
          </div>
        </div>
      </div>
      <p class="text-[#0e181b] text-base font-normal leading-normal pb-3 pt-1 px-4 text-center">
        {home.signature}
      </p>

      <div class="flex justify-center gap-6 px-4 py-4">
        {social}
      </div>
      {_nav_block(config, HOME)}
      <h2 class="text-[#0e181b] text-[22px] font-bold leading-tight tracking-[-0.015em] px-4 pb-3 pt-5">{config.pages.home.latest_articles}</h2>
      {cards}
    """
    return context.shell.fill(config.title, config.description, fragment)


def build_blog(context: PageContext) -> str:
    config = context.config
    strings = config.pages.blog
    cards = "".join(
        f"""
        <div class="p-4">
          <div class="flex items-stretch justify-between gap-4 rounded-lg">
            <div class="flex flex-col gap-1 flex-[2_2_0px]">
              <p class="text-[#4e8697] text-sm font-normal leading-normal">{post.display_date}</p>
              <p class="text-[#0e181b] text-base font-bold leading-tight">{post.title}</p>
              <p class="text-[#4e8697] text-sm font-normal leading-normal">{post.excerpt}</p>
              <a href="blog/{post.slug}.html" class="text-[#30bde8] text-sm font-medium hover:underline">{strings.read_more}</a>
            </div>
            {_cover(post)}
          </div>
        </div>
      """
        for post in context.content.posts
    )
    fragment = f"""{_nav_block(config, BLOG)}
      <h2 class="text-[#0e181b] text-[22px] font-bold leading-tight tracking-[-0.015em] px-4 pb-3 pt-5">{strings.title}</h2>
      {cards}
    """
    return context.shell.fill(
        _page_title(config, BLOG), strings.description, fragment
    )


def _checklist_row(record: Project | Idea) -> str:
    icon = "✅" if record.status == COMPLETED else "⭕"
    return f"""
        <div class="flex items-center gap-4 py-3 border-b border-gray-100 last:border-b-0">
          <span class="text-lg">{icon}</span>
          <div class="flex-1">
            <h3 class="text-[#111618] text-base font-medium leading-normal">{record.title}</h3>
            <p class="text-[#637f88] text-sm font-normal leading-normal mt-1">{record.description}</p>
          </div>
        </div>
      """


def _checklist_rows(records: Iterable[Project | Idea]) -> str:
    return "".join(_checklist_row(record) for record in records)


def build_projects(context: PageContext) -> str:
    config = context.config
    strings = config.pages.projects
    sections = "".join(
        f"""
      <div class="p-4">
        <div class="bg-white rounded-lg border border-gray-200">
          {_checklist_rows(projects)}
        </div>
      </div>"""
        for _, projects in group_by_status(context.content.projects)
    )
    fragment = f"""{_nav_block(config, PROJECTS)}{_page_header(strings.title, strings.description)}{sections}
    """
    return context.shell.fill(
        _page_title(config, PROJECTS), strings.page_description, fragment
    )


def build_ideas(context: PageContext) -> str:
    config = context.config
    strings = config.pages.ideas
    sections = "".join(
        f"""
        <div class="p-4">
          <h2 class="text-[#111618] text-xl font-bold mb-4 flex items-center gap-2">
            {render_status_badge(config, status)}
            <span>{len(ideas)} {strings.project_count}</span>
          </h2>
          <div class="bg-white rounded-lg border border-gray-200">
            {_checklist_rows(ideas)}
          </div>
        </div>
      """
        for status, ideas in group_by_status(context.content.ideas)
    )
    fragment = f"""{_nav_block(config, IDEAS)}{_page_header(strings.title, strings.description)}
      {sections}
    """
    return context.shell.fill(
        _page_title(config, IDEAS), strings.page_description, fragment
    )


def _tool_link(tool: Tool, gap: str) -> str:
    return f"""<a href="{tool.url}" class="flex items-center {gap} text-[#4e8697] hover:text-[#30bde8] transition-colors">
              <span class="text-xl">{tool.icon}</span>
              <span>{tool.name}</span>
            </a>"""


def _tool_card(category: ToolCategory, items_class: str, gap: str) -> str:
    items = "".join(_tool_link(tool, gap) for tool in category.tools)
    return f"""<div class="border border-[#d0e1e7] rounded-lg p-6">
            <h3 class="text-[#111618] text-lg font-bold mb-4">{category.title}</h3>
            <p class="text-[#637f88] text-sm mb-4">{category.description}</p>
            <div class="{items_class}">
              {items}
            </div>
          </div>"""


def render_tool_layout(categories: Iterable[ToolCategory]) -> str:
    """List-style categories share a two-column grid; grid-style ones stand alone."""
    list_style, grid_style = split_by_layout(categories)
    html = ""
    if list_style:
        cards = "".join(_tool_card(c, "space-y-3", "gap-3") for c in list_style)
        html += f"""<div class="grid grid-cols-1 md:grid-cols-2 gap-6">
          {cards}
        </div>"""
    for category in grid_style:
        html += _tool_card(category, "grid grid-cols-2 md:grid-cols-4 gap-4", "gap-2")
    return html


def build_tools(context: PageContext) -> str:
    config = context.config
    strings = config.pages.tools
    fragment = f"""{_nav_block(config, TOOLS)}{_page_header(strings.title, strings.description)}
      <div class="p-4 space-y-6">
        {render_tool_layout(context.content.tool_categories)}
      </div>
    """
    return context.shell.fill(
        _page_title(config, TOOLS), strings.page_description, fragment
    )


def build_post(context: PageContext) -> str:
    post = context.post
    if post is None:
        raise ValueError("post pages need a post")
    config = context.config
    blog_item = config.nav_item(BLOG)
    blog_name = blog_item.name if blog_item else config.pages.blog.title
    body = context.renderer.render(post.content, post.slug)
    fragment = f"""{_nav_block(config, BLOG)}
        <div class="flex flex-wrap gap-2 p-4">
          <a class="text-[#637f88] text-base font-medium leading-normal" href="../blog.html">{blog_name}</a>
          <span class="text-[#637f88] text-base font-medium leading-normal">/</span>
          <span class="text-[#111618] text-base font-medium leading-normal">{post.title}</span>
        </div>
        <h2 class="text-[#111618] tracking-light text-[28px] font-bold leading-tight px-4 text-left pb-3 pt-5">{post.title}</h2>
        <p class="text-[#637f88] text-sm font-normal leading-normal pb-3 pt-1 px-4">{config.pages.post.published_on} {post.display_date}</p>
        <div class="px-4 prose prose-lg max-w-none">
          {body}
        </div>
      """
    return context.shell.fill(
        f"{post.title} - {config.title}", post.excerpt, fragment
    )


PAGE_BUILDERS: dict[str, Callable[[PageContext], str]] = {
    HOME: build_home,
    BLOG: build_blog,
    PROJECTS: build_projects,
    IDEAS: build_ideas,
    TOOLS: build_tools,
    POST: build_post,
}


def render_page(page_kind: str, context: PageContext) -> str:
    """Render one page to its final HTML.

    Args:
        page_kind: One of home, blog, projects, ideas, tools, post.
        context: Configuration, shell, content and (for posts) the post.

    Returns:
        Complete page text, ready to be written to output_path(page_kind).

    Raises:
        ValueError: For an unknown page kind, or a post page without a post.
    """
    try:
        builder = PAGE_BUILDERS[page_kind]
    except KeyError:
        raise ValueError(f"Unknown page kind: {page_kind!r}") from None
    return builder(context)
