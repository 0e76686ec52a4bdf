"""Markdown rendering for Folio.

Post bodies are converted to HTML with mistune. Images that live next to a
post ("./images/...") are rewritten to the post's published asset directory
before conversion, on the raw Markdown text.

Key functions and classes:
- rewrite_local_images: Rewrite "./images/" references for one post.
- MarkdownRenderer: Renders a post body to HTML.
"""

from __future__ import annotations

import re

import mistune

from .content import POST_ASSET_ROOT

LOCAL_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(\./images/([^)]+)\)")

MARKDOWN_PLUGINS = ["strikethrough", "table", "url", "task_lists"]


def rewrite_local_images(markdown: str, slug: str) -> str:
    """Rewrite post-local image references to absolute site paths.

    Args:
        markdown: Raw Markdown body.
        slug: Slug of the post the body belongs to.

    Returns:
        Markdown with "![alt](./images/x)" turned into
        "![alt](/images/blog/<slug>/images/x)". Any other image path is kept.

    Examples:
        >>> rewrite_local_images("![a](./images/p.png)", "my-slug")
        '![a](/images/blog/my-slug/images/p.png)'
    """
    if not slug:
        return markdown
    return LOCAL_IMAGE_RE.sub(
        lambda m: f"![{m.group(1)}]({POST_ASSET_ROOT}/{slug}/images/{m.group(2)})",
        markdown,
    )


class MarkdownRenderer:
    """Renders Markdown content to HTML.

    Single newlines inside paragraphs become line breaks and raw HTML in
    the source is passed through.
    """

    def __init__(self, plugins: list[str] | None = None):
        self.plugins = list(plugins if plugins is not None else MARKDOWN_PLUGINS)

    def render(self, markdown: str, slug: str = "") -> str:
        """Render Markdown content to HTML.

        Args:
            markdown: Markdown source content.
            slug: Post slug for local image rewriting.

        Returns:
            Rendered HTML.
        """
        source = rewrite_local_images(markdown, slug)
        convert = mistune.create_markdown(
            renderer=mistune.HTMLRenderer(escape=False),
            hard_wrap=True,
            plugins=self.plugins,
        )
        return convert(source)


default_renderer = MarkdownRenderer()
