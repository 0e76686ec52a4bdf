"""Page shells for Folio.

A page shell is a plain HTML file with three placeholders: {{TITLE}},
{{DESCRIPTION}} and {{CONTENT}}. Filling a shell is a single literal pass
over the shell text. Values are inserted as-is and never scanned again, so
placeholder-like text inside a post survives untouched.

Key class:
- PageShell: A loaded shell that can be filled for one page.
"""

from __future__ import annotations

import re
from pathlib import Path

PLACEHOLDERS = ("TITLE", "DESCRIPTION", "CONTENT")
PLACEHOLDER_RE = re.compile(r"\{\{(" + "|".join(PLACEHOLDERS) + r")\}\}")

BASE_SHELL = "base.html"
POST_SHELL = "post.html"

__all__ = ["BASE_SHELL", "PLACEHOLDERS", "POST_SHELL", "PageShell", "TemplateError"]


class TemplateError(Exception):
    """A page shell is unusable."""


class PageShell:
    """Shared outer markup of a page.

    Attributes:
        text: Raw shell text.
        name: Name used in error messages (usually the file name).
    """

    def __init__(self, text: str, name: str = "<shell>"):
        for placeholder in PLACEHOLDERS:
            count = text.count(f"{{{{{placeholder}}}}}")
            if count > 1:
                raise TemplateError(
                    f"{name}: placeholder {{{{{placeholder}}}}} appears {count} times"
                )
        self.text = text
        self.name = name

    @classmethod
    def load(cls, path: Path) -> PageShell:
        """Read a shell from disk.

        Raises:
            FileNotFoundError: If the shell file does not exist.
            TemplateError: If a placeholder occurs more than once.
        """
        return cls(path.read_text(encoding="utf-8"), name=path.name)

    def fill(self, title: str, description: str, content: str) -> str:
        """Substitute the placeholders in one pass.

        Args:
            title: Value for {{TITLE}}.
            description: Value for {{DESCRIPTION}}.
            content: Value for {{CONTENT}}.

        Returns:
            The complete page.
        """
        values = {"TITLE": title, "DESCRIPTION": description, "CONTENT": content}
        return PLACEHOLDER_RE.sub(lambda m: values[m.group(1)], self.text)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"PageShell({self.name!r})"
