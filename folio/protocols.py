"""Protocol definitions for Folio.

This module defines the small interfaces the content loaders and the page
builder depend on, so that alternative parsers or renderers can be swapped in
(and faked in tests) without touching the loaders themselves.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SectionParser(Protocol):
    """Protocol for extracting structured records from a document body.

    Implementations scan the body with fixed line patterns and return
    one record per match, in document order.
    """

    @abstractmethod
    def parse(self, body: str) -> list[Any]:
        """Parse records out of a Markdown body.

        Args:
            body: Document body without front matter.

        Returns:
            Parsed records; empty when nothing matches.
        """
        ...


@runtime_checkable
class MarkupRenderer(Protocol):
    """Protocol for converting a document body to HTML."""

    @abstractmethod
    def render(self, markdown: str, slug: str) -> str:
        """Render Markdown to HTML.

        Args:
            markdown: Document body.
            slug: Identity of the document, used to rewrite local image paths.

        Returns:
            Rendered HTML.
        """
        ...
