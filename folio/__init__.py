"""Folio static site generator.

This package turns a folder of Markdown content (blog posts, project lists,
idea lists and tool catalogs) plus a YAML site configuration into a small
set of static HTML pages.

The main entry point is the CLI module, which provides commands for scaffolding
new projects, building sites (optionally watching for changes) and creating posts.

Layout of the core:
- extractors: front matter parsing.
- parsers: line-oriented list and section parsers.
- content: records, defaults and content loaders.
- renderers: Markdown to HTML with local image rewriting.
- templates / pages: page shells and per-page fragment assembly.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
