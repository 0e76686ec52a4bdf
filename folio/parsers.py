"""Section and list parsers for Folio.

Project, idea and tool files keep their entries in the Markdown body rather
than in front matter. The parsers here pull those entries out line by line
with fixed patterns. Parsing is best-effort: lines that do not match are
skipped, never reported.

Key classes:
- ToolSectionParser: One Tool per "## Name" section that has a URL line.
- IdeaListParser: One idea per "- [ ] **Title** - Description" line.
- ProjectListParser: One project per checked "- [x] **Title** - Description" line.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

CHECKLIST_RE = re.compile(r"^- \[([ x])\] \*\*([^*]+)\*\* - (.+)$")
SECTION_RE = re.compile(r"^## ", re.MULTILINE)

COMPLETED = "completed"
PLANNED = "planned"


@dataclass(frozen=True)
class ToolLabels:
    """Bold labels that introduce tool fields, matched literally.

    Attributes:
        url: Label of the link line.
        icon: Label of the icon line.
        description: Label of the description line.
    """

    url: str = "URL"
    icon: str = "图标"
    description: str = "描述"

    def prefix(self, label: str) -> str:
        return f"- **{label}**:"


@dataclass(frozen=True)
class Tool:
    """A single link in a tool category."""

    name: str
    url: str = ""
    icon: str = ""
    description: str = ""


@dataclass(frozen=True)
class ChecklistItem:
    """A matched checklist line.

    Attributes:
        title: Bold title text, trimmed.
        description: Text after the " - " separator, trimmed.
        completed: True for "[x]", False for "[ ]".
    """

    title: str
    description: str
    completed: bool

    @property
    def status(self) -> str:
        return COMPLETED if self.completed else PLANNED


def match_checklist_line(line: str) -> ChecklistItem | None:
    """Match one checklist line.

    The description absorbs everything after the first separator, so
    "- [x] **T** - D - E" yields description "D - E".

    Args:
        line: A single line of Markdown.

    Returns:
        ChecklistItem when the line has the checklist shape, otherwise None.
    """
    match = CHECKLIST_RE.match(line.strip())
    if not match:
        return None
    marker, title, description = match.groups()
    return ChecklistItem(
        title=title.strip(),
        description=description.strip(),
        completed=marker == "x",
    )


def _match_field(line: str, prefix: str) -> str | None:
    if line.startswith(prefix):
        return line[len(prefix) :].strip()
    return None


class ToolSectionParser:
    """Extracts tools from level-2 heading sections.

    Each "## " heading starts a section; its first line is the tool name.
    Field lines inside the section set url, icon and description.
    Sections without a URL are dropped.
    """

    def __init__(self, labels: ToolLabels | None = None):
        self.labels = labels or ToolLabels()

    def parse(self, body: str) -> list[Tool]:
        """Parse every tool section in a document body.

        Args:
            body: Markdown body of a tool category file.

        Returns:
            Tools in heading order.
        """
        tools: list[Tool] = []
        # Text before the first heading is not a section.
        for section in SECTION_RE.split(body)[1:]:
            tool = self.parse_section(section)
            if tool is not None:
                tools.append(tool)
        return tools

    def parse_section(self, section: str) -> Tool | None:
        lines = section.split("\n")
        name = lines[0].strip()
        if not name:
            return None
        fields = {"url": "", "icon": "", "description": ""}
        prefixes = {
            "url": self.labels.prefix(self.labels.url),
            "icon": self.labels.prefix(self.labels.icon),
            "description": self.labels.prefix(self.labels.description),
        }
        for line in lines:
            stripped = line.strip()
            for key, prefix in prefixes.items():
                value = _match_field(stripped, prefix)
                if value is not None:
                    fields[key] = value
        if not fields["url"]:
            return None
        return Tool(name=name, **fields)


class IdeaListParser:
    """Extracts ideas from checked and unchecked checklist lines."""

    def parse(self, body: str) -> list[ChecklistItem]:
        items = []
        for line in body.split("\n"):
            item = match_checklist_line(line)
            if item is not None:
                items.append(item)
        return items


class ProjectListParser:
    """Extracts finished projects: only checked lines count."""

    def parse(self, body: str) -> list[ChecklistItem]:
        items = []
        for line in body.split("\n"):
            item = match_checklist_line(line)
            if item is not None and item.completed:
                items.append(item)
        return items


def parse_tools(body: str, labels: ToolLabels | None = None) -> list[Tool]:
    """Parse tool sections with the given (or default) labels."""
    return ToolSectionParser(labels).parse(body)


def parse_ideas(body: str) -> list[ChecklistItem]:
    """Parse idea checklist lines."""
    return IdeaListParser().parse(body)


def parse_projects(body: str) -> list[ChecklistItem]:
    """Parse checked project lines."""
    return ProjectListParser().parse(body)
