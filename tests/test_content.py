from datetime import date
from pathlib import Path

import pytest

from folio.content import (
    DEFAULT_COVER_IMAGE,
    DEFAULT_LAYOUT,
    DEFAULT_ORDER,
    EXCERPT_LENGTH,
    BlogPost,
    DirectoryReadError,
    Idea,
    get_blog_posts,
    get_ideas,
    get_projects,
    get_tools,
    load_all_content,
    resolve_post_path,
    sort_ideas,
    sort_posts,
)
from folio.parsers import ToolLabels


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def create_content(tmp_path: Path) -> Path:
    content = tmp_path / "content"
    write(
        content / "blog" / "first" / "index.md",
        "---\ntitle: First\ndate: 2024-01-01\ncoverImage: ./images/cover.png\n---\nFirst body",
    )
    write(
        content / "blog" / "third" / "index.md",
        "---\ntitle: Third\ndate: 2024-03-01\n---\nThird body",
    )
    write(
        content / "blog" / "second.md",
        "---\ntitle: Second\ndate: 2024-02-01\ncoverImage: /images/second.png\n---\nSecond body",
    )
    # a directory without index.md and a non-markdown file are not posts
    (content / "blog" / "empty-dir").mkdir()
    write(content / "blog" / "notes.txt", "ignored")

    write(
        content / "projects" / "web.md",
        "---\ncategory: web\ntitle: File title\n---\n"
        "- [x] **Zulu** - last\n- [ ] **Draft** - not a project\n- [x] **alpha** - first\n",
    )
    write(content / "projects" / "cli.md", "- [x] **Beta** - middle\n")

    write(
        content / "ideas" / "ideas.md",
        "---\nowner: me\n---\n"
        "- [ ] **Planned B** - b\n- [x] **Zeta** - z\n- [ ] **Planned A** - a\n- [x] **Alpha** - a\n",
    )

    write(
        content / "tools" / "grid.md",
        "---\ntitle: Grid\norder: 2\nlayout: grid\n---\n## G\n- **URL**: https://g.example\n",
    )
    write(
        content / "tools" / "unordered.md",
        "---\ntitle: Unordered\n---\n## U\n- **URL**: https://u.example\n",
    )
    write(
        content / "tools" / "first.md",
        "---\ntitle: First\norder: 1\ndescription: Top\n---\n## F\n- **URL**: https://f.example\n",
    )
    return content


# --- blog posts ---


def test_blog_posts_sorted_newest_first(tmp_path):
    content = create_content(tmp_path)
    posts = get_blog_posts(content)
    assert [p.slug for p in posts] == ["third", "second", "first"]
    assert [p.display_date for p in posts] == ["2024-03-01", "2024-02-01", "2024-01-01"]


def test_blog_post_fields_and_cover_paths(tmp_path):
    content = create_content(tmp_path)
    posts = {p.slug: p for p in get_blog_posts(content)}

    first = posts["first"]
    assert first.title == "First"
    assert first.content == "First body"
    assert first.excerpt == "First body..."
    assert first.cover_image == "/images/blog/first/images/cover.png"
    assert first.metadata["date"] == date(2024, 1, 1)

    assert posts["second"].cover_image == "/images/second.png"
    assert posts["third"].cover_image == DEFAULT_COVER_IMAGE


def test_blog_posts_limit_applies_after_sort(tmp_path):
    content = create_content(tmp_path)
    posts = get_blog_posts(content, limit=2)
    assert [p.slug for p in posts] == ["third", "second"]


def test_excerpt_is_truncated(tmp_path):
    content = tmp_path / "content"
    write(content / "blog" / "long.md", "---\ntitle: Long\n---\n\n" + "x" * 300)
    post = get_blog_posts(content)[0]
    assert post.excerpt == "x" * EXCERPT_LENGTH + "..."


def test_post_without_metadata_uses_defaults(tmp_path):
    content = tmp_path / "content"
    write(content / "blog" / "no-front-matter.md", "Just text")
    post = get_blog_posts(content)[0]
    assert post.title == "No Front Matter"
    assert post.date is None
    assert post.display_date == ""
    assert post.cover_image == DEFAULT_COVER_IMAGE


def test_sort_posts_handles_mixed_and_missing_dates():
    def make(slug, value):
        return BlogPost(slug, slug, value, "", "", DEFAULT_COVER_IMAGE)

    posts = [
        make("none", None),
        make("string", "2024-05-01"),
        make("date", date(2024, 6, 1)),
        make("junk", "not a date"),
        make("older", "2023-01-01T10:00:00"),
    ]
    assert [p.slug for p in sort_posts(posts)] == [
        "date",
        "string",
        "older",
        "none",
        "junk",
    ]


def test_resolve_post_path():
    assert resolve_post_path("./images/a.png", "s") == "/images/blog/s/images/a.png"
    assert resolve_post_path("./a.png", "s") == "/images/blog/s/a.png"
    assert resolve_post_path("/abs.png", "s") == "/abs.png"
    assert resolve_post_path("https://x/a.png", "s") == "https://x/a.png"


# --- projects and ideas ---


def test_projects_sorted_by_title_with_metadata(tmp_path):
    content = create_content(tmp_path)
    projects = get_projects(content)
    assert [p.title for p in projects] == ["alpha", "Beta", "Zulu"]
    zulu = projects[-1]
    assert zulu.status == "completed"
    assert zulu.source_file == "web"
    assert zulu.metadata["category"] == "web"
    merged = zulu.as_dict()
    # parsed fields win over document metadata
    assert merged["title"] == "Zulu"
    assert merged["category"] == "web"
    assert merged["sourceFile"] == "web"


def test_ideas_completed_first_then_alphabetical(tmp_path):
    content = create_content(tmp_path)
    ideas = get_ideas(content)
    assert [i.title for i in ideas] == ["Alpha", "Zeta", "Planned A", "Planned B"]
    assert [i.status for i in ideas] == ["completed", "completed", "planned", "planned"]
    assert ideas[0].completed is True
    assert ideas[0].as_dict()["owner"] == "me"
    assert ideas[0].source_file == "ideas"


def test_sort_ideas_places_unknown_status_last():
    ideas = [
        Idea("X", "", False, "someday", "f"),
        Idea("B", "", False, "planned", "f"),
        Idea("Zeta", "", True, "completed", "f"),
        Idea("Alpha", "", True, "completed", "f"),
    ]
    assert [i.title for i in sort_ideas(ideas)] == ["Alpha", "Zeta", "B", "X"]


# --- tools ---


def test_tool_categories_ordered_with_default(tmp_path):
    content = create_content(tmp_path)
    categories = get_tools(content)
    assert [c.title for c in categories] == ["First", "Grid", "Unordered"]
    assert [c.order for c in categories] == [1, 2, DEFAULT_ORDER]
    assert categories[0].description == "Top"
    assert categories[1].layout == "grid"
    assert categories[2].layout == DEFAULT_LAYOUT
    assert categories[2].description == ""
    assert categories[0].tools[0].url == "https://f.example"


def test_tool_category_defaults_for_odd_values(tmp_path):
    content = tmp_path / "content"
    write(content / "tools" / "zero.md", "---\norder: 0\n---\n")
    write(content / "tools" / "text-order.md", "---\norder: soon\nlayout: carousel\n---\n")
    categories = get_tools(content)
    assert [c.slug for c in categories] == ["zero", "text-order"]
    assert categories[0].order == 0
    assert categories[0].title == "Zero"
    assert categories[1].order == DEFAULT_ORDER
    assert categories[1].layout == DEFAULT_LAYOUT
    assert categories[1].tools == []


def test_non_finite_tool_order_sorts_last(tmp_path):
    content = tmp_path / "content"
    write(content / "tools" / "a.md", "---\norder: 3\n---\n")
    write(content / "tools" / "b.md", "---\norder: .nan\n---\n")
    write(content / "tools" / "c.md", "---\norder: 1\n---\n")
    write(content / "tools" / "d.md", "---\norder: 2\n---\n")
    write(content / "tools" / "e.md", "---\norder: inf\n---\n")
    write(content / "tools" / "f.md", "---\norder: '-.inf'\n---\n")
    categories = get_tools(content)
    assert [c.order for c in categories] == [1, 2, 3, DEFAULT_ORDER, DEFAULT_ORDER, DEFAULT_ORDER]
    assert [c.slug for c in categories] == ["c", "d", "a", "b", "e", "f"]


def test_tool_labels_passed_through(tmp_path):
    content = tmp_path / "content"
    write(content / "tools" / "en.md", "## A\n- **Link**: https://a.example\n")
    assert get_tools(content)[0].tools == []
    labelled = get_tools(content, ToolLabels(url="Link"))
    assert labelled[0].tools[0].url == "https://a.example"


# --- aggregate and errors ---


def test_load_all_content(tmp_path):
    content = create_content(tmp_path)
    site = load_all_content(content)
    assert len(site.posts) == 3
    assert len(site.projects) == 3
    assert len(site.ideas) == 4
    assert len(site.tool_categories) == 3


def test_missing_tools_directory_is_an_error(tmp_path):
    content = create_content(tmp_path)
    for path in (content / "tools").iterdir():
        path.unlink()
    (content / "tools").rmdir()
    with pytest.raises(DirectoryReadError) as excinfo:
        load_all_content(content)
    assert excinfo.value.path == content / "tools"
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_missing_blog_directory_is_an_error(tmp_path):
    with pytest.raises(DirectoryReadError):
        get_blog_posts(tmp_path / "content")


def test_empty_directories_give_empty_collections(tmp_path):
    content = tmp_path / "content"
    for name in ("blog", "projects", "ideas", "tools"):
        (content / name).mkdir(parents=True)
    site = load_all_content(content)
    assert site.posts == []
    assert site.projects == []
    assert site.ideas == []
    assert site.tool_categories == []
