from folio.protocols import MarkupRenderer
from folio.renderers import MarkdownRenderer, default_renderer, rewrite_local_images


def test_local_image_rewritten_to_post_directory():
    html = MarkdownRenderer().render("![alt](./images/pic.png)", "my-slug")
    assert 'src="/images/blog/my-slug/images/pic.png"' in html
    assert 'alt="alt"' in html


def test_absolute_image_left_unchanged():
    html = MarkdownRenderer().render("![alt](/foo.png)", "my-slug")
    assert 'src="/foo.png"' in html


def test_other_relative_forms_pass_through():
    source = "![a](images/x.png) ![b](../images/y.png) ![c](https://cdn.example/z.png)"
    assert rewrite_local_images(source, "s") == source


def test_rewrite_happens_before_conversion():
    source = "Text ![one](./images/1.png) and ![two](./images/sub/2.png)"
    assert rewrite_local_images(source, "post") == (
        "Text ![one](/images/blog/post/images/1.png) "
        "and ![two](/images/blog/post/images/sub/2.png)"
    )
    # a link that merely looks like a local path is not an image
    assert rewrite_local_images("[doc](./images/a.pdf)", "post") == "[doc](./images/a.pdf)"


def test_rewrite_without_slug_is_noop():
    assert rewrite_local_images("![a](./images/x.png)", "") == "![a](./images/x.png)"


def test_markdown_block_and_inline_semantics():
    html = default_renderer.render(
        "# Title\n\n- one\n- two\n\n*em* **strong** [link](https://example.com)\nnext line"
    )
    assert "<h1>Title</h1>" in html
    assert "<li>one</li>" in html
    assert "<em>em</em>" in html
    assert "<strong>strong</strong>" in html
    assert '<a href="https://example.com">link</a>' in html
    # single newlines become line breaks
    assert "<br />" in html


def test_raw_html_passes_through():
    html = default_renderer.render('<div class="note">kept</div>\n')
    assert '<div class="note">kept</div>' in html


def test_render_is_deterministic():
    source = "Some **text** with ![i](./images/i.png)"
    assert default_renderer.render(source, "a") == default_renderer.render(source, "a")


def test_renderer_satisfies_protocol():
    assert isinstance(MarkdownRenderer(), MarkupRenderer)
