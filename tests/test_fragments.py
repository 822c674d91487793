"""Tests for the fragment builder."""

import pytest

from ob_blog.core.types import DocumentKind, Entry
from ob_blog.markup.fragments import (
    permalink,
    render_block,
    render_feed_fragment,
    render_fragment,
    render_index_fragment,
    render_template_fragment,
)
from ob_blog.markup.markers import find_comment
from ob_blog.markup.reader import TokenReader
from ob_blog.markup.tokens import CData

BASE_URL = "https://blog.example/"


def _entry(**overrides) -> Entry:
    fields = dict(id="e1", name="A <b> title", author="Ann & Bob", date="2026-03-01 09:30")
    fields.update(overrides)
    return Entry(**fields)


def test_block_escapes_fields():
    block = render_block(_entry())

    assert block == (
        "<h1>A &lt;b&gt; title</h1>\n"
        '<p class="byline">Ann &amp; Bob</p>\n'
        "<time>2026-03-01 09:30</time>"
    )


def test_block_puts_cover_image_first():
    block = render_block(_entry(image="https://img.example/a.png?x=1&y=2"))

    assert block.startswith('<img class="cover" src="https://img.example/a.png?x=1&amp;y=2"')


def test_feed_fragment_shape():
    fragment = render_feed_fragment(_entry(), "<p>one</p>\n<p>two</p>", BASE_URL)

    assert fragment.startswith("\n<item id='e1'>\n")
    assert "<link>https://blog.example/e1</link>" in fragment
    assert "<guid>https://blog.example/e1</guid>" in fragment
    assert "<p>one</p><p>two</p>" in fragment
    assert fragment.endswith("]]>\n</description>\n</item>")


def test_feed_fragment_splits_cdata_terminator():
    fragment = render_feed_fragment(_entry(), "<p>a]]>b</p>", BASE_URL)
    sections = [t.content for t in TokenReader(fragment) if isinstance(t, CData)]

    assert "".join(sections).endswith("<p>a]]>b</p>")


def test_index_fragment_links_to_permalink():
    fragment = render_index_fragment(_entry(), BASE_URL)

    assert fragment.startswith("\n<li id='e1'><a href=\"https://blog.example/e1\"><h1>")
    assert fragment.endswith("</time></a></li>")


def test_template_fragment_brackets_preamble():
    fragment = render_template_fragment(_entry(), "<p>body</p>")

    assert fragment.startswith("\n<!-- OB:preamble -->\n<h1>")
    assert "</time>\n<!-- /OB:preamble -->\n<p>body</p><!-- /OB:body -->" in fragment


def test_render_fragment_dispatches_on_kind():
    entry = _entry()

    assert render_fragment(DocumentKind.INDEX, entry, "", BASE_URL) == render_index_fragment(entry, BASE_URL)
    assert render_fragment(DocumentKind.TEMPLATE, entry, "<p/>", BASE_URL, marker="X").startswith(
        "\n<!-- X:preamble -->"
    )


def test_render_fragment_rejects_unknown_kind():
    with pytest.raises(ValueError):
        render_fragment("rss", _entry(), "", BASE_URL)


def test_permalink_is_base_plus_id():
    assert permalink("https://blog.example/p/", "abc") == "https://blog.example/p/abc"


def test_find_comment_spots_sentinel_and_sub_markers():
    assert find_comment("<p>a</p><!--   OB   -->") == "<!--   OB   -->"
    assert find_comment("<p>a</p>\n<!-- /OB:body -->\n<p>b</p>") == "<!-- /OB:body -->"
    assert find_comment("<!-- XY:preamble -->", marker="XY") == "<!-- XY:preamble -->"


def test_find_comment_ignores_other_comments():
    assert find_comment("<p>a</p><!-- OBSERVE --><!-- note -->") is None
    assert find_comment("&lt;!-- OB --&gt;") is None
