# tests/test_walker.py
import pytest
from bs4 import Comment

from models.options import CleaningOptions
from parsing import walker
from parsing.tree import parse_document, serialize_document
from parsing.walker import transform_tree


def _comments(soup):
    return soup.find_all(string=lambda text: isinstance(text, Comment))


def test_strip_comments_counts_removed_nodes():
    """A stripped comment is gone and counted once."""
    soup = parse_document("<div><!-- note -->content</div>")
    stats = transform_tree(soup, CleaningOptions(strip_comments=True))
    assert _comments(soup) == []
    assert stats.nodes_removed == 1
    assert soup.find("div").get_text() == "content"


def test_comments_kept_when_option_off():
    """Without strip_comments, comments survive and nothing is counted."""
    soup = parse_document("<div><!-- note -->content</div>")
    stats = transform_tree(soup, CleaningOptions())
    assert len(_comments(soup)) == 1
    assert stats.nodes_removed == 0


def test_collapse_whitespace_in_text():
    """Tabs, newlines and runs of spaces collapse; ends are trimmed."""
    soup = parse_document("<p>\n\tHello   \r\n world  </p>")
    transform_tree(soup, CleaningOptions(collapse_whitespace=True))
    assert soup.find("p").get_text() == "Hello world"


@pytest.mark.parametrize("tag", ["pre", "code"])
def test_collapse_whitespace_skips_protected_containers(tag):
    """Text directly inside pre/code keeps every whitespace character."""
    text = "  a\n   b\t c  "
    soup = parse_document(f"<div><{tag}>{text}</{tag}></div>")
    transform_tree(soup, CleaningOptions(collapse_whitespace=True))
    assert soup.find(tag).get_text() == text


def test_remove_empty_attributes():
    """Blank attributes go; non-empty ones stay."""
    soup = parse_document('<a href="" title="x" class="  ">link</a>')
    transform_tree(soup, CleaningOptions(remove_empty_attributes=True))
    assert soup.find("a").attrs == {"title": "x"}


def test_minify_style_tag_and_attribute():
    """<style> text and style attributes are minified as CSS."""
    soup = parse_document(
        '<html><head><style>p { color : red ; }</style></head>'
        '<body><p style="margin : 0 ; ">x</p></body></html>'
    )
    transform_tree(soup, CleaningOptions(minify_inline_css_js=True))
    assert soup.find("style").get_text() == "p{color:red;}"
    assert soup.find("p")["style"] == "margin:0;"


def test_minify_inline_script_only():
    """Inline scripts are minified; external ones are left alone."""
    soup = parse_document(
        "<body><script>var a = 1 ;</script>"
        '<script src="app.js">  </script></body>'
    )
    transform_tree(soup, CleaningOptions(minify_inline_css_js=True))
    inline, external = soup.find_all("script")
    assert inline.get_text() == "var a=1;"
    assert external.get_text() == "  "


def test_minified_script_serializes_without_escaping():
    """Minified script text is written raw, not entity-escaped."""
    soup = parse_document("<body><script>if (a < b && c) { go ( ) ; }</script></body>")
    transform_tree(soup, CleaningOptions(minify_inline_css_js=True))
    assert "<script>if(a < b && c){go();}</script>" in serialize_document(soup)


def test_js_minify_failure_leaves_script_unchanged(monkeypatch):
    """A minifier error is contained to the one script node."""

    def boom(js):
        raise RuntimeError("unexpected syntax")

    monkeypatch.setattr(walker, "minify_js", boom)
    soup = parse_document("<body><script>var a = 1 ;</script><p style='a : b'>x</p></body>")
    stats = transform_tree(soup, CleaningOptions(minify_inline_css_js=True))
    assert soup.find("script").get_text() == "var a = 1 ;"
    assert soup.find("p")["style"] == "a:b"
    assert stats.minify_failures == 1


def test_template_contents_are_not_walked():
    """Nodes inside <template> are inert and untouched."""
    soup = parse_document("<body><template><!-- keep --><p>a    b</p></template><!-- drop --></body>")
    stats = transform_tree(soup, CleaningOptions(strip_comments=True, collapse_whitespace=True))
    template = soup.find("template")
    assert len(_comments(template)) == 1
    assert template.find("p").get_text() == "a    b"
    assert stats.nodes_removed == 1


def test_nested_elements_are_all_visited():
    """Every descendant is reached, however deep."""
    soup = parse_document(
        "<div><section><article><span title=''>deep   text</span></article></section></div>"
    )
    transform_tree(
        soup, CleaningOptions(collapse_whitespace=True, remove_empty_attributes=True)
    )
    span = soup.find("span")
    assert span.attrs == {}
    assert span.get_text() == "deep text"


def test_lazy_load_images():
    """Images get loading=lazy unless they already declare loading."""
    soup = parse_document('<body><img src="a.png"><img src="b.png" loading="eager"></body>')
    transform_tree(soup, CleaningOptions(lazy_load_images=True))
    first, second = soup.find_all("img")
    assert first["loading"] == "lazy"
    assert second["loading"] == "eager"


def test_defer_scripts():
    """Only plain external scripts get defer."""
    soup = parse_document(
        "<head>"
        '<script src="a.js"></script>'
        '<script src="b.js" async></script>'
        '<script src="c.js" type="module"></script>'
        "<script>inline()</script>"
        "</head>"
    )
    transform_tree(soup, CleaningOptions(defer_scripts=True))
    plain, async_, module, inline = soup.find_all("script")
    assert plain["defer"] == "defer"
    assert not async_.has_attr("defer")
    assert not module.has_attr("defer")
    assert not inline.has_attr("defer")


def test_defer_survives_empty_attribute_pruning():
    """The added defer value is non-empty, so pruning keeps it."""
    soup = parse_document('<head><script src="a.js"></script></head>')
    transform_tree(
        soup, CleaningOptions(defer_scripts=True, remove_empty_attributes=True)
    )
    assert soup.find("script")["defer"] == "defer"


def test_optimize_font_loading():
    """Google Fonts stylesheets get display=swap appended once."""
    soup = parse_document(
        "<head>"
        '<link rel="stylesheet" href="https://fonts.googleapis.com/css2?family=Inter">'
        '<link rel="stylesheet" href="https://fonts.googleapis.com/css?family=Roboto&display=block">'
        '<link rel="stylesheet" href="/site.css">'
        "</head>"
    )
    transform_tree(soup, CleaningOptions(optimize_font_loading=True))
    inter, roboto, site = soup.find_all("link")
    assert inter["href"] == "https://fonts.googleapis.com/css2?family=Inter&display=swap"
    assert roboto["href"].endswith("display=block")
    assert site["href"] == "/site.css"
