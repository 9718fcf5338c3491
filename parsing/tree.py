"""BeautifulSoup adapter: parse, serialize, and body access helpers.

Documents are parsed with the ``lxml`` tree builder, which recovers from
malformed markup (unclosed tags, missing ``<html>``/``<body>``) the way
browsers do.  Serialization uses a compact HTML formatter:

    * ``&`` escaped only where it would start a character reference
    * ``<`` escaped only where it would open a tag, comment or declaration
    * ``>`` and quotes in text left alone
    * void elements written as ``<br>`` rather than ``<br/>``
    * empty attributes written as bare boolean attributes
    * no line break after the doctype

Parser normalization can still add bytes: unquoted attribute values gain
quotes, implied end tags are written out, and a bare fragment gains
``<html>``/``<body>`` wrappers.
"""

from __future__ import annotations

import re
from html.entities import html5

from bs4 import BeautifulSoup, Doctype, Tag
from bs4.formatter import HTMLFormatter

# Named references a browser decodes even without the trailing semicolon.
_LEGACY_ENTITIES = sorted(
    (name for name in html5 if not name.endswith(";")), key=len, reverse=True
)
_AMBIGUOUS_AMP_RE = re.compile(
    r"&(?=#|[A-Za-z][A-Za-z0-9]*;|(?:%s))" % "|".join(_LEGACY_ENTITIES)
)
_MARKUP_LT_RE = re.compile(r"<(?=[A-Za-z/!?])")


def minimal_entity_substitution(value: str) -> str:
    """Escape only the characters that would change how *value* parses."""
    value = _AMBIGUOUS_AMP_RE.sub("&amp;", value)
    return _MARKUP_LT_RE.sub("&lt;", value)


HTML_FORMATTER = HTMLFormatter(
    entity_substitution=minimal_entity_substitution,
    void_element_close_prefix=None,
    empty_attributes_are_booleans=True,
)

HTML5_DOCTYPE = "<!DOCTYPE html>"

_DOCTYPE_RE = re.compile(r"<!doctype\s+html", re.IGNORECASE)
_DOCTYPE_BREAK_RE = re.compile(r"^(<!DOCTYPE[^>]*>)\n")


def parse_document(raw_html: str) -> BeautifulSoup:
    """Parse a full HTML document into a mutable tree."""
    return BeautifulSoup(raw_html, "lxml")


def parse_fragment(markup: str) -> BeautifulSoup:
    """Parse a body fragment without adding ``<html>``/``<body>`` wrappers.

    ``lxml`` would wrap leading bare text in ``<p>``; ``html.parser`` keeps
    the fragment's top-level nodes as they are.
    """
    return BeautifulSoup(markup, "html.parser")


def serialize_document(soup: BeautifulSoup) -> str:
    """Serialize the whole tree, doctype included when the parser kept it."""
    return _DOCTYPE_BREAK_RE.sub(r"\1", soup.decode(formatter=HTML_FORMATTER), count=1)


def get_body(soup: BeautifulSoup, create: bool = False) -> Tag | None:
    """Return the ``<body>`` element, optionally creating it when missing."""
    body = soup.body
    if body is None and create:
        body = soup.new_tag("body")
        (soup.html or soup).append(body)
    return body


def body_inner_html(soup: BeautifulSoup) -> str:
    """Serialized children of ``<body>`` (empty string when there is none)."""
    body = get_body(soup)
    if body is None:
        return ""
    return body.decode_contents(formatter=HTML_FORMATTER)


def replace_body_inner_html(soup: BeautifulSoup, markup: str) -> None:
    """Replace every child of ``<body>`` with the nodes parsed from *markup*.

    A *markup* that carries its own ``<html>``/``<body>`` wrappers contributes
    only the contents of its ``<body>``.
    """
    body = get_body(soup, create=True)
    fragment = parse_fragment(markup)
    source = fragment.body if fragment.body is not None else fragment
    body.clear()
    for node in list(source.contents):
        body.append(node.extract())


def declares_html_doctype(raw_html: str) -> bool:
    """Return True if *raw_html* contains an HTML doctype declaration."""
    return _DOCTYPE_RE.search(raw_html) is not None


def has_doctype(soup: BeautifulSoup) -> bool:
    """Return True if the parser kept a doctype node at the top of the tree."""
    return any(isinstance(node, Doctype) for node in soup.contents)
