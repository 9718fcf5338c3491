"""Single-pass transform walk over a parsed document.

Visits every node depth-first in pre-order and applies, per node kind:

    * comments  -- detached when ``strip_comments`` is set
    * elements  -- inline CSS/JS minification, empty-attribute pruning,
      and the loading hints (``lazy_load_images``, ``defer_scripts``,
      ``optimize_font_loading``)
    * text      -- whitespace collapsing outside ``style``/``script``/
      ``pre``/``code``

The walk uses an explicit stack.  A node's children are snapshotted only
after the node itself has been processed, so a detached node is never
descended into.  ``<template>`` contents are inert and left alone.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from bs4.element import Comment, NavigableString, PageElement, PreformattedString, Tag

from parsing.minify import minify_css, minify_js

if TYPE_CHECKING:
    from models.options import CleaningOptions

logger = logging.getLogger("pageforge")

# Text directly inside these elements keeps its whitespace.
PROTECTED_TEXT_PARENTS = {"style", "script", "pre", "code"}

# Children of these elements are never visited.
INERT_CONTAINERS = {"template"}

_CONTROL_WS_RE = re.compile(r"[\t\n\r]")
_WS_RUN_RE = re.compile(r"\s{2,}")


@dataclass
class WalkStats:
    """Counters accumulated over one walk."""

    nodes_removed: int = 0
    minify_failures: int = 0


def transform_tree(root: Tag, options: CleaningOptions) -> WalkStats:
    """Apply the enabled transforms to every node under *root* in place.

    Returns:
        A ``WalkStats`` with the number of detached nodes and the number
        of inline scripts whose minification failed.
    """
    stats = WalkStats()
    stack: list[PageElement] = [root]

    while stack:
        node = stack.pop()

        if isinstance(node, Comment):
            if options.strip_comments:
                node.extract()
                stats.nodes_removed += 1
            continue

        if isinstance(node, Tag):
            _process_element(node, options, stats)
            if node.name in INERT_CONTAINERS:
                continue
            stack.extend(reversed(list(node.children)))
            continue

        # Doctype, CDATA and processing instructions pass through untouched.
        if isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
            if options.collapse_whitespace:
                _collapse_text(node)

    return stats


# ---------------------------------------------------------------------------
# Element transforms
# ---------------------------------------------------------------------------


def _process_element(tag: Tag, options: CleaningOptions, stats: WalkStats) -> None:
    if options.minify_inline_css_js:
        _minify_inline_code(tag, stats)
    if options.remove_empty_attributes:
        _prune_empty_attributes(tag)
    _apply_loading_hints(tag, options)


def _minify_inline_code(tag: Tag, stats: WalkStats) -> None:
    """Minify ``<style>`` text, inline ``<script>`` text and ``style`` attrs."""
    if tag.name == "style":
        css = tag.get_text()
        if css:
            tag.string = minify_css(css)
    elif tag.name == "script" and not tag.has_attr("src"):
        js = tag.get_text()
        if js:
            try:
                tag.string = minify_js(js)
            except Exception as exc:  # noqa: BLE001
                stats.minify_failures += 1
                logger.warning(
                    "Skipping JS minification for a script: %s: %s",
                    type(exc).__name__,
                    exc,
                )

    style = tag.get("style")
    if isinstance(style, str) and style:
        tag["style"] = minify_css(style)


def _prune_empty_attributes(tag: Tag) -> None:
    """Remove every attribute whose value is blank after trimming.

    BS4 stores multi-valued attributes such as ``class`` as lists; those
    are joined with a space before the check.
    """
    for name, value in list(tag.attrs.items()):
        if isinstance(value, list):
            value = " ".join(value)
        if not (value or "").strip():
            del tag[name]


def _apply_loading_hints(tag: Tag, options: CleaningOptions) -> None:
    if options.lazy_load_images and tag.name == "img" and not tag.has_attr("loading"):
        tag["loading"] = "lazy"

    if (
        options.defer_scripts
        and tag.name == "script"
        and tag.get("src")
        and not tag.has_attr("async")
        and not tag.has_attr("defer")
        and str(tag.get("type", "")).lower() != "module"
    ):
        # A non-empty value so a later empty-attribute pass keeps it.
        tag["defer"] = "defer"

    if options.optimize_font_loading and tag.name == "link":
        href = tag.get("href")
        if isinstance(href, str) and "fonts.googleapis.com" in href and "display=" not in href:
            separator = "&" if "?" in href else "?"
            tag["href"] = f"{href}{separator}display=swap"


# ---------------------------------------------------------------------------
# Text transforms
# ---------------------------------------------------------------------------


def _collapse_text(node: NavigableString) -> None:
    """Collapse whitespace in a text node unless its parent is protected."""
    parent = node.parent
    if parent is not None and parent.name in PROTECTED_TEXT_PARENTS:
        return
    text = str(node)
    collapsed = _WS_RUN_RE.sub(" ", _CONTROL_WS_RE.sub(" ", text)).strip()
    if collapsed != text:
        node.replace_with(node.__class__(collapsed))
