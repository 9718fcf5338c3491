"""Third-party embed virtualization.

Heavy embeds (YouTube iframes, Instagram/Twitter/TikTok blockquotes) are
swapped for a lightweight placeholder::

    <div class="pf-lazy-embed pf-lazy-embed-youtube" style="...">
      <template><iframe src="https://www.youtube.com/embed/ID"></iframe></template>
      <img src="https://i.ytimg.com/vi/ID/hqdefault.jpg" ...>   (YouTube only)
      <div class="pf-lazy-load-trigger" style="...">...Load Content...</div>
    </div>

The original element is detached and moved into the ``<template>``, where
the browser keeps it inert.  ``ACTIVATION_SCRIPT`` restores it on click.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import urlsplit

from bs4 import BeautifulSoup, Tag

from parsing.tree import get_body

logger = logging.getLogger("pageforge")

THUMBNAIL_URL_TEMPLATE = "https://i.ytimg.com/vi/{video_id}/hqdefault.jpg"

PLACEHOLDER_CLASS = "pf-lazy-embed"
TRIGGER_CLASS = "pf-lazy-load-trigger"

_PLACEHOLDER_STYLE = (
    "position: relative; border: 1px solid #374151; border-radius: 0.5rem; "
    "background-color: #111827; overflow: hidden; min-height: {min_height}; "
    "display: flex; align-items: center; justify-content: center; "
    "text-align: center; color: #d1d5db;"
)
_TRIGGER_STYLE = (
    "position: absolute; top: 0; left: 0; width: 100%; height: 100%; "
    "display: flex; flex-direction: column; align-items: center; "
    "justify-content: center; cursor: pointer; backdrop-filter: blur(4px); "
    "-webkit-backdrop-filter: blur(4px); background-color: rgba(0,0,0,0.6); "
    "transition: background-color 0.2s ease;"
)
_THUMBNAIL_STYLE = (
    "width: 100%; height: 100%; object-fit: cover; position: absolute; "
    "top: 0; left: 0; transition: transform 0.2s ease;"
)

# Client-side activation.  Emitted into the document as-is and never run
# by the server.  Event delegation on ``document`` catches clicks on any
# trigger; the placeholder is replaced by the live element, so each
# placeholder can only be activated once.  Scripts created through
# innerHTML never execute, so an external loader script found in the
# restored markup is re-created at the end of <body>.
ACTIVATION_SCRIPT = """
(function() {
    function activate(placeholder) {
        var template = placeholder.querySelector('template');
        if (!template || !template.content || !template.content.firstElementChild) {
            return;
        }
        var holder = document.createElement('div');
        holder.innerHTML = template.content.firstElementChild.outerHTML;
        var live = holder.firstElementChild;
        if (!live || !placeholder.parentNode) {
            return;
        }
        placeholder.parentNode.replaceChild(live, placeholder);
        var loader = live.tagName === 'SCRIPT' ? live : live.querySelector('script');
        if (loader && loader.src) {
            var script = document.createElement('script');
            script.src = loader.src;
            script.async = true;
            document.body.appendChild(script);
        }
    }

    document.addEventListener('click', function(event) {
        var trigger = event.target.closest('.pf-lazy-load-trigger');
        if (!trigger) {
            return;
        }
        event.preventDefault();
        var placeholder = trigger.closest('.pf-lazy-embed');
        if (placeholder) {
            activate(placeholder);
        }
    }, false);
})();
"""


@dataclass
class EmbedPlaceholder:
    """One virtualized embed and the element that now stands in for it."""

    platform: str
    element: Tag
    thumbnail_url: Optional[str] = None

    @property
    def inert_copy(self) -> Optional[Tag]:
        """The original embed element held inside the placeholder's template."""
        template = self.element.find("template", recursive=False)
        if template is None:
            return None
        return template.find(True, recursive=False)


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------


def _youtube_iframes(soup: BeautifulSoup) -> list[Tag]:
    return soup.find_all(
        "iframe", src=lambda src: src is not None and "youtube.com/embed" in src
    )


def _blockquotes(css_class: str) -> Callable[[BeautifulSoup], list[Tag]]:
    def finder(soup: BeautifulSoup) -> list[Tag]:
        return soup.find_all("blockquote", class_=css_class)

    return finder


# Order matters only for the order of the returned placeholders.
EMBED_PATTERNS: list[tuple[str, Callable[[BeautifulSoup], list[Tag]]]] = [
    ("youtube", _youtube_iframes),
    ("instagram", _blockquotes("instagram-media")),
    ("twitter", _blockquotes("twitter-tweet")),
    ("tiktok", _blockquotes("tiktok-embed")),
]


# ---------------------------------------------------------------------------
# Placeholder construction
# ---------------------------------------------------------------------------


def youtube_thumbnail_url(src: str) -> Optional[str]:
    """Derive the preview image URL from a YouTube embed URL.

    The last path segment is taken as the video id.  Returns ``None`` when
    the URL cannot be parsed or the segment is empty.
    """
    try:
        path = urlsplit(src).path
    except ValueError:
        logger.debug("Could not parse YouTube URL for thumbnail: %s", src)
        return None
    video_id = path.split("/")[-1]
    if not video_id:
        return None
    return THUMBNAIL_URL_TEMPLATE.format(video_id=video_id)


def _platform_label(platform: str) -> str:
    return platform[:1].upper() + platform[1:]


def _build_trigger(soup: BeautifulSoup, platform: str) -> Tag:
    """Build the click-to-load overlay."""
    trigger = soup.new_tag("div", attrs={"class": [TRIGGER_CLASS], "style": _TRIGGER_STYLE})
    box = soup.new_tag("div", attrs={"style": "font-family: sans-serif;"})

    heading = soup.new_tag(
        "p", attrs={"style": "font-weight: 600; font-size: 1.125rem; color: white;"}
    )
    heading.string = f"Load {_platform_label(platform)} Content"

    hint = soup.new_tag(
        "p", attrs={"style": "font-size: 0.875rem; margin-top: 0.25rem; color: #d1d5db;"}
    )
    hint.string = "Click to view this embed and improve page speed."

    button = soup.new_tag(
        "span",
        attrs={
            "style": (
                "display: inline-block; margin-top: 1rem; padding: 0.5rem 1rem; "
                "background-color: #2563eb; color: white; border: none; "
                "border-radius: 0.375rem; font-weight: 600;"
            )
        },
    )
    button.string = "Load Content"

    box.append(heading)
    box.append(hint)
    box.append(button)
    trigger.append(box)
    return trigger


def build_placeholder(soup: BeautifulSoup, original: Tag, platform: str) -> EmbedPlaceholder:
    """Replace *original* with a placeholder that keeps it inside a template.

    The original element is detached from its parent and moved, unchanged,
    into the placeholder's ``<template>``.
    """
    min_height = "250px" if platform == "youtube" else "400px"
    placeholder = soup.new_tag(
        "div",
        attrs={
            "class": [PLACEHOLDER_CLASS, f"{PLACEHOLDER_CLASS}-{platform}"],
            "style": _PLACEHOLDER_STYLE.format(min_height=min_height),
        },
    )
    template = soup.new_tag("template")
    placeholder.append(template)

    thumbnail_url = None
    if platform == "youtube":
        src = original.get("src")
        if isinstance(src, str):
            thumbnail_url = youtube_thumbnail_url(src)
        if thumbnail_url:
            thumb = soup.new_tag(
                "img",
                attrs={
                    "src": thumbnail_url,
                    "alt": "YouTube video thumbnail",
                    "style": _THUMBNAIL_STYLE,
                },
            )
            placeholder.append(thumb)

    placeholder.append(_build_trigger(soup, platform))

    original.replace_with(placeholder)
    template.append(original)
    return EmbedPlaceholder(platform=platform, element=placeholder, thumbnail_url=thumbnail_url)


# ---------------------------------------------------------------------------
# Passes
# ---------------------------------------------------------------------------


def virtualize_embeds(soup: BeautifulSoup) -> list[EmbedPlaceholder]:
    """Replace every known embed in *soup* with a lazy placeholder.

    All matches are collected before any replacement so that the tree is not
    mutated while it is being searched.  Elements already inside a
    ``<template>`` are inert and left as they are.

    Returns:
        One ``EmbedPlaceholder`` per replaced element, in pattern order.
    """
    matches: list[tuple[str, Tag]] = []
    for platform, finder in EMBED_PATTERNS:
        for el in finder(soup):
            if el.find_parent("template") is None:
                matches.append((platform, el))

    placeholders: list[EmbedPlaceholder] = []
    for platform, el in matches:
        if el.parent is None:
            continue
        placeholders.append(build_placeholder(soup, el, platform))
        logger.debug("embed virtualized", extra={"platform": platform})
    return placeholders


def inject_activation_script(soup: BeautifulSoup) -> Tag:
    """Append the shared activation ``<script>`` to the end of ``<body>``."""
    body = get_body(soup, create=True)
    script = soup.new_tag("script")
    script.string = ACTIVATION_SCRIPT
    body.append(script)
    return script
