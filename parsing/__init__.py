"""HTML tree adapter, minifiers, embed virtualization and the transform walk."""

from parsing.embeds import EmbedPlaceholder, inject_activation_script, virtualize_embeds
from parsing.minify import minify_css, minify_js
from parsing.tree import parse_document, serialize_document
from parsing.walker import WalkStats, transform_tree

__all__ = [
    "EmbedPlaceholder",
    "WalkStats",
    "inject_activation_script",
    "minify_css",
    "minify_js",
    "parse_document",
    "serialize_document",
    "transform_tree",
    "virtualize_embeds",
]
