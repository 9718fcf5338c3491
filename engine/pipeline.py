"""Cleaning orchestrator called from the /clean endpoints.

Sequences parsing, embed virtualization, the transform walk, the optional
semantic rewrite, activation-script injection, serialization, doctype
restoration and impact computation into a single ``clean()`` coroutine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from engine.impact import compute_impact
from engine.rewrite import RewriteResult, SemanticRewriter
from models.options import CleaningOptions
from models.response import CleanResponse
from models.summary import ImpactSummary
from parsing.embeds import EmbedPlaceholder, inject_activation_script, virtualize_embeds
from parsing.tree import (
    HTML5_DOCTYPE,
    body_inner_html,
    declares_html_doctype,
    get_body,
    has_doctype,
    parse_document,
    replace_body_inner_html,
    serialize_document,
)
from parsing.walker import transform_tree

logger = logging.getLogger("pageforge")

# Module-level singleton for the rewriter (lazy init).
_rewriter: SemanticRewriter | None = None


def _get_rewriter() -> SemanticRewriter:
    """Return the module-level rewriter, creating it on first use."""
    global _rewriter  # noqa: PLW0603
    if _rewriter is None:
        _rewriter = SemanticRewriter()
    return _rewriter


class EmptyDocumentError(ValueError):
    """Raised when there is no HTML to clean."""


@dataclass
class CleanResult:
    """Everything a cleaning run produced."""

    cleaned_html: str
    summary: ImpactSummary
    embeds: list[EmbedPlaceholder] = field(default_factory=list)
    rewrite: Optional[RewriteResult] = None

    def to_response(self) -> CleanResponse:
        return CleanResponse(cleaned_html=self.cleaned_html, summary=self.summary)


async def clean(
    original_html: str,
    options: CleaningOptions,
    *,
    session_id: Optional[str] = None,
    rewriter: Optional[SemanticRewriter] = None,
) -> CleanResult:
    """Clean *original_html* according to *options*.

    Orchestrates:
    1. Input check (blank documents are rejected before any work)
    2. Parse with parser recovery
    3. Embed virtualization (``lazy_load_embeds``)
    4. Transform walk over the whole tree
    5. Semantic rewrite of the body markup (``semantic_rewrite``)
    6. Activation script injection when any embed was virtualized
    7. Serialization
    8. Doctype restoration
    9. Impact summary

    Raises:
        EmptyDocumentError: If *original_html* is empty or whitespace only.
    """
    if not original_html or not original_html.strip():
        raise EmptyDocumentError("Please provide some HTML to clean first.")

    for name in options.enabled_no_ops():
        logger.debug("option has no effect", extra={"option": name})

    # 1. Parse
    soup = parse_document(original_html)

    # 2. Embeds first, as a separate structural pass
    embeds: list[EmbedPlaceholder] = []
    if options.lazy_load_embeds:
        embeds = virtualize_embeds(soup)
        if embeds:
            logger.info(
                "embeds virtualized",
                extra={"session_id": session_id, "embeds": len(embeds)},
            )

    # 3. Transform walk
    stats = transform_tree(soup, options)

    # 4. Semantic rewrite -- the only suspension point
    rewrite_result: RewriteResult | None = None
    if options.semantic_rewrite:
        if get_body(soup) is None:
            logger.debug("document has no body, skipping semantic rewrite")
        else:
            rewrite_result = await (rewriter or _get_rewriter()).rewrite(
                body_inner_html(soup), session_id
            )
            if rewrite_result.ok:
                replace_body_inner_html(soup, rewrite_result.html)

    # 5. Activation script after every other transform
    if embeds:
        inject_activation_script(soup)

    # 6. Serialize
    cleaned_html = serialize_document(soup)

    # 7. Doctype restoration
    if declares_html_doctype(original_html) and not has_doctype(soup):
        cleaned_html = f"{HTML5_DOCTYPE}{cleaned_html}"

    # 8. Impact
    summary = compute_impact(original_html, cleaned_html, stats.nodes_removed)
    logger.info(
        "clean finished",
        extra={
            "session_id": session_id,
            "nodes_removed": summary.nodes_removed,
            "bytes_saved": summary.bytes_saved,
        },
    )

    return CleanResult(
        cleaned_html=cleaned_html,
        summary=summary,
        embeds=embeds,
        rewrite=rewrite_result,
    )
