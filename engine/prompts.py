"""Prompt construction for the semantic HTML rewrite."""

from __future__ import annotations


# ---------------------------------------------------------------------------
# System prompt
# ---------------------------------------------------------------------------

SYSTEM_PROMPT = """\
You rewrite HTML to be more semantic and accessible.

Rules:
1. Do not add or remove any visible text content.
2. Only change the HTML structure: replace generic containers with article, section, nav, header, footer, main or aside where appropriate.
3. You may add ARIA roles and attributes when they improve accessibility.
4. Keep every script, style, template, iframe, image and link element and its attributes.
5. Return only the rewritten inner HTML of the body. No markdown, no commentary, no <html> or <body> wrapper.
"""


# ---------------------------------------------------------------------------
# Prompt builders
# ---------------------------------------------------------------------------

def build_rewrite_messages(inner_html: str) -> list[dict]:
    """Build the chat messages asking for a semantic rewrite of *inner_html*."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": f"Rewrite the following body HTML.\n\n{inner_html}",
        },
    ]
