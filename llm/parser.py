"""Extraction of HTML markup from LLM response text.

Models frequently wrap markup in markdown code fences or add a sentence
of preamble before it, even when told not to.
"""

from __future__ import annotations

import re

_FENCE_RE = re.compile(r"```[a-zA-Z]*\s*\n?([\s\S]*?)\n?\s*```")


def extract_html(content: str) -> str:
    """Return the HTML markup carried by an LLM reply.

    Two-phase approach:
      1. Fenced block -- if the reply contains a ```html (or bare ```)
         block, return its body.
      2. Plain reply -- otherwise return the stripped reply unchanged.

    Raises:
        ValueError: If the reply (or its fenced block) is empty.
    """
    raw = (content or "").strip()
    if not raw:
        raise ValueError("LLM returned empty content")

    match = _FENCE_RE.search(raw)
    if match:
        raw = match.group(1).strip()
        if not raw:
            raise ValueError("LLM returned an empty code block")

    return raw
