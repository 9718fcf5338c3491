"""Textual minifiers for inline CSS and JavaScript.

Both are regex passes, not parsers.  The JavaScript pass in particular does
not tokenize: delimiter characters and ``//`` sequences inside string or
regex literals are rewritten like any other text, so a script such as
``var u = "http://x";`` loses everything after ``//``.  Callers treat a
failure or a corrupted result as that one node's problem.
"""

from __future__ import annotations

import re

_CSS_PUNCT_RE = re.compile(r"\s*([:;{}])\s*")
_JS_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/|//.*")
_JS_PUNCT_RE = re.compile(r"\s*([=;,{}()\[\]])\s*")
_WS_RUN_RE = re.compile(r"\s\s+")
_WS_RE = re.compile(r"\s+")


def minify_css(css: str) -> str:
    """Strip whitespace around ``: ; { }`` and collapse the remaining runs.

    >>> minify_css("color : red ; ")
    'color:red;'
    """
    css = _CSS_PUNCT_RE.sub(r"\1", css)
    return _WS_RUN_RE.sub(" ", css)


def minify_js(js: str) -> str:
    """Remove comments and whitespace around ``= ; , { } ( ) [ ]``.

    Approximate by design; see the module docstring for what it breaks.
    """
    js = _JS_COMMENT_RE.sub("", js)
    js = _JS_PUNCT_RE.sub(r"\1", js)
    return _WS_RE.sub(" ", js)
