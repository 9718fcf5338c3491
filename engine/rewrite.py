"""Best-effort semantic rewrite of body markup through the LLM gateway.

The rewrite never fails a cleaning run: any error is returned as a
``RewriteResult`` failure and the caller keeps the markup it already has.
Cancellation (``asyncio.CancelledError``) is not an ``Exception`` and so
propagates from the network call to the caller unchanged.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from engine.prompts import build_rewrite_messages
from llm.client import LLMClient
from llm.parser import extract_html

logger = logging.getLogger("pageforge")


@dataclass(frozen=True)
class RewriteResult:
    """Outcome of a rewrite call: rewritten markup, or why there is none."""

    html: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.html is not None

    @classmethod
    def success(cls, html: str) -> RewriteResult:
        return cls(html=html)

    @classmethod
    def failure(cls, error: str) -> RewriteResult:
        return cls(error=error)


class SemanticRewriter:
    """Sends body markup to the LLM and returns the restructured markup."""

    def __init__(
        self,
        client: Optional[LLMClient] = None,
        model: Optional[str] = None,
    ) -> None:
        self._client = client
        self.model = model or os.getenv("REWRITE_MODEL", "gpt-4o-mini")

    @property
    def client(self) -> LLMClient:
        if self._client is None:
            self._client = LLMClient(timeout=float(os.getenv("REWRITE_TIMEOUT", "60")))
        return self._client

    async def rewrite(
        self, inner_html: str, session_id: Optional[str] = None
    ) -> RewriteResult:
        """Ask the model to restructure *inner_html*.

        Returns:
            ``RewriteResult.success`` with the rewritten markup, or
            ``RewriteResult.failure`` when the call or the reply was unusable.
        """
        try:
            resp = await self.client.chat_completions(
                messages=build_rewrite_messages(inner_html),
                model=self.model,
                session_id=session_id,
            )
            usage = resp.get("usage", {})
            logger.info(
                "llm_call",
                extra={
                    "session_id": session_id,
                    "prompt_tokens": usage.get("prompt_tokens", 0),
                    "completion_tokens": usage.get("completion_tokens", 0),
                },
            )
            content = resp["choices"][0]["message"]["content"]
            return RewriteResult.success(extract_html(content))
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "Semantic rewrite failed, keeping original markup: %s: %s",
                type(exc).__name__,
                exc,
                extra={"session_id": session_id},
            )
            return RewriteResult.failure(f"{type(exc).__name__}: {exc}")
