"""LLM gateway HTTP client with session header and retry logic.

Sends chat-completions requests to an OpenAI-compatible gateway. Uses
httpx for HTTP and tenacity for retry-on-error.  The client is async so
that a cleaning run can await (and be cancelled at) the network call.
"""

from __future__ import annotations

import os
from typing import Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)


def _is_retryable(exc: BaseException) -> bool:
    """Return True for transient gateway errors that should be retried."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in (429, 500, 502, 503)
    if isinstance(exc, (httpx.ConnectError, httpx.ReadTimeout)):
        return True
    return False


class LLMClient:
    """Async client for the OpenAI-compatible LLM gateway.

    Reads ``OPENAI_BASE_URL`` and ``OPENAI_API_KEY`` from the environment.
    Sends ``X-Session-ID`` when a session id is given and retries on
    429 / 5xx errors with exponential backoff.
    """

    def __init__(
        self,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url: str = os.getenv(
            "OPENAI_BASE_URL", "https://api.openai.com/v1"
        ).rstrip("/")
        self.api_key: str = os.getenv("OPENAI_API_KEY", "")
        self.timeout = timeout
        self._client: httpx.AsyncClient = httpx.AsyncClient(
            timeout=self.timeout, transport=transport
        )

    # ------------------------------------------------------------------
    # Chat completions
    # ------------------------------------------------------------------

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=2.0),
        retry=retry_if_exception(_is_retryable),
        reraise=True,
    )
    async def chat_completions(
        self,
        *,
        messages: list[dict],
        model: str = "gpt-4o-mini",
        session_id: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: int = 8192,
    ) -> dict:
        """Send a chat-completions request to the LLM gateway.

        Args:
            messages: OpenAI-style message list.
            model: Model name.
            session_id: Caller session, sent as ``X-Session-ID`` when set.
            temperature: Sampling temperature (ignored for GPT-5.x).
            max_tokens: Maximum tokens in the completion.

        Returns:
            The parsed JSON response dict from the gateway.

        Raises:
            httpx.HTTPStatusError: On non-retryable HTTP errors, or once
                retries are exhausted.
        """
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if session_id:
            headers["X-Session-ID"] = session_id
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        body: dict = {"model": model, "messages": messages}

        # GPT-5.x uses max_completion_tokens and does not accept temperature.
        if model.startswith("gpt-5"):
            body["max_completion_tokens"] = max_tokens
        else:
            body["temperature"] = temperature
            body["max_tokens"] = max_tokens

        resp = await self._client.post(
            f"{self.base_url}/chat/completions",
            json=body,
            headers=headers,
        )
        resp.raise_for_status()
        return resp.json()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        if self._client is not None:
            await self._client.aclose()
