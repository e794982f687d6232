"""
Tool: Completion Client
Purpose: Send one prompt to Gemini and return text or parsed JSON

Protocol:
    complete(prompt)                  -> str   ("" on any failure)
    complete(prompt, json_mode=True)  -> dict | list  ({} on any failure)

Every failure (transport error, non-2xx status, no candidate text,
unparseable JSON) is logged, produces exactly one "error" notification,
and returns the safe default. `last_failed` tells callers whether that
notification was already sent, so a well-formed but empty answer can
still be reported by the caller. There are no retries: a caller that
wants another try calls again.

Usage:
    client = CompletionClient(config.ai, notifier)
    text = await client.complete("Summarize my week")
    plan = await client.complete(prompt, json_mode=True)
    await client.close()

Dependencies:
    - httpx
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from lifeos.config_models import AIConfig
from lifeos.notify import Notifier

from . import FAILURE_MESSAGE


logger = logging.getLogger(__name__)


class AIResponseError(Exception):
    """The service answered 2xx but the body was unusable."""


def build_payload(prompt: str, json_mode: bool = False) -> dict[str, Any]:
    """Build a generateContent request body."""
    generation_config: dict[str, Any] = {}
    if json_mode:
        generation_config["responseMimeType"] = "application/json"
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": generation_config,
    }


def extract_text(body: Any) -> str:
    """Return the text of the first candidate's first part."""
    try:
        text = body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise AIResponseError(f"Unexpected AI response structure: {str(body)[:200]}") from e
    if not isinstance(text, str):
        raise AIResponseError(f"AI candidate text is not a string: {type(text).__name__}")
    return text


def parse_json_text(text: str) -> Any:
    """Parse JSON from a completion, tolerating markdown code fences."""
    cleaned = text.strip()
    if "```json" in cleaned:
        cleaned = cleaned.split("```json")[1].split("```")[0]
    elif "```" in cleaned:
        cleaned = cleaned.split("```")[1].split("```")[0]

    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise AIResponseError(f"AI response is not valid JSON: {e}") from e


class CompletionClient:
    """
    Gemini generateContent client.

    Args:
        config: AI section of the Life OS config
        notifier: Where failure notifications go
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        config: AIConfig,
        notifier: Notifier,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._notifier = notifier
        self._transport = transport
        self._api_key = config.resolve_api_key()
        self._client: httpx.AsyncClient | None = None
        # True when the most recent complete() call failed and notified
        self.last_failed = False

        if not self._api_key:
            logger.warning(f"{config.api_key_env} not set - AI requests will likely be rejected")

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._config.api_base,
                headers={"Content-Type": "application/json"},
                timeout=self._config.timeout_seconds,
                transport=self._transport,
            )
        return self._client

    @property
    def endpoint(self) -> str:
        return f"/models/{self._config.model}:generateContent"

    async def complete(self, prompt: str, json_mode: bool = False) -> Any:
        """
        Send one prompt.

        Args:
            prompt: Full prompt text, state already embedded
            json_mode: Ask for and parse a JSON document

        Returns:
            Completion text, parsed JSON, or the empty default on failure
        """
        default: Any = {} if json_mode else ""
        self.last_failed = False
        logger.debug(f"AI request ({'json' if json_mode else 'text'}), {len(prompt)} chars")

        params = {"key": self._api_key} if self._api_key else None

        try:
            client = await self._get_client()
            response = await client.post(
                self.endpoint,
                params=params,
                json=build_payload(prompt, json_mode),
            )
            response.raise_for_status()

            text = extract_text(response.json())
            if json_mode:
                return parse_json_text(text)
            return text

        except httpx.HTTPStatusError as e:
            logger.error(f"AI API error: {e.response.status_code} - {e.response.text[:500]}")
        except httpx.RequestError as e:
            logger.error(f"AI request error: {type(e).__name__}: {e}")
        except AIResponseError as e:
            logger.error(str(e))
        except ValueError as e:
            # response.json() on a non-JSON body
            logger.error(f"AI response body is not JSON: {e}")

        self.last_failed = True
        self._notifier.notify(FAILURE_MESSAGE, "error")
        return default

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> CompletionClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
