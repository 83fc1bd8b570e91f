"""Anthropic backend -- non-streaming calls to the Messages API via httpx.

Translates the neutral LLMRequest/LLMResponse pair to and from the
``POST /v1/messages`` wire format. One long-lived AsyncClient is held
for the provider's lifetime; no retries are attempted.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError

from claude_agent.config import AgentConfig
from claude_agent.llm.base import LLM, LLMError
from claude_agent.llm.schemas import LLMRequest, LLMResponse

logger = logging.getLogger(__name__)

# Placeholder when the error body of a failed response can't be decoded
_UNKNOWN_ERROR = "Unknown error"


class _ContentBlock(BaseModel):
    type: str = "text"
    text: str = ""


class _Usage(BaseModel):
    input_tokens: int = Field(ge=0)
    output_tokens: int = Field(ge=0)


class _MessagesResponse(BaseModel):
    """Subset of the Messages API response we rely on; extra fields ignored."""

    content: list[_ContentBlock]
    usage: _Usage


def load_api_key(path: str | os.PathLike[str]) -> str:
    """Read the API key file and strip surrounding whitespace.

    Raises LLMError naming the path (never the contents) on failure.
    """
    try:
        with open(path, encoding="utf-8") as f:
            api_key = f.read().strip()
    except (OSError, UnicodeDecodeError) as e:
        raise LLMError(f"Failed to read API key from {path}: {e}") from e
    if not api_key:
        raise LLMError(f"API key file {path} is empty")
    return api_key


class AnthropicProvider(LLM):
    """Stateless provider for the Anthropic Messages API.

    Holds immutable config, the API key, and a shared httpx.AsyncClient
    with auth headers and base_url preconfigured.
    """

    def __init__(
        self,
        config: AgentConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        api_key = load_api_key(config.key_file_path)

        headers: dict[str, str] = {
            "x-api-key": api_key,
            "anthropic-version": config.api_version,
            "content-type": "application/json",
        }
        self._http: httpx.AsyncClient | None = httpx.AsyncClient(
            base_url=config.api_base_url,
            headers=headers,
            timeout=httpx.Timeout(config.request_timeout),
            transport=transport,
        )
        logger.info(
            "httpx client initialized (model: %s, base_url: %s, key file: %s)",
            config.model,
            config.api_base_url,
            config.key_file_path,
        )

    def __repr__(self) -> str:
        return f"AnthropicProvider(model={self._config.model!r}, base_url={self._config.api_base_url!r})"

    async def close(self) -> None:
        """Clean up httpx client."""
        if self._http:
            await self._http.aclose()
            self._http = None

    # ------------------------------------------------------------------
    # API call
    # ------------------------------------------------------------------

    def _build_api_payload(self, request: LLMRequest) -> dict[str, Any]:
        """Build the Messages API request body for ``request``."""
        return {
            "model": self._config.model,
            "max_tokens": self._config.max_tokens,
            "temperature": self._config.temperature,
            "system": request.system_prompt,
            "messages": [m.to_api() for m in request.messages],
            "stream": False,
        }

    async def invoke(self, request: LLMRequest) -> LLMResponse:
        """Call the Messages API once and return the complete reply.

        The reply text is the first content block's text, or "" when the
        API returns no content blocks. Raises LLMError on any failure.
        """
        if not self._http:
            raise LLMError("httpx client is closed")

        payload = self._build_api_payload(request)
        timeout = self._config.request_timeout
        logger.debug(
            "POST /v1/messages (model=%s, messages=%d)",
            payload["model"],
            len(payload["messages"]),
        )

        try:
            async with asyncio.timeout(timeout):
                response = await self._http.post("/v1/messages", json=payload)
        except (TimeoutError, httpx.TimeoutException) as e:
            logger.warning("API request timed out after %.0fs", timeout)
            raise LLMError(f"API request timed out after {timeout:g}s") from e
        except httpx.HTTPError as e:
            logger.warning("HTTP error calling Messages API: %s", e)
            raise LLMError(f"Failed to send request to Claude API: {e}") from e

        if not response.is_success:
            try:
                error_text = response.text
            except Exception:
                error_text = _UNKNOWN_ERROR
            logger.warning("API error %d", response.status_code)
            raise LLMError(
                f"Anthropic API error ({response.status_code}): {error_text or _UNKNOWN_ERROR}"
            )

        try:
            parsed = _MessagesResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise LLMError(f"Failed to parse Messages API response: {e}") from e

        content = parsed.content[0].text if parsed.content else ""
        return LLMResponse(
            content=content,
            input_tokens=parsed.usage.input_tokens,
            output_tokens=parsed.usage.output_tokens,
        )
