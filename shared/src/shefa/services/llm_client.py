"""OpenAI-compatible chat completions client."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from shefa.config import Settings, get_settings
from shefa.errors import LLMResponseError

logger = logging.getLogger(__name__)


@dataclass
class LLMConfig:
    """Endpoint, credentials and sampling defaults for one model."""

    api_endpoint: str
    model_id: str
    api_key: str = ""
    max_tokens: int | None = None
    temperature: float = 0.7
    extra_params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> LLMConfig:
        settings = settings or get_settings()
        return cls(
            api_endpoint=settings.llm_api_endpoint,
            model_id=settings.llm_model,
            api_key=settings.llm_api_key,
            max_tokens=settings.llm_max_tokens,
            temperature=settings.llm_temperature,
        )


class LLMClient:
    """Vendor-agnostic LLM client speaking the chat completions protocol."""

    def __init__(self, config: LLMConfig, timeout: float = 120.0) -> None:
        self.config = config
        self._client = httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> LLMClient:
        settings = settings or get_settings()
        return cls(LLMConfig.from_settings(settings), timeout=settings.llm_timeout_seconds)

    @staticmethod
    def _raise_for_status_with_context(response: httpx.Response) -> None:
        try:
            response.raise_for_status()
            return
        except httpx.HTTPStatusError as exc:
            detail = response.text.strip()
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                if isinstance(body.get("error"), dict):
                    detail = body["error"].get("message") or body["error"].get("code") or detail
                elif body.get("error"):
                    detail = str(body["error"])
                elif body.get("message"):
                    detail = str(body["message"])
            if len(detail) > 400:
                detail = detail[:400]
            raise LLMResponseError(
                f"LLM API request failed ({response.status_code}) at {response.request.url}: {detail}"
            ) from exc

    async def generate(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        response_format: dict | None = None,
    ) -> str:
        """Generate a completion and return the assistant message content."""
        config = self.config

        headers = {"Content-Type": "application/json"}
        if config.api_key:
            headers["Authorization"] = f"Bearer {config.api_key}"

        payload: dict[str, Any] = {
            "model": config.model_id,
            "messages": messages,
            "temperature": temperature if temperature is not None else config.temperature,
        }

        tokens = max_tokens or config.max_tokens
        if tokens:
            payload["max_tokens"] = tokens

        if response_format:
            payload["response_format"] = response_format

        payload.update(config.extra_params)

        endpoint = config.api_endpoint.rstrip("/")
        url = f"{endpoint}/chat/completions"

        logger.info("LLM request to %s model=%s", url, config.model_id)

        try:
            response = await self._client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise LLMResponseError(f"LLM API request to {url} failed: {exc}") from exc
        self._raise_for_status_with_context(response)

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise LLMResponseError(f"Unexpected LLM response shape: {exc!s}") from exc
        if not isinstance(content, str) or not content.strip():
            raise LLMResponseError("LLM returned an empty message")

        logger.info("LLM response model=%s tokens=%s", config.model_id, data.get("usage", {}))
        return content

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()


def strip_json_fencing(text: str) -> str:
    """Strip markdown JSON fencing if present."""
    text = text.strip()
    if text.startswith("```"):
        first_newline = text.find("\n")
        text = text[first_newline + 1 :] if first_newline != -1 else text[3:]
    if text.endswith("```"):
        text = text[:-3].rstrip()
    return text


async def generate_with_validation(
    client: LLMClient,
    messages: list[dict[str, str]],
    validate_fn: Callable[[dict], Any],
    *,
    temperature: float | None = None,
    max_tokens: int | None = None,
    response_format: dict | None = None,
    repair_retry: bool = True,
) -> dict:
    """Generate LLM output, parse JSON, validate, with one repair retry.

    Args:
        client: LLM client instance
        messages: Chat messages
        validate_fn: Callable that takes the parsed dict and raises on invalid
        temperature: Optional temperature override
        max_tokens: Optional max_tokens override
        response_format: Optional ``response_format`` passed to the endpoint

    Returns:
        Validated parsed JSON dict

    Raises:
        LLMResponseError: If the call fails, or parsing/validation fails after retry
    """
    response_text = await client.generate(
        messages, temperature=temperature, max_tokens=max_tokens, response_format=response_format
    )
    text = strip_json_fencing(response_text)

    try:
        data = json.loads(text)
        validate_fn(data)
        return data
    except (ValueError, TypeError) as e:
        if not repair_retry:
            raise LLMResponseError(f"LLM output failed validation: {e!s}") from e
        logger.warning("LLM output validation failed, attempting repair: %s", e)

        repair_messages = messages + [
            {"role": "assistant", "content": response_text},
            {
                "role": "user",
                "content": (
                    f"The following output was invalid:\n{text}\n\n"
                    f"Validation errors:\n{e!s}\n\n"
                    "Return ONLY the corrected JSON, with no other text."
                ),
            },
        ]

    response_text_2 = await client.generate(
        repair_messages,
        temperature=temperature,
        max_tokens=max_tokens,
        response_format=response_format,
    )
    text_2 = strip_json_fencing(response_text_2)
    try:
        data_2 = json.loads(text_2)
        validate_fn(data_2)
    except (ValueError, TypeError) as e:
        raise LLMResponseError(f"LLM output failed validation after repair: {e!s}") from e
    return data_2
