"""OpenRouter LLM resource with classified errors and usage logging.

This resource is a thin HTTP client for the OpenRouter API. It handles:
- Authentication
- Request formatting
- Error classification (auth, upstream, timeout, no response, malformed)
- Usage / cost logging

It makes exactly one attempt per call. Retries belong to the queue, which
re-runs the whole evaluation job; retrying here as well would multiply
attempts. Prompts and parsing live in candidate_evaluation.llm.operations.
"""

import os
from decimal import Decimal
from typing import Any

import httpx
from dagster import ConfigurableResource, get_dagster_logger
from pydantic import Field

from candidate_evaluation.errors import (
    LLMAuthError,
    LLMMalformedResponseError,
    LLMNoResponseError,
    LLMTimeoutError,
    LLMUpstreamError,
)

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "mistralai/mistral-7b-instruct:free"
DEFAULT_EMBEDDING_MODEL = "openai/text-embedding-3-small"


def _build_client(timeout: float) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=timeout)


class OpenRouterResource(ConfigurableResource):
    """OpenRouter chat completions + embeddings client.

    Example usage:
        openrouter = OpenRouterResource(api_key=os.environ["OPENROUTER_API_KEY"])
        raw_json = asyncio.run(openrouter.generate(prompt, operation="evaluate_cv"))
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("OPENROUTER_API_KEY", ""),
        description="OpenRouter API key",
    )
    api_base_url: str = Field(
        default_factory=lambda: os.getenv("OPENROUTER_BASE_URL", DEFAULT_BASE_URL),
        description="Base URL of the OpenAI-compatible API",
    )
    default_model: str = Field(
        default_factory=lambda: os.getenv("OPENROUTER_MODEL", DEFAULT_MODEL),
        description="Default model to use for completions",
    )
    embedding_model: str = Field(
        default=DEFAULT_EMBEDDING_MODEL,
        description="Model used to embed retrieval queries and rubric passages",
    )
    temperature: float = Field(
        default=0.2,
        description="Sampling temperature for evaluation prompts",
    )
    timeout_seconds: float = Field(
        default=60.0,
        description="Per-request timeout; expiry is reported as a timeout error",
    )
    site_url: str = Field(
        default="https://github.com/candidate-evaluation",
        description="Site URL for OpenRouter analytics",
    )
    app_name: str = Field(
        default="Candidate Evaluation Pipeline",
        description="Application name for OpenRouter analytics",
    )

    def _headers(self) -> dict[str, str]:
        if not self.api_key:
            raise LLMAuthError(
                "OpenRouter API key is not configured; set OPENROUTER_API_KEY."
            )
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.site_url,
            "X-Title": self.app_name,
        }

    def _log_usage(self, operation: str, model: str, usage: dict[str, Any]) -> None:
        """Log token usage and cost to the Dagster logger."""
        input_tokens = usage.get("prompt_tokens", usage.get("total_tokens", 0))
        output_tokens = usage.get("completion_tokens", 0)
        # OpenRouter returns cost directly - no need to calculate
        cost_usd = Decimal(str(usage.get("cost", 0)))
        get_dagster_logger().info(
            f"LLM Cost: {operation} | {model} | "
            f"{input_tokens}+{output_tokens} tokens | ${cost_usd:.6f}"
        )

    async def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        """POST once and translate every failure mode into an LLMError subclass."""
        headers = self._headers()
        url = f"{self.api_base_url.rstrip('/')}/{path}"

        try:
            async with _build_client(self.timeout_seconds) as client:
                response = await client.post(url, headers=headers, json=body)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise LLMTimeoutError(
                f"OpenRouter API call timed out after {self.timeout_seconds:g} seconds."
            ) from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            detail = exc.response.text[:500]
            if status in (401, 403):
                raise LLMAuthError(
                    f"OpenRouter API rejected the credentials ({status}): {detail}"
                ) from exc
            raise LLMUpstreamError(f"OpenRouter API Error ({status}): {detail}", status) from exc
        except httpx.RequestError as exc:
            raise LLMNoResponseError(
                f"OpenRouter API Error: No response received ({exc.__class__.__name__})."
            ) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise LLMMalformedResponseError(
                "OpenRouter API returned a body that is not JSON."
            ) from exc
        if not isinstance(data, dict):
            raise LLMMalformedResponseError("OpenRouter API returned an unexpected JSON body.")

        # OpenRouter reports some provider failures inside a 200 body
        error = data.get("error")
        if error and not data.get("choices") and not data.get("data"):
            status = error.get("code", 502) if isinstance(error, dict) else 502
            message = error.get("message", error) if isinstance(error, dict) else error
            raise LLMUpstreamError(f"OpenRouter API Error ({status}): {message}", status)

        return data

    async def complete(
        self,
        messages: list[dict[str, str]],
        model: str | None = None,
        operation: str = "completion",
        response_format: dict[str, str] | None = None,
        temperature: float | None = None,
    ) -> dict[str, Any]:
        """Make an async completion request and log its cost.

        Args:
            messages: List of message dicts with 'role' and 'content'
            model: Model to use (defaults to default_model)
            operation: Operation name for usage logging
            response_format: Response format (e.g., {"type": "json_object"})
            temperature: Sampling temperature (defaults to the configured one)

        Returns:
            Full API response dict including usage information
        """
        model = model or self.default_model

        request_body: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": self.temperature if temperature is None else temperature,
        }
        if response_format:
            request_body["response_format"] = response_format

        data = await self._post("chat/completions", request_body)
        self._log_usage(operation, model, data.get("usage") or {})
        return data

    async def generate(self, prompt: str, operation: str = "completion") -> str:
        """Send a single user prompt in JSON mode and return the raw message content.

        Raises:
            LLMError: classified failure of the call
        """
        data = await self.complete(
            messages=[{"role": "user", "content": prompt}],
            operation=operation,
            response_format={"type": "json_object"},
        )
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise LLMMalformedResponseError(
                "Invalid response structure received from OpenRouter API."
            ) from exc
        if not isinstance(content, str) or not content.strip():
            raise LLMMalformedResponseError(
                "Invalid response structure received from OpenRouter API."
            )
        return content

    async def embed(
        self,
        input: str | list[str],
        model: str | None = None,
        operation: str = "embed",
    ) -> list[list[float]]:
        """Generate embeddings using OpenRouter's embeddings API.

        Reference: https://openrouter.ai/docs/api/reference/embeddings

        Args:
            input: Text or list of texts to embed
            model: Embedding model (defaults to embedding_model)
            operation: Operation name for usage logging

        Returns:
            One vector per input text, in input order
        """
        if isinstance(input, str):
            input = [input]
        model = model or self.embedding_model

        data = await self._post("embeddings", {"model": model, "input": input})
        self._log_usage(operation, model, data.get("usage") or {})

        try:
            items = sorted(data["data"], key=lambda item: item.get("index", 0))
            vectors = [list(item["embedding"]) for item in items]
        except (KeyError, TypeError) as exc:
            raise LLMMalformedResponseError(
                "Invalid embeddings structure received from OpenRouter API."
            ) from exc
        if len(vectors) != len(input):
            raise LLMMalformedResponseError(
                f"OpenRouter API returned {len(vectors)} embeddings for {len(input)} inputs."
            )
        return vectors

    async def embed_query(self, text: str) -> list[float]:
        """Embed a single retrieval query."""
        vectors = await self.embed(text, operation="embed_query")
        return vectors[0]
