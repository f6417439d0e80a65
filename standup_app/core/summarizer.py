"""Streaming standup summarizer backed by the Anthropic Messages API."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import anthropic

from .config import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, ConfigurationError

logger = logging.getLogger(__name__)


class SummarizerError(RuntimeError):
    """The text-generation service failed mid-request."""


class ReportSummarizer:
    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        client: anthropic.Anthropic | None = None,
    ):
        if client is None and not api_key:
            raise ConfigurationError("Anthropic API key not configured")
        self.model = model
        self.max_tokens = max_tokens
        self.client = client or anthropic.Anthropic(api_key=api_key)

    def stream(self, prompt: str) -> Iterator[str]:
        """Yield text deltas as the model produces them.

        Closing the generator early exits the SDK stream context, which closes
        the underlying HTTP response.
        """
        try:
            with self.client.messages.stream(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            ) as stream:
                for text in stream.text_stream:
                    if text:
                        yield text
        except anthropic.APIError as exc:
            logger.error("Summarizer request failed: %s", exc)
            raise SummarizerError(f"Failed to generate standup update: {exc}") from exc
