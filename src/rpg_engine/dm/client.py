"""Language model client for game turns and world generation.

Wraps the ``openai`` SDK, pointed at OpenRouter by default. Transient
failures are retried with exponential back-off; what still fails is
raised as an ``AIControlError`` so the caller never saves a turn that
did not get a reply.

Example:
    ```python
    from rpg_engine.dm.client import LLMClient

    client = LLMClient()
    reply = client.chat(
        [{"role": "user", "content": "Describe a tavern."}],
        temperature=0.7,
        max_tokens=200,
    )
    ```
"""

from __future__ import annotations

from typing import Any, Protocol

from openai import APIConnectionError, APIStatusError, OpenAI, RateLimitError
from tenacity import (
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from rpg_engine.core.config import AIProviderSettings, get_settings
from rpg_engine.core.exceptions import (
    AIConnectionError,
    AIRateLimitError,
    ConfigurationError,
)
from rpg_engine.core.logging import get_logger


logger = get_logger(__name__)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

Message = dict[str, str]


class ChatClient(Protocol):
    """Anything that turns a message sequence into one reply string."""

    def chat(
        self,
        messages: list[Message],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str: ...


class LLMClient:
    """Chat completion client using the openai SDK.

    The underlying SDK client is created on first use, so constructing
    an LLMClient never needs an API key.
    """

    def __init__(
        self,
        settings: AIProviderSettings | None = None,
        *,
        api_key: str | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: AI settings. If None, reads from application settings.
            api_key: Explicit API key overriding the configured one.
        """
        self.settings = settings or get_settings().ai
        self._api_key = api_key
        self._client: Any = None

    @property
    def provider(self) -> str:
        return self.settings.default_provider

    @property
    def model(self) -> str:
        return self.settings.model

    def _get_client(self) -> Any:
        """Get or create the OpenAI client for the selected provider."""
        if self._client is None:
            api_key = self._api_key or self.settings.active_api_key()
            if not api_key:
                raise ConfigurationError(
                    f"No API key configured for provider {self.provider}",
                    config_key=f"{self.provider}_api_key",
                )

            if self.provider == "openrouter":
                self._client = OpenAI(
                    api_key=api_key,
                    base_url=OPENROUTER_BASE_URL,
                    timeout=self.settings.timeout_seconds,
                    default_headers={"X-Title": "AI RPG Engine"},
                )
            else:
                self._client = OpenAI(api_key=api_key, timeout=self.settings.timeout_seconds)

        return self._client

    def chat(
        self,
        messages: list[Message],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Send a chat completion request.

        Args:
            messages: Role-tagged chat messages.
            temperature: Sampling temperature (defaults to the turn setting).
            max_tokens: Maximum response tokens (defaults to the turn setting).

        Returns:
            The reply text, or an empty string if the model sent none.

        Raises:
            AIRateLimitError: If still rate limited after all retries.
            AIConnectionError: If the provider cannot be reached or
                rejects the request.
        """
        client = self._get_client()
        attempts = self.settings.max_retries

        @retry(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            retry=retry_if_exception_type((RateLimitError, APIConnectionError)),
        )
        def _call() -> Any:
            try:
                return client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    temperature=self.settings.temperature if temperature is None else temperature,
                    max_tokens=max_tokens or self.settings.max_tokens,
                )
            except RateLimitError:
                logger.warning("Rate limited, retrying...", model=self.model)
                raise
            except APIConnectionError:
                logger.warning("Connection failed, retrying...", model=self.model)
                raise

        try:
            response = _call()
        except RetryError as exc:
            last = exc.last_attempt.exception()
            if isinstance(last, RateLimitError):
                raise AIRateLimitError(
                    "Rate limit exceeded",
                    attempts=attempts,
                    model=self.model,
                    provider=self.provider,
                ) from last
            raise AIConnectionError(
                f"Failed to connect to {self.provider}: {last}",
                model=self.model,
                provider=self.provider,
            ) from last
        except APIStatusError as exc:
            raise AIConnectionError(
                f"{self.provider} API error: {exc}",
                model=self.model,
                provider=self.provider,
                details={"status_code": exc.status_code},
            ) from exc

        if not response.choices:
            raise AIConnectionError(
                f"{self.provider} returned no choices",
                model=self.model,
                provider=self.provider,
            )
        return response.choices[0].message.content or ""


__all__ = [
    "ChatClient",
    "LLMClient",
    "Message",
    "OPENROUTER_BASE_URL",
]
