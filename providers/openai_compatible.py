"""Chat provider for OpenAI-compatible endpoints (LM Studio, Ollama, vLLM, OpenAI)."""

import ipaddress
import logging
import os
from typing import Any, Optional
from urllib.parse import urlparse

import httpx
from openai import OpenAI

from .base import ModelProvider

logger = logging.getLogger(__name__)


class OpenAICompatibleProvider(ModelProvider):
    """Shared implementation for OpenAI API lookalikes.

    The class owns HTTP client configuration (timeouts, URL validation) and
    calls ``chat.completions.create`` with tool definitions, returning the
    first choice's message untouched so the assistant can inspect tool calls.
    """

    FRIENDLY_NAME = "OpenAI Compatible"

    MAX_ATTEMPTS = 4
    RETRY_DELAYS = [1, 3, 5, 8]

    def __init__(self, api_key: str, model_name: str, base_url: Optional[str] = None, **kwargs):
        """Initialize the provider.

        Args:
            api_key: API key for authentication (local servers accept any non-empty value)
            model_name: Model identifier as exposed by the endpoint
            base_url: Base URL for the API endpoint, including the /v1 suffix
            **kwargs: Optional timeout overrides (connect_timeout, read_timeout, ...)
        """
        super().__init__(api_key, model_name, **kwargs)
        self._client: Optional[OpenAI] = None
        self.base_url = base_url

        if self.base_url:
            self._validate_base_url()

        self.timeout_config = self._configure_timeouts(**kwargs)

        if self.base_url and not self._is_localhost_url() and not api_key:
            logger.warning(
                "Using external URL '%s' without API key. This may be insecure. "
                "Consider setting an API key for authentication.",
                self.base_url,
            )

    def _configure_timeouts(self, **kwargs) -> httpx.Timeout:
        """Configure timeouts; local models get much longer read windows.

        Local inference, especially with reasoning models, is far slower
        than hosted APIs.
        """
        default_connect = 30.0
        default_read = 600.0

        if self.base_url and self._is_localhost_url():
            default_connect = 60.0
            default_read = 1800.0
            logger.info("Using extended timeouts for local endpoint: %s", self.base_url)

        connect_timeout = kwargs.get("connect_timeout", float(os.getenv("CUSTOM_CONNECT_TIMEOUT", default_connect)))
        read_timeout = kwargs.get("read_timeout", float(os.getenv("CUSTOM_READ_TIMEOUT", default_read)))

        timeout = httpx.Timeout(connect=connect_timeout, read=read_timeout, write=read_timeout, pool=read_timeout)
        logger.debug("Configured timeouts - Connect: %ss, Read: %ss", connect_timeout, read_timeout)
        return timeout

    def _is_localhost_url(self) -> bool:
        """Check if the base URL points to localhost or a private network address."""
        if not self.base_url:
            return False

        hostname = urlparse(self.base_url).hostname
        if hostname in ("localhost", "127.0.0.1", "::1"):
            return True

        if hostname:
            try:
                ip = ipaddress.ip_address(hostname)
            except ValueError:
                # Not an IP address, might be a hostname
                return False
            return ip.is_private or ip.is_loopback

        return False

    def _validate_base_url(self) -> None:
        """Validate the base URL.

        Raises:
            ValueError: If the scheme, hostname or port is invalid
        """
        try:
            parsed = urlparse(self.base_url)
            port = parsed.port
        except ValueError as exc:
            raise ValueError(f"Invalid base URL '{self.base_url}': {exc}") from exc

        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"Invalid URL scheme: {parsed.scheme}. Only http/https allowed.")

        if not parsed.hostname:
            raise ValueError("URL must include a hostname")

        if port is not None and (port < 1 or port > 65535):
            raise ValueError(f"Invalid port number: {port}. Must be between 1 and 65535.")

    @property
    def client(self) -> OpenAI:
        """Lazily build the OpenAI client on top of a configured httpx client."""
        if self._client is None:
            http_client = httpx.Client(timeout=self.timeout_config, follow_redirects=True)

            client_kwargs: dict[str, Any] = {
                "api_key": self.api_key,
                "http_client": http_client,
            }
            if self.base_url:
                client_kwargs["base_url"] = self.base_url

            self._client = OpenAI(**client_kwargs)
            logger.debug("OpenAI client initialized for %s", self.base_url or "api.openai.com")

        return self._client

    def complete_chat(
        self,
        messages: list[dict[str, Any]],
        tools: Optional[list[dict[str, Any]]] = None,
        temperature: float = 0.2,
        max_tokens: Optional[int] = None,
    ) -> Any:
        """Send the conversation and return the assistant message of the first choice."""
        completion_params: dict[str, Any] = {
            "model": self.model_name,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens:
            completion_params["max_tokens"] = max_tokens
        if tools:
            completion_params["tools"] = tools
            completion_params["tool_choice"] = "auto"

        attempt_counter = {"value": 0}

        def _attempt():
            attempt_counter["value"] += 1
            response = self.client.chat.completions.create(**completion_params)
            if not response.choices:
                # Some local servers answer with an empty choice list when no model is loaded
                raise RuntimeError("Endpoint returned no choices; is a model loaded?")
            return response.choices[0].message

        try:
            return self._run_with_retries(
                operation=_attempt,
                max_attempts=self.MAX_ATTEMPTS,
                delays=self.RETRY_DELAYS,
                log_prefix=f"{self.FRIENDLY_NAME} API ({self.model_name})",
            )
        except Exception as exc:
            attempts = max(attempt_counter["value"], 1)
            error_msg = (
                f"{self.FRIENDLY_NAME} API error for model {self.model_name} after {attempts} attempt"
                f"{'s' if attempts > 1 else ''}: {exc}"
            )
            logger.error(error_msg)
            raise RuntimeError(error_msg) from exc

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
