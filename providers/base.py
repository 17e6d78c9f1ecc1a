"""Base interfaces and common behaviour for chat model providers."""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class ModelProvider(ABC):
    """Abstract base class for chat-completion backends used by the assistant.

    Role
        Gives the assistant a single ``complete_chat`` surface regardless of
        which OpenAI-compatible server sits behind it.

    Responsibilities
        * hold the credential and target model name
        * send a message history plus tool definitions and return the
          assistant message (possibly carrying tool calls)
        * retry transient transport failures with progressive delays
    """

    FRIENDLY_NAME = "Model Provider"

    def __init__(self, api_key: str, model_name: str, **kwargs):
        """Initialize the provider with API key, model name and optional configuration."""
        self.api_key = api_key
        self.model_name = model_name
        self.config = kwargs

    @abstractmethod
    def complete_chat(
        self,
        messages: list[dict[str, Any]],
        tools: Optional[list[dict[str, Any]]] = None,
        temperature: float = 0.2,
        max_tokens: Optional[int] = None,
    ) -> Any:
        """Return the assistant message for ``messages``."""

    def close(self) -> None:
        """Clean up any resources held by the provider."""

        return

    # ------------------------------------------------------------------
    # Retry helpers
    # ------------------------------------------------------------------
    def _is_error_retryable(self, error: Exception) -> bool:
        """Return True when an error warrants another attempt.

        Only obvious transient failures (timeouts, refused connections, 5xx)
        are retried. Rate limits are not: a local server that reports 429 is
        overloaded and hammering it does not help.
        """

        error_str = str(error).lower()

        if "429" in error_str or "rate limit" in error_str:
            return False

        retryable_indicators = [
            "timeout",
            "timed out",
            "connection",
            "temporary",
            "unavailable",
            "reset",
            "refused",
            "broken pipe",
            "500",
            "502",
            "503",
            "504",
        ]

        return any(indicator in error_str for indicator in retryable_indicators)

    def _run_with_retries(
        self,
        operation: Callable[[], Any],
        *,
        max_attempts: int,
        delays: Optional[list[float]] = None,
        log_prefix: str = "",
    ):
        """Execute ``operation`` with retry semantics.

        Args:
            operation: Callable returning the provider result.
            max_attempts: Maximum number of attempts (>=1).
            delays: Optional list of sleep durations between attempts.
            log_prefix: Optional identifier for log clarity.

        Raises:
            The last exception when all retries fail or the error is not retryable.
        """

        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

        delays = delays or []

        for attempt_index in range(max_attempts):
            try:
                return operation()
            except Exception as exc:  # noqa: BLE001 - re-raised below unless retryable
                attempt_number = attempt_index + 1
                if not self._is_error_retryable(exc) or attempt_number >= max_attempts:
                    raise

                delay = delays[min(attempt_index, len(delays) - 1)] if delays else 0.0
                logger.warning(
                    "%s retryable error (attempt %s/%s): %s. Retrying in %ss...",
                    log_prefix or self.__class__.__name__,
                    attempt_number,
                    max_attempts,
                    exc,
                    delay,
                )
                if delay > 0:
                    time.sleep(delay)

        # The loop always returns or raises
        raise RuntimeError("Retry loop exited without result")
