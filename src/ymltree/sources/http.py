"""HttpSource: fetches document text over HTTP(S).

Wraps ``httpx`` with a lazy import so that the base install (no
httpx/tenacity installed) never triggers an ``ImportError`` at module level.
The ``httpx`` and ``tenacity`` packages are only required when
``HttpSource`` is *instantiated*.

Transport failures (connection refused, timeouts, resets) are retried
automatically with jittered exponential backoff via ``tenacity``.  HTTP
status errors (4xx/5xx) are not retried.

Install the optional dependency with::

    pip install ymltree[http]

Example::

    from ymltree.sources.http import HttpSource

    source = HttpSource(timeout=5.0)
    text = source.read("https://example.com/settings.yml")
"""

from __future__ import annotations

import logging
from typing import Any

from ymltree.exceptions import SourceUnavailableError

__all__ = ["HttpSource"]

logger = logging.getLogger(__name__)


class HttpSource:
    """HTTP(S) text source.

    Performs a lazy import of ``httpx`` and ``tenacity`` inside ``__init__``,
    so importing this module on a base install does not raise
    ``ImportError``.  The error is deferred until the class is *instantiated*.

    Args:
        timeout:      Per-request timeout in seconds.  Defaults to 10.0.
        max_attempts: Total attempts for transport errors, first try
            included.  Defaults to 3.
        client:       Optional pre-built ``httpx.Client`` (tests inject one
            with a mock transport).  A private client is created otherwise.

    Raises:
        ImportError: If ``httpx`` or ``tenacity`` is not installed.  The
            message includes the install command.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        max_attempts: int = 3,
        client: Any = None,
    ) -> None:
        try:
            import httpx
            from tenacity import (
                RetryError,
                retry,
                retry_if_exception_type,
                stop_after_attempt,
                wait_random_exponential,
            )
        except ImportError as exc:
            raise ImportError(
                "httpx and tenacity are required for HttpSource. "
                "Install with: pip install ymltree[http]"
            ) from exc

        if max_attempts < 1:
            msg = f"max_attempts must be >= 1, got {max_attempts}"
            raise ValueError(msg)

        self._timeout = timeout
        self._max_attempts = max_attempts
        self._httpx: Any = httpx
        self._retry_error: Any = RetryError
        # Use Any annotation: httpx is a lazy import, not available at
        # class definition time for type resolution.
        self._client: Any = (
            client if client is not None else httpx.Client(timeout=timeout)
        )

        # Build the retry decorator after httpx.TransportError is in scope.
        _retry = retry(
            retry=retry_if_exception_type(httpx.TransportError),
            wait=wait_random_exponential(min=0.1, max=5),
            stop=stop_after_attempt(max_attempts),
        )
        self._call = _retry(self._raw_get)

    def __repr__(self) -> str:
        return (
            f"HttpSource(timeout={self._timeout!r}, "
            f"max_attempts={self._max_attempts!r})"
        )

    def read(self, identifier: str) -> str:
        """Return the body of ``GET identifier`` decoded as text.

        Raises:
            SourceUnavailableError: Non-2xx response, or every attempt failed
                with a transport error.
        """
        try:
            return self._call(identifier)  # type: ignore[no-any-return]
        except self._retry_error as exc:
            logger.error(
                "Giving up on %s after %d attempt(s)", identifier, self._max_attempts
            )
            raise SourceUnavailableError(identifier) from exc
        except self._httpx.HTTPStatusError as exc:
            logger.error(
                "GET %s returned HTTP %d", identifier, exc.response.status_code
            )
            raise SourceUnavailableError(identifier) from exc

    def _raw_get(self, identifier: str) -> str:
        """Make the raw request; retried by tenacity via ``_call``."""
        logger.debug("GET %s", identifier)
        response = self._client.get(identifier)
        response.raise_for_status()
        return str(response.text)
