"""
CyberSecure Toolkit Async Network Client
=========================================

Thin async HTTP client built on **httpx** with retry, exponential
backoff with full jitter, and a single exception type for every failure
mode so that collectors can fall back with one ``except`` clause.

References:
    - Nygard, M. T. (2018). Release It!, 2nd ed. Chapter 5: Stability Patterns.
    - AWS Architecture Blog (2015). Exponential Backoff and Jitter.
"""

from __future__ import annotations

import asyncio
import random
from typing import Any, Optional

import httpx

from shared.config import NetworkConfig
from shared.logger import ToolkitLogger

logger = ToolkitLogger("network")


class HTTPClientError(Exception):
    """Raised for transport errors, timeouts, error statuses and bad JSON.

    Attributes:
        status_code: HTTP status of the failing response, or ``None`` when
            no response was received.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ToolkitHTTP:
    """Async HTTP client with retry on transient failures.

    Usage::

        async with ToolkitHTTP(timeout=5.0) as http:
            data = await http.fetch_json("https://api.example.com/v1/items")

    Args:
        timeout:       Request timeout in seconds.
        max_retries:   Retry attempts on transport errors and retryable statuses.
        backoff_base:  Base delay (seconds) for exponential backoff.
        backoff_max:   Maximum delay cap (seconds).
        headers:       Default headers merged into every request.
        user_agent:    User-Agent header value.
        transport:     Optional httpx transport (``httpx.MockTransport`` in tests).
    """

    _RETRYABLE_STATUS: frozenset[int] = frozenset({429, 500, 502, 503, 504})

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        max_retries: int = 0,
        backoff_base: float = 0.5,
        backoff_max: float = 5.0,
        headers: dict[str, str] | None = None,
        user_agent: str = "CyberSecureToolkit/1.0",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._max_retries = max_retries
        self._backoff_base = backoff_base
        self._backoff_max = backoff_max

        default_headers = {"User-Agent": user_agent}
        if headers:
            default_headers.update(headers)

        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers=default_headers,
            follow_redirects=True,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: NetworkConfig,
        *,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ToolkitHTTP:
        return cls(
            timeout=config.timeout,
            max_retries=config.max_retries,
            backoff_base=config.backoff_base,
            backoff_max=config.backoff_max,
            headers=headers,
            user_agent=config.user_agent,
            transport=transport,
        )

    async def __aenter__(self) -> ToolkitHTTP:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------ #
    #  Requests
    # ------------------------------------------------------------------ #

    async def fetch(
        self,
        url: str,
        *,
        method: str = "GET",
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        check_status: bool = True,
    ) -> httpx.Response:
        """Execute a request, retrying transient failures.

        Args:
            url:           Absolute URL.
            method:        HTTP method.
            params:        Query-string parameters.
            headers:       Per-request headers.
            check_status:  When ``True`` any non-2xx status raises
                           :class:`HTTPClientError`; when ``False`` every
                           received response is returned as-is.

        Raises:
            HTTPClientError: On an invalid URL, a transport failure or
                (with *check_status*) an error status once retries are
                exhausted.
        """
        method = method.upper()
        for attempt in range(self._max_retries + 1):
            final = attempt >= self._max_retries
            try:
                response = await self._client.request(
                    method, url, params=params, headers=headers
                )
            except httpx.InvalidURL as exc:
                raise HTTPClientError(f"{method} {url}: invalid URL: {exc}") from exc
            except httpx.HTTPError as exc:
                logger.warning(
                    "Transport error on %s %s (attempt %d/%d): %s",
                    method, url, attempt + 1, self._max_retries + 1, exc,
                )
                if final:
                    raise HTTPClientError(f"{method} {url} failed: {exc}") from exc
                await self._backoff(attempt)
                continue

            if not check_status:
                return response

            if response.status_code in self._RETRYABLE_STATUS and not final:
                logger.warning(
                    "HTTP %d on %s %s (attempt %d/%d)",
                    response.status_code, method, url,
                    attempt + 1, self._max_retries + 1,
                )
                await self._backoff(attempt)
                continue

            if response.is_success:
                return response
            raise HTTPClientError(
                f"HTTP {response.status_code} from {url}",
                status_code=response.status_code,
            )

        raise HTTPClientError(f"{method} {url}: retries exhausted")

    async def fetch_json(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET *url* and return the decoded JSON body.

        Raises:
            HTTPClientError: On HTTP failure or a body that is not JSON.
        """
        response = await self.fetch(url, params=params, headers=headers)
        try:
            return response.json()
        except ValueError as exc:
            raise HTTPClientError(
                f"JSON decode error from {url}", status_code=response.status_code
            ) from exc

    async def _backoff(self, attempt: int) -> None:
        """Sleep ``min(max, base * 2**attempt) * U(0, 1)`` seconds."""
        delay = min(self._backoff_max, self._backoff_base * (2 ** attempt))
        await asyncio.sleep(delay * random.random())
