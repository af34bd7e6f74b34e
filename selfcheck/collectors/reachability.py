"""
Reachability Collector
=======================

"Is it down for everyone or just me?"  Two best-effort probes:

1. a ``HEAD https://<domain>`` from this machine (user view), and
2. a third-party status API (global view).

Any value that could not be observed is inferred or randomised and named
in ``simulated_fields`` so the report never passes a guess off as a
measurement.
"""

from __future__ import annotations

import random
import time
from typing import Optional

import httpx

from shared.config import NetworkConfig, StatusConfig
from shared.logger import ToolkitLogger
from shared.network import HTTPClientError, ToolkitHTTP

from selfcheck.core.errors import InputRejected
from selfcheck.core.models import ReachabilityReport

logger = ToolkitLogger("collectors.reachability")

UP = "Up"
DOWN = "Down"
CANNOT_REACH = "Cannot Reach"

DOWN_ISSUES: tuple[str, ...] = (
    "Server Down", "DNS Issue", "Network Congestion", "Maintenance",
)
EMPTY_DOMAIN_MESSAGE = "Please enter a domain or URL"


def normalize_domain(target: str) -> str:
    """Strip the scheme and everything from the first ``/`` onwards.

    >>> normalize_domain("https://example.com/path?q=1")
    'example.com'

    Raises:
        InputRejected: If nothing is left to check.
    """
    domain = target.strip()
    for prefix in ("http://", "https://"):
        domain = domain.replace(prefix, "")
    domain = domain.split("/", 1)[0].strip()
    if not domain:
        raise InputRejected(EMPTY_DOMAIN_MESSAGE)
    return domain


class ReachabilityCheck:
    """Probe a website from here and via a public status service.

    Args:
        status_config:   Status API URL and live/offline switch.
        network_config:  HTTP client parameters.
        rng:             Random source for simulated values.
        transport:       Optional httpx transport (tests).
    """

    def __init__(
        self,
        status_config: Optional[StatusConfig] = None,
        network_config: Optional[NetworkConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = status_config or StatusConfig()
        self._network = network_config or NetworkConfig()
        self._rng = rng or random.Random()
        self._transport = transport

    async def check(self, target: str) -> ReachabilityReport:
        """Check *target* (a domain or URL).

        Raises:
            InputRejected: If *target* holds no domain.
        """
        domain = normalize_domain(target)
        simulated: list[str] = []

        with logger.operation("reachability"):
            async with ToolkitHTTP.from_config(
                self._network, transport=self._transport
            ) as http:
                user_status, status_code, response_time = await self._probe_user(http, domain)
                global_status = await self._probe_global(http, domain)

        if global_status is None:
            global_status = UP if user_status == UP else DOWN
            simulated.append("global_status")

        is_down = global_status == DOWN
        just_for_user = user_status == CANNOT_REACH and global_status == UP

        if just_for_user:
            issue = "Connection Issue"
        elif is_down:
            issue = self._rng.choice(DOWN_ISSUES)
            simulated.append("issue")
        else:
            issue = "No Issue"

        if not response_time:
            response_time = self._rng.randrange(50, 350)
            simulated.append("response_time_ms")

        return ReachabilityReport(
            domain=domain,
            global_status=global_status,
            user_status=user_status,
            is_down=is_down,
            just_for_user=just_for_user,
            response_time_ms=response_time,
            status_code=status_code,
            issue=issue,
            simulated=bool(simulated),
            simulated_fields=simulated,
        )

    async def _probe_user(self, http: ToolkitHTTP, domain: str) -> tuple[str, int, int]:
        """HEAD the site; any HTTP response counts as reachable."""
        if not self._config.live_check:
            return CANNOT_REACH, 0, 0
        started = time.perf_counter()
        try:
            response = await http.fetch(
                f"https://{domain}", method="HEAD", check_status=False
            )
        except HTTPClientError as exc:
            logger.info("HEAD https://%s failed: %s", domain, exc)
            return CANNOT_REACH, 0, 0
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        return UP, response.status_code, max(elapsed_ms, 1)

    async def _probe_global(self, http: ToolkitHTTP, domain: str) -> Optional[str]:
        """Ask the status API; ``None`` when it cannot answer."""
        if not self._config.live_check:
            return None
        try:
            response = await http.fetch(
                self._config.status_api_url, params={"domain": domain}
            )
        except HTTPClientError as exc:
            logger.info("Status API unavailable for %s: %s", domain, exc)
            return None
        return DOWN if "yes" in response.text else UP
