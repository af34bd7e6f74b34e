"""
Breach Lookup Collector
========================

Checks whether an email address appears in a public breach corpus via a
HaveIBeenPwned v3 compatible API.

The lookup is best-effort.  A 404 means "not breached"; a 200 carrying a
JSON list is the breach list.  Any other outcome (rate limiting, missing
API key, transport failure, non-JSON body) falls back to a deterministic
simulation seeded from the email domain.  Simulated reports are always
flagged ``simulated=True``.

References:
    - Hunt, T. Have I Been Pwned API v3. https://haveibeenpwned.com/API/v3
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from shared.config import BreachConfig, NetworkConfig
from shared.logger import ToolkitLogger, redact
from shared.network import HTTPClientError, ToolkitHTTP

from selfcheck.core.errors import InputRejected
from selfcheck.core.models import BreachRecord, BreachReport

logger = ToolkitLogger("collectors.breach")

# Well-known public breaches used by the offline simulation.
KNOWN_BREACHES: tuple[BreachRecord, ...] = (
    BreachRecord(name="LinkedIn", breach_date="2021-04-09", pwn_count=700_605_709,
                 title="LinkedIn suffered a data breach"),
    BreachRecord(name="Facebook", breach_date="2021-04-03", pwn_count=533_000_000,
                 title="Facebook suffered a data breach"),
    BreachRecord(name="Twitter", breach_date="2020-12-17", pwn_count=200_000_000,
                 title="Twitter suffered a data breach"),
    BreachRecord(name="Yahoo", breach_date="2013-04-24", pwn_count=3_000_000_000,
                 title="Yahoo suffered a massive data breach"),
    BreachRecord(name="Adobe", breach_date="2013-10-04", pwn_count=153_000_000,
                 title="Adobe suffered a data breach"),
    BreachRecord(name="Equifax", breach_date="2017-09-07", pwn_count=147_000_000,
                 title="Equifax suffered a data breach"),
    BreachRecord(name="Uber", breach_date="2016-11-14", pwn_count=57_000_000,
                 title="Uber suffered a data breach"),
    BreachRecord(name="Dropbox", breach_date="2012-07-01", pwn_count=68_000_000,
                 title="Dropbox suffered a data breach"),
    BreachRecord(name="Myspace", breach_date="2008-06-11", pwn_count=360_000_000,
                 title="Myspace suffered a data breach"),
    BreachRecord(name="Ashleymadison", breach_date="2015-08-18", pwn_count=37_000_000,
                 title="Ashley Madison suffered a data breach"),
)

NOT_BREACHED_MESSAGE = "Good news! This email was not found in any known data breaches."
EMPTY_EMAIL_MESSAGE = "Please enter an email address"
INVALID_EMAIL_MESSAGE = "Please enter a valid email address"


def validate_email(email: str) -> str:
    """Return the trimmed address or raise :class:`InputRejected`."""
    email = email.strip()
    if not email:
        raise InputRejected(EMPTY_EMAIL_MESSAGE)
    local, sep, domain = email.partition("@")
    if not sep or not local or not domain:
        raise InputRejected(INVALID_EMAIL_MESSAGE)
    return email


def breached_message(count: int) -> str:
    return f"This email was found in {count} data breach(es)."


def simulate_breach(email: str) -> BreachReport:
    """Deterministic stand-in result derived from the email domain.

    ``seed = ord(domain[0]) + len(domain)``; the address is reported as
    breached unless ``seed % 3 == 0``, in ``seed % 5 + 1`` breaches.
    """
    domain = email.partition("@")[2]
    seed = ord(domain[0]) + len(domain)
    if seed % 3 == 0:
        return BreachReport(
            email=email,
            breached=False,
            message=NOT_BREACHED_MESSAGE,
            simulated=True,
            source="simulation",
        )
    selected = list(KNOWN_BREACHES[: seed % 5 + 1])
    return BreachReport(
        email=email,
        breached=True,
        message=breached_message(len(selected)),
        breaches=selected,
        simulated=True,
        source="simulation",
    )


class BreachLookup:
    """Email breach lookup with a simulated fallback.

    Args:
        breach_config:   API endpoint, key and live/offline switch.
        network_config:  HTTP client parameters.
        transport:       Optional httpx transport (tests).
    """

    def __init__(
        self,
        breach_config: Optional[BreachConfig] = None,
        network_config: Optional[NetworkConfig] = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = breach_config or BreachConfig()
        self._network = network_config or NetworkConfig()
        self._transport = transport

    def account_url(self, email: str) -> str:
        return f"{self._config.api_base.rstrip('/')}/breachedaccount/{quote(email, safe='')}"

    async def lookup(self, email: str) -> BreachReport:
        """Look *email* up, falling back to :func:`simulate_breach`.

        Raises:
            InputRejected: For an empty or malformed address.
        """
        email = validate_email(email)

        if not self._config.live_lookup:
            logger.info("Live breach lookup disabled; simulating %s", redact(email))
            return simulate_breach(email)

        with logger.operation("breach_lookup"):
            try:
                payload = await self._fetch(email)
            except HTTPClientError as exc:
                if exc.status_code == 404:
                    return BreachReport(
                        email=email,
                        message=NOT_BREACHED_MESSAGE,
                        simulated=False,
                    )
                logger.warning(
                    "Breach lookup for %s failed (%s); using simulation",
                    redact(email), exc,
                )
                return simulate_breach(email)

        if not isinstance(payload, list):
            logger.warning("Unexpected breach payload type %s; using simulation",
                           type(payload).__name__)
            return simulate_breach(email)

        try:
            breaches = [BreachRecord.model_validate(item) for item in payload]
        except ValidationError as exc:
            logger.warning("Malformed breach payload (%d errors); using simulation",
                           exc.error_count())
            return simulate_breach(email)

        if not breaches:
            return BreachReport(email=email, message=NOT_BREACHED_MESSAGE, simulated=False)
        return BreachReport(
            email=email,
            breached=True,
            message=breached_message(len(breaches)),
            breaches=breaches,
            simulated=False,
        )

    async def _fetch(self, email: str) -> Any:
        headers = {"hibp-api-key": self._config.api_key} if self._config.api_key else None
        async with ToolkitHTTP.from_config(
            self._network, headers=headers, transport=self._transport
        ) as http:
            return await http.fetch_json(
                self.account_url(email), params={"truncateResponse": "false"}
            )
