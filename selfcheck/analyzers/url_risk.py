"""
URL Risk Scorer
================

Phishing heuristics over the structure of a single URL.  No network
access is performed: the verdict is derived from the scheme, hostname,
path, query, port and overall length alone.

Ten independent checks add fixed points; a URL that triggers none is
pinned to a score of 5.  Scores map to Safe (<= 25), Suspicious (<= 60)
and Dangerous (> 60).

References:
    - Garera, S., Provos, N., Chew, M., & Rubin, A. D. (2007).
      A Framework for Detection and Measurement of Phishing Attacks. WORM.
    - Ma, J., Saul, L. K., Savage, S., & Voelker, G. M. (2009).
      Beyond Blacklists: Learning to Detect Malicious Web Sites from
      Suspicious URLs. KDD.
    - Unicode Technical Report #36: Unicode Security Considerations.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional
from urllib.parse import urlsplit

from shared.math_utils import clamp

from selfcheck.core.models import (
    FindingTag,
    ScoredFinding,
    ThreatLevel,
    UrlRiskResult,
)
from selfcheck.core.rules import Contribution, RuleSet, positive, warn


# ===================================================================== #
#  Keyword tables
# ===================================================================== #

BRAND_KEYWORDS: tuple[str, ...] = (
    "paypal", "amazon", "apple", "google", "microsoft", "bank", "security",
    "verify", "confirm", "update", "validate", "authenticate", "facebook",
    "instagram", "twitter", "linkedin", "wells", "chase", "discover",
)

SUSPICIOUS_PATH_KEYWORDS: tuple[str, ...] = (
    "verify", "confirm", "update", "login", "secure", "validate",
    "authenticate", "account", "payment", "billing", "reset", "activate",
)

STANDARD_PORTS: frozenset[int] = frozenset({80, 443, 8080, 8443})

_IPV4_PREFIX_RE = re.compile(r"^\d+\.\d+\.\d+\.\d+")
_ACCENTED_RE = re.compile("[àáâãäåæçèéêëìíîïñòóôõöøùúûüýÿ]")
_DIGIT_RUN_RE = re.compile(r"\d{4,}")

MAX_LABELS = 4
STANDARD_LABELS = 3
MAX_HYPHENS = 2
LONG_URL = 150
REASONABLE_URL = 100
CLEAN_SCORE = 5

_CLEAN_FINDINGS: tuple[ScoredFinding, ...] = (
    ScoredFinding(tag=FindingTag.POSITIVE, message="No major phishing indicators detected"),
    ScoredFinding(tag=FindingTag.POSITIVE, message="Domain structure appears legitimate"),
)

INVALID_URL_MESSAGE = (
    "Invalid URL format. Please enter a valid URL (e.g., https://example.com)"
)
EMPTY_URL_MESSAGE = "Please enter a URL"


@dataclass(frozen=True, slots=True)
class ParsedUrl:
    """The pieces of a URL the heuristics look at."""

    raw: str
    scheme: str
    hostname: str
    path: str
    query: str
    port: Optional[int]

    @property
    def labels(self) -> list[str]:
        return self.hostname.split(".")


def parse_url(url: str) -> Optional[ParsedUrl]:
    """Split *url* into a :class:`ParsedUrl`, or ``None`` if it is not an
    absolute URL with a scheme and a hostname."""
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return None

    hostname = parts.hostname or ""
    if not parts.scheme or not hostname or any(c.isspace() for c in hostname):
        return None

    return ParsedUrl(
        raw=url,
        scheme=parts.scheme.lower(),
        hostname=hostname.lower(),
        path=parts.path or "/",
        query=parts.query,
        port=port,
    )


# ===================================================================== #
#  Rules
# ===================================================================== #


def _protocol(url: ParsedUrl) -> Iterator[Contribution]:
    if url.scheme != "https":
        yield warn(25, "Not using HTTPS - connection is NOT encrypted")
    else:
        yield positive("Using secure HTTPS encryption")


def _brand_mimicry(url: ParsedUrl) -> Iterator[Contribution]:
    host = url.hostname
    for keyword in BRAND_KEYWORDS:
        if (
            keyword in host
            and not host.endswith(f"{keyword}.com")
            and not host.endswith(f"{keyword}.org")
        ):
            yield warn(35, f'Domain mimics "{keyword}" but uses different domain')
            return
    yield positive("Domain does not mimic well-known services")


def _ip_address(url: ParsedUrl) -> Iterator[Contribution]:
    if _IPV4_PREFIX_RE.match(url.hostname):
        yield warn(40, "URL uses raw IP address instead of domain name - major red flag")
    else:
        yield positive("URL uses proper domain name, not IP address")


def _subdomains(url: ParsedUrl) -> Iterator[Contribution]:
    count = len(url.labels)
    if count > MAX_LABELS:
        yield warn(20, f"Excessive subdomains ({count}) - unusual structure")
    if count <= STANDARD_LABELS:
        yield positive("Standard domain structure")


def _accented_chars(url: ParsedUrl) -> Iterator[Contribution]:
    if _ACCENTED_RE.search(url.hostname):
        yield warn(30, "Domain contains non-ASCII characters - possible IDN spoofing")


def _hyphens(url: ParsedUrl) -> Iterator[Contribution]:
    if url.hostname.count("-") > MAX_HYPHENS:
        yield warn(15, "Multiple hyphens in domain - possible domain spoofing")


def _path_keywords(url: ParsedUrl) -> Iterator[Contribution]:
    path, query = url.path.lower(), url.query.lower()
    for keyword in SUSPICIOUS_PATH_KEYWORDS:
        if keyword in path or keyword in query:
            yield warn(20, f'URL contains suspicious parameter: "{keyword}"')
            return


def _url_length(url: ParsedUrl) -> Iterator[Contribution]:
    if len(url.raw) > LONG_URL:
        yield warn(15, "Unusually long URL - may hide malicious parameters")
    if len(url.raw) <= REASONABLE_URL:
        yield positive("URL length is reasonable")


def _port(url: ParsedUrl) -> Iterator[Contribution]:
    if url.port is not None and url.port not in STANDARD_PORTS:
        yield warn(
            10,
            f"Non-standard port {url.port} - unusual but not necessarily malicious",
        )


def _generated_name(url: ParsedUrl) -> Iterator[Contribution]:
    if _DIGIT_RUN_RE.search(url.labels[0]):
        yield warn(15, "Domain contains many numbers - may be randomly generated")


URL_RULES: RuleSet[ParsedUrl] = RuleSet([
    _protocol,
    _brand_mimicry,
    _ip_address,
    _subdomains,
    _accented_chars,
    _hyphens,
    _path_keywords,
    _url_length,
    _port,
    _generated_name,
])


class UrlRiskAnalyzer:
    """Scores a URL for phishing indicators.

    Usage::

        result = UrlRiskAnalyzer().analyze("http://paypal-secure-login.com/verify")
        result.level          # ThreatLevel.DANGEROUS
    """

    def analyze(self, url: str) -> UrlRiskResult:
        url = url.strip()
        if not url:
            return self._invalid(url, EMPTY_URL_MESSAGE)

        parsed = parse_url(url)
        if parsed is None:
            return self._invalid(url, INVALID_URL_MESSAGE)

        tally = URL_RULES.evaluate(parsed)
        findings = list(tally.findings)
        score = tally.total

        if tally.warning_count == 0:
            findings.extend(_CLEAN_FINDINGS)
            score = CLEAN_SCORE

        return UrlRiskResult(
            score=int(clamp(score)),
            level=ThreatLevel.from_score(score),
            findings=tuple(findings),
            url=url,
            hostname=parsed.hostname,
        )

    @staticmethod
    def _invalid(url: str, message: str) -> UrlRiskResult:
        return UrlRiskResult(
            score=0,
            level=ThreatLevel.INVALID,
            url=url,
            error=message,
        )
