"""
Self-Check Engine
==================

Central orchestrator for the self-check tools.  :class:`SelfCheckEngine`
owns one instance of every analyzer and collector and wraps each result
in the shared :class:`~shared.models.ScanResult` envelope consumed by the
console and report layers.

Invalid input never escapes as an exception: analyzers signal it with
:class:`~selfcheck.core.errors.InputRejected` (or a rejection model) and
the engine turns it into a result with ``rejected=True``.

Architecture follows the Facade pattern (Gamma et al., 1994).
"""

from __future__ import annotations

import random
from typing import Optional

import httpx

from shared.config import ToolkitConfig
from shared.logger import ToolkitLogger, redact
from shared.models import Finding, ScanResult, Severity

from selfcheck.analyzers.password_generator import PasswordGenerator
from selfcheck.analyzers.password_strength import PasswordStrengthAnalyzer
from selfcheck.analyzers.url_risk import UrlRiskAnalyzer
from selfcheck.analyzers.wifi_config import WifiConfigAnalyzer
from selfcheck.collectors.breach_lookup import BreachLookup
from selfcheck.collectors.reachability import ReachabilityCheck
from selfcheck.core.errors import InputRejected
from selfcheck.core.models import (
    CharsetSelection,
    FindingTag,
    ScoreResult,
    StrengthLevel,
    ThreatLevel,
    WifiSecurityLevel,
)

_STRENGTH_SEVERITY: dict[StrengthLevel, Severity] = {
    StrengthLevel.WEAK: Severity.HIGH,
    StrengthLevel.FAIR: Severity.MEDIUM,
    StrengthLevel.GOOD: Severity.LOW,
    StrengthLevel.STRONG: Severity.INFO,
    StrengthLevel.VERY_STRONG: Severity.INFO,
}

_THREAT_SEVERITY: dict[ThreatLevel, Severity] = {
    ThreatLevel.DANGEROUS: Severity.HIGH,
    ThreatLevel.SUSPICIOUS: Severity.MEDIUM,
    ThreatLevel.SAFE: Severity.INFO,
    ThreatLevel.INVALID: Severity.INFO,
}

_WIFI_SEVERITY: dict[WifiSecurityLevel, Severity] = {
    WifiSecurityLevel.POOR: Severity.HIGH,
    WifiSecurityLevel.FAIR: Severity.MEDIUM,
    WifiSecurityLevel.GOOD: Severity.LOW,
    WifiSecurityLevel.EXCELLENT: Severity.INFO,
}

_PLACEHOLDER_TARGET = "[empty]"
WIFI_RECOMMENDATION_TITLE = "WiFi Security Recommendation"


class SelfCheckEngine:
    """Runs every self-check operation and returns :class:`ScanResult` objects.

    Usage::

        engine = SelfCheckEngine()
        result = await engine.analyze_url("http://paypal-secure-login.com/verify")
        result.level        # 'Dangerous'

    Args:
        config:     Toolkit configuration (defaults when ``None``).
        rng:        Random source shared by the generator and the
                    reachability simulation.
        transport:  httpx transport handed to the collectors (tests).
    """

    def __init__(
        self,
        config: Optional[ToolkitConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or ToolkitConfig()
        self.logger = ToolkitLogger.from_config("engine", self.config)

        self._password_analyzer = PasswordStrengthAnalyzer()
        self._password_generator = PasswordGenerator(
            rng, secure=self.config.password.secure_random
        )
        self._url_analyzer = UrlRiskAnalyzer()
        self._wifi_analyzer = WifiConfigAnalyzer()
        self._breach_lookup = BreachLookup(
            self.config.breach, self.config.network, transport=transport
        )
        self._reachability = ReachabilityCheck(
            self.config.status, self.config.network, rng=rng, transport=transport
        )

    # ------------------------------------------------------------------ #
    #  Password
    # ------------------------------------------------------------------ #

    async def analyze_password(self, password: str) -> ScanResult:
        """Score a password.  An empty password yields an empty result."""
        result = ScanResult(tool_name="password", target="[password]")
        self.logger.info("Starting password analysis (length=%d)", len(password))

        try:
            strength = self._password_analyzer.analyze(password)
        except Exception as exc:
            return self._failed(result, "Password analysis", exc)

        if strength is None:
            return result.finalize("No password supplied - nothing to analyse.")

        result.score = strength.score
        result.level = strength.level.value
        result.metadata = strength.model_dump(mode="json")
        severity = _STRENGTH_SEVERITY[strength.level]
        result.add_finding(Finding(
            severity=severity,
            title=f"Password Strength: {strength.level.value}",
            description=(
                f"Score {strength.score}/100, length {strength.length}, "
                f"estimated entropy {strength.entropy:.1f} bits. "
                f"Character types: {', '.join(strength.detected_char_types) or 'none'}."
            ),
        ))
        for message in strength.feedback:
            result.add_finding(Finding(
                severity=Severity.LOW,
                title="Password Improvement Suggestion",
                description=message,
                recommendation=message,
            ))
        return result.finalize(
            f"Password strength: {strength.level.value} ({strength.score}/100)"
        )

    async def generate_password(
        self,
        length: Optional[int] = None,
        charset: Optional[CharsetSelection] = None,
    ) -> ScanResult:
        """Generate a password and score it with the strength analyzer."""
        settings = self.config.password
        if length is None:
            length = settings.default_length
        if charset is None:
            charset = CharsetSelection(
                uppercase=settings.uppercase,
                lowercase=settings.lowercase,
                digits=settings.digits,
                symbols=settings.symbols,
            )

        result = ScanResult(tool_name="generator", target=f"length={length}")
        generated = self._password_generator.generate(length, charset)
        result.metadata = generated.model_dump(mode="json")

        if not generated.accepted:
            self.logger.info("Password generation rejected: %s", generated.rejection)
            return self._rejected(result, generated.rejection or "")

        strength = self._password_analyzer.analyze(generated.password)
        if strength is not None:
            result.score = strength.score
            result.level = strength.level.value
            result.metadata["strength"] = strength.model_dump(mode="json")
        return result.finalize(
            f"Generated {generated.length}-character password "
            f"from a pool of {generated.pool_size} characters"
        )

    # ------------------------------------------------------------------ #
    #  URL
    # ------------------------------------------------------------------ #

    async def analyze_url(self, url: str) -> ScanResult:
        """Score a URL for phishing indicators."""
        result = ScanResult(tool_name="url", target=url.strip() or _PLACEHOLDER_TARGET)
        self.logger.info("Starting URL analysis")

        try:
            risk = self._url_analyzer.analyze(url)
        except Exception as exc:
            return self._failed(result, "URL analysis", exc)

        result.metadata = risk.model_dump(mode="json")
        if risk.level is ThreatLevel.INVALID:
            return self._rejected(result, risk.error or "Invalid URL", level=risk.level.value)

        self._apply_score(result, risk, _THREAT_SEVERITY[risk.level])
        return result.finalize(f"Threat level: {risk.level.value} ({risk.score}/100)")

    # ------------------------------------------------------------------ #
    #  WiFi
    # ------------------------------------------------------------------ #

    async def analyze_wifi(
        self,
        ssid: str,
        encryption: str,
        *,
        channel: Optional[int] = None,
        signal_dbm: Optional[int] = None,
    ) -> ScanResult:
        """Rate a declared WiFi configuration."""
        result = ScanResult(tool_name="wifi", target=ssid or _PLACEHOLDER_TARGET)
        self.logger.info("Starting WiFi analysis (encryption=%s)", encryption)

        try:
            wifi = self._wifi_analyzer.analyze(
                ssid, encryption, channel=channel, signal_dbm=signal_dbm
            )
        except InputRejected as exc:
            return self._rejected(result, str(exc))
        except Exception as exc:
            return self._failed(result, "WiFi analysis", exc)

        result.metadata = wifi.model_dump(mode="json")
        self._apply_score(result, wifi, _WIFI_SEVERITY[wifi.level])
        for advice in wifi.recommendations:
            result.add_finding(Finding(
                severity=Severity.INFO,
                title=WIFI_RECOMMENDATION_TITLE,
                description=advice,
                recommendation=advice,
            ))
        return result.finalize(
            f"Security level: {wifi.level.value} ({wifi.score}/100), "
            f"encryption {wifi.encryption.value} rated {wifi.encryption_rating}"
        )

    # ------------------------------------------------------------------ #
    #  Collectors
    # ------------------------------------------------------------------ #

    async def check_breach(self, email: str) -> ScanResult:
        """Look an email address up in the breach corpus."""
        result = ScanResult(tool_name="breach", target=email.strip() or _PLACEHOLDER_TARGET)
        self.logger.info("Starting breach lookup for %s", redact(email.strip()))

        try:
            with self.logger.timed("breach lookup"):
                report = await self._breach_lookup.lookup(email)
        except InputRejected as exc:
            return self._rejected(result, str(exc))

        result.simulated = report.simulated
        result.metadata = report.model_dump(mode="json")
        result.level = "Breached" if report.breached else "Not Breached"
        for breach in report.breaches:
            result.add_finding(Finding(
                severity=Severity.HIGH,
                title=f"Breach: {breach.name}",
                description=f"{breach.title} ({breach.breach_date}, "
                            f"{breach.pwn_count:,} accounts)",
                recommendation="Change this password everywhere it was reused "
                               "and enable two-factor authentication.",
            ))
        return result.finalize(report.message)

    async def check_status(self, target: str) -> ScanResult:
        """Check whether a website is reachable."""
        result = ScanResult(tool_name="status", target=target.strip() or _PLACEHOLDER_TARGET)

        try:
            with self.logger.timed("reachability check"):
                report = await self._reachability.check(target)
        except InputRejected as exc:
            return self._rejected(result, str(exc))

        result.target = report.domain
        result.simulated = report.simulated
        result.metadata = report.model_dump(mode="json")
        result.level = report.global_status
        if report.just_for_user:
            result.add_finding(Finding(
                severity=Severity.MEDIUM,
                title="Unreachable from this network only",
                description=f"{report.domain} is up globally but cannot be reached from here.",
                recommendation="Check your connection, DNS resolver, proxy or firewall.",
            ))
        elif report.is_down:
            result.add_finding(Finding(
                severity=Severity.HIGH,
                title="Website down",
                description=f"{report.domain} appears to be down ({report.issue}).",
            ))
        return result.finalize(
            f"{report.domain}: global {report.global_status}, "
            f"from here {report.user_status}, issue: {report.issue}"
        )

    # ------------------------------------------------------------------ #
    #  Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _apply_score(result: ScanResult, scored: ScoreResult, severity: Severity) -> None:
        """Copy score/level and turn tagged findings into shared findings."""
        result.score = scored.score
        result.level = getattr(scored.level, "value", scored.level)
        warning_severity = severity if severity is not Severity.INFO else Severity.LOW
        for finding in scored.findings:
            if finding.tag is FindingTag.WARNING:
                result.add_finding(Finding(
                    severity=warning_severity,
                    title="Risk Indicator",
                    description=finding.message,
                ))
            else:
                result.add_finding(Finding(
                    severity=Severity.INFO,
                    title="Positive Indicator",
                    description=finding.message,
                ))

    @staticmethod
    def _rejected(result: ScanResult, message: str, *, level: str = "Rejected") -> ScanResult:
        result.rejected = True
        result.level = level
        return result.finalize(message)

    def _failed(self, result: ScanResult, what: str, exc: Exception) -> ScanResult:
        self.logger.exception("%s failed: %s", what, exc)
        result.add_finding(Finding(
            severity=Severity.MEDIUM,
            title=f"{what} Error",
            description=f"Error during {what.lower()}: {exc}",
        ))
        return result.finalize(f"Error: {exc}")
