"""
Self-Check Core Data Models
============================

Pydantic models for the self-check tools: the immutable
:class:`ScoreResult` family produced by the three heuristic scorers, the
password generator input/output, and the breach and reachability
collector reports.

Every collector report carries a *required* ``simulated`` flag so that a
locally fabricated answer can never be mistaken for a live one.

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
    - APWG (2023). Phishing Activity Trends Report.
    - Wi-Fi Alliance. (2018). WPA3 Specification v1.0.
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ===================================================================== #
#  Enumerations
# ===================================================================== #


class FindingTag(str, enum.Enum):
    """Whether a finding raises risk or is a positive indicator."""

    WARNING = "warning"
    POSITIVE = "positive"


class StrengthLevel(str, enum.Enum):
    """Password strength, lowest first."""

    WEAK = "Weak"
    FAIR = "Fair"
    GOOD = "Good"
    STRONG = "Strong"
    VERY_STRONG = "Very Strong"

    @classmethod
    def from_score(cls, score: int) -> StrengthLevel:
        """<30 Weak, <50 Fair, <75 Good, <90 Strong, else Very Strong."""
        if score < 30:
            return cls.WEAK
        if score < 50:
            return cls.FAIR
        if score < 75:
            return cls.GOOD
        if score < 90:
            return cls.STRONG
        return cls.VERY_STRONG


class ThreatLevel(str, enum.Enum):
    """Phishing threat classification of a URL."""

    SAFE = "Safe"
    SUSPICIOUS = "Suspicious"
    DANGEROUS = "Dangerous"
    INVALID = "Invalid"

    @classmethod
    def from_score(cls, score: int) -> ThreatLevel:
        """<=25 Safe, <=60 Suspicious, else Dangerous."""
        if score <= 25:
            return cls.SAFE
        if score <= 60:
            return cls.SUSPICIOUS
        return cls.DANGEROUS


class WifiSecurityLevel(str, enum.Enum):
    """Overall WiFi configuration rating."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"

    @classmethod
    def from_score(cls, score: int) -> WifiSecurityLevel:
        """<=10 Excellent, <=30 Good, <=50 Fair, else Poor."""
        if score <= 10:
            return cls.EXCELLENT
        if score <= 30:
            return cls.GOOD
        if score <= 50:
            return cls.FAIR
        return cls.POOR


class EncryptionType(str, enum.Enum):
    """WiFi encryption protocol as declared by the user.

    Reference:
        IEEE. (2020). IEEE Std 802.11-2020. Section 12: Security.
    """

    OPEN = "Open"
    WEP = "WEP"
    WPA = "WPA"
    WPA2 = "WPA2"
    WPA3 = "WPA3"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: str) -> EncryptionType:
        """Case-insensitive lookup by value; unrecognised names map to UNKNOWN."""
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        return cls.UNKNOWN


# ===================================================================== #
#  Scored results
# ===================================================================== #


class ScoredFinding(BaseModel):
    """A single human-readable message tagged warning or positive."""

    model_config = ConfigDict(frozen=True)

    tag: FindingTag
    message: str


class ScoreResult(BaseModel):
    """Outcome of one heuristic scorer run.

    Attributes:
        score:    Clamped score in [0, 100].
        level:    Categorical level derived from *score*.
        findings: Ordered warning / positive messages.
    """

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    level: str
    findings: tuple[ScoredFinding, ...] = ()

    @property
    def warnings(self) -> list[str]:
        return [f.message for f in self.findings if f.tag is FindingTag.WARNING]

    @property
    def positives(self) -> list[str]:
        return [f.message for f in self.findings if f.tag is FindingTag.POSITIVE]


class PasswordStrengthResult(ScoreResult):
    """Password strength verdict.

    ``feedback`` holds at most four remediation messages; the full set of
    triggered rules is still available through ``findings``.
    """

    level: StrengthLevel
    length: int = 0
    entropy: float = 0.0
    detected_char_types: tuple[str, ...] = ()
    feedback: tuple[str, ...] = ()


class UrlRiskResult(ScoreResult):
    """Phishing risk verdict for a URL.

    An unparseable URL yields ``level=INVALID``, score 0, no findings and
    an explanatory ``error``.
    """

    level: ThreatLevel
    url: str
    hostname: str = ""
    error: Optional[str] = None


class WifiRiskResult(ScoreResult):
    """Security rating of a declared WiFi configuration.

    ``recommendations`` lists the protocol-specific steps first, then the
    advice that applies to every router.
    """

    level: WifiSecurityLevel
    ssid: str
    encryption: EncryptionType
    encryption_rating: str = ""
    encryption_description: str = ""
    channel: Optional[int] = None
    signal_dbm: Optional[int] = None
    recommendations: tuple[str, ...] = ()


# ===================================================================== #
#  Password generator
# ===================================================================== #


class CharsetSelection(BaseModel):
    """Which character pools contribute to a generated password.

    At least one flag must be set, otherwise generation is rejected.
    """

    model_config = ConfigDict(frozen=True)

    uppercase: bool = True
    lowercase: bool = True
    digits: bool = True
    symbols: bool = True

    @property
    def any_enabled(self) -> bool:
        return self.uppercase or self.lowercase or self.digits or self.symbols


class GeneratedPassword(BaseModel):
    """Generator outcome: either a password or a rejection message."""

    model_config = ConfigDict(frozen=True)

    password: str = ""
    length: int = 0
    pool_size: int = 0
    charset: CharsetSelection = Field(default_factory=CharsetSelection)
    rejection: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None


# ===================================================================== #
#  Collector reports
# ===================================================================== #


class BreachRecord(BaseModel):
    """One breach an account appeared in.

    Field aliases match the HaveIBeenPwned v3 JSON payload.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(..., alias="Name")
    breach_date: str = Field(default="", alias="BreachDate")
    pwn_count: int = Field(default=0, alias="PwnCount")
    title: str = Field(default="", alias="Title")


class BreachReport(BaseModel):
    """Result of an email breach lookup.

    Attributes:
        simulated: ``True`` when the answer was fabricated locally because
            the live lookup could not be completed.  Required on purpose.
        source:    ``"live"`` or ``"simulation"``.
    """

    email: str
    breached: bool = False
    message: str = ""
    breaches: list[BreachRecord] = Field(default_factory=list)
    simulated: bool
    source: str = "live"
    checked_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ReachabilityReport(BaseModel):
    """Result of a website reachability check.

    ``simulated_fields`` names every value that was inferred or randomised
    instead of observed.
    """

    domain: str
    global_status: str = "Down"
    user_status: str = "Down"
    is_down: bool = False
    just_for_user: bool = False
    response_time_ms: int = 0
    status_code: int = 0
    issue: str = "Unknown"
    simulated: bool
    simulated_fields: list[str] = Field(default_factory=list)
    checked_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("domain")
    @classmethod
    def _strip_domain(cls, v: str) -> str:
        return v.strip()
