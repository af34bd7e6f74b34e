"""
WiFi Config Scorer
===================

Rates a WiFi network from the parameters a user can read off their
router: SSID, encryption protocol, channel and signal strength.  Nothing
is captured from the air; the score is a pure function of the declared
values.

Risk points accumulate from the encryption protocol (Open and WEP are
effectively unprotected), default or public-looking SSIDs, hidden-SSID
markers, overlapping 2.4 GHz channels and weak signal.

References:
    - IEEE. (2020). IEEE Std 802.11-2020. Section 12: Security.
    - Wi-Fi Alliance. (2018). WPA3 Specification v1.0.
    - Fluhrer, S., Mantin, I., & Shamir, A. (2001). Weaknesses in the
      Key Scheduling Algorithm of RC4. SAC.
    - Cisco. (2023). 2.4 GHz Band Channel Assignment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from shared.math_utils import clamp

from selfcheck.core.errors import InputRejected
from selfcheck.core.models import EncryptionType, WifiRiskResult, WifiSecurityLevel
from selfcheck.core.rules import Contribution, RuleSet, positive, warn


# (rating, description) shown alongside the score
ENCRYPTION_INFO: dict[EncryptionType, tuple[str, str]] = {
    EncryptionType.OPEN: ("Critical", "No encryption - completely vulnerable"),
    EncryptionType.WEP: ("Critical", "Outdated and easily cracked"),
    EncryptionType.WPA: ("Poor", "Outdated, vulnerable to attacks"),
    EncryptionType.WPA2: ("Good", "Current standard, reasonably secure"),
    EncryptionType.WPA3: ("Excellent", "Latest standard, highly secure"),
    EncryptionType.UNKNOWN: ("Unknown", "Unable to determine encryption"),
}

ENCRYPTION_RECOMMENDATIONS: dict[EncryptionType, tuple[str, ...]] = {
    EncryptionType.OPEN: (
        "CRITICAL: Enable WPA2 or WPA3 encryption immediately",
        "Log into your router admin panel",
        "Change WiFi encryption to WPA2 or WPA3",
    ),
    EncryptionType.WEP: (
        "Upgrade to WPA2 or WPA3",
        "Access router settings",
        "Update security protocol",
    ),
    EncryptionType.WPA: (
        "Upgrade to WPA2 or WPA3",
        "Access router settings",
        "Update security protocol",
    ),
    EncryptionType.WPA2: (
        "WPA2 is secure, but consider upgrading",
        "If supported, upgrade router to WPA3",
        "Use a strong WiFi password (16+ characters)",
    ),
    EncryptionType.WPA3: (
        "WPA3 provides excellent security",
        "Maintain a strong WiFi password",
        "Keep router firmware updated",
    ),
    EncryptionType.UNKNOWN: (
        "Check the router admin panel to confirm which encryption is in use",
        "Use WPA2 or WPA3 encryption",
    ),
}

GENERAL_RECOMMENDATIONS: tuple[str, ...] = (
    "Disable WPS (WiFi Protected Setup)",
    "Change default router password",
    "Hide SSID broadcast (optional extra security)",
)

DEFAULT_SSIDS: frozenset[str] = frozenset({"admin", "default", "TP-Link", "linksys"})
PUBLIC_MARKERS: tuple[str, ...] = ("Guest", "Public")
MIN_SSID_LENGTH = 8

NON_OVERLAPPING_24GHZ: frozenset[int] = frozenset({1, 6, 11})
MAX_24GHZ_CHANNEL = 13

STRONG_SIGNAL_DBM = -70
MODERATE_SIGNAL_DBM = -80

MISSING_INPUT_MESSAGE = "Please fill in SSID and encryption type"


@dataclass(frozen=True, slots=True)
class WifiConfig:
    """Declared network parameters."""

    ssid: str
    encryption: EncryptionType
    channel: Optional[int] = None
    signal_dbm: Optional[int] = None


# ===================================================================== #
#  Rules
# ===================================================================== #


def _encryption(cfg: WifiConfig) -> Iterator[Contribution]:
    enc = cfg.encryption
    if enc is EncryptionType.OPEN:
        yield warn(60, "CRITICAL: No encryption - network is completely exposed")
    elif enc is EncryptionType.WEP:
        yield warn(55, "CRITICAL: WEP is outdated and can be cracked in minutes")
    elif enc is EncryptionType.WPA:
        yield warn(35, "WARNING: WPA is outdated - upgrade to WPA2/WPA3")
    elif enc is EncryptionType.WPA2:
        yield positive("WPA2 provides good security", points=10)
    elif enc is EncryptionType.WPA3:
        yield positive("WPA3 is the latest and most secure standard")


def _ssid_name(cfg: WifiConfig) -> Iterator[Contribution]:
    ssid = cfg.ssid
    if ssid in DEFAULT_SSIDS:
        yield warn(15, "Default SSID - router uses manufacturer default settings")
    elif any(marker in ssid for marker in PUBLIC_MARKERS):
        yield warn(20, "Guest/Public WiFi - be cautious with sensitive data")
    elif len(ssid) < MIN_SSID_LENGTH:
        yield warn(10, "Short SSID name - easier to target")
    else:
        yield positive("Custom SSID name is good practice")


def _hidden_ssid(cfg: WifiConfig) -> Iterator[Contribution]:
    if cfg.ssid == "Hidden" or "[Hidden]" in cfg.ssid:
        yield warn(5, "SSID is hidden - provides obscurity but can be discovered")


def _channel(cfg: WifiConfig) -> Iterator[Contribution]:
    channel = cfg.channel
    if channel is None:
        return
    if channel in NON_OVERLAPPING_24GHZ:
        yield positive(f"Channel {channel} is optimal (non-overlapping)")
    elif channel <= MAX_24GHZ_CHANNEL:
        yield warn(10, f"Channel {channel} overlaps with others - can cause interference")
    else:
        yield positive("5GHz channel - less interference than 2.4GHz")


def _signal(cfg: WifiConfig) -> Iterator[Contribution]:
    signal = cfg.signal_dbm
    if signal is None:
        return
    if signal >= STRONG_SIGNAL_DBM:
        yield positive(f"Strong signal ({signal}dBm)")
    elif signal >= MODERATE_SIGNAL_DBM:
        yield positive(f"Moderate signal ({signal}dBm) - may have dead zones")
    else:
        yield warn(5, f"Weak signal ({signal}dBm) - poor coverage")


WIFI_RULES: RuleSet[WifiConfig] = RuleSet([
    _encryption,
    _ssid_name,
    _hidden_ssid,
    _channel,
    _signal,
])


class WifiConfigAnalyzer:
    """Scores a declared WiFi configuration.

    Usage::

        result = WifiConfigAnalyzer().analyze("HomeNetwork5G", "WPA3", channel=6, signal_dbm=-60)
        result.level    # WifiSecurityLevel.EXCELLENT
    """

    def analyze(
        self,
        ssid: str,
        encryption: EncryptionType | str,
        *,
        channel: Optional[int] = None,
        signal_dbm: Optional[int] = None,
    ) -> WifiRiskResult:
        """Score the configuration.

        Raises:
            InputRejected: If *ssid* or *encryption* is empty.
        """
        if not ssid or not encryption:
            raise InputRejected(MISSING_INPUT_MESSAGE)
        if not isinstance(encryption, EncryptionType):
            encryption = EncryptionType.parse(encryption)

        cfg = WifiConfig(ssid, encryption, channel, signal_dbm)
        tally = WIFI_RULES.evaluate(cfg)
        if tally.total == 0:
            tally.add(positive("WiFi security configuration is excellent"))

        score = int(clamp(tally.total))
        rating, description = ENCRYPTION_INFO[encryption]
        return WifiRiskResult(
            score=score,
            level=WifiSecurityLevel.from_score(score),
            findings=tuple(tally.findings),
            ssid=ssid,
            encryption=encryption,
            encryption_rating=rating,
            encryption_description=description,
            channel=channel,
            signal_dbm=signal_dbm,
            recommendations=(
                ENCRYPTION_RECOMMENDATIONS[encryption] + GENERAL_RECOMMENDATIONS
            ),
        )
