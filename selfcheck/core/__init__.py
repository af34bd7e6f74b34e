"""
Self-Check Core Module
=======================

Data models, rule-table primitives and the input rejection error.  The
engine lives in :mod:`selfcheck.core.engine` and is imported from there.
"""

from selfcheck.core.errors import InputRejected
from selfcheck.core.models import (
    BreachRecord,
    BreachReport,
    CharsetSelection,
    EncryptionType,
    FindingTag,
    GeneratedPassword,
    PasswordStrengthResult,
    ReachabilityReport,
    ScoredFinding,
    ScoreResult,
    StrengthLevel,
    ThreatLevel,
    UrlRiskResult,
    WifiRiskResult,
    WifiSecurityLevel,
)

__all__ = [
    "BreachRecord",
    "BreachReport",
    "CharsetSelection",
    "EncryptionType",
    "FindingTag",
    "GeneratedPassword",
    "InputRejected",
    "PasswordStrengthResult",
    "ReachabilityReport",
    "ScoredFinding",
    "ScoreResult",
    "StrengthLevel",
    "ThreatLevel",
    "UrlRiskResult",
    "WifiRiskResult",
    "WifiSecurityLevel",
]
