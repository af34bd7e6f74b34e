"""
Self-Check Analyzers
=====================

Pure, offline heuristic scorers.
"""

from selfcheck.analyzers.password_generator import PasswordGenerator
from selfcheck.analyzers.password_strength import PasswordStrengthAnalyzer
from selfcheck.analyzers.url_risk import UrlRiskAnalyzer
from selfcheck.analyzers.wifi_config import WifiConfigAnalyzer

__all__ = [
    "PasswordGenerator",
    "PasswordStrengthAnalyzer",
    "UrlRiskAnalyzer",
    "WifiConfigAnalyzer",
]
