"""
CyberSecure Self-Check -- Personal Security Self-Assessment
============================================================

Heuristic self-check tools for everyday users: password strength
scoring, random password generation, phishing-URL risk scoring, WiFi
configuration rating, plus best-effort email breach lookup and website
reachability checks.

Modules:
    - selfcheck.core.engine: Central orchestrator
    - selfcheck.core.models: Pydantic data models
    - selfcheck.core.rules: Rule-table scoring primitives
    - selfcheck.analyzers: Offline heuristic scorers
    - selfcheck.collectors: Network-backed checks with simulated fallback
    - selfcheck.output: Console and report output
    - selfcheck.cli: Click-based command-line interface

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
    - APWG (2023). Phishing Activity Trends Report.
    - IEEE. (2020). IEEE Std 802.11-2020.
"""

__version__ = "1.0.0"
__tool_name__ = "selfcheck"
