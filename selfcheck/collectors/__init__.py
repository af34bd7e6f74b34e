"""
Self-Check Collectors
======================

Network-backed checks.  Each falls back to a clearly flagged simulation
when the live service cannot answer.
"""

from selfcheck.collectors.breach_lookup import BreachLookup
from selfcheck.collectors.reachability import ReachabilityCheck

__all__ = ["BreachLookup", "ReachabilityCheck"]
