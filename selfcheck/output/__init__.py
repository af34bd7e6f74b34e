"""
Self-Check Output Module
=========================

Console display and report generation for self-check results.
"""

from selfcheck.output.console import SelfCheckConsoleOutput
from selfcheck.output.report import SelfCheckReportGenerator

__all__ = [
    "SelfCheckConsoleOutput",
    "SelfCheckReportGenerator",
]
