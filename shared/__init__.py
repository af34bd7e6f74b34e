"""
CyberSecure Toolkit Shared Module
=================================

Configuration, logging, console, models and HTTP client shared by the
self-check tools.
"""

from shared.config import ToolkitConfig

__all__ = ["ToolkitConfig"]
