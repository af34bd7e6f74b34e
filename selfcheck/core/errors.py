"""
Self-Check Errors
==================
"""

from __future__ import annotations


class InputRejected(ValueError):
    """User input cannot be analysed (missing or malformed field).

    The message is user-facing.  The engine converts this exception into
    a rejected :class:`shared.models.ScanResult`; it never reaches the CLI
    as a traceback.
    """
