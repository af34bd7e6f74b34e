"""
Password Generator
===================

Draws random passwords from the union of the enabled character pools.

The default source is :class:`random.Random`, which is *not* suitable
for secrets; pass ``secure=True`` (or set ``password.secure_random`` in
the configuration) to draw from :class:`random.SystemRandom` instead.
"""

from __future__ import annotations

import random
import string
from typing import Optional

from selfcheck.analyzers.password_strength import SYMBOLS
from selfcheck.core.models import CharsetSelection, GeneratedPassword

UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
DIGITS = string.digits

EMPTY_CHARSET_MESSAGE = "Select at least one character type"


def build_pool(charset: CharsetSelection) -> str:
    """Concatenate the enabled pools (upper, lower, digits, symbols)."""
    parts = (
        (charset.uppercase, UPPERCASE),
        (charset.lowercase, LOWERCASE),
        (charset.digits, DIGITS),
        (charset.symbols, SYMBOLS),
    )
    return "".join(pool for enabled, pool in parts if enabled)


class PasswordGenerator:
    """Random password generator.

    Args:
        rng:     Random source; a fresh :class:`random.Random` by default.
        secure:  Use :class:`random.SystemRandom` (ignored when *rng* is given).
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        *,
        secure: bool = False,
    ) -> None:
        if rng is None:
            rng = random.SystemRandom() if secure else random.Random()
        self._rng = rng

    def generate(
        self,
        length: int,
        charset: Optional[CharsetSelection] = None,
    ) -> GeneratedPassword:
        """Generate *length* characters drawn uniformly from the pool.

        Length bounds are a UI concern and are not enforced here; a
        non-positive length yields an empty password.

        Returns:
            A :class:`GeneratedPassword`; when no pool is enabled it is a
            rejection carrying a user-facing message and no password.
        """
        charset = charset or CharsetSelection()
        pool = build_pool(charset)
        if not pool:
            return GeneratedPassword(
                charset=charset,
                length=length,
                rejection=EMPTY_CHARSET_MESSAGE,
            )

        password = "".join(self._rng.choice(pool) for _ in range(max(length, 0)))
        return GeneratedPassword(
            password=password,
            length=len(password),
            pool_size=len(pool),
            charset=charset,
        )
