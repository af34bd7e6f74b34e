"""
Password Strength Scorer
=========================

Additive strength scoring for a candidate password.

Points are awarded for length thresholds and for each character class
present, then deducted for weakening patterns (runs of a repeated
character, letters-then-digits shapes, keyboard/alphabet sequences and
common dictionary passwords).  A combinatorial entropy estimate above
80 bits earns a final bonus.  The total is clamped to [0, 100] and
mapped to one of five strength levels.

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines --
      Authentication and Lifecycle Management.
    - Bonneau, J. (2012). The Science of Guessing: Analyzing an
      Anonymized Corpus of 70 Million Passwords. IEEE S&P.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from shared.math_utils import clamp, combinatorial_entropy

from selfcheck.core.models import (
    FindingTag,
    PasswordStrengthResult,
    StrengthLevel,
)
from selfcheck.core.rules import Contribution, RuleSet, bonus, warn


# ===================================================================== #
#  Pattern tables
# ===================================================================== #

SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"

_LENGTH_THRESHOLDS: tuple[int, ...] = (8, 12, 16, 20)
_LENGTH_BONUS = 15
MIN_RECOMMENDED_LENGTH = 8
MAX_COMFORTABLE_LENGTH = 32

_LOWER_RE = re.compile(r"[a-z]")
_UPPER_RE = re.compile(r"[A-Z]")
_DIGIT_RE = re.compile(r"[0-9]")
_SYMBOL_RE = re.compile("[" + re.escape(SYMBOLS) + "]")

_REPEAT_RE = re.compile(r"(.)\1{2,}")
_SIMPLE_SHAPE_RE = re.compile(r"^[a-z]+[0-9]+$|^[0-9]+[a-z]+$")
_SEQUENCES: tuple[str, ...] = (
    "123", "234", "345", "456", "567", "678", "789", "890", "012",
    "abc", "bcd", "cde",
)
_WEAK_PASSWORDS: tuple[str, ...] = (
    "password", "admin", "letmein", "welcome", "monkey", "dragon", "123456",
)

# Pool sizes used by the entropy estimate (symbols counted as 32).
_POOL_LOWER = 26
_POOL_UPPER = 26
_POOL_DIGIT = 10
_POOL_SYMBOL = 32

ENTROPY_BONUS_THRESHOLD = 80.0
_ENTROPY_BONUS = 10
MAX_FEEDBACK = 4


@dataclass(frozen=True, slots=True)
class _Candidate:
    """A password with its character classes pre-computed."""

    text: str
    has_lower: bool
    has_upper: bool
    has_digit: bool
    has_symbol: bool

    @classmethod
    def of(cls, text: str) -> _Candidate:
        return cls(
            text=text,
            has_lower=bool(_LOWER_RE.search(text)),
            has_upper=bool(_UPPER_RE.search(text)),
            has_digit=bool(_DIGIT_RE.search(text)),
            has_symbol=bool(_SYMBOL_RE.search(text)),
        )

    @property
    def pool_size(self) -> int:
        return (
            (_POOL_LOWER if self.has_lower else 0)
            + (_POOL_UPPER if self.has_upper else 0)
            + (_POOL_DIGIT if self.has_digit else 0)
            + (_POOL_SYMBOL if self.has_symbol else 0)
        )

    @property
    def entropy(self) -> float:
        return combinatorial_entropy(len(self.text), self.pool_size)

    @property
    def char_types(self) -> tuple[str, ...]:
        flags = (
            (self.has_lower, "lowercase"),
            (self.has_upper, "UPPERCASE"),
            (self.has_digit, "numbers"),
            (self.has_symbol, "symbols"),
        )
        return tuple(label for present, label in flags if present)


# ===================================================================== #
#  Rules
# ===================================================================== #


def _length(pw: _Candidate) -> Iterator[Contribution]:
    for threshold in _LENGTH_THRESHOLDS:
        if len(pw.text) >= threshold:
            yield bonus(_LENGTH_BONUS)
    if len(pw.text) < MIN_RECOMMENDED_LENGTH:
        yield warn(0, "Too short - use at least 8 characters")
    if len(pw.text) > MAX_COMFORTABLE_LENGTH:
        yield warn(0, "Consider shortening - very long passwords may be hard to remember")


def _lowercase(pw: _Candidate) -> Iterator[Contribution]:
    yield bonus(15) if pw.has_lower else warn(0, "Add lowercase letters (a-z)")


def _uppercase(pw: _Candidate) -> Iterator[Contribution]:
    yield bonus(15) if pw.has_upper else warn(0, "Add uppercase letters (A-Z)")


def _digits(pw: _Candidate) -> Iterator[Contribution]:
    yield bonus(15) if pw.has_digit else warn(0, "Add numbers (0-9)")


def _symbols(pw: _Candidate) -> Iterator[Contribution]:
    yield bonus(20) if pw.has_symbol else warn(0, "Add special characters (!@#$%^&*)")


def _repeated_chars(pw: _Candidate) -> Iterator[Contribution]:
    if _REPEAT_RE.search(pw.text):
        yield warn(-10, "Avoid repeating characters (aaa, 111, etc.)")


def _simple_shape(pw: _Candidate) -> Iterator[Contribution]:
    if _SIMPLE_SHAPE_RE.search(pw.text.lower()):
        yield warn(-5, "Avoid simple patterns (letters then numbers)")


def _sequences(pw: _Candidate) -> Iterator[Contribution]:
    lowered = pw.text.lower()
    if any(seq in lowered for seq in _SEQUENCES):
        yield warn(-10, "Avoid sequential patterns (123, abc, etc.)")


def _dictionary(pw: _Candidate) -> Iterator[Contribution]:
    lowered = pw.text.lower()
    if any(word in lowered for word in _WEAK_PASSWORDS):
        yield warn(-20, "Avoid common dictionary words")


def _entropy(pw: _Candidate) -> Iterator[Contribution]:
    if pw.entropy > ENTROPY_BONUS_THRESHOLD:
        yield bonus(_ENTROPY_BONUS)


PASSWORD_RULES: RuleSet[_Candidate] = RuleSet([
    _length,
    _lowercase,
    _uppercase,
    _digits,
    _symbols,
    _repeated_chars,
    _simple_shape,
    _sequences,
    _dictionary,
    _entropy,
])


class PasswordStrengthAnalyzer:
    """Scores password strength with the additive rule table.

    Usage::

        analyzer = PasswordStrengthAnalyzer()
        result = analyzer.analyze("Tr0ub4dor&3")
        print(result.score, result.level.value)
    """

    def analyze(self, password: str) -> Optional[PasswordStrengthResult]:
        """Score *password*.

        Returns:
            The strength result, or ``None`` for an empty password
            (nothing to analyse).
        """
        if not password:
            return None

        candidate = _Candidate.of(password)
        tally = PASSWORD_RULES.evaluate(candidate)
        score = int(clamp(tally.total))

        remediation = tuple(
            f.message for f in tally.findings if f.tag is FindingTag.WARNING
        )

        return PasswordStrengthResult(
            score=score,
            level=StrengthLevel.from_score(score),
            findings=tuple(tally.findings),
            length=len(password),
            entropy=round(candidate.entropy, 1),
            detected_char_types=candidate.char_types,
            feedback=remediation[:MAX_FEEDBACK],
        )
