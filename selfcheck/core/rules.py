"""
Additive Rule Evaluation
=========================

The three scorers share one shape: an ordered table of independent rules,
each inspecting the subject and contributing points and/or a tagged
message.  :class:`RuleSet` folds the contributions into a running total
and an ordered findings list; clamping and level mapping are left to the
scorer, since each one post-processes the total differently.

A rule is a plain function yielding zero or more :class:`Contribution`
objects::

    def _protocol(url: ParsedUrl) -> Iterator[Contribution]:
        if url.scheme != "https":
            yield warn(25, "Not using HTTPS")
        else:
            yield positive("Using HTTPS")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Generic, Iterable, Optional, Sequence, TypeVar

from selfcheck.core.models import FindingTag, ScoredFinding

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Contribution:
    """Points and an optional message produced by one rule."""

    points: int = 0
    tag: FindingTag = FindingTag.WARNING
    message: Optional[str] = None


def warn(points: int, message: str) -> Contribution:
    return Contribution(points, FindingTag.WARNING, message)


def positive(message: str, points: int = 0) -> Contribution:
    """Reassuring message.

    *points* still count towards the total, so a positive can add risk
    (WPA2 is reported as good yet adds 10).
    """
    return Contribution(points, FindingTag.POSITIVE, message)


def bonus(points: int) -> Contribution:
    """Silent contribution: points only, no finding."""
    return Contribution(points, FindingTag.POSITIVE, None)


Rule = Callable[[T], Iterable[Contribution]]


@dataclass(slots=True)
class Tally:
    """Unclamped outcome of a rule set."""

    total: int = 0
    findings: list[ScoredFinding] = field(default_factory=list)

    @property
    def warning_count(self) -> int:
        return sum(1 for f in self.findings if f.tag is FindingTag.WARNING)

    def add(self, contribution: Contribution) -> None:
        self.total += contribution.points
        if contribution.message is not None:
            self.findings.append(
                ScoredFinding(tag=contribution.tag, message=contribution.message)
            )


class RuleSet(Generic[T]):
    """An ordered, immutable table of rules evaluated against one subject."""

    def __init__(self, rules: Sequence[Rule[T]]) -> None:
        self._rules: tuple[Rule[T], ...] = tuple(rules)

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def names(self) -> list[str]:
        return [rule.__name__.lstrip("_") for rule in self._rules]

    def evaluate(self, subject: T) -> Tally:
        """Run every rule in order and fold the contributions."""
        tally = Tally()
        for rule in self._rules:
            for contribution in rule(subject):
                tally.add(contribution)
        return tally
