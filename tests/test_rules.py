from selfcheck.core.models import FindingTag
from selfcheck.core.rules import RuleSet, bonus, positive, warn


def _always_warn(subject):
    yield warn(10, f"warned {subject}")


def _silent_bonus(subject):
    yield bonus(5)


def _nothing(subject):
    return ()


def _praise(subject):
    yield positive("looks fine")


def test_rules_fold_in_order():
    rules = RuleSet([_always_warn, _silent_bonus, _nothing, _praise])
    tally = rules.evaluate("x")

    assert tally.total == 15
    assert [f.message for f in tally.findings] == ["warned x", "looks fine"]
    assert [f.tag for f in tally.findings] == [FindingTag.WARNING, FindingTag.POSITIVE]
    assert tally.warning_count == 1


def test_negative_points_reduce_total():
    rules = RuleSet([_silent_bonus, lambda s: [warn(-8, "penalty")]])
    assert rules.evaluate(None).total == -3


def test_names_strip_leading_underscore():
    rules = RuleSet([_always_warn, _praise])
    assert len(rules) == 2
    assert rules.names == ["always_warn", "praise"]


def test_positive_with_points_adds_to_total():
    rules = RuleSet([lambda s: [positive("WPA2 provides good security", points=10)]])
    tally = rules.evaluate(None)

    assert tally.total == 10
    assert tally.warning_count == 0
    assert tally.findings[0].tag is FindingTag.POSITIVE
