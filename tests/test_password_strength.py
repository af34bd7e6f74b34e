import pytest

from selfcheck.analyzers.password_strength import (
    MAX_FEEDBACK,
    PasswordStrengthAnalyzer,
    _Candidate,
    _length,
)
from selfcheck.core.models import StrengthLevel


@pytest.fixture
def analyzer():
    return PasswordStrengthAnalyzer()


def test_empty_password_yields_no_result(analyzer):
    assert analyzer.analyze("") is None


@pytest.mark.parametrize("password", ["a", "aB3!", "Zz9#Yy8", "abcdefg"])
def test_length_rule_gives_no_points_below_eight_characters(password):
    contributions = list(_length(_Candidate.of(password)))
    assert sum(c.points for c in contributions) == 0
    assert any(c.message and c.message.startswith("Too short") for c in contributions)


def test_short_password_with_all_classes_scores_only_class_bonuses(analyzer):
    result = analyzer.analyze("aB3!")

    assert result.score == 65
    assert result.level is StrengthLevel.GOOD
    assert result.feedback == ("Too short - use at least 8 characters",)


def test_long_mixed_password_is_very_strong(analyzer):
    result = analyzer.analyze("Xk9#mQ2$vL7!pR4&wZ8@")

    assert result.length == 20
    assert result.score == 100
    assert result.level is StrengthLevel.VERY_STRONG
    assert result.detected_char_types == ("lowercase", "UPPERCASE", "numbers", "symbols")
    assert result.entropy > 80
    assert result.feedback == ()


def test_dictionary_word_is_penalised(analyzer):
    result = analyzer.analyze("password")

    # 15 (length) + 15 (lowercase) - 20 (dictionary)
    assert result.score == 10
    assert result.level is StrengthLevel.WEAK
    assert len(result.feedback) == MAX_FEEDBACK
    assert result.feedback[-1] == "Avoid common dictionary words"


def test_penalties_and_feedback_order(analyzer):
    result = analyzer.analyze("abc123")

    # 15 (lowercase) + 15 (digits) - 5 (simple shape) - 10 (sequence)
    assert result.score == 15
    assert result.feedback == (
        "Too short - use at least 8 characters",
        "Add uppercase letters (A-Z)",
        "Add special characters (!@#$%^&*)",
        "Avoid simple patterns (letters then numbers)",
    )
    assert "Avoid sequential patterns (123, abc, etc.)" in result.warnings


def test_digits_then_letters_counts_as_simple_shape(analyzer):
    result = analyzer.analyze("2024summer")
    assert "Avoid simple patterns (letters then numbers)" in result.warnings


def test_repeated_characters_penalised(analyzer):
    plain = analyzer.analyze("Kq7!Lz9@Vw")
    repeated = analyzer.analyze("Kq7!Lzzz@Vw")
    assert "Avoid repeating characters (aaa, 111, etc.)" in repeated.warnings
    assert repeated.score == plain.score - 10


def test_score_is_clamped_at_zero(analyzer):
    result = analyzer.analyze("admin")
    assert result.score == 0
    assert result.level is StrengthLevel.WEAK


def test_very_long_password_gets_shortening_hint(analyzer):
    result = analyzer.analyze("Xk9#mQ2$vL7!pR4&wZ8@" * 2)
    assert "Consider shortening - very long passwords may be hard to remember" in result.warnings


def test_entropy_counts_symbol_pool_as_32(analyzer):
    result = analyzer.analyze("!!!!")
    # 4 * log2(32)
    assert result.entropy == 20.0
    assert result.detected_char_types == ("symbols",)


@pytest.mark.parametrize(
    "score, level",
    [
        (0, StrengthLevel.WEAK),
        (29, StrengthLevel.WEAK),
        (30, StrengthLevel.FAIR),
        (49, StrengthLevel.FAIR),
        (50, StrengthLevel.GOOD),
        (74, StrengthLevel.GOOD),
        (75, StrengthLevel.STRONG),
        (89, StrengthLevel.STRONG),
        (90, StrengthLevel.VERY_STRONG),
        (100, StrengthLevel.VERY_STRONG),
    ],
)
def test_strength_level_thresholds(score, level):
    assert StrengthLevel.from_score(score) is level
