"""Tests for the round expression evaluator."""

import pytest

from scenario_keeper.game.expressions import (
    ExpressionError,
    evaluate,
    evaluate_condition,
    expand,
    tokenize,
)


class TestArithmetic:
    """Tests for arithmetic evaluation."""

    def test_precedence(self):
        """Test multiplication binds tighter than addition."""
        assert evaluate("2+3*4") == 14
        assert evaluate("(2+3)*4") == 20

    def test_left_associative(self):
        """Test subtraction and division associate to the left."""
        assert evaluate("10-4-3") == 3
        assert evaluate("12/3/2") == 2

    def test_unary_and_modulo(self):
        """Test unary minus and modulo."""
        assert evaluate("-3+5") == 2
        assert evaluate("7%3") == 1

    def test_division_by_zero(self):
        """Test division by zero raises an expression error."""
        with pytest.raises(ExpressionError):
            evaluate("1/0")
        with pytest.raises(ExpressionError):
            evaluate("2%R", {"R": 0})


class TestConditions:
    """Tests for comparisons and logical operators."""

    @pytest.mark.parametrize("expression,expected", [
        ("3>=2", True),
        ("1>=2", False),
        ("2==2", True),
        ("2===2", True),
        ("2!=2", False),
        ("2!==3", True),
        ("1<2", True),
        ("2<=1", False),
    ])
    def test_comparisons(self, expression, expected):
        """Test each comparison operator."""
        assert evaluate_condition(expression) is expected

    def test_logical_operators(self):
        """Test &&, || and ! with comparisons."""
        assert evaluate_condition("1<2 && 3>2")
        assert not evaluate_condition("1>2 && 3>2")
        assert evaluate_condition("1>2 || 3>2")
        assert evaluate_condition("!(1>2)")

    def test_bang_binds_tightly(self):
        """Test ! applies to its operand before comparisons."""
        assert not evaluate_condition("!R==2", {"R": 3})
        assert evaluate_condition("!R==0", {"R": 3})
        assert evaluate_condition("!(R==2)", {"R": 3})
        assert evaluate("!0+1") == 2

    def test_word_not_binds_loosely(self):
        """Test not applies to the whole comparison."""
        assert evaluate_condition("not R==2", {"R": 3})

    def test_word_operators(self):
        """Test and/or/not spelled out."""
        assert evaluate_condition("1<2 and not 3<2")
        assert evaluate_condition("false or true")

    def test_numbers_are_truthy(self):
        """Test numeric results coerce like booleans."""
        assert evaluate_condition("3")
        assert not evaluate_condition("2-2")


class TestPlaceholders:
    """Tests for placeholder expansion."""

    def test_expand(self):
        """Test every occurrence of a placeholder is replaced."""
        assert expand("R>=2 && R<C", {"R": 3, "C": 4}) == "3>=2 && 3<4"

    def test_round_and_character_count(self):
        """Test a typical round rule with both placeholders."""
        values = {"R": 3, "C": 2}
        assert evaluate_condition("R>=2 && C<4", values)
        assert not evaluate_condition("R==C", values)

    def test_character_count_arithmetic(self):
        """Test counts computed from the character count."""
        assert evaluate("C+1", {"C": 3}) == 4
        assert evaluate("2*L+C", {"C": 3, "L": 2}) == 7


class TestErrors:
    """Tests for malformed expressions."""

    @pytest.mark.parametrize("expression", ["", "   ", "2 +", "(1", "1)", "R>=2", "2 ** 3", "2 # 3", "import os"])
    def test_malformed(self, expression):
        """Test malformed input raises an expression error."""
        with pytest.raises(ExpressionError):
            evaluate(expression)

    def test_error_is_value_error(self):
        """Test expression errors are value errors."""
        with pytest.raises(ValueError):
            evaluate("1 +")

    def test_tokenize_positions(self):
        """Test tokens keep their source position."""
        tokens = tokenize("3 >= 2")
        assert [(t.kind, t.text, t.position) for t in tokens] == [
            ("number", "3", 0), ("op", ">=", 2), ("number", "2", 5)
        ]
