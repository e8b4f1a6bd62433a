"""Safe evaluator for scenario round expressions.

Supports integer literals, ``true``/``false``, parentheses, the arithmetic
operators ``+ - * / %``, comparisons (``== != < <= > >=``, plus ``===`` and
``!==`` as aliases) and logical ``&& || !`` (or ``and or not``).

``!`` is a unary operator binding as tightly as unary minus, so ``!R==2``
reads ``(!R)==2``. The word ``not`` binds loosely, below comparisons.

Placeholders such as ``R`` (current round) or ``C`` (character count) are
expanded textually before parsing, see :func:`expand`.
"""

import re
from dataclasses import dataclass

Number = int | float | bool


class ExpressionError(ValueError):
    """Raised when an expression cannot be parsed or evaluated."""


@dataclass(frozen=True)
class Token:
    """A lexical token."""

    kind: str  # number, op, lparen, rparen, name
    text: str
    position: int


TOKEN_PATTERN = re.compile(
    r"\s*(?:"
    r"(?P<number>\d+(?:\.\d+)?)"
    r"|(?P<op>===|!==|==|!=|<=|>=|&&|\|\||[-+*/%<>!])"
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r"|(?P<name>[A-Za-z_]+)"
    r")"
)

WORD_OPERATORS = {"and": "&&", "or": "||", "not": "not"}
COMPARISONS = {"==", "!=", "===", "!==", "<", "<=", ">", ">="}


def expand(expression: str, values: dict[str, int]) -> str:
    """Replace every occurrence of each placeholder with its decimal value."""
    for placeholder, value in values.items():
        expression = expression.replace(placeholder, str(value))
    return expression


def tokenize(expression: str) -> list[Token]:
    """Split an expression into tokens.

    Raises:
        ExpressionError: On characters outside the grammar
    """
    tokens: list[Token] = []
    position = 0
    text = expression.rstrip()
    while position < len(text):
        match = TOKEN_PATTERN.match(text, position)
        if not match or match.end() == position:
            raise ExpressionError(f"Unexpected character at {position} in '{expression}'")
        kind = match.lastgroup
        value = match.group(kind)
        if kind == "name":
            word = value.lower()
            if word in WORD_OPERATORS:
                kind, value = "op", WORD_OPERATORS[word]
            elif word in ("true", "false"):
                value = word
            else:
                raise ExpressionError(f"Unknown name '{value}' in '{expression}'")
        tokens.append(Token(kind, value, match.start(kind)))
        position = match.end()
    return tokens


class ExpressionParser:
    """Recursive-descent parser that evaluates while it parses."""

    def __init__(self, expression: str):
        self.expression = expression
        self.tokens = tokenize(expression)
        self.pos = 0

    def parse(self) -> Number:
        """Evaluate the whole expression.

        Raises:
            ExpressionError: If the expression is malformed
        """
        if not self.tokens:
            raise ExpressionError("Empty expression")
        value = self._or()
        if self.pos < len(self.tokens):
            token = self.tokens[self.pos]
            raise ExpressionError(f"Unexpected '{token.text}' at {token.position} in '{self.expression}'")
        return value

    def _peek(self) -> Token | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _accept(self, *ops: str) -> str | None:
        token = self._peek()
        if token and token.kind == "op" and token.text in ops:
            self.pos += 1
            return token.text
        return None

    def _or(self) -> Number:
        value = self._and()
        while self._accept("||"):
            right = self._and()
            value = value or right
        return value

    def _and(self) -> Number:
        value = self._not()
        while self._accept("&&"):
            right = self._not()
            value = value and right
        return value

    def _not(self) -> Number:
        if self._accept("not"):
            return not self._not()
        return self._comparison()

    def _comparison(self) -> Number:
        value = self._additive()
        while True:
            op = self._accept(*COMPARISONS)
            if op is None:
                return value
            right = self._additive()
            if op in ("==", "==="):
                value = value == right
            elif op in ("!=", "!=="):
                value = value != right
            elif op == "<":
                value = value < right
            elif op == "<=":
                value = value <= right
            elif op == ">":
                value = value > right
            else:
                value = value >= right

    def _additive(self) -> Number:
        value = self._term()
        while True:
            op = self._accept("+", "-")
            if op is None:
                return value
            right = self._term()
            value = value + right if op == "+" else value - right

    def _term(self) -> Number:
        value = self._unary()
        while True:
            op = self._accept("*", "/", "%")
            if op is None:
                return value
            right = self._unary()
            if op == "*":
                value = value * right
            elif right == 0:
                raise ExpressionError(f"Division by zero in '{self.expression}'")
            elif op == "/":
                value = value / right
            else:
                value = value % right

    def _unary(self) -> Number:
        if self._accept("!"):
            return not self._unary()
        op = self._accept("-", "+")
        if op:
            value = self._unary()
            return -value if op == "-" else +value
        return self._primary()

    def _primary(self) -> Number:
        token = self._peek()
        if token is None:
            raise ExpressionError(f"Unexpected end of '{self.expression}'")
        self.pos += 1
        if token.kind == "number":
            return float(token.text) if "." in token.text else int(token.text)
        if token.kind == "name":
            return token.text == "true"
        if token.kind == "lparen":
            value = self._or()
            closing = self._peek()
            if closing is None or closing.kind != "rparen":
                raise ExpressionError(f"Missing ')' in '{self.expression}'")
            self.pos += 1
            return value
        raise ExpressionError(f"Unexpected '{token.text}' at {token.position} in '{self.expression}'")


def evaluate(expression: str, values: dict[str, int] | None = None) -> Number:
    """Expand placeholders and evaluate an expression.

    Args:
        expression: Expression text, e.g. "R>=2 && C<4"
        values: Placeholder values, e.g. {"R": 3, "C": 2}

    Returns:
        The numeric or boolean result

    Raises:
        ExpressionError: If the expression is malformed
    """
    return ExpressionParser(expand(expression, values or {})).parse()


def evaluate_condition(expression: str, values: dict[str, int] | None = None) -> bool:
    """Evaluate an expression and coerce the result to a boolean."""
    return bool(evaluate(expression, values))
