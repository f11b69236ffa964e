"""Formula parser: tokenizer + grammar for ``NAME(arg, arg, ...)``.

Grammar::

    formula  := ['='] NAME '(' args ')'
    args     := arg (',' arg)*
    arg      := any run of characters other than '(', ')' and ','

Whitespace around every token is ignored and each argument is trimmed.
Every comma separates arguments, so an argument can never contain one, and
parentheses inside arguments are rejected rather than nested.
"""

from __future__ import annotations

from dataclasses import dataclass

from sheetcalc.calc._errors import UnrecognizedFormula
from sheetcalc.calc._functions import AGGREGATE, MUTATION, TEXT, FunctionName, is_supported

# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

EQUALS = "EQUALS"
NAME = "NAME"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
COMMA = "COMMA"
ARG = "ARG"
END = "END"


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int


def _is_name_start(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalpha())


def _is_name_char(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalnum())


def tokenize(formula: str) -> list[Token]:
    """Split formula text into tokens.

    Outside the parentheses only ``=``, a function name and ``(`` are
    recognised; inside them the text is cut into ARG chunks at ``,`` and
    ``)``. Raises :class:`UnrecognizedFormula` on any other character.
    """
    tokens: list[Token] = []
    i = 0
    length = len(formula)
    depth = 0

    while i < length:
        ch = formula[i]

        if depth == 0:
            if ch.isspace():
                i += 1
            elif ch == "=":
                tokens.append(Token(EQUALS, ch, i))
                i += 1
            elif ch == "(":
                tokens.append(Token(LPAREN, ch, i))
                depth += 1
                i += 1
            elif _is_name_start(ch):
                start = i
                while i < length and _is_name_char(formula[i]):
                    i += 1
                tokens.append(Token(NAME, formula[start:i], start))
            else:
                raise UnrecognizedFormula(
                    f"Unexpected character {ch!r} at position {i} in {formula!r}"
                )
            continue

        # Inside the argument list
        if ch == ",":
            tokens.append(Token(COMMA, ch, i))
            i += 1
        elif ch == ")":
            tokens.append(Token(RPAREN, ch, i))
            depth -= 1
            i += 1
        elif ch == "(":
            raise UnrecognizedFormula(f"Nested parentheses are not supported: {formula!r}")
        else:
            start = i
            while i < length and formula[i] not in "(),":
                i += 1
            tokens.append(Token(ARG, formula[start:i], start))

    tokens.append(Token(END, "", length))
    return tokens


# ---------------------------------------------------------------------------
# FormulaInvocation: typed result of a parse
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FormulaInvocation:
    """A parsed call: the function tag plus its trimmed argument strings."""

    function: FunctionName
    args: tuple[str, ...]

    @property
    def kind(self) -> str:
        return self.function.kind

    @property
    def range_label(self) -> str:
        """Range argument of an aggregate or mutation call."""
        if self.kind not in (AGGREGATE, MUTATION):
            raise AttributeError(f"{self.function.value} takes no range argument")
        return self.args[0]

    @property
    def text(self) -> str:
        """Literal argument of a text call."""
        if self.kind != TEXT:
            raise AttributeError(f"{self.function.value} takes no text argument")
        return self.args[0]

    @property
    def pattern(self) -> str:
        if self.function is not FunctionName.FIND_AND_REPLACE:
            raise AttributeError(f"{self.function.value} takes no pattern argument")
        return self.args[1]

    @property
    def replacement(self) -> str:
        if self.function is not FunctionName.FIND_AND_REPLACE:
            raise AttributeError(f"{self.function.value} takes no replacement argument")
        return self.args[2]


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class FormulaParser:
    """Recursive-descent parser over :func:`tokenize` output."""

    def __init__(self) -> None:
        self._tokens: list[Token] = []
        self._pos = 0
        self._source = ""

    def parse(self, formula: str) -> FormulaInvocation:
        self._source = formula
        self._tokens = tokenize(formula)
        self._pos = 0

        if self._peek().kind == EQUALS:
            self._advance()
        name_tok = self._expect(NAME)
        name = name_tok.text.upper()
        if not is_supported(name):
            raise UnrecognizedFormula(f"Unknown function {name_tok.text!r} in {formula!r}")
        self._expect(LPAREN)
        args = self._parse_args()
        self._expect(RPAREN)
        self._expect(END)

        function = FunctionName(name)
        if len(args) != function.arity:
            raise UnrecognizedFormula(
                f"{name} takes {function.arity} argument(s), got {len(args)}: {formula!r}"
            )
        return FormulaInvocation(function=function, args=tuple(args))

    def _parse_args(self) -> list[str]:
        args: list[str] = [self._parse_arg()]
        while self._peek().kind == COMMA:
            self._advance()
            args.append(self._parse_arg())
        if args == [""]:
            raise UnrecognizedFormula(f"Empty argument list in {self._source!r}")
        return args

    def _parse_arg(self) -> str:
        # An ARG token is absent when the argument is empty, e.g. "X(a,,b)".
        if self._peek().kind == ARG:
            return self._advance().text.strip()
        return ""

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        if tok.kind != END:
            self._pos += 1
        return tok

    def _expect(self, kind: str) -> Token:
        tok = self._peek()
        if tok.kind != kind:
            raise UnrecognizedFormula(
                f"Expected {kind} at position {tok.pos}, found {tok.kind} in {self._source!r}"
            )
        return self._advance()


def parse_formula(formula: str) -> FormulaInvocation:
    """Parse formula text into a :class:`FormulaInvocation`."""
    return FormulaParser().parse(formula)
