"""Atoms of a `+`-concatenated argument expression.

An atom is a string literal, a numeric literal or an opaque variable /
sub-expression. All three share one immutable model tagged by `AtomKind`.
"""

import math
import re
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict

_STRING_START = re.compile(r"^\s*(\"|')")
_NUMERIC_START = re.compile(r"^\s*\d")
# A backslash also selects float parsing; kept as is, see test_backslash_selects_float_parsing
_FLOAT_MARKERS = re.compile(r"[\\.eE]")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_HEX_PREFIX = re.compile(r"\s*0[xX]([0-9a-fA-F]+)")
_EXPONENT_ZEROS = re.compile(r"e([+-])0*(\d)")


class AtomKind(str, Enum):
    STRING = "string"
    NUMERIC = "numeric"
    VARIABLE = "variable"


class ExpressionAtom(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: AtomKind
    value: int | float | str
    """Unquoted text for strings, the parsed number for numerics, trimmed source text for variables."""

    @classmethod
    def string(cls, value: str) -> "ExpressionAtom":
        return cls(kind=AtomKind.STRING, value=value)

    @classmethod
    def numeric(cls, value: int | float) -> "ExpressionAtom":
        return cls(kind=AtomKind.NUMERIC, value=value)

    @classmethod
    def variable(cls, variable: str) -> "ExpressionAtom":
        return cls(kind=AtomKind.VARIABLE, value=variable)

    @property
    def is_constant(self) -> bool:
        return self.kind in (AtomKind.STRING, AtomKind.NUMERIC)

    @property
    def is_string(self) -> bool:
        return self.kind == AtomKind.STRING

    @property
    def is_numeric(self) -> bool:
        return self.kind == AtomKind.NUMERIC

    def render(self) -> str:
        """Source text of the atom. String literals are returned without quotes."""
        if self.kind == AtomKind.NUMERIC:
            return _format_number(self.value)
        return str(self.value)

    def __str__(self) -> str:
        return self.render()


class StringExpression(BaseModel):
    """Ordered atoms of one argument, in left-to-right concatenation order."""

    model_config = ConfigDict(frozen=True)

    atoms: tuple[ExpressionAtom, ...] = ()


def create_atom(text: str) -> ExpressionAtom:
    """Classify one raw token of the argument text."""
    if _STRING_START.match(text):
        return ExpressionAtom.string(text[1:-1])
    if _NUMERIC_START.match(text):
        return ExpressionAtom.numeric(parse_number(text))
    return ExpressionAtom.variable(text.strip())


def parse_number(text: str) -> int | float:
    """Parse the longest numeric prefix of a digit-led token.

    `1L` gives 1, `2.5f` gives 2.5 and `0xFF` gives 255. Hex tokens are read
    first; otherwise float parsing is used when the token contains `.`, `e`,
    `E` or a backslash anywhere, integer parsing otherwise.
    """
    match = _HEX_PREFIX.match(text)
    if match:
        return int(match.group(1), 16)
    if _FLOAT_MARKERS.search(text):
        match = _FLOAT_PREFIX.match(text)
        return float(match.group(1)) if match else float("nan")
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _format_number(value: int | float | str) -> str:
    """Shortest round-trip text; plain decimals from 1e-6 up to 1e21, exponent form outside."""
    if not isinstance(value, float):
        return str(value)
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if math.isnan(value):
        return "NaN"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(repr(value)), "f")
    # 1e-07 -> 1e-7, 1e+21 stays
    return _EXPONENT_ZEROS.sub(r"e\1\2", repr(value))
