"""Scanner for the argument list of a `System.out.println(...)`-like call.

The scanner understands exactly one level of structure: the top-level
argument is split into atoms at `+` signs that are neither inside a quoted
string nor inside nested parentheses. Anything nested deeper (e.g. the
arguments of `methodCall("a", 1)`) is kept as opaque text. Inside nested
parentheses quotes are not tracked, so a `)` within a string literal there
still closes a bracket.

Known limitation: a closing quote is detected by looking back a single
character, so `"a\\\\"` (an escaped backslash right before the quote) keeps
the string open.
"""

import logging

from sysoutlogger.parsing.atoms import ExpressionAtom, StringExpression, create_atom

logger = logging.getLogger("sysoutlogger.parsing")

QUOTES = ('"', "'")


class MethodCallArgumentParser:
    """Parses the text that follows a method name, starting at its `(`.

    Check `is_invalid_syntax` before using `get_arguments()`: atoms are
    produced even when the parentheses never balance.
    """

    def __init__(self, method_arguments: str):
        self._atoms: list[ExpressionAtom] = []
        self._is_invalid_syntax = False
        self._length = 0
        self._parse(method_arguments)

    @property
    def is_invalid_syntax(self) -> bool:
        return self._is_invalid_syntax

    @property
    def length(self) -> int:
        """Number of characters up to and including the closing `)`."""
        return self._length

    def _parse(self, text: str) -> None:
        was_inside = False
        bracket_level = 0
        quote: str | None = None  # None while outside of a string literal
        argument = ""
        prev_ch = ""

        i = 0
        while i < len(text):
            ch = text[i]

            if bracket_level == 1 and quote is not None:
                # inside a string literal, parentheses included
                if ch == quote and prev_ch != "\\":
                    quote = None
                argument += ch
            elif ch == "(":
                bracket_level += 1
                was_inside = True
                if bracket_level > 1:
                    argument += ch
            elif ch == ")":
                if bracket_level > 1:
                    argument += ch
                bracket_level -= 1
            elif bracket_level == 1:
                if ch in QUOTES:
                    quote = ch
                    argument += ch
                elif ch.isspace():
                    pass
                elif ch == "+":
                    self._atoms.append(create_atom(argument))
                    argument = ""
                else:
                    argument += ch
            else:
                argument += ch

            if bracket_level == 0 and was_inside:
                break

            prev_ch = ch
            i += 1

        if bracket_level > 0 or not was_inside:
            self._is_invalid_syntax = True
            logger.debug(f"Unbalanced or missing parentheses in {text[:80]!r}")

        self._atoms.append(create_atom(argument))
        self._length = i + 1

    def get_arguments(self) -> list[StringExpression]:
        """The parsed arguments; always a single `+`-concatenated expression."""
        return [StringExpression(atoms=tuple(self._atoms))]
