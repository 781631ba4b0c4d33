from sysoutlogger.parsing.atoms import AtomKind, ExpressionAtom, StringExpression, create_atom, parse_number
from sysoutlogger.parsing.method_call import MethodCallArgumentParser

__all__ = [
    "AtomKind",
    "ExpressionAtom",
    "MethodCallArgumentParser",
    "StringExpression",
    "create_atom",
    "parse_number",
]
