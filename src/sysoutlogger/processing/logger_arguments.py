from sysoutlogger.parsing.atoms import ExpressionAtom, StringExpression

PLACEHOLDER = "{}"


class LoggerArgumentProcessor:
    """Turns a concatenation into a parameterized logger message.

    String literals are inlined into the message; every other atom becomes a
    `{}` placeholder and is passed as a trailing argument.
    """

    def __init__(self, expression: StringExpression):
        self._variable_atoms: list[ExpressionAtom] = []
        parts = []
        for atom in expression.atoms:
            if atom.is_string:
                parts.append(atom.render())
            else:
                parts.append(PLACEHOLDER)
                self._variable_atoms.append(atom)
        self._message = "".join(parts)

    def get_message(self) -> str:
        return self._message

    def get_replacement_string(self) -> str:
        """Quoted message followed by the placeholder arguments, comma separated."""
        logger_args = [f'"{self._message}"'] + [atom.render() for atom in self._variable_atoms]
        return ", ".join(logger_args)
