"""Code actions converting `System.out` / `System.err` print calls to logger calls.

Works on plain source text with character offsets. For a call site the
actions are ranked alternatives (`info`, `debug`, `trace` for `System.out`,
`error` for `System.err`); exactly one of them is preferred and that is the
one applied by `convert_source`.
"""

import logging
import re
from enum import Enum

from jinja2 import StrictUndefined, Template
from pydantic import BaseModel, model_validator

from sysoutlogger.parsing.atoms import StringExpression
from sysoutlogger.parsing.method_call import MethodCallArgumentParser
from sysoutlogger.processing.logger_arguments import LoggerArgumentProcessor

logger = logging.getLogger("sysoutlogger.actions")

SYSTEM_OUT_PATTERN = re.compile(r"\bSystem\.(out|err)\.(println|print)\b")


class SystemStream(str, Enum):
    OUT = "out"
    ERR = "err"


class StreamConfig(BaseModel):
    severities: list[str]
    """Logger methods offered for this stream, in the order they are offered."""
    preferred: str
    """The severity applied by batch conversion. Must be one of `severities`."""

    @model_validator(mode="after")
    def _check_preferred(self) -> "StreamConfig":
        if not self.severities:
            raise ValueError("At least one severity is required")
        if self.preferred not in self.severities:
            raise ValueError(f"Preferred severity {self.preferred!r} is not one of {self.severities}")
        return self


class RewriteConfig(BaseModel):
    logger_reference: str = "logger"
    """Name of the logger field used in the rewritten call."""
    lombok_logger_reference: str = "log"
    """Name used instead when the source uses Lombok's `@Slf4j`."""
    lombok_pattern: str = r"@Slf4j\b"
    """Regex that marks the source as using Lombok logging."""
    title_template: str = "Convert to {{ logger }}.{{ severity }}"
    """Jinja2 template for action titles. Variables: logger, severity, stream, method."""
    out: StreamConfig = StreamConfig(severities=["info", "debug", "trace"], preferred="debug")
    err: StreamConfig = StreamConfig(severities=["error"], preferred="error")

    def stream_config(self, stream: SystemStream) -> StreamConfig:
        return self.out if stream == SystemStream.OUT else self.err


class SystemOutMatch(BaseModel):
    start: int
    """Offset of `System`."""
    method_match: str
    """Matched method text, e.g. `System.err.print`."""
    stream: SystemStream
    method: str
    """`println` or `print`."""

    @property
    def method_end(self) -> int:
        return self.start + len(self.method_match)


class SystemOutArgumentMatch(SystemOutMatch):
    open_paren: int
    """Offset of the `(` opening the argument list."""
    end: int
    """Offset one past the closing `)`."""
    argument: StringExpression


class TextEdit(BaseModel):
    start: int
    end: int
    new_text: str


class CodeAction(BaseModel):
    title: str
    severity: str
    logger_reference: str
    is_preferred: bool = False
    edits: list[TextEdit]


class ConversionResult(BaseModel):
    converted: int = 0
    skipped: int = 0


def find_system_out_call(text: str, offset: int) -> SystemOutMatch | None:
    """Find the first print call on the line containing `offset`."""
    line_start = text.rfind("\n", 0, offset) + 1
    line_end = text.find("\n", offset)
    if line_end == -1:
        line_end = len(text)
    match = SYSTEM_OUT_PATTERN.search(text, line_start, line_end)
    return match and _to_system_out_match(match)


def _to_system_out_match(match: re.Match) -> SystemOutMatch:
    return SystemOutMatch(
        start=match.start(),
        method_match=match.group(0),
        stream=SystemStream(match.group(1)),
        method=match.group(2),
    )


def get_system_out_arguments(text: str, match: SystemOutMatch) -> SystemOutArgumentMatch | None:
    """Parse the arguments following the matched method; `None` if they are not a complete call."""
    remaining_text = text[match.method_end :]
    parser = MethodCallArgumentParser(remaining_text)
    if parser.is_invalid_syntax:
        logger.debug(f"Skipping {match.method_match} at offset {match.start}: invalid syntax")
        return None
    open_paren = remaining_text.index("(")
    if remaining_text[:open_paren].strip():
        # e.g. `System.out.println; foo(bar)`, the parentheses belong to something else
        logger.debug(f"Skipping {match.method_match} at offset {match.start}: not a call")
        return None
    return SystemOutArgumentMatch(
        **match.model_dump(),
        open_paren=match.method_end + open_paren,
        end=match.method_end + parser.length,
        argument=parser.get_arguments()[0],
    )


def uses_lombok(text: str, config: RewriteConfig) -> bool:
    return re.search(config.lombok_pattern, text) is not None


def refactor_arguments(argument: StringExpression) -> str:
    return LoggerArgumentProcessor(argument).get_replacement_string()


def create_code_action(
    match: SystemOutArgumentMatch, severity: str, *, lombok_active: bool, config: RewriteConfig
) -> CodeAction:
    logger_reference = config.lombok_logger_reference if lombok_active else config.logger_reference
    title = Template(config.title_template, undefined=StrictUndefined).render(
        logger=logger_reference,
        severity=severity,
        stream=match.stream.value,
        method=match.method,
    )
    edits = [
        TextEdit(start=match.start, end=match.method_end, new_text=f"{logger_reference}.{severity}"),
        TextEdit(start=match.open_paren + 1, end=match.end - 1, new_text=refactor_arguments(match.argument)),
    ]
    return CodeAction(
        title=title,
        severity=severity,
        logger_reference=logger_reference,
        is_preferred=severity == config.stream_config(match.stream).preferred,
        edits=edits,
    )


def provide_code_actions(text: str, offset: int, config: RewriteConfig | None = None) -> list[CodeAction] | None:
    """Ranked conversions for the print call on the line at `offset`, or `None` if there is none."""
    config = config or RewriteConfig()
    lombok_active = uses_lombok(text[:offset], config)
    match = find_system_out_call(text, offset)
    if match is None:
        return None
    argument_match = get_system_out_arguments(text, match)
    if argument_match is None:
        return None
    return [
        create_code_action(argument_match, severity, lombok_active=lombok_active, config=config)
        for severity in config.stream_config(argument_match.stream).severities
    ]


def apply_edits(text: str, edits: list[TextEdit]) -> str:
    """Apply non-overlapping edits; offsets refer to the original text."""
    ordered = sorted(edits, key=lambda e: (e.start, e.end))
    for previous, current in zip(ordered, ordered[1:]):
        if current.start < previous.end:
            raise ValueError(f"Overlapping edits at offsets {previous.start}-{previous.end} and {current.start}")
    for edit in reversed(ordered):
        text = text[: edit.start] + edit.new_text + text[edit.end :]
    return text


def convert_source(
    text: str, config: RewriteConfig | None = None, *, out_severity: str | None = None
) -> tuple[str, ConversionResult]:
    """Apply the preferred action to every print call in `text`.

    `out_severity` forces the logger method used for `System.out` calls.
    Calls nested in the arguments of an already converted call are skipped.
    """
    config = config or RewriteConfig()
    result = ConversionResult()
    edits: list[TextEdit] = []
    last_end = 0
    for re_match in SYSTEM_OUT_PATTERN.finditer(text):
        if re_match.start() < last_end:
            result.skipped += 1
            continue
        argument_match = get_system_out_arguments(text, _to_system_out_match(re_match))
        if argument_match is None:
            result.skipped += 1
            continue
        severity = config.stream_config(argument_match.stream).preferred
        if out_severity and argument_match.stream == SystemStream.OUT:
            severity = out_severity
        action = create_code_action(
            argument_match,
            severity,
            lombok_active=uses_lombok(text[: argument_match.start], config),
            config=config,
        )
        edits.extend(action.edits)
        last_end = argument_match.end
        result.converted += 1
    logger.debug(f"Converted {result.converted} call(s), skipped {result.skipped}")
    return apply_edits(text, edits), result
