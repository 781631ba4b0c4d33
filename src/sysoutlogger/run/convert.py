#!/usr/bin/env python3

"""Convert `System.out` / `System.err` print calls in Java sources to logger calls."""

import concurrent.futures
import threading
from pathlib import Path

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sysoutlogger.actions.system_out import RewriteConfig, apply_edits, convert_source, provide_code_actions
from sysoutlogger.config import builtin_config_dir, get_config_from_spec
from sysoutlogger.utils.log import add_file_handler, logger
from sysoutlogger.utils.serialize import UNSET, recursive_merge

_console = Console(highlight=False)

_CONVERT_HELP_TEXT = """Convert every [bold]System.out.print(ln)[/bold] / [bold]System.err.print(ln)[/bold] call to a logger call.

Each call gets its preferred conversion, e.g.
[bold green]System.out.println("Var1=" + var1)[/bold green] becomes [bold green]logger.debug("Var1={}", var1)[/bold green].
Output goes to [bold]<file>.converted[/bold] unless [bold]--in-place[/bold] is given.
Files without any convertible call are left alone.
"""

_ACTIONS_HELP_TEXT = """List the ranked conversions offered for the print call on a given line."""

_CONFIG_SPEC_HELP_TEXT = """Path to config files, builtin config names, or key-value pairs.

[bold red]IMPORTANT:[/bold red] [red]If you set this option, the default config file will not be used.[/red]
So you need to explicitly set it e.g., with [bold green]-c default.yaml <other options>[/bold green]

Multiple configs will be recursively merged.

Examples:

[bold green]-c default.yaml -c rewrite.logger_reference=LOG[/bold green]

[bold green]-c default.yaml -c rewrite.out.preferred=info[/bold green]
"""

DEFAULT_CONFIG_FILE = builtin_config_dir / "default.yaml"

app = typer.Typer(rich_markup_mode="rich", add_completion=False)
_SUMMARY_LOCK = threading.Lock()


class RunConfig(BaseModel):
    suffix: str = ".converted"
    """Appended to the file name of the converted copy."""
    in_place: bool = False
    """Overwrite the source file instead of writing a converted copy."""
    workers: int = 1
    """Number of files converted in parallel."""


class FileResult(BaseModel):
    path: Path
    output_path: Path | None = None
    converted: int = 0
    skipped: int = 0
    error: str = ""


def load_config(config_spec: list[str], overrides: dict | None = None) -> tuple[RewriteConfig, RunConfig]:
    logger.debug(f"Building config from specs: {config_spec}")
    configs = [get_config_from_spec(spec) for spec in config_spec]
    configs.append(overrides)
    config = recursive_merge(*configs)
    return RewriteConfig.model_validate(config.get("rewrite", {})), RunConfig.model_validate(config.get("run", {}))


def _load_config_or_exit(config_spec: list[str], overrides: dict | None = None) -> tuple[RewriteConfig, RunConfig]:
    try:
        return load_config(config_spec, overrides)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid configuration: {e}")
        raise typer.Exit(code=1)


def read_source(path: Path) -> str:
    # newline="" keeps CRLF line endings intact
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def write_source(path: Path, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def get_output_path(path: Path, run_config: RunConfig) -> Path:
    if run_config.in_place:
        return path
    return path.with_name(path.name + run_config.suffix)


def get_offset(text: str, line: int, column: int) -> int:
    """Character offset of a 1-based line and column; the column is clamped to the line."""
    lines = text.split("\n")
    if not 1 <= line <= len(lines):
        raise typer.BadParameter(f"Line {line} is outside of 1..{len(lines)}", param_hint="--line")
    return sum(len(previous) + 1 for previous in lines[: line - 1]) + max(0, min(column - 1, len(lines[line - 1])))


def process_file(
    path: Path,
    rewrite_config: RewriteConfig,
    run_config: RunConfig,
    summary: list[FileResult],
    *,
    out_severity: str | None = None,
) -> None:
    """Convert a single file and record the outcome in `summary`."""
    result = FileResult(path=path)
    try:
        content = read_source(path)
        converted, conversion = convert_source(content, rewrite_config, out_severity=out_severity)
        result.converted = conversion.converted
        result.skipped = conversion.skipped
        if conversion.converted:
            output_path = get_output_path(path, run_config)
            write_source(output_path, converted)
            result.output_path = output_path
            logger.info(f"{path}: converted {conversion.converted} call(s), output '{output_path}'")
        else:
            logger.info(f"{path}: nothing to convert")
    except (OSError, ValueError) as e:
        logger.error(f"Error processing {path}: {e}", exc_info=True)
        result.error = f"{type(e).__name__}: {e}"
    finally:
        with _SUMMARY_LOCK:
            summary.append(result)


def print_summary(summary: list[FileResult]) -> None:
    table = Table(title="Conversion summary")
    table.add_column("File")
    table.add_column("Converted", justify="right")
    table.add_column("Skipped", justify="right")
    table.add_column("Result")
    for result in sorted(summary, key=lambda r: str(r.path)):
        if result.error:
            outcome = f"[red]{escape(result.error)}[/red]"
        elif result.output_path is not None:
            outcome = f"[green]{escape(str(result.output_path))}[/green]"
        else:
            outcome = "[dim]unchanged[/dim]"
        table.add_row(escape(str(result.path)), str(result.converted), str(result.skipped), outcome)
    _console.print(table)
    total = sum(r.converted for r in summary)
    failed = sum(1 for r in summary if r.error)
    _console.print(f"[bold]{total}[/bold] call(s) converted in {len(summary)} file(s), [bold]{failed}[/bold] failed")


# fmt: off
@app.command(help=_CONVERT_HELP_TEXT)
def convert(
    files: list[Path] = typer.Argument(..., help="Java source files to convert", show_default=False),
    config_spec: list[str] = typer.Option([str(DEFAULT_CONFIG_FILE)], "-c", "--config", help=_CONFIG_SPEC_HELP_TEXT, rich_help_panel="Basic"),
    in_place: bool = typer.Option(False, "-i", "--in-place", help="Overwrite the files instead of writing converted copies", rich_help_panel="Basic"),
    suffix: str | None = typer.Option(None, "--suffix", help="Suffix of the converted copies (default: .converted)", rich_help_panel="Basic"),
    severity: str | None = typer.Option(None, "-s", "--severity", help="Logger method for System.out calls instead of the preferred one", rich_help_panel="Basic"),
    workers: int | None = typer.Option(None, "-w", "--workers", help="Number of worker threads for parallel processing", rich_help_panel="Advanced"),
    log_file: Path | None = typer.Option(None, "--log-file", help="Also write the log to this file", rich_help_panel="Advanced"),
) -> None:
    # fmt: on
    if log_file is not None:
        add_file_handler(log_file)
    rewrite_config, run_config = _load_config_or_exit(config_spec, {
        "run": {"in_place": in_place or UNSET, "suffix": suffix or UNSET, "workers": workers or UNSET},
    })
    logger.info(f"Converting {len(files)} file(s) with {run_config.workers} worker(s)")

    summary: list[FileResult] = []

    def process_futures(futures: dict[concurrent.futures.Future, Path]):
        for future in concurrent.futures.as_completed(futures):
            try:
                future.result()
            except concurrent.futures.CancelledError:
                pass

    with concurrent.futures.ThreadPoolExecutor(max_workers=max(1, run_config.workers)) as executor:
        futures = {
            executor.submit(process_file, path, rewrite_config, run_config, summary, out_severity=severity): path
            for path in files
        }
        try:
            process_futures(futures)
        except KeyboardInterrupt:
            logger.info("Cancelling all pending files. Press ^C again to exit immediately.")
            for future in futures:
                if not future.running() and not future.done():
                    future.cancel()
            process_futures(futures)

    print_summary(summary)
    if any(result.error for result in summary):
        raise typer.Exit(code=1)


# fmt: off
@app.command(help=_ACTIONS_HELP_TEXT)
def actions(
    file: Path = typer.Argument(..., help="Java source file", show_default=False),
    line: int = typer.Option(..., "-l", "--line", help="1-based line of the print call"),
    column: int = typer.Option(1, "--column", help="1-based column of the cursor on that line"),
    config_spec: list[str] = typer.Option([str(DEFAULT_CONFIG_FILE)], "-c", "--config", help=_CONFIG_SPEC_HELP_TEXT),
) -> None:
    # fmt: on
    rewrite_config, _ = _load_config_or_exit(config_spec)
    try:
        text = read_source(file)
    except (OSError, ValueError) as e:
        logger.error(f"Could not read {file}: {e}")
        raise typer.Exit(code=1)
    code_actions = provide_code_actions(text, get_offset(text, line, column), rewrite_config)
    if not code_actions:
        _console.print(f"[yellow]No code actions at {escape(str(file))}:{line}:{column}[/yellow]")
        raise typer.Exit(code=1)

    table = Table(title=escape(f"{file}:{line}"))
    table.add_column("#", justify="right")
    table.add_column("Action", no_wrap=True)
    table.add_column("Preferred")
    table.add_column("Result", overflow="fold")
    for i, action in enumerate(code_actions, 1):
        result_line = apply_edits(text, action.edits).split("\n")[line - 1]
        table.add_row(str(i), escape(action.title), "*" if action.is_preferred else "", escape(result_line.strip()))
    _console.print(table)


if __name__ == "__main__":
    app()
