#!/usr/bin/env python3
"""Convert print calls in every Java source under a directory.

Usage: convert_tree.py <source-dir> [config-spec ...]

Walks the directory for *.java files (skipping build output), converts them
in place and prints the same summary as `sysout-logger convert`.
"""

import sys
from pathlib import Path

from rich.console import Console

from sysoutlogger.run.convert import DEFAULT_CONFIG_FILE, RunConfig, load_config, print_summary, process_file

console = Console(highlight=False)

SKIPPED_DIRS = {"build", "target", "out", ".git", ".gradle"}


def find_java_sources(root: Path) -> list[Path]:
    return sorted(
        path for path in root.rglob("*.java")
        if not SKIPPED_DIRS.intersection(path.relative_to(root).parts)
    )


def main():
    if len(sys.argv) < 2:
        console.print("Usage: convert_tree.py <source-dir> [config-spec ...]")
        sys.exit(1)

    root = Path(sys.argv[1])
    config_spec = sys.argv[2:] or [str(DEFAULT_CONFIG_FILE)]
    rewrite_config, _ = load_config(config_spec)

    sources = find_java_sources(root)
    console.print(f"[bold]Converting {len(sources)} Java file(s) under {root}[/bold]\n")

    summary = []
    for path in sources:
        process_file(path, rewrite_config, RunConfig(in_place=True), summary)

    print_summary(summary)
    if any(result.error for result in summary):
        sys.exit(1)


if __name__ == "__main__":
    main()
