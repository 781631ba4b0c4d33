"""Rewrite `System.out` / `System.err` print calls into parameterized logger calls.

The pieces, in the order the text flows through them:
- `sysoutlogger.parsing`: splits a call's argument into literal / variable atoms
- `sysoutlogger.processing`: builds the `{}` message and the logger arguments
- `sysoutlogger.actions`: finds call sites in source text and produces edits
- `sysoutlogger.run`: command line interface
"""

__version__ = "0.1.0"

from pathlib import Path

from sysoutlogger.utils.log import logger

package_dir = Path(__file__).resolve().parent

__all__ = ["__version__", "logger", "package_dir"]
