"""Command-line entry point.

Usage: smallsh [--debug] [--max-vars N] [script [arg ...]]

Without a script, commands are read from standard input.
"""

import argparse
import logging
import sys
from typing import Optional

from .interpreter import ExitError, StoreError
from .shell import Shell
from .types import ShellConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="smallsh", description="A small command interpreter")
    parser.add_argument("script", nargs="?", help="Script file to run instead of standard input")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Positional parameters ($1, $2, ...)")
    parser.add_argument("--debug", action="store_true", help="Log interpreter activity to stderr")
    parser.add_argument(
        "--max-vars",
        type=int,
        default=ShellConfig.max_variables,
        help="Capacity of the variable table",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    options = build_parser().parse_args(argv)

    if options.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(message)s",
        )

    config = ShellConfig(max_variables=options.max_vars)
    try:
        shell = Shell(
            config=config,
            args=options.args,
            script_name=options.script or "smallsh",
        )
    except StoreError as e:
        sys.stderr.write(f"smallsh: {e}\n")
        return 1
    shell.install_signal_policy()

    try:
        if options.script:
            return shell.run_file(options.script)
        return shell.run_interactive()
    except ExitError as e:
        if e.stdout:
            sys.stdout.write(e.stdout)
        if e.stderr:
            sys.stderr.write(e.stderr)
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
