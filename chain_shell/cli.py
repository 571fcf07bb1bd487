"""Command-line entry point for chain-shell.

Without ``-c`` the shell reads lines from standard input until end of input or
``exit``. With ``-c`` it runs a single command string, much like ``bash -c``.
"""

import argparse
from argparse import ArgumentParser
from collections.abc import Sequence
from dataclasses import dataclass
import io
import os.path
import sys

from .builtin_commands import ShellExit
from .evaluator import Evaluator
from .process_adapter import SubprocessAdapter
from .shell import DEFAULT_PROMPT
from .shell import Shell


@dataclass(frozen=True)
class ShellConfig:
    """Settings resolved from the command line."""

    command: str | None = None
    prompt: str = DEFAULT_PROMPT
    trace: bool = False
    capture: bool = False


def script_entry_point() -> None:
    """Console-script entry point that delegates to :func:`main`."""
    sys.exit(main(tuple(sys.argv[1:]), sys.argv[0], __name__))


def main(cmd_args: Sequence[str], prog_path: str, entry_name: str) -> int:
    """Execute the command-line interface.

    :param cmd_args: Command arguments for the program.
    :type cmd_args: Sequence[str]
    :param str prog_path: The program path (i.e., sys.argv[0] or equivalent).
    :param str entry_name: The ``__name__`` of the calling module.
    :return: Exit code of the last command, or the ``exit`` builtin's code.
    :rtype: int
    """
    parser = _get_parser(os.path.basename(prog_path))
    config = _to_config(parser.parse_args(cmd_args))
    shell = build_shell(config)

    if config.command is None:
        if isinstance(sys.stdin, io.TextIOWrapper):
            # Undecodable input bytes round-trip to the child as-is.
            sys.stdin.reconfigure(errors="surrogateescape")
        return shell.repl(sys.stdin, sys.stdout)
    try:
        return shell.run_line(config.command)
    except ShellExit as e:
        return e.code


def build_shell(config: ShellConfig) -> Shell:
    """Wire a :class:`Shell` to the real process layer.

    :param ShellConfig config: Resolved settings.
    :return: A ready-to-use shell.
    :rtype: Shell
    """
    adapter = SubprocessAdapter(capture_output=config.capture)
    evaluator = Evaluator(adapter, trace=config.trace)
    return Shell(evaluator, prompt=config.prompt)


def _to_config(parsed_args: argparse.Namespace) -> ShellConfig:
    return ShellConfig(
        command=parsed_args.command,
        prompt=parsed_args.prompt,
        trace=parsed_args.trace,
        capture=parsed_args.capture,
    )


def _get_parser(prog_name: str) -> ArgumentParser:
    parser = ArgumentParser(
        prog=prog_name,
        description=(
            "A minimal shell that runs simple commands joined by ';', '&&' and "
            "'||'. There is no quoting, so an argument can never be one of "
            "those operators."
        ),
        formatter_class=lambda prog: argparse.HelpFormatter(prog, width=80),
    )

    parser.add_argument(
        "-c",
        dest="command",
        metavar="COMMAND",
        default=None,
        help="Run COMMAND and exit with the last command's exit code.",
    )
    parser.add_argument(
        "--prompt",
        default=DEFAULT_PROMPT,
        help=(
            "Prompt shown when standard output is a terminal "
            "(default: %(default)r)."
        ),
    )
    parser.add_argument(
        "-x",
        "--trace",
        action="store_true",
        help="Print each command to standard error before running it.",
    )
    parser.add_argument(
        "--capture",
        action="store_true",
        help=(
            "Capture each command's output and replay it once the command has "
            "exited, instead of letting it write directly."
        ),
    )

    return parser


if __name__ == "__main__":
    script_entry_point()
