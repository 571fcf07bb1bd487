"""Line-level driver and interactive read-eval loop."""

from __future__ import annotations

from typing import Final, TextIO

from .builtin_commands import ShellExit
from .chains import parse_line
from .errors import MissingOperandError
from .evaluator import Evaluator


DEFAULT_PROMPT: Final[str] = "> "
USAGE_ERROR_CODE: Final[int] = 2
INTERRUPTED_CODE: Final[int] = 130


class Shell:
    """Run command lines chain by chain.

    :param Evaluator evaluator: Evaluates each chain.
    :param str prompt: Shown before each read when stdout is a terminal.
    """

    def __init__(self, evaluator: Evaluator, prompt: str = DEFAULT_PROMPT) -> None:
        self._evaluator = evaluator
        self._prompt = prompt

    def run_line(self, line: str) -> int:
        """Execute every chain in ``line``, in order.

        A chain that trips over a missing operand is abandoned with a
        diagnostic; later chains still run.

        :param str line: One line of input.
        :return: Return code of the last chain, or ``0`` for a blank line.
        :rtype: int
        :raises ShellExit: If a chain ran the ``exit`` builtin.
        """
        returncode = 0
        for chain in parse_line(line):
            try:
                returncode = self._evaluator.run_chain(chain)
            except MissingOperandError as e:
                print(f"chain-shell: syntax error: {e}", file=self._evaluator.err)
                returncode = USAGE_ERROR_CODE
        return returncode

    def repl(self, stdin: TextIO, stdout: TextIO) -> int:
        """Read and run lines until end of input or ``exit``.

        :param TextIO stdin: Source of command lines.
        :param TextIO stdout: Where the prompt goes. The prompt is only written
            when this is a terminal, so piped output stays clean.
        :return: The ``exit`` code, or the last line's return code at EOF.
        :rtype: int
        """
        returncode = 0
        while True:
            self._show_prompt(stdout)
            try:
                line = stdin.readline()
            except KeyboardInterrupt:
                print(file=stdout)
                continue
            if not line:
                return returncode
            try:
                returncode = self.run_line(line)
            except ShellExit as e:
                return e.code
            except KeyboardInterrupt:
                print(file=stdout)
                returncode = INTERRUPTED_CODE

    def _show_prompt(self, stdout: TextIO) -> None:
        if stdout.isatty():
            stdout.write(self._prompt)
            stdout.flush()
