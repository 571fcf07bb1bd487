"""Short-circuit evaluation of a single chain.

Within a chain, commands run strictly one after another. ``&&`` and ``||``
look at the status of the command that ran just before them. Once a
conjunction fails, or a disjunction succeeds, the rest of the chain is skipped.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import sys
from typing import assert_never, Final, TextIO

from .builtin_commands import Builtin
from .builtin_commands import BUILTINS
from .chains import Chain
from .errors import MissingOperandError
from .errors import SpawnError
from .grammar import Command
from .grammar import Operator
from .process_adapter import ProcessAdapter


SPAWN_FAILURE_CODE: Final[int] = 127


@dataclass
class ExecutionState:
    """Mutable state for one chain evaluation.

    ``last_status`` is ``None`` before any command has run, after a spawn
    failure, and right after an operator has consumed it.
    """

    last_status: bool | None = None
    returncode: int = 0


class Evaluator:
    """Execute chains against a process adapter.

    :param ProcessAdapter adapter: Starts and awaits external commands.
    :param Mapping[str, Builtin] builtins: Commands run in-process instead of
        being spawned.
    :param TextIO|None out: Where captured child stdout is replayed (default
        ``sys.stdout``).
    :param TextIO|None err: Diagnostics stream (default ``sys.stderr``).
    :param bool trace: Echo each command to ``err`` before running it.
    """

    def __init__(
        self,
        adapter: ProcessAdapter,
        *,
        builtins: Mapping[str, Builtin] = BUILTINS,
        out: TextIO | None = None,
        err: TextIO | None = None,
        trace: bool = False,
    ) -> None:
        self._adapter = adapter
        self._builtins = builtins
        self._out = out
        self._err = err
        self._trace = trace

    @property
    def out(self) -> TextIO:
        # Resolved lazily so that a swapped sys.stdout is honoured.
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def run_chain(self, chain: Chain) -> int:
        """Evaluate ``chain`` from left to right.

        :param Chain chain: The chain to run.
        :return: Return code of the last command that ran, ``127`` if it could
            not be spawned, or ``0`` if no command ran.
        :rtype: int
        :raises MissingOperandError: If ``&&`` or ``||`` has no preceding
            command result. Nothing after the operator runs.
        """
        state = ExecutionState()
        for element in chain.elements:
            match element:
                case Command():
                    self._run_command(element, state)
                case Operator.AND | Operator.OR:
                    if state.last_status is None:
                        raise MissingOperandError(element)
                    # `&&` stops after a failure, `||` after a success.
                    if state.last_status == (element is Operator.OR):
                        break
                    state.last_status = None
                case Operator.SEQUENCE:
                    msg = "Sequencing operators never appear inside a chain"
                    raise AssertionError(msg)
                case _:
                    assert_never(element)
        return state.returncode

    def _run_command(self, command: Command, state: ExecutionState) -> None:
        if self._trace:
            print(f"Running: {command}", file=self.err)

        builtin = self._builtins.get(command.binary)
        if builtin is not None:
            state.returncode = builtin(command.args, self.err)
            state.last_status = state.returncode == 0
            return

        try:
            handle = self._adapter.spawn(command.binary, command.args)
        except SpawnError as e:
            print(f"chain-shell: {e}", file=self.err)
            state.last_status = None
            state.returncode = SPAWN_FAILURE_CODE
            return

        status = self._adapter.wait(handle)
        state.last_status = status.success
        state.returncode = status.returncode
        if status.stdout is not None:
            _write_bytes(self.out, status.stdout)
        if status.stderr is not None:
            _write_bytes(self.err, status.stderr)


def _write_bytes(stream: TextIO, data: bytes) -> None:
    if not data:
        return
    stream.write(data.decode("utf-8", errors="replace"))
    stream.flush()
