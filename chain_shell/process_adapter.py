"""Process layer used by the evaluator to start and await external commands.

The evaluator only depends on the :class:`ProcessAdapter` protocol. The
production implementation, :class:`SubprocessAdapter`, is a thin wrapper around
:class:`subprocess.Popen`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import os
import subprocess
from typing import Any, Protocol

from .errors import SpawnError


@dataclass(frozen=True)
class ExitStatus:
    """Outcome of a finished process.

    ``stdout`` and ``stderr`` are ``None`` unless the adapter captured them.
    """

    returncode: int
    stdout: bytes | None = None
    stderr: bytes | None = None

    @property
    def success(self) -> bool:
        return self.returncode == 0


class ProcessAdapter(Protocol):
    """What the evaluator needs from the process layer."""

    def spawn(self, binary: str, args: Sequence[str]) -> Any:
        """Start ``binary`` with ``args`` and return an opaque handle.

        :raises chain_shell.errors.SpawnError: If the process cannot be started.
        """
        ...

    def wait(self, handle: Any) -> ExitStatus:
        """Block until the process behind ``handle`` exits."""
        ...


class SubprocessAdapter:
    """Run commands as child processes of the current interpreter.

    :param bool capture_output: If ``True``, pipe the child's stdout and stderr
        and return them in the :class:`ExitStatus`. Otherwise the child
        inherits the shell's streams.
    """

    def __init__(self, capture_output: bool = False) -> None:
        self._capture_output = capture_output

    def spawn(self, binary: str, args: Sequence[str]) -> subprocess.Popen[bytes]:
        pipe = subprocess.PIPE if self._capture_output else None
        try:
            return subprocess.Popen([binary, *args], stdout=pipe, stderr=pipe)
        except OSError as e:
            reason = e.strerror or os.strerror(e.errno or 0) or str(e)
            raise SpawnError(binary, reason) from e
        except ValueError as e:
            # e.g. an embedded null byte in the binary or an argument
            raise SpawnError(binary, str(e)) from e

    def wait(self, handle: subprocess.Popen[bytes]) -> ExitStatus:
        # No timeout: a process that never exits blocks the shell.
        stdout, stderr = handle.communicate()
        return ExitStatus(_shell_returncode(handle.returncode), stdout, stderr)


def _shell_returncode(returncode: int) -> int:
    # A child killed by signal N reports -N; shells report 128 + N.
    if returncode < 0:
        return 128 - returncode
    return returncode
