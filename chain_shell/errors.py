"""Exception hierarchy for chain-shell.

Every error raised by the shell core is recoverable: spawn failures at the
element level and missing operands at the chain level.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from .grammar import Operator


class ShellError(Exception):
    """Base class for all chain-shell errors."""


class SpawnError(ShellError):
    """The process layer could not start a binary.

    :param str binary: The binary that failed to start.
    :param str reason: Human-readable cause (e.g. ``No such file or directory``).
    """

    def __init__(self, binary: str, reason: str) -> None:
        super().__init__(f"{binary}: {reason}")
        self.binary = binary
        self.reason = reason


class MissingOperandError(ShellError):
    """A ``&&`` or ``||`` was reached with no command result to act on."""

    def __init__(self, operator: Operator) -> None:
        super().__init__(f"no command result before {operator.value!r}")
        self.operator = operator


class EmptyCommandError(ShellError, ValueError):
    """A command was constructed with an empty binary name."""
