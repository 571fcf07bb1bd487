"""Commands handled by the shell itself instead of the process layer."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Mapping
from collections.abc import Sequence
from types import MappingProxyType
from typing import Final, TextIO, TypeAlias


Builtin: TypeAlias = Callable[[Sequence[str], TextIO], int]


class ShellExit(Exception):
    """Raised by the ``exit`` builtin to stop the shell.

    :param int code: Exit code for the shell process.
    """

    def __init__(self, code: int = 0) -> None:
        super().__init__(code)
        self.code = code


def exit_builtin(args: Sequence[str], err: TextIO) -> int:
    """``exit [n]``: leave the shell with status ``n`` (default 0).

    :param Sequence[str] args: Arguments after ``exit``.
    :param TextIO err: Stream for diagnostics.
    :return: 1 when given too many arguments; the shell keeps running.
    :rtype: int
    :raises ShellExit: In every other case.
    """
    if len(args) > 1:
        print("exit: too many arguments", file=err)
        return 1
    if not args:
        raise ShellExit(0)
    try:
        code = int(args[0])
    except ValueError:
        print(f"exit: {args[0]}: numeric argument required", file=err)
        raise ShellExit(2) from None
    raise ShellExit(code)


BUILTINS: Final[Mapping[str, Builtin]] = MappingProxyType({"exit": exit_builtin})
