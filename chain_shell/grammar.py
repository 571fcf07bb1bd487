"""Grammar for command lines: operators, commands, and the element stream.

A line is a flat sequence of :data:`Element` values. Operator literals are
recognized only as whole tokens and always win over being read as an argument,
so ``echo ;`` runs ``echo`` followed by a sequencing boundary. There is no way
to pass a literal ``;``, ``&&`` or ``||`` to a command.
"""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
import shlex
from typing import TypeAlias

from .errors import EmptyCommandError


class Operator(Enum):
    """Control operators, valued by their literal form."""

    SEQUENCE = ";"
    AND = "&&"
    OR = "||"

    @classmethod
    def from_token(cls, token: str) -> Operator | None:
        """Return the operator spelled exactly as ``token``, if any.

        :param str token: A single token.
        :return: The matching operator, or ``None``.
        :rtype: Operator|None
        """
        try:
            return cls(token)
        except ValueError:
            return None


@dataclass(frozen=True)
class Command:
    """An external command: a binary name and its arguments."""

    binary: str
    args: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.binary:
            msg = "A command requires a non-empty binary name"
            raise EmptyCommandError(msg)
        # Accept any sequence, store a tuple.
        object.__setattr__(self, "args", tuple(self.args))

    @classmethod
    def from_tokens(cls, tokens: Sequence[str]) -> Command:
        """Build a command whose binary is ``tokens[0]``.

        :param Sequence[str] tokens: At least one token.
        :return: The command.
        :rtype: Command
        :raises EmptyCommandError: If ``tokens`` is empty.
        """
        if not tokens:
            msg = "A command requires at least one token"
            raise EmptyCommandError(msg)
        return cls(tokens[0], tuple(tokens[1:]))

    def __str__(self) -> str:
        return shlex.join([self.binary, *self.args])


Element: TypeAlias = Operator | Command


def parse_elements(tokens: Iterable[str]) -> list[Element]:
    """Group ``tokens`` into operators and commands.

    A non-operator token starts a command. Following tokens become its
    arguments until the next operator literal or the end of input.

    :param Iterable[str] tokens: Tokens, typically from
        :func:`chain_shell.tokenizer.tokenize`.
    :return: Elements in input order. Empty input yields an empty list.
    :rtype: list[Element]
    """
    elements: list[Element] = []
    pending: list[str] = []
    for token in tokens:
        operator = Operator.from_token(token)
        if operator is None:
            pending.append(token)
            continue
        if pending:
            elements.append(Command.from_tokens(pending))
            pending = []
        elements.append(operator)
    if pending:
        elements.append(Command.from_tokens(pending))
    return elements
