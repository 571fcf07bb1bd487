"""Split an element stream into independently evaluated chains."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .grammar import Element
from .grammar import Operator
from .grammar import parse_elements
from .tokenizer import tokenize


@dataclass(frozen=True)
class Chain:
    """The elements between two ``;`` boundaries.

    Never empty and never holds :attr:`Operator.SEQUENCE`.
    """

    elements: tuple[Element, ...]

    def __post_init__(self) -> None:
        if not self.elements:
            msg = "A chain must hold at least one element"
            raise ValueError(msg)
        if Operator.SEQUENCE in self.elements:
            msg = "A chain cannot hold a sequencing operator"
            raise ValueError(msg)


def build_chains(elements: Iterable[Element]) -> list[Chain]:
    """Partition ``elements`` at every ``;``.

    Separators are dropped, and so are empty runs (``; ;``, or a leading or
    trailing ``;``).

    :param Iterable[Element] elements: Output of
        :func:`chain_shell.grammar.parse_elements`.
    :return: Chains in left-to-right order.
    :rtype: list[Chain]
    """
    chains: list[Chain] = []
    current: list[Element] = []
    for element in elements:
        if element is Operator.SEQUENCE:
            if current:
                chains.append(Chain(tuple(current)))
                current = []
        else:
            current.append(element)
    if current:
        chains.append(Chain(tuple(current)))
    return chains


def parse_line(line: str) -> list[Chain]:
    """Tokenize, parse and chain a single input line.

    :param str line: Raw input line.
    :return: Chains in input order, possibly none.
    :rtype: list[Chain]
    """
    return build_chains(parse_elements(tokenize(line)))
