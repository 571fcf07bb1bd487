"""Whitespace tokenizer for command lines.

There is no quoting or escaping. A token is a maximal run of characters that
are neither whitespace nor ``;``. A ``;`` is always a token on its own, so
``pwd;pwd`` reads as ``pwd ; pwd``. ``&&`` and ``||`` still need surrounding
whitespace to be recognized.
"""

from collections.abc import Iterator
import re
from typing import Final


_TOKEN_RE: Final[re.Pattern[str]] = re.compile(r";|[^\s;]+")


def tokenize(line: str) -> Iterator[str]:
    """Lazily split ``line`` into tokens.

    :param str line: A single line of input. A trailing newline is just
        whitespace.
    :return: A single-use iterator of non-empty tokens. Empty or all-whitespace
        input yields nothing.
    :rtype: Iterator[str]
    """
    for match in _TOKEN_RE.finditer(line):
        yield match.group()
