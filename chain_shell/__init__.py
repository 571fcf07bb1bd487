"""A minimal shell for sequencing, conjunction, and disjunction of commands."""

from .builtin_commands import ShellExit
from .chains import build_chains
from .chains import Chain
from .chains import parse_line
from .errors import EmptyCommandError
from .errors import MissingOperandError
from .errors import ShellError
from .errors import SpawnError
from .evaluator import Evaluator
from .grammar import Command
from .grammar import Element
from .grammar import Operator
from .grammar import parse_elements
from .process_adapter import ExitStatus
from .process_adapter import ProcessAdapter
from .process_adapter import SubprocessAdapter
from .shell import Shell
from .tokenizer import tokenize


__all__ = [
    # Parsing
    "tokenize",
    "Operator",
    "Command",
    "Element",
    "parse_elements",
    "Chain",
    "build_chains",
    "parse_line",
    # Execution
    "Evaluator",
    "ExitStatus",
    "ProcessAdapter",
    "SubprocessAdapter",
    "Shell",
    "ShellExit",
    # Errors
    "ShellError",
    "SpawnError",
    "MissingOperandError",
    "EmptyCommandError",
]
