from collections.abc import Callable
from collections.abc import Sequence
import io
from typing import TextIO, TypeAlias

from assertpy import assert_that
from assertpy import soft_assertions
import pytest

from chain_shell import Evaluator
from chain_shell import Shell
from chain_shell import ShellExit
from chain_shell.builtin_commands import BUILTINS
from chain_shell.shell import INTERRUPTED_CODE
from chain_shell.shell import USAGE_ERROR_CODE

from spy_adapter import SpyAdapter


ShellFactory: TypeAlias = Callable[..., tuple[Shell, SpyAdapter]]


class _TTY(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_blank_line_runs_nothing(make_shell: ShellFactory) -> None:
    shell, spy = make_shell()
    assert_that(shell.run_line("   \n")).is_equal_to(0)
    assert_that(spy.calls).is_empty()


def test_sequenced_commands(make_shell: ShellFactory) -> None:
    shell, spy = make_shell()
    shell.run_line("ls; echo hello")
    assert_that(spy.calls).is_equal_to([("ls", ()), ("echo", ("hello",))])


def test_chains_are_independent(make_shell: ShellFactory) -> None:
    shell, spy = make_shell(returncodes={"false": 1})
    assert_that(shell.run_line("false && echo skip ; echo always")).is_equal_to(0)
    assert_that(spy.calls).is_equal_to([("false", ()), ("echo", ("always",))])


def test_returncode_of_last_chain(make_shell: ShellFactory) -> None:
    shell, _ = make_shell(returncodes={"false": 1})
    assert_that(shell.run_line("true ; false")).is_equal_to(1)


def test_missing_operand_aborts_only_its_chain(
    make_shell: ShellFactory, err: io.StringIO
) -> None:
    shell, spy = make_shell()
    returncode = shell.run_line("&& echo skipped ; echo next")
    with soft_assertions():
        assert_that(returncode).is_equal_to(0)
        assert_that(spy.calls).is_equal_to([("echo", ("next",))])
        assert_that(err.getvalue()).is_equal_to(
            "chain-shell: syntax error: no command result before '&&'\n"
        )


def test_missing_operand_returncode(make_shell: ShellFactory) -> None:
    shell, _ = make_shell()
    assert_that(shell.run_line("echo hi ; ||")).is_equal_to(USAGE_ERROR_CODE)


def test_exit_propagates(make_shell: ShellFactory) -> None:
    shell, spy = make_shell()
    with pytest.raises(ShellExit) as exc_info:
        shell.run_line("echo bye ; exit 4 ; echo never")
    assert_that(exc_info.value.code).is_equal_to(4)
    assert_that(spy.binaries).is_equal_to(["echo"])


def test_repl_runs_until_eof(make_shell: ShellFactory) -> None:
    shell, spy = make_shell(returncodes={"false": 1})
    stdout = io.StringIO()
    returncode = shell.repl(io.StringIO("echo a\n\nfalse\n"), stdout)
    with soft_assertions():
        assert_that(returncode).is_equal_to(1)
        assert_that(spy.binaries).is_equal_to(["echo", "false"])
        # Not a terminal, so no prompt
        assert_that(stdout.getvalue()).is_empty()


def test_repl_last_line_without_newline(make_shell: ShellFactory) -> None:
    shell, spy = make_shell()
    shell.repl(io.StringIO("pwd;pwd"), io.StringIO())
    assert_that(spy.binaries).is_equal_to(["pwd", "pwd"])


def test_repl_stops_at_exit(make_shell: ShellFactory) -> None:
    shell, spy = make_shell()
    returncode = shell.repl(io.StringIO("echo a\nexit 7\necho b\n"), io.StringIO())
    assert_that(returncode).is_equal_to(7)
    assert_that(spy.binaries).is_equal_to(["echo"])


def test_repl_prompts_on_terminal(make_shell: ShellFactory) -> None:
    shell, _ = make_shell()
    stdout = _TTY()
    shell.repl(io.StringIO("echo a\n"), stdout)
    assert_that(stdout.getvalue()).is_equal_to("> > ")


class _InterruptedOnce(io.StringIO):
    def __init__(self, text: str) -> None:
        super().__init__(text)
        self._interrupted = False

    def readline(self, size: int | None = -1) -> str:  # type: ignore[override]
        if not self._interrupted:
            self._interrupted = True
            raise KeyboardInterrupt
        return super().readline()


def test_repl_interrupt_while_reading_continues(make_shell: ShellFactory) -> None:
    shell, spy = make_shell()
    stdout = io.StringIO()
    returncode = shell.repl(_InterruptedOnce("echo a\n"), stdout)
    with soft_assertions():
        assert_that(returncode).is_equal_to(0)
        assert_that(spy.binaries).is_equal_to(["echo"])
        assert_that(stdout.getvalue()).is_equal_to("\n")


def _interrupt(args: Sequence[str], stream: TextIO) -> int:
    raise KeyboardInterrupt


@pytest.fixture
def interruptible_shell(err: io.StringIO) -> tuple[Shell, SpyAdapter]:
    spy = SpyAdapter()
    builtins = {**BUILTINS, "interrupt": _interrupt}
    return Shell(Evaluator(spy, builtins=builtins, err=err)), spy


def test_repl_interrupted_command_returncode(
    interruptible_shell: tuple[Shell, SpyAdapter],
) -> None:
    shell, _ = interruptible_shell
    assert_that(shell.repl(io.StringIO("interrupt\n"), io.StringIO())).is_equal_to(
        INTERRUPTED_CODE
    )
    assert_that(INTERRUPTED_CODE).is_equal_to(130)


def test_repl_runs_next_line_after_interrupted_command(
    interruptible_shell: tuple[Shell, SpyAdapter],
) -> None:
    shell, spy = interruptible_shell
    stdin = io.StringIO("interrupt ; echo skipped\necho a\n")
    returncode = shell.repl(stdin, io.StringIO())
    with soft_assertions():
        assert_that(returncode).is_equal_to(0)
        assert_that(spy.binaries).is_equal_to(["echo"])
        assert_that(spy.calls).is_equal_to([("echo", ("a",))])
