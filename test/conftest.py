from collections.abc import Callable
import io

import pytest

from chain_shell import Evaluator
from chain_shell import Shell

from spy_adapter import SpyAdapter


@pytest.fixture
def err() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def make_shell(err: io.StringIO) -> Callable[..., tuple[Shell, SpyAdapter]]:
    """Factory for a shell backed by a fresh :class:`SpyAdapter`."""

    def _make(**adapter_kwargs: object) -> tuple[Shell, SpyAdapter]:
        spy = SpyAdapter(**adapter_kwargs)  # type: ignore[arg-type]
        return Shell(Evaluator(spy, err=err)), spy

    return _make


@pytest.fixture
def spy() -> SpyAdapter:
    return SpyAdapter(returncodes={"false": 1})


@pytest.fixture
def evaluator(spy: SpyAdapter, err: io.StringIO) -> Evaluator:
    return Evaluator(spy, err=err)
