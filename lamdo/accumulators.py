"""
Small stateful programs written in the State monad.

The Fibonacci state is the pair ``(current, previous)``, starting at
``(0, 1)``; one step turns it into ``(current + previous, current)``.
"""

from __future__ import annotations

from lamdo.combinators import for_each
from lamdo.do import DoGenerator, do
from lamdo.state import State, eval_state, exec_state, get, put

FibState = tuple[int, int]

FIB_START: FibState = (0, 1)


@do(State)
def increment() -> DoGenerator[None]:
    counter = yield get()
    yield put(counter + 1)


@do(State)
def count_up(n: int) -> DoGenerator[int]:
    """Increment the counter ``n`` times and return its final value."""

    yield for_each(range(n), lambda _: increment(), monad=State)
    return (yield get())


@do(State)
def fib_step() -> DoGenerator[None]:
    current, previous = yield get()
    yield put((current + previous, current))


@do(State)
def fib_state(n: int) -> DoGenerator[None]:
    if n == 0:
        return None
    yield fib_state(n - 1)
    yield fib_step()


def compute_fib(n: int) -> int:
    return exec_state(fib_state(n), FIB_START)[0]


def fib_for(n: int) -> State[FibState, None]:
    return for_each(range(1, n + 1), lambda _: fib_step(), monad=State)


def compute_fib_for(n: int) -> int:
    return exec_state(fib_for(n), FIB_START)[0]


def fib_n_for(n: int) -> int:
    @do(State)
    def program() -> DoGenerator[int]:
        for _ in range(n):
            current, previous = yield get()
            yield put((current + previous, current))
        current, _ = yield get()
        return current

    return eval_state(program(), FIB_START)


__all__ = [
    "FibState",
    "FIB_START",
    "increment",
    "count_up",
    "fib_step",
    "fib_state",
    "compute_fib",
    "fib_for",
    "compute_fib_for",
    "fib_n_for",
]
