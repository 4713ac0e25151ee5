"""
State computations.

A state computation is written in state-passing style, ``state -> (state,
result)``, and hides the threading of the state behind ``flat_map``.

``flat_map`` does not compose functions. It records the computation and its
binder, and :meth:`State.run` walks those records with an explicit stack, so
long chains of binds (a counter loop of thousands of steps, say) run in
constant Python stack depth.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from lamdo.monad import Monad, ensure_instance

S = TypeVar("S")
T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class State(Monad[T], Generic[S, T]):
    """A deferred computation ``state -> (state, T)``.

    A primitive carries its ``step`` function. A bound computation carries
    ``bound = (source, binder)`` instead and has no step of its own.
    """

    step: Callable[[S], tuple[S, T]] | None
    bound: tuple[State[S, Any], Callable[[Any], State[S, T]]] | None = field(
        default=None, repr=False
    )

    @classmethod
    def pure(cls, value: U) -> State[Any, U]:
        return cls(lambda s: (s, value))

    def flat_map(self, f: Callable[[T], State[S, U]]) -> State[S, U]:
        if not callable(f):
            raise TypeError("binder must be callable returning a State")
        return State(None, (self, f))

    def map(self, f: Callable[[T], U]) -> State[S, U]:
        return self.flat_map(lambda value: State.pure(f(value)))

    def run(self, initial: S) -> tuple[S, T]:
        """Return ``(final_state, result)``."""

        pending: list[Callable[[Any], State[S, Any]]] = []
        current: State[S, Any] = self
        state = initial
        while True:
            while current.bound is not None:
                source, binder = current.bound
                pending.append(binder)
                current = source
            state, value = current.step(state)
            if not pending:
                return state, value
            current = ensure_instance(pending.pop()(value), State, name="binder")

    def run_state(self, initial: S) -> tuple[S, T]:
        return self.run(initial)


def get() -> State[S, S]:
    return State(lambda s: (s, s))


def gets(f: Callable[[S], T]) -> State[S, T]:
    """Return ``f(state)`` without changing the state."""
    return State(lambda s: (s, f(s)))


def put(new_state: S) -> State[S, None]:
    return State(lambda _s: (new_state, None))


def modify(f: Callable[[S], S]) -> State[S, None]:
    return State(lambda s: (f(s), None))


def run_state(computation: State[S, T], initial: S) -> tuple[S, T]:
    return computation.run(initial)


def eval_state(computation: State[S, T], initial: S) -> T:
    return computation.run(initial)[1]


def exec_state(computation: State[S, T], initial: S) -> S:
    return computation.run(initial)[0]


__all__ = [
    "State",
    "get",
    "gets",
    "put",
    "modify",
    "run_state",
    "eval_state",
    "exec_state",
]
