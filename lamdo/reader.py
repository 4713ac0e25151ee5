"""Reader computations: functions of a shared, read-only environment."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from lamdo.monad import Monad, ensure_instance

E = TypeVar("E")
T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Reader(Monad[T], Generic[E, T]):
    """A deferred computation ``env -> T``.

    Nothing runs until :meth:`run` supplies the environment. Every
    sub-computation sequenced with :meth:`flat_map` sees the same environment
    unless it is wrapped in :meth:`local`.
    """

    run_reader: Callable[[E], T]

    @classmethod
    def pure(cls, value: U) -> Reader[Any, U]:
        return cls(lambda _env: value)

    def flat_map(self, f: Callable[[T], Reader[E, U]]) -> Reader[E, U]:
        if not callable(f):
            raise TypeError("binder must be callable returning a Reader")

        def run(env: E) -> U:
            value = self.run_reader(env)
            next_reader = ensure_instance(f(value), Reader, name="binder")
            return next_reader.run_reader(env)

        return Reader(run)

    def map(self, f: Callable[[T], U]) -> Reader[E, U]:
        return Reader(lambda env: f(self.run_reader(env)))

    def local(self, modify: Callable[[E], E]) -> Reader[E, T]:
        """Run this computation against ``modify(env)`` instead of ``env``."""

        return Reader(lambda env: self.run_reader(modify(env)))

    def run(self, env: E) -> T:
        return self.run_reader(env)


def ask() -> Reader[E, E]:
    """Return the environment itself."""
    return Reader(lambda env: env)


def asks(f: Callable[[E], T]) -> Reader[E, T]:
    return Reader(f)


def local(modify: Callable[[E], E], computation: Reader[E, T]) -> Reader[E, T]:
    return computation.local(modify)


def run_reader(computation: Reader[E, T], env: E) -> T:
    return computation.run(env)


__all__ = ["Reader", "ask", "asks", "local", "run_reader"]
