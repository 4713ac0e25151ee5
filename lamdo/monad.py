"""
Monad base class for the lamdo effect types.

Every effect type in lamdo (Maybe, Reader, State and the transformer stacks)
implements the same two operations:

    pure(x)      -- wrap a plain value as a computation (classmethod)
    flat_map(k)  -- sequence a computation with a continuation (bind)

Everything else (map, then, ``>>``, the combinators, do-notation) is written
once in terms of these two.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar

T_co = TypeVar("T_co", covariant=True)
U = TypeVar("U")


class Monad(ABC, Generic[T_co]):
    """Common interface shared by all effect types."""

    __slots__ = ()

    @classmethod
    @abstractmethod
    def pure(cls, value: Any) -> Monad[Any]:
        """Lift a plain value into this effect."""

    @abstractmethod
    def flat_map(self, f: Callable[[T_co], Monad[U]]) -> Monad[U]:
        """Monadic bind operation."""

    def map(self, f: Callable[[T_co], U]) -> Monad[U]:
        """Map a function over this computation's result."""

        if not callable(f):
            raise TypeError("mapper must be callable")
        unit = type(self).pure
        return self.flat_map(lambda value: unit(f(value)))

    def then(self, other: Monad[U]) -> Monad[U]:
        """Sequence ``other`` after this computation, discarding the result."""

        return self.flat_map(lambda _: other)

    def __rshift__(self, f: Callable[[T_co], Monad[U]]) -> Monad[U]:
        return self.flat_map(f)


def ensure_instance(value: Any, expected: type, *, name: str) -> Any:
    """Check that a continuation produced the effect type being sequenced."""

    if not isinstance(value, expected):
        raise TypeError(
            f"{name} must return a {expected.__name__}; got {type(value).__name__}"
        )
    return value


__all__ = ["Monad", "ensure_instance"]
