"""Optional computations: a value (``Some``) or nothing (``NOTHING``)."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Final, Generic, NoReturn, TypeVar

from lamdo.monad import Monad, ensure_instance

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
U = TypeVar("U")


class Maybe(Monad[T_co]):
    """Optional value that may contain ``Some`` data or ``Nothing``."""

    __slots__ = ()

    @classmethod
    def pure(cls, value: U) -> Maybe[U]:
        return Some(value)

    def flat_map(self, f: Callable[[T_co], Maybe[U]]) -> Maybe[U]:
        """Chain a computation that itself returns ``Maybe``.

        ``Nothing`` short-circuits: the continuation is never called.
        """

        if isinstance(self, Some):
            return ensure_instance(f(self.value), Maybe, name="flat_map")
        return NOTHING

    def map(self, f: Callable[[T_co], U]) -> Maybe[U]:
        if isinstance(self, Some):
            return Some(f(self.value))
        return NOTHING

    def is_some(self) -> bool:
        return isinstance(self, Some)

    def is_none(self) -> bool:
        return isinstance(self, Nothing)

    def expect(self, message: str) -> T_co:
        """Return the contained value or raise ``RuntimeError`` with ``message``."""

        if isinstance(self, Some):
            return self.value
        raise RuntimeError(message or "Expected Some value, found Nothing")

    def unwrap(self) -> T_co:
        if isinstance(self, Some):
            return self.value
        raise RuntimeError("Called unwrap on Nothing value")

    def unwrap_or(self, default: U) -> T_co | U:
        if isinstance(self, Some):
            return self.value
        return default

    def unwrap_or_else(self, default_fn: Callable[[], U]) -> T_co | U:
        if isinstance(self, Some):
            return self.value
        return default_fn()

    def filter(self, predicate: Callable[[T_co], bool]) -> Maybe[T_co]:
        """Return ``self`` if the predicate passes, otherwise ``Nothing``."""

        if isinstance(self, Some) and predicate(self.value):
            return self
        return NOTHING

    def to_optional(self) -> T_co | None:
        if isinstance(self, Some):
            return self.value
        return None

    @classmethod
    def from_optional(cls, value: U | None) -> Maybe[U]:
        if value is None:
            return NOTHING
        return Some(value)

    def __or__(self, other: Maybe[U]) -> Maybe[T_co] | Maybe[U]:
        """Return this value if present, otherwise ``other``."""

        if isinstance(self, Some):
            return self
        return other

    def __bool__(self) -> bool:
        return self.is_some()


@dataclass(frozen=True)
class Some(Maybe[T], Generic[T]):
    """Presence of a value."""

    value: T


class Nothing(Maybe[NoReturn]):
    """Singleton representing the absence of a value."""

    __slots__ = ()
    _instance: Nothing | None = None

    def __new__(cls) -> Nothing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Nothing()"


NOTHING: Final[Maybe[NoReturn]] = Nothing()


def fail() -> Maybe[NoReturn]:
    """The absent computation."""
    return NOTHING


__all__ = ["Maybe", "Some", "Nothing", "NOTHING", "fail"]
