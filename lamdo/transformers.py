"""
Monad transformers.

A transformer adds one effect on top of an arbitrary base monad. Python has
no higher-kinded types, so the base is fixed by specialising the transformer
class once::

    Eval = ReaderT.over(Maybe)      # env -> Maybe[T]
    Counter = StateT.over(Maybe)    # state -> Maybe[(state, T)]

The specialised class carries the base as a class attribute, which is what
lets ``pure``/``lift`` be classmethods like for the plain effect types.
Plain (non-transformer) versions are recovered with ``Identity`` as the base.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from lamdo.maybe import NOTHING, Maybe, Some
from lamdo.monad import Monad, ensure_instance

E = TypeVar("E")
S = TypeVar("S")
T = TypeVar("T")
U = TypeVar("U")

_specialised: dict[tuple[type, type], type] = {}


@dataclass(frozen=True)
class Identity(Monad[T], Generic[T]):
    """The trivial monad: a value with no effect."""

    value: T

    @classmethod
    def pure(cls, value: U) -> Identity[U]:
        return cls(value)

    def flat_map(self, f: Callable[[T], Identity[U]]) -> Identity[U]:
        return ensure_instance(f(self.value), Identity, name="flat_map")

    def run(self) -> T:
        return self.value


class _Transformer(Monad[T]):
    """Shared ``over`` specialisation for the transformer classes."""

    __slots__ = ()

    base: ClassVar[type[Monad] | None] = None

    @classmethod
    def over(cls, base: type[Monad]) -> type:
        """Return ``cls`` specialised to ``base``; cached per ``(cls, base)``."""

        if not (isinstance(base, type) and issubclass(base, Monad)):
            raise TypeError(f"{cls.__name__} base must be a Monad class, got {base!r}")
        key = (cls, base)
        specialised = _specialised.get(key)
        if specialised is None:
            name = f"{cls.__name__}[{base.__name__}]"
            namespace = {"base": base, "__module__": cls.__module__}
            specialised = type(cls)(name, (cls,), namespace)
            _specialised[key] = specialised
        return specialised

    @classmethod
    def _base(cls) -> type[Monad]:
        if cls.base is None:
            raise TypeError(
                f"{cls.__name__} has no base monad; specialise it with "
                f"{cls.__name__}.over(base)"
            )
        return cls.base


@dataclass(frozen=True)
class ReaderT(_Transformer[T], Generic[E, T]):
    """A reader whose body returns a computation in the base monad."""

    run_reader: Callable[[E], Monad[T]]

    @classmethod
    def pure(cls, value: U) -> ReaderT[Any, U]:
        base = cls._base()
        return cls(lambda _env: base.pure(value))

    @classmethod
    def ask(cls) -> ReaderT[E, E]:
        base = cls._base()
        return cls(lambda env: base.pure(env))

    @classmethod
    def lift(cls, computation: Monad[U]) -> ReaderT[Any, U]:
        """Embed a base computation; it ignores the environment."""

        ensure_instance(computation, cls._base(), name="lift")
        return cls(lambda _env: computation)

    def flat_map(self, f: Callable[[T], ReaderT[E, U]]) -> ReaderT[E, U]:
        cls = type(self)

        def run(env: E) -> Monad[U]:
            def continue_with(value: T) -> Monad[U]:
                return ensure_instance(f(value), cls, name="binder").run_reader(env)

            return self.run_reader(env).flat_map(continue_with)

        return cls(run)

    def local(self, modify: Callable[[E], E]) -> ReaderT[E, T]:
        return type(self)(lambda env: self.run_reader(modify(env)))

    def run(self, env: E) -> Monad[T]:
        return self.run_reader(env)


@dataclass(frozen=True)
class StateT(_Transformer[T], Generic[S, T]):
    """``state -> base[(state, T)]``."""

    run_state: Callable[[S], Monad[tuple[S, T]]]

    @classmethod
    def pure(cls, value: U) -> StateT[Any, U]:
        base = cls._base()
        return cls(lambda s: base.pure((s, value)))

    @classmethod
    def get(cls) -> StateT[S, S]:
        base = cls._base()
        return cls(lambda s: base.pure((s, s)))

    @classmethod
    def put(cls, new_state: S) -> StateT[S, None]:
        base = cls._base()
        return cls(lambda _s: base.pure((new_state, None)))

    @classmethod
    def lift(cls, computation: Monad[U]) -> StateT[Any, U]:
        ensure_instance(computation, cls._base(), name="lift")
        return cls(lambda s: computation.map(lambda value: (s, value)))

    def flat_map(self, f: Callable[[T], StateT[S, U]]) -> StateT[S, U]:
        cls = type(self)

        def run(s: S) -> Monad[tuple[S, U]]:
            def continue_with(pair: tuple[S, T]) -> Monad[tuple[S, U]]:
                s1, value = pair
                return ensure_instance(f(value), cls, name="binder").run_state(s1)

            return self.run_state(s).flat_map(continue_with)

        return cls(run)

    def run(self, initial: S) -> Monad[tuple[S, T]]:
        return self.run_state(initial)


@dataclass(frozen=True)
class MaybeT(_Transformer[T], Generic[T]):
    """A base computation producing an optional value."""

    run_maybe: Monad[Maybe[T]]

    @classmethod
    def pure(cls, value: U) -> MaybeT[U]:
        return cls(cls._base().pure(Some(value)))

    @classmethod
    def fail(cls) -> MaybeT[Any]:
        return cls(cls._base().pure(NOTHING))

    @classmethod
    def lift(cls, computation: Monad[U]) -> MaybeT[U]:
        ensure_instance(computation, cls._base(), name="lift")
        return cls(computation.map(Some))

    def flat_map(self, f: Callable[[T], MaybeT[U]]) -> MaybeT[U]:
        cls = type(self)
        base = cls._base()

        def continue_with(optional: Maybe[T]) -> Monad[Maybe[U]]:
            if isinstance(optional, Some):
                return ensure_instance(f(optional.value), cls, name="binder").run_maybe
            return base.pure(NOTHING)

        return cls(self.run_maybe.flat_map(continue_with))

    def run(self) -> Monad[Maybe[T]]:
        return self.run_maybe


__all__ = ["Identity", "ReaderT", "StateT", "MaybeT"]
