"""
The do decorator for lamdo.

This module provides ``@do(monad)``, which converts a generator function into
a function returning a ``monad`` computation, giving Python a do-notation for
any :class:`~lamdo.monad.Monad`.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Generator
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from lamdo.maybe import Maybe, Some
from lamdo.monad import Monad

P = ParamSpec("P")
T = TypeVar("T")

DoGenerator = Generator[Monad[Any], Any, T]


def do(
    monad: type[Monad],
) -> Callable[[Callable[P, DoGenerator[T]]], Callable[P, Monad[T]]]:
    """
    Decorator factory turning a generator function into a ``monad`` program.

    Inside the generator, ``x = yield m`` binds the result of ``m`` to ``x``
    (``m.flat_map``), and ``return v`` ends the block with ``monad.pure(v)``.
    A block whose last step is itself a computation returns it with
    ``return (yield m)``.

    The generator is created only when the resulting computation actually
    runs (for Maybe that is immediately, for Reader and State when ``run`` is
    called). Generators are single-use, so deferring creation is what makes a
    Reader or State built with ``@do`` runnable any number of times.

    Usage:
        @do(Reader)
        def lookup(name: str) -> DoGenerator[int]:
            env = yield ask()
            return env[name]

        lookup("x").run({"x": 1})  # 1

    Args:
        monad: The effect type every yielded computation belongs to. Its
            ``pure`` wraps the generator's return value.

    Returns:
        A decorator for generator functions.
    """

    if not (isinstance(monad, type) and issubclass(monad, Monad)):
        raise TypeError(f"do() expects a Monad class, got {monad!r}")

    def decorator(func: Callable[P, DoGenerator[T]]) -> Callable[P, Monad[T]]:
        @wraps(func)
        def program(*args: P.args, **kwargs: P.kwargs) -> Monad[T]:
            def start(_: Any) -> Monad[T]:
                gen_or_value = func(*args, **kwargs)
                if not inspect.isgenerator(gen_or_value):
                    return monad.pure(gen_or_value)
                return _resume(monad, gen_or_value, None)

            return monad.pure(None).flat_map(start)

        program.original_generator = func  # type: ignore[attr-defined]
        return program

    return decorator


def _resume(monad: type[Monad], gen: DoGenerator[T], sent: Any) -> Monad[T]:
    binds_eagerly = issubclass(monad, Maybe)
    while True:
        try:
            current = gen.send(sent)
        except StopIteration as stop_exc:
            return monad.pure(stop_exc.value)

        if not isinstance(current, Monad):
            gen.close()
            raise TypeError(
                f"@do block yielded {type(current).__name__}; expected a "
                f"{monad.__name__} computation"
            )
        # Some binds immediately, so a Maybe block keeps driving the generator
        if binds_eagerly and isinstance(current, Some):
            sent = current.value
            continue
        return current.flat_map(lambda value: _resume(monad, gen, value))


__all__ = ["do", "DoGenerator"]
