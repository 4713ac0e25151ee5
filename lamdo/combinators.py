"""
Generic combinators over any :class:`~lamdo.monad.Monad`.

These only use ``pure`` and ``flat_map``, so the same helper works for
Maybe, Reader, State and the transformer stacks. Sequencing is always left
to right: when an earlier computation short-circuits, later ones are never
run.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from lamdo.monad import Monad

A = TypeVar("A")
B = TypeVar("B")
R = TypeVar("R")


def fmap(f: Callable[[A], R], computation: Monad[A]) -> Monad[R]:
    """Lift a one-argument function over a computation (``liftM``)."""

    unit = type(computation).pure
    return computation.flat_map(lambda value: unit(f(value)))


def fmap2(
    f: Callable[[A, B], R],
    first: Monad[A],
    second: Monad[B],
) -> Monad[R]:
    """Run ``first`` then ``second`` and combine the results (``liftM2``)."""

    unit = type(first).pure
    return first.flat_map(
        lambda a: second.flat_map(lambda b: unit(f(a, b)))
    )


def sequence(
    computations: Iterable[Monad[A]],
    monad: type[Monad] | None = None,
) -> Monad[list[A]]:
    """Run each computation in order and collect the results in a list.

    ``monad`` selects the effect for the empty list; otherwise it is taken
    from the first computation.
    """

    computations = list(computations)
    if monad is None:
        if not computations:
            raise ValueError("sequence of an empty list needs an explicit monad")
        monad = type(computations[0])

    # results build up as a linked list of (value, rest) cells, newest first
    cells: Monad[Any] = monad.pure(None)
    for computation in computations:
        cells = fmap2(_cons, cells, computation)
    return fmap(_to_list, cells)


def traverse(
    f: Callable[[Any], Monad[A]],
    items: Iterable[Any],
    monad: type[Monad] | None = None,
) -> Monad[list[A]]:
    """Map ``f`` over ``items`` and sequence the results (``mapM``)."""

    return sequence([f(item) for item in items], monad=monad)


def for_each(
    items: Iterable[Any],
    f: Callable[[Any], Monad[Any]],
    monad: type[Monad] | None = None,
) -> Monad[None]:
    """Run ``f`` for every item in order, discarding the results (``forM_``)."""

    return fmap(lambda _results: None, traverse(f, items, monad=monad))


def replicate(n: int, computation: Monad[A]) -> Monad[list[A]]:
    if n < 0:
        raise ValueError("replicate count must be non-negative")
    return sequence([computation] * n, monad=type(computation))


def _cons(rest: Any, value: A) -> tuple[A, Any]:
    return (value, rest)


def _to_list(cells: Any) -> list[Any]:
    items = []
    while cells is not None:
        value, cells = cells
        items.append(value)
    items.reverse()
    return items


__all__ = ["fmap", "fmap2", "sequence", "traverse", "for_each", "replicate"]
