"""
Pytest configuration for the lamdo tests.

Provides expression builders with throwaway positions and a helper that
moves every node of a tree to a different source position.
"""

from collections.abc import Callable

import pytest

from lamdo.syntax import NO_POS, Abs, Add, App, Exp, Num, Posn, Var


def relocate(exp: Exp, pos_of: Callable[[Posn], Posn]) -> Exp:
    """Rebuild ``exp`` with every position replaced by ``pos_of(old)``."""

    match exp:
        case Var(pos=pos, name=name):
            return Var(pos_of(pos), name)
        case App(pos=pos, fun=fun, arg=arg):
            return App(pos_of(pos), relocate(fun, pos_of), relocate(arg, pos_of))
        case Abs(pos=pos, param=param, body=body):
            return Abs(pos_of(pos), param, relocate(body, pos_of))
        case Num(pos=pos, value=value):
            return Num(pos_of(pos), value)
        case Add(pos=pos, left=left, right=right):
            return Add(pos_of(pos), relocate(left, pos_of), relocate(right, pos_of))
    raise TypeError(exp)


def positions(exp: Exp) -> list[Posn]:
    match exp:
        case Var(pos=pos) | Num(pos=pos):
            return [pos]
        case App(pos=pos, fun=a, arg=b) | Add(pos=pos, left=a, right=b):
            return [pos, *positions(a), *positions(b)]
        case Abs(pos=pos, body=body):
            return [pos, *positions(body)]
    raise TypeError(exp)


def var(name: str) -> Var:
    return Var(NO_POS, name)


def lam(param: str, body: Exp) -> Abs:
    return Abs(NO_POS, param, body)


def app(fun: Exp, arg: Exp) -> App:
    return App(NO_POS, fun, arg)


def num(n: int) -> Num:
    return Num(NO_POS, n)


def add(left: Exp, right: Exp) -> Add:
    return Add(NO_POS, left, right)


@pytest.fixture
def identity() -> Abs:
    return lam("z", var("z"))


@pytest.fixture
def sample_exp() -> Exp:
    """``(\\x. x) ((\\y. \\z. y + z) 1 2)`` with distinct positions."""

    return App(
        (1, 0),
        Abs((1, 1), "x", Var((1, 4), "x")),
        App(
            (1, 7),
            App(
                (1, 7),
                Abs((1, 8), "y", Abs((1, 12), "z", Add((1, 16), Var((1, 16), "y"), Var((1, 20), "z")))),
                Num((1, 24), 1),
            ),
            Num((1, 26), 2),
        ),
    )
