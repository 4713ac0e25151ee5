"""
Lambda-calculus expressions.

Every node carries its source position for diagnostics. Positions take part
in the textual form but not in equality or hashing, so two trees built at
different places in the source compare equal when their shapes match.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from lamdo.combinators import fmap, fmap2
from lamdo.reader import Reader, ask

Posn = tuple[int, int]

NO_POS: Final[Posn] = (0, 0)


class Exp:
    """Base class of the expression variants."""

    __slots__ = ()

    def __str__(self) -> str:
        return show(self)


@dataclass(frozen=True)
class Var(Exp):
    pos: Posn = field(compare=False)
    name: str


@dataclass(frozen=True)
class App(Exp):
    pos: Posn = field(compare=False)
    fun: Exp
    arg: Exp


@dataclass(frozen=True)
class Abs(Exp):
    pos: Posn = field(compare=False)
    param: str
    body: Exp


@dataclass(frozen=True)
class Num(Exp):
    pos: Posn = field(compare=False)
    value: int


@dataclass(frozen=True)
class Add(Exp):
    pos: Posn = field(compare=False)
    left: Exp
    right: Exp


def show(exp: Exp) -> str:
    """Render ``exp`` constructor by constructor, positions included.

    >>> show(App((0, 0), Abs((0, 1), "z", Var((0, 2), "z")), Num((0, 3), 5)))
    'App (0,0) (Abs (0,1) "z" (Var (0,2) "z")) (Num (0,3) 5)'
    """

    match exp:
        case Var(pos=pos, name=name):
            return f"Var {_show_pos(pos)} {_show_str(name)}"
        case App(pos=pos, fun=fun, arg=arg):
            return f"App {_show_pos(pos)} ({show(fun)}) ({show(arg)})"
        case Abs(pos=pos, param=param, body=body):
            return f"Abs {_show_pos(pos)} {_show_str(param)} ({show(body)})"
        case Num(pos=pos, value=value):
            return f"Num {_show_pos(pos)} {_show_int(value)}"
        case Add(pos=pos, left=left, right=right):
            return f"Add {_show_pos(pos)} ({show(left)}) ({show(right)})"
    raise TypeError(f"not an expression: {exp!r}")


def _show_pos(pos: Posn) -> str:
    line, column = pos
    return f"({line},{column})"


def _show_str(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _show_int(n: int) -> str:
    return f"({n})" if n < 0 else str(n)


def subst(name: str, replacement: Exp, exp: Exp) -> Exp:
    """Replace free occurrences of ``name`` in ``exp`` with ``replacement``.

    Binders are not renamed, so a free variable of ``replacement`` can be
    captured by an ``Abs`` inside ``exp``; see :func:`subst_capture_avoiding`.
    Nodes whose children are unchanged are returned as-is.
    """

    match exp:
        case Var(name=y):
            return replacement if y == name else exp
        case Abs(pos=pos, param=y, body=body):
            if y == name:
                return exp
            new_body = subst(name, replacement, body)
            if new_body is body:
                return exp
            return Abs(pos, y, new_body)
        case App(pos=pos, fun=fun, arg=arg):
            new_fun = subst(name, replacement, fun)
            new_arg = subst(name, replacement, arg)
            if new_fun is fun and new_arg is arg:
                return exp
            return App(pos, new_fun, new_arg)
        case Num():
            return exp
        case Add(pos=pos, left=left, right=right):
            new_left = subst(name, replacement, left)
            new_right = subst(name, replacement, right)
            if new_left is left and new_right is right:
                return exp
            return Add(pos, new_left, new_right)
    raise TypeError(f"not an expression: {exp!r}")


SubstEnv = tuple[str, Exp]


def subst_reader(exp: Exp) -> Reader[SubstEnv, Exp]:
    """Substitution as a reader computation over ``(name, replacement)``."""

    match exp:
        case Var(name=y):
            return ask().map(lambda env: env[1] if env[0] == y else exp)
        case Abs(pos=pos, param=y, body=body):
            def under_binder(env: SubstEnv) -> Reader[SubstEnv, Exp]:
                if env[0] == y:
                    return Reader.pure(exp)
                return fmap(lambda new_body: Abs(pos, y, new_body), subst_reader(body))

            return ask().flat_map(under_binder)
        case App(pos=pos, fun=fun, arg=arg):
            return fmap2(lambda f, a: App(pos, f, a), subst_reader(fun), subst_reader(arg))
        case Num():
            return Reader.pure(exp)
        case Add(pos=pos, left=left, right=right):
            return fmap2(lambda l, r: Add(pos, l, r), subst_reader(left), subst_reader(right))
    raise TypeError(f"not an expression: {exp!r}")


def subst_via_reader(name: str, replacement: Exp, exp: Exp) -> Exp:
    return subst_reader(exp).run((name, replacement))


def free_vars(exp: Exp) -> frozenset[str]:
    match exp:
        case Var(name=name):
            return frozenset({name})
        case Abs(param=param, body=body):
            return free_vars(body) - {param}
        case App(fun=fun, arg=arg):
            return free_vars(fun) | free_vars(arg)
        case Num():
            return frozenset()
        case Add(left=left, right=right):
            return free_vars(left) | free_vars(right)
    raise TypeError(f"not an expression: {exp!r}")


def subst_capture_avoiding(name: str, replacement: Exp, exp: Exp) -> Exp:
    """Like :func:`subst`, but renames binders that would capture.

    A binder ``y`` that occurs free in ``replacement`` is renamed to the
    first of ``y'``, ``y''``, ... that is free in neither the body nor the
    replacement.
    """

    match exp:
        case Abs(pos=pos, param=y, body=body) if y != name:
            replacement_fvs = free_vars(replacement)
            if y in replacement_fvs and name in free_vars(body):
                taken = replacement_fvs | free_vars(body)
                fresh = y + "'"
                while fresh in taken:
                    fresh += "'"
                body = subst_capture_avoiding(y, Var(pos, fresh), body)
                y = fresh
            return Abs(pos, y, subst_capture_avoiding(name, replacement, body))
        case App(pos=pos, fun=fun, arg=arg):
            return App(
                pos,
                subst_capture_avoiding(name, replacement, fun),
                subst_capture_avoiding(name, replacement, arg),
            )
        case Add(pos=pos, left=left, right=right):
            return Add(
                pos,
                subst_capture_avoiding(name, replacement, left),
                subst_capture_avoiding(name, replacement, right),
            )
    return subst(name, replacement, exp)


__all__ = [
    "Posn",
    "NO_POS",
    "Exp",
    "Var",
    "App",
    "Abs",
    "Num",
    "Add",
    "show",
    "subst",
    "subst_reader",
    "subst_via_reader",
    "free_vars",
    "subst_capture_avoiding",
]
