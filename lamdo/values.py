"""Runtime values and environments of the environment-based evaluators."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

from frozendict import frozendict

from lamdo.syntax import Exp, _show_str, show


class Value:
    """Base class of evaluation results."""

    __slots__ = ()


Env = frozendict  # frozendict[str, Value]

EMPTY_ENV: Final[Env] = frozendict()


@dataclass(frozen=True)
class VClo(Value):
    """A closure: parameter and body plus the environment it was created in."""

    env: Env
    param: str
    body: Exp


@dataclass(frozen=True)
class VNum(Value):
    value: int


def extend(env: Mapping[str, Value], name: str, value: Value) -> Env:
    """Return a new environment with ``name`` bound to ``value``."""
    return frozendict({**dict(env), name: value})


def as_env(bindings: Mapping[str, Value] | None) -> Env:
    if bindings is None:
        return EMPTY_ENV
    if isinstance(bindings, frozendict):
        return bindings
    return frozendict(bindings)


def show_value(value: Value) -> str:
    match value:
        case VNum(value=n):
            return f"VNum {n}" if n >= 0 else f"VNum ({n})"
        case VClo(env=env, param=param, body=body):
            bindings = ",".join(
                f"({_show_str(name)},{show_value(bound)})" for name, bound in sorted(env.items())
            )
            return f"VClo fromList [{bindings}] {_show_str(param)} ({show(body)})"
    raise TypeError(f"not a value: {value!r}")


__all__ = [
    "Value",
    "Env",
    "EMPTY_ENV",
    "VClo",
    "VNum",
    "extend",
    "as_env",
    "show_value",
]
