"""
Evaluators for the lambda calculus.

Four call-by-value evaluators share the same rules and differ only in the
effect they are written in:

- :func:`eval_exp` -- optional results, substitution based, explicit
  ``flat_map`` chains.
- :func:`eval_exp_do` -- the same evaluator written with ``@do(Maybe)``.
- :func:`eval_env` -- environment based, in the Reader monad. It has no
  failure channel: unbound variables and type mismatches raise
  :class:`~lamdo.errors.EvaluationError` when the reader is run.
- :func:`eval_env_maybe` -- environment based, in ``ReaderT`` over
  ``Maybe``. Every failure site lifts ``fail()`` instead, so running it
  returns ``NOTHING`` rather than raising.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from lamdo import utils
from lamdo.do import DoGenerator, do
from lamdo.errors import NotAClosureError, NotANumberError, UnboundVariableError
from lamdo.maybe import Maybe, fail
from lamdo.reader import Reader, ask, local
from lamdo.syntax import Abs, Add, App, Exp, Num, Posn, Var, subst
from lamdo.transformers import ReaderT
from lamdo.values import Value, VClo, VNum, as_env, extend, show_value

logger = logging.getLogger(__name__)

Eval = ReaderT.over(Maybe)


def _trace(evaluator: str, exp: Exp) -> None:
    if utils.DEBUG_EVAL:
        logger.debug(f"{evaluator}: {exp}")


# ---------------------------------------------------------------------------
# Substitution based
# ---------------------------------------------------------------------------


def eval_exp(exp: Exp) -> Maybe[Exp]:
    """Evaluate ``exp`` to a value expression (``Abs`` or ``Num``)."""

    _trace("eval_exp", exp)
    match exp:
        case Var(name=name):
            logger.debug(f"eval_exp: free variable {name!r} has no value")
            return fail()
        case Abs() | Num():
            return Maybe.pure(exp)
        case App(fun=fun, arg=arg):
            def apply(callee: Exp) -> Maybe[Exp]:
                match callee:
                    case Abs(param=param, body=body):
                        return eval_exp(arg).flat_map(
                            lambda value: eval_exp(subst(param, value, body))
                        )
                return fail()

            return eval_exp(fun).flat_map(apply)
        case Add(pos=pos, left=left, right=right):
            return eval_exp(left).flat_map(
                lambda v1: eval_exp(right).flat_map(lambda v2: _add_nums(pos, v1, v2))
            )
    raise TypeError(f"not an expression: {exp!r}")


def _add_nums(pos: Posn, v1: Exp, v2: Exp) -> Maybe[Exp]:
    match (v1, v2):
        case (Num(value=n1), Num(value=n2)):
            return Maybe.pure(Num(pos, n1 + n2))
    return fail()


@do(Maybe)
def eval_exp_do(exp: Exp) -> DoGenerator[Exp]:
    _trace("eval_exp_do", exp)
    match exp:
        case Var():
            return (yield fail())
        case Abs() | Num():
            return exp
        case App(fun=fun, arg=arg):
            callee = yield eval_exp_do(fun)
            match callee:
                case Abs(param=param, body=body):
                    value = yield eval_exp_do(arg)
                    return (yield eval_exp_do(subst(param, value, body)))
            return (yield fail())
        case Add(pos=pos, left=left, right=right):
            v1 = yield eval_exp_do(left)
            v2 = yield eval_exp_do(right)
            return (yield _add_nums(pos, v1, v2))
    raise TypeError(f"not an expression: {exp!r}")


# ---------------------------------------------------------------------------
# Environment based
# ---------------------------------------------------------------------------


@do(Reader)
def eval_env(exp: Exp) -> DoGenerator[Value]:
    _trace("eval_env", exp)
    match exp:
        case Var(pos=pos, name=name):
            env = yield ask()
            if name in env:
                return env[name]
            raise UnboundVariableError(name, pos)
        case Abs(param=param, body=body):
            env = yield ask()
            return VClo(env, param, body)
        case App(pos=pos, fun=fun, arg=arg):
            callee = yield eval_env(fun)
            match callee:
                case VClo(env=closure_env, param=param, body=body):
                    value = yield eval_env(arg)
                    # the closure's environment, not the caller's
                    return (
                        yield local(
                            lambda _env: extend(closure_env, param, value),
                            eval_env(body),
                        )
                    )
            raise NotAClosureError(callee, pos)
        case Num(value=n):
            return VNum(n)
        case Add(pos=pos, left=left, right=right):
            v1 = yield eval_env(left)
            v2 = yield eval_env(right)
            match (v1, v2):
                case (VNum(value=n1), VNum(value=n2)):
                    return VNum(n1 + n2)
            raise NotANumberError((v1, v2), pos)
    raise TypeError(f"not an expression: {exp!r}")


@do(Eval)
def eval_env_maybe(exp: Exp) -> DoGenerator[Value]:
    _trace("eval_env_maybe", exp)
    match exp:
        case Var(name=name):
            env = yield Eval.ask()
            if name in env:
                return env[name]
            logger.debug(f"eval_env_maybe: unbound variable {name!r} at {exp.pos}")
            return (yield Eval.lift(fail()))
        case Abs(param=param, body=body):
            env = yield Eval.ask()
            return VClo(env, param, body)
        case App(fun=fun, arg=arg):
            callee = yield eval_env_maybe(fun)
            match callee:
                case VClo(env=closure_env, param=param, body=body):
                    value = yield eval_env_maybe(arg)
                    return (
                        yield eval_env_maybe(body).local(
                            lambda _env: extend(closure_env, param, value)
                        )
                    )
            logger.debug(f"eval_env_maybe: applying non-closure {callee!r} at {exp.pos}")
            return (yield Eval.lift(fail()))
        case Num(value=n):
            return VNum(n)
        case Add(left=left, right=right):
            v1 = yield eval_env_maybe(left)
            v2 = yield eval_env_maybe(right)
            match (v1, v2):
                case (VNum(value=n1), VNum(value=n2)):
                    return VNum(n1 + n2)
            logger.debug(f"eval_env_maybe: adding non-numbers at {exp.pos}")
            return (yield Eval.lift(fail()))
    raise TypeError(f"not an expression: {exp!r}")


def run_eval_env(exp: Exp, env: Mapping[str, Value] | None = None) -> Value:
    """Evaluate ``exp`` in ``env``; raises ``EvaluationError`` on failure."""

    value = eval_env(exp).run(as_env(env))
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"eval_env result: {show_value(value)}")
    return value


def run_eval_env_maybe(
    exp: Exp, env: Mapping[str, Value] | None = None
) -> Maybe[Value]:
    """Evaluate ``exp`` in ``env``; ``NOTHING`` on failure."""

    return eval_env_maybe(exp).run(as_env(env))


__all__ = [
    "Eval",
    "eval_exp",
    "eval_exp_do",
    "eval_env",
    "eval_env_maybe",
    "run_eval_env",
    "run_eval_env_maybe",
]
