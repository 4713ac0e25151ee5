"""
lamdo - a lambda-calculus interpreter built from effect abstractions.

The evaluators are written against small composable monads (Maybe, Reader,
State and transformer stacks of them) instead of hand-written control flow.
Generators give do-notation for any of them.

Example:
    >>> from lamdo import App, Abs, Num, Var, NO_POS, run_eval_env_maybe
    >>>
    >>> identity = Abs(NO_POS, "z", Var(NO_POS, "z"))
    >>> run_eval_env_maybe(App(NO_POS, identity, Num(NO_POS, 5)))
    Some(value=VNum(value=5))
"""

from lamdo.monad import Monad
from lamdo.maybe import NOTHING, Maybe, Nothing, Some, fail
from lamdo.reader import Reader, ask, asks, local, run_reader
from lamdo.state import (
    State,
    eval_state,
    exec_state,
    get,
    gets,
    modify,
    put,
    run_state,
)
from lamdo.transformers import Identity, MaybeT, ReaderT, StateT
from lamdo.combinators import fmap, fmap2, for_each, replicate, sequence, traverse
from lamdo.do import DoGenerator, do
from lamdo.syntax import (
    NO_POS,
    Abs,
    Add,
    App,
    Exp,
    Num,
    Posn,
    Var,
    free_vars,
    show,
    subst,
    subst_capture_avoiding,
    subst_reader,
    subst_via_reader,
)
from lamdo.values import EMPTY_ENV, Env, Value, VClo, VNum, extend, show_value
from lamdo.errors import (
    EvaluationError,
    NotAClosureError,
    NotANumberError,
    UnboundVariableError,
)
from lamdo.interpreter import (
    Eval,
    eval_env,
    eval_env_maybe,
    eval_exp,
    eval_exp_do,
    run_eval_env,
    run_eval_env_maybe,
)
from lamdo.accumulators import (
    compute_fib,
    compute_fib_for,
    count_up,
    fib_for,
    fib_n_for,
    fib_state,
)

__version__ = "0.1.0"

__all__ = [
    # Effects
    "Monad",
    "Maybe",
    "Some",
    "Nothing",
    "NOTHING",
    "fail",
    "Reader",
    "ask",
    "asks",
    "local",
    "run_reader",
    "State",
    "get",
    "gets",
    "put",
    "modify",
    "run_state",
    "eval_state",
    "exec_state",
    # Transformers
    "Identity",
    "ReaderT",
    "StateT",
    "MaybeT",
    # Combinators
    "fmap",
    "fmap2",
    "sequence",
    "traverse",
    "for_each",
    "replicate",
    "do",
    "DoGenerator",
    # Syntax
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
    # Values
    "Value",
    "VClo",
    "VNum",
    "Env",
    "EMPTY_ENV",
    "extend",
    "show_value",
    # Errors
    "EvaluationError",
    "UnboundVariableError",
    "NotAClosureError",
    "NotANumberError",
    # Evaluators
    "Eval",
    "eval_exp",
    "eval_exp_do",
    "eval_env",
    "eval_env_maybe",
    "run_eval_env",
    "run_eval_env_maybe",
    # State examples
    "count_up",
    "fib_state",
    "compute_fib",
    "fib_for",
    "compute_fib_for",
    "fib_n_for",
]
