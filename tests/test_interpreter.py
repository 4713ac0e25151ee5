"""End-to-end tests for the four evaluators."""

import logging

import pytest

from lamdo import (
    NOTHING,
    EvaluationError,
    NotAClosureError,
    NotANumberError,
    Some,
    UnboundVariableError,
    VClo,
    VNum,
    eval_env,
    eval_env_maybe,
    eval_exp,
    eval_exp_do,
    run_eval_env,
    run_eval_env_maybe,
    show,
    subst,
)
from lamdo import utils
from lamdo.syntax import Add, Num, Var
from lamdo.values import EMPTY_ENV, extend

from tests.conftest import add, app, lam, num, var

SUBST_EVALUATORS = [eval_exp, eval_exp_do]


def compose_twice():
    # (\f. \x. f (f x)) (\n. n + 10) 1
    twice = lam("f", lam("x", app(var("f"), app(var("f"), var("x")))))
    return app(app(twice, lam("n", add(var("n"), num(10)))), num(1))


@pytest.mark.parametrize("evaluate", SUBST_EVALUATORS)
class TestSubstitutionEvaluators:
    def test_identity_application(self, evaluate, identity):
        assert evaluate(app(identity, num(5))) == Some(num(5))

    def test_addition_uses_add_position(self, evaluate):
        exp = Add((3, 4), Num((3, 2), 1), Num((3, 6), 2))

        result = evaluate(exp).unwrap()

        assert result == num(3)
        assert show(result) == "Num (3,4) 3"

    def test_values_evaluate_to_themselves(self, evaluate, identity):
        assert evaluate(identity).unwrap() is identity
        n = num(7)
        assert evaluate(n).unwrap() is n

    def test_free_variable_fails(self, evaluate):
        assert evaluate(var("x")) is NOTHING

    def test_applying_a_number_fails(self, evaluate):
        assert evaluate(app(num(1), num(2))) is NOTHING

    def test_adding_a_function_fails(self, evaluate, identity):
        assert evaluate(add(identity, num(2))) is NOTHING

    def test_failure_inside_argument_propagates(self, evaluate, identity):
        assert evaluate(app(identity, add(num(1), var("y")))) is NOTHING

    def test_higher_order(self, evaluate):
        assert evaluate(compose_twice()) == Some(num(21))

    def test_sample_expression(self, evaluate, sample_exp):
        assert evaluate(sample_exp) == Some(num(3))

    def test_substituted_program(self, evaluate, identity):
        exp = subst("x", identity, app(var("x"), add(num(1), num(2))))
        assert evaluate(exp) == Some(num(3))


def test_evaluators_agree(sample_exp, identity):
    cases = [
        sample_exp,
        compose_twice(),
        app(identity, num(5)),
        var("free"),
        app(num(1), num(2)),
    ]
    for exp in cases:
        assert eval_exp(exp) == eval_exp_do(exp)


class TestEvalEnv:
    def test_identity_application(self, identity):
        assert run_eval_env(app(identity, num(5))) == VNum(5)

    def test_addition(self):
        assert run_eval_env(add(num(1), num(2))) == VNum(3)

    def test_abstraction_captures_environment(self):
        env = extend(EMPTY_ENV, "y", VNum(1))

        value = run_eval_env(lam("x", var("y")), env)

        assert value == VClo(env, "x", var("y"))

    def test_lexical_scope(self):
        # (\y. (\f. (\y. f 0) 100) (\x. y)) 1  ==>  1, not 100
        exp = app(
            lam("y", app(lam("f", app(lam("y", app(var("f"), num(0))), num(100))), lam("x", var("y")))),
            num(1),
        )
        assert run_eval_env(exp) == VNum(1)

    def test_caller_environment_is_untouched(self):
        env = {"a": VNum(1)}
        run_eval_env(app(lam("a", var("a")), num(2)), env)
        assert env == {"a": VNum(1)}

    def test_initial_environment(self):
        assert run_eval_env(add(var("a"), num(1)), {"a": VNum(41)}) == VNum(42)

    def test_higher_order(self, sample_exp):
        assert run_eval_env(compose_twice()) == VNum(21)
        assert run_eval_env(sample_exp) == VNum(3)

    def test_unbound_variable_is_fatal(self):
        with pytest.raises(UnboundVariableError) as exc_info:
            run_eval_env(Var((7, 3), "unbound"))

        assert exc_info.value.name == "unbound"
        assert exc_info.value.pos == (7, 3)
        assert "7:3" in str(exc_info.value)

    def test_applying_a_number_is_fatal(self):
        with pytest.raises(NotAClosureError) as exc_info:
            run_eval_env(app(num(1), num(2)))

        assert exc_info.value.value == VNum(1)

    def test_adding_a_closure_is_fatal(self, identity):
        with pytest.raises(NotANumberError):
            run_eval_env(add(identity, num(1)))

    def test_errors_are_raised_on_run(self):
        program = eval_env(var("unbound"))
        with pytest.raises(EvaluationError):
            program.run(EMPTY_ENV)
        assert program.run(extend(EMPTY_ENV, "unbound", VNum(0))) == VNum(0)


class TestEvalEnvMaybe:
    def test_identity_application(self, identity):
        assert run_eval_env_maybe(app(identity, num(5))) == Some(VNum(5))

    def test_addition(self):
        assert run_eval_env_maybe(add(num(1), num(2))) == Some(VNum(3))

    def test_unbound_variable_is_absent(self):
        assert run_eval_env_maybe(var("unbound")) is NOTHING
        assert eval_env_maybe(var("unbound")).run(EMPTY_ENV) is NOTHING

    def test_type_mismatches_are_absent(self, identity):
        assert run_eval_env_maybe(app(num(1), num(2))) is NOTHING
        assert run_eval_env_maybe(add(identity, num(1))) is NOTHING

    def test_failure_inside_body_propagates(self, identity):
        exp = app(lam("x", add(var("x"), var("nope"))), num(1))
        assert run_eval_env_maybe(exp) is NOTHING

    def test_agrees_with_eval_env_on_success(self, sample_exp):
        for exp in (sample_exp, compose_twice(), add(num(4), num(5))):
            assert run_eval_env_maybe(exp) == Some(run_eval_env(exp))

    def test_lexical_scope(self):
        exp = app(
            lam("y", app(lam("f", app(lam("y", app(var("f"), num(0))), num(100))), lam("x", var("y")))),
            num(1),
        )
        assert run_eval_env_maybe(exp) == Some(VNum(1))

    def test_initial_environment(self):
        assert run_eval_env_maybe(var("a"), {"a": VNum(1)}) == Some(VNum(1))


class TestLogging:
    def test_failure_is_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="lamdo.interpreter"):
            run_eval_env_maybe(Var((2, 5), "ghost"))

        assert "unbound variable 'ghost'" in caplog.text

    def test_step_tracing_follows_debug_flag(self, caplog, monkeypatch):
        monkeypatch.setattr(utils, "DEBUG_EVAL", True)
        with caplog.at_level(logging.DEBUG, logger="lamdo.interpreter"):
            eval_exp(add(num(1), num(2)))

        assert 'eval_exp: Add (0,0) (Num (0,0) 1) (Num (0,0) 2)' in caplog.text

    def test_no_step_tracing_by_default(self, caplog, monkeypatch):
        monkeypatch.setattr(utils, "DEBUG_EVAL", False)
        with caplog.at_level(logging.DEBUG, logger="lamdo.interpreter"):
            eval_exp(add(num(1), num(2)))

        assert "eval_exp: Add" not in caplog.text

    def test_result_rendered_only_when_debug_enabled(self, caplog, monkeypatch):
        rendered = []
        monkeypatch.setattr(
            "lamdo.interpreter.show_value", lambda value: rendered.append(value) or "v"
        )

        with caplog.at_level(logging.INFO, logger="lamdo.interpreter"):
            assert run_eval_env(num(1)) == VNum(1)
        assert rendered == []

        with caplog.at_level(logging.DEBUG, logger="lamdo.interpreter"):
            run_eval_env(num(2))
        assert rendered == [VNum(2)]
        assert "eval_env result: v" in caplog.text
