"""Tests for the State monad examples."""

import pytest

from lamdo import compute_fib, compute_fib_for, count_up, eval_state, fib_n_for
from lamdo.accumulators import FIB_START, fib_for, fib_state, increment
from lamdo.state import exec_state, run_state

FIBS = [0, 1, 1, 2, 3, 5, 8, 13, 21, 34, 55]


@pytest.mark.parametrize("n", [0, 1, 2, 7, 40])
def test_count_up(n):
    assert eval_state(count_up(n), 0) == n


def test_count_up_starts_from_given_state():
    assert run_state(count_up(3), 10) == (13, 13)


def test_increment():
    assert run_state(increment(), 4) == (5, None)


@pytest.mark.parametrize("n", range(len(FIBS)))
def test_fibonacci_variants(n):
    assert compute_fib(n) == FIBS[n]
    assert compute_fib_for(n) == FIBS[n]
    assert fib_n_for(n) == FIBS[n]


def test_fib_of_nine():
    assert compute_fib(9) == 34
    assert compute_fib_for(9) == 34
    assert fib_n_for(9) == 34


def test_fib_programs_leave_pair_state():
    assert exec_state(fib_state(9), FIB_START) == (34, 21)
    assert exec_state(fib_for(9), FIB_START) == (34, 21)


def test_state_programs_are_rerunnable():
    program = fib_state(5)
    assert exec_state(program, FIB_START) == exec_state(program, FIB_START) == (5, 3)


def plain_fib(n):
    current, previous = FIB_START
    for _ in range(n):
        current, previous = current + previous, current
    return current


class TestLargeCounts:
    def test_count_up_thousands_of_steps(self):
        program = count_up(5000)

        assert eval_state(program, 0) == 5000
        assert run_state(program, 1) == (5001, 5001)

    @pytest.mark.parametrize("n", [1000, 3000])
    def test_fibonacci_variants(self, n):
        expected = plain_fib(n)

        assert compute_fib(n) == expected
        assert compute_fib_for(n) == expected
        assert fib_n_for(n) == expected
