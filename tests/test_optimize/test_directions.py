import numpy as np
import pytest

from gradopt.optimize import CountedFunction, LineSearchConfig, choose_step_size
from gradopt.optimize.directions import (
    ConjugateGradientState,
    conjugate_gradient_direction,
    conjugate_gradient_iterates,
    fletcher_reeves_beta,
    initial_conjugate_gradient_state,
    next_conjugate_gradient_state,
    steepest_descent_direction,
    steepest_descent_iterates,
)


def exact_line_search(f, df, x, p):
    return choose_step_size(f, df, x, p, LineSearchConfig.EXACT)


def test_steepest_descent_direction_is_negative_gradient():
    grad = np.array([1.0, -2.0])
    assert np.array_equal(steepest_descent_direction(grad), np.array([-1.0, 2.0]))


def test_fletcher_reeves_update():
    g_prev = np.array([2.0, 0.0])
    g_new = np.array([1.0, 0.0])
    p_prev = np.array([-2.0, 0.0])
    assert fletcher_reeves_beta(g_new, g_prev) == pytest.approx(0.25)
    p_new = conjugate_gradient_direction(g_new, g_prev, p_prev)
    assert np.allclose(p_new, np.array([-1.5, 0.0]))


def test_zero_previous_gradient_is_not_a_division_fault():
    zero = np.zeros(2)
    assert fletcher_reeves_beta(np.ones(2), zero) is None
    assert conjugate_gradient_direction(np.ones(2), zero, zero) is None
    state = ConjugateGradientState(np.zeros(2), zero, zero)
    assert next_conjugate_gradient_state(state, np.ones(2), np.ones(2)) is None


def test_initial_cg_state_uses_steepest_descent():
    state = initial_conjugate_gradient_state(lambda x: 2 * x, np.array([1.0, 3.0]))
    assert np.array_equal(state.grad, np.array([2.0, 6.0]))
    assert np.array_equal(state.direction, -state.grad)


@pytest.mark.parametrize("iterates", [steepest_descent_iterates, conjugate_gradient_iterates])
def test_sequences_are_lazy(iterates):
    f = CountedFunction(lambda x: float(x @ x))
    df = CountedFunction(lambda x: 2 * x)
    seq = iterates(f, df, np.array([1.0, 2.0]), exact_line_search)
    assert f.num_calls == 0 and df.num_calls == 0
    first = next(seq)
    assert np.array_equal(first.x, np.array([1.0, 2.0]))
    assert first.grad_norm == pytest.approx(2 * np.sqrt(5.0))
    # Only the gradient at the starting point has been computed.
    assert f.num_calls == 0
    assert df.num_calls == 1


@pytest.mark.parametrize("iterates", [steepest_descent_iterates, conjugate_gradient_iterates])
def test_sequence_ends_after_failed_line_search(iterates):
    seq = iterates(lambda x: 0.0, lambda x: np.ones_like(x), np.array([1.0]), lambda *a: None)
    records = list(seq)
    assert len(records) == 1
    assert records[0].grad_norm == 1.0


def test_records_do_not_alias_internal_state():
    seq = steepest_descent_iterates(
        lambda x: float(x @ x), lambda x: 2 * x, np.array([4.0, -1.0]), exact_line_search
    )
    first = next(seq)
    first.x[0] = 99.0
    second = next(seq)
    assert np.allclose(second.x, 0.0)


def test_cg_directions_are_conjugate_on_quadratic():
    A = np.array([[3.0, 1.0], [1.0, 2.0]])
    b = np.array([1.0, 1.0])
    f = lambda x: float(0.5 * x @ A @ x - b @ x)
    df = lambda x: A @ x - b
    state = initial_conjugate_gradient_state(df, np.zeros(2))
    alpha = exact_line_search(f, df, state.x, state.direction)
    x_new = state.x + alpha * state.direction
    nxt = next_conjugate_gradient_state(state, x_new, df(x_new))
    assert abs(nxt.direction @ A @ state.direction) < 1e-10
