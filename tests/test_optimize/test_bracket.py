import math

import pytest

from gradopt.optimize.bracket import BracketInterval, bracket_minimum


def _assert_certified(phi, bracket, values):
    f_lower, f_mid, f_upper = values
    assert bracket.lower <= bracket.mid <= bracket.upper
    assert BracketInterval.is_certified(f_lower, f_mid, f_upper)
    assert f_mid == phi(bracket.mid)


@pytest.mark.parametrize("center", [0.1, 0.5, 3.0, 40.0])
@pytest.mark.parametrize("initial_step", [0.01, 1.0, 7.0])
def test_bracket_invariant_on_shifted_quadratics(center, initial_step):
    def phi(a):
        return (a - center) ** 2

    found = bracket_minimum(phi, phi(0.0), initial_step=initial_step)
    assert found is not None
    bracket, values = found
    _assert_certified(phi, bracket, values)
    assert bracket.contains(center)


def test_symmetric_tie_is_split():
    bracket, values = bracket_minimum(lambda a: (a - 3.0) ** 2, 9.0)
    assert bracket == BracketInterval(2.0, 3.0, 4.0)
    assert values == (1.0, 0.0, 1.0)


def test_overshoot_shrinks_toward_zero():
    bracket, _ = bracket_minimum(lambda a: (a - 0.1) ** 2, 0.01)
    assert bracket == BracketInterval(0.0, 0.125, 0.25)


def test_unbounded_line_returns_none():
    assert bracket_minimum(lambda a: -a, 0.0) is None


def test_flat_line_returns_none():
    assert bracket_minimum(lambda a: 0.0, 0.0) is None


def test_non_finite_values_close_the_bracket():
    def phi(a):
        return (a - 1.0) ** 2 if a < 1.5 else math.nan

    bracket, values = bracket_minimum(phi, 1.0)
    assert bracket == BracketInterval(0.0, 1.0, 2.0)
    assert values[2] == math.inf


def test_invalid_initial_step():
    with pytest.raises(ValueError):
        bracket_minimum(lambda a: a * a, 0.0, initial_step=0.0)


def test_interval_ordering_enforced():
    with pytest.raises(ValueError):
        BracketInterval(1.0, 0.0, 2.0)


def test_contains_and_size():
    bracket = BracketInterval(0.5, 1.0, 2.0)
    assert bracket.size == 1.5
    assert bracket.contains(0.5)
    assert bracket.contains(2.0)
    assert not bracket.contains(2.5)


def test_brackets_are_returned_only_when_certified(monkeypatch):
    monkeypatch.setattr(BracketInterval, "is_certified", staticmethod(lambda *values: False))
    assert bracket_minimum(lambda a: (a - 3.0) ** 2, 9.0) is None
    assert bracket_minimum(lambda a: (a - 0.1) ** 2, 0.01) is None
