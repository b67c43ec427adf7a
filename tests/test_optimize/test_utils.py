import math

import numpy as np
import pytest

from optlib.core import Problem
from optlib.utils import approx_grad, check_gradient, clamp, cubic_step, quadratic_step


def test_approx_grad_matches_linear_function():
    def fun(x: np.ndarray) -> float:
        return float(3 * x[0] - 2 * x[1])

    grad = approx_grad(fun, np.array([0.2, -0.1]))
    assert np.allclose(grad, np.array([3.0, -2.0]), atol=1e-6)


def test_approx_grad_reports_evaluations():
    grad, evals = approx_grad(lambda x: float(x @ x), np.ones(3), return_evals=True)
    assert evals == 6
    assert np.allclose(grad, 2 * np.ones(3), atol=1e-6)


def test_approx_grad_invalid_eps():
    with pytest.raises(ValueError):
        approx_grad(lambda x: float(x[0]), np.array([0.0]), eps=0.0)


def test_check_gradient_flags_wrong_gradient():
    good = Problem(fun=lambda x: float(x @ x), grad=lambda x: 2 * x)
    bad = Problem(fun=lambda x: float(x @ x), grad=lambda x: 3 * x)
    x = np.array([1.0, -0.5])
    assert check_gradient(good, x) < 1e-6
    assert check_gradient(bad, x) == pytest.approx(1.0, abs=1e-6)


def test_clamp():
    assert clamp(0.3, 0.1, 0.5) == 0.3
    assert clamp(0.01, 0.1, 0.5) == 0.1
    assert clamp(2.0, 0.1, 0.5) == 0.5
    assert clamp(math.nan, 0.1, 0.5) == 0.5
    assert clamp(-math.inf, 0.1, 0.5) == 0.5


def test_quadratic_step_recovers_parabola_minimizer():
    # f(a) = 1 - 2a + 3a^2, minimized at a = 1/3
    assert quadratic_step(1.0, -2.0, 2.0) == pytest.approx(1.0 / 3.0)
    # same parabola sampled at a = 2
    assert quadratic_step(1.0, -2.0, 9.0, alpha=2.0) == pytest.approx(1.0 / 3.0)


def test_quadratic_step_degenerate_model():
    # f(0) + f'(0) == f(1): the fitted parabola has no curvature
    assert math.isnan(quadratic_step(1.0, -1.0, 0.0))


def test_cubic_step_recovers_cubic_minimizer():
    # f(a) = 1 - 2a + 0.5a^2 + a^3, f'(a) = 0 at a = 2/3
    def f(a: float) -> float:
        return 1 - 2 * a + 0.5 * a**2 + a**3

    step = cubic_step(f(0.0), -2.0, f(1.0), 1.0, f(0.5), 0.5)
    assert step == pytest.approx(2.0 / 3.0)


def test_cubic_step_falls_back_to_quadratic():
    # exact parabola: the cubic coefficient vanishes
    def f(a: float) -> float:
        return 1 - 2 * a + 3 * a**2

    step = cubic_step(f(0.0), -2.0, f(1.0), 1.0, f(0.5), 0.5)
    assert step == pytest.approx(1.0 / 3.0)


def test_cubic_step_without_real_minimizer():
    # f(a) = 1 + a + a^3 is increasing everywhere
    def f(a: float) -> float:
        return 1 + a + a**3

    assert math.isnan(cubic_step(f(0.0), 1.0, f(1.0), 1.0, f(0.5), 0.5))


def test_cubic_step_coincident_trials():
    assert math.isnan(cubic_step(1.0, -1.0, 0.5, 0.5, 0.5, 0.5))
