"""Utility helpers for finite differences and step interpolation.

These utilities are pure NumPy and make no assumption about the objective
beyond the ``value``/``gradient`` contract.
"""

from __future__ import annotations

import math
from typing import Callable

import numpy as np

Array = np.ndarray


def approx_grad(
    fun: Callable[[Array], float], x: Array, eps: float = 1e-6, return_evals: bool = False
) -> Array | tuple[Array, int]:
    """Compute a central-difference gradient approximation.

    Parameters
    ----------
    fun:
        Objective function returning a scalar given x.
    x:
        Point where the gradient is approximated.
    eps:
        Perturbation size for finite differences.
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float).copy()
    grad = np.zeros_like(x, dtype=float)
    evals = 0
    for i in range(x.size):
        ei = np.zeros_like(x)
        ei[i] = eps
        fx_plus = fun(x + ei)
        fx_minus = fun(x - ei)
        evals += 2
        grad[i] = (fx_plus - fx_minus) / (2.0 * eps)
    if return_evals:
        return grad, evals
    return grad


def check_gradient(objective, x: Array, eps: float = 1e-6) -> float:
    """Return the largest deviation between analytic and numerical gradients.

    The analytic gradient comes from ``objective.gradient``; the numerical one
    from central differences of ``objective.value``.
    """
    x = np.asarray(x, dtype=float)
    analytic = np.zeros_like(x)
    objective.gradient(x, analytic)
    numeric = approx_grad(objective.value, x, eps=eps)
    return float(np.max(np.abs(analytic - numeric))) if x.size else 0.0


def clamp(alpha: float, low: float, high: float) -> float:
    """Clamp ``alpha`` into ``[low, high]``; non-finite input maps to ``high``."""
    if not math.isfinite(alpha):
        return high
    return min(max(alpha, low), high)


def quadratic_step(fx0: float, gtp: float, fxa: float, alpha: float = 1.0) -> float:
    """Minimizer of the quadratic matching ``f(0)``, ``f'(0)`` and ``f(alpha)``.

    Returns NaN when the model is degenerate.
    """
    denom = 2.0 * (fxa - fx0 - gtp * alpha)
    if denom == 0.0:
        return math.nan
    return -gtp * alpha * alpha / denom


def cubic_step(fx0: float, gtp: float, fxa: float, alpha: float, fxp: float, alphap: float) -> float:
    """Minimizer of the cubic through two trial steps with slope ``gtp`` at zero.

    Parameters
    ----------
    fx0:
        Objective value at the origin of the search.
    gtp:
        Directional derivative at the origin.
    fxa, alpha:
        Value and length of the latest trial step.
    fxp, alphap:
        Value and length of the trial before it.

    Returns NaN when the model has no real minimizer.
    """
    if alpha == alphap or alpha == 0.0 or alphap == 0.0:
        return math.nan
    mult = 1.0 / (alpha * alpha * alphap * alphap * (alpha - alphap))
    lhs = np.array(
        [
            [alphap * alphap, -alpha * alpha],
            [-alphap * alphap * alphap, alpha * alpha * alpha],
        ]
    )
    rhs = np.array([fxa - fx0 - alpha * gtp, fxp - fx0 - alphap * gtp])
    r0, r1 = mult * (lhs @ rhs)
    if abs(r0) <= np.finfo(float).eps * abs(r1):
        # leading coefficient vanishes, fall back to the quadratic minimizer
        if r1 == 0.0:
            return math.nan
        return -gtp / (2.0 * r1)
    discriminant = r1 * r1 - 3.0 * r0 * gtp
    if discriminant < 0.0:
        return math.nan
    return float((-r1 + math.sqrt(discriminant)) / (3.0 * r0))


__all__ = [
    "Array",
    "approx_grad",
    "check_gradient",
    "clamp",
    "cubic_step",
    "quadratic_step",
]
