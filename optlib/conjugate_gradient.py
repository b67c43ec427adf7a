"""Nonlinear conjugate gradient (Fletcher-Reeves) with a backtracking line search."""

from __future__ import annotations

from typing import Optional

import numpy as np

from .config import ConjugateGradientConfig, get_line_search
from .core import (
    MESSAGES,
    Array,
    CountingObjective,
    Objective,
    OptimizeResult,
    Status,
    as_point,
    check_convergence,
    inf_norm,
    objective_dim,
)
from .logging import get_logger

logger = get_logger(__name__)


class ConjugateGradient:
    """Fletcher-Reeves conjugate gradient.

    The first direction is steepest descent; later ones add
    ``beta = (g . g) / (g_old . g_old)`` times the previous direction. Every
    step starts the line search from ``alpha0 = 1``.
    """

    def __init__(self, config: Optional[ConjugateGradientConfig] = None):
        self.config = config or ConjugateGradientConfig()

    def minimize(self, objective: Objective, x: Array, history: bool = False) -> OptimizeResult:
        """Minimize ``objective`` starting from ``x``, updating ``x`` in place."""
        cfg = self.config
        x = as_point(x, objective_dim(objective))
        counted = CountingObjective(objective)
        line_search = get_line_search(cfg.line_search)

        grad = np.zeros_like(x)
        grad_old = np.zeros_like(x)
        p = np.zeros_like(x)
        hist: list[Array] = [x.copy()] if history else []
        fx = float("nan")
        grad_norm = float("inf")
        nit = 0
        status = Status.MAX_ITER

        while nit < cfg.max_iters:
            nit += 1
            fx = counted.gradient(x, grad)
            if not (np.isfinite(fx) and np.all(np.isfinite(grad))):
                status = Status.NUMERICAL_ERROR
                break
            grad_norm = inf_norm(grad)
            if check_convergence(grad_norm, cfg.eps):
                status = Status.CONVERGED
                break

            if nit == 1:
                p = -grad
            else:
                beta = float(np.dot(grad, grad)) / float(np.dot(grad_old, grad_old))
                p = -grad + beta * p

            ls = line_search(
                counted, x, p, alpha0=1.0, decrease=cfg.decrease, max_iters=cfg.ls_max_iters
            )
            if not ls.success:
                status = Status.LINE_SEARCH_FAILED
                break
            x += ls.alpha * p
            fx = ls.fun
            grad_old[...] = grad
            if history:
                hist.append(x.copy())
            logger.debug("iter %d: f=%.6e |g|=%.3e alpha=%.3e", nit, fx, grad_norm, ls.alpha)
        else:
            # budget spent: report the gradient at the final point
            fx = counted.gradient(x, grad)
            grad_norm = inf_norm(grad)
            if check_convergence(grad_norm, cfg.eps):
                status = Status.CONVERGED

        logger.info("conjugate gradient stopped after %d iterations: %s", nit, status.value)
        return OptimizeResult(
            x=x,
            fun=float(fx),
            nit=nit,
            status=status,
            message=MESSAGES[status],
            grad_norm=grad_norm,
            nfev=counted.nfev,
            njev=counted.njev,
            history=hist,
        )


def conjugate_gradient(
    objective: Objective, x0: Array, history: bool = False, **options
) -> OptimizeResult:
    """Run :class:`ConjugateGradient` on a copy of ``x0``.

    Keyword options are forwarded to :class:`ConjugateGradientConfig`.
    """
    x = np.asarray(x0, dtype=float).copy()
    return ConjugateGradient(ConjugateGradientConfig(**options)).minimize(objective, x, history)


__all__ = ["ConjugateGradient", "conjugate_gradient"]
