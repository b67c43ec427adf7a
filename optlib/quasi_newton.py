"""Limited-memory BFGS following Nocedal & Wright, Section 7.2."""

from __future__ import annotations

from typing import Optional

import numpy as np

from .config import LBFGSConfig, get_line_search
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
from .history import CurvatureHistory
from .logging import get_logger

logger = get_logger(__name__)


def _finite(fx: float, grad: Array) -> bool:
    return bool(np.isfinite(fx) and np.all(np.isfinite(grad)))


class LBFGS:
    """L-BFGS with a sliding window of ``m`` correction pairs.

    Each outer iteration applies the implicit inverse Hessian to the gradient
    with the two-loop recursion and steps along the negated result. When that
    product is not a descent direction the solver restarts: the history is
    dropped and the step falls back to steepest descent, with the first trial
    step capped at ``1 / ||grad||_inf``. Restarts share the ``max_iters``
    budget with regular iterations.

    Terminal states are reported through :class:`~optlib.core.Status`:

    - ``CONVERGED``: ``rate * ||q||^2 <= eps`` or ``||grad||_inf <= eps``.
    - ``CURVATURE_BREAKDOWN``: the gradient did not change over a step
      (``y . y <= 0``); the history is left untouched.
    - ``LINE_SEARCH_FAILED``: no step passed the sufficient-decrease test;
      ``x`` keeps the last accepted iterate.
    - ``NUMERICAL_ERROR``: the objective produced a non-finite value or
      gradient.
    - ``MAX_ITER``: the budget ran out.
    """

    def __init__(self, config: Optional[LBFGSConfig] = None):
        self.config = config or LBFGSConfig()

    def minimize(self, objective: Objective, x: Array, history: bool = False) -> OptimizeResult:
        """Minimize ``objective`` starting from ``x``, updating ``x`` in place.

        ``OptimizeResult.nit`` counts outer iterations, restarts included.
        """
        cfg = self.config
        x = as_point(x, objective_dim(objective))
        counted = CountingObjective(objective)
        line_search = get_line_search(cfg.line_search)
        pairs = CurvatureHistory(cfg.m, x.size)

        grad = np.zeros_like(x)
        fx = counted.gradient(x, grad)
        hist: list[Array] = [x.copy()] if history else []
        gamma = cfg.init_hess
        nit = 0
        restarts = 0
        status: Optional[Status] = None if _finite(fx, grad) else Status.NUMERICAL_ERROR

        while status is None:
            if nit >= cfg.max_iters:
                status = Status.MAX_ITER
                break
            nit += 1
            x_old = x.copy()
            grad_old = grad.copy()

            q = pairs.apply_inverse_hessian(grad, gamma)
            alpha_init = 1.0
            if float(np.dot(q, grad)) <= cfg.eps:
                # restart from steepest descent with a fresh history
                q = grad.copy()
                pairs.clear()
                restarts += 1
                grad_norm = inf_norm(grad)
                if grad_norm > 0:
                    alpha_init = min(1.0, 1.0 / grad_norm)
                logger.debug("iter %d: not a descent direction, restarting", nit)

            ls = line_search(
                counted, x, -q, alpha0=alpha_init, decrease=cfg.decrease, max_iters=cfg.ls_max_iters
            )
            if not ls.success:
                status = Status.LINE_SEARCH_FAILED
                break
            rate = ls.alpha
            x -= rate * q
            fx = ls.fun
            if history:
                hist.append(x.copy())
            if rate * float(np.dot(q, q)) <= cfg.eps:
                fx = counted.gradient(x, grad)
                status = Status.CONVERGED
                break

            fx = counted.gradient(x, grad)
            if not _finite(fx, grad):
                status = Status.NUMERICAL_ERROR
                break
            grad_norm = inf_norm(grad)
            logger.debug("iter %d: f=%.6e |g|=%.3e rate=%.3e", nit, fx, grad_norm, rate)
            if check_convergence(grad_norm, cfg.eps):
                status = Status.CONVERGED
                break

            s = x - x_old
            y = grad - grad_old
            yy = float(np.dot(y, y))
            if yy <= 0:
                status = Status.CURVATURE_BREAKDOWN
                break
            pairs.push(s, y)
            gamma = float(np.dot(s, y)) / yy

        logger.info(
            "L-BFGS stopped after %d iterations (%d restarts): %s", nit, restarts, status.value
        )
        return OptimizeResult(
            x=x,
            fun=float(fx),
            nit=nit,
            status=status,
            message=MESSAGES[status],
            grad_norm=inf_norm(grad),
            nfev=counted.nfev,
            njev=counted.njev,
            restarts=restarts,
            history=hist,
        )


def lbfgs(objective: Objective, x0: Array, history: bool = False, **options) -> OptimizeResult:
    """Run :class:`LBFGS` on a copy of ``x0``.

    Keyword options are forwarded to :class:`LBFGSConfig`.
    """
    x = np.asarray(x0, dtype=float).copy()
    return LBFGS(LBFGSConfig(**options)).minimize(objective, x, history)


__all__ = ["LBFGS", "lbfgs"]
