"""Unconstrained continuous optimization: line searches, nonlinear CG and L-BFGS.

Example
-------
>>> import numpy as np
>>> from optlib import Problem, lbfgs
>>> def rosen(x):
...     return (1 - x[0])**2 + 100 * (x[1] - x[0]**2)**2
>>> def rosen_grad(x):
...     return np.array([
...         -2 * (1 - x[0]) - 400 * x[0] * (x[1] - x[0] ** 2),
...         200 * (x[1] - x[0] ** 2),
...     ])
>>> problem = Problem(fun=rosen, grad=rosen_grad, dim=2)
>>> res = lbfgs(problem, np.array([-1.2, 1.0]), max_iters=1000)
>>> bool(np.allclose(res.x, [1.0, 1.0], atol=1e-4))
True
"""

__version__ = "0.1.0"

from .config import ConjugateGradientConfig, LBFGSConfig, LINE_SEARCHES, get_line_search
from .conjugate_gradient import ConjugateGradient, conjugate_gradient
from .core import (
    CountingObjective,
    Objective,
    OptimizeResult,
    Problem,
    Status,
    as_point,
    check_convergence,
    inf_norm,
)
from .history import CurvatureHistory
from .line_search import (
    FAILED_STEP,
    LineSearchResult,
    backtracking,
    backtracking_curvature,
)
from .logging import configure_logging, get_logger, set_log_level
from .quasi_newton import LBFGS, lbfgs
from .utils import approx_grad, check_gradient

__all__ = [
    "ConjugateGradient",
    "ConjugateGradientConfig",
    "CountingObjective",
    "CurvatureHistory",
    "FAILED_STEP",
    "LBFGS",
    "LBFGSConfig",
    "LINE_SEARCHES",
    "LineSearchResult",
    "Objective",
    "OptimizeResult",
    "Problem",
    "Status",
    "approx_grad",
    "as_point",
    "backtracking",
    "backtracking_curvature",
    "check_convergence",
    "check_gradient",
    "configure_logging",
    "conjugate_gradient",
    "get_line_search",
    "get_logger",
    "inf_norm",
    "lbfgs",
    "set_log_level",
]
