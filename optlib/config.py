"""Solver configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .line_search import LineSearch, backtracking, backtracking_curvature

LINE_SEARCHES: dict[str, LineSearch] = {
    "backtracking": backtracking,
    "backtracking_curvature": backtracking_curvature,
}


def get_line_search(name: str) -> LineSearch:
    """Return the line search registered under ``name``.

    Raises:
        ValueError: If no line search is registered under that name.
    """
    try:
        return LINE_SEARCHES[name.lower()]
    except KeyError:
        supported = sorted(LINE_SEARCHES)
        raise ValueError(
            f"Unsupported line search '{name}'. Supported names: {supported}"
        ) from None


def _validate_common(
    max_iters: int, eps: float, line_search: str, decrease: float, ls_max_iters: int
) -> None:
    if max_iters < 0:
        raise ValueError("max_iters must be non-negative.")
    if eps < 0:
        raise ValueError("eps must be non-negative.")
    if not (0 < decrease < 1):
        raise ValueError("decrease must lie in (0, 1).")
    if ls_max_iters < 1:
        raise ValueError("ls_max_iters must be at least 1.")
    get_line_search(line_search)


@dataclass(frozen=True)
class ConjugateGradientConfig:
    """
    Configuration of the nonlinear conjugate gradient solver.

    Args:
        max_iters: Hard cap on outer iterations.
        eps: Tolerance on the gradient infinity-norm; 0 runs every iteration.
        line_search: Name of the step-length procedure.
        decrease: Armijo sufficient-decrease constant.
        ls_max_iters: Trial cap of each line search.
    """

    max_iters: int = 100
    eps: float = 0.0
    line_search: str = "backtracking"
    decrease: float = 1e-4
    ls_max_iters: int = 100

    def __post_init__(self) -> None:
        _validate_common(
            self.max_iters, self.eps, self.line_search, self.decrease, self.ls_max_iters
        )


@dataclass(frozen=True)
class LBFGSConfig:
    """
    Configuration of the L-BFGS solver.

    Args:
        max_iters: Hard cap on outer iterations, restarts included.
        eps: Tolerance on the gradient infinity-norm and on the step
            contribution ``rate * ||q||^2``; 0 runs every iteration.
        init_hess: Initial inverse-Hessian scale.
        m: History width, the number of correction pairs kept.
        line_search: Name of the step-length procedure.
        decrease: Armijo sufficient-decrease constant.
        ls_max_iters: Trial cap of each line search.
    """

    max_iters: int = 30
    eps: float = 0.0
    init_hess: float = 1.0
    m: int = 8
    line_search: str = "backtracking"
    decrease: float = 1e-4
    ls_max_iters: int = 100

    def __post_init__(self) -> None:
        _validate_common(
            self.max_iters, self.eps, self.line_search, self.decrease, self.ls_max_iters
        )
        if self.m <= 0:
            raise ValueError("History width m must be positive.")
        if self.init_hess <= 0:
            raise ValueError("init_hess must be positive.")


__all__ = [
    "ConjugateGradientConfig",
    "LBFGSConfig",
    "LINE_SEARCHES",
    "get_line_search",
]
