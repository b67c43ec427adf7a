"""Fixed-capacity storage of L-BFGS correction pairs."""

from __future__ import annotations

from typing import Iterator

import numpy as np

Array = np.ndarray


class CurvatureHistory:
    """Ring buffer holding the ``m`` most recent ``(s, y)`` pairs.

    Pairs live in preallocated ``(m, dim)`` arrays. Once the buffer is full
    the oldest slot is overwritten, so eviction never moves stored vectors.
    ``rho = 1 / (s . y)`` is cached per slot; it is zero for pairs with
    ``s . y == 0``, which then drop out of the two-loop recursion.
    """

    def __init__(self, m: int, dim: int):
        if m <= 0:
            raise ValueError("History width m must be positive.")
        self.m = m
        self.dim = dim
        self._s = np.zeros((m, dim))
        self._y = np.zeros((m, dim))
        self._rho = np.zeros(m)
        self._start = 0
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def clear(self) -> None:
        self._start = 0
        self._size = 0

    def push(self, s: Array, y: Array) -> None:
        """Append a pair, evicting the oldest one when full."""
        if self._size < self.m:
            slot = (self._start + self._size) % self.m
            self._size += 1
        else:
            slot = self._start
            self._start = (self._start + 1) % self.m
        self._s[slot] = s
        self._y[slot] = y
        sy = float(np.dot(s, y))
        self._rho[slot] = 1.0 / sy if sy != 0.0 else 0.0

    def _slots(self) -> Iterator[int]:
        for i in range(self._size):
            yield (self._start + i) % self.m

    def pairs(self) -> list[tuple[Array, Array]]:
        """Stored pairs, oldest first."""
        return [(self._s[i].copy(), self._y[i].copy()) for i in self._slots()]

    def apply_inverse_hessian(self, g: Array, gamma: float) -> Array:
        """Two-loop recursion: return ``H g`` for the implicit inverse Hessian ``H``.

        ``gamma`` scales the initial approximation ``H_0 = gamma * I``.
        """
        q = np.array(g, dtype=float, copy=True)
        slots = list(self._slots())
        alpha = np.zeros(self.m)
        for i in reversed(slots):
            alpha[i] = self._rho[i] * float(np.dot(self._s[i], q))
            q -= alpha[i] * self._y[i]
        q *= gamma
        for i in slots:
            beta = self._rho[i] * float(np.dot(q, self._y[i]))
            q += (alpha[i] - beta) * self._s[i]
        return q


__all__ = ["CurvatureHistory"]
