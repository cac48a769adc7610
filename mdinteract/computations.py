"""Wrappers changing how a pair potential is evaluated.

Both wrappers satisfy the ``PairPotential`` protocol themselves, so they
compose: a table can sample a cutoff-wrapped potential.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .errors import ConfigError
from .potentials import PairPotential, Scalar


@dataclass(frozen=True)
class CutoffComputation:
    """Truncate ``potential`` at ``cutoff`` and shift its energy to zero there."""

    potential: PairPotential
    cutoff: float
    shift: float = field(init=False)

    def __post_init__(self) -> None:
        if isinstance(self.cutoff, bool) or not self.cutoff > 0.0:
            raise ConfigError(f"'cutoff' must be positive in cutoff computation, got {self.cutoff!r}")
        object.__setattr__(self, "cutoff", float(self.cutoff))
        object.__setattr__(self, "shift", float(self.potential.energy(self.cutoff)))

    def energy(self, r: Scalar) -> Scalar:
        rr = np.asarray(r, dtype=float)
        return np.where(rr < self.cutoff, self.potential.energy(rr) - self.shift, 0.0)[()]

    def force(self, r: Scalar) -> Scalar:
        rr = np.asarray(r, dtype=float)
        return np.where(rr < self.cutoff, self.potential.force(rr), 0.0)[()]


@dataclass(frozen=True)
class TableComputation:
    """Tabulate ``potential`` on ``n`` evenly spaced points of ``[0, max_distance]``.

    Values between samples are linearly interpolated.  Arguments at or beyond
    ``max_distance`` get the last sample (and arguments below zero the first
    one): the table is clamped, never read out of bounds.  The sample arrays
    are read-only once built and can be shared between threads.
    """

    potential: PairPotential
    n: int
    max_distance: float
    grid: np.ndarray = field(init=False, repr=False, compare=False)
    energy_table: np.ndarray = field(init=False, repr=False, compare=False)
    force_table: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.n, bool) or int(self.n) != self.n or self.n < 2:
            raise ConfigError(f"'n' must be an integer >= 2 in table computation, got {self.n!r}")
        if isinstance(self.max_distance, bool) or not self.max_distance > 0.0:
            raise ConfigError(
                f"'max' must be positive in table computation, got {self.max_distance!r}"
            )
        n = int(self.n)
        grid = np.linspace(0.0, float(self.max_distance), n)
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            energy = np.broadcast_to(np.asarray(self.potential.energy(grid), dtype=float), grid.shape).copy()
            force = np.broadcast_to(np.asarray(self.potential.force(grid), dtype=float), grid.shape).copy()
        for arr in (grid, energy, force):
            arr.setflags(write=False)
        object.__setattr__(self, "n", n)
        object.__setattr__(self, "max_distance", float(self.max_distance))
        object.__setattr__(self, "grid", grid)
        object.__setattr__(self, "energy_table", energy)
        object.__setattr__(self, "force_table", force)

    @property
    def delta(self) -> float:
        return self.max_distance / (self.n - 1)

    def energy(self, r: Scalar) -> Scalar:
        return np.interp(np.asarray(r, dtype=float), self.grid, self.energy_table)[()]

    def force(self, r: Scalar) -> Scalar:
        return np.interp(np.asarray(r, dtype=float), self.grid, self.force_table)[()]
