from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Protocol, Union

import numpy as np
from scipy.special import erfc

from .constants import ELCC, NUMERICAL_ZERO
from .errors import ConfigError
from .restrictions import PairRestriction

Scalar = Union[float, np.ndarray]

_TWO_OVER_SQRT_PI = 2.0 / math.sqrt(math.pi)


def _as_float(x: Scalar) -> np.ndarray:
    return np.asarray(x, dtype=float)


class PairPotential(Protocol):
    """Energy and force (``-dE/dr``) of two particles at distance ``r``."""

    def energy(self, r: Scalar) -> Scalar: ...

    def force(self, r: Scalar) -> Scalar: ...


class AnglePotential(Protocol):
    """Energy and force (``-dE/dtheta``) of an angle ``theta`` in radians."""

    def energy(self, theta: Scalar) -> Scalar: ...

    def force(self, theta: Scalar) -> Scalar: ...


class DihedralPotential(Protocol):
    """Energy and force (``-dE/dphi``) of a dihedral angle ``phi`` in radians."""

    def energy(self, phi: Scalar) -> Scalar: ...

    def force(self, phi: Scalar) -> Scalar: ...


class CoulombicPotential(Protocol):
    cutoff: float
    restriction: Optional[PairRestriction]

    def pair_energy(self, qi: Scalar, qj: Scalar, r: Scalar) -> Scalar: ...

    def pair_force(self, qi: Scalar, qj: Scalar, r: Scalar) -> Scalar: ...

    def self_energy(self, charges) -> float: ...

    def set_restriction(self, restriction: Optional[PairRestriction]) -> None: ...


@dataclass(frozen=True)
class NullPotential:
    """Zero energy and force; usable as pair, angle or dihedral potential."""

    def energy(self, x: Scalar) -> Scalar:
        return 0.0 * _as_float(x)

    def force(self, x: Scalar) -> Scalar:
        return 0.0 * _as_float(x)


@dataclass(frozen=True)
class Harmonic:
    """``E = k/2 (x - x0)^2``; usable as pair, angle or dihedral potential."""

    k: float
    x0: float

    def energy(self, x: Scalar) -> Scalar:
        dx = _as_float(x) - self.x0
        return 0.5 * self.k * dx * dx

    def force(self, x: Scalar) -> Scalar:
        return -self.k * (_as_float(x) - self.x0)


@dataclass(frozen=True)
class LennardJones:
    sigma: float
    epsilon: float

    def energy(self, r: Scalar) -> Scalar:
        sr6 = (self.sigma / _as_float(r)) ** 6
        return 4.0 * self.epsilon * (sr6 * sr6 - sr6)

    def force(self, r: Scalar) -> Scalar:
        rr = _as_float(r)
        sr6 = (self.sigma / rr) ** 6
        return 24.0 * self.epsilon * (2.0 * sr6 * sr6 - sr6) / (rr + NUMERICAL_ZERO)


@dataclass(frozen=True)
class CosineHarmonic:
    """``E = k/2 (cos x - cos x0)^2``; angle or dihedral potential."""

    k: float
    x0: float
    cos_x0: float = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "cos_x0", math.cos(self.x0))

    def energy(self, x: Scalar) -> Scalar:
        dcos = np.cos(_as_float(x)) - self.cos_x0
        return 0.5 * self.k * dcos * dcos

    def force(self, x: Scalar) -> Scalar:
        xx = _as_float(x)
        return self.k * (np.cos(xx) - self.cos_x0) * np.sin(xx)


@dataclass(frozen=True)
class Torsion:
    """``E = k (1 + cos(n x - delta))``; dihedral potential only."""

    n: int
    k: float
    delta: float

    def __post_init__(self) -> None:
        if isinstance(self.n, bool) or int(self.n) != self.n or self.n < 1:
            raise ConfigError(f"torsion multiplicity 'n' must be a positive integer, got {self.n!r}")
        object.__setattr__(self, "n", int(self.n))

    def energy(self, x: Scalar) -> Scalar:
        return self.k * (1.0 + np.cos(self.n * _as_float(x) - self.delta))

    def force(self, x: Scalar) -> Scalar:
        return self.k * self.n * np.sin(self.n * _as_float(x) - self.delta)


def _damped_energy(alpha: float, r: np.ndarray) -> np.ndarray:
    return erfc(alpha * r) / r


def _damped_force(alpha: float, r: np.ndarray) -> np.ndarray:
    return erfc(alpha * r) / (r * r) + _TWO_OVER_SQRT_PI * alpha * np.exp(-alpha * alpha * r * r) / r


def _sum_sq(charges) -> float:
    q = _as_float(charges)
    return float(np.sum(q * q))


@dataclass
class Wolf:
    """Wolf summation: damped, shifted-force real-space Coulomb sum.

    ``alpha = pi / cutoff``.  Energy and force are shifted so both vanish at
    the cutoff, and are zero beyond it.
    """

    cutoff: float
    restriction: Optional[PairRestriction] = None
    alpha: float = field(init=False)
    energy_cutoff: float = field(init=False, repr=False)
    force_cutoff: float = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.cutoff > 0.0:
            raise ConfigError(f"'cutoff' must be positive in Wolf potential, got {self.cutoff}")
        self.cutoff = float(self.cutoff)
        self.alpha = math.pi / self.cutoff
        rc = np.asarray(self.cutoff)
        self.energy_cutoff = float(_damped_energy(self.alpha, rc))
        self.force_cutoff = float(_damped_force(self.alpha, rc))

    def set_restriction(self, restriction: Optional[PairRestriction]) -> None:
        self.restriction = restriction

    def pair_energy(self, qi: Scalar, qj: Scalar, r: Scalar) -> Scalar:
        rr = _as_float(r)
        with np.errstate(divide="ignore", invalid="ignore"):
            e = ELCC * _as_float(qi) * _as_float(qj) * (_damped_energy(self.alpha, rr) - self.energy_cutoff)
        return np.where(rr < self.cutoff, e, 0.0)[()]

    def pair_force(self, qi: Scalar, qj: Scalar, r: Scalar) -> Scalar:
        rr = _as_float(r)
        with np.errstate(divide="ignore", invalid="ignore"):
            f = ELCC * _as_float(qi) * _as_float(qj) * (_damped_force(self.alpha, rr) - self.force_cutoff)
        return np.where(rr < self.cutoff, f, 0.0)[()]

    def self_energy(self, charges) -> float:
        return -ELCC * (0.5 * self.energy_cutoff + self.alpha / math.sqrt(math.pi)) * _sum_sq(charges)


@dataclass
class Ewald:
    """Ewald summation parameters and its real-space pair term.

    ``alpha = 3 pi / (4 cutoff)``.  The reciprocal-space sum over
    ``kmax`` vectors per dimension needs the cell and is evaluated by the
    force loop that consumes this object.
    """

    cutoff: float
    kmax: int
    restriction: Optional[PairRestriction] = None
    alpha: float = field(init=False)

    def __post_init__(self) -> None:
        if not self.cutoff > 0.0:
            raise ConfigError(f"'cutoff' must be positive in Ewald potential, got {self.cutoff}")
        if isinstance(self.kmax, bool) or int(self.kmax) != self.kmax:
            raise ConfigError(f"'kmax' must be an integer in Ewald potential, got {self.kmax!r}")
        if self.kmax < 0:
            raise ConfigError("'kmax' can not be negative in Ewald potential")
        self.cutoff = float(self.cutoff)
        self.kmax = int(self.kmax)
        self.alpha = 3.0 * math.pi / (4.0 * self.cutoff)

    def set_restriction(self, restriction: Optional[PairRestriction]) -> None:
        self.restriction = restriction

    def pair_energy(self, qi: Scalar, qj: Scalar, r: Scalar) -> Scalar:
        rr = _as_float(r)
        with np.errstate(divide="ignore", invalid="ignore"):
            e = ELCC * _as_float(qi) * _as_float(qj) * _damped_energy(self.alpha, rr)
        return np.where(rr < self.cutoff, e, 0.0)[()]

    def pair_force(self, qi: Scalar, qj: Scalar, r: Scalar) -> Scalar:
        rr = _as_float(r)
        with np.errstate(divide="ignore", invalid="ignore"):
            f = ELCC * _as_float(qi) * _as_float(qj) * _damped_force(self.alpha, rr)
        return np.where(rr < self.cutoff, f, 0.0)[()]

    def self_energy(self, charges) -> float:
        return -ELCC * self.alpha / math.sqrt(math.pi) * _sum_sq(charges)
