from __future__ import annotations

import math

import numpy as np
import pytest

from mdinteract.constants import ELCC
from mdinteract.errors import ConfigError
from mdinteract.potentials import CosineHarmonic, Ewald, Harmonic, LennardJones, NullPotential, Torsion, Wolf
from mdinteract.restrictions import PairRestriction


def _numeric_force(potential, x: float, h: float = 1e-6) -> float:
    return -(potential.energy(x + h) - potential.energy(x - h)) / (2.0 * h)


def test_null_potential():
    p = NullPotential()
    assert p.energy(1.3) == 0.0
    assert p.force(1.3) == 0.0
    assert np.all(p.energy(np.linspace(0.5, 3.0, 4)) == 0.0)


def test_harmonic():
    p = Harmonic(k=50.0, x0=2.0)
    assert p.energy(2.0) == 0.0
    assert p.energy(3.0) == pytest.approx(25.0)
    assert p.force(3.0) == pytest.approx(-50.0)
    assert p.force(2.5) == pytest.approx(_numeric_force(p, 2.5), rel=1e-6)


def test_lennard_jones_minimum_and_zero():
    p = LennardJones(sigma=2.0, epsilon=0.5)
    assert p.energy(2.0) == pytest.approx(0.0, abs=1e-12)
    rmin = 2.0 ** (1.0 / 6.0) * 2.0
    assert p.energy(rmin) == pytest.approx(-0.5)
    assert p.force(rmin) == pytest.approx(0.0, abs=1e-10)
    for r in (1.9, 2.5, 4.0):
        assert p.force(r) == pytest.approx(_numeric_force(p, r), rel=1e-5)


def test_lennard_jones_arrays():
    p = LennardJones(sigma=3.0, epsilon=1.0)
    r = np.array([3.0, 4.0, 5.0])
    e = p.energy(r)
    assert e.shape == (3,)
    assert e[1] == pytest.approx(p.energy(4.0))


def test_cosine_harmonic():
    p = CosineHarmonic(k=10.0, x0=math.radians(109.5))
    assert p.energy(math.radians(109.5)) == pytest.approx(0.0, abs=1e-12)
    for x in (1.5, 2.0, 2.5):
        assert p.force(x) == pytest.approx(_numeric_force(p, x), rel=1e-5)


def test_torsion():
    p = Torsion(n=3, k=2.0, delta=math.pi)
    assert p.energy(0.0) == pytest.approx(0.0, abs=1e-12)
    assert p.energy(math.pi / 3.0) == pytest.approx(4.0)
    for x in (0.3, 1.1, 2.0):
        assert p.force(x) == pytest.approx(_numeric_force(p, x), rel=1e-5)


@pytest.mark.parametrize("n", [0, -2, 1.5, True])
def test_torsion_multiplicity_must_be_positive_integer(n):
    with pytest.raises(ConfigError):
        Torsion(n=n, k=1.0, delta=0.0)


def test_wolf_vanishes_at_cutoff():
    w = Wolf(cutoff=10.0)
    assert w.alpha == pytest.approx(math.pi / 10.0)
    assert w.pair_energy(1.0, -1.0, 10.0) == 0.0
    assert w.pair_force(1.0, -1.0, 10.0) == 0.0
    assert w.pair_energy(1.0, -1.0, 12.0) == 0.0
    assert w.pair_energy(1.0, 1.0, 10.0 - 1e-7) == pytest.approx(0.0, abs=1e-7)
    assert w.pair_force(1.0, 1.0, 10.0 - 1e-7) == pytest.approx(0.0, abs=1e-7)


def test_wolf_like_charges_repel():
    w = Wolf(cutoff=10.0)
    assert w.pair_energy(1.0, 1.0, 2.0) > 0.0
    assert w.pair_force(1.0, 1.0, 2.0) > 0.0
    assert w.pair_energy(1.0, -1.0, 2.0) < 0.0


def test_wolf_self_energy_is_negative():
    w = Wolf(cutoff=10.0)
    assert w.self_energy([1.0, -1.0]) < 0.0
    assert w.self_energy([0.0, 0.0]) == 0.0


def test_ewald_real_space():
    e = Ewald(cutoff=9.0, kmax=7)
    assert e.alpha == pytest.approx(3.0 * math.pi / 36.0)
    r = 2.0
    expected = ELCC * math.erfc(e.alpha * r) / r
    assert e.pair_energy(1.0, 1.0, r) == pytest.approx(expected)
    assert e.pair_energy(1.0, 1.0, 9.5) == 0.0
    assert e.self_energy([1.0, -1.0]) == pytest.approx(-2.0 * ELCC * e.alpha / math.sqrt(math.pi))


def test_ewald_force_matches_energy():
    e = Ewald(cutoff=9.0, kmax=3)
    h = 1e-6
    for r in (1.5, 3.0, 6.0):
        numeric = -(e.pair_energy(1.0, 1.0, r + h) - e.pair_energy(1.0, 1.0, r - h)) / (2.0 * h)
        assert e.pair_force(1.0, 1.0, r) == pytest.approx(numeric, rel=1e-5)


def test_ewald_rejects_negative_kmax():
    with pytest.raises(ConfigError, match="can not be negative"):
        Ewald(cutoff=9.0, kmax=-1)


def test_coulomb_cutoff_must_be_positive():
    with pytest.raises(ConfigError):
        Wolf(cutoff=0.0)
    with pytest.raises(ConfigError):
        Ewald(cutoff=-1.0, kmax=2)


def test_coulomb_restriction_is_settable():
    w = Wolf(cutoff=8.0)
    assert w.restriction is None
    w.set_restriction(PairRestriction.exclude13())
    assert w.restriction == PairRestriction.exclude13()
