from __future__ import annotations

import numpy as np
import pytest

from mdinteract.computations import CutoffComputation, TableComputation
from mdinteract.errors import ConfigError
from mdinteract.potentials import Harmonic, LennardJones, NullPotential


def test_cutoff_shifts_energy_to_zero():
    lj = LennardJones(sigma=3.0, epsilon=1.0)
    c = CutoffComputation(lj, 9.0)
    assert c.shift == pytest.approx(lj.energy(9.0))
    assert c.energy(9.0) == 0.0
    assert c.energy(9.0 - 1e-9) == pytest.approx(0.0, abs=1e-9)
    assert c.energy(4.0) == pytest.approx(lj.energy(4.0) - lj.energy(9.0))


def test_cutoff_is_zero_beyond():
    c = CutoffComputation(Harmonic(k=1.0, x0=0.0), 2.0)
    r = np.array([1.0, 2.0, 3.0, 50.0])
    assert np.all(c.energy(r)[1:] == 0.0)
    assert np.all(c.force(r)[1:] == 0.0)
    assert c.force(1.0) == pytest.approx(-1.0)


@pytest.mark.parametrize("cutoff", [0.0, -1.0])
def test_cutoff_must_be_positive(cutoff):
    with pytest.raises(ConfigError, match="cutoff"):
        CutoffComputation(NullPotential(), cutoff)


def test_table_interpolates_linear_exactly():
    h = Harmonic(k=2.0, x0=1.0)
    t = TableComputation(h, 101, 10.0)
    assert t.delta == pytest.approx(0.1)
    assert t.grid.shape == (101,)
    # force is linear in r: linear interpolation reproduces it
    for r in (0.05, 1.234, 7.77):
        assert t.force(r) == pytest.approx(h.force(r))
        assert t.energy(r) == pytest.approx(h.energy(r), abs=3e-3)


def test_table_clamps_at_boundaries():
    h = Harmonic(k=1.0, x0=0.0)
    t = TableComputation(h, 11, 5.0)
    assert t.energy(5.0) == pytest.approx(h.energy(5.0))
    assert t.energy(8.0) == pytest.approx(h.energy(5.0))
    assert t.force(100.0) == pytest.approx(h.force(5.0))
    assert t.energy(-1.0) == pytest.approx(h.energy(0.0))


def test_table_arrays_are_read_only():
    t = TableComputation(Harmonic(k=1.0, x0=0.0), 5, 1.0)
    with pytest.raises(ValueError):
        t.energy_table[0] = 3.0
    with pytest.raises(ValueError):
        t.grid[0] = 3.0


def test_table_of_null_is_zero():
    t = TableComputation(NullPotential(), 10, 20.0)
    assert t.energy(3.3) == 0.0
    assert np.all(t.force(np.array([0.0, 10.0, 25.0])) == 0.0)


def test_table_of_cutoff_composes():
    lj = LennardJones(sigma=3.0, epsilon=1.0)
    c = CutoffComputation(lj, 9.0)
    t = TableComputation(c, 2001, 12.0)
    assert t.energy(10.0) == 0.0
    assert t.energy(4.5) == pytest.approx(c.energy(4.5), rel=1e-3)


@pytest.mark.parametrize("n", [1, 0, 2.5, True])
def test_table_needs_two_points(n):
    with pytest.raises(ConfigError, match="'n'"):
        TableComputation(NullPotential(), n, 10.0)


def test_table_needs_positive_max():
    with pytest.raises(ConfigError, match="'max'"):
        TableComputation(NullPotential(), 10, 0.0)
