from __future__ import annotations

from mdinteract.constants import AVOGADRO, ELCC, INTERNAL_ENERGY_SI, NUMERICAL_ZERO


def test_numerical_zero_is_positive_and_tiny():
    assert NUMERICAL_ZERO > 0.0
    assert NUMERICAL_ZERO < 1e-20, "NUMERICAL_ZERO must be far below any physical scale"


def test_division_guard():
    """NUMERICAL_ZERO must prevent division-by-zero without affecting result."""
    large = 1e10
    result = large / (0.0 + NUMERICAL_ZERO)
    assert result > 0.0
    assert result < float("inf")
    assert 2.0 / (4.0 + NUMERICAL_ZERO) == 0.5


def test_kilojoule_per_mole_in_internal_units():
    kj_per_mol = 1e3 / AVOGADRO
    assert abs(kj_per_mol / INTERNAL_ENERGY_SI - 1e-4) < 1e-12


def test_coulomb_prefactor():
    assert abs(ELCC - 0.138935) < 1e-5
