"""Named numeric constants for mdinteract.

Internal units are angstrom (length), femtosecond (time), unified atomic
mass unit (mass), elementary charge (charge) and kelvin (temperature).
Energies are therefore expressed in ``u * A^2 / fs^2``.

Categories
----------
NUMERICAL_ZERO
    Tiny positive guard added before division to avoid division-by-zero
    in pair kernels evaluated at ``r == 0``.

SI reference values
    CODATA 2018 exact or recommended values used to derive the internal
    unit system.  Changing any of them changes every parsed quantity.

ELCC
    Coulomb prefactor ``1 / (4 pi eps0)`` in internal units, i.e. the
    energy of two elementary charges one angstrom apart.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Force-kernel guard (prevent division-by-zero)
# ---------------------------------------------------------------------------
NUMERICAL_ZERO: float = 1e-30

# ---------------------------------------------------------------------------
# SI reference values
# ---------------------------------------------------------------------------
AVOGADRO: float = 6.02214076e23
ELEMENTARY_CHARGE_SI: float = 1.602176634e-19  # C
ATOMIC_MASS_SI: float = 1.66053906660e-27  # kg
COULOMB_CONSTANT_SI: float = 8.9875517923e9  # N m^2 / C^2
ANGSTROM_SI: float = 1e-10  # m
FEMTOSECOND_SI: float = 1e-15  # s

# ---------------------------------------------------------------------------
# Derived internal-unit constants
# ---------------------------------------------------------------------------
INTERNAL_ENERGY_SI: float = ATOMIC_MASS_SI * ANGSTROM_SI**2 / FEMTOSECOND_SI**2  # J

ELCC: float = (
    COULOMB_CONSTANT_SI * ELEMENTARY_CHARGE_SI**2 / ANGSTROM_SI / INTERNAL_ENERGY_SI
)
