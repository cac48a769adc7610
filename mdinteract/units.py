"""Physical quantity parsing into the internal unit system.

Quantities are written as ``"<number> <unit expression>"``, for example
``"3.4 A"``, ``"0.45 kJ/mol"`` or ``"67 kJ/mol/A^2"``.  Unit expressions are
parsed by pint; ``A`` always means angstrom (never ampere) and ``mol`` is
treated as Avogadro's number of particles.
"""

from __future__ import annotations

import logging
import math
import re
import tokenize
from functools import lru_cache

import pint

from .constants import (
    ANGSTROM_SI,
    ATOMIC_MASS_SI,
    AVOGADRO,
    ELEMENTARY_CHARGE_SI,
    FEMTOSECOND_SI,
)
from .errors import UnitParsingError

LOGGER = logging.getLogger(__name__)

_NUMBER_RE = re.compile(
    r"^\s*(?P<value>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*(?P<unit>.*?)\s*$"
)
_ANGSTROM_RE = re.compile(r"(?<![A-Za-z_])A(?![A-Za-z_])")

# SI base dimension -> number of internal units in one SI base unit
_SI_TO_INTERNAL: dict[str, float] = {
    "[length]": 1.0 / ANGSTROM_SI,
    "[time]": 1.0 / FEMTOSECOND_SI,
    "[mass]": 1.0 / ATOMIC_MASS_SI,
    "[substance]": AVOGADRO,
    "[current]": FEMTOSECOND_SI / ELEMENTARY_CHARGE_SI,
    "[temperature]": 1.0,
}


@lru_cache(maxsize=1)
def _registry() -> pint.UnitRegistry:
    return pint.UnitRegistry()


def _normalize_unit(unit: str) -> str:
    return _ANGSTROM_RE.sub("angstrom", unit.strip())


@lru_cache(maxsize=256)
def _conversion_factor(unit: str) -> float:
    """Factor converting one ``unit`` into internal units."""
    if not unit.strip():
        return 1.0
    ureg = _registry()
    try:
        q = ureg.Quantity(1.0, _normalize_unit(unit)).to_base_units()
    except (
        pint.PintError,
        tokenize.TokenError,
        AssertionError,
        AttributeError,
        IndexError,
        SyntaxError,
        TypeError,
        ValueError,
    ) as exc:
        raise UnitParsingError(f"can not parse unit '{unit}': {exc}") from exc
    factor = float(q.magnitude)
    for dim, power in q.dimensionality.items():
        scale = _SI_TO_INTERNAL.get(str(dim))
        if scale is None:
            raise UnitParsingError(f"unit '{unit}' has unsupported dimension {dim}")
        factor *= scale ** float(power)
    LOGGER.debug("unit %r -> internal factor %g", unit, factor)
    return factor


def from_str(text: str) -> float:
    """Parse ``"<number> <unit>"`` and return the value in internal units."""
    if not isinstance(text, str):
        raise UnitParsingError(f"expected a quantity string, got {type(text).__name__}")
    m = _NUMBER_RE.match(text)
    if m is None:
        raise UnitParsingError(f"can not parse a number from '{text}'")
    return from_value(float(m.group("value")), m.group("unit"))


def from_value(value: float, unit: str) -> float:
    """Convert ``value`` expressed in ``unit`` to internal units."""
    value = float(value)
    if not math.isfinite(value):
        raise UnitParsingError(f"quantity must be finite, got {value} {unit}")
    return value * _conversion_factor(str(unit))


def to_value(value: float, unit: str) -> float:
    """Convert ``value`` from internal units to ``unit``."""
    return float(value) / _conversion_factor(str(unit))
