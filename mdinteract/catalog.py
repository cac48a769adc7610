"""Build interaction functions from typed configuration records.

Each ``read_*`` function takes one mapping from the interactions document
and returns a fully validated object, or raises ``ConfigError`` /
``UnitParsingError`` naming the offending field.  ``type`` strings are
matched case-insensitively against the dispatch tables below.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

import numpy as np

from . import units
from .computations import CutoffComputation, TableComputation
from .errors import ConfigError
from .potentials import (
    AnglePotential,
    CoulombicPotential,
    CosineHarmonic,
    DihedralPotential,
    Ewald,
    Harmonic,
    LennardJones,
    NullPotential,
    PairPotential,
    Torsion,
    Wolf,
)
from .restrictions import PairRestriction, RestrictionKind


def _err(msg: str) -> ConfigError:
    return ConfigError(msg)


def _expect_record(node: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(node, Mapping):
        raise _err(f"{where} must be a mapping, got {type(node).__name__}")
    return node


def _get_type(node: Any, where: str) -> str:
    node = _expect_record(node, where)
    typ = node.get("type")
    if typ is None:
        raise _err(f"Missing 'type' parameter in {where}")
    if not isinstance(typ, str):
        raise _err(f"'type' parameter in {where} must be a string, got {typ!r}")
    return typ.strip().lower()


def _quantity(node: Mapping[str, Any], key: str, where: str) -> float:
    """A required physical quantity such as ``"3.4 A"``, in internal units."""
    value = node.get(key)
    if value is None:
        raise _err(f"Missing '{key}' parameter in {where}")
    if not isinstance(value, str):
        raise _err(f"'{key}' parameter in {where} must be a string with a unit, got {value!r}")
    return units.from_str(value)


def _integer(node: Mapping[str, Any], key: str, where: str) -> int:
    value = node.get(key)
    if value is None:
        raise _err(f"Missing '{key}' parameter in {where}")
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise _err(f"'{key}' parameter in {where} must be an integer, got {value!r}")
    return int(value)


def _number(node: Mapping[str, Any], key: str, where: str) -> float:
    value = node.get(key)
    if value is None:
        raise _err(f"Missing '{key}' parameter in {where}")
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise _err(f"'{key}' parameter in {where} must be a number, got {value!r}")
    return float(value)


# potentials -----------------------------------------------------------------
def _null(node: Mapping[str, Any]) -> NullPotential:
    return NullPotential()


def _harmonic(node: Mapping[str, Any]) -> Harmonic:
    where = "harmonic potential"
    return Harmonic(k=_quantity(node, "k", where), x0=_quantity(node, "x0", where))


def _lennard_jones(node: Mapping[str, Any]) -> LennardJones:
    where = "Lennard-Jones potential"
    return LennardJones(
        sigma=_quantity(node, "sigma", where),
        epsilon=_quantity(node, "epsilon", where),
    )


def _cosine_harmonic(node: Mapping[str, Any]) -> CosineHarmonic:
    where = "cosine harmonic potential"
    return CosineHarmonic(k=_quantity(node, "k", where), x0=_quantity(node, "x0", where))


def _torsion(node: Mapping[str, Any]) -> Torsion:
    where = "torsion potential"
    n = _integer(node, "n", where)
    k = _quantity(node, "k", where)
    delta = _quantity(node, "delta", where)
    return Torsion(n=n, k=k, delta=delta)


PAIR_POTENTIALS: dict[str, Callable[[Mapping[str, Any]], PairPotential]] = {
    "harmonic": _harmonic,
    "lennard-jones": _lennard_jones,
    "lennardjones": _lennard_jones,
    "null": _null,
    "nullpotential": _null,
}

ANGLE_POTENTIALS: dict[str, Callable[[Mapping[str, Any]], AnglePotential]] = {
    "harmonic": _harmonic,
    "cosine-harmonic": _cosine_harmonic,
    "cosineharmonic": _cosine_harmonic,
    "null": _null,
    "nullpotential": _null,
}

DIHEDRAL_POTENTIALS: dict[str, Callable[[Mapping[str, Any]], DihedralPotential]] = {
    "harmonic": _harmonic,
    "cosine-harmonic": _cosine_harmonic,
    "cosineharmonic": _cosine_harmonic,
    "torsion": _torsion,
    "null": _null,
    "nullpotential": _null,
}


def _dispatch(table: Mapping[str, Callable], node: Any, where: str):
    typ = _get_type(node, where)
    reader = table.get(typ)
    if reader is None:
        raise _err(f"Unknown potential type '{typ}'")
    return reader(node)


def read_pair_potential(node: Any) -> PairPotential:
    return _dispatch(PAIR_POTENTIALS, node, "pair potential")


def read_angle_potential(node: Any) -> AnglePotential:
    return _dispatch(ANGLE_POTENTIALS, node, "angle potential")


def read_dihedral_potential(node: Any) -> DihedralPotential:
    return _dispatch(DIHEDRAL_POTENTIALS, node, "dihedral potential")


# coulomb --------------------------------------------------------------------
def _wolf(node: Mapping[str, Any]) -> Wolf:
    return Wolf(cutoff=_quantity(node, "cutoff", "Wolf potential"))


def _ewald(node: Mapping[str, Any]) -> Ewald:
    where = "Ewald potential"
    cutoff = _quantity(node, "cutoff", where)
    kmax = _integer(node, "kmax", where)
    if kmax < 0:
        raise _err("'kmax' can not be negative in Ewald potential")
    return Ewald(cutoff=cutoff, kmax=kmax)


COULOMB_SOLVERS: dict[str, Callable[[Mapping[str, Any]], CoulombicPotential]] = {
    "wolf": _wolf,
    "ewald": _ewald,
}


def read_coulomb_potential(node: Any) -> CoulombicPotential:
    """The coulomb solver of a ``coulomb`` record; restriction and charges are not read here."""
    typ = _get_type(node, "coulomb section")
    reader = COULOMB_SOLVERS.get(typ)
    if reader is None:
        raise _err(f"Unknown coulomb solver type '{typ}'")
    return reader(node)


# computations ---------------------------------------------------------------
def _cutoff(node: Mapping[str, Any], potential: PairPotential) -> CutoffComputation:
    return CutoffComputation(potential, _quantity(node, "cutoff", "cutoff computation"))


def _table(node: Mapping[str, Any], potential: PairPotential) -> TableComputation:
    where = "table computation"
    n = _integer(node, "n", where)
    max_distance = _quantity(node, "max", where)
    return TableComputation(potential, n, max_distance)


PAIR_COMPUTATIONS: dict[str, Callable[[Mapping[str, Any], PairPotential], PairPotential]] = {
    "cutoff": _cutoff,
    "table": _table,
}


def read_pair_computation(node: Any, potential: PairPotential) -> PairPotential:
    """Wrap ``potential`` in the computation described by ``node``."""
    typ = _get_type(node, "potential computation")
    reader = PAIR_COMPUTATIONS.get(typ)
    if reader is None:
        raise _err(f"Unknown computation type '{typ}'")
    return reader(node, potential)


# restrictions ---------------------------------------------------------------
_RESTRICTIONS = {kind.value: kind for kind in RestrictionKind}


def read_restriction(node: Any) -> PairRestriction:
    typ = _get_type(node, "restriction section")
    kind = _RESTRICTIONS.get(typ)
    if kind is None:
        raise _err(f"Unknown restriction type '{typ}'")
    if kind is RestrictionKind.SCALE_14:
        if node.get("scaling") is None:
            raise _err("Missing 'scaling' parameter in Scale14 restriction")
        return PairRestriction.scale14(_number(node, "scaling", "Scale14 restriction"))
    return PairRestriction(kind)
