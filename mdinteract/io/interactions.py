"""Read an interactions YAML document into a ``System``.

The document has up to five independent top-level sections::

    pairs:
      - atoms: [Ar, Ar]
        type: lennard-jones
        sigma: 3.405 A
        epsilon: 0.2381 kcal/mol
        computation: {type: cutoff, cutoff: 9 A}
        restriction: {type: intermolecular}
    bonds:
      - atoms: [O, H]
        type: harmonic
        k: 4637 kJ/mol/A^2
        x0: 1 A
    angles:
      - atoms: [H, O, H]
        type: harmonic
        k: 383 kJ/mol/rad^2
        x0: 109.5 deg
    dihedrals:
      - atoms: [C, C, C, C]
        type: torsion
        n: 3
        k: 5 kJ/mol
        delta: 180 deg
    coulomb:
      type: wolf
      cutoff: 10 A
      restriction: {type: exclude13}
      charges: {Na: 1, Cl: -1}

A missing section is not an error.  Every record of a section is validated
before any of them is registered, so a failing section leaves the system
untouched; sections applied before the failure stay applied.
"""

from __future__ import annotations

import logging
import os
import warnings
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence, TextIO, Union

import numpy as np
import yaml

from ..catalog import (
    read_angle_potential,
    read_coulomb_potential,
    read_dihedral_potential,
    read_pair_computation,
    read_pair_potential,
    read_restriction,
)
from ..errors import ConfigError, FileError, YamlError
from ..system import System

LOGGER = logging.getLogger(__name__)

SECTIONS = ("pairs", "bonds", "angles", "dihedrals", "coulomb")
_ORDINALS = ("first", "second", "third", "fourth")

Source = Union[str, "os.PathLike[str]", TextIO]
_Registration = Callable[[System], None]


def _err(msg: str) -> ConfigError:
    return ConfigError(msg)


@dataclass(frozen=True)
class InteractionsSummary:
    """What one application of an interactions document registered."""

    pairs: int = 0
    bonds: int = 0
    angles: int = 0
    dihedrals: int = 0
    coulomb: Optional[str] = None
    charges: dict[str, int] = field(default_factory=dict)

    def lines(self) -> list[str]:
        out = [
            f"pairs: {self.pairs}",
            f"bonds: {self.bonds}",
            f"angles: {self.angles}",
            f"dihedrals: {self.dihedrals}",
            f"coulomb: {self.coulomb or 'none'}",
        ]
        for name, count in self.charges.items():
            out.append(f"charge {name}: {count} particles")
        return out


def _load_document(text_or_stream: Union[str, TextIO]) -> dict[str, Any]:
    try:
        doc = yaml.safe_load(text_or_stream)
    except yaml.YAMLError as exc:
        raise YamlError(f"invalid YAML document: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise FileError(f"interactions input is not valid UTF-8: {exc}") from exc
    if doc is None:
        return {}
    if not isinstance(doc, dict):
        raise _err(f"interactions document must be a mapping, got {type(doc).__name__}")
    return doc


def _atoms(node: Any, n: int, kind: str) -> tuple[str, ...]:
    if not isinstance(node, Mapping):
        raise _err(f"entries in {kind} potentials must be mappings, got {type(node).__name__}")
    atoms = node.get("atoms")
    if not isinstance(atoms, (list, tuple)):
        raise _err(f"Missing 'atoms' section in {kind} potential")
    if len(atoms) != n:
        raise _err(
            f"Wrong size for 'atoms' section in {kind} potentials. Should be {n}, is {len(atoms)}"
        )
    for ordinal, name in zip(_ORDINALS, atoms):
        if not isinstance(name, str):
            raise _err(f"The {ordinal} atom name is not a string in {kind} potential")
    return tuple(atoms)


def _section_list(doc: Mapping[str, Any], key: str) -> Optional[Sequence[Any]]:
    section = doc.get(key)
    if section is None:
        return None
    if not isinstance(section, list):
        raise _err(f"'{key}' section must be a list, got {type(section).__name__}")
    return section


def _read_pairs(entries: Sequence[Any], bonded: bool) -> list[_Registration]:
    kind = "bond" if bonded else "pair"
    out: list[_Registration] = []
    for node in entries:
        a, b = _atoms(node, 2, kind)
        potential = read_pair_potential(node)
        restriction_node = node.get("restriction")
        restriction = None if restriction_node is None else read_restriction(restriction_node)
        computation = node.get("computation")
        if computation is not None:
            potential = read_pair_computation(computation, potential)

        if bonded:
            if restriction is not None:
                warnings.warn(
                    f"restriction '{restriction.kind.value}' on bond {a}-{b} is ignored",
                    RuntimeWarning,
                )
            out.append(lambda s, a=a, b=b, p=potential: s.add_bond_interaction(a, b, p))
        elif restriction is None:
            out.append(lambda s, a=a, b=b, p=potential: s.add_pair_interaction(a, b, p))
        else:
            out.append(
                lambda s, a=a, b=b, p=potential, r=restriction: s.add_pair_interaction_with_restriction(
                    a, b, p, r
                )
            )
    return out


def _read_angles(entries: Sequence[Any]) -> list[_Registration]:
    out: list[_Registration] = []
    for node in entries:
        a, b, c = _atoms(node, 3, "angle")
        potential = read_angle_potential(node)
        out.append(lambda s, a=a, b=b, c=c, p=potential: s.add_angle_interaction(a, b, c, p))
    return out


def _read_dihedrals(entries: Sequence[Any]) -> list[_Registration]:
    out: list[_Registration] = []
    for node in entries:
        a, b, c, d = _atoms(node, 4, "dihedral")
        potential = read_dihedral_potential(node)
        out.append(
            lambda s, a=a, b=b, c=c, d=d, p=potential: s.add_dihedral_interaction(a, b, c, d, p)
        )
    return out


def _parse_charges(node: Any) -> dict[str, float]:
    if not isinstance(node, Mapping):
        raise _err(f"'charges' in coulomb section must be a mapping, got {type(node).__name__}")
    charges: dict[str, float] = {}
    for name, charge in node.items():
        if (
            not isinstance(name, str)
            or isinstance(charge, bool)
            or not isinstance(charge, (int, float, np.integer, np.floating))
        ):
            raise _err(f"Bad Yaml format in charges section: {name!r}, {charge!r}")
        charges[name] = float(charge)
    return charges


def assign_charges(system: System, charges: Mapping[str, float]) -> dict[str, int]:
    """Set the charge of every particle named in ``charges``.

    All names are checked first: a name matching no particle raises
    ``ConfigError`` and no charge is changed.  Returns the number of
    particles updated per name.
    """
    counts = {name: 0 for name in charges}
    for particle in system:
        if particle.name in counts:
            counts[particle.name] += 1
    for name, count in counts.items():
        if count == 0:
            raise _err(f"No particle with the name {name} was found")

    for particle in system:
        if particle.name in charges:
            particle.charge = charges[particle.name]
    for name, count in counts.items():
        LOGGER.info("Charge was set to %g for %d %s particles", charges[name], count, name)
    return counts


def _read_coulomb(system: System, node: Any) -> tuple[str, dict[str, int]]:
    if not isinstance(node, Mapping):
        raise _err(f"'coulomb' section must be a mapping, got {type(node).__name__}")
    potential = read_coulomb_potential(node)
    restriction_node = node.get("restriction")
    if restriction_node is not None:
        potential.set_restriction(read_restriction(restriction_node))
    charges_node = node.get("charges")
    charges = None if charges_node is None else _parse_charges(charges_node)

    counts: dict[str, int] = {}
    if charges is not None:
        counts = assign_charges(system, charges)
    system.set_coulomb_interaction(potential)
    return type(potential).__name__.lower(), counts


def apply_document(system: System, doc: Mapping[str, Any]) -> InteractionsSummary:
    """Register every section of an already loaded document into ``system``."""
    sizes: dict[str, int] = {}
    readers = (
        ("pairs", lambda entries: _read_pairs(entries, bonded=False)),
        ("bonds", lambda entries: _read_pairs(entries, bonded=True)),
        ("angles", _read_angles),
        ("dihedrals", _read_dihedrals),
    )
    for key, reader in readers:
        entries = _section_list(doc, key)
        if entries is None:
            sizes[key] = 0
            continue
        registrations = reader(entries)
        for register in registrations:
            register(system)
        sizes[key] = len(registrations)
        LOGGER.debug("registered %d %s interactions", len(registrations), key)

    coulomb: Optional[str] = None
    counts: dict[str, int] = {}
    if doc.get("coulomb") is not None:
        coulomb, counts = _read_coulomb(system, doc["coulomb"])
        LOGGER.debug("coulomb solver set to %s", coulomb)

    unknown = sorted(str(k) for k in doc if k not in SECTIONS)
    if unknown:
        LOGGER.warning("ignoring unknown sections in interactions document: %s", ", ".join(unknown))

    return InteractionsSummary(
        pairs=sizes["pairs"],
        bonds=sizes["bonds"],
        angles=sizes["angles"],
        dihedrals=sizes["dihedrals"],
        coulomb=coulomb,
        charges=counts,
    )


class InteractionsInput:
    """A loaded interactions document that can be applied to systems."""

    def __init__(self, document: Mapping[str, Any], source: str = "<string>"):
        self.document = document
        self.source = source

    @classmethod
    def from_file(cls, path: Union[str, "os.PathLike[str]"]) -> "InteractionsInput":
        try:
            with open(path, "r", encoding="utf-8") as f:
                doc = _load_document(f)
        except OSError as exc:
            raise FileError(f"can not read interactions file '{os.fspath(path)}': {exc}") from exc
        return cls(doc, source=os.fspath(path))

    @classmethod
    def from_string(cls, text: str) -> "InteractionsInput":
        return cls(_load_document(text))

    def read(self, system: System) -> InteractionsSummary:
        LOGGER.debug("reading interactions from %s", self.source)
        return apply_document(system, self.document)


def read_interactions(system: System, source: Source) -> InteractionsSummary:
    """Read interactions from a file path or an open text stream into ``system``."""
    if hasattr(source, "read"):
        return InteractionsInput(_load_document(source), source=getattr(source, "name", "<stream>")).read(system)
    return InteractionsInput.from_file(source).read(system)


def read_interactions_string(system: System, text: str) -> InteractionsSummary:
    """Read interactions from an in-memory YAML string into ``system``."""
    return InteractionsInput.from_string(text).read(system)
