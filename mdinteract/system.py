from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union

from .connectivity import BondGraph
from .potentials import AnglePotential, CoulombicPotential, DihedralPotential, PairPotential
from .restrictions import PairRestriction, RestrictionInfo, active
from .topology import Angle, Bond, Connectivity, Dihedral

PairKey = tuple[str, str]
AngleKey = tuple[str, str, str]
DihedralKey = tuple[str, str, str, str]


def canonical_pair_key(a: str, b: str) -> PairKey:
    return (a, b) if a <= b else (b, a)


def canonical_angle_key(a: str, b: str, c: str) -> AngleKey:
    return (a, b, c) if a <= c else (c, b, a)


def canonical_dihedral_key(a: str, b: str, c: str, d: str) -> DihedralKey:
    fwd: DihedralKey = (a, b, c, d)
    rev: DihedralKey = (d, c, b, a)
    return fwd if fwd <= rev else rev


@dataclass
class Particle:
    name: str
    charge: float = 0.0


@dataclass(frozen=True)
class PairInteraction:
    potential: PairPotential
    restriction: Optional[PairRestriction] = None

    def restriction_info(self, connectivity: Connectivity, same_molecule: bool) -> RestrictionInfo:
        return active(self.restriction, connectivity, same_molecule)


class System:
    """Particles, their bonds, and the interactions registered by type name.

    Interactions are keyed by particle *names*; resolving them to concrete
    index tuples is left to the force evaluator.  Bond-derived lookups
    (angles, dihedrals, connectivity, molecules) are rebuilt lazily after
    every bond change.
    """

    def __init__(self, particles: Iterable[Union[Particle, str]] = ()):
        self._particles: list[Particle] = []
        self._bonds: set[Bond] = set()
        self._graph: Optional[BondGraph] = None
        self._pairs: dict[PairKey, list[PairInteraction]] = {}
        self._bond_potentials: dict[PairKey, list[PairPotential]] = {}
        self._angles: dict[AngleKey, list[AnglePotential]] = {}
        self._dihedrals: dict[DihedralKey, list[DihedralPotential]] = {}
        self._coulomb: Optional[CoulombicPotential] = None
        for p in particles:
            self.add_particle(p)

    # particles ---------------------------------------------------------------
    def add_particle(self, particle: Union[Particle, str]) -> int:
        if isinstance(particle, str):
            particle = Particle(particle)
        self._particles.append(particle)
        return len(self._particles) - 1

    def __len__(self) -> int:
        return len(self._particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self._particles)

    def __getitem__(self, i: int) -> Particle:
        return self._particles[i]

    def particles_named(self, name: str) -> list[Particle]:
        return [p for p in self._particles if p.name == name]

    # topology ----------------------------------------------------------------
    def _check_index(self, i: int) -> int:
        i = int(i)
        if not 0 <= i < len(self._particles):
            raise IndexError(f"particle index {i} out of range for {len(self._particles)} particles")
        return i

    def add_bond(self, i: int, j: int) -> Bond:
        bond = Bond(self._check_index(i), self._check_index(j))
        if bond not in self._bonds:
            self._bonds.add(bond)
            self._graph = None
        return bond

    def remove_bond(self, i: int, j: int) -> None:
        bond = Bond(int(i), int(j))
        if bond in self._bonds:
            self._bonds.remove(bond)
            self._graph = None

    def topology(self) -> BondGraph:
        if self._graph is None:
            self._graph = BondGraph(self._bonds)
        return self._graph

    @property
    def bonds(self) -> frozenset[Bond]:
        return self.topology().bonds

    @property
    def angles(self) -> frozenset[Angle]:
        return self.topology().angles

    @property
    def dihedrals(self) -> frozenset[Dihedral]:
        return self.topology().dihedrals

    def connectivity(self, i: int, j: int) -> Connectivity:
        return self.topology().classify(i, j)

    def molecule_id(self, i: int) -> Optional[int]:
        return self.topology().molecule_id(i)

    def same_molecule(self, i: int, j: int) -> bool:
        return self.topology().same_molecule(i, j)

    def pair_restriction_info(self, interaction: PairInteraction, i: int, j: int) -> RestrictionInfo:
        return interaction.restriction_info(self.connectivity(i, j), self.same_molecule(i, j))

    # interactions ------------------------------------------------------------
    def add_pair_interaction(self, a: str, b: str, potential: PairPotential) -> None:
        self._pairs.setdefault(canonical_pair_key(a, b), []).append(PairInteraction(potential))

    def add_pair_interaction_with_restriction(
        self, a: str, b: str, potential: PairPotential, restriction: PairRestriction
    ) -> None:
        self._pairs.setdefault(canonical_pair_key(a, b), []).append(
            PairInteraction(potential, restriction)
        )

    def add_bond_interaction(self, a: str, b: str, potential: PairPotential) -> None:
        self._bond_potentials.setdefault(canonical_pair_key(a, b), []).append(potential)

    def add_angle_interaction(self, a: str, b: str, c: str, potential: AnglePotential) -> None:
        self._angles.setdefault(canonical_angle_key(a, b, c), []).append(potential)

    def add_dihedral_interaction(
        self, a: str, b: str, c: str, d: str, potential: DihedralPotential
    ) -> None:
        self._dihedrals.setdefault(canonical_dihedral_key(a, b, c, d), []).append(potential)

    def set_coulomb_interaction(self, potential: CoulombicPotential) -> None:
        if self._coulomb is not None:
            warnings.warn(
                f"replacing coulomb interaction {type(self._coulomb).__name__} "
                f"with {type(potential).__name__}",
                RuntimeWarning,
            )
        self._coulomb = potential

    def pair_interactions(self, a: str, b: str) -> list[PairInteraction]:
        return list(self._pairs.get(canonical_pair_key(a, b), ()))

    def bond_interactions(self, a: str, b: str) -> list[PairPotential]:
        return list(self._bond_potentials.get(canonical_pair_key(a, b), ()))

    def angle_interactions(self, a: str, b: str, c: str) -> list[AnglePotential]:
        return list(self._angles.get(canonical_angle_key(a, b, c), ()))

    def dihedral_interactions(self, a: str, b: str, c: str, d: str) -> list[DihedralPotential]:
        return list(self._dihedrals.get(canonical_dihedral_key(a, b, c, d), ()))

    @property
    def coulomb_potential(self) -> Optional[CoulombicPotential]:
        return self._coulomb

    def interaction_counts(self) -> dict[str, int]:
        return {
            "pairs": sum(len(v) for v in self._pairs.values()),
            "bonds": sum(len(v) for v in self._bond_potentials.values()),
            "angles": sum(len(v) for v in self._angles.values()),
            "dihedrals": sum(len(v) for v in self._dihedrals.values()),
            "coulomb": int(self._coulomb is not None),
        }
