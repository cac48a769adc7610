from __future__ import annotations

from typing import Iterable

from .graph_utils import adjacency, connected_components, simple_paths
from .topology import Angle, Bond, Connectivity, Dihedral

_CLASS_BY_LENGTH = {
    1: Connectivity.CONNECT_12,
    2: Connectivity.CONNECT_13,
    3: Connectivity.CONNECT_14,
}


class BondGraph:
    """Read-only topology lookups derived from a set of bonds.

    Every simple bond path of one to three bonds between two particles adds
    the matching distance class to that pair, so a pair in a ring carries
    the union of all classes realised by any path.  Pairs without a class
    are ``CONNECT_FAR``.  The graph is a pure function of the bonds it was
    built from: rebuild it after the bonds change.
    """

    def __init__(self, bonds: Iterable[Bond]):
        self.bonds: frozenset[Bond] = frozenset(bonds)
        adj = adjacency((b.i, b.j) for b in self.bonds)

        table: dict[tuple[int, int], Connectivity] = {}
        angles: set[Angle] = set()
        dihedrals: set[Dihedral] = set()
        for start in adj:
            for path in simple_paths(adj, start, max_edges=3):
                first, last = path[0], path[-1]
                if first == last:
                    continue
                n_bonds = len(path) - 1
                if n_bonds == 2:
                    angles.add(Angle(*path))
                elif n_bonds == 3:
                    dihedrals.add(Dihedral(*path))
                key = (min(first, last), max(first, last))
                table[key] = table.get(key, Connectivity(0)) | _CLASS_BY_LENGTH[n_bonds]

        self.angles: frozenset[Angle] = frozenset(angles)
        self.dihedrals: frozenset[Dihedral] = frozenset(dihedrals)
        self._table = table
        self._molecules = connected_components(adj)

    def classify(self, i: int, j: int) -> Connectivity:
        key = (min(int(i), int(j)), max(int(i), int(j)))
        return self._table.get(key, Connectivity.CONNECT_FAR)

    def molecule_id(self, i: int) -> int | None:
        """Component label of a bonded particle, None for unbonded ones."""
        return self._molecules.get(int(i))

    def same_molecule(self, i: int, j: int) -> bool:
        if int(i) == int(j):
            return True
        mi = self.molecule_id(i)
        return mi is not None and mi == self.molecule_id(j)

    def classified_pairs(self) -> dict[tuple[int, int], Connectivity]:
        return dict(self._table)
